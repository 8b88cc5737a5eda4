"""
Pandera schemas for tabular views of an analysed healthcheck.
"""

from typing import Optional

import pandera.pandas as pa
from pandera.typing import Series


class JobTableSchema(pa.DataFrameModel):
    """
    Schema for the job table.

    One row per job, enriched with its session statistics where the
    export has them. Numeric columns carry no range checks: the normalizer
    keeps any finite number the export holds, negative values included.
    """

    job_name: Series[str] = pa.Field(description="Job display name")
    job_type: Series[str] = pa.Field(description="Vendor job type identifier")
    repo_name: Series[str] = pa.Field(description="Target repository or SOBR")
    encrypted: Series[bool] = pa.Field(description="Job writes encrypted backups")
    retain_days: Series[float] = pa.Field(
        nullable=True,
        description="Short-term retention in days",
    )
    source_size_gb: Series[float] = pa.Field(
        nullable=True,
        description="Protected source data in GB",
    )
    on_disk_gb: Series[float] = pa.Field(
        nullable=True,
        description="Backup size on disk in GB",
    )
    gfs_details: Series[str] = pa.Field(
        nullable=True,
        description="Raw GFS retention string",
    )
    avg_change_rate: Series[float] = pa.Field(
        nullable=True,
        description="Average daily change rate (%) from session data",
    )
    success_rate: Optional[Series[float]] = pa.Field(
        nullable=True,
        description="Session success rate (%)",
    )
    has_session: Series[bool] = pa.Field(
        description="Whether session statistics were found for the job",
    )

    class Config:
        """Schema configuration."""

        name = "JobTableSchema"
        strict = False
        coerce = True


class RepoStatsSchema(pa.DataFrameModel):
    """Schema for per-repository size totals."""

    repo_name: Series[str] = pa.Field(unique=True, description="Repository name")
    source_tb: Series[float] = pa.Field(description="Summed source size in TB")
    on_disk_tb: Series[float] = pa.Field(description="Summed on-disk size in TB")

    class Config:
        """Schema configuration."""

        name = "RepoStatsSchema"
        strict = True
        coerce = True
