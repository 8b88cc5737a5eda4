"""
Tabular views of an analysed healthcheck.

Builds pandas DataFrames for job and repository listings and validates
them against their Pandera schemas.
"""

import pandas as pd

from vaultcheck.analysis.jobs import aggregate_repo_stats, enrich_jobs
from vaultcheck.schemas.records import NormalizedDataset
from vaultcheck.schemas.tables import JobTableSchema, RepoStatsSchema
from vaultcheck.utils.logging import get_logger

log = get_logger(__name__)

JOB_COLUMNS = [
    "job_name",
    "job_type",
    "repo_name",
    "encrypted",
    "retain_days",
    "source_size_gb",
    "on_disk_gb",
    "gfs_details",
    "avg_change_rate",
    "success_rate",
    "has_session",
]

REPO_STATS_COLUMNS = ["repo_name", "source_tb", "on_disk_tb"]


def jobs_frame(dataset: NormalizedDataset) -> pd.DataFrame:
    """
    Build the job table, one row per job with its session statistics.

    Args:
        dataset: Normalized healthcheck snapshot.

    Returns:
        DataFrame validated against JobTableSchema.
    """
    rows = []
    for enriched in enrich_jobs(dataset.jobs, dataset.job_sessions):
        job, session = enriched.job, enriched.session
        rows.append(
            {
                "job_name": job.job_name,
                "job_type": job.job_type,
                "repo_name": job.repo_name,
                "encrypted": job.encrypted,
                "retain_days": job.retain_days,
                "source_size_gb": job.source_size_gb,
                "on_disk_gb": job.on_disk_gb,
                "gfs_details": job.gfs_details,
                "avg_change_rate": session.avg_change_rate if session else None,
                "success_rate": session.success_rate if session else None,
                "has_session": session is not None,
            }
        )

    df = pd.DataFrame(rows, columns=JOB_COLUMNS)
    df = JobTableSchema.validate(df)
    log.debug("Built job table", rows=len(df))
    return df


def repo_stats_frame(dataset: NormalizedDataset) -> pd.DataFrame:
    """
    Build per-repository size totals.

    Only repositories known to the export (standard repositories and SOBRs)
    are listed; jobs targeting anything else are left out.

    Args:
        dataset: Normalized healthcheck snapshot.

    Returns:
        DataFrame validated against RepoStatsSchema.
    """
    known = {repo.name for repo in dataset.repos} | {sobr.name for sobr in dataset.sobrs}
    stats = aggregate_repo_stats(dataset.jobs, known)

    df = pd.DataFrame(
        [
            {"repo_name": name, "source_tb": s.source_tb, "on_disk_tb": s.on_disk_tb}
            for name, s in stats.items()
        ],
        columns=REPO_STATS_COLUMNS,
    )
    df = RepoStatsSchema.validate(df)
    log.debug("Built repository stats", rows=len(df))
    return df
