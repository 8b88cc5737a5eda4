"""
Strict domain records produced by the normalizer.

Every record carries all of its declared fields, already coerced to the
right type. Optional fields hold None when the export left them blank or
unparsable; they are never collapsed to 0, False or "".
"""

from dataclasses import dataclass
from typing import Literal

Number = int | float

SectionName = Literal[
    "backupServer",
    "securitySummary",
    "jobInfo",
    "Licenses",
    "jobSessionSummaryByJob",
    "sobr",
    "extents",
    "capextents",
    "archextents",
    "repos",
]


@dataclass(frozen=True)
class BackupServer:
    """Backup server entry from the ``backupServer`` section."""

    version: str
    name: str


@dataclass(frozen=True)
class SecuritySummary:
    """Global encryption flags from the ``securitySummary`` section."""

    backup_file_encryption_enabled: bool
    config_backup_encryption_enabled: bool


@dataclass(frozen=True)
class Job:
    """
    Backup job from the ``jobInfo`` section.

    Attributes:
        job_name: Job display name, also the key into session data.
        job_type: Vendor job type identifier (e.g. ``EpAgentBackup``).
        encrypted: Whether the job writes encrypted backups.
        repo_name: Target repository or SOBR name.
        retain_days: Short-term retention in days.
        gfs_details: Raw ``Weekly:N,Monthly:N,Yearly:N`` string.
        source_size_gb: Protected source data size in GB.
        on_disk_gb: Backup size on disk in GB.
    """

    job_name: str
    job_type: str
    encrypted: bool
    repo_name: str
    retain_days: Number | None = None
    gfs_details: str | None = None
    source_size_gb: Number | None = None
    on_disk_gb: Number | None = None
    retention_scheme: str | None = None
    compression_level: str | None = None
    block_size: str | None = None
    gfs_enabled: bool | None = None
    active_full_enabled: bool | None = None
    synthetic_full_enabled: bool | None = None
    backup_chain_type: str | None = None
    indexing_enabled: bool | None = None


@dataclass(frozen=True)
class License:
    """License entry from the top-level ``Licenses`` array."""

    edition: str
    status: str


@dataclass(frozen=True)
class JobSession:
    """Per-job session statistics from ``jobSessionSummaryByJob``."""

    job_name: str
    max_data_size: Number | None = None
    avg_change_rate: Number | None = None
    success_rate: Number | None = None
    session_count: Number | None = None
    fails: Number | None = None
    avg_job_time: str | None = None
    max_job_time: str | None = None


@dataclass(frozen=True)
class Sobr:
    """Scale-out backup repository from the ``sobr`` section."""

    name: str
    enable_capacity_tier: bool
    capacity_tier_copy: bool
    capacity_tier_move: bool
    archive_tier_enabled: bool
    immutable_enabled: bool
    extent_count: Number | None = None
    job_count: Number | None = None
    policy_type: str | None = None
    use_per_vm_files: bool | None = None
    cap_tier_type: str | None = None
    immutable_period: Number | None = None
    size_limit_enabled: bool | None = None
    size_limit: Number | None = None


@dataclass(frozen=True)
class Extent:
    """Performance-tier extent of a SOBR from the ``extents`` section."""

    name: str
    sobr_name: str
    type: str | None = None
    host: str | None = None
    immutability_supported: bool | None = None
    free_space_tb: Number | None = None
    total_space_tb: Number | None = None
    free_space_percent: Number | None = None


@dataclass(frozen=True)
class CapExtent:
    """Capacity-tier extent of a SOBR from the ``capextents`` section."""

    name: str
    sobr_name: str
    encryption_enabled: bool
    immutable_enabled: bool
    type: str | None = None
    status: str | None = None
    copy_mode_enabled: bool | None = None
    move_mode_enabled: bool | None = None
    move_period_days: Number | None = None
    immutable_period: Number | None = None
    size_limit_enabled: bool | None = None
    size_limit: Number | None = None
    gateway_server: str | None = None
    connection_type: str | None = None
    immutability_mode: str | None = None


@dataclass(frozen=True)
class ArchExtent:
    """Archive-tier extent of a SOBR from the ``archextents`` section."""

    sobr_name: str
    name: str
    archive_tier_enabled: bool
    encryption_enabled: bool
    immutable_enabled: bool
    offload_period: Number | None = None
    cost_optimized_enabled: bool | None = None
    full_backup_mode_enabled: bool | None = None
    immutable_period: Number | None = None
    gateway_server: str | None = None
    gateway_mode: str | None = None


@dataclass(frozen=True)
class Repo:
    """Standard (non scale-out) repository from the ``repos`` section."""

    name: str
    immutability_supported: bool
    job_count: Number | None = None
    total_space_tb: Number | None = None
    free_space_tb: Number | None = None
    type: str | None = None


@dataclass(frozen=True)
class DataError:
    """One rejected row/field pair. Informational only, never raised."""

    section: SectionName
    row_index: int
    field: str
    reason: str
    level: Literal["Data Error"] = "Data Error"


@dataclass(frozen=True)
class NormalizedDataset:
    """Strict snapshot of one healthcheck export."""

    backup_servers: tuple[BackupServer, ...] = ()
    security_summaries: tuple[SecuritySummary, ...] = ()
    jobs: tuple[Job, ...] = ()
    licenses: tuple[License, ...] = ()
    job_sessions: tuple[JobSession, ...] = ()
    sobrs: tuple[Sobr, ...] = ()
    extents: tuple[Extent, ...] = ()
    cap_extents: tuple[CapExtent, ...] = ()
    arch_extents: tuple[ArchExtent, ...] = ()
    repos: tuple[Repo, ...] = ()
    data_errors: tuple[DataError, ...] = ()
