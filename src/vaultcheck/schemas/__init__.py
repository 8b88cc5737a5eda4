"""
Data contracts for the engine.

Domain records are frozen dataclasses; tabular views are validated with
Pandera.
"""

from vaultcheck.schemas.records import (
    ArchExtent,
    BackupServer,
    CapExtent,
    DataError,
    Extent,
    Job,
    JobSession,
    License,
    NormalizedDataset,
    Repo,
    SecuritySummary,
    Sobr,
)
from vaultcheck.schemas.tables import JobTableSchema, RepoStatsSchema

__all__ = [
    "ArchExtent",
    "BackupServer",
    "CapExtent",
    "DataError",
    "Extent",
    "Job",
    "JobSession",
    "JobTableSchema",
    "License",
    "NormalizedDataset",
    "Repo",
    "RepoStatsSchema",
    "SecuritySummary",
    "Sobr",
]
