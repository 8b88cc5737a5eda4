"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from vaultcheck.schemas.records import ArchExtent, CapExtent, Job, JobSession, Sobr


def _section(records: list[dict[str, Any]]) -> dict[str, Any]:
    """Encode records as a Headers/Rows section, headers in first-seen order."""
    headers: list[str] = []
    for record in records:
        for key in record:
            if key not in headers:
                headers.append(key)
    return {
        "Headers": headers,
        "Rows": [[record.get(h) for h in headers] for record in records],
    }


@pytest.fixture
def make_export() -> Callable[..., dict[str, Any]]:
    """
    Build an export root from plain records.

    Keyword arguments are section names mapped to lists of records;
    ``Licenses`` is passed through as a top-level array.
    """

    def _make(licenses: list[dict[str, Any]] | None = None, **sections: Any) -> dict[str, Any]:
        root: dict[str, Any] = {
            "Sections": {name: _section(records) for name, records in sections.items()}
        }
        if licenses is not None:
            root["Licenses"] = licenses
        return root

    return _make


@pytest.fixture
def compliant_export(make_export: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    """Export that passes every compliance rule."""
    return make_export(
        backupServer=[{"Version": "12.3.0.310", "Name": "vbr-01"}],
        securitySummary=[
            {
                "BackupFileEncryptionEnabled": "True",
                "ConfigBackupEncryptionEnabled": "True",
            }
        ],
        jobInfo=[
            {
                "JobName": "Daily VMs",
                "JobType": "Backup",
                "RepoName": "Repo-01",
                "Encrypted": "True",
                "RetainDays": "30",
                "SourceSizeGB": "1024",
                "OnDiskGB": "512",
            }
        ],
        jobSessionSummaryByJob=[
            {"JobName": "Daily VMs", "AvgChangeRate": "5", "SuccessRate": "100"},
            {"JobName": "Total", "AvgChangeRate": "5"},
        ],
        repos=[{"Name": "Repo-01", "IsImmutabilitySupported": "True"}],
        licenses=[{"Edition": "Enterprise Plus", "Status": "Active"}],
    )


@pytest.fixture
def export_file(tmp_path: Path) -> Callable[[Any], Path]:
    """Write an object (or raw text) to a JSON file and return its path."""
    import json

    def _write(content: Any, name: str = "healthcheck.json") -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_job() -> Callable[..., Job]:
    """Factory for jobs with sensible defaults."""

    def _make(**overrides: Any) -> Job:
        values: dict[str, Any] = {
            "job_name": "Job A",
            "job_type": "Backup",
            "encrypted": True,
            "repo_name": "Repo-01",
            "retain_days": 30,
        }
        values.update(overrides)
        return Job(**values)

    return _make


@pytest.fixture
def make_session() -> Callable[..., JobSession]:
    """Factory for job session summaries."""

    def _make(**overrides: Any) -> JobSession:
        values: dict[str, Any] = {"job_name": "Job A"}
        values.update(overrides)
        return JobSession(**values)

    return _make


@pytest.fixture
def make_sobr() -> Callable[..., Sobr]:
    """Factory for a move-mode capacity-tier SOBR named ``SOBR-01``."""

    def _make(**overrides: Any) -> Sobr:
        values: dict[str, Any] = {
            "name": "SOBR-01",
            "enable_capacity_tier": True,
            "capacity_tier_copy": False,
            "capacity_tier_move": True,
            "archive_tier_enabled": False,
            "immutable_enabled": False,
        }
        values.update(overrides)
        return Sobr(**values)

    return _make


@pytest.fixture
def make_cap_extent() -> Callable[..., CapExtent]:
    """Factory for an encrypted move-mode capacity extent on ``SOBR-01``."""

    def _make(**overrides: Any) -> CapExtent:
        values: dict[str, Any] = {
            "name": "AzureBlob-01",
            "sobr_name": "SOBR-01",
            "encryption_enabled": True,
            "immutable_enabled": False,
            "copy_mode_enabled": False,
            "move_mode_enabled": True,
            "move_period_days": 14,
        }
        values.update(overrides)
        return CapExtent(**values)

    return _make


@pytest.fixture
def make_arch_extent() -> Callable[..., ArchExtent]:
    """Factory for an active archive extent on ``SOBR-01``."""

    def _make(**overrides: Any) -> ArchExtent:
        values: dict[str, Any] = {
            "sobr_name": "SOBR-01",
            "name": "Archive-01",
            "archive_tier_enabled": True,
            "encryption_enabled": True,
            "immutable_enabled": False,
            "offload_period": 90,
        }
        values.update(overrides)
        return ArchExtent(**values)

    return _make
