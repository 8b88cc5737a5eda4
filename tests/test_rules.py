"""Tests for the compliance rules."""

from collections.abc import Callable
from typing import Any

import pytest

from vaultcheck.config.settings import DEFAULT_CONFIG, EngineConfig
from vaultcheck.schemas.records import (
    BackupServer,
    License,
    NormalizedDataset,
    SecuritySummary,
)
from vaultcheck.validation.core import RULES, validate_healthcheck
from vaultcheck.validation.results import ValidationResult, ValidationStatus

RULE_IDS = [
    "vbr-version",
    "global-encryption",
    "job-encryption",
    "aws-workload",
    "agent-workload",
    "license-edition",
    "retention-period",
    "sobr-cap-encryption",
    "sobr-immutability",
    "archive-tier-edition",
    "capacity-tier-residency",
]


def _rule(
    dataset: NormalizedDataset, rule_id: str, config: EngineConfig | None = None
) -> ValidationResult:
    results = validate_healthcheck(dataset, config)
    return next(r for r in results if r.rule_id == rule_id)


class TestValidateHealthcheck:
    """Tests for the rule battery as a whole."""

    def test_empty_dataset_gives_all_rules(self) -> None:
        """Test exactly one result per rule, in order, for an empty dataset."""
        results = validate_healthcheck(NormalizedDataset())

        assert [r.rule_id for r in results] == RULE_IDS
        assert len(RULES) == 11

    def test_empty_dataset_fails_version_only(self) -> None:
        """Test zero servers fails and everything else passes."""
        results = validate_healthcheck(NormalizedDataset())

        failed = [r.rule_id for r in results if r.status != ValidationStatus.PASS]
        assert failed == ["vbr-version"]

    def test_idempotent(self, make_job: Callable[..., Any]) -> None:
        """Test repeated validation of one dataset gives equal results."""
        dataset = NormalizedDataset(jobs=(make_job(encrypted=False, retain_days=7),))

        assert validate_healthcheck(dataset) == validate_healthcheck(dataset)


class TestVersionRule:
    """Tests for vbr-version."""

    def test_no_servers_fails(self) -> None:
        """Test a missing server is a failure, not a skip."""
        result = _rule(NormalizedDataset(), "vbr-version")

        assert result.status == ValidationStatus.FAIL
        assert "12.1.2" in result.message

    def test_old_server_listed(self) -> None:
        """Test servers below the minimum are named."""
        dataset = NormalizedDataset(
            backup_servers=(
                BackupServer(version="12.3.0", name="new"),
                BackupServer(version="11.0.1.1261", name="old"),
            )
        )
        result = _rule(dataset, "vbr-version")

        assert result.status == ValidationStatus.FAIL
        assert result.affected_items == ("old",)

    def test_custom_minimum(self) -> None:
        """Test the minimum comes from config."""
        dataset = NormalizedDataset(backup_servers=(BackupServer("12.1.2", "vbr"),))
        config = EngineConfig(minimum_version="13.0")

        assert _rule(dataset, "vbr-version", config).status == ValidationStatus.FAIL


class TestGlobalEncryption:
    """Tests for global-encryption."""

    def test_absent_summary_passes(self) -> None:
        """Test no security summary is not a finding."""
        assert _rule(NormalizedDataset(), "global-encryption").status == ValidationStatus.PASS

    @pytest.mark.parametrize(("backup", "config_backup"), [(False, True), (True, False)])
    def test_either_flag_off_warns(self, backup: bool, config_backup: bool) -> None:
        """Test one disabled flag is enough to warn."""
        dataset = NormalizedDataset(security_summaries=(SecuritySummary(backup, config_backup),))

        assert _rule(dataset, "global-encryption").status == ValidationStatus.WARNING


class TestJobEncryption:
    """Tests for job-encryption."""

    def test_unencrypted_plain_repo_fails(self, make_job: Callable[..., Any]) -> None:
        """Test an unencrypted job on a plain repository fails."""
        dataset = NormalizedDataset(jobs=(make_job(encrypted=False),))
        result = _rule(dataset, "job-encryption")

        assert result.status == ValidationStatus.FAIL
        assert result.affected_items == ("Job A",)

    def test_unencrypted_on_capacity_sobr_warns(
        self, make_job: Callable[..., Any], make_sobr: Callable[..., Any]
    ) -> None:
        """Test encryption is deferred to a capacity-tier SOBR."""
        dataset = NormalizedDataset(
            jobs=(make_job(encrypted=False, repo_name="SOBR-01"),),
            sobrs=(make_sobr(),),
        )
        result = _rule(dataset, "job-encryption")

        assert result.status == ValidationStatus.WARNING
        assert result.affected_items == ("Job A",)

    def test_fail_lists_only_blocking_jobs(
        self, make_job: Callable[..., Any], make_sobr: Callable[..., Any]
    ) -> None:
        """Test SOBR-deferred jobs are not listed in a failure."""
        dataset = NormalizedDataset(
            jobs=(
                make_job(job_name="on-sobr", encrypted=False, repo_name="SOBR-01"),
                make_job(job_name="on-repo", encrypted=False, repo_name="Repo-01"),
            ),
            sobrs=(make_sobr(),),
        )
        result = _rule(dataset, "job-encryption")

        assert result.status == ValidationStatus.FAIL
        assert result.affected_items == ("on-repo",)

    def test_sobr_without_capacity_tier_does_not_defer(
        self, make_job: Callable[..., Any], make_sobr: Callable[..., Any]
    ) -> None:
        """Test only capacity-tier SOBRs downgrade the finding."""
        dataset = NormalizedDataset(
            jobs=(make_job(encrypted=False, repo_name="SOBR-01"),),
            sobrs=(make_sobr(enable_capacity_tier=False),),
        )

        assert _rule(dataset, "job-encryption").status == ValidationStatus.FAIL


class TestWorkloadRules:
    """Tests for aws-workload and agent-workload."""

    def test_aws_job_type_fails(self, make_job: Callable[..., Any]) -> None:
        """Test disallowed job types match case-insensitively."""
        dataset = NormalizedDataset(jobs=(make_job(job_type="Veeam.Vault.AWS.EC2"),))
        result = _rule(dataset, "aws-workload")

        assert result.status == ValidationStatus.FAIL
        assert result.affected_items == ("Job A",)

    def test_agent_job_type_warns(self, make_job: Callable[..., Any]) -> None:
        """Test agent jobs are a warning."""
        dataset = NormalizedDataset(jobs=(make_job(job_type="EpAgentBackup"),))
        result = _rule(dataset, "agent-workload")

        assert result.status == ValidationStatus.WARNING
        assert result.affected_items == ("Job A",)

    def test_plain_backup_passes(self, make_job: Callable[..., Any]) -> None:
        """Test regular jobs raise neither finding."""
        dataset = NormalizedDataset(jobs=(make_job(),))

        assert _rule(dataset, "aws-workload").status == ValidationStatus.PASS
        assert _rule(dataset, "agent-workload").status == ValidationStatus.PASS


class TestLicenseEdition:
    """Tests for license-edition."""

    @pytest.mark.parametrize("edition", ["Community", "FREE Edition"])
    def test_community_is_info(self, edition: str) -> None:
        """Test community and free editions are informational."""
        dataset = NormalizedDataset(licenses=(License(edition=edition, status="Valid"),))
        result = _rule(dataset, "license-edition")

        assert result.status == ValidationStatus.INFO
        assert result.affected_items == (edition,)

    def test_enterprise_passes(self) -> None:
        """Test paid editions pass."""
        dataset = NormalizedDataset(licenses=(License("Enterprise Plus", "Valid"),))

        assert _rule(dataset, "license-edition").status == ValidationStatus.PASS


class TestRetentionPeriod:
    """Tests for retention-period."""

    def test_short_retention_warns(self, make_job: Callable[..., Any]) -> None:
        """Test shortfalls are named with their day count."""
        dataset = NormalizedDataset(jobs=(make_job(retain_days=7),))
        result = _rule(dataset, "retention-period")

        assert result.status == ValidationStatus.WARNING
        assert "30-day minimum" in result.message
        assert result.affected_items == ("Job A (7 days)",)

    def test_null_retention_ignored(self, make_job: Callable[..., Any]) -> None:
        """Test unknown retention is not a shortfall."""
        dataset = NormalizedDataset(jobs=(make_job(retain_days=None),))

        assert _rule(dataset, "retention-period").status == ValidationStatus.PASS

    def test_floor_from_config(self, make_job: Callable[..., Any]) -> None:
        """Test the floor is configurable."""
        dataset = NormalizedDataset(jobs=(make_job(retain_days=30),))
        config = EngineConfig(retention_floor_days=45)

        assert _rule(dataset, "retention-period", config).status == ValidationStatus.WARNING


class TestCapacityTierRules:
    """Tests for sobr-cap-encryption and sobr-immutability."""

    def test_unencrypted_extent_warns(
        self, make_sobr: Callable[..., Any], make_cap_extent: Callable[..., Any]
    ) -> None:
        """Test unencrypted capacity extents are labelled with their SOBR."""
        dataset = NormalizedDataset(
            sobrs=(make_sobr(),),
            cap_extents=(make_cap_extent(encryption_enabled=False),),
        )
        result = _rule(dataset, "sobr-cap-encryption")

        assert result.status == ValidationStatus.WARNING
        assert result.affected_items == ("AzureBlob-01 (SOBR: SOBR-01)",)

    def test_mutable_extent_warns(
        self, make_sobr: Callable[..., Any], make_cap_extent: Callable[..., Any]
    ) -> None:
        """Test non-immutable capacity extents are flagged."""
        dataset = NormalizedDataset(sobrs=(make_sobr(),), cap_extents=(make_cap_extent(),))
        result = _rule(dataset, "sobr-immutability")

        assert result.status == ValidationStatus.WARNING
        assert "immutability" in result.message
        assert result.affected_items == ("AzureBlob-01 (SOBR: SOBR-01)",)

    def test_missing_extent_data_flagged(self, make_sobr: Callable[..., Any]) -> None:
        """Test a capacity-tier SOBR without extent rows is flagged in both rules."""
        dataset = NormalizedDataset(sobrs=(make_sobr(),))

        for rule_id in ("sobr-cap-encryption", "sobr-immutability"):
            result = _rule(dataset, rule_id)
            assert result.status == ValidationStatus.WARNING
            assert result.affected_items == ("SOBR-01 (no capacity extent data)",)

    def test_compliant_extent_passes(
        self, make_sobr: Callable[..., Any], make_cap_extent: Callable[..., Any]
    ) -> None:
        """Test encrypted immutable extents pass both rules."""
        dataset = NormalizedDataset(
            sobrs=(make_sobr(),),
            cap_extents=(make_cap_extent(immutable_enabled=True, immutable_period=30),),
        )

        assert _rule(dataset, "sobr-cap-encryption").status == ValidationStatus.PASS
        assert _rule(dataset, "sobr-immutability").status == ValidationStatus.PASS


class TestArchiveTierEdition:
    """Tests for archive-tier-edition."""

    def test_active_archive_extent_warns(
        self, make_sobr: Callable[..., Any], make_arch_extent: Callable[..., Any]
    ) -> None:
        """Test active archive extents need the Advanced edition."""
        dataset = NormalizedDataset(
            sobrs=(make_sobr(archive_tier_enabled=True),),
            arch_extents=(make_arch_extent(),),
        )
        result = _rule(dataset, "archive-tier-edition")

        assert result.status == ValidationStatus.WARNING
        assert "Advanced" in result.message
        assert result.affected_items == ("Archive-01 (SOBR: SOBR-01)",)

    def test_missing_archive_data_flagged(self, make_sobr: Callable[..., Any]) -> None:
        """Test an archive-enabled SOBR without archive rows is flagged."""
        dataset = NormalizedDataset(sobrs=(make_sobr(archive_tier_enabled=True),))
        result = _rule(dataset, "archive-tier-edition")

        assert result.status == ValidationStatus.WARNING
        assert result.affected_items == ("SOBR-01 (no archive extent data)",)

    def test_inactive_archive_extent_passes(
        self, make_sobr: Callable[..., Any], make_arch_extent: Callable[..., Any]
    ) -> None:
        """Test disabled archive extents pass."""
        dataset = NormalizedDataset(
            sobrs=(make_sobr(),),
            arch_extents=(make_arch_extent(archive_tier_enabled=False),),
        )

        assert _rule(dataset, "archive-tier-edition").status == ValidationStatus.PASS


def test_default_config_is_shared() -> None:
    """Test validation without config uses the default thresholds."""
    assert DEFAULT_CONFIG.retention_floor_days == 30
    assert DEFAULT_CONFIG.minimum_version == "12.1.2"
