"""
Rule validator.

Runs the fixed, ordered set of compliance rules over a normalized
healthcheck snapshot. Always returns one result per rule.
"""

from collections.abc import Callable

from vaultcheck.config.settings import DEFAULT_CONFIG, EngineConfig
from vaultcheck.schemas.records import NormalizedDataset
from vaultcheck.utils.logging import get_logger
from vaultcheck.validation.residency import validate_capacity_tier_residency
from vaultcheck.validation.results import ValidationResult, ValidationStatus
from vaultcheck.validation.rules import (
    validate_agent_workload,
    validate_archive_tier_edition,
    validate_aws_workload,
    validate_cap_tier_encryption,
    validate_global_encryption,
    validate_job_encryption,
    validate_license_edition,
    validate_retention_period,
    validate_sobr_immutability,
    validate_vbr_version,
)

log = get_logger(__name__)

Rule = Callable[[NormalizedDataset, EngineConfig], ValidationResult]

RULES: tuple[Rule, ...] = (
    validate_vbr_version,
    validate_global_encryption,
    validate_job_encryption,
    validate_aws_workload,
    validate_agent_workload,
    validate_license_edition,
    validate_retention_period,
    validate_cap_tier_encryption,
    validate_sobr_immutability,
    validate_archive_tier_edition,
    validate_capacity_tier_residency,
)


def validate_healthcheck(
    dataset: NormalizedDataset, config: EngineConfig | None = None
) -> list[ValidationResult]:
    """
    Run every compliance rule against a snapshot.

    Args:
        dataset: Normalized healthcheck snapshot.
        config: Engine configuration; defaults to DEFAULT_CONFIG.

    Returns:
        One ValidationResult per rule, in rule order.
    """
    config = config or DEFAULT_CONFIG
    results = [rule(dataset, config) for rule in RULES]

    log.info(
        "Validation complete",
        rules=len(results),
        failed=sum(1 for r in results if r.status == ValidationStatus.FAIL),
        warned=sum(1 for r in results if r.status == ValidationStatus.WARNING),
    )
    return results
