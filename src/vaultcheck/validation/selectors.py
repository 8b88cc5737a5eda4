"""Views over a list of validation results."""

from collections.abc import Sequence

from vaultcheck.validation.results import ValidationResult, ValidationStatus

_BLOCKING = (ValidationStatus.FAIL, ValidationStatus.WARNING)


def get_blocker_validations(
    validations: Sequence[ValidationResult],
) -> list[ValidationResult]:
    """Failures then warnings, each group in its original order."""
    blockers = [v for v in validations if v.status in _BLOCKING]
    # sorted() is stable, so rule order survives within each group
    return sorted(blockers, key=lambda v: v.status != ValidationStatus.FAIL)


def get_passing_validations(
    validations: Sequence[ValidationResult],
) -> list[ValidationResult]:
    """Results that passed outright."""
    return [v for v in validations if v.status == ValidationStatus.PASS]


def has_blockers(validations: Sequence[ValidationResult]) -> bool:
    """Whether any result is a failure or a warning."""
    return any(v.status in _BLOCKING for v in validations)


def get_blocker_count(validations: Sequence[ValidationResult]) -> int:
    """Number of failures and warnings."""
    return sum(1 for v in validations if v.status in _BLOCKING)
