"""Compliance rules and their results."""

from vaultcheck.validation.core import RULES, validate_healthcheck
from vaultcheck.validation.reporter import ConsoleReporter
from vaultcheck.validation.results import ValidationResult, ValidationStatus
from vaultcheck.validation.version import is_version_at_least, parse_version

__all__ = [
    "RULES",
    "ConsoleReporter",
    "ValidationResult",
    "ValidationStatus",
    "is_version_at_least",
    "parse_version",
    "validate_healthcheck",
]
