"""Result types shared by all compliance rules."""

from dataclasses import dataclass
from enum import Enum


class ValidationStatus(str, Enum):
    """Verdict of a single compliance rule."""

    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ValidationResult:
    """
    Verdict of one compliance rule.

    Attributes:
        rule_id: Stable rule identifier (e.g. ``vbr-version``).
        title: Human-readable rule title.
        status: Pass/fail/warning/info.
        message: Explanation shown to the user.
        affected_items: Jobs, servers or extents that triggered the verdict.
    """

    rule_id: str
    title: str
    status: ValidationStatus
    message: str
    affected_items: tuple[str, ...] = ()
