"""Dotted version comparison for backup server builds."""

import re

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_part(part: str) -> int:
    # Leading digits only: "2a" -> 2, "" or "x" -> 0
    match = _LEADING_INT.match(part)
    return int(match.group(1)) if match else 0


def parse_version(version: str) -> tuple[int, int, int]:
    """
    Parse a dotted version into (major, minor, patch).

    Missing components count as 0; a fourth build component is ignored.
    """
    parts = [_parse_part(part) for part in version.split(".")]
    parts.extend([0, 0, 0])
    return parts[0], parts[1], parts[2]


def is_version_at_least(current_version: str, minimum_version: str) -> bool:
    """
    Check whether ``current_version`` is at or above ``minimum_version``.

    Comparison is component-wise on major, minor, then patch:
    ``"12.1.2.100"`` satisfies ``"12.1.2"``, ``"11.0.0.100"`` does not.
    """
    return parse_version(current_version) >= parse_version(minimum_version)
