"""
Normalization layer for healthcheck records.

Coerces raw string cells into strictly typed domain records and records
one DataError per rejected row.
"""

from vaultcheck.normalization.dataset import normalize_healthcheck
from vaultcheck.normalization.fields import normalize_string, parse_boolean, parse_number

__all__ = [
    "normalize_healthcheck",
    "normalize_string",
    "parse_boolean",
    "parse_number",
]
