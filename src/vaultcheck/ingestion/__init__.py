"""
Data ingestion for healthcheck exports.

Covers reading export files and reshaping Headers/Rows sections into records.
"""

from vaultcheck.ingestion.export import ExportFormatError, load_export, parse_export
from vaultcheck.ingestion.sections import SECTION_NAMES, zip_section

__all__ = [
    "SECTION_NAMES",
    "ExportFormatError",
    "load_export",
    "parse_export",
    "zip_section",
]
