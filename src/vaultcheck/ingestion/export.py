"""
Healthcheck export file loading.

Reads an export from disk and checks that it looks like a healthcheck
document before it is handed to the analysis pipeline.
"""

import json
from pathlib import Path
from typing import Any

from vaultcheck.utils.logging import get_logger

log = get_logger(__name__)


class ExportFormatError(ValueError):
    """Raised when a file is not a usable healthcheck export."""


def parse_export(text: str) -> dict[str, Any]:
    """
    Parse export text into its root object.

    Args:
        text: Raw JSON text.

    Returns:
        The export root mapping.

    Raises:
        ExportFormatError: If the text is not JSON or not a healthcheck export.
    """
    try:
        root = json.loads(text)
    except json.JSONDecodeError as e:
        msg = (
            "Invalid JSON: the file does not contain valid JSON "
            f"(line {e.lineno}, column {e.colno})"
        )
        raise ExportFormatError(msg) from e

    if not isinstance(root, dict) or "Sections" not in root:
        msg = (
            "Invalid healthcheck export: the JSON document does not have "
            "the expected structure (missing 'Sections')"
        )
        raise ExportFormatError(msg)

    return root


def load_export(path: Path) -> dict[str, Any]:
    """
    Load a healthcheck export from a JSON file.

    Args:
        path: Path to the export file.

    Returns:
        The export root mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        ExportFormatError: If the file is not a healthcheck export.
    """
    if not path.exists():
        msg = f"Export file not found: {path}"
        raise FileNotFoundError(msg)

    log.info("Loading export", path=str(path))
    # utf-8-sig: exports written by Windows tooling often carry a BOM
    text = path.read_text(encoding="utf-8-sig")
    root = parse_export(text)

    sections = root.get("Sections")
    log.debug(
        "Loaded export",
        sections=sorted(sections) if isinstance(sections, dict) else [],
    )
    return root
