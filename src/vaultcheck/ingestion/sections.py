"""
Section parsing for healthcheck exports.

Exports encode every section as parallel ``Headers`` and ``Rows`` arrays.
This module zips them into one keyed record per row.
"""

from collections.abc import Mapping
from typing import Any

RawRecord = dict[str, Any]

# Sections stored as Headers/Rows tables under the export's "Sections" key.
SECTION_NAMES: tuple[str, ...] = (
    "backupServer",
    "securitySummary",
    "jobInfo",
    "jobSessionSummaryByJob",
    "sobr",
    "extents",
    "capextents",
    "archextents",
    "repos",
)


def zip_section(section: Any) -> list[RawRecord]:
    """
    Transform a Headers/Rows section into a list of keyed records.

    Header *i* is paired with row value *i*. Short rows produce the missing
    keys with a None value; values beyond the last header are dropped.
    Headers that are not strings are skipped along with their column.

    Example:
        >>> zip_section({"Headers": ["Name", "Encrypted"], "Rows": [["Job A", "False"]]})
        [{'Name': 'Job A', 'Encrypted': 'False'}]

    Args:
        section: Raw section mapping. Anything that is not a mapping counts
            as an absent section.

    Returns:
        One record per row, in row order. Empty for absent sections.
    """
    if not isinstance(section, Mapping):
        return []

    headers = section.get("Headers")
    rows = section.get("Rows")
    if not isinstance(rows, list) or not rows:
        return []
    if not isinstance(headers, list):
        headers = []

    records: list[RawRecord] = []
    for row in rows:
        values = row if isinstance(row, list) else []
        records.append(
            {
                header: values[index] if index < len(values) else None
                for index, header in enumerate(headers)
                if isinstance(header, str)
            }
        )
    return records
