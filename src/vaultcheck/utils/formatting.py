"""Display formatting for sizes, rates and vendor durations."""

import re

from vaultcheck.schemas.records import Number

NOT_AVAILABLE = "N/A"

# Vendor duration format: D.HH:MM:SS
_DURATION = re.compile(r"^(\d+)\.(\d+):(\d+):(\d+)$")


def format_size(gb: Number | None) -> str:
    """
    Format a GB figure, switching to TB from 1024 GB upwards.

    Examples:
        >>> format_size(512.5)
        '512.5 GB'
        >>> format_size(2048)
        '2.00 TB'
    """
    if gb is None:
        return NOT_AVAILABLE
    if gb >= 1024:
        return f"{gb / 1024:.2f} TB"
    value = f"{gb:.2f}".rstrip("0").rstrip(".")
    return f"{value} GB"


def format_percent(value: Number | None, decimals: int = 1) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{decimals}f}%"


def format_duration(text: str | None) -> str:
    """
    Shorten a vendor ``D.HH:MM:SS`` duration to its two leading units.

    ``"1.02:30:00"`` becomes ``"1d 2h"``, ``"0.02:30:00"`` becomes
    ``"2h 30m"``. Anything unparsable is reported as N/A.
    """
    if text is None:
        return NOT_AVAILABLE
    match = _DURATION.match(text)
    if not match:
        return NOT_AVAILABLE

    days, hours, minutes, seconds = (int(part) for part in match.groups())
    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {seconds}s"


def format_tb(value: Number | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.2f} TB"


def format_days(value: Number | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value} days"


def format_gfs(weekly: int | None, monthly: int | None, yearly: int | None) -> str:
    """Render GFS counts as ``"Weekly: 4, Monthly: 12"``, skipping unset tiers."""
    parts = []
    if weekly is not None:
        parts.append(f"Weekly: {weekly}")
    if monthly is not None:
        parts.append(f"Monthly: {monthly}")
    if yearly is not None:
        parts.append(f"Yearly: {yearly}")
    return ", ".join(parts) if parts else "None configured"


def format_compression_ratio(source_gb: Number | None, disk_gb: Number | None) -> str:
    """Source to on-disk ratio such as ``"2.5x"``; N/A when either side is 0 or unknown."""
    if source_gb is None or disk_gb is None:
        return NOT_AVAILABLE
    if source_gb == 0 or disk_gb == 0:
        return NOT_AVAILABLE
    return f"{source_gb / disk_gb:.1f}x"
