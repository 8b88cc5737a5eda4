"""
Calculator aggregator.

Rolls job and session records up into the figures a capacity calculator
needs. All figures are nullable: an empty or all-null input is "unknown",
not zero.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from vaultcheck.config.settings import DEFAULT_CONFIG, EngineConfig
from vaultcheck.schemas.records import Job, JobSession, Number
from vaultcheck.utils.logging import get_logger

log = get_logger(__name__)

GB_PER_TB = 1024


@dataclass(frozen=True)
class GfsCounts:
    """Parsed ``Weekly:N,Monthly:N,Yearly:N`` retention counts."""

    weekly: int | None = None
    monthly: int | None = None
    yearly: int | None = None

    def any_positive(self) -> bool:
        """Whether any tier keeps at least one restore point."""
        return any(
            count is not None and count > 0
            for count in (self.weekly, self.monthly, self.yearly)
        )


@dataclass(frozen=True)
class CalculatorSummary:
    """
    Sizing inputs derived from a healthcheck.

    Attributes:
        total_source_data_tb: Summed job source size in TB.
        weighted_avg_change_rate: Size-weighted average daily change rate (%).
        immutability_days: Fixed vault immutability floor in days.
        max_retention_days: Longest job retention, clamped to the floor.
        original_max_retention_days: Longest job retention before clamping.
        gfs_weekly: Maximum weekly GFS count over all jobs.
        gfs_monthly: Maximum monthly GFS count over all jobs.
        gfs_yearly: Maximum yearly GFS count over all jobs.
    """

    total_source_data_tb: float | None
    weighted_avg_change_rate: float | None
    immutability_days: int
    max_retention_days: Number | None
    original_max_retention_days: Number | None
    gfs_weekly: int | None
    gfs_monthly: int | None
    gfs_yearly: int | None

    def gfs_counts(self) -> GfsCounts:
        """GFS maxima as a GfsCounts."""
        return GfsCounts(self.gfs_weekly, self.gfs_monthly, self.gfs_yearly)


def calculate_total_source_data_tb(jobs: Iterable[Job]) -> float | None:
    """
    Sum job source sizes and convert GB to TB.

    Args:
        jobs: Normalized jobs.

    Returns:
        Total in TB, or None when no job carries a source size.
    """
    sizes = [job.source_size_gb for job in jobs if job.source_size_gb is not None]
    if not sizes:
        return None
    return sum(sizes) / GB_PER_TB


def calculate_weighted_change_rate(
    jobs: Iterable[Job], sessions: Iterable[JobSession]
) -> float | None:
    """
    Average session change rates weighted by job source size.

    Jobs qualify when they have a positive source size and a session with
    exactly the same job name and a known change rate. When a job name
    appears in several session rows, the last row wins.

    Args:
        jobs: Normalized jobs.
        sessions: Normalized session summaries.

    Returns:
        Weighted rate, or None when no job qualifies.
    """
    rates = {session.job_name: session.avg_change_rate for session in sessions}

    weighted_sum = 0.0
    total_size = 0.0
    for job in jobs:
        size = job.source_size_gb
        if size is None or size <= 0:
            continue
        rate = rates.get(job.job_name)
        if rate is None:
            continue
        weighted_sum += rate * size
        total_size += size

    if total_size <= 0:
        return None
    return weighted_sum / total_size


def get_max_retention_days(jobs: Iterable[Job]) -> Number | None:
    """Longest non-null job retention, or None."""
    retained = [job.retain_days for job in jobs if job.retain_days is not None]
    return max(retained) if retained else None


def _parse_count(value: str) -> int | None:
    value = value.strip()
    # isdigit() alone accepts superscripts and other non-decimal digits
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def parse_gfs_details(text: str | None) -> GfsCounts:
    """
    Parse a GFS details string.

    Keys are case-insensitive and may appear in any order. Unknown keys and
    malformed values are ignored for their own key only, so
    ``"Weekly:abc,Monthly:2"`` yields ``GfsCounts(None, 2, None)``.

    Args:
        text: Raw string such as ``"Weekly:1,Monthly:1,Yearly:2"``.

    Returns:
        Parsed counts; all None for empty or missing input.
    """
    counts: dict[str, int | None] = {"weekly": None, "monthly": None, "yearly": None}
    if not text:
        return GfsCounts()

    for pair in text.split(","):
        key, sep, value = pair.partition(":")
        if not sep:
            continue
        key = key.strip().lower()
        if key not in counts:
            continue
        count = _parse_count(value)
        if count is not None:
            counts[key] = count

    return GfsCounts(**counts)


def _max_optional(current: int | None, candidate: int | None) -> int | None:
    if candidate is None:
        return current
    if current is None:
        return candidate
    return max(current, candidate)


def aggregate_gfs_max(jobs: Iterable[Job]) -> GfsCounts:
    """Per-tier maximum GFS count over jobs that carry GFS details."""
    weekly = monthly = yearly = None
    for job in jobs:
        if not job.gfs_details:
            continue
        parsed = parse_gfs_details(job.gfs_details)
        weekly = _max_optional(weekly, parsed.weekly)
        monthly = _max_optional(monthly, parsed.monthly)
        yearly = _max_optional(yearly, parsed.yearly)
    return GfsCounts(weekly=weekly, monthly=monthly, yearly=yearly)


def build_calculator_summary(
    jobs: Sequence[Job],
    sessions: Sequence[JobSession],
    config: EngineConfig | None = None,
) -> CalculatorSummary:
    """
    Assemble the calculator summary for a set of jobs.

    The displayed retention is clamped up to the retention floor; the
    unclamped value is kept alongside for diagnostics.

    Args:
        jobs: Normalized jobs.
        sessions: Normalized session summaries.
        config: Engine configuration; defaults to DEFAULT_CONFIG.

    Returns:
        CalculatorSummary.
    """
    config = config or DEFAULT_CONFIG

    original_max = get_max_retention_days(jobs)
    clamped = (
        max(original_max, config.retention_floor_days)
        if original_max is not None
        else None
    )
    gfs = aggregate_gfs_max(jobs)

    summary = CalculatorSummary(
        total_source_data_tb=calculate_total_source_data_tb(jobs),
        weighted_avg_change_rate=calculate_weighted_change_rate(jobs, sessions),
        immutability_days=config.immutability_days,
        max_retention_days=clamped,
        original_max_retention_days=original_max,
        gfs_weekly=gfs.weekly,
        gfs_monthly=gfs.monthly,
        gfs_yearly=gfs.yearly,
    )
    log.debug(
        "Built calculator summary",
        jobs=len(jobs),
        sessions=len(sessions),
        total_source_data_tb=summary.total_source_data_tb,
    )
    return summary
