"""
Capacity-tier residency engine.

Estimates how long each job's restore points stay on a SOBR's capacity
tier and flags jobs whose data would leave it before the vault's minimum
retention. Vault storage is billed for at least that minimum, so short
residency means paying for data that is no longer there.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from vaultcheck.config.settings import EngineConfig
from vaultcheck.schemas.records import ArchExtent, CapExtent, Job, NormalizedDataset, Sobr
from vaultcheck.sizing.aggregator import parse_gfs_details
from vaultcheck.utils.logging import get_logger
from vaultcheck.validation.results import ValidationResult, ValidationStatus
from vaultcheck.validation.rules import capacity_tier_sobrs

log = get_logger(__name__)

RULE_ID = "capacity-tier-residency"
TITLE = "Capacity Tier Residency"

DAYS_PER_GFS_TIER = {"weekly": 7, "monthly": 30, "yearly": 365}


@dataclass(frozen=True)
class TierWindow:
    """
    Capacity-tier timing derived from one SOBR's extents.

    Attributes:
        arrival_day: Day on which a restore point reaches the capacity tier.
        immutable_period: Longest immutability lock across immutable extents.
        archive_trigger: Day on which data moves on to the archive tier, or
            None when no archive tier is active.
    """

    arrival_day: int
    immutable_period: int
    archive_trigger: int | None = None


def arrival_day(extents: Sequence[CapExtent]) -> int:
    """
    Day on which data lands on the capacity tier.

    Copy mode sends data immediately and wins over any move period.
    Otherwise the shortest configured move period applies.
    """
    if any(extent.copy_mode_enabled for extent in extents):
        return 0
    periods = [
        int(extent.move_period_days)
        for extent in extents
        if extent.move_mode_enabled and extent.move_period_days is not None
    ]
    return min(periods) if periods else 0


def immutable_period(extents: Sequence[CapExtent]) -> int:
    """Longest immutability period across immutable extents, else 0."""
    periods = [
        int(extent.immutable_period)
        for extent in extents
        if extent.immutable_enabled and extent.immutable_period is not None
    ]
    return max(periods) if periods else 0


def archive_trigger(
    sobr: Sobr, extents: Sequence[ArchExtent], immutable_days: int
) -> int | None:
    """
    Day on which data is offloaded to the archive tier.

    Immutable data cannot be archived before its lock expires, so the
    trigger is never earlier than ``immutable_days``.

    Returns:
        The trigger day, or None when the SOBR has no active archive extent
        with a known offload period.
    """
    if not sobr.archive_tier_enabled:
        return None
    offloads = [
        int(extent.offload_period)
        for extent in extents
        if extent.archive_tier_enabled and extent.offload_period is not None
    ]
    if not offloads:
        return None
    return max(min(offloads), immutable_days)


def build_window(
    sobr: Sobr, cap_extents: Sequence[CapExtent], arch_extents: Sequence[ArchExtent]
) -> TierWindow:
    """Derive the tier window for ``sobr`` from its own extents."""
    immutable = immutable_period(cap_extents)
    return TierWindow(
        arrival_day=arrival_day(cap_extents),
        immutable_period=immutable,
        archive_trigger=archive_trigger(sobr, arch_extents, immutable),
    )


def check_retention(job: Job, window: TierWindow, floor: int) -> str | None:
    """Residency finding for the job's short-term retention, if any."""
    if job.retain_days is None:
        return None
    retention = int(job.retain_days)
    if retention <= window.arrival_day:
        return None

    residency = retention - window.arrival_day
    if residency >= floor:
        return None

    effective = max(residency, window.immutable_period)
    if effective >= floor:
        return (
            f"{job.job_name}: {residency} days on capacity tier, held to "
            f"{effective} days by {window.immutable_period}-day immutability "
            "(extra storage cost)"
        )
    return (
        f"{job.job_name}: {residency} days on capacity tier (retention "
        f"{retention} days, arrives day {window.arrival_day}), below the "
        f"{floor}-day minimum"
    )


def check_gfs(job: Job, window: TierWindow, floor: int) -> list[str]:
    """Residency findings for each GFS tier of the job."""
    if job.gfs_enabled is not True or not job.gfs_details:
        return []

    counts = parse_gfs_details(job.gfs_details)
    findings = []
    for tier, days_per_point in DAYS_PER_GFS_TIER.items():
        count = getattr(counts, tier)
        if count is None:
            continue
        days = count * days_per_point
        capped = window.archive_trigger is not None and window.archive_trigger < days
        if capped:
            days = window.archive_trigger
        if days <= window.arrival_day:
            continue

        residency = days - window.arrival_day
        if residency >= floor:
            continue

        label = f"{job.job_name} {tier} GFS ({count * days_per_point} days)"
        if capped:
            findings.append(
                f"{label}: archived after {days} days, {residency} days on "
                f"capacity tier, below the {floor}-day minimum"
            )
            continue

        effective = max(residency, window.immutable_period)
        if effective >= floor:
            findings.append(
                f"{label}: {residency} days on capacity tier, held to "
                f"{effective} days by {window.immutable_period}-day immutability "
                "(extra storage cost)"
            )
        else:
            findings.append(
                f"{label}: {residency} days on capacity tier, below the "
                f"{floor}-day minimum"
            )
    return findings


def validate_capacity_tier_residency(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """
    Check capacity-tier residency for every job on a capacity-tier SOBR.

    A SOBR without capacity extent data is flagged once and its jobs are
    not checked.

    Args:
        dataset: Normalized healthcheck snapshot.
        config: Engine configuration providing the retention floor.

    Returns:
        Warning listing every finding, or pass when there are none.
    """
    floor = config.retention_floor_days
    findings: list[str] = []

    for sobr in capacity_tier_sobrs(dataset):
        cap_extents = [e for e in dataset.cap_extents if e.sobr_name == sobr.name]
        if not cap_extents:
            findings.append(
                f"{sobr.name}: capacity tier enabled but no capacity extent data in export"
            )
            continue

        arch_extents = [e for e in dataset.arch_extents if e.sobr_name == sobr.name]
        window = build_window(sobr, cap_extents, arch_extents)
        log.debug(
            "Capacity tier window",
            sobr=sobr.name,
            arrival_day=window.arrival_day,
            immutable_period=window.immutable_period,
            archive_trigger=window.archive_trigger,
        )

        for job in dataset.jobs:
            if job.repo_name != sobr.name:
                continue
            finding = check_retention(job, window, floor)
            if finding is not None:
                findings.append(finding)
            findings.extend(check_gfs(job, window, floor))

    if findings:
        return ValidationResult(
            rule_id=RULE_ID,
            title=TITLE,
            status=ValidationStatus.WARNING,
            message=(
                f"Some backups leave the capacity tier before the {floor}-day "
                "minimum retention. Vault still bills the full minimum, so "
                "review move periods, retention and archive settings."
            ),
            affected_items=tuple(findings),
        )

    return ValidationResult(
        rule_id=RULE_ID,
        title=TITLE,
        status=ValidationStatus.PASS,
        message=f"All capacity tier data stays at least {floor} days.",
    )
