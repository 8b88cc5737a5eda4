"""
Request payload for the vendor capacity calculator.

Maps a CalculatorSummary onto the VM/agent sizing request. Only the
payload is built here; sending it is left to the caller.
"""

from pydantic import BaseModel, ConfigDict, Field

from vaultcheck.sizing.aggregator import CalculatorSummary

DEFAULT_SHORT_TERM_DAYS = 14
DEFAULT_RETENTION_DAYS = 30


class GfsRetention(BaseModel):
    """GFS block of the retention settings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_defined: bool = Field(alias="isDefined")
    weeks: int
    months: int
    years: int


class RetentionSettings(BaseModel):
    """Short-term retention plus GFS."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    days: int | float
    gfs: GfsRetention
    is_gfs_defined: bool = Field(alias="isGfsDefined")


class SizingRequest(BaseModel):
    """
    VM/agent sizing request.

    Field names follow Python conventions; ``model_dump(by_alias=True)``
    produces the vendor's mixed camel/Pascal case keys. Fields without an
    input counterpart in the healthcheck carry the calculator's fixed
    assumptions for a vault-backed capacity tier.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_tb: float = Field(alias="sourceTB")
    change_rate: float = Field(alias="ChangeRate")
    reduction: int = Field(default=50, alias="Reduction")
    backup_window_hours: int = Field(default=8, alias="backupWindowHours")
    growth_rate_percent: int = Field(default=5, alias="GrowthRatePercent")
    growth_rate_scope_years: int = Field(default=1, alias="GrowthRateScopeYears")
    block_generation_days: int = Field(default=10, alias="blockGenerationDays")
    retention: RetentionSettings
    days: int | float
    weeklies: int = Field(alias="Weeklies")
    monthlies: int = Field(alias="Monthlies")
    yearlies: int = Field(alias="Yearlies")
    block_cloning: bool = Field(default=True, alias="Blockcloning")
    object_storage: bool = Field(default=True, alias="ObjectStorage")
    move_capacity_tier_enabled: bool = Field(default=False, alias="moveCapacityTierEnabled")
    capacity_tier_days: int | float = Field(alias="capacityTierDays")
    copy_capacity_tier_enabled: bool = Field(default=False, alias="copyCapacityTierEnabled")
    immutable_perf: bool = Field(default=True, alias="immutablePerf")
    immutable_perf_days: int = Field(default=30, alias="immutablePerfDays")
    immutable_cap: bool = Field(default=True, alias="immutableCap")
    immutable_cap_days: int = Field(default=30, alias="immutableCapDays")
    archive_tier_enabled: bool = Field(default=False, alias="archiveTierEnabled")
    archive_tier_standalone: bool = Field(default=False, alias="archiveTierStandalone")
    archive_tier_days: int = Field(default=90, alias="archiveTierDays")
    is_cap_tier_vdcv: bool = Field(default=True, alias="isCapTierVDCV")
    is_managed: bool = Field(default=True, alias="isManaged")
    machine_type: int = Field(default=0, alias="machineType")
    hyper_visor: int = Field(default=0, alias="hyperVisor")
    calculator_mode: int = Field(default=0, alias="calculatorMode")
    product_version: int = Field(default=0, alias="productVersion")
    instance_count: int = Field(alias="instanceCount")

    def to_payload(self) -> dict:
        """JSON-ready payload keyed by the vendor's field names."""
        return self.model_dump(mode="json", by_alias=True)


def build_sizing_request(summary: CalculatorSummary, job_count: int) -> SizingRequest:
    """
    Build a sizing request from a calculator summary.

    Unknown figures fall back to the calculator's neutral defaults: no
    source data, no change, 14 short-term days and 30 overall days.

    Args:
        summary: Calculator summary for the healthcheck.
        job_count: Number of jobs, sent as the instance count.

    Returns:
        SizingRequest.
    """
    gfs = summary.gfs_counts()
    has_gfs = gfs.any_positive()
    weeklies = gfs.weekly or 0
    monthlies = gfs.monthly or 0
    yearlies = gfs.yearly or 0

    short_term_days = summary.original_max_retention_days
    if short_term_days is None:
        short_term_days = DEFAULT_SHORT_TERM_DAYS
    days = summary.max_retention_days
    if days is None:
        days = DEFAULT_RETENTION_DAYS

    return SizingRequest(
        source_tb=summary.total_source_data_tb or 0.0,
        change_rate=summary.weighted_avg_change_rate or 0.0,
        retention=RetentionSettings(
            days=short_term_days,
            gfs=GfsRetention(
                is_defined=has_gfs, weeks=weeklies, months=monthlies, years=yearlies
            ),
            is_gfs_defined=has_gfs,
        ),
        days=days,
        weeklies=weeklies,
        monthlies=monthlies,
        yearlies=yearlies,
        capacity_tier_days=short_term_days,
        instance_count=job_count,
    )
