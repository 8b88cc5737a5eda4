"""
Healthcheck normalization.

Turns parsed section records into the strict NormalizedDataset. Each section
is described by a SectionSpec: required fields are checked in declaration
order and the first failure drops the row with exactly one DataError;
optional fields default to None.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from vaultcheck.normalization.fields import normalize_string, parse_boolean, parse_number
from vaultcheck.schemas.records import (
    ArchExtent,
    BackupServer,
    CapExtent,
    DataError,
    Extent,
    Job,
    JobSession,
    License,
    NormalizedDataset,
    Repo,
    SectionName,
    SecuritySummary,
    Sobr,
)
from vaultcheck.utils.logging import get_logger

log = get_logger(__name__)

FieldKind = Literal["string", "boolean", "number"]


@dataclass(frozen=True)
class FieldSpec:
    """
    Mapping of one raw header onto one record attribute.

    Attributes:
        attr: Record attribute name.
        source: Raw header name; also the field named in DataErrors.
        kind: Coercion to apply.
        required: Whether a missing/invalid value drops the row.
        fallback: Legacy header read when ``source`` is absent (null).
    """

    attr: str
    source: str
    kind: FieldKind
    required: bool = False
    fallback: str | None = None


@dataclass(frozen=True)
class SectionSpec:
    """Normalization recipe for one section."""

    section: SectionName
    record_type: type
    fields: tuple[FieldSpec, ...]
    skip_row: Callable[[Mapping[str, Any]], bool] | None = None

    @property
    def required_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.required)

    @property
    def optional_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if not f.required)


def _required(attr: str, source: str, kind: FieldKind = "string") -> FieldSpec:
    return FieldSpec(attr=attr, source=source, kind=kind, required=True)


def _is_summary_session(row: Mapping[str, Any]) -> bool:
    # "Total" rows would double-count in aggregations
    name = normalize_string(row.get("JobName"))
    return name is not None and name.lower() == "total"


BACKUP_SERVER_SPEC = SectionSpec(
    section="backupServer",
    record_type=BackupServer,
    fields=(
        _required("version", "Version"),
        _required("name", "Name"),
    ),
)

SECURITY_SUMMARY_SPEC = SectionSpec(
    section="securitySummary",
    record_type=SecuritySummary,
    fields=(
        _required("backup_file_encryption_enabled", "BackupFileEncryptionEnabled", "boolean"),
        _required("config_backup_encryption_enabled", "ConfigBackupEncryptionEnabled", "boolean"),
    ),
)

JOB_SPEC = SectionSpec(
    section="jobInfo",
    record_type=Job,
    fields=(
        _required("job_name", "JobName"),
        _required("job_type", "JobType"),
        _required("repo_name", "RepoName"),
        _required("encrypted", "Encrypted", "boolean"),
        FieldSpec("retain_days", "RetainDays", "number"),
        FieldSpec("gfs_details", "GfsDetails", "string"),
        FieldSpec("source_size_gb", "SourceSizeGB", "number"),
        FieldSpec("on_disk_gb", "OnDiskGB", "number"),
        FieldSpec("retention_scheme", "RetentionScheme", "string"),
        FieldSpec("compression_level", "CompressionLevel", "string"),
        FieldSpec("block_size", "BlockSize", "string"),
        FieldSpec("gfs_enabled", "GfsEnabled", "boolean"),
        FieldSpec("active_full_enabled", "ActiveFullEnabled", "boolean"),
        FieldSpec("synthetic_full_enabled", "SyntheticFullEnabled", "boolean"),
        FieldSpec("backup_chain_type", "BackupChainType", "string"),
        FieldSpec("indexing_enabled", "IndexingEnabled", "boolean"),
    ),
)

LICENSE_SPEC = SectionSpec(
    section="Licenses",
    record_type=License,
    fields=(
        _required("edition", "Edition"),
        _required("status", "Status"),
    ),
)

JOB_SESSION_SPEC = SectionSpec(
    section="jobSessionSummaryByJob",
    record_type=JobSession,
    fields=(
        _required("job_name", "JobName"),
        FieldSpec("max_data_size", "MaxDataSize", "number"),
        FieldSpec("avg_change_rate", "AvgChangeRate", "number"),
        FieldSpec("success_rate", "SuccessRate", "number"),
        FieldSpec("session_count", "SessionCount", "number"),
        FieldSpec("fails", "Fails", "number"),
        FieldSpec("avg_job_time", "AvgJobTime", "string"),
        FieldSpec("max_job_time", "MaxJobTime", "string"),
    ),
    skip_row=_is_summary_session,
)

SOBR_SPEC = SectionSpec(
    section="sobr",
    record_type=Sobr,
    fields=(
        _required("name", "Name"),
        _required("enable_capacity_tier", "EnableCapacityTier", "boolean"),
        _required("capacity_tier_copy", "CapacityTierCopy", "boolean"),
        _required("capacity_tier_move", "CapacityTierMove", "boolean"),
        _required("archive_tier_enabled", "ArchiveTierEnabled", "boolean"),
        _required("immutable_enabled", "ImmutableEnabled", "boolean"),
        FieldSpec("extent_count", "ExtentCount", "number"),
        FieldSpec("job_count", "JobCount", "number"),
        FieldSpec("policy_type", "PolicyType", "string"),
        FieldSpec("use_per_vm_files", "UsePerVMFiles", "boolean"),
        FieldSpec("cap_tier_type", "CapTierType", "string"),
        FieldSpec("immutable_period", "ImmutablePeriod", "number"),
        FieldSpec("size_limit_enabled", "SizeLimitEnabled", "boolean"),
        FieldSpec("size_limit", "SizeLimit", "number"),
    ),
)

EXTENT_SPEC = SectionSpec(
    section="extents",
    record_type=Extent,
    fields=(
        _required("name", "Name"),
        _required("sobr_name", "SobrName"),
        FieldSpec("type", "Type", "string"),
        FieldSpec("host", "Host", "string"),
        FieldSpec("immutability_supported", "IsImmutabilitySupported", "boolean"),
        FieldSpec("free_space_tb", "FreeSpace", "number"),
        FieldSpec("total_space_tb", "TotalSpace", "number"),
        FieldSpec("free_space_percent", "FreeSpacePercent", "number"),
    ),
)

CAP_EXTENT_SPEC = SectionSpec(
    section="capextents",
    record_type=CapExtent,
    fields=(
        _required("name", "Name"),
        _required("sobr_name", "SobrName"),
        _required("encryption_enabled", "EncryptionEnabled", "boolean"),
        _required("immutable_enabled", "ImmutableEnabled", "boolean"),
        FieldSpec("type", "Type", "string"),
        FieldSpec("status", "Status", "string"),
        FieldSpec("copy_mode_enabled", "CopyModeEnabled", "boolean"),
        FieldSpec("move_mode_enabled", "MoveModeEnabled", "boolean"),
        FieldSpec("move_period_days", "MovePeriodDays", "number"),
        FieldSpec("immutable_period", "ImmutablePeriod", "number"),
        FieldSpec("size_limit_enabled", "SizeLimitEnabled", "boolean"),
        FieldSpec("size_limit", "SizeLimit", "number"),
        FieldSpec("gateway_server", "GatewayServer", "string"),
        FieldSpec("connection_type", "ConnectionType", "string"),
        FieldSpec("immutability_mode", "ImmutabilityMode", "string"),
    ),
)

ARCH_EXTENT_SPEC = SectionSpec(
    section="archextents",
    record_type=ArchExtent,
    fields=(
        _required("sobr_name", "SobrName"),
        _required("name", "Name"),
        _required("archive_tier_enabled", "ArchiveTierEnabled", "boolean"),
        _required("encryption_enabled", "EncryptionEnabled", "boolean"),
        _required("immutable_enabled", "ImmutableEnabled", "boolean"),
        FieldSpec("offload_period", "OffloadPeriod", "number", fallback="RetentionPeriod"),
        FieldSpec("cost_optimized_enabled", "CostOptimizedEnabled", "boolean"),
        FieldSpec("full_backup_mode_enabled", "FullBackupModeEnabled", "boolean"),
        FieldSpec("immutable_period", "ImmutablePeriod", "number"),
        FieldSpec("gateway_server", "GatewayServer", "string"),
        FieldSpec("gateway_mode", "GatewayMode", "string"),
    ),
)

REPO_SPEC = SectionSpec(
    section="repos",
    record_type=Repo,
    fields=(
        _required("name", "Name"),
        _required("immutability_supported", "IsImmutabilitySupported", "boolean"),
        FieldSpec("job_count", "JobCount", "number"),
        FieldSpec("total_space_tb", "TotalSpace", "number"),
        FieldSpec("free_space_tb", "FreeSpace", "number"),
        FieldSpec("type", "Type", "string"),
    ),
)

# Dataset attribute -> (input key, spec). Input keys match export section names.
SECTION_SPECS: dict[str, tuple[str, SectionSpec]] = {
    "backup_servers": ("backupServer", BACKUP_SERVER_SPEC),
    "security_summaries": ("securitySummary", SECURITY_SUMMARY_SPEC),
    "jobs": ("jobInfo", JOB_SPEC),
    "licenses": ("Licenses", LICENSE_SPEC),
    "job_sessions": ("jobSessionSummaryByJob", JOB_SESSION_SPEC),
    "sobrs": ("sobr", SOBR_SPEC),
    "extents": ("extents", EXTENT_SPEC),
    "cap_extents": ("capextents", CAP_EXTENT_SPEC),
    "arch_extents": ("archextents", ARCH_EXTENT_SPEC),
    "repos": ("repos", REPO_SPEC),
}


def _raw_value(row: Mapping[str, Any], spec: FieldSpec) -> Any:
    value = row.get(spec.source)
    if value is None and spec.fallback is not None:
        value = row.get(spec.fallback)
    return value


def _required_reason(spec: FieldSpec) -> str:
    if spec.kind == "string":
        return f"Missing required {spec.source}"
    return f"Missing or invalid {spec.source} value"


def _coerce_required(row: Mapping[str, Any], spec: FieldSpec) -> Any:
    """Coerce a required field, returning None when it is missing or invalid."""
    raw = _raw_value(row, spec)
    if spec.kind == "string":
        return normalize_string(raw)
    if spec.kind == "boolean":
        return parse_boolean(raw)
    try:
        return parse_number(raw)
    except ValueError:
        return None


def normalize_section(
    rows: Any,
    spec: SectionSpec,
    data_errors: list[DataError],
) -> list[Any]:
    """
    Normalize the records of one section.

    Args:
        rows: Parsed records. Anything that is not a list yields no rows.
        spec: Section recipe.
        data_errors: Collector that receives one DataError per rejected
            row/field pair.

    Returns:
        Records of ``spec.record_type``, in row order.
    """
    if not isinstance(rows, list):
        return []

    records: list[Any] = []
    for row_index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            data_errors.append(
                DataError(spec.section, row_index, "_row", "Invalid row: not an object")
            )
            continue

        values: dict[str, Any] = {}
        failed: FieldSpec | None = None
        for field_spec in spec.required_fields:
            value = _coerce_required(row, field_spec)
            if value is None:
                failed = field_spec
                break
            values[field_spec.attr] = value

        if failed is not None:
            data_errors.append(
                DataError(spec.section, row_index, failed.source, _required_reason(failed))
            )
            log.debug(
                "Dropped row",
                section=spec.section,
                row_index=row_index,
                field=failed.source,
            )
            continue

        if spec.skip_row is not None and spec.skip_row(row):
            continue

        for field_spec in spec.optional_fields:
            raw = _raw_value(row, field_spec)
            if field_spec.kind == "string":
                values[field_spec.attr] = normalize_string(raw)
            elif field_spec.kind == "boolean":
                values[field_spec.attr] = parse_boolean(raw)
            else:
                try:
                    values[field_spec.attr] = parse_number(raw)
                except ValueError as e:
                    values[field_spec.attr] = None
                    data_errors.append(
                        DataError(spec.section, row_index, field_spec.source, str(e))
                    )

        records.append(spec.record_type(**values))

    return records


def normalize_healthcheck(raw: Mapping[str, Any]) -> NormalizedDataset:
    """
    Normalize parsed healthcheck sections into a strict dataset.

    Args:
        raw: Mapping of section name (``backupServer``, ``jobInfo``,
            ``Licenses``, ...) to its list of parsed records. Missing
            sections and non-list values are treated as empty.

    Returns:
        NormalizedDataset with every kept record fully typed and one
        DataError per rejected row/field pair.
    """
    data_errors: list[DataError] = []
    sections: dict[str, tuple[Any, ...]] = {}

    for attr, (key, spec) in SECTION_SPECS.items():
        sections[attr] = tuple(normalize_section(raw.get(key), spec, data_errors))

    if data_errors:
        log.info("Normalization recorded data errors", count=len(data_errors))

    return NormalizedDataset(**sections, data_errors=tuple(data_errors))
