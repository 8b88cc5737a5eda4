"""
Compliance rules for vault compatibility.

Each rule is a plain function of (dataset, config) returning exactly one
ValidationResult. Rules never see each other's output.
"""

from vaultcheck.config.settings import EngineConfig
from vaultcheck.schemas.records import NormalizedDataset, Sobr
from vaultcheck.validation.results import ValidationResult, ValidationStatus
from vaultcheck.validation.version import is_version_at_least


def extent_label(name: str, sobr_name: str) -> str:
    """Render an extent as ``"<extent> (SOBR: <sobr>)"``."""
    return f"{name} (SOBR: {sobr_name})"


def capacity_tier_sobrs(dataset: NormalizedDataset) -> list[Sobr]:
    """SOBRs with the capacity tier enabled, in export order."""
    return [sobr for sobr in dataset.sobrs if sobr.enable_capacity_tier]


def sobrs_missing_capacity_extents(dataset: NormalizedDataset) -> list[Sobr]:
    """Capacity-tier SOBRs for which the export holds no capacity extent rows."""
    known = {extent.sobr_name for extent in dataset.cap_extents}
    return [sobr for sobr in capacity_tier_sobrs(dataset) if sobr.name not in known]


def _missing_capacity_items(dataset: NormalizedDataset) -> list[str]:
    return [
        f"{sobr.name} (no capacity extent data)"
        for sobr in sobrs_missing_capacity_extents(dataset)
    ]


def validate_vbr_version(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """Every backup server must run at least the minimum version."""
    rule_id = "vbr-version"
    title = "VBR Version Compatibility"
    minimum = config.minimum_version

    if not dataset.backup_servers:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.FAIL,
            message=(
                "No VBR server found in the healthcheck data. VDC Vault requires "
                f"VBR version {minimum} or higher."
            ),
        )

    failed = [
        server.name
        for server in dataset.backup_servers
        if not is_version_at_least(server.version, minimum)
    ]
    if failed:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.FAIL,
            message=(
                f"VBR version must be {minimum} or higher to use VDC Vault. "
                "Upgrade required."
            ),
            affected_items=tuple(failed),
        )

    return ValidationResult(
        rule_id=rule_id,
        title=title,
        status=ValidationStatus.PASS,
        message=f"All VBR servers meet the minimum version requirement ({minimum}+).",
    )


def validate_global_encryption(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """Backup file and configuration backup encryption should be on globally."""
    rule_id = "global-encryption"
    title = "Global Encryption Configuration"

    if not dataset.security_summaries:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.PASS,
            message="No security summary found. Skipping global encryption check.",
        )

    all_enabled = all(
        summary.backup_file_encryption_enabled
        and summary.config_backup_encryption_enabled
        for summary in dataset.security_summaries
    )
    if not all_enabled:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.WARNING,
            message=(
                "Global encryption is disabled. VDC Vault requires all data to be "
                "encrypted. Enable BackupFileEncryption and ConfigBackupEncryption "
                "globally to ensure compliance."
            ),
        )

    return ValidationResult(
        rule_id=rule_id,
        title=title,
        status=ValidationStatus.PASS,
        message="Global encryption settings are enabled.",
    )


def validate_job_encryption(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """
    Jobs must encrypt at the source.

    Unencrypted jobs landing on a capacity-tier SOBR are downgraded to a
    warning, since encryption can be applied at the SOBR layer.
    """
    rule_id = "job-encryption"
    title = "Job Encryption Audit"
    sobr_layer = {sobr.name for sobr in capacity_tier_sobrs(dataset)}

    unencrypted = [job for job in dataset.jobs if not job.encrypted]
    blocking = [job.job_name for job in unencrypted if job.repo_name not in sobr_layer]
    deferred = [job.job_name for job in unencrypted if job.repo_name in sobr_layer]

    if blocking:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.FAIL,
            message=(
                "Vault requires source-side encryption. Enable encryption on these "
                "jobs or use an encrypted Backup Copy Job. Unencrypted data cannot "
                "use Move/Copy Backup to migrate to Vault."
            ),
            affected_items=tuple(blocking),
        )

    if deferred:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.WARNING,
            message=(
                "These jobs are unencrypted but target a SOBR with a capacity tier. "
                "Encryption is assumed at the SOBR layer; confirm the capacity tier "
                "encrypts offloaded data."
            ),
            affected_items=tuple(deferred),
        )

    return ValidationResult(
        rule_id=rule_id,
        title=title,
        status=ValidationStatus.PASS,
        message="All jobs have encryption enabled.",
    )


def validate_aws_workload(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """Some workload types cannot target the vault directly."""
    rule_id = "aws-workload"
    title = "AWS Workload Support"

    matches = [
        job.job_name
        for job in dataset.jobs
        if any(marker in job.job_type.lower() for marker in config.disallowed_job_types)
    ]
    if matches:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.FAIL,
            message=(
                "VDC Vault cannot be targeted directly by Veeam Backup for AWS "
                "workloads. Use Backup Copy Jobs to transfer AWS backups to Vault "
                "instead."
            ),
            affected_items=tuple(matches),
        )

    return ValidationResult(
        rule_id=rule_id,
        title=title,
        status=ValidationStatus.PASS,
        message="No AWS workloads detected that would block Vault integration.",
    )


def validate_agent_workload(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """Agent jobs need a gateway to reach object storage."""
    rule_id = "agent-workload"
    title = "Agent Workload Configuration"

    matches = [
        job.job_name
        for job in dataset.jobs
        if config.agent_job_marker in job.job_type.lower()
    ]
    if matches:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.WARNING,
            message=(
                "Agent workloads detected. Veeam Agents cannot write directly to "
                "object storage. Configure a Gateway Server or use Cloud Connect to "
                "route these backups to Vault."
            ),
            affected_items=tuple(matches),
        )

    return ValidationResult(
        rule_id=rule_id,
        title=title,
        status=ValidationStatus.PASS,
        message="No agent workloads detected.",
    )


def validate_license_edition(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """Community and free editions only get an informational note."""
    rule_id = "license-edition"
    title = "License/Edition Notes"

    matches = [
        lic.edition
        for lic in dataset.licenses
        if any(
            marker in lic.edition.lower() for marker in config.community_edition_markers
        )
    ]
    if matches:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.INFO,
            message=(
                "Community Edition detected. Be aware of SOBR limitations when "
                "designing your Vault strategy."
            ),
            affected_items=tuple(matches),
        )

    return ValidationResult(
        rule_id=rule_id,
        title=title,
        status=ValidationStatus.PASS,
        message="No Community or Free editions detected.",
    )


def validate_retention_period(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """Short-term retention should reach the vault's minimum retention."""
    rule_id = "retention-period"
    title = "Retention Period"
    floor = config.retention_floor_days

    short = [
        f"{job.job_name} ({job.retain_days} days)"
        for job in dataset.jobs
        if job.retain_days is not None and job.retain_days < floor
    ]
    if short:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.WARNING,
            message=(
                f"These jobs retain restore points for less than the {floor}-day "
                "minimum. Vault bills stored data for at least that long, so "
                "shorter retention does not reduce cost."
            ),
            affected_items=tuple(short),
        )

    return ValidationResult(
        rule_id=rule_id,
        title=title,
        status=ValidationStatus.PASS,
        message=f"All jobs meet the {floor}-day minimum retention.",
    )


def validate_cap_tier_encryption(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """Capacity tier extents should encrypt offloaded data."""
    rule_id = "sobr-cap-encryption"
    title = "Capacity Tier Encryption"

    items = [
        extent_label(extent.name, extent.sobr_name)
        for extent in dataset.cap_extents
        if not extent.encryption_enabled
    ]
    items.extend(_missing_capacity_items(dataset))
    if items:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.WARNING,
            message=(
                "Capacity tier encryption is disabled or could not be verified. "
                "Data offloaded to Vault must be encrypted; enable encryption on "
                "these capacity tier extents."
            ),
            affected_items=tuple(items),
        )

    return ValidationResult(
        rule_id=rule_id,
        title=title,
        status=ValidationStatus.PASS,
        message="All capacity tier extents have encryption enabled.",
    )


def validate_sobr_immutability(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """Capacity tier extents should be immutable."""
    rule_id = "sobr-immutability"
    title = "Capacity Tier Immutability"

    items = [
        extent_label(extent.name, extent.sobr_name)
        for extent in dataset.cap_extents
        if not extent.immutable_enabled
    ]
    items.extend(_missing_capacity_items(dataset))
    if items:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.WARNING,
            message=(
                "Capacity tier immutability is disabled or could not be verified. "
                "Enable immutability on these extents to protect offloaded backups."
            ),
            affected_items=tuple(items),
        )

    return ValidationResult(
        rule_id=rule_id,
        title=title,
        status=ValidationStatus.PASS,
        message="All capacity tier extents have immutability enabled.",
    )


def validate_archive_tier_edition(
    dataset: NormalizedDataset, config: EngineConfig
) -> ValidationResult:
    """Archive tier offload needs the Advanced vault edition."""
    rule_id = "archive-tier-edition"
    title = "Archive Tier Edition"

    items = [
        extent_label(extent.name, extent.sobr_name)
        for extent in dataset.arch_extents
        if extent.archive_tier_enabled
    ]
    known = {extent.sobr_name for extent in dataset.arch_extents}
    items.extend(
        f"{sobr.name} (no archive extent data)"
        for sobr in dataset.sobrs
        if sobr.archive_tier_enabled and sobr.name not in known
    )
    if items:
        return ValidationResult(
            rule_id=rule_id,
            title=title,
            status=ValidationStatus.WARNING,
            message=(
                "Archive tier is enabled or could not be verified. Archiving to "
                "Vault requires the VDC Vault Advanced edition."
            ),
            affected_items=tuple(items),
        )

    return ValidationResult(
        rule_id=rule_id,
        title=title,
        status=ValidationStatus.PASS,
        message="No archive tier extents are enabled.",
    )
