"""
Analysis pipeline: export root -> parsed sections -> dataset -> verdicts.

Structural problems in the export never raise here; they degrade to empty
sections, which the rules then judge (no backup server is a failure).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from vaultcheck.config.settings import DEFAULT_CONFIG, EngineConfig
from vaultcheck.ingestion.sections import SECTION_NAMES, zip_section
from vaultcheck.normalization.dataset import normalize_healthcheck
from vaultcheck.schemas.records import NormalizedDataset
from vaultcheck.sizing.aggregator import CalculatorSummary, build_calculator_summary
from vaultcheck.utils.logging import get_logger
from vaultcheck.validation.core import validate_healthcheck
from vaultcheck.validation.results import ValidationResult

log = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """
    Outcome of one analysis run.

    Attributes:
        dataset: Normalized snapshot of the export.
        validations: One verdict per compliance rule, in rule order.
        config: Configuration the run used.
    """

    dataset: NormalizedDataset
    validations: tuple[ValidationResult, ...]
    config: EngineConfig = DEFAULT_CONFIG

    def calculator_summary(self) -> CalculatorSummary:
        """Sizing figures for the analysed jobs, computed on demand."""
        return build_calculator_summary(
            self.dataset.jobs, self.dataset.job_sessions, self.config
        )


def parse_sections(root: Mapping[str, Any]) -> dict[str, list[Any]]:
    """
    Zip every known section of an export root into keyed records.

    Licenses are already plain objects at the top level and pass through
    unchanged.

    Args:
        root: Export root as returned by the JSON parser.

    Returns:
        Mapping of section name to its records.
    """
    sections = root.get("Sections")
    if not isinstance(sections, Mapping):
        sections = {}

    parsed: dict[str, list[Any]] = {
        name: zip_section(sections.get(name)) for name in SECTION_NAMES
    }
    licenses = root.get("Licenses")
    parsed["Licenses"] = list(licenses) if isinstance(licenses, list) else []
    return parsed


def analyze_healthcheck(
    root: Any, config: EngineConfig | None = None
) -> AnalysisResult:
    """
    Run the full analysis over a parsed export.

    Args:
        root: Parsed export JSON. Anything that is not a mapping is treated
            as an empty export.
        config: Engine configuration; defaults to DEFAULT_CONFIG.

    Returns:
        AnalysisResult with the dataset and all rule verdicts.
    """
    config = config or DEFAULT_CONFIG
    if not isinstance(root, Mapping):
        root = {}

    parsed = parse_sections(root)
    dataset = normalize_healthcheck(parsed)
    validations = validate_healthcheck(dataset, config)

    log.info(
        "Analysis complete",
        jobs=len(dataset.jobs),
        sobrs=len(dataset.sobrs),
        data_errors=len(dataset.data_errors),
    )
    return AnalysisResult(
        dataset=dataset, validations=tuple(validations), config=config
    )
