"""Sizing figures and calculator request payloads."""

from vaultcheck.sizing.aggregator import (
    CalculatorSummary,
    GfsCounts,
    build_calculator_summary,
    parse_gfs_details,
)
from vaultcheck.sizing.request import SizingRequest, build_sizing_request

__all__ = [
    "CalculatorSummary",
    "GfsCounts",
    "SizingRequest",
    "build_calculator_summary",
    "build_sizing_request",
    "parse_gfs_details",
]
