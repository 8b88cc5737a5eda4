"""
vaultcheck: Healthcheck compliance analysis for cloud-vault storage targets.

This package parses backup-infrastructure healthcheck exports, normalizes
them into strictly typed records, and runs a fixed battery of compatibility
rules plus sizing aggregation against the result.
"""

from importlib.metadata import version

__version__ = version("vaultcheck")

__all__ = ["__version__"]
