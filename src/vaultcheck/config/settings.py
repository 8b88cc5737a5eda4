"""
Typed configuration models using Pydantic.

All rule thresholds are defined here with explicit typing and validation.
No hardcoded thresholds in rule code.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_VERSION_PATTERN = re.compile(r"^\d+(\.\d+)*$")


class EngineConfig(BaseModel):
    """Thresholds and markers shared by the rule battery and the sizing summary."""

    model_config = ConfigDict(frozen=True)

    minimum_version: str = Field(
        default="12.1.2",
        description="Minimum backup server version supported by the vault target",
    )
    retention_floor_days: int = Field(
        default=30,
        ge=0,
        description="Minimum days a restore point must stay on the vault target",
    )
    immutability_days: int = Field(
        default=30,
        ge=0,
        description="Fixed immutability window assumed by the sizing summary",
    )
    disallowed_job_types: tuple[str, ...] = Field(
        default=("veeam.vault.aws",),
        description="Job type substrings that cannot target the vault directly",
    )
    agent_job_marker: str = Field(
        default="agent",
        description="Job type substring identifying agent workloads",
    )
    community_edition_markers: tuple[str, ...] = Field(
        default=("community", "free"),
        description="License edition substrings identifying community editions",
    )

    @field_validator("minimum_version")
    @classmethod
    def validate_minimum_version(cls, v: str) -> str:
        """Ensure the version is a dotted numeric string."""
        v = v.strip()
        if not _VERSION_PATTERN.match(v):
            msg = f"minimum_version must be a dotted numeric version, got: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("disallowed_job_types", "community_edition_markers")
    @classmethod
    def lowercase_markers(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Store substring markers lower-cased for case-insensitive matching."""
        markers = tuple(marker.strip().lower() for marker in v)
        if any(not marker for marker in markers):
            msg = "Substring markers must not be blank"
            raise ValueError(msg)
        return markers

    @field_validator("agent_job_marker")
    @classmethod
    def lowercase_agent_marker(cls, v: str) -> str:
        """Store the agent marker lower-cased."""
        v = v.strip().lower()
        if not v:
            msg = "agent_job_marker must not be blank"
            raise ValueError(msg)
        return v


DEFAULT_CONFIG = EngineConfig()
