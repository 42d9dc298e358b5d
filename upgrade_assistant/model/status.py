"""Upgrade status models."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .deprecation import EnrichedDeprecationInfo


class ReportFormat(str, Enum):
    """Supported report formats."""

    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


class UpgradeAssistantStatus(BaseModel):
    """Aggregated upgrade readiness of a cluster."""

    ready_for_upgrade: bool = Field(alias="readyForUpgrade")
    cluster: List[EnrichedDeprecationInfo] = Field(default_factory=list)
    indices: List[EnrichedDeprecationInfo] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def critical_count(self) -> int:
        """Number of critical warnings across cluster and indices."""
        return sum(1 for d in self.cluster + self.indices if d.is_critical)
