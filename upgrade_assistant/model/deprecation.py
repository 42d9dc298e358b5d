"""Deprecation-related models."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DeprecationLevel(str, Enum):
    """Severity levels reported by the migration API."""

    NONE = "none"
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class DeprecationInfo(BaseModel):
    """A single deprecation warning as returned by the cluster."""

    level: str
    message: str
    url: Optional[str] = None
    details: Optional[str] = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def is_critical(self) -> bool:
        """Check if the warning blocks the upgrade."""
        return self.level == DeprecationLevel.CRITICAL.value


class EnrichedDeprecationInfo(DeprecationInfo):
    """Deprecation warning annotated with index and reindexing hints."""

    index: Optional[str] = None
    reindex: bool = False
    needs_default_fields: bool = Field(default=False, alias="needsDefaultFields")
    blocker_for_reindexing: Optional[str] = Field(default=None, alias="blockerForReindexing")


class DeprecationAPIResponse(BaseModel):
    """Response of ``GET /_migration/deprecations``."""

    cluster_settings: List[DeprecationInfo] = Field(default_factory=list)
    ml_settings: List[DeprecationInfo] = Field(default_factory=list)
    node_settings: List[DeprecationInfo] = Field(default_factory=list)
    index_settings: Dict[str, List[DeprecationInfo]] = Field(default_factory=dict)
