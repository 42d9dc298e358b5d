"""Data models for upgrade-assistant."""

from .config import AssistantConfig, load_config
from .deprecation import (
    DeprecationAPIResponse,
    DeprecationInfo,
    DeprecationLevel,
    EnrichedDeprecationInfo,
)
from .status import ReportFormat, UpgradeAssistantStatus

__all__ = [
    "AssistantConfig",
    "load_config",
    "DeprecationAPIResponse",
    "DeprecationInfo",
    "DeprecationLevel",
    "EnrichedDeprecationInfo",
    "ReportFormat",
    "UpgradeAssistantStatus",
]
