"""Upgrade readiness checks."""

from .apm import get_deprecated_apm_indices
from .status import (
    apply_index_states,
    get_cluster_deprecations,
    get_combined_index_infos,
    get_upgrade_assistant_status,
)

__all__ = [
    "apply_index_states",
    "get_cluster_deprecations",
    "get_combined_index_infos",
    "get_deprecated_apm_indices",
    "get_upgrade_assistant_status",
]
