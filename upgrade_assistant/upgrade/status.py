"""Upgrade readiness status aggregation."""

import asyncio
import re
from typing import Awaitable, Callable, Dict, List, Optional

from ..es.indices import check_indices_state, is_system_index
from ..model.deprecation import (
    DeprecationAPIResponse,
    DeprecationInfo,
    EnrichedDeprecationInfo,
)
from ..model.status import UpgradeAssistantStatus
from ..utils.logger import get_logger
from .apm import get_deprecated_apm_indices

logger = get_logger(__name__)

DEPRECATIONS_PATH = "/_migration/deprecations"
INDEX_CLOSED = "index-closed"

# Applied automatically by Cloud at upgrade time
CLOUD_MANAGED_MESSAGE = "Security realm settings structure changed"

REINDEX_PATTERN = re.compile(r"Index created before")
DEFAULT_FIELDS_PATTERN = re.compile(r"Number of fields exceeds automatic field expansion limit")

IndexStateProbe = Callable[[List[str]], Awaitable[Dict[str, str]]]


def is_reindex_message(message: str) -> bool:
    """Check if a warning says the index predates the current format."""
    return REINDEX_PATTERN.search(message) is not None


def needs_default_fields_message(message: str) -> bool:
    """Check if a warning says the index has too many fields for default expansion."""
    return DEFAULT_FIELDS_PATTERN.search(message) is not None


def get_cluster_deprecations(
    deprecations: DeprecationAPIResponse, is_cloud_enabled: bool
) -> List[DeprecationInfo]:
    """Combine cluster, ML and node level warnings."""
    combined = deprecations.cluster_settings + deprecations.ml_settings + deprecations.node_settings

    if is_cloud_enabled:
        return [d for d in combined if d.message != CLOUD_MANAGED_MESSAGE]
    return combined


def get_combined_index_infos(
    deprecations: DeprecationAPIResponse, apm_index_deprecations: List[EnrichedDeprecationInfo]
) -> List[EnrichedDeprecationInfo]:
    """Flatten per-index warnings and append the APM warnings."""
    apm_indices = {d.index for d in apm_index_deprecations}

    index_deprecations = []
    for index_name, index_warnings in deprecations.index_settings.items():
        # APM indices are reported by the APM check only
        if index_name in apm_indices:
            continue

        for warning in index_warnings:
            data = warning.model_dump()
            data.update(
                index=index_name,
                reindex=is_reindex_message(warning.message) and index_name not in apm_indices,
                needs_default_fields=needs_default_fields_message(warning.message),
            )
            index_deprecations.append(EnrichedDeprecationInfo(**data))

    # System index warnings are held back until their upgrade requirements are known.
    # APM warnings are appended regardless.
    general = [d for d in index_deprecations if not is_system_index(d.index)]
    return general + list(apm_index_deprecations)


async def apply_index_states(
    indices: List[EnrichedDeprecationInfo], check_state: IndexStateProbe
) -> None:
    """Mark warnings for closed indices as blocked for reindexing."""
    index_names = list(dict.fromkeys(d.index for d in indices if d.index))
    if not index_names:
        return

    index_states = await check_state(index_names)

    for deprecation in indices:
        if index_states.get(deprecation.index) == "close":
            deprecation.blocker_for_reindexing = INDEX_CLOSED
        else:
            deprecation.blocker_for_reindexing = None


def _to_enriched(deprecation: DeprecationInfo) -> EnrichedDeprecationInfo:
    """Widen a cluster level warning to the enriched shape."""
    if isinstance(deprecation, EnrichedDeprecationInfo):
        return deprecation
    return EnrichedDeprecationInfo(**deprecation.model_dump())


async def get_upgrade_assistant_status(
    client, is_cloud_enabled: bool, apm_indices: Optional[List[str]] = None
) -> UpgradeAssistantStatus:
    """Compute the upgrade readiness of the cluster behind ``client``."""
    logger.info("Checking cluster upgrade status")

    raw_deprecations, apm_index_deprecations = await asyncio.gather(
        client.call_as_current_user(
            "transport.request", {"path": DEPRECATIONS_PATH, "method": "GET"}
        ),
        get_deprecated_apm_indices(client, apm_indices or []),
    )
    deprecations = DeprecationAPIResponse.model_validate(raw_deprecations)

    cluster = [_to_enriched(d) for d in get_cluster_deprecations(deprecations, is_cloud_enabled)]
    indices = get_combined_index_infos(deprecations, apm_index_deprecations)

    if indices:

        async def check_state(index_names: List[str]) -> Dict[str, str]:
            return await check_indices_state(client.call_as_current_user, index_names)

        await apply_index_states(indices, check_state)

    critical_warnings = [d for d in cluster + indices if d.is_critical]
    status = UpgradeAssistantStatus(
        ready_for_upgrade=len(critical_warnings) == 0,
        cluster=cluster,
        indices=indices,
    )

    logger.info(
        f"Upgrade status: ready={status.ready_for_upgrade}, "
        f"{len(cluster)} cluster and {len(indices)} index warnings, "
        f"{len(critical_warnings)} critical"
    )
    return status
