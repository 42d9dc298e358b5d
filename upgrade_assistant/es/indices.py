"""Index classification and state checks."""

from typing import Any, Awaitable, Callable, Dict, List

from ..utils.logger import get_logger

logger = get_logger(__name__)

CallCluster = Callable[[str, Dict[str, Any]], Awaitable[Any]]


def is_system_index(index_name: str) -> bool:
    """Check if an index is an internal system index."""
    return index_name.startswith(".")


async def check_indices_state(call_as_user: CallCluster, index_names: List[str]) -> Dict[str, str]:
    """Map each index name to its state ("open" or "close").

    The ``_cat/indices`` response format is internal to Elasticsearch; only the
    ``index`` and ``status`` columns are read.
    """
    rows = await call_as_user(
        "cat.indices", {"index": index_names, "format": "json", "expand_wildcards": "all"}
    )

    states = {row["index"]: row["status"] for row in rows}
    logger.debug(f"Resolved state for {len(states)} of {len(index_names)} indices")
    return states
