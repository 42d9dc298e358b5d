"""APM index deprecation checks."""

import re
from typing import Any, Dict, List, Optional, Tuple

from ..model.deprecation import DeprecationLevel, EnrichedDeprecationInfo
from ..utils.logger import get_logger

logger = get_logger(__name__)

APM_MIN_VERSION = (7, 0, 0)
PRERELEASE_PATTERN = re.compile(r"^v?\d+(?:\.\d+){0,2}-")
APM_MAPPING_FILTER = ["*.mappings._meta.version", "*.mappings.properties.observer"]
APM_DEPRECATION_MESSAGE = "APM index requires conversion to 7.x format"
APM_RELEASE_NOTES_URL = "https://www.elastic.co/guide/en/apm/get-started/master/apm-release-notes.html"


def parse_version(version_string: Optional[str]) -> Tuple[int, int, int]:
    """Parse a mapping version into a major.minor.patch tuple."""
    if not version_string:
        return 0, 0, 0
    match = re.match(r"v?(\d+)(?:\.(\d+))?(?:\.(\d+))?", version_string)
    if not match:
        return 0, 0, 0
    return tuple(int(part or 0) for part in match.groups())


def is_prerelease(version_string: Optional[str]) -> bool:
    """Check if a version carries a pre-release suffix such as -rc1."""
    return bool(version_string) and PRERELEASE_PATTERN.search(version_string) is not None


def is_legacy_apm_index(mapping: Dict[str, Any]) -> bool:
    """Check if an index mapping was written by an APM Server older than 7.0.

    Pre-releases sort before their release, so 7.0.0-rc1 is still legacy.
    """
    version = mapping.get("mappings", {}).get("_meta", {}).get("version")
    parsed = parse_version(version)
    if parsed == APM_MIN_VERSION:
        return is_prerelease(version)
    return parsed < APM_MIN_VERSION


async def get_deprecated_apm_indices(client, index_patterns: List[str]) -> List[EnrichedDeprecationInfo]:
    """Find APM indices that need reindexing into the 7.x format."""
    if not index_patterns:
        return []

    mappings = await client.call_as_current_user(
        "indices.getMapping",
        {
            "index": index_patterns,
            "filter_path": APM_MAPPING_FILTER,
            "ignore_unavailable": True,
            "allow_no_indices": True,
        },
    )

    deprecations = []
    for index_name, mapping in mappings.items():
        if is_legacy_apm_index(mapping or {}):
            deprecations.append(
                EnrichedDeprecationInfo(
                    level=DeprecationLevel.WARNING.value,
                    message=APM_DEPRECATION_MESSAGE,
                    url=APM_RELEASE_NOTES_URL,
                    details="This index was created prior to 7.0",
                    reindex=True,
                    index=index_name,
                )
            )

    logger.debug(f"Found {len(deprecations)} legacy APM indices")
    return deprecations
