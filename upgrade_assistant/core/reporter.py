"""Upgrade status report generator."""

import json
from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Optional

import yaml

from ..model.deprecation import EnrichedDeprecationInfo
from ..model.status import ReportFormat, UpgradeAssistantStatus
from ..utils.logger import get_logger

logger = get_logger(__name__)


class StatusReporter:
    """Renders upgrade status in the supported report formats."""

    def render(
        self,
        status: UpgradeAssistantStatus,
        output_format: ReportFormat = ReportFormat.TEXT,
        timestamp: Optional[datetime] = None,
    ) -> str:
        """Render the status as text, JSON or YAML."""
        logger.debug(f"Rendering upgrade status as {output_format.value}")

        if output_format == ReportFormat.JSON:
            return json.dumps(self.to_dict(status), indent=2, default=str)
        elif output_format == ReportFormat.YAML:
            return yaml.dump(self.to_dict(status), default_flow_style=False, sort_keys=False)
        else:
            return self._format_text_report(status, timestamp or datetime.now())

    def to_dict(self, status: UpgradeAssistantStatus) -> Dict[str, Any]:
        """Serialize with the API field names, omitting unset fields."""
        return status.model_dump(by_alias=True, exclude_none=True)

    def _format_warning(self, deprecation: EnrichedDeprecationInfo) -> List[str]:
        """Format one warning as indented text lines."""
        markers = []
        if deprecation.reindex:
            markers.append("reindex")
        if deprecation.needs_default_fields:
            markers.append("needs default fields")
        if deprecation.blocker_for_reindexing:
            markers.append(deprecation.blocker_for_reindexing)

        line = f"  [{deprecation.level.upper()}] {deprecation.message}"
        if markers:
            line += f" ({', '.join(markers)})"

        lines = [line]
        if deprecation.details:
            lines.append(f"      {deprecation.details}")
        if deprecation.url:
            lines.append(f"      See: {deprecation.url}")
        return lines

    def _format_text_report(self, status: UpgradeAssistantStatus, timestamp: datetime) -> str:
        """Format status as human-readable text."""
        lines = []
        lines.append("=" * 80)
        lines.append("UPGRADE READINESS REPORT")
        lines.append("=" * 80)
        lines.append(f"Generated: {timestamp.strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append("")

        verdict = "READY" if status.ready_for_upgrade else "NOT READY"
        lines.append(f"Status: {verdict}")
        levels = Counter(d.level for d in status.cluster + status.indices)
        if levels:
            tally = ", ".join(f"{level}: {count}" for level, count in sorted(levels.items()))
            lines.append(f"Warnings by level: {tally}")
        lines.append("")

        lines.append("CLUSTER")
        lines.append("-" * 40)
        if status.cluster:
            for deprecation in status.cluster:
                lines.extend(self._format_warning(deprecation))
        else:
            lines.append("  No cluster deprecations")
        lines.append("")

        lines.append("INDICES")
        lines.append("-" * 40)
        if status.indices:
            by_index: Dict[str, List[EnrichedDeprecationInfo]] = {}
            for deprecation in status.indices:
                by_index.setdefault(deprecation.index, []).append(deprecation)

            for index_name, deprecations in by_index.items():
                lines.append(f"{index_name}:")
                for deprecation in deprecations:
                    lines.extend(self._format_warning(deprecation))
        else:
            lines.append("  No index deprecations")

        return "\n".join(lines)
