from __future__ import annotations

import csv
from pathlib import Path

from core.domain.enums import NodeKind
from core.reporting.contexts import ScheduleReportContext
from core.reporting.renderers.excel import SCHEDULE_HEADERS


class CsvScheduleRenderer:
    """Semicolon separated, which spreadsheet tools in nl/be locales open directly."""

    delimiter = ";"

    def render(self, ctx: ScheduleReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle, delimiter=self.delimiter)
            writer.writerow(SCHEDULE_HEADERS)
            for r in ctx.rows:
                writer.writerow(
                    [
                        r.node_id,
                        "Milestone" if r.kind == NodeKind.MILESTONE else "Activity",
                        r.title,
                        r.duration,
                        r.earliest_start,
                        r.earliest_finish,
                        r.latest_start,
                        r.latest_finish,
                        r.total_float,
                        "Yes" if r.is_critical else "No",
                    ]
                )
        return output_path
