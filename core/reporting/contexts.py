from __future__ import annotations

from dataclasses import dataclass
from typing import List

from core.domain.enums import NodeKind
from core.services.scheduling.models import CPMResult


@dataclass
class ScheduleRow:
    node_id: str
    kind: NodeKind
    title: str
    duration: int
    earliest_start: int
    earliest_finish: int
    latest_start: int
    latest_finish: int
    total_float: int
    is_critical: bool


@dataclass
class ScheduleReportContext:
    title: str
    project_duration: int
    rows: List[ScheduleRow]

    @property
    def critical_count(self) -> int:
        return sum(1 for row in self.rows if row.is_critical)

    @property
    def milestone_count(self) -> int:
        return sum(1 for row in self.rows if row.kind == NodeKind.MILESTONE)


def build_schedule_context(result: CPMResult, title: str = "Critical path") -> ScheduleReportContext:
    rows = [
        ScheduleRow(
            node_id=node.id,
            kind=node.kind,
            title=node.title,
            duration=node.duration,
            earliest_start=node.earliest_start,
            earliest_finish=node.earliest_finish,
            latest_start=node.latest_start,
            latest_finish=node.latest_finish,
            total_float=node.total_float,
            is_critical=node.is_critical,
        )
        for node in result.nodes.values()
    ]
    rows.sort(key=lambda row: (row.earliest_start, row.earliest_finish, row.node_id))
    return ScheduleReportContext(title=title, project_duration=result.project_duration, rows=rows)


__all__ = ["ScheduleRow", "ScheduleReportContext", "build_schedule_context"]
