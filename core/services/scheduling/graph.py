from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from core.domain.enums import DependencyType, NodeKind
from core.domain.planning import Activity, ActivityDependency, Milestone, PlanDate
from core.services.scheduling.models import Edge, Node, ScheduleGraph
from core.services.scheduling.policy import dangling_dependency_log_level

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


def _as_datetime(value: PlanDate) -> datetime:
    # Aware values become naive UTC
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime(value.year, value.month, value.day)


def activity_duration(
    planned_start: Optional[PlanDate],
    planned_end: Optional[PlanDate],
) -> int:
    """Whole days between planned start and end, rounded up, never negative."""
    if planned_start is None or planned_end is None:
        return 0
    delta = _as_datetime(planned_end) - _as_datetime(planned_start)
    return max(math.ceil(delta / _ONE_DAY), 0)


def build_schedule_graph(
    activities: Iterable[Activity],
    milestones: Iterable[Milestone],
    dependencies: Iterable[ActivityDependency],
) -> ScheduleGraph:
    graph = ScheduleGraph()

    for activity in activities:
        start, end = activity.planned_start, activity.planned_end
        if start is not None and end is not None and _as_datetime(end) < _as_datetime(start):
            logger.warning(
                "Activity %s ends (%s) before it starts (%s); using duration 0.",
                activity.id,
                end,
                start,
            )
        graph.add_node(
            Node(
                id=activity.id,
                kind=NodeKind.ACTIVITY,
                title=activity.title,
                duration=activity_duration(start, end),
            )
        )

    for milestone in milestones:
        graph.add_node(
            Node(
                id=milestone.id,
                kind=NodeKind.MILESTONE,
                title=milestone.title,
                duration=0,
            )
        )

    dropped = 0
    level = dangling_dependency_log_level()
    for dep in dependencies:
        try:
            edge = Edge(
                source_id=dep.source_id,
                target_id=dep.target_id,
                dependency_type=DependencyType.parse(dep.dependency_type),
                lag_days=int(dep.lag_days or 0),
            )
        except (TypeError, ValueError) as exc:
            dropped += 1
            logger.log(
                level,
                "Dropping dependency %s: %s -> %s is malformed (%s).",
                getattr(dep, "id", "?"),
                dep.source_id,
                dep.target_id,
                exc,
            )
            continue
        if not graph.add_edge(edge):
            dropped += 1
            logger.log(
                level,
                "Dropping dependency %s: %s -> %s references an unknown node.",
                getattr(dep, "id", "?"),
                dep.source_id,
                dep.target_id,
            )

    logger.debug(
        "Built schedule graph: %d nodes, %d edges, %d dependencies dropped.",
        len(graph),
        sum(1 for _ in graph.edges()),
        dropped,
    )
    return graph


__all__ = ["activity_duration", "build_schedule_graph"]
