# core/services/scheduling/engine.py
from __future__ import annotations

import logging
from typing import Iterable

from core.domain.planning import Activity, ActivityDependency, Milestone
from core.services.scheduling.graph import build_schedule_graph
from core.services.scheduling.models import CPMResult
from core.services.scheduling.passes import run_backward_pass, run_forward_pass
from core.services.scheduling.results import apply_float, build_cpm_result
from core.services.scheduling.topology import topological_sort

logger = logging.getLogger(__name__)


def calculate_critical_path(
    activities: Iterable[Activity],
    milestones: Iterable[Milestone],
    dependencies: Iterable[ActivityDependency],
) -> CPMResult:
    """
    Full CPM calculation over a snapshot of activities and milestones:
    - builds a fresh graph (unknown dependency endpoints are dropped)
    - orders it topologically (CyclicGraphError if that is impossible)
    - forward pass: ES/EF, backward pass: LS/LF
    - total float and criticality per node

    Input records are never modified.
    """
    graph = build_schedule_graph(activities, milestones, dependencies)
    if not len(graph):
        return CPMResult(nodes={}, critical_path=[], project_duration=0)

    topo_order = topological_sort(graph)
    project_duration = run_forward_pass(graph, topo_order)
    run_backward_pass(graph, topo_order, project_duration)
    apply_float(graph)

    result = build_cpm_result(graph, topo_order, project_duration)
    logger.info(
        "CPM computed: %d nodes, %d critical, project duration %d day(s).",
        len(result.nodes),
        len(result.critical_path),
        result.project_duration,
    )
    return result


__all__ = ["calculate_critical_path"]
