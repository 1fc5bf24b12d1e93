from __future__ import annotations

import logging
from typing import List

from core.services.scheduling.models import CPMResult, Node, ScheduleGraph

logger = logging.getLogger(__name__)


def apply_float(graph: ScheduleGraph) -> None:
    negative: List[str] = []
    for node in graph:
        node.total_float = node.latest_start - node.earliest_start
        node.is_critical = node.total_float == 0
        if node.total_float < 0:
            negative.append(node.id)

    # Negative float comes from inconsistent caller data; it is reported, not corrected.
    if negative:
        logger.warning(
            "Negative total float on %d node(s): %s",
            len(negative),
            ", ".join(negative),
        )


def build_cpm_result(graph: ScheduleGraph, topo_order: List[Node], project_duration: int) -> CPMResult:
    return CPMResult(
        nodes=graph.nodes,
        critical_path=[node for node in topo_order if node.is_critical],
        project_duration=project_duration,
    )


__all__ = ["apply_float", "build_cpm_result"]
