from __future__ import annotations

import logging
from collections import deque
from typing import Dict, List

from core.exceptions import CyclicGraphError
from core.services.scheduling.cycles import detect_cycles
from core.services.scheduling.models import Node, ScheduleGraph

logger = logging.getLogger(__name__)


def describe_cycle(graph: ScheduleGraph, cycle: List[str]) -> str:
    if not cycle:
        return ""
    titles = [(graph.nodes[node_id].title or node_id) if node_id in graph else node_id for node_id in cycle]
    return " -> ".join([*titles, titles[0]])


def topological_sort(graph: ScheduleGraph) -> List[Node]:
    """Kahn's algorithm; raises CyclicGraphError instead of returning a partial order."""
    indegree: Dict[str, int] = {node_id: len(node.predecessors) for node_id, node in graph.nodes.items()}
    queue = deque(node_id for node_id, degree in indegree.items() if degree == 0)

    ordered: List[Node] = []
    while queue:
        node = graph.nodes[queue.popleft()]
        ordered.append(node)
        for succ_id in node.successors:
            indegree[succ_id] -= 1
            if indegree[succ_id] == 0:
                queue.append(succ_id)

    if len(ordered) != len(graph):
        emitted = {node.id for node in ordered}
        unresolved = [node_id for node_id in graph.nodes if node_id not in emitted]
        cycles = detect_cycles(graph)
        cycle = cycles[0] if cycles else unresolved
        logger.warning(
            "Topological sort failed: %d of %d nodes unordered.",
            len(unresolved),
            len(graph),
        )
        raise CyclicGraphError(
            f"Cannot schedule project: circular dependencies detected ({describe_cycle(graph, cycle)}).",
            cycle=cycle,
            unresolved_ids=unresolved,
        )

    return ordered


__all__ = ["describe_cycle", "topological_sort"]
