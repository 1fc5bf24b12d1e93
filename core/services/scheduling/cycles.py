from __future__ import annotations

import logging
from typing import Iterable, List, Protocol

from core.domain.enums import NodeKind
from core.services.scheduling.models import Edge, Node, ScheduleGraph

logger = logging.getLogger(__name__)


class DependencyLike(Protocol):
    source_id: str
    target_id: str


def detect_cycles(graph: ScheduleGraph) -> List[List[str]]:
    """
    Depth-first search over every unvisited node, tracking the current path.

    A successor that is already on the path closes a cycle; the path slice
    from that successor to the current node is recorded. The same cycle can
    be reported more than once when several entry points reach it.
    """
    visited: set[str] = set()
    cycles: List[List[str]] = []

    for root_id in graph.nodes:
        if root_id in visited:
            continue

        path: List[str] = [root_id]
        on_path: set[str] = {root_id}
        cursors: List[int] = [0]
        visited.add(root_id)

        while path:
            node_id = path[-1]
            successors = graph.nodes[node_id].successors
            index = cursors[-1]
            if index >= len(successors):
                path.pop()
                cursors.pop()
                on_path.discard(node_id)
                continue

            cursors[-1] = index + 1
            succ_id = successors[index]
            if succ_id not in visited:
                visited.add(succ_id)
                path.append(succ_id)
                on_path.add(succ_id)
                cursors.append(0)
            elif succ_id in on_path:
                cycles.append(path[path.index(succ_id):])

    if cycles:
        logger.debug("Detected %d cycle(s) in schedule graph.", len(cycles))
    return cycles


def _graph_from_dependencies(dependencies: Iterable[DependencyLike]) -> ScheduleGraph:
    graph = ScheduleGraph()
    for dep in dependencies:
        for node_id in (dep.source_id, dep.target_id):
            if node_id not in graph:
                graph.add_node(Node(id=node_id, kind=NodeKind.ACTIVITY, title=node_id))
        # Only reachability matters here; type and lag are not read
        graph.add_edge(Edge(source_id=dep.source_id, target_id=dep.target_id))
    return graph


def find_candidate_cycles(
    existing_dependencies: Iterable[DependencyLike],
    candidate_source: str,
    candidate_target: str,
) -> List[List[str]]:
    """Cycles present once candidate_source -> candidate_target is added in memory."""
    candidate = Edge(source_id=candidate_source, target_id=candidate_target)
    return detect_cycles(_graph_from_dependencies([*existing_dependencies, candidate]))


def would_create_cycle(
    existing_dependencies: Iterable[DependencyLike],
    candidate_source: str,
    candidate_target: str,
) -> bool:
    return bool(find_candidate_cycles(existing_dependencies, candidate_source, candidate_target))


__all__ = ["detect_cycles", "find_candidate_cycles", "would_create_cycle"]
