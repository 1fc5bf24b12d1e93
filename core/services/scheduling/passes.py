from __future__ import annotations

from typing import Callable, Dict, List

from core.domain.enums import DependencyType
from core.services.scheduling.models import Node, ScheduleGraph


ConstraintFn = Callable[[Node, Node, int], int]

# Earliest start of `node` imposed by predecessor `pred`.
FORWARD_CONSTRAINTS: Dict[DependencyType, ConstraintFn] = {
    DependencyType.FINISH_TO_START: lambda pred, node, lag: pred.earliest_finish + lag,
    DependencyType.START_TO_START: lambda pred, node, lag: pred.earliest_start + lag,
    DependencyType.FINISH_TO_FINISH: lambda pred, node, lag: pred.earliest_finish + lag - node.duration,
    DependencyType.START_TO_FINISH: lambda pred, node, lag: pred.earliest_start + lag - node.duration,
}

# Latest finish of `node` imposed by successor `succ`.
BACKWARD_CONSTRAINTS: Dict[DependencyType, ConstraintFn] = {
    DependencyType.FINISH_TO_START: lambda succ, node, lag: succ.latest_start - lag,
    DependencyType.START_TO_START: lambda succ, node, lag: succ.latest_start - lag + node.duration,
    DependencyType.FINISH_TO_FINISH: lambda succ, node, lag: succ.latest_finish - lag,
    DependencyType.START_TO_FINISH: lambda succ, node, lag: succ.latest_finish - lag + node.duration,
}


def run_forward_pass(graph: ScheduleGraph, topo_order: List[Node]) -> int:
    """
    Earliest times in topological order.

    Returns the project duration: the largest earliest finish among sinks.
    """
    for node in topo_order:
        incoming = graph.incoming(node.id)
        if not incoming:
            node.earliest_start = 0
        else:
            node.earliest_start = max(
                FORWARD_CONSTRAINTS[edge.dependency_type](graph.nodes[edge.source_id], node, edge.lag_days)
                for edge in incoming
            )
        node.earliest_finish = node.earliest_start + node.duration

    return max((node.earliest_finish for node in graph.sinks()), default=0)


def run_backward_pass(graph: ScheduleGraph, topo_order: List[Node], project_duration: int) -> None:
    """Latest times in reverse topological order, sinks anchored at project_duration."""
    for node in reversed(topo_order):
        outgoing = graph.outgoing(node.id)
        if not outgoing:
            node.latest_finish = project_duration
        else:
            node.latest_finish = min(
                BACKWARD_CONSTRAINTS[edge.dependency_type](graph.nodes[edge.target_id], node, edge.lag_days)
                for edge in outgoing
            )
        node.latest_start = node.latest_finish - node.duration


__all__ = [
    "FORWARD_CONSTRAINTS",
    "BACKWARD_CONSTRAINTS",
    "run_forward_pass",
    "run_backward_pass",
]
