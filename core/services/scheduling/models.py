from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from core.domain.enums import DependencyType, NodeKind


@dataclass
class Node:
    id: str
    kind: NodeKind
    title: str
    duration: int = 0
    earliest_start: int = 0
    earliest_finish: int = 0
    latest_start: int = 0
    latest_finish: int = 0
    total_float: int = 0
    is_critical: bool = False
    predecessors: List[str] = field(default_factory=list)
    successors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Edge:
    source_id: str
    target_id: str
    dependency_type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = 0


class ScheduleGraph:
    """
    Nodes indexed by id, edges kept as adjacency lists of ids.

    predecessors/successors on each Node are maintained by add_edge only.
    """

    def __init__(self) -> None:
        self.nodes: Dict[str, Node] = {}
        self._outgoing: Dict[str, List[Edge]] = {}
        self._incoming: Dict[str, List[Edge]] = {}

    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._outgoing.setdefault(node.id, [])
        self._incoming.setdefault(node.id, [])
        return node

    def add_edge(self, edge: Edge) -> bool:
        source = self.nodes.get(edge.source_id)
        target = self.nodes.get(edge.target_id)
        if source is None or target is None:
            return False
        source.successors.append(edge.target_id)
        target.predecessors.append(edge.source_id)
        self._outgoing[edge.source_id].append(edge)
        self._incoming[edge.target_id].append(edge)
        return True

    def outgoing(self, node_id: str) -> List[Edge]:
        return self._outgoing.get(node_id, [])

    def incoming(self, node_id: str) -> List[Edge]:
        return self._incoming.get(node_id, [])

    def edges(self) -> Iterator[Edge]:
        for edges in self._outgoing.values():
            yield from edges

    def sinks(self) -> List[Node]:
        return [node for node in self.nodes.values() if not node.successors]

    def get(self, node_id: str) -> Node | None:
        return self.nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass
class CPMResult:
    nodes: Dict[str, Node]
    critical_path: List[Node]
    project_duration: int

    @property
    def critical_ids(self) -> List[str]:
        return [node.id for node in self.critical_path]


__all__ = ["Node", "Edge", "ScheduleGraph", "CPMResult"]
