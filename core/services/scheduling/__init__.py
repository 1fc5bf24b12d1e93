from .cycles import detect_cycles, would_create_cycle
from .engine import calculate_critical_path
from .graph import activity_duration, build_schedule_graph
from .models import CPMResult, Edge, Node, ScheduleGraph
from .topology import topological_sort

__all__ = [
    "calculate_critical_path",
    "build_schedule_graph",
    "activity_duration",
    "detect_cycles",
    "would_create_cycle",
    "topological_sort",
    "CPMResult",
    "Edge",
    "Node",
    "ScheduleGraph",
]
