from .planning import DependencyDiagnostic, DependencyImpactRow, PlanningService
from .scheduling import CPMResult, Node, calculate_critical_path, would_create_cycle

__all__ = [
    "PlanningService",
    "DependencyDiagnostic",
    "DependencyImpactRow",
    "calculate_critical_path",
    "would_create_cycle",
    "CPMResult",
    "Node",
]
