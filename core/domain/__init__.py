from core.domain.enums import DependencyType, NodeKind
from core.domain.planning import Activity, ActivityDependency, Milestone, PlanDate, generate_id

__all__ = [
    "generate_id",
    "NodeKind",
    "DependencyType",
    "PlanDate",
    "Activity",
    "Milestone",
    "ActivityDependency",
]
