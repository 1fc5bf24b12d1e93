from .diagnostics import DependencyDiagnostic, DependencyImpactRow
from .service import PlanningService

__all__ = ["PlanningService", "DependencyDiagnostic", "DependencyImpactRow"]
