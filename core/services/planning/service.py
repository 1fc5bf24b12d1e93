from __future__ import annotations

import logging
from typing import List, Set

from core.domain.enums import DependencyType, NodeKind
from core.domain.planning import ActivityDependency
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import ActivityRepository, DependencyRepository, MilestoneRepository
from core.services.planning.diagnostics import DependencyDiagnosticsMixin
from core.services.scheduling.engine import calculate_critical_path
from core.services.scheduling.models import CPMResult

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NODE_NOT_FOUND"}
_RULE_CODES = {"DEPENDENCY_CYCLE", "DEPENDENCY_DUPLICATE"}

MIN_LAG_DAYS = -365
MAX_LAG_DAYS = 365


class PlanningService(DependencyDiagnosticsMixin):
    """
    Hosting layer around the CPM engine.

    Fetches a project's activities, milestones and dependencies through the
    repositories, runs the engine on that snapshot, and guards dependency
    inserts against cycles. The engine never sees a repository.
    """

    def __init__(
        self,
        activity_repo: ActivityRepository,
        milestone_repo: MilestoneRepository,
        dependency_repo: DependencyRepository,
    ):
        self._activity_repo: ActivityRepository = activity_repo
        self._milestone_repo: MilestoneRepository = milestone_repo
        self._dependency_repo: DependencyRepository = dependency_repo

    def calculate_project_schedule(self, project_id: str) -> CPMResult:
        activities = self._activity_repo.list_by_project(project_id)
        milestones = self._milestone_repo.list_by_project(project_id)
        deps = self._dependency_repo.list_by_project(project_id)
        logger.debug(
            "Scheduling project %s: %d activities, %d milestones, %d dependencies.",
            project_id,
            len(activities),
            len(milestones),
            len(deps),
        )
        return calculate_critical_path(activities, milestones, deps)

    def critical_node_ids(self, project_id: str) -> Set[str]:
        return set(self.calculate_project_schedule(project_id).critical_ids)

    def add_dependency(
        self,
        project_id: str,
        source_id: str,
        target_id: str,
        source_kind: NodeKind = NodeKind.ACTIVITY,
        target_kind: NodeKind = NodeKind.ACTIVITY,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> ActivityDependency:
        if isinstance(lag_days, bool) or not isinstance(lag_days, int):
            raise ValidationError("Lag must be a whole number of days.", code="DEPENDENCY_LAG_INVALID")
        if not MIN_LAG_DAYS <= lag_days <= MAX_LAG_DAYS:
            raise ValidationError(
                f"Lag must be between {MIN_LAG_DAYS} and {MAX_LAG_DAYS} days.",
                code="DEPENDENCY_LAG_INVALID",
            )

        diagnostic = self.get_dependency_diagnostics(
            project_id=project_id,
            source_id=source_id,
            target_id=target_id,
            source_kind=source_kind,
            target_kind=target_kind,
            dependency_type=dependency_type,
            lag_days=lag_days,
        )
        if not diagnostic.is_valid:
            logger.info("Rejected dependency %s -> %s: %s", source_id, target_id, diagnostic.code)
            if diagnostic.code in _NOT_FOUND_CODES:
                raise NotFoundError(diagnostic.message, code=diagnostic.code)
            if diagnostic.code in _RULE_CODES:
                raise BusinessRuleError(diagnostic.message, code=diagnostic.code)
            raise ValidationError(diagnostic.message, code=diagnostic.code)

        dep = ActivityDependency.create(
            project_id=project_id,
            source_id=source_id,
            target_id=target_id,
            source_kind=NodeKind(source_kind),
            target_kind=NodeKind(target_kind),
            dependency_type=diagnostic.dependency_type,
            lag_days=lag_days,
        )
        self._dependency_repo.add(dep)
        logger.info(
            "Added %s dependency %s -> %s (lag %d).",
            dep.dependency_type.value,
            dep.source_id,
            dep.target_id,
            dep.lag_days,
        )
        return dep

    def remove_dependency(self, dependency_id: str) -> None:
        dep = self._dependency_repo.get(dependency_id)
        if not dep:
            raise NotFoundError("Dependency not found.", code="DEPENDENCY_NOT_FOUND")
        self._dependency_repo.delete(dependency_id)
        logger.info("Removed dependency %s (%s -> %s).", dep.id, dep.source_id, dep.target_id)

    def list_dependencies(self, project_id: str) -> List[ActivityDependency]:
        return self._dependency_repo.list_by_project(project_id)


__all__ = ["PlanningService"]
