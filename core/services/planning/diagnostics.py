from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from core.domain.enums import DependencyType, NodeKind
from core.domain.planning import Activity, ActivityDependency, Milestone
from core.exceptions import CyclicGraphError, ValidationError
from core.interfaces import ActivityRepository, DependencyRepository, MilestoneRepository
from core.services.scheduling.cycles import find_candidate_cycles
from core.services.scheduling.engine import calculate_critical_path
from core.services.scheduling.models import CPMResult


@dataclass
class DependencyImpactRow:
    node_id: str
    title: str
    before_start: int
    after_start: int
    before_finish: int
    after_finish: int

    @property
    def start_shift_days(self) -> int:
        return self.after_start - self.before_start

    @property
    def finish_shift_days(self) -> int:
        return self.after_finish - self.before_finish


@dataclass
class DependencyDiagnostic:
    is_valid: bool
    code: str
    summary: str
    detail: str
    source_id: str
    target_id: str
    dependency_type: DependencyType
    lag_days: int
    cycle_path: List[str] = field(default_factory=list)
    impact_rows: List[DependencyImpactRow] = field(default_factory=list)
    duration_before: Optional[int] = None
    duration_after: Optional[int] = None

    @property
    def message(self) -> str:
        if self.detail:
            return f"{self.summary}\n{self.detail}"
        return self.summary


class DependencyDiagnosticsMixin:
    _activity_repo: ActivityRepository
    _milestone_repo: MilestoneRepository
    _dependency_repo: DependencyRepository

    def get_dependency_diagnostics(
        self,
        project_id: str,
        source_id: str,
        target_id: str,
        source_kind: NodeKind = NodeKind.ACTIVITY,
        target_kind: NodeKind = NodeKind.ACTIVITY,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
        include_impact: bool = False,
    ) -> DependencyDiagnostic:
        try:
            dependency_type = DependencyType.parse(dependency_type)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown dependency type {dependency_type!r}; use FS, SS, FF or SF.",
                code="DEPENDENCY_TYPE_INVALID",
            ) from exc
        try:
            source_kind, target_kind = NodeKind(source_kind), NodeKind(target_kind)
        except ValueError as exc:
            raise ValidationError(
                "Dependency endpoints must be an activity or a milestone.",
                code="NODE_KIND_INVALID",
            ) from exc

        def invalid(code: str, summary: str, detail: str = "", cycle_path: List[str] | None = None):
            return DependencyDiagnostic(
                is_valid=False,
                code=code,
                summary=summary,
                detail=detail,
                source_id=source_id,
                target_id=target_id,
                dependency_type=dependency_type,
                lag_days=lag_days,
                cycle_path=cycle_path or [],
            )

        if source_id == target_id:
            return invalid(
                "DEPENDENCY_SELF",
                "An activity or milestone cannot depend on itself.",
                "Select two different items for source and target.",
            )

        source = self._resolve_node(source_id, source_kind)
        target = self._resolve_node(target_id, target_kind)
        for label, node_id, kind, node in (
            ("Source", source_id, source_kind, source),
            ("Target", target_id, target_kind, target),
        ):
            if node is None:
                return invalid(*self._endpoint_problem(label, node_id, kind))
        if source.project_id != project_id or target.project_id != project_id:
            return invalid(
                "DEPENDENCY_CROSS_PROJECT",
                "Dependencies are only allowed within one project.",
                f"Source belongs to '{source.project_id}', target to '{target.project_id}'.",
            )

        deps = self._dependency_repo.list_by_project(project_id)
        if any(d.source_id == source_id and d.target_id == target_id for d in deps):
            return invalid(
                "DEPENDENCY_DUPLICATE",
                "Dependency already exists.",
                "The selected source->target relationship already exists.",
            )

        cycles = find_candidate_cycles(deps, source_id, target_id)
        if cycles:
            cycle = next((c for c in cycles if source_id in c and target_id in c), cycles[0])
            titles = self._titles_by_id(project_id)
            names = [titles.get(node_id, node_id) for node_id in cycle]
            return invalid(
                "DEPENDENCY_CYCLE",
                "This link would create a circular dependency.",
                f"Cycle path: {' -> '.join([*names, names[0]])}",
                cycle_path=cycle,
            )

        diagnostic = DependencyDiagnostic(
            is_valid=True,
            code="DEPENDENCY_VALID",
            summary="Dependency is valid.",
            detail="",
            source_id=source_id,
            target_id=target_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
        )
        if include_impact:
            proposed = ActivityDependency.create(
                project_id=project_id,
                source_id=source_id,
                target_id=target_id,
                source_kind=source_kind,
                target_kind=target_kind,
                dependency_type=dependency_type,
                lag_days=lag_days,
            )
            self._attach_impact(diagnostic, project_id, deps, proposed)
        return diagnostic

    def _endpoint_problem(self, label: str, node_id: str, kind: NodeKind) -> tuple[str, str, str]:
        other = NodeKind.ACTIVITY if kind == NodeKind.MILESTONE else NodeKind.MILESTONE
        if self._resolve_node(node_id, other) is not None:
            return (
                "DEPENDENCY_KIND_MISMATCH",
                f"{label} '{node_id}' is a {other.value}, not a {kind.value}.",
                f"Set the {label.lower()} kind to '{other.value}'.",
            )
        return (
            "NODE_NOT_FOUND",
            f"{label} {kind.value} not found.",
            f"No {kind.value} with id '{node_id}' exists.",
        )

    def _resolve_node(self, node_id: str, kind: NodeKind) -> Activity | Milestone | None:
        if NodeKind(kind) == NodeKind.MILESTONE:
            return self._milestone_repo.get(node_id)
        return self._activity_repo.get(node_id)

    def _titles_by_id(self, project_id: str) -> Dict[str, str]:
        titles = {a.id: a.title for a in self._activity_repo.list_by_project(project_id)}
        titles.update({m.id: m.title for m in self._milestone_repo.list_by_project(project_id)})
        return titles

    def _attach_impact(
        self,
        diagnostic: DependencyDiagnostic,
        project_id: str,
        deps: List[ActivityDependency],
        proposed: ActivityDependency,
    ) -> None:
        activities = self._activity_repo.list_by_project(project_id)
        milestones = self._milestone_repo.list_by_project(project_id)
        try:
            before = calculate_critical_path(activities, milestones, deps)
        except CyclicGraphError as exc:
            diagnostic.detail = f"Current schedule cannot be computed: {exc}"
            return
        after = calculate_critical_path(activities, milestones, [*deps, proposed])

        diagnostic.impact_rows = _impact_rows(before, after)
        diagnostic.duration_before = before.project_duration
        diagnostic.duration_after = after.project_duration
        if not diagnostic.impact_rows:
            diagnostic.summary = "Dependency is valid. No schedule shift detected."
            return

        max_shift = max(
            max(abs(row.start_shift_days), abs(row.finish_shift_days))
            for row in diagnostic.impact_rows
        )
        diagnostic.summary = f"Dependency is valid. {len(diagnostic.impact_rows)} item(s) would shift."
        diagnostic.detail = (
            f"Maximum predicted shift: {max_shift} day(s). "
            f"Project duration {before.project_duration} -> {after.project_duration} day(s)."
        )


def _impact_rows(before: CPMResult, after: CPMResult) -> List[DependencyImpactRow]:
    rows: List[DependencyImpactRow] = []
    for node_id, new in after.nodes.items():
        old = before.nodes.get(node_id)
        if old is None:
            continue
        if old.earliest_start == new.earliest_start and old.earliest_finish == new.earliest_finish:
            continue
        rows.append(
            DependencyImpactRow(
                node_id=node_id,
                title=new.title,
                before_start=old.earliest_start,
                after_start=new.earliest_start,
                before_finish=old.earliest_finish,
                after_finish=new.earliest_finish,
            )
        )
    rows.sort(key=lambda row: (-abs(row.finish_shift_days), row.node_id))
    return rows


__all__ = ["DependencyImpactRow", "DependencyDiagnostic", "DependencyDiagnosticsMixin"]
