from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional

from core.domain.enums import DependencyType, NodeKind
from core.domain.planning import Activity, ActivityDependency, Milestone, PlanDate, generate_id
from core.exceptions import ValidationError


def _parse_date(value: Any, field_name: str) -> Optional[PlanDate]:
    if value in (None, ""):
        return None
    if isinstance(value, (date, datetime)):
        return value
    raw = str(value).strip()
    try:
        if "T" in raw or " " in raw:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid date for {field_name}: {value!r}",
            code="SNAPSHOT_INVALID",
        ) from exc


def _format_date(value: Optional[PlanDate]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _require(row: Mapping[str, Any], key: str, entity: str) -> Any:
    value = row.get(key)
    if value in (None, ""):
        raise ValidationError(f"{entity} record is missing '{key}'.", code="SNAPSHOT_INVALID")
    return value


def activity_from_dict(row: Mapping[str, Any], project_id: str) -> Activity:
    activity_id = str(_require(row, "id", "Activity"))
    return Activity(
        id=activity_id,
        project_id=str(row.get("project_id") or project_id),
        title=str(row.get("title") or activity_id),
        planned_start=_parse_date(row.get("planned_start"), "planned_start"),
        planned_end=_parse_date(row.get("planned_end"), "planned_end"),
    )


def activity_to_dict(activity: Activity) -> dict[str, Any]:
    return {
        "id": activity.id,
        "project_id": activity.project_id,
        "title": activity.title,
        "planned_start": _format_date(activity.planned_start),
        "planned_end": _format_date(activity.planned_end),
    }


def milestone_from_dict(row: Mapping[str, Any], project_id: str) -> Milestone:
    milestone_id = str(_require(row, "id", "Milestone"))
    return Milestone(
        id=milestone_id,
        project_id=str(row.get("project_id") or project_id),
        title=str(row.get("title") or milestone_id),
        target_date=_parse_date(row.get("target_date"), "target_date"),
    )


def milestone_to_dict(milestone: Milestone) -> dict[str, Any]:
    return {
        "id": milestone.id,
        "project_id": milestone.project_id,
        "title": milestone.title,
        "target_date": _format_date(milestone.target_date),
    }


def dependency_from_dict(row: Mapping[str, Any], project_id: str) -> ActivityDependency:
    try:
        dependency_type = DependencyType.parse(row.get("dependency_type"))
        source_kind = NodeKind(row.get("source_kind") or NodeKind.ACTIVITY.value)
        target_kind = NodeKind(row.get("target_kind") or NodeKind.ACTIVITY.value)
        lag_days = int(row.get("lag_days") or 0)
    except ValueError as exc:
        raise ValidationError(f"Invalid dependency record: {exc}", code="SNAPSHOT_INVALID") from exc
    return ActivityDependency(
        id=str(row.get("id") or generate_id()),
        project_id=str(row.get("project_id") or project_id),
        source_id=str(_require(row, "source_id", "Dependency")),
        target_id=str(_require(row, "target_id", "Dependency")),
        source_kind=source_kind,
        target_kind=target_kind,
        dependency_type=dependency_type,
        lag_days=lag_days,
    )


def dependency_to_dict(dep: ActivityDependency) -> dict[str, Any]:
    return {
        "id": dep.id,
        "project_id": dep.project_id,
        "source_id": dep.source_id,
        "source_kind": dep.source_kind.value,
        "target_id": dep.target_id,
        "target_kind": dep.target_kind.value,
        "dependency_type": dep.dependency_type.value,
        "lag_days": dep.lag_days,
    }


__all__ = [
    "activity_from_dict",
    "activity_to_dict",
    "milestone_from_dict",
    "milestone_to_dict",
    "dependency_from_dict",
    "dependency_to_dict",
]
