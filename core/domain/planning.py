from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union
from uuid import uuid4

from core.domain.enums import DependencyType, NodeKind

PlanDate = Union[date, datetime]


def generate_id() -> str:
    return str(uuid4())


@dataclass
class Activity:
    id: str
    project_id: str
    title: str
    planned_start: Optional[PlanDate] = None
    planned_end: Optional[PlanDate] = None

    @staticmethod
    def create(project_id: str, title: str, **extra) -> "Activity":
        return Activity(
            id=generate_id(),
            project_id=project_id,
            title=title,
            **extra,
        )


@dataclass
class Milestone:
    id: str
    project_id: str
    title: str
    target_date: Optional[date] = None

    @staticmethod
    def create(project_id: str, title: str, **extra) -> "Milestone":
        return Milestone(
            id=generate_id(),
            project_id=project_id,
            title=title,
            **extra,
        )


@dataclass
class ActivityDependency:
    id: str
    project_id: str
    source_id: str
    target_id: str
    source_kind: NodeKind = NodeKind.ACTIVITY
    target_kind: NodeKind = NodeKind.ACTIVITY
    dependency_type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = 0

    @staticmethod
    def create(
        project_id: str,
        source_id: str,
        target_id: str,
        source_kind: NodeKind = NodeKind.ACTIVITY,
        target_kind: NodeKind = NodeKind.ACTIVITY,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> "ActivityDependency":
        return ActivityDependency(
            id=generate_id(),
            project_id=project_id,
            source_id=source_id,
            target_id=target_id,
            source_kind=source_kind,
            target_kind=target_kind,
            dependency_type=dependency_type,
            lag_days=lag_days,
        )


__all__ = ["generate_id", "PlanDate", "Activity", "Milestone", "ActivityDependency"]
