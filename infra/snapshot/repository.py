from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.domain.planning import Activity, ActivityDependency, Milestone
from core.exceptions import ValidationError
from core.interfaces import ActivityRepository, DependencyRepository, MilestoneRepository
from infra.snapshot.mapper import (
    activity_from_dict,
    activity_to_dict,
    dependency_from_dict,
    dependency_to_dict,
    milestone_from_dict,
    milestone_to_dict,
)

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_ID = "default"


class SnapshotActivityRepository(ActivityRepository):
    def __init__(self, rows: Dict[str, Activity]):
        self._rows = rows

    def get(self, activity_id: str) -> Optional[Activity]:
        return self._rows.get(activity_id)

    def list_by_project(self, project_id: str) -> List[Activity]:
        return [row for row in self._rows.values() if row.project_id == project_id]


class SnapshotMilestoneRepository(MilestoneRepository):
    def __init__(self, rows: Dict[str, Milestone]):
        self._rows = rows

    def get(self, milestone_id: str) -> Optional[Milestone]:
        return self._rows.get(milestone_id)

    def list_by_project(self, project_id: str) -> List[Milestone]:
        return [row for row in self._rows.values() if row.project_id == project_id]


class SnapshotDependencyRepository(DependencyRepository):
    def __init__(self, rows: Dict[str, ActivityDependency]):
        self._rows = rows

    def add(self, dependency: ActivityDependency) -> None:
        self._rows[dependency.id] = dependency

    def get(self, dependency_id: str) -> Optional[ActivityDependency]:
        return self._rows.get(dependency_id)

    def delete(self, dependency_id: str) -> None:
        self._rows.pop(dependency_id, None)

    def list_by_project(self, project_id: str) -> List[ActivityDependency]:
        return [row for row in self._rows.values() if row.project_id == project_id]


class ProjectSnapshot:
    """
    In-memory project data backing the three repositories.

    The JSON layout is the one the planning API hands out:
    {"project_id": ..., "activities": [...], "milestones": [...], "dependencies": [...]}.
    Records without a project_id belong to the snapshot's project.
    """

    def __init__(
        self,
        project_id: str = DEFAULT_PROJECT_ID,
        activities: List[Activity] | None = None,
        milestones: List[Milestone] | None = None,
        dependencies: List[ActivityDependency] | None = None,
    ):
        self.project_id = project_id
        self._activities: Dict[str, Activity] = {a.id: a for a in activities or []}
        self._milestones: Dict[str, Milestone] = {m.id: m for m in milestones or []}
        self._dependencies: Dict[str, ActivityDependency] = {d.id: d for d in dependencies or []}
        self.activity_repo = SnapshotActivityRepository(self._activities)
        self.milestone_repo = SnapshotMilestoneRepository(self._milestones)
        self.dependency_repo = SnapshotDependencyRepository(self._dependencies)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ProjectSnapshot":
        if not isinstance(payload, dict):
            raise ValidationError("Snapshot must be a JSON object.", code="SNAPSHOT_INVALID")
        project_id = str(payload.get("project_id") or DEFAULT_PROJECT_ID)
        return cls(
            project_id=project_id,
            activities=[activity_from_dict(row, project_id) for row in payload.get("activities") or []],
            milestones=[milestone_from_dict(row, project_id) for row in payload.get("milestones") or []],
            dependencies=[dependency_from_dict(row, project_id) for row in payload.get("dependencies") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_id": self.project_id,
            "activities": [activity_to_dict(a) for a in self._activities.values()],
            "milestones": [milestone_to_dict(m) for m in self._milestones.values()],
            "dependencies": [dependency_to_dict(d) for d in self._dependencies.values()],
        }

    @classmethod
    def load(cls, path: str | Path) -> "ProjectSnapshot":
        path = Path(path)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Snapshot {path} is not valid JSON: {exc}", code="SNAPSHOT_INVALID") from exc
        snapshot = cls.from_dict(payload)
        logger.debug(
            "Loaded snapshot %s: %d activities, %d milestones, %d dependencies.",
            path,
            len(snapshot._activities),
            len(snapshot._milestones),
            len(snapshot._dependencies),
        )
        return snapshot

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)
        return path


__all__ = [
    "DEFAULT_PROJECT_ID",
    "ProjectSnapshot",
    "SnapshotActivityRepository",
    "SnapshotMilestoneRepository",
    "SnapshotDependencyRepository",
]
