# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain.planning import Activity, ActivityDependency, Milestone


class ActivityRepository(ABC):
    @abstractmethod
    def get(self, activity_id: str) -> Optional[Activity]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Activity]: ...


class MilestoneRepository(ABC):
    @abstractmethod
    def get(self, milestone_id: str) -> Optional[Milestone]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Milestone]: ...


class DependencyRepository(ABC):
    @abstractmethod
    def add(self, dependency: ActivityDependency) -> None: ...

    @abstractmethod
    def get(self, dependency_id: str) -> Optional[ActivityDependency]: ...

    @abstractmethod
    def delete(self, dependency_id: str) -> None: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[ActivityDependency]: ...


__all__ = ["ActivityRepository", "MilestoneRepository", "DependencyRepository"]
