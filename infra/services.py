from __future__ import annotations

from pathlib import Path
from typing import Any

from core.services.planning import PlanningService
from infra.snapshot import ProjectSnapshot


def build_services(snapshot: ProjectSnapshot) -> dict[str, Any]:
    planning_service = PlanningService(
        snapshot.activity_repo,
        snapshot.milestone_repo,
        snapshot.dependency_repo,
    )
    return {
        "snapshot": snapshot,
        "planning_service": planning_service,
    }


def build_services_from_file(path: str | Path) -> dict[str, Any]:
    return build_services(ProjectSnapshot.load(path))


__all__ = ["build_services", "build_services_from_file"]
