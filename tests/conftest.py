# tests/conftest.py
import logging
from datetime import date, timedelta

import pytest

from core.domain.enums import DependencyType, NodeKind
from core.domain.planning import Activity, ActivityDependency, Milestone
from infra.services import build_services
from infra.snapshot import ProjectSnapshot

PROJECT_ID = "proj-1"
PLAN_ORIGIN = date(2026, 3, 1)


def activity(activity_id: str, days: int | None = None, offset: int = 0, **extra) -> Activity:
    """Activity planned `days` long, starting `offset` days after the plan origin."""
    if days is None:
        return Activity(id=activity_id, project_id=PROJECT_ID, title=activity_id, **extra)
    start = PLAN_ORIGIN + timedelta(days=offset)
    return Activity(
        id=activity_id,
        project_id=PROJECT_ID,
        title=activity_id,
        planned_start=start,
        planned_end=start + timedelta(days=days),
        **extra,
    )


def milestone(milestone_id: str, **extra) -> Milestone:
    return Milestone(id=milestone_id, project_id=PROJECT_ID, title=milestone_id, **extra)


def dep(
    source: str,
    target: str,
    dependency_type: DependencyType = DependencyType.FINISH_TO_START,
    lag_days: int = 0,
    source_kind: NodeKind = NodeKind.ACTIVITY,
    target_kind: NodeKind = NodeKind.ACTIVITY,
) -> ActivityDependency:
    return ActivityDependency(
        id=f"dep-{source}-{target}",
        project_id=PROJECT_ID,
        source_id=source,
        target_id=target,
        source_kind=source_kind,
        target_kind=target_kind,
        dependency_type=dependency_type,
        lag_days=lag_days,
    )


@pytest.fixture
def snapshot():
    return ProjectSnapshot(
        project_id=PROJECT_ID,
        activities=[
            activity("brief", 5),
            activity("leidraad", 10),
            activity("review", 3),
            activity("other-project-task", 4),
        ],
        milestones=[milestone("publicatie")],
        dependencies=[dep("brief", "review")],
    )


@pytest.fixture
def services(snapshot):
    # Same wiring the CLI uses, over an in-memory snapshot
    snapshot.activity_repo.get("other-project-task").project_id = "proj-2"
    return build_services(snapshot)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # setup_logging() replaces root handlers; keep that from leaking across tests
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
