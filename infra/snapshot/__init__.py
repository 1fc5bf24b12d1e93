from infra.snapshot.repository import (
    DEFAULT_PROJECT_ID,
    ProjectSnapshot,
    SnapshotActivityRepository,
    SnapshotDependencyRepository,
    SnapshotMilestoneRepository,
)

__all__ = [
    "DEFAULT_PROJECT_ID",
    "ProjectSnapshot",
    "SnapshotActivityRepository",
    "SnapshotMilestoneRepository",
    "SnapshotDependencyRepository",
]
