from __future__ import annotations

import logging
import os


DANGLING_POLICY_WARN = "warn"
DANGLING_POLICY_IGNORE = "ignore"


def dangling_dependency_log_level() -> int:
    policy = (os.getenv("CPM_DANGLING_DEPENDENCY_POLICY", DANGLING_POLICY_WARN) or "").strip().lower()
    if policy == DANGLING_POLICY_IGNORE:
        return logging.DEBUG
    return logging.WARNING


__all__ = [
    "DANGLING_POLICY_WARN",
    "DANGLING_POLICY_IGNORE",
    "dangling_dependency_log_level",
]
