from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    ACTIVITY = "activity"
    MILESTONE = "milestone"


class DependencyType(str, Enum):
    FINISH_TO_START = "finish_to_start"
    START_TO_START = "start_to_start"
    FINISH_TO_FINISH = "finish_to_finish"
    START_TO_FINISH = "start_to_finish"

    @classmethod
    def parse(cls, value: "DependencyType | str | None") -> "DependencyType":
        """
        Accepts enum members, full names ("finish_to_start") and the
        short codes used on planning boards ("FS", "SS", "FF", "SF").
        Missing values default to finish-to-start.
        """
        if value is None or value == "":
            return cls.FINISH_TO_START
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        short = _SHORT_CODES.get(normalized.upper())
        if short is not None:
            return short
        return cls(normalized)

    @property
    def short_code(self) -> str:
        return _CODES_BY_TYPE[self]


_SHORT_CODES = {
    "FS": DependencyType.FINISH_TO_START,
    "SS": DependencyType.START_TO_START,
    "FF": DependencyType.FINISH_TO_FINISH,
    "SF": DependencyType.START_TO_FINISH,
}
_CODES_BY_TYPE = {dep_type: code for code, dep_type in _SHORT_CODES.items()}


__all__ = ["NodeKind", "DependencyType"]
