"""
Record types held by the three registry stores.

Records are immutable: an update replaces the record under its key,
it never mutates one in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

MAX_DESCRIPTION_LENGTH = 100
MIN_PRIORITY = 1
MAX_PRIORITY = 3


def _field(data: dict[str, Any], key: str, kind: type, default: Any = None) -> Any:
    """Read a decoded field, requiring an exact JSON type (bool is not an int)."""
    if key not in data:
        if default is None:
            raise ValueError(f"missing field: {key}")
        return default
    value = data[key]
    if kind is int and isinstance(value, bool):
        raise ValueError(f"{key} must be an integer (got {value!r})")
    if not isinstance(value, kind):
        raise ValueError(f"{key} must be {kind.__name__} (got {value!r})")
    return value


@dataclass(frozen=True)
class CommitmentRecord:
    """A personal objective and its completion flag."""

    description: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {"description": self.description, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CommitmentRecord:
        """Reconstruct from JSON dict, rejecting values no operation could store."""
        description = _field(data, "description", str)
        if not 0 < len(description) <= MAX_DESCRIPTION_LENGTH:
            raise ValueError(f"description must be 1-{MAX_DESCRIPTION_LENGTH} characters")
        return cls(
            description=description,
            completed=_field(data, "completed", bool, False),
        )


@dataclass(frozen=True)
class PriorityRecord:
    weight: int

    def to_dict(self) -> dict[str, Any]:
        return {"weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PriorityRecord:
        weight = _field(data, "weight", int)
        if not MIN_PRIORITY <= weight <= MAX_PRIORITY:
            raise ValueError(f"weight must be between {MIN_PRIORITY} and {MAX_PRIORITY} (got {weight})")
        return cls(weight=weight)


@dataclass(frozen=True)
class DeadlineRecord:
    """
    Deadline expressed in logical clock units.

    alert_armed is stored for an external notifier to read; nothing in
    this package ever sets it True.
    """

    deadline: int
    alert_armed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"deadline": self.deadline, "alert_armed": self.alert_armed}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeadlineRecord:
        return cls(
            deadline=_field(data, "deadline", int),
            alert_armed=_field(data, "alert_armed", bool, False),
        )


@dataclass(frozen=True)
class QueryResult:
    """What query() reports: presence, description length and completion."""

    exists: bool
    description_length: int
    completed: bool

    @classmethod
    def absent(cls) -> QueryResult:
        return cls(exists=False, description_length=0, completed=False)

    @classmethod
    def of(cls, record: CommitmentRecord) -> QueryResult:
        return cls(
            exists=True,
            description_length=len(record.description),
            completed=record.completed,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "exists": self.exists,
            "description_length": self.description_length,
            "completed": self.completed,
        }
