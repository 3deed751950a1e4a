"""
Error kinds raised by registry operations.

Every failure is terminal: the operation raises before any store is
written, so the caller observes either the full effect or none of it.
"""

from __future__ import annotations

ENTITY_NOT_FOUND = "EntityNotFound"
RECORD_COLLISION = "RecordCollision"
INVALID_INPUT = "InvalidInput"


class RegistryError(Exception):
    """Base class for registry operation failures."""

    kind: str = "RegistryError"

    def __init__(self, message: str, *, identity: str | None = None):
        super().__init__(message)
        self.identity = identity


class EntityNotFound(RegistryError, LookupError):
    """The operation needs a commitment for the identity and none exists."""

    kind = ENTITY_NOT_FOUND


class RecordCollision(RegistryError):
    """The operation needs the identity to have no commitment, but it has one."""

    kind = RECORD_COLLISION


class InvalidInput(RegistryError, ValueError):
    """A supplied value violates a stated constraint."""

    kind = INVALID_INPUT

    def __init__(self, message: str, *, field: str, identity: str | None = None):
        super().__init__(message, identity=identity)
        self.field = field
