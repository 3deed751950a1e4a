"""
Registry operations: the public contract over the three stores.

Every operation follows the same shape:

1. resolve the caller identity
2. check presence (or absence) of a commitment for the relevant identity
3. validate input
4. write exactly one store

Steps 1-3 raise before anything is written, so a failed operation leaves
all stores untouched.

Delegation is open: any caller may seed a commitment for any identity
that has none. There is no authorization check beyond target absence.
"""

from __future__ import annotations

import logging
from typing import Any

from .collaborators import IdentityResolver, LogicalClock
from .errors import EntityNotFound, InvalidInput, RecordCollision
from .records import (
    MAX_DESCRIPTION_LENGTH,
    MAX_PRIORITY,
    MIN_PRIORITY,
    CommitmentRecord,
    DeadlineRecord,
    PriorityRecord,
    QueryResult,
)
from .stores import RegistryStores

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


def _validate_description(description: Any, identity: str) -> str:
    if not isinstance(description, str):
        raise InvalidInput("description must be text", field="description", identity=identity)
    # Empty is rejected before the length bound is considered.
    if description == "":
        raise InvalidInput("description must not be empty", field="description", identity=identity)
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise InvalidInput(
            f"description exceeds {MAX_DESCRIPTION_LENGTH} characters ({len(description)})",
            field="description",
            identity=identity,
        )
    return description


def _validate_completed(completed: Any, identity: str) -> bool:
    if not isinstance(completed, bool):
        raise InvalidInput("completed must be true or false", field="completed", identity=identity)
    return completed


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_weight(weight: Any, identity: str) -> int:
    if not _is_integer(weight) or not (MIN_PRIORITY <= weight <= MAX_PRIORITY):
        raise InvalidInput(
            f"priority must be between {MIN_PRIORITY} and {MAX_PRIORITY} (got {weight!r})",
            field="weight",
            identity=identity,
        )
    return weight


def _validate_window(window: Any, identity: str) -> int:
    if not _is_integer(window) or window <= 0:
        raise InvalidInput(
            f"deadline window must be a positive integer (got {window!r})",
            field="window",
            identity=identity,
        )
    return window


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------


class CommitmentRegistry:
    """
    Per-identity commitment registry.

    Operations assume the host applies them one at a time; there is no
    internal locking.
    """

    def __init__(
        self,
        identity: IdentityResolver,
        clock: LogicalClock,
        *,
        stores: RegistryStores | None = None,
    ):
        """
        Initialize registry.

        Args:
            identity: Resolves the caller of each operation
            clock: Logical clock read by set_deadline()
            stores: Existing state to operate on (fresh empty stores if None)
        """
        self.identity = identity
        self.clock = clock
        self.stores = stores if stores is not None else RegistryStores()

    def _require_commitment(self, identity: str) -> CommitmentRecord:
        record = self.stores.commitments.get(identity)
        if record is None:
            raise EntityNotFound(f"no commitment for {identity}", identity=identity)
        return record

    def _require_absent(self, identity: str) -> None:
        if identity in self.stores.commitments:
            raise RecordCollision(f"commitment already exists for {identity}", identity=identity)

    # --- Commitment store -------------------------------------------------

    def create(self, description: str) -> str:
        """Create a commitment for the caller."""
        caller = self.identity.resolve()
        self._require_absent(caller)
        description = _validate_description(description, caller)

        self.stores.commitments.put(caller, CommitmentRecord(description=description))
        logger.debug(f"commitment created for {caller}")
        return "Commitment created"

    def modify(self, description: str, completed: bool) -> str:
        """Overwrite the caller's description and completion flag together."""
        caller = self.identity.resolve()
        self._require_commitment(caller)
        description = _validate_description(description, caller)
        completed = _validate_completed(completed, caller)

        self.stores.commitments.put(
            caller, CommitmentRecord(description=description, completed=completed)
        )
        logger.debug(f"commitment modified for {caller} (completed={completed})")
        return "Commitment updated"

    def delete(self) -> str:
        """
        Remove the caller's commitment.

        Priority and deadline records for the caller stay in their stores.
        """
        caller = self.identity.resolve()
        self._require_commitment(caller)

        self.stores.commitments.remove(caller)
        logger.debug(f"commitment deleted for {caller}")
        return "Commitment deleted"

    def delegate_create(self, target: str, description: str) -> str:
        """
        Create a commitment under another identity.

        Only the target's state matters: the caller may or may not hold a
        commitment of its own and gains nothing from the call.
        """
        caller = self.identity.resolve()
        self._require_absent(target)
        description = _validate_description(description, target)

        self.stores.commitments.put(target, CommitmentRecord(description=description))
        logger.debug(f"commitment delegated by {caller} to {target}")
        return f"Commitment created for {target}"

    def query(self) -> QueryResult:
        """Report whether the caller has a commitment, its length and completion."""
        caller = self.identity.resolve()
        record = self.stores.commitments.get(caller)
        if record is None:
            return QueryResult.absent()
        return QueryResult.of(record)

    # --- Priority store ---------------------------------------------------

    def set_priority(self, weight: int) -> str:
        caller = self.identity.resolve()
        self._require_commitment(caller)
        weight = _validate_weight(weight, caller)

        self.stores.priorities.put(caller, PriorityRecord(weight=weight))
        logger.debug(f"priority {weight} set for {caller}")
        return f"Priority set to {weight}"

    # --- Deadline store ---------------------------------------------------

    def set_deadline(self, window: int) -> str:
        """
        Set the caller's deadline to the current clock value plus window.

        The alert flag is always written False.
        """
        caller = self.identity.resolve()
        self._require_commitment(caller)
        window = _validate_window(window, caller)

        deadline = self.clock.current() + window
        self.stores.deadlines.put(caller, DeadlineRecord(deadline=deadline, alert_armed=False))
        logger.debug(f"deadline {deadline} set for {caller}")
        return f"Deadline set to {deadline}"
