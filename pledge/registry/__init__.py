"""
Per-identity commitment registry.

Three independently keyed stores share the identity key:

- commitments: description + completion flag (gates writes to the others)
- priorities: weight in {1, 2, 3}
- deadlines: logical clock deadline + alert flag

CommitmentRegistry is the only write path. Deleting a commitment leaves
the caller's priority and deadline records in place.
"""

from .collaborators import IdentityResolver, LogicalClock, ManualClock, StaticIdentity
from .errors import EntityNotFound, InvalidInput, RecordCollision, RegistryError
from .operations import CommitmentRegistry
from .records import (
    MAX_DESCRIPTION_LENGTH,
    MAX_PRIORITY,
    MIN_PRIORITY,
    CommitmentRecord,
    DeadlineRecord,
    PriorityRecord,
    QueryResult,
)
from .stores import CommitmentStore, DeadlineStore, KeyedStore, PriorityStore, RegistryStores

__all__ = [
    # Operations
    "CommitmentRegistry",
    # Collaborators
    "IdentityResolver",
    "LogicalClock",
    "ManualClock",
    "StaticIdentity",
    # Errors
    "RegistryError",
    "EntityNotFound",
    "RecordCollision",
    "InvalidInput",
    # Records
    "CommitmentRecord",
    "PriorityRecord",
    "DeadlineRecord",
    "QueryResult",
    "MAX_DESCRIPTION_LENGTH",
    "MIN_PRIORITY",
    "MAX_PRIORITY",
    # Stores
    "KeyedStore",
    "CommitmentStore",
    "PriorityStore",
    "DeadlineStore",
    "RegistryStores",
]
