"""
Keyed stores for commitment, priority and deadline records.

Each store maps identity -> record and knows nothing about the others.
Co-location by identity is the only relationship between them: removing
a commitment never touches the priority or deadline stores.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterator, TypeVar

from .records import CommitmentRecord, DeadlineRecord, PriorityRecord

TRecord = TypeVar("TRecord", CommitmentRecord, PriorityRecord, DeadlineRecord)


class KeyedStore(Generic[TRecord]):
    """
    Identity-keyed container holding at most one record per identity.

    Reads are open to anyone holding the store. Writes are made by
    CommitmentRegistry, which validates before calling put()/remove().
    """

    def __init__(self, name: str, decode: Callable[[dict[str, Any]], TRecord]):
        self.name = name
        self._decode = decode
        self._records: dict[str, TRecord] = {}

    def get(self, identity: str) -> TRecord | None:
        return self._records.get(identity)

    def put(self, identity: str, record: TRecord) -> None:
        """Insert or replace the record stored under identity."""
        self._records[identity] = record

    def remove(self, identity: str) -> TRecord:
        """Remove and return the record under identity (KeyError if absent)."""
        return self._records.pop(identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._records))

    def items(self) -> Iterator[tuple[str, TRecord]]:
        """Iterate (identity, record) pairs in identity order."""
        for identity in sorted(self._records):
            yield identity, self._records[identity]

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Serialize to JSON-compatible dict keyed by identity."""
        return {identity: record.to_dict() for identity, record in self.items()}

    def load(self, data: dict[str, dict[str, Any]]) -> None:
        """Replace the contents with records decoded from to_dict() output."""
        self._records = {identity: self._decode(raw) for identity, raw in data.items()}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {len(self)} records)"


class CommitmentStore(KeyedStore[CommitmentRecord]):
    def __init__(self) -> None:
        super().__init__("commitments", CommitmentRecord.from_dict)


class PriorityStore(KeyedStore[PriorityRecord]):
    def __init__(self) -> None:
        super().__init__("priorities", PriorityRecord.from_dict)


class DeadlineStore(KeyedStore[DeadlineRecord]):
    def __init__(self) -> None:
        super().__init__("deadlines", DeadlineRecord.from_dict)


@dataclass
class RegistryStores:
    """The three stores that make up registry state."""

    commitments: CommitmentStore = field(default_factory=CommitmentStore)
    priorities: PriorityStore = field(default_factory=PriorityStore)
    deadlines: DeadlineStore = field(default_factory=DeadlineStore)

    def all(self) -> tuple[KeyedStore[Any], ...]:
        return (self.commitments, self.priorities, self.deadlines)

    def to_dict(self) -> dict[str, dict[str, dict[str, Any]]]:
        """Serialize every store, keyed by store name."""
        return {store.name: store.to_dict() for store in self.all()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegistryStores:
        """Rebuild stores from to_dict() output; missing stores start empty."""
        stores = cls()
        for store in stores.all():
            raw = data.get(store.name) or {}
            if not isinstance(raw, dict):
                raise ValueError(f"{store.name} must be an object keyed by identity")
            store.load(raw)
        return stores
