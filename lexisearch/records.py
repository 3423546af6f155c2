"""
Key records: the units that get indexed.

A key record has a stable integer id, a size (document length used by
ranking) and the keys it is indexed under, one entry per occurrence.
"""

from __future__ import annotations

from typing import Generic, Hashable, Iterable, Iterator, Protocol, Sequence, TypeVar, runtime_checkable

K = TypeVar("K", bound=Hashable, covariant=True)
R = TypeVar("R", bound="KeyRecord")


@runtime_checkable
class KeyRecord(Protocol[K]):
    record_id: int

    @property
    def size(self) -> int: ...

    def keys(self) -> Sequence[K]: ...


class KeyRecordSet(Generic[R]):
    """
    Finite collection of key records with O(1) lookup by record id.
    Iteration follows insertion order.
    """

    def __init__(self, records: Iterable[R] = ()) -> None:
        self._records: dict[int, R] = {}
        for record in records:
            self.add(record)

    def add(self, record: R) -> None:
        if record.record_id in self._records:
            raise ValueError(f"Duplicate record id: {record.record_id}")
        self._records[record.record_id] = record

    def get_record_by_id(self, record_id: int) -> R:
        """Raises KeyError for an unknown id."""
        return self._records[record_id]

    def __iter__(self) -> Iterator[R]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: int) -> bool:
        return record_id in self._records
