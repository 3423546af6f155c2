"""
Posting, inverted list and inverted index data structures.

A posting represents a key's occurrence in a record: record id, term
frequency and a relevance score filled in by ranking.
An inverted list holds the postings of one key, deduplicated and sorted by
record id. The inverted index maps keys to their inverted lists.
"""

from __future__ import annotations

from bisect import insort
from dataclasses import dataclass, field
from typing import Generic, Hashable, Iterable, Iterator, TypeVar

# Term frequency of a freshly created posting
DEFAULT_TERM_FREQUENCY = 1

# Score of a posting that has not been ranked yet
DEFAULT_SCORE = 0.0

K = TypeVar("K", bound=Hashable)


@dataclass(order=True, unsafe_hash=True)
class Posting:
    """
    Represents a key's occurrence in a record.
    - record_id: record identifier, never reassigned after creation
    - term_frequency: how often the key occurs in the record
    - score: relevance score, set by ranking

    Ordering, equality and hash only look at record_id, so a stale posting
    equals a fresh one for the same record.
    """

    record_id: int
    term_frequency: int = field(default=DEFAULT_TERM_FREQUENCY, compare=False)
    score: float = field(default=DEFAULT_SCORE, compare=False)

    def increase_frequency(self) -> None:
        self.term_frequency += 1

    def __repr__(self) -> str:
        return (
            f"Posting(record_id={self.record_id!r}, "
            f"term_frequency={self.term_frequency}, score={self.score})"
        )


class InvertedList:
    """
    Postings of a single key, one per record, kept in ascending record id order.
    """

    def __init__(self) -> None:
        self._postings: dict[int, Posting] = {}
        self._sorted_ids: list[int] = []

    def add_record(self, record_id: int) -> bool:
        """
        Insert a default posting for record_id, or bump its frequency if the
        record is already present. Returns True only for a new insertion.
        """
        posting = self._postings.get(record_id)
        if posting is not None:
            posting.increase_frequency()
            return False
        self._postings[record_id] = Posting(record_id)
        insort(self._sorted_ids, record_id)
        return True

    def contains_record(self, record_id: int) -> bool:
        return record_id in self._postings

    def contains_any(self, record_ids: Iterable[int]) -> bool:
        """True if at least one of record_ids is in this list."""
        return any(record_id in self._postings for record_id in record_ids)

    def get_posting(self, record_id: int) -> Posting | None:
        return self._postings.get(record_id)

    def get_postings(self) -> Iterator[Posting]:
        """Iterate over the postings in ascending record id order."""
        return (self._postings[record_id] for record_id in self._sorted_ids)

    def record_ids(self) -> Iterator[int]:
        return iter(self._sorted_ids)

    def size(self) -> int:
        return len(self._sorted_ids)

    def __len__(self) -> int:
        return len(self._sorted_ids)

    def __iter__(self) -> Iterator[Posting]:
        return self.get_postings()

    def __contains__(self, record_id: int) -> bool:
        return record_id in self._postings

    def __repr__(self) -> str:
        return f"InvertedList({self._sorted_ids!r})"


class InvertedIndex(Generic[K]):
    """
    Inverted index: map from key -> inverted list.
    A key only appears once a record has been added under it, so every
    list reachable through the index is non-empty.
    """

    def __init__(self) -> None:
        self._index: dict[K, InvertedList] = {}

    def add_record(self, key: K, record_id: int) -> bool:
        """
        Register one occurrence of key in record_id.
        Returns True if the record is new to the key's list.
        """
        records = self._index.get(key)
        if records is None:
            records = InvertedList()
            self._index[key] = records
        return records.add_record(record_id)

    def contains_key(self, key: K) -> bool:
        return key in self._index

    def contains_record(self, key: K, record_id: int) -> bool:
        records = self._index.get(key)
        return records is not None and records.contains_record(record_id)

    def get_keys(self) -> Iterator[K]:
        """Iterate over all keys in the index (no particular order)."""
        return iter(self._index)

    def get_records(self, key: K) -> InvertedList | None:
        """Return the inverted list for key, or None if key was never indexed."""
        return self._index.get(key)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: K) -> bool:
        return key in self._index
