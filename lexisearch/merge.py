"""
Intersection of inverted lists for AND queries.

Each participating list gets a cursor (RecordToIteratorContainer) holding
its current record id and the forward-only iterator over its remaining ids.
The cursors sit in a binary min-heap keyed by current record id; every round
pops all cursors sharing the smallest id, emits that id when every list
agreed on it, and pushes the advanced cursors back.

Cost is O(total postings x log m) for m lists, and only one id per list is
held at a time besides the heap itself.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from .posting import InvertedList

# Tie-break for cursors on the same record id, keeps heap order deterministic
_sequence = itertools.count()


@dataclass(order=True, frozen=True)
class RecordToIteratorContainer:
    """
    Merge cursor of one inverted list: the current candidate record id plus
    the iterator over the list's remaining ids.
    """

    record_id: int
    remaining_record_ids: Iterator[int] = field(compare=False)
    sequence: int = field(default_factory=lambda: next(_sequence))

    def advance(self) -> RecordToIteratorContainer | None:
        """
        Return a new container positioned at the next remaining id, or None
        once the iterator is exhausted. The iterator is shared, not copied.
        """
        next_id = next(self.remaining_record_ids, None)
        if next_id is None:
            return None
        return RecordToIteratorContainer(next_id, self.remaining_record_ids)


def _start_container(inverted_list: InvertedList) -> RecordToIteratorContainer | None:
    record_ids = inverted_list.record_ids()
    first_id = next(record_ids, None)
    if first_id is None:
        return None
    return RecordToIteratorContainer(first_id, record_ids)


def intersect(inverted_lists: Sequence[InvertedList]) -> Iterator[int]:
    """
    Yield, in ascending order, the record ids present in every given list.

    The required match count is len(inverted_lists). Passing the same key's
    list twice is fine (both cursors advance together), but callers should
    deduplicate query terms first so that repeated terms do not distort
    results in other ways. An empty input or any empty list yields nothing.
    """
    required = len(inverted_lists)
    if required == 0:
        return

    heap: list[RecordToIteratorContainer] = []
    for inverted_list in inverted_lists:
        container = _start_container(inverted_list)
        if container is None:
            return
        heap.append(container)
    heapq.heapify(heap)

    while len(heap) >= required:
        smallest = heapq.heappop(heap)
        current_id = smallest.record_id
        popped = [smallest]
        while heap and heap[0].record_id == current_id:
            popped.append(heapq.heappop(heap))

        if len(popped) == required:
            yield current_id

        for container in popped:
            advanced = container.advance()
            if advanced is not None:
                heapq.heappush(heap, advanced)
