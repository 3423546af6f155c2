"""
BM25 ranking over a snapshot of an inverted index.

    score(key, record) = tf' * idf
    idf = log2(N / df)
    tf' = tf * (k + 1) / (k * (1 - b + b * dl / avdl) + tf)

Where:
    N    = number of records in the snapshot
    df   = number of records containing the key
    tf   = term frequency of the key in the record
    dl   = size of the record, avdl = average record size
    k    = term frequency saturation (default 1.75)
    b    = length normalization strength (default 0.75)

Usage: take_snapshot(index, records) once, then get_ranking_score() per
posting or set_ranking_score_to_index() to score the whole index.
"""

from __future__ import annotations

import logging
import math
from typing import Generic, Hashable, TypeVar

from .posting import InvertedIndex, Posting
from .records import KeyRecordSet

logger = logging.getLogger(__name__)

DEFAULT_K_PARAMETER = 1.75
DEFAULT_B_PARAMETER = 0.75

K = TypeVar("K", bound=Hashable)


class SnapshotError(RuntimeError):
    """Raised when scoring is requested before any snapshot was taken."""


class Bm25Ranking(Generic[K]):
    """
    BM25 ranking provider.

    Statistics are frozen at take_snapshot() time. A later snapshot clears
    and rebuilds every cache, nothing is carried over from the previous one.
    """

    def __init__(self, k: float = DEFAULT_K_PARAMETER, b: float = DEFAULT_B_PARAMETER):
        """
        Args:
            k: Term frequency saturation parameter, usually 1.2 - 2.0
            b: Length normalization parameter, 0.0 (none) - 1.0 (full)
        """
        self.k = k
        self.b = b
        self._inverted_index: InvertedIndex[K] | None = None
        self._key_records: KeyRecordSet | None = None
        self._record_sizes: dict[int, int] = {}
        self._document_frequencies: dict[K, int] = {}
        self._record_count = 0
        self._total_size = 0

    @property
    def is_ready(self) -> bool:
        return self._inverted_index is not None

    @property
    def inverted_index(self) -> InvertedIndex[K] | None:
        return self._inverted_index

    @property
    def key_records(self) -> KeyRecordSet | None:
        return self._key_records

    @property
    def average_record_size(self) -> float:
        self._require_snapshot()
        return self._total_size / self._record_count

    def take_snapshot(self, inverted_index: InvertedIndex[K], key_records: KeyRecordSet) -> None:
        """
        Capture corpus statistics: record count, record sizes, total size and
        the document frequency of every key.

        Raises:
            ValueError: key_records is empty
        """
        self._record_sizes.clear()
        self._document_frequencies.clear()
        self._inverted_index = None
        self._key_records = None

        record_count = 0
        total_size = 0
        for record in key_records:
            record_count += 1
            self._record_sizes[record.record_id] = record.size
            total_size += record.size
        if record_count == 0:
            raise ValueError("Cannot take a ranking snapshot of an empty record set")

        for key in inverted_index.get_keys():
            self._document_frequencies[key] = inverted_index.get_records(key).size()

        self._record_count = record_count
        self._total_size = total_size
        self._inverted_index = inverted_index
        self._key_records = key_records
        logger.debug(
            "BM25 snapshot: %d records, %d keys, total size %d",
            record_count,
            len(self._document_frequencies),
            total_size,
        )

    def get_ranking_score(self, key: K, posting: Posting) -> float:
        """
        BM25 score of key for the record of posting.

        Raises:
            SnapshotError: no snapshot taken yet
            KeyError: key or record unknown to the snapshot
        """
        self._require_snapshot()
        try:
            df = self._document_frequencies[key]
        except KeyError:
            raise KeyError(f"Key not in ranking snapshot: {key!r}") from None
        try:
            dl = self._record_sizes[posting.record_id]
        except KeyError:
            raise KeyError(f"Record not in ranking snapshot: {posting.record_id!r}") from None

        idf = math.log2(self._record_count / df)
        tf = float(posting.term_frequency)
        avdl = self._total_size / self._record_count

        k = self.k
        b = self.b
        tf_modified = tf * (k + 1) / (k * (1 - b + b * (dl / avdl)) + tf)
        return tf_modified * idf

    def set_ranking_score_to_index(self) -> None:
        """Compute and store the score of every posting in the snapshot index."""
        self._require_snapshot()
        scored = 0
        for key in self._inverted_index.get_keys():
            for posting in self._inverted_index.get_records(key).get_postings():
                posting.score = self.get_ranking_score(key, posting)
                scored += 1
        logger.debug("Scored %d postings", scored)

    def sort_postings_by_rank(self, postings: list[Posting]) -> None:
        """Stable in-place sort by descending score."""
        postings.sort(key=lambda p: p.score, reverse=True)

    def _require_snapshot(self) -> None:
        if self._inverted_index is None:
            raise SnapshotError("BM25 ranking has no snapshot, call take_snapshot() first")
