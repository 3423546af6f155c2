"""Keyword search core: inverted index, list intersection and BM25 ranking."""

from .posting import Posting, InvertedList, InvertedIndex
from .merge import RecordToIteratorContainer, intersect
from .ranking import Bm25Ranking, SnapshotError
from .records import KeyRecord, KeyRecordSet
from .index_builder import build_index, load_documents_from_directory
from .cities import City, load_cities
from .query import normalize_query, search
