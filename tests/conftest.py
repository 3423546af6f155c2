"""Shared fixtures: small in-memory corpora of key records"""

from dataclasses import dataclass, field

import pytest

from lexisearch.index_builder import build_index
from lexisearch.records import KeyRecordSet


@dataclass
class WordRecord:
    """Key record whose keys are given directly, size defaults to the key count."""

    record_id: int
    words: list = field(default_factory=list)
    length: int | None = None

    @property
    def size(self) -> int:
        return self.length if self.length is not None else len(self.words)

    def keys(self) -> list:
        return self.words


@pytest.fixture
def make_record():
    return WordRecord


@pytest.fixture
def word_records():
    """Four records over a tiny vocabulary"""
    return KeyRecordSet([
        WordRecord(0, ["new", "york", "city"]),
        WordRecord(1, ["york"]),
        WordRecord(2, ["new", "orleans", "new"]),
        WordRecord(3, ["city", "of", "london"]),
    ])


@pytest.fixture
def word_index(word_records):
    return build_index(word_records)


@pytest.fixture
def cities_file(tmp_path):
    path = tmp_path / "cities.tsv"
    path.write_text(
        "# name\tstate\tlatitude\tlongitude\trelevance\n"
        "Freiburg im Breisgau\tGermany\t47.9990\t7.8421\t220000\n"
        "Frankfurt am Main\tGermany\t50.1109\t8.6821\t750000\n"
        "\n"
        "Frankfurt (Oder)\tGermany\t52.3471\t14.5506\t57000\n"
        "broken line without tabs\n"
        "New York\tUnited States\t40.7128\t-74.0060\t8400000\n",
        encoding="utf-8",
    )
    return path
