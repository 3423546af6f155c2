"""
City records for keyword search over city names.

Cities file format, tab separated, one city per line:
    name<TAB>state<TAB>latitude<TAB>longitude<TAB>relevance
Blank lines and lines starting with '#' are ignored.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

from .records import KeyRecordSet
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

_FIELD_COUNT = 5


@dataclass(frozen=True)
class City:
    record_id: int
    name: str
    state: str
    latitude: float
    longitude: float
    relevance_score: int = 0

    def keys(self) -> list[str]:
        """Index keys: the tokens of the city name."""
        return tokenize(self.name)

    @property
    def size(self) -> int:
        # A name without word characters still counts as one token
        return max(1, len(self.keys()))

    def __str__(self) -> str:
        return (
            f"{self.name}, {self.state} ({self.latitude:.4f}, {self.longitude:.4f})"
            f" relevance={self.relevance_score}"
        )


def _parse_city(record_id: int, row: list[str]) -> City:
    if len(row) != _FIELD_COUNT:
        raise ValueError(f"expected {_FIELD_COUNT} fields, got {len(row)}")
    name, state, latitude, longitude, relevance = (value.strip() for value in row)
    if not name:
        raise ValueError("empty city name")
    return City(
        record_id=record_id,
        name=name,
        state=state,
        latitude=float(latitude),
        longitude=float(longitude),
        relevance_score=int(relevance),
    )


def load_cities(path: Path) -> KeyRecordSet[City]:
    """
    Load cities from a tab-separated file. Ids are assigned in file order
    starting at 0; malformed lines are skipped with a warning.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Cities file not found: {path}")

    cities: KeyRecordSet[City] = KeyRecordSet()
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f, delimiter="\t", quoting=csv.QUOTE_NONE)
        for line_number, row in enumerate(reader, start=1):
            if not row or not "".join(row).strip() or row[0].startswith("#"):
                continue
            try:
                city = _parse_city(len(cities), row)
            except ValueError as e:
                logger.warning("Skipping line %d of %s: %s", line_number, path, e)
                continue
            cities.add(city)

    logger.debug("Loaded %d cities from %s", len(cities), path)
    return cities
