"""
Unit tests for city records and the cities file loader.
"""

import logging

import pytest

from lexisearch.cities import City, load_cities
from lexisearch.index_builder import build_index


class TestCity:
    """Test city key record behaviour"""

    def test_keys_from_name(self):
        city = City(0, "Frankfurt am Main", "Germany", 50.1109, 8.6821, 750000)

        assert city.keys() == ["frankfurt", "am", "main"]
        assert city.size == 3

    def test_size_at_least_one(self):
        city = City(0, "--", "Nowhere", 0.0, 0.0)

        assert city.keys() == []
        assert city.size == 1

    def test_str(self):
        city = City(1, "New York", "United States", 40.7128, -74.006, 8400000)

        assert str(city) == "New York, United States (40.7128, -74.0060) relevance=8400000"


class TestLoadCities:
    """Test parsing of the tab-separated cities file"""

    def test_loads_valid_lines_in_order(self, cities_file):
        cities = load_cities(cities_file)

        assert [c.name for c in cities] == [
            "Freiburg im Breisgau",
            "Frankfurt am Main",
            "Frankfurt (Oder)",
            "New York",
        ]
        assert [c.record_id for c in cities] == [0, 1, 2, 3]

    def test_fields_parsed(self, cities_file):
        city = load_cities(cities_file).get_record_by_id(3)

        assert city.state == "United States"
        assert city.latitude == pytest.approx(40.7128)
        assert city.longitude == pytest.approx(-74.006)
        assert city.relevance_score == 8400000

    def test_malformed_line_logged(self, cities_file, caplog):
        with caplog.at_level(logging.WARNING, logger="lexisearch.cities"):
            load_cities(cities_file)

        assert "Skipping line 6" in caplog.text

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_cities(tmp_path / "missing.tsv")

    def test_index_over_cities(self, cities_file):
        index = build_index(load_cities(cities_file))

        assert list(index.get_records("frankfurt").record_ids()) == [1, 2]
        assert index.contains_record("york", 3)
