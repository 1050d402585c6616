"""Tests for the configurable ClosestMatchFinder wrapper."""

import logging
import math
from datetime import timedelta

import pytest

from closest_match.finder import ClosestMatchFinder, MatchResult
from closest_match.records import DatedRecord
from closest_match.utils import parse_date


class TestConfig:
    def test_defaults(self):
        finder = ClosestMatchFinder()
        assert finder.config["max_distance"] is None
        assert finder.config["validate_input"] is False
        assert finder.validator is None

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown config keys"):
            ClosestMatchFinder({"tolerance": 3})

    def test_negative_max_distance_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            ClosestMatchFinder({"max_distance": -1})

    def test_negative_timedelta_rejected(self):
        with pytest.raises(ValueError):
            ClosestMatchFinder({"max_distance": timedelta(days=-1)})


class TestFind:
    def test_find_matches_function(self, int_records):
        finder = ClosestMatchFinder()
        assert finder.find(14, int_records) == 1
        assert finder.find(16, int_records) == 2

    def test_find_empty(self):
        assert ClosestMatchFinder().find(1, []) is None

    def test_max_distance_rejects_far_match(self, int_records):
        finder = ClosestMatchFinder({"max_distance": 3})
        assert finder.find(12, int_records) == 1
        assert finder.find(13, int_records) == 1
        assert finder.find(14, int_records) is None
        assert finder.find(100, int_records) is None

    def test_max_distance_with_dates(self, match_list):
        finder = ClosestMatchFinder({"max_distance": timedelta(days=2)})
        assert finder.find(parse_date("2019-12-12"), match_list) == 2
        assert finder.find(parse_date("2019-12-15"), match_list) is None

    def test_find_match_details(self, int_records):
        result = ClosestMatchFinder().find_match(27, int_records)
        assert isinstance(result, MatchResult)
        assert result.index == 3
        assert result.key == 30
        assert result.distance == 3
        assert result.record.payload == {"value": 60}
        assert result.query == 27

    def test_custom_key(self):
        rows = [(1, "a"), (5, "b"), (9, "c")]
        finder = ClosestMatchFinder(key=lambda row: row[0])
        assert finder.find(6, rows) == 1


class TestValidateInput:
    def test_unsorted_raises(self):
        finder = ClosestMatchFinder({"validate_input": True})
        records = [DatedRecord(5), DatedRecord(1)]
        with pytest.raises(ValueError, match="not sorted"):
            finder.find(3, records)

    def test_sorted_passes(self, int_records):
        finder = ClosestMatchFinder({"validate_input": True})
        assert finder.find(31, int_records) == 3

    def test_unsorted_not_checked_by_default(self):
        records = [DatedRecord(5), DatedRecord(1)]
        assert ClosestMatchFinder().find(3, records) is not None


class TestFindMany:
    def test_results_in_query_order(self, int_records):
        finder = ClosestMatchFinder({"max_distance": 4})
        results = finder.find_many([1, 15, 39, 22], int_records)

        assert [r.index if r else None for r in results] == [0, None, 4, 2]

    def test_progress_bar(self, int_records):
        finder = ClosestMatchFinder({"show_progress": True})
        results = finder.find_many(range(0, 41, 5), int_records)
        assert len(results) == 9
        assert all(r is not None for r in results)

    def test_logs_summary(self, int_records, caplog):
        caplog.set_level(logging.INFO)
        finder = ClosestMatchFinder({"max_distance": 1})
        finder.find_many([0, 5, 10], int_records)
        assert "Matched: 2/3" in caplog.text

    def test_empty_records(self):
        assert ClosestMatchFinder().find_many([1, 2], []) == [None, None]


class TestStatistics:
    def test_numeric_distances(self):
        records = [DatedRecord(k) for k in [0, 10, 20]]
        finder = ClosestMatchFinder()
        stats = finder.get_match_statistics(finder.find_many([1, 12, 20], records))

        assert stats["total_queries"] == 3
        assert stats["matched"] == 3
        assert stats["unmatched"] == 0
        assert stats["mean_distance"] == pytest.approx(1.0)
        assert stats["max_distance"] == pytest.approx(2.0)
        assert stats["median_distance"] == pytest.approx(1.0)
        assert stats["std_distance"] == pytest.approx(math.sqrt(2 / 3))

    def test_timedelta_distances_in_seconds(self, match_list):
        finder = ClosestMatchFinder()
        queries = [parse_date("2019-12-2"), parse_date("2019-12-11")]
        stats = finder.get_match_statistics(finder.find_many(queries, match_list))

        assert stats["max_distance"] == pytest.approx(86400.0)
        assert stats["mean_distance"] == pytest.approx(43200.0)

    def test_no_matches(self):
        finder = ClosestMatchFinder()
        stats = finder.get_match_statistics([None, None])
        assert stats["total_queries"] == 2
        assert stats["unmatched"] == 2
        assert stats["mean_distance"] == 0.0
