"""Shared pytest fixtures."""

import pytest

from closest_match.records import DatedRecord, Match
from closest_match.utils import parse_date


@pytest.fixture
def match_list():
    return [
        Match("1", parse_date("2019-12-1"), "H4", "A4"),
        Match("2", parse_date("2019-12-10"), "H1", "A2"),
        Match("3", parse_date("2019-12-11"), "H4", "A4"),
        Match("4", parse_date("2019-12-20"), "H4", "A4"),
        Match("5", parse_date("2019-12-30"), "H5", "A5"),
    ]


@pytest.fixture
def int_records():
    return [DatedRecord(ts, {"value": ts * 2}) for ts in [0, 10, 20, 30, 40]]
