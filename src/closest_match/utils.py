"""
Utility Functions (유틸리티 함수 모듈)

Date parsing, timestamp conversion and closest lookups over timestamp-keyed data
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Sequence

from .finder import find_closest

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
DATE_FORMAT = '%Y-%m-%d'  # zero padding optional: '2019-12-1'


def parse_date(text: str) -> datetime:
    """
    'YYYY-M-D' 문자열을 UTC 자정 datetime으로 변환

    Args:
        text: Date string, e.g. '2019-12-1' or '2019-12-01'

    Returns:
        timezone-aware datetime (00:00:00 UTC)

    Raises:
        ValueError: Malformed date string
    """
    return datetime.strptime(text, DATE_FORMAT).replace(tzinfo=timezone.utc)


def to_nanoseconds(dt: datetime) -> int:
    """
    datetime을 epoch 기준 nanoseconds로 변환 (naive datetime은 UTC로 간주)
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    delta = dt - EPOCH
    return (delta.days * 86400 + delta.seconds) * 10**9 + delta.microseconds * 1000


def find_closest_or_default(
    query: Any,
    records: Sequence[Any],
    default: int,
    key: Optional[Callable[[Any], Any]] = None
) -> int:
    """
    Find closest index, falling back to a caller-chosen index on empty input

    Args:
        query: Query key
        records: Records sorted ascending by key
        default: Index returned when ``records`` is empty
        key: Key accessor

    Returns:
        Closest index or ``default``
    """
    index = find_closest(query, records, key=key)
    return default if index is None else index


def find_closest_value(
    data_dict: Dict[Any, Any],
    target_timestamp: Any,
    timestamps: Optional[Sequence[Any]] = None
) -> Optional[Any]:
    """
    Find closest value by timestamp

    Sorting the keys costs O(n log n) per call. For repeated lookups into the
    same dict, sort once and pass the result as ``timestamps``.

    Args:
        data_dict: Dictionary mapping timestamp to value
        target_timestamp: Target timestamp
        timestamps: Keys of ``data_dict`` sorted ascending (None이면 매번 정렬)

    Returns:
        Closest value or None if data_dict is empty
    """
    if not data_dict:
        return None

    if timestamps is None:
        timestamps = sorted(data_dict.keys())

    index = find_closest(target_timestamp, timestamps, key=lambda ts: ts)
    return data_dict[timestamps[index]]
