"""
Record Module
날짜(timestamp)를 key로 가지는 record 데이터 클래스 모듈

Records carry one comparable key (``timestamp``) plus opaque payload.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass, field
from datetime import datetime
import pandas as pd


@dataclass(frozen=True)
class DatedRecord:
    """Generic dated record"""
    timestamp: Any  # int nanoseconds, float seconds, datetime, ...
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Match:
    """Sports fixture record (key: match date)"""
    slug: str
    date: datetime
    home_team_name: str
    away_team_name: str

    @property
    def timestamp(self) -> datetime:
        return self.date


def default_key(record: Any) -> Any:
    """Record의 key 반환 (기본: ``timestamp`` attribute)"""
    return record.timestamp


def sort_records(
    records: Sequence[Any],
    key: Optional[Callable[[Any], Any]] = None
) -> List[Any]:
    """
    Key 기준 오름차순으로 정렬된 새 리스트 반환
    Return a new list sorted ascending by key

    Args:
        records: Record sequence
        key: Key accessor (None이면 ``timestamp`` 사용)

    Returns:
        Sorted copy (stable, so duplicate keys keep their relative order)
    """
    return sorted(records, key=key or default_key)


def records_from_dataframe(df: pd.DataFrame, key_column: str) -> List[DatedRecord]:
    """
    DataFrame을 DatedRecord 리스트로 변환
    Convert a DataFrame into records sorted by ``key_column``

    Args:
        df: Source DataFrame
        key_column: Column holding the timestamps

    Returns:
        List of DatedRecord, remaining columns stored as payload
    """
    if key_column not in df.columns:
        raise ValueError(f"Key column not found: '{key_column}'")

    sorted_df = df.sort_values(key_column, kind='stable')
    payload_columns = [c for c in sorted_df.columns if c != key_column]

    records = []
    for row in sorted_df.to_dict(orient='records'):
        records.append(DatedRecord(
            timestamp=row[key_column],
            payload={c: row[c] for c in payload_columns}
        ))

    return records
