"""
Closest Match Finder Module
정렬된 record 리스트에서 query timestamp에 가장 가까운 record의 index를 찾는 모듈

탐색 방법:
- Divide-and-conquer boundary comparison (O(log n))
- 원본 리스트를 복사하지 않고 index 범위 (lo, hi)로 재귀
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
from dataclasses import dataclass
import numpy as np
from tqdm import tqdm

from .config import DEFAULT_CONFIG, validate_config
from .records import default_key
from .validator import SequenceValidator


def find_closest(
    query: Any,
    records: Sequence[Any],
    key: Optional[Callable[[Any], Any]] = None
) -> Optional[int]:
    """
    Query에 가장 가까운 key를 가진 record의 index 찾기
    Find the index of the record whose key is nearest to ``query``

    ``records`` must be sorted ascending by key. This is not checked.

    Args:
        query: Query key (int/float timestamp, datetime, ...)
        records: Records sorted ascending by key
        key: Key accessor (None이면 ``record.timestamp``)

    Returns:
        Index into ``records``, or None if ``records`` is empty
    """
    if len(records) == 0:
        return None

    return _search(query, records, key or default_key, 0, len(records))


def _search(
    query: Any,
    records: Sequence[Any],
    key: Callable[[Any], Any],
    lo: int,
    hi: int
) -> int:
    """[lo, hi) 범위에서 재귀 탐색"""
    if hi - lo == 1:
        return lo

    mid = lo + (hi - lo) // 2

    # Split boundary: left = [lo, mid), right = [mid, hi)
    left_key = key(records[mid - 1])
    right_key = key(records[mid])
    left_diff = abs(left_key - query)
    right_diff = abs(right_key - query)

    # Ties go left, unless both boundary keys are duplicates below the query.
    # e.g. [3, 3, 5] with query 5: going left would miss the exact match at index 2.
    if right_diff < left_diff or (right_diff == left_diff and right_key < query):
        return _search(query, records, key, mid, hi)
    return _search(query, records, key, lo, mid)


@dataclass
class MatchResult:
    """Query 하나에 대한 탐색 결과"""
    query: Any
    index: int
    key: Any
    distance: Any  # |key - query|, same unit as the keys
    record: Any


class ClosestMatchFinder:
    """
    설정 가능한 closest match 탐색 클래스

    - max_distance: 허용 가능한 최대 거리 (초과 시 None)
    - validate_input: 탐색 전 정렬 여부 검증
    - show_progress: batch 탐색 시 progress bar 표시
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        key: Optional[Callable[[Any], Any]] = None
    ) -> None:
        """
        초기화

        Args:
            config: 설정 dictionary (DEFAULT_CONFIG 위에 merge)
            key: Key accessor (None이면 ``record.timestamp``)
        """
        self.config = validate_config({**DEFAULT_CONFIG, **(config or {})})
        self.key = key or default_key
        self.logger = logging.getLogger(self.__class__.__name__)
        self.validator = SequenceValidator() if self.config['validate_input'] else None

    def _check_input(self, records: Sequence[Any]) -> None:
        if self.validator is None:
            return

        result = self.validator.validate(records, key=self.key)
        if not result.is_valid:
            raise ValueError(f"Invalid record sequence: {'; '.join(result.errors)}")

    def _within_tolerance(self, distance: Any) -> bool:
        max_distance = self.config['max_distance']
        return max_distance is None or distance <= max_distance

    def _resolve(self, query: Any, records: Sequence[Any]) -> Optional[MatchResult]:
        index = find_closest(query, records, key=self.key)
        if index is None:
            return None

        record = records[index]
        record_key = self.key(record)
        distance = abs(record_key - query)

        if not self._within_tolerance(distance):
            self.logger.debug(
                f"Rejected index {index} for query {query}: "
                f"distance {distance} > {self.config['max_distance']}"
            )
            return None

        return MatchResult(
            query=query,
            index=index,
            key=record_key,
            distance=distance,
            record=record
        )

    def find(self, query: Any, records: Sequence[Any]) -> Optional[int]:
        """
        가장 가까운 record index 반환 (없거나 tolerance 초과 시 None)
        """
        self._check_input(records)
        result = self._resolve(query, records)
        return result.index if result is not None else None

    def find_match(self, query: Any, records: Sequence[Any]) -> Optional[MatchResult]:
        """
        가장 가까운 record와 거리 정보 반환

        Returns:
            MatchResult or None
        """
        self._check_input(records)
        return self._resolve(query, records)

    def find_many(
        self,
        queries: Iterable[Any],
        records: Sequence[Any]
    ) -> List[Optional[MatchResult]]:
        """
        여러 query를 한 번에 탐색
        Resolve a batch of queries against the same sequence

        Args:
            queries: Query keys
            records: Records sorted ascending by key

        Returns:
            One MatchResult (or None) per query, in query order
        """
        self._check_input(records)

        queries = list(queries)
        self.logger.info(f"Resolving {len(queries)} queries against {len(records)} records")

        results = []
        for query in tqdm(queries, desc="  Matching", disable=not self.config['show_progress']):
            results.append(self._resolve(query, records))

        matched = sum(1 for r in results if r is not None)
        self.logger.info(f"  Matched: {matched}/{len(results)}")

        return results

    def get_match_statistics(self, results: List[Optional[MatchResult]]) -> dict:
        """
        탐색 결과 통계 계산

        Args:
            results: find_many 결과

        Returns:
            통계 정보 dictionary (timedelta 거리는 초 단위)
        """
        matched = [r for r in results if r is not None]

        stats = {
            'total_queries': len(results),
            'matched': len(matched),
            'unmatched': len(results) - len(matched),
        }

        if len(matched) == 0:
            stats.update({
                'mean_distance': 0.0,
                'max_distance': 0.0,
                'std_distance': 0.0,
                'median_distance': 0.0
            })
            return stats

        distances = np.array([_distance_as_float(r.distance) for r in matched])

        stats.update({
            'mean_distance': float(np.mean(distances)),
            'max_distance': float(np.max(distances)),
            'std_distance': float(np.std(distances)),
            'median_distance': float(np.median(distances))
        })
        return stats


def _distance_as_float(distance: Any) -> float:
    # timedelta / pandas.Timedelta -> seconds
    if hasattr(distance, 'total_seconds'):
        return distance.total_seconds()
    return float(distance)
