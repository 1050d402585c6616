"""
Sequence Validator Module
Record 리스트가 key 기준 오름차순으로 정렬되어 있는지 검증하는 모듈
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass, field

from .records import default_key


@dataclass
class ValidationResult:
    """
    Record sequence 검증 결과

    errors: 탐색 결과를 신뢰할 수 없는 문제 (unsorted, incomparable keys)
    warnings: 탐색은 가능하지만 주의가 필요한 상태 (duplicate keys, empty)
    info: record_count, min_key, max_key
    """
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    info: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, message: str) -> None:
        """Record a precondition violation; the sequence becomes invalid"""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_info(self, key: str, value: Any) -> None:
        self.info[key] = value

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


class SequenceValidator:
    """Record sequence 정렬 검증 클래스"""

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    def validate(
        self,
        records: Sequence[Any],
        key: Optional[Callable[[Any], Any]] = None
    ) -> ValidationResult:
        """
        정렬 및 key 비교 가능 여부 검증

        Args:
            records: Record sequence
            key: Key accessor (None이면 ``record.timestamp``)

        Returns:
            ValidationResult
        """
        key = key or default_key
        result = ValidationResult()
        result.add_info('record_count', len(records))

        if len(records) == 0:
            result.add_warning("Empty sequence: no closest match can exist")
            return result

        keys = [key(r) for r in records]
        duplicate_count = 0

        for i in range(1, len(keys)):
            try:
                descending = keys[i] < keys[i - 1]
            except TypeError:
                result.add_error(
                    f"Key at index {i} is not comparable with its predecessor: "
                    f"{keys[i - 1]!r}, {keys[i]!r}"
                )
                return result

            if descending:
                result.add_error(
                    f"Sequence not sorted: key at index {i} ({keys[i]!r}) "
                    f"is lower than key at index {i - 1} ({keys[i - 1]!r})"
                )
                return result

            if keys[i] == keys[i - 1]:
                duplicate_count += 1

        if duplicate_count > 0:
            result.add_warning(f"Duplicate keys: {duplicate_count}")

        result.add_info('min_key', keys[0])
        result.add_info('max_key', keys[-1])

        self.logger.debug(f"Validated {len(keys)} records (duplicates: {duplicate_count})")

        return result

    def print_validation_result(self, result: ValidationResult) -> None:
        """
        검증 결과를 보기 좋게 출력

        Args:
            result: ValidationResult
        """
        print("=" * 60)
        print("Record Sequence Validation Result")
        print("=" * 60)

        if 'record_count' in result.info:
            print(f"Records: {result.info['record_count']}")

        if 'min_key' in result.info:
            print(f"Key range: {result.info['min_key']} to {result.info['max_key']}")

        print()

        if result.errors:
            print("ERRORS:")
            for error in result.errors:
                print(f"   - {error}")
            print()

        if result.warnings:
            print("WARNINGS:")
            for warning in result.warnings:
                print(f"   - {warning}")
            print()

        # 최종 결과
        print("=" * 60)
        if result.is_valid:
            if result.has_warnings():
                print("VALID (with warnings)")
            else:
                print("VALID")
        else:
            print("INVALID")
        print("=" * 60)
