"""
Closest Match
정렬된 dated record 리스트에서 query 날짜에 가장 가까운 record를 찾는 패키지
"""

__version__ = '1.0.0'
__author__ = 'Closest Match Team'

from .records import DatedRecord, Match, sort_records, records_from_dataframe
from .finder import find_closest, ClosestMatchFinder, MatchResult
from .validator import SequenceValidator, ValidationResult
from .config import DEFAULT_CONFIG, load_config, setup_logging
from .utils import parse_date, to_nanoseconds, find_closest_or_default, find_closest_value

__all__ = [
    'DatedRecord',
    'Match',
    'sort_records',
    'records_from_dataframe',
    'find_closest',
    'ClosestMatchFinder',
    'MatchResult',
    'SequenceValidator',
    'ValidationResult',
    'DEFAULT_CONFIG',
    'load_config',
    'setup_logging',
    'parse_date',
    'to_nanoseconds',
    'find_closest_or_default',
    'find_closest_value',
]
