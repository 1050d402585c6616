"""
Configuration Module (설정 모듈)

Default configuration, YAML loading and logging setup
"""

import logging
import numbers
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

DEFAULT_CONFIG: Dict[str, Any] = {
    # 허용 가능한 최대 거리 (None이면 제한 없음, key와 같은 단위)
    'max_distance': None,

    # 탐색 전 정렬 검증 (Validate sorted precondition before searching)
    'validate_input': False,

    # Batch 탐색 progress bar
    'show_progress': False,
}

FLAG_KEYS = ('validate_input', 'show_progress')


def setup_logging(level: str = 'INFO') -> None:
    """
    Configure root logging

    Raises:
        ValueError: Unknown level name
    """
    level_value = logging.getLevelName(str(level).upper())
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(
        level=level_value,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )


def _check_max_distance(max_distance: Any) -> None:
    if max_distance is None:
        return

    # timedelta는 초 단위로 비교
    if isinstance(max_distance, timedelta):
        value = max_distance.total_seconds()
    elif isinstance(max_distance, numbers.Real) and not isinstance(max_distance, bool):
        value = max_distance
    else:
        raise ValueError(
            f"max_distance must be None, a number or a timedelta: {max_distance!r}"
        )

    if value < 0:
        raise ValueError(f"max_distance must be non-negative: {max_distance}")


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    설정 값 검증

    Args:
        config: Merged configuration dictionary

    Returns:
        The same dictionary

    Raises:
        ValueError: Unknown key or invalid value
    """
    unknown = sorted(set(config) - set(DEFAULT_CONFIG))
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

    _check_max_distance(config['max_distance'])

    for flag in FLAG_KEYS:
        if not isinstance(config[flag], bool):
            raise ValueError(f"{flag} must be a bool: {config[flag]!r}")

    return config


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    YAML 설정 파일 로드 후 기본값과 merge

    우선순위:
    1. overrides (최우선)
    2. YAML 파일
    3. 기본값

    Args:
        config_path: YAML 파일 경로 (None이면 기본값만 사용)
        overrides: 추가 설정 dictionary

    Returns:
        Validated configuration dictionary
    """
    file_config = {}

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")

        with open(path, 'r') as f:
            file_config = yaml.safe_load(f) or {}

        if not isinstance(file_config, dict):
            raise ValueError(f"Config must be a mapping: {config_path}")

    return validate_config({**DEFAULT_CONFIG, **file_config, **(overrides or {})})
