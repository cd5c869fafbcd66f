"""Configuration management"""
import logging
import os
from dotenv import load_dotenv

from src.exceptions import ConfigurationError

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Simulation bench (virtual time, epoch ms)
BENCH_START_TIME_MS: str = os.getenv("BENCH_START_TIME_MS", "1000000")
BENCH_TASK_DURATION_MS: str = os.getenv("BENCH_TASK_DURATION_MS", "5000")


def _parse_non_negative_int(key: str, value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}", config_key=key, cause=e)
    if parsed < 0:
        raise ConfigurationError(f"{key} must not be negative, got {parsed}", config_key=key)
    return parsed


def get_bench_settings() -> dict[str, int]:
    """Parsed simulation bench settings"""
    return {
        "start_time_ms": _parse_non_negative_int("BENCH_START_TIME_MS", BENCH_START_TIME_MS),
        "task_duration_ms": _parse_non_negative_int("BENCH_TASK_DURATION_MS", BENCH_TASK_DURATION_MS),
    }


# Validation
def validate_config() -> None:
    """Validate configuration"""
    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        raise ConfigurationError(f"LOG_LEVEL {LOG_LEVEL!r} is not a logging level", config_key="LOG_LEVEL")
    get_bench_settings()
