"""Utility functions for parsebench"""

import logging
import os

DEFAULT_WORKERS = 12
DEFAULT_LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_int_env(key: str) -> int:
    """Get integer value from environment variable, return 0 if not set or invalid."""
    val = os.getenv(key)
    if val is None:
        return 0
    try:
        return int(val)
    except ValueError:
        return 0


def get_str_env(key: str, default: str) -> str:
    """
    Get string from environment variable, return default if not set.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        String value or default
    """
    return os.getenv(key, default)


def default_worker_count() -> int:
    """Worker count from PARSEBENCH_WORKERS, falling back to DEFAULT_WORKERS."""
    workers = get_int_env('PARSEBENCH_WORKERS')
    return workers if workers > 0 else DEFAULT_WORKERS


def setup_logging(level_name: str | None = None) -> None:
    """Configure root logging on stderr.

    The level comes from the argument, then PARSEBENCH_LOG_LEVEL, then INFO.
    Unknown level names fall back to INFO.
    """
    name = (level_name or get_str_env('PARSEBENCH_LOG_LEVEL', DEFAULT_LOG_LEVEL)).upper()
    level = getattr(logging, name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def format_duration(seconds: float) -> str:
    """Convert an elapsed time in seconds to a compact human-readable string.

    Works on whole nanoseconds, so no precision is lost above one second.
    Examples: 850ns, 12.5µs, 3.204ms, 1.234567891s, 2m3.5s, 1h2m3s
    """
    if seconds < 0:
        return '-' + format_duration(-seconds)
    nanos = round(seconds * 1e9)
    if nanos == 0:
        return '0s'
    if nanos < 1_000:
        return f'{nanos}ns'
    if nanos < 1_000_000:
        return f'{_fraction(nanos, 1_000)}µs'
    if nanos < 1_000_000_000:
        return f'{_fraction(nanos, 1_000_000)}ms'

    whole_seconds, frac_nanos = divmod(nanos, 1_000_000_000)
    hours, rest = divmod(whole_seconds, 3600)
    minutes, secs = divmod(rest, 60)
    text = f'{_fraction(secs * 1_000_000_000 + frac_nanos, 1_000_000_000)}s'
    if hours:
        return f'{hours}h{minutes}m{text}'
    if minutes:
        return f'{minutes}m{text}'
    return text


def _fraction(value: int, unit: int) -> str:
    # value / unit as an exact decimal, no trailing zeros
    whole, rest = divmod(value, unit)
    if not rest:
        return str(whole)
    digits = len(str(unit)) - 1
    return f'{whole}.{rest:0{digits}d}'.rstrip('0')
