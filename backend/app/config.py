"""
Application configuration with environment variable support.
"""
from __future__ import annotations

import os


def _get_env_float(key: str, default: float) -> float:
    """Get float value from environment variable with fallback."""
    try:
        return float(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable with fallback."""
    try:
        return int(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_list(key: str, default: list[str], separator: str = ",") -> list[str]:
    """Get list value from environment variable with fallback."""
    value = os.getenv(key)
    if not value:
        return default
    return [item.strip() for item in value.split(separator) if item.strip()]


# Time Window Settings
# Messages stamped slightly in the future are tolerated up to this skew
CLOCK_SKEW_TOLERANCE_MS: int = _get_env_int("CLOCK_SKEW_TOLERANCE_MS", 5_000)

# Trending Settings
TRENDING_TOP_N: int = _get_env_int("TRENDING_TOP_N", 5)
# log10 of the threshold is a divisor, so it must stay above 1
LONG_HASHTAG_THRESHOLD: int = max(_get_env_int("LONG_HASHTAG_THRESHOLD", 8), 2)
MIN_ELAPSED_MINUTES: float = _get_env_float("MIN_ELAPSED_MINUTES", 0.01)

# Anomaly Detection Settings
BURST_WINDOW_MINUTES: float = _get_env_float("BURST_WINDOW_MINUTES", 5.0)
BURST_MESSAGE_LIMIT: int = _get_env_int("BURST_MESSAGE_LIMIT", 10)
ALTERNATING_MIN_RUN: int = _get_env_int("ALTERNATING_MIN_RUN", 10)
SYNC_WINDOW_MS: int = _get_env_int("SYNC_WINDOW_MS", 4_000)
SYNC_MIN_MESSAGES: int = _get_env_int("SYNC_MIN_MESSAGES", 3)

# Payload Validation Settings
MAX_CONTENT_LENGTH: int = _get_env_int("MAX_CONTENT_LENGTH", 280)

# CORS Configuration
CORS_ALLOW_ORIGINS: list[str] = _get_env_list("CORS_ALLOW_ORIGINS", ["*"])

# Logging Configuration
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = os.getenv(
    "LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
