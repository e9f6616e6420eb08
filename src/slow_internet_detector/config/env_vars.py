"""Environment variable names - centralized, type-safe, no magic strings!

All environment variable access should go through this module.
"""

from __future__ import annotations

import os
from enum import Enum


class EnvVar(str, Enum):
    """All environment variable names used by the detector."""

    # ================================================================
    # Monitor Timing
    # ================================================================
    THRESHOLD_MS = "SLOW_NET_THRESHOLD_MS"
    CONFIRMATION_DELAY_MS = "SLOW_NET_CONFIRMATION_DELAY_MS"
    SETTLING_MS = "SLOW_NET_SETTLING_MS"

    # ================================================================
    # Logging
    # ================================================================
    LOG_LEVEL = "SLOW_NET_LOG_LEVEL"
    LOG_FILE = "SLOW_NET_LOG_FILE"


def get_env(var: EnvVar, default: str | None = None) -> str | None:
    """Get environment variable value (type-safe).

    Example:
        >>> threshold = get_env(EnvVar.THRESHOLD_MS, "3000")
    """
    return os.getenv(var.value, default)


def set_env(var: EnvVar, value: str) -> None:
    """Set environment variable (type-safe)."""
    os.environ[var.value] = value


def unset_env(var: EnvVar) -> None:
    """Unset environment variable if it exists."""
    os.environ.pop(var.value, None)


def is_set(var: EnvVar) -> bool:
    """Check if environment variable is set (even if empty string)."""
    return var.value in os.environ


def get_env_int(var: EnvVar, default: int | None = None) -> int | None:
    """Get environment variable as integer.

    Args:
        var: EnvVar enum member
        default: Default value if not set or invalid

    Returns:
        Integer value or default

    Example:
        >>> threshold = get_env_int(EnvVar.THRESHOLD_MS, 3000)
    """
    value = get_env(var)
    if value is None:
        return default

    try:
        return int(value)
    except ValueError:
        return default
