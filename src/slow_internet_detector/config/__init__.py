"""
Configuration for the slow internet detector.

Pydantic-based monitor settings, environment variable access and
centralized logging setup.
"""

from slow_internet_detector.config.env_vars import (
    EnvVar,
    get_env,
    get_env_int,
    is_set,
    set_env,
    unset_env,
)
from slow_internet_detector.config.logging import (
    SecretRedactingFilter,
    get_logger,
    setup_logging,
)
from slow_internet_detector.config.models import MonitorConfig

__all__ = [
    "MonitorConfig",
    # Environment
    "EnvVar",
    "get_env",
    "get_env_int",
    "is_set",
    "set_env",
    "unset_env",
    # Logging
    "SecretRedactingFilter",
    "get_logger",
    "setup_logging",
]
