"""Default configuration values - no more magic numbers!

All default values should be defined here, not hardcoded in the code.
"""

from __future__ import annotations


# ================================================================
# Monitor Timing Defaults (in milliseconds)
# ================================================================

DEFAULT_THRESHOLD_MS = 3000
"""Requests taking longer than this are considered slow."""

DEFAULT_CONFIRMATION_DELAY_MS = 250
"""Pause before committing to the slow state."""

DEFAULT_SETTLING_MS = 5000
"""How long the slow signal stays raised once published."""


# ================================================================
# CLI Defaults
# ================================================================

DEFAULT_PROBE_COUNT = 1
"""Number of requests the probe command issues."""

DEFAULT_PROBE_INTERVAL = 0.5
"""Seconds between probe requests."""

DEFAULT_HTTP_REQUEST_TIMEOUT = 30.0
"""Default timeout for probe HTTP requests (seconds)."""


# ================================================================
# Logging Defaults
# ================================================================

DEFAULT_LOG_LEVEL = "WARNING"
"""Default log level for the CLI."""

DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024
"""Maximum size of a log file before rotation."""

DEFAULT_LOG_BACKUP_COUNT = 3
"""Number of rotated log files to keep."""


# ================================================================
# Application Constants
# ================================================================

NAMESPACE = "slow_internet_detector"
"""Logger namespace."""

APP_NAME = "slow-net"
"""CLI name."""
