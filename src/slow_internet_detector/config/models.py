"""Pydantic configuration model for the slow request monitor."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

from slow_internet_detector.config.defaults import (
    DEFAULT_CONFIRMATION_DELAY_MS,
    DEFAULT_SETTLING_MS,
    DEFAULT_THRESHOLD_MS,
)
from slow_internet_detector.config.env_vars import EnvVar, get_env_int

logger = logging.getLogger(__name__)


def _env_delay_ms(var: EnvVar, default: int) -> int:
    """Read a delay from the environment; negative values fall back to default."""
    value = get_env_int(var, default)
    if value is None:
        return default
    if value < 0:
        logger.warning(f"Ignoring {var.value}={value}: delays must be >= 0")
        return default
    return value


class MonitorConfig(BaseModel):
    """Timing configuration for :class:`SlowRequestMonitor`.

    All values in milliseconds. Immutable after creation; use
    :meth:`with_overrides` to derive a new one.

    The threshold is deliberately unconstrained: zero or negative values are
    accepted and simply flag every tracked request as slow.
    """

    threshold_ms: int = Field(
        default=DEFAULT_THRESHOLD_MS,
        description="Requests slower than this are flagged",
    )
    confirmation_delay_ms: int = Field(
        default=DEFAULT_CONFIRMATION_DELAY_MS,
        ge=0,
        description="Pause before publishing the slow state",
    )
    settling_ms: int = Field(
        default=DEFAULT_SETTLING_MS,
        ge=0,
        description="How long the slow state stays published",
    )

    model_config = {"frozen": True}

    @property
    def confirmation_delay_s(self) -> float:
        return self.confirmation_delay_ms / 1000.0

    @property
    def settling_s(self) -> float:
        return self.settling_ms / 1000.0

    def with_overrides(self, **overrides: Any) -> MonitorConfig:
        """Return a copy with the non-None overrides applied (and validated)."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return MonitorConfig(**values)

    @classmethod
    def from_env(cls) -> MonitorConfig:
        """Build a config from ``SLOW_NET_*`` environment variables.

        Unset or unparsable values fall back to the defaults, as do negative
        delays.
        """
        return cls(
            threshold_ms=get_env_int(EnvVar.THRESHOLD_MS, DEFAULT_THRESHOLD_MS),
            confirmation_delay_ms=_env_delay_ms(
                EnvVar.CONFIRMATION_DELAY_MS, DEFAULT_CONFIRMATION_DELAY_MS
            ),
            settling_ms=_env_delay_ms(EnvVar.SETTLING_MS, DEFAULT_SETTLING_MS),
        )
