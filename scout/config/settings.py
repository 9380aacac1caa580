"""
Run configuration.
Defaults match the scouting job's compiled-in values; `.env` or the process
environment may override them, and CLI flags override both.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MIN_POTENTIAL = 70
DEFAULT_MIN_GROWTH = 12
DEFAULT_CONCURRENCY = 3
DEFAULT_MIN_DELAY = 2.0
DEFAULT_MAX_DELAY = 5.0
DEFAULT_TIMEOUT = 30.0
DEFAULT_OUTPUT_PATH = "high_potential_players.json"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ScoutSettings:
    min_potential: int = DEFAULT_MIN_POTENTIAL
    min_growth: int = DEFAULT_MIN_GROWTH
    concurrency: int = DEFAULT_CONCURRENCY
    min_delay: float = DEFAULT_MIN_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    timeout: float = DEFAULT_TIMEOUT
    output_path: str = DEFAULT_OUTPUT_PATH
    fail_on_empty: bool = False

    @classmethod
    def from_env(cls, *, dotenv_path: Optional[str] = None) -> "ScoutSettings":
        load_dotenv(dotenv_path)
        settings = cls(
            min_potential=int(os.getenv("SCOUT_MIN_POTENTIAL", DEFAULT_MIN_POTENTIAL)),
            min_growth=int(os.getenv("SCOUT_MIN_GROWTH", DEFAULT_MIN_GROWTH)),
            concurrency=int(os.getenv("SCOUT_CONCURRENCY", DEFAULT_CONCURRENCY)),
            min_delay=float(os.getenv("SCOUT_REQUEST_DELAY_MIN", DEFAULT_MIN_DELAY)),
            max_delay=float(os.getenv("SCOUT_REQUEST_DELAY_MAX", DEFAULT_MAX_DELAY)),
            timeout=float(os.getenv("SCOUT_REQUEST_TIMEOUT", DEFAULT_TIMEOUT)),
            output_path=os.getenv("SCOUT_OUTPUT_PATH", DEFAULT_OUTPUT_PATH),
            fail_on_empty=os.getenv("SCOUT_FAIL_ON_EMPTY", "0").strip().lower() in _TRUTHY,
        )
        return settings.validated()

    def with_overrides(self, **overrides) -> "ScoutSettings":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes).validated()

    def validated(self) -> "ScoutSettings":
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1 (got {self.concurrency})")
        if self.min_delay < 0 or self.max_delay < 0:
            raise ValueError("request delays must be >= 0")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0 (got {self.timeout})")
        if self.min_delay > self.max_delay:
            return replace(self, min_delay=self.max_delay, max_delay=self.min_delay)
        return self
