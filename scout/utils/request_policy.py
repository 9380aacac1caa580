"""
Shared request policy for pacing and User-Agent rotation.
"""
from __future__ import annotations

import os
import random
from typing import Dict, Iterable, List, Optional

DEFAULT_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:89.0) Gecko/20100101 Firefox/89.0",
]

BASE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class RequestPolicy:
    """Per-request pacing window and identity headers."""

    def __init__(
        self,
        *,
        min_delay: float = 2.0,
        max_delay: float = 5.0,
        user_agents: Optional[Iterable[str]] = None,
        seed: Optional[int] = None,
    ):
        if min_delay > max_delay:
            min_delay, max_delay = max_delay, min_delay
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.user_agents = self._load_user_agents(user_agents)
        # Only used to derive worker seeds; draws for pacing happen on worker RNGs.
        self._seed_source = random.Random(seed)

    def _load_user_agents(self, override: Optional[Iterable[str]]) -> List[str]:
        if override:
            pool = [ua.strip() for ua in override if ua.strip()]
            if pool:
                return pool
        env_value = os.getenv("SCOUT_USER_AGENTS")
        if env_value:
            parsed = [ua.strip() for ua in env_value.replace("|", ",").split(",") if ua.strip()]
            if parsed:
                return parsed
        return list(DEFAULT_USER_AGENTS)

    def spawn_rng(self) -> random.Random:
        """Independent generator for one worker."""
        return random.Random(self._seed_source.getrandbits(64))

    def random_user_agent(self, rng: random.Random) -> str:
        return rng.choice(self.user_agents)

    def random_delay(self, rng: random.Random) -> float:
        """Seconds to wait before a request, drawn from [min_delay, max_delay)."""
        span = self.max_delay - self.min_delay
        if span <= 0:
            return self.min_delay
        return self.min_delay + rng.random() * span

    def build_headers(self, rng: random.Random, **overrides: str) -> Dict[str, str]:
        headers = {"User-Agent": self.random_user_agent(rng), **BASE_HEADERS}
        headers.update(overrides)
        return headers
