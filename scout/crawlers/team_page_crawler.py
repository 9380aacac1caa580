"""
Fetches a single team squad page over HTTP.
"""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

import httpx

from scout.errors import FetchError
from scout.models.player import RawPage, TeamSource
from scout.utils.request_policy import RequestPolicy

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class TeamPageCrawler:
    """
    One GET per team page, preceded by a jittered sleep.

    The crawler does not own the client; callers open and close it. Each
    crawler keeps its own RNG so concurrent workers pace independently.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        policy: Optional[RequestPolicy] = None,
        *,
        rng: Optional[random.Random] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.client = client
        self.policy = policy or RequestPolicy()
        self.rng = rng or self.policy.spawn_rng()
        self.timeout = timeout

    async def fetch(self, source: TeamSource) -> RawPage:
        delay = self.policy.random_delay(self.rng)
        if delay > 0:
            logger.debug("Waiting %.2fs before fetching %s", delay, source.name)
            await asyncio.sleep(delay)

        headers = self.policy.build_headers(self.rng)
        try:
            response = await self.client.get(source.url, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as exc:
            raise FetchError(source.name, f"HTTP request failed: {exc!r}") from exc

        if not response.is_success:
            raise FetchError(
                source.name,
                f"HTTP request failed with status: {response.status_code} {response.reason_phrase}",
            )

        try:
            html = response.text
        except (UnicodeDecodeError, LookupError) as exc:
            raise FetchError(source.name, f"reading response body failed: {exc}") from exc

        logger.debug("Fetched %s (%d bytes)", source.name, len(response.content))
        return RawPage(source=source, html=html)
