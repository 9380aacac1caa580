"""
Concurrent scouting run over a fixed list of team pages.

Each team gets one task: fetch -> extract -> hand players to a queue. A single
collector drains the queue. Shutdown is two-phase: all producers are joined
first, then the end-of-input sentinel is queued and the collector is joined,
so nothing handed off is lost.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Iterable, List, Optional

import httpx

from scout.config.settings import ScoutSettings
from scout.crawlers.team_page_crawler import TeamPageCrawler
from scout.errors import FetchError
from scout.models.player import RunResult, ScoutedPlayer, SourceReport, TeamSource
from scout.parsers.squad_table_parser import extract_players
from scout.utils.request_policy import RequestPolicy

logger = logging.getLogger(__name__)

_END_OF_INPUT = object()

ClientFactory = Callable[[], httpx.AsyncClient]
CrawlerFactory = Callable[[httpx.AsyncClient, RequestPolicy], TeamPageCrawler]


class SquadAggregator:
    """Runs bounded fetch+extract pipelines and collects admitted players."""

    def __init__(
        self,
        settings: Optional[ScoutSettings] = None,
        *,
        policy: Optional[RequestPolicy] = None,
        client_factory: Optional[ClientFactory] = None,
        crawler_factory: Optional[CrawlerFactory] = None,
    ):
        self.settings = (settings or ScoutSettings()).validated()
        self.policy = policy or RequestPolicy(
            min_delay=self.settings.min_delay,
            max_delay=self.settings.max_delay,
        )
        self.client_factory = client_factory or self._default_client
        self.crawler_factory = crawler_factory or self._default_crawler

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.settings.timeout, follow_redirects=True)

    def _default_crawler(self, client: httpx.AsyncClient, policy: RequestPolicy) -> TeamPageCrawler:
        return TeamPageCrawler(client, policy, rng=policy.spawn_rng(), timeout=self.settings.timeout)

    async def run(self, sources: Iterable[TeamSource]) -> RunResult:
        sources = list(sources)
        started = time.perf_counter()
        logger.info(
            "Starting player scouting: %d teams, concurrency=%d",
            len(sources),
            self.settings.concurrency,
        )

        queue: asyncio.Queue = asyncio.Queue()
        collected: List[ScoutedPlayer] = []
        gate = asyncio.Semaphore(self.settings.concurrency)

        async def collector() -> None:
            while True:
                item = await queue.get()
                if item is _END_OF_INPUT:
                    return
                collected.append(item)

        async with self.client_factory() as client:
            collector_task = asyncio.create_task(collector())
            producers = [
                asyncio.create_task(self._process_team(source, client, gate, queue))
                for source in sources
            ]
            reports = await asyncio.gather(*producers)
            await queue.put(_END_OF_INPUT)
            await collector_task

        result = RunResult(
            players=tuple(collected),
            reports=tuple(reports),
            elapsed_seconds=time.perf_counter() - started,
            min_potential=self.settings.min_potential,
            min_growth=self.settings.min_growth,
        )
        logger.debug("Scouting run finished: %d players from %d teams", result.count, len(sources))
        return result

    async def _process_team(
        self,
        source: TeamSource,
        client: httpx.AsyncClient,
        gate: asyncio.Semaphore,
        queue: asyncio.Queue,
    ) -> SourceReport:
        async with gate:
            crawler = self.crawler_factory(client, self.policy)
            try:
                page = await crawler.fetch(source)
            except FetchError as exc:
                logger.warning("Error fetching %s: %s", source.name, exc.cause)
                return SourceReport(source=source, error=str(exc))
            except Exception as exc:
                logger.exception("Unexpected error fetching %s", source.name)
                return SourceReport(source=source, error=f"{source.name}: {exc!r}")

            try:
                players = extract_players(
                    source,
                    page.html,
                    min_potential=self.settings.min_potential,
                    min_growth=self.settings.min_growth,
                )
            except Exception as exc:
                logger.exception("Unexpected error parsing %s", source.name)
                return SourceReport(source=source, error=f"{source.name}: {exc!r}")

            for player in players:
                await queue.put(player)

        if players:
            logger.info("%s: %d players matched", source.name, len(players))
        else:
            logger.info("%s: no players matched", source.name)
        return SourceReport(source=source, player_count=len(players))


async def scout_teams(
    sources: Iterable[TeamSource],
    settings: Optional[ScoutSettings] = None,
    **kwargs,
) -> RunResult:
    return await SquadAggregator(settings, **kwargs).run(sources)


__all__ = ["SquadAggregator", "scout_teams"]
