from __future__ import annotations

import asyncio
from collections import Counter
from dataclasses import replace

import httpx
import pytest

from scout.aggregators.squad_aggregator import SquadAggregator, scout_teams
from scout.config.settings import ScoutSettings
from scout.errors import FetchError
from scout.models.player import RawPage, TeamSource
from scout.parsers.squad_table_parser import extract_players


def _row(name: str, potential: int, growth: int) -> str:
    cells = [name, "60", str(potential), str(growth), "20", "€1M"]
    return "<tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>"


def _page(team: str, count: int) -> str:
    rows = [_row(f"{team} Prospect {i}", 70 + i, 12 + i) for i in range(count)]
    rows.append(_row(f"{team} Veteran", 55, 0))
    rows.append(_row(f"{team} Loan Star", 90, 20))
    return "<table>" + "".join(rows) + "</table>"


SOURCES = [TeamSource(f"Team {i}", f"https://example.test/team/{i}") for i in range(6)]
PAGES = {source.url: _page(source.name, i) for i, source in enumerate(SOURCES)}
FAILING = {SOURCES[2].url}

SETTINGS = ScoutSettings(min_potential=70, min_growth=12, concurrency=3, min_delay=0.0, max_delay=0.0)


def _handler(request: httpx.Request) -> httpx.Response:
    url = str(request.url)
    if url in FAILING:
        return httpx.Response(503, text="unavailable")
    return httpx.Response(200, text=PAGES[url])


def _mock_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(_handler))


def _run(settings: ScoutSettings, sources=SOURCES):
    aggregator = SquadAggregator(settings, client_factory=_mock_client)
    return asyncio.run(aggregator.run(sources))


def _expected_players():
    expected = []
    for source in SOURCES:
        if source.url in FAILING:
            continue
        expected.extend(extract_players(source, PAGES[source.url], min_potential=70, min_growth=12))
    return expected


@pytest.mark.parametrize("concurrency", range(1, len(SOURCES) + 1))
def test_every_extracted_player_is_collected_exactly_once(concurrency):
    settings = replace(SETTINGS, concurrency=concurrency)

    result = _run(settings)

    assert Counter(result.players) == Counter(_expected_players())
    assert result.count == sum(i for i in range(len(SOURCES)) if SOURCES[i].url not in FAILING)


def test_concurrency_levels_yield_same_multiset():
    serial = _run(replace(SETTINGS, concurrency=1))
    parallel = _run(replace(SETTINGS, concurrency=3))

    assert Counter(serial.players) == Counter(parallel.players)


def test_failed_source_contributes_nothing_and_is_reported():
    result = _run(SETTINGS)

    assert [s.name for s in result.failed_sources] == ["Team 2"]
    assert all(p.team != "Team 2" for p in result.players)
    reports = {report.source.name: report for report in result.reports}
    assert reports["Team 2"].error and "503" in reports["Team 2"].error
    assert reports["Team 5"].player_count == 5
    assert reports["Team 0"].ok and reports["Team 0"].player_count == 0
    assert result.elapsed_seconds >= 0
    assert result.min_potential == 70


def test_players_from_one_team_keep_row_order():
    result = _run(SETTINGS)

    team_five = [p.potential for p in result.players if p.team == "Team 5"]
    assert team_five == [70, 71, 72, 73, 74]


class _TrackingCrawler:
    in_flight = 0
    peak = 0

    def __init__(self, client, policy):
        self.client = client

    async def fetch(self, source: TeamSource) -> RawPage:
        cls = _TrackingCrawler
        cls.in_flight += 1
        cls.peak = max(cls.peak, cls.in_flight)
        try:
            for _ in range(3):
                await asyncio.sleep(0)
            if source.name == "Team 4":
                raise FetchError(source.name, "boom")
            if source.name == "Team 1":
                raise RuntimeError("unexpected")
            return RawPage(source, PAGES[source.url])
        finally:
            cls.in_flight -= 1


@pytest.mark.parametrize("concurrency", [1, 2, 3])
def test_gate_bounds_in_flight_pipelines_and_releases_on_failure(concurrency):
    _TrackingCrawler.in_flight = 0
    _TrackingCrawler.peak = 0
    settings = replace(SETTINGS, concurrency=concurrency)
    aggregator = SquadAggregator(settings, client_factory=_mock_client, crawler_factory=_TrackingCrawler)

    result = asyncio.run(aggregator.run(SOURCES))

    assert _TrackingCrawler.peak == concurrency
    assert _TrackingCrawler.in_flight == 0
    assert {s.name for s in result.failed_sources} == {"Team 1", "Team 4"}
    assert {s.name for s in result.succeeded_sources} == {"Team 0", "Team 2", "Team 3", "Team 5"}


def test_empty_source_list_produces_empty_result():
    result = _run(SETTINGS, sources=[])

    assert result.count == 0
    assert result.reports == ()


def test_scout_teams_helper_runs_aggregator():
    result = asyncio.run(scout_teams(SOURCES[:2], SETTINGS, client_factory=_mock_client))

    assert result.count == 1
    assert result.players[0].profile == "Team 1 Prospect 0"
