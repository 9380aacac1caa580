"""
CLI entrypoint for the high-potential player scout.

Usage:
    python -m scout.cli.scout_players
    python -m scout.cli.scout_players --min-potential 75 --concurrency 2 --output out.json
    python -m scout.cli.scout_players --team "Walsall" --team "Barrow"
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Iterable, List, Optional

from scout.aggregators.squad_aggregator import SquadAggregator
from scout.config.settings import ScoutSettings
from scout.errors import WriteError
from scout.models.player import TeamSource
from scout.repositories.player_export_repository import PlayerExportRepository
from scout.utils.team_catalog import get_team_sources

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("ScoutPlayers")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scout high-potential players from fifacm.com team pages")
    parser.add_argument("--min-potential", type=int, default=None, help="Minimum potential rating (inclusive)")
    parser.add_argument("--min-growth", type=int, default=None, help="Minimum growth (inclusive)")
    parser.add_argument("--concurrency", type=int, default=None, help="Simultaneous team fetches")
    parser.add_argument("--min-delay", type=float, default=None, help="Minimum pre-request delay in seconds")
    parser.add_argument("--max-delay", type=float, default=None, help="Maximum pre-request delay in seconds")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--output", dest="output_path", default=None, help="Output JSON file")
    parser.add_argument(
        "--team",
        dest="teams",
        action="append",
        default=None,
        help="Restrict the run to this team (repeatable)",
    )
    parser.add_argument(
        "--fail-on-empty",
        action="store_true",
        default=None,
        help="Exit with status 1 when every team fetch failed",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def resolve_settings(args: argparse.Namespace) -> ScoutSettings:
    return ScoutSettings.from_env().with_overrides(
        min_potential=args.min_potential,
        min_growth=args.min_growth,
        concurrency=args.concurrency,
        min_delay=args.min_delay,
        max_delay=args.max_delay,
        timeout=args.timeout,
        output_path=args.output_path,
        fail_on_empty=args.fail_on_empty,
    )


async def run_scout(settings: ScoutSettings, sources: Optional[List[TeamSource]] = None) -> int:
    if sources is None:
        sources = get_team_sources()
    result = await SquadAggregator(settings).run(sources)

    try:
        PlayerExportRepository(settings.output_path).save(result)
    except WriteError as exc:
        logger.error("Error writing to file: %s", exc)

    logger.info("Scouting completed in %.2fs", result.elapsed_seconds)
    logger.info(result.summary())
    for source in result.failed_sources:
        logger.info("Failed team: %s", source.name)

    if settings.fail_on_empty and sources and not result.succeeded_sources:
        logger.error("No team page could be fetched")
        return 1
    return 0


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)
    try:
        settings = resolve_settings(args)
        sources = get_team_sources(args.teams)
    except (ValueError, KeyError) as exc:
        parser.error(str(exc))
    return asyncio.run(run_scout(settings, sources))


if __name__ == "__main__":
    raise SystemExit(main())
