"""
Value objects shared by the scouting pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class TeamSource:
    """One team squad page. Two sources are the same page when their URLs match."""

    name: str = field(compare=False)
    url: str


@dataclass(frozen=True)
class RawPage:
    source: TeamSource
    html: str


@dataclass(frozen=True)
class ScoutedPlayer:
    profile: str
    team: str
    price: str
    age: int
    overall: int
    potential: int
    growth: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile,
            "team": self.team,
            "price": self.price,
            "age": self.age,
            "overall": self.overall,
            "potential": self.potential,
            "growth": self.growth,
        }


@dataclass(frozen=True)
class SourceReport:
    """Outcome of one fetch+extract pipeline."""

    source: TeamSource
    player_count: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RunResult:
    players: Tuple[ScoutedPlayer, ...]
    reports: Tuple[SourceReport, ...]
    elapsed_seconds: float
    min_potential: int
    min_growth: int

    @property
    def count(self) -> int:
        return len(self.players)

    @property
    def failed_sources(self) -> List[TeamSource]:
        return [report.source for report in self.reports if not report.ok]

    @property
    def succeeded_sources(self) -> List[TeamSource]:
        return [report.source for report in self.reports if report.ok]

    def summary(self) -> str:
        return (
            f"Found {self.count} players with potential >= {self.min_potential} "
            f"and growth >= {self.min_growth} in {self.elapsed_seconds:.2f}s "
            f"({len(self.succeeded_sources)}/{len(self.reports)} teams ok)"
        )


__all__ = ["TeamSource", "RawPage", "ScoutedPlayer", "SourceReport", "RunResult"]
