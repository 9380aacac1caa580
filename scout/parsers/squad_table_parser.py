"""
Parsing helpers for fifacm.com squad tables.

Each `<tr>` with at least six `<td>` cells is a candidate player row:

    0 profile | 1 overall | 2 potential | 3 growth | 4 age | 5 price

Rows are admitted only when the profile is not a loan listing and both
potential and growth meet their minimums (inclusive). Anything malformed is
skipped silently; header and spacer rows are expected on every page.
"""
from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup

from scout.models.player import ScoutedPlayer, TeamSource

LOAN_MARKER = "Loan"
MIN_CELLS = 6

PROFILE_COL = 0
OVERALL_COL = 1
POTENTIAL_COL = 2
GROWTH_COL = 3
AGE_COL = 4
PRICE_COL = 5

TAG_RE = re.compile(r"<[^>]*>")
INT_RE = re.compile(r"[+-]?\d+")


def strip_tags(value: Optional[str]) -> str:
    """Remove markup tags and surrounding whitespace."""
    return TAG_RE.sub("", value or "").strip()


def parse_int(value: Optional[str]) -> Optional[int]:
    text = strip_tags(value)
    if not INT_RE.fullmatch(text):
        return None
    return int(text)


def _cell_text(cell) -> str:
    return strip_tags(cell.get_text())


def _parse_row(cells: List[str], source: TeamSource, min_potential: int, min_growth: int) -> Optional[ScoutedPlayer]:
    profile = cells[PROFILE_COL]
    if LOAN_MARKER in profile:
        return None

    potential = parse_int(cells[POTENTIAL_COL])
    if potential is None or potential < min_potential:
        return None

    growth = parse_int(cells[GROWTH_COL])
    if growth is None or growth < min_growth:
        return None

    return ScoutedPlayer(
        profile=profile,
        team=source.name,
        price=cells[PRICE_COL],
        age=parse_int(cells[AGE_COL]) or 0,
        overall=parse_int(cells[OVERALL_COL]) or 0,
        potential=potential,
        growth=growth,
    )


def extract_players(
    source: TeamSource,
    html: str,
    *,
    min_potential: int,
    min_growth: int,
) -> List[ScoutedPlayer]:
    """Return the admitted players of one squad page, in row order."""
    soup = BeautifulSoup(html or "", "lxml")
    players: List[ScoutedPlayer] = []
    for row in soup.find_all("tr"):
        cells = row.find_all("td", recursive=False)
        if len(cells) < MIN_CELLS:
            continue
        texts = [_cell_text(cell) for cell in cells[:MIN_CELLS]]
        player = _parse_row(texts, source, min_potential, min_growth)
        if player is not None:
            players.append(player)
    return players


__all__ = ["LOAN_MARKER", "strip_tags", "parse_int", "extract_players"]
