"""
Static catalog of the League Two squad pages scouted on fifacm.com (FC 25 data).
"""
from __future__ import annotations

from typing import Dict, List, Optional

from scout.models.player import TeamSource

FIFACM_TEAM_URL = "https://www.fifacm.com/25/team/{team_id}/{slug}"

# team name -> (fifacm team id, url slug)
LEAGUE_TWO_TEAMS: Dict[str, tuple] = {
    "Bradford City": (1804, "bradford-city"),
    "Doncaster Rovers": (142, "doncaster-rovers"),
    "Carlisle United": (1480, "carlisle-united"),
    "Swindon Town": (1934, "swindon-town"),
    "Chesterfield": (1924, "chesterfield"),
    "Tranmere Rovers": (15048, "tranmere-rovers"),
    "Crewe Alexandra": (121, "crewe-alexandra"),
    "Walsall": (1803, "walsall"),
    "Notts County": (1937, "notts-county"),
    "Port Vale": (1928, "port-vale"),
    "Grimsby Town": (92, "grimsby-town"),
    "Gillingham": (1802, "gillingham"),
    "Cheltenham Town": (1936, "cheltenham-town"),
    "Milton Keynes Dons": (1798, "milton-keynes-dons"),
    "AFC Wimbledon": (112259, "afc-wimbledon"),
    "Salford City": (113926, "salford-city"),
    "Newport County": (112254, "newport-county"),
    "Bromley": (112764, "bromley"),
    "Barrow": (381, "barrow"),
    "Harrogate Town": (112222, "harrogate-town"),
    "Fleetwood Town": (112260, "fleetwood-town"),
    "Morecambe": (357, "morecambe"),
    "Accrington Stanley": (110313, "accrington-stanley"),
    "Colchester United": (1935, "colchester-united"),
}


def build_team_url(team_id: int, slug: str) -> str:
    return FIFACM_TEAM_URL.format(team_id=team_id, slug=slug)


def get_team_sources(names: Optional[List[str]] = None) -> List[TeamSource]:
    """
    Return the catalog as TeamSource entries, in catalog order.
    When `names` is given only those teams are returned; unknown names raise KeyError.
    """
    if names is None:
        selected = list(LEAGUE_TWO_TEAMS)
    else:
        unknown = [name for name in names if name not in LEAGUE_TWO_TEAMS]
        if unknown:
            raise KeyError(f"Unknown team(s): {', '.join(unknown)}")
        selected = [name for name in LEAGUE_TWO_TEAMS if name in set(names)]
    return [
        TeamSource(name=name, url=build_team_url(*LEAGUE_TWO_TEAMS[name]))
        for name in selected
    ]


__all__ = ["LEAGUE_TWO_TEAMS", "build_team_url", "get_team_sources"]
