"""
Persists a scouting run as a JSON array of player objects.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Union

from scout.errors import WriteError
from scout.models.player import RunResult, ScoutedPlayer

logger = logging.getLogger(__name__)


class PlayerExportRepository:
    def __init__(self, output_path: Union[str, Path]):
        self.output_path = Path(output_path)

    def save(self, result: RunResult) -> Path:
        return self.save_players(result.players)

    def save_players(self, players: Iterable[ScoutedPlayer]) -> Path:
        """Overwrite the output file with `players`; raises WriteError on failure."""
        path = self.output_path
        try:
            payload = json.dumps([player.to_dict() for player in players], indent=2, ensure_ascii=False)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise WriteError(path, exc) from exc
        logger.info("Results saved to %s", path)
        return path
