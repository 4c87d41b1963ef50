# game_threads/services/schedule_service.py
"""
Game schedule logic.

Responsibilities:
  - fetch the schedule payload for a season week
  - normalize games
  - narrow a week's games to a single local calendar day
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Any, Dict, List, Optional, Sequence

from dateutil import tz

from ..gateways import ScheduleProvider
from ..models import Game
from ..sportradar_client import SportradarClient


def games_on_day(games: Sequence[Game], day: date, local_tz: Optional[tzinfo]) -> List[Game]:
    """
    Keep the games whose effective kickoff, in local_tz, falls on day.

    Order is preserved. No match is an empty list.
    """
    out: List[Game] = []
    for g in games:
        local = g.scheduled_local(local_tz)
        if local is None:
            continue
        if (local.year, local.month, local.day) == (day.year, day.month, day.day):
            out.append(g)
    return out


@dataclass
class ScheduleService(ScheduleProvider):
    """Schedule provider backed by the Sportradar API."""

    client: SportradarClient
    schedule_path: str
    tz_name: str
    season_type: str = "REG"

    @property
    def app_tz(self):
        """Return the configured timezone object used for all local conversions."""
        return tz.gettz(self.tz_name) or tz.tzlocal()

    def _normalize_games(self, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Flatten a schedule payload into a list of game objects.

        Weekly schedules nest games under "week"; season and daily schedules
        return {"games": [...]}.
        """
        if "games" in payload:
            return self._games_list(payload["games"])

        week = payload.get("week")
        if isinstance(week, dict) and "games" in week:
            return self._games_list(week["games"])

        return []

    def _games_list(self, games: Any) -> List[Any]:
        if games is None:
            return []
        if not isinstance(games, list):
            raise ValueError(f"games: expected a list, got {type(games).__name__}")
        return games

    def get_week_schedule(self, year: int, week: int) -> List[Game]:
        payload = self.client.schedule(self.schedule_path, year, week, self.season_type)
        if not isinstance(payload, dict):
            raise ValueError(f"unexpected schedule payload type: {type(payload).__name__}")
        return [Game.from_payload(g) for g in self._normalize_games(payload)]

    def get_games_on_day(self, year: int, week: int, day: date) -> List[Game]:
        return games_on_day(self.get_week_schedule(year, week), day, self.app_tz)
