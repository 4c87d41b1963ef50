# game_threads/models.py
"""
Domain models for the bot.

The from_payload constructors raise ValueError when the API sends a shape
they cannot read, the same way a JSON decode failure does.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, List, Optional

from dateutil import parser as dtparser


def safe_int(v, default=0) -> int:
    """Convert a value to int safely; return default on failures."""
    try:
        return int(v)
    except Exception:
        return default


def as_object(payload: Any, what: str) -> Dict[str, Any]:
    """A JSON object, or {} for null; anything else is a decode error."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError(f"{what}: expected an object, got {type(payload).__name__}")
    return payload


def _str_field(payload: Dict[str, Any], key: str, what: str) -> str:
    """String (or number, for ids) field; missing/null is ""."""
    v = payload.get(key)
    if v is None:
        return ""
    if isinstance(v, bool) or not isinstance(v, (str, int)):
        raise ValueError(f"{what}.{key}: expected a string, got {type(v).__name__}")
    return str(v)


def _int_field(payload: Dict[str, Any], key: str, what: str) -> int:
    v = payload.get(key)
    if v is None:
        return 0
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{what}.{key}: expected an integer, got {type(v).__name__}")
    return v


@dataclass(frozen=True)
class GameWeek:
    """A numbered week window. Bounds are calendar dates (midnight-truncated)."""
    week_no: int
    first_day: date
    last_day: date


@dataclass(frozen=True)
class Team:
    id: str = ""
    name: str = ""
    alias: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "Team":
        payload = as_object(payload, "team")
        alias = _str_field(payload, "alias", "team")
        return cls(
            id=_str_field(payload, "id", "team"),
            name=_str_field(payload, "name", "team") or alias or "TBD",
            alias=alias,
        )


@dataclass(frozen=True)
class Venue:
    id: str = ""
    name: str = ""
    city: str = ""
    state: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "Venue":
        payload = as_object(payload, "venue")
        return cls(
            id=_str_field(payload, "id", "venue"),
            name=_str_field(payload, "name", "venue"),
            city=_str_field(payload, "city", "venue"),
            state=_str_field(payload, "state", "venue"),
        )


@dataclass(frozen=True)
class Scoring:
    home_points: int = 0
    away_points: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "Scoring":
        payload = as_object(payload, "scoring")
        return cls(
            home_points=_int_field(payload, "home_points", "scoring"),
            away_points=_int_field(payload, "away_points", "scoring"),
        )


@dataclass(frozen=True)
class Game:
    """
    A scheduled game as returned by the schedule API.

    `scheduled` is kept as the raw string from the payload; `utc_offset` is the
    venue offset in whole hours.
    """
    id: str
    status: str
    scheduled: str
    utc_offset: int
    home: Team
    away: Team
    venue: Venue = field(default_factory=Venue)
    scoring: Scoring = field(default_factory=Scoring)

    @classmethod
    def from_payload(cls, payload: Any) -> "Game":
        """Build a Game from one entry of the schedule payload's games list."""
        payload = as_object(payload, "game")
        scheduled = payload.get("scheduled")
        if scheduled is not None and not isinstance(scheduled, str):
            raise ValueError(f"game.scheduled: expected a string, got {type(scheduled).__name__}")
        return cls(
            id=_str_field(payload, "id", "game"),
            status=_str_field(payload, "status", "game"),
            scheduled=scheduled or "",
            utc_offset=_int_field(payload, "utc_offset", "game"),
            home=Team.from_payload(payload.get("home")),
            away=Team.from_payload(payload.get("away")),
            venue=Venue.from_payload(payload.get("venue")),
            scoring=Scoring.from_payload(payload.get("scoring")),
        )

    def scheduled_utc(self) -> Optional[datetime]:
        """
        Effective kickoff instant.

        The literal scheduled time is shifted by `utc_offset` hours and the
        resulting wall-clock fields are relabeled as UTC. This is not an
        ISO-8601 conversion: "2021-09-12T13:00:00-04:00" with offset -4 gives
        09:00Z, not 17:00Z. Downstream output depends on this value.

        Returns None when the scheduled string cannot be parsed.
        """
        try:
            local = dtparser.isoparse(self.scheduled)
        except (ValueError, OverflowError):
            return None

        local = local + timedelta(hours=self.utc_offset)
        return local.replace(tzinfo=timezone.utc)

    def scheduled_local(self, tz: Optional[tzinfo]) -> Optional[datetime]:
        """Effective kickoff instant converted to the given zone."""
        utc = self.scheduled_utc()
        if utc is None:
            return None
        return utc.astimezone(tz)


@dataclass(frozen=True)
class Thread:
    """An active Discord thread."""
    id: str
    name: str
    parent_id: str
    topic: str = ""


@dataclass(frozen=True)
class Embed:
    """Rich message body for the chat platform."""
    title: str
    description: str
    url: str = ""
    footer: str = ""


@dataclass(frozen=True)
class BotState:
    """
    Record persisted between runs.

    None / 0 / empty means "never happened" for each field.
    """
    last_activity: Optional[datetime] = None
    last_digest_day: Optional[date] = None
    season_year: int = 0
    filler_messages: List[str] = field(default_factory=list)
