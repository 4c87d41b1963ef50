# game_threads/config.py
"""
Configuration for the game threads bot.

This module centralizes all tunable settings (credentials, target guild and
channel, league profile, state file location and timezone). Values come from
the environment; a local .env file is loaded first when present.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, timedelta
import os
from typing import Dict, Optional, Tuple

from dateutil import tz as dateutil_tz
from dotenv import load_dotenv

from .errors import ConfigError

load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, returning default on missing/invalid values."""
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag; accepts 1/true/yes/on (case-insensitive)."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_date(name: str) -> Optional[date]:
    """
    Read an ISO date (YYYY-MM-DD) from the environment.

    Unlike the other helpers, a malformed value is an error: a silently
    ignored anchor would shift every thread name.
    """
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as e:
        raise ConfigError(f"{name} must be an ISO date, got {raw!r}") from e


@dataclass(frozen=True)
class LeagueProfile:
    """
    Everything that differs between leagues.

    Notes:
      - columns: digest table columns, any of "away", "home", "scheduled".
      - schedule_path: formatted with year, week and season_type.
      - preseason_guard: skip the pass while today is before the week's first day.
    """

    key: str
    label: str
    columns: Tuple[str, ...]
    idle_threshold: timedelta
    preseason_guard: bool
    embed_digest: bool
    schedule_path: str
    schedule_url: str
    week1_start: date
    week1_end: date
    footer: str = "Powered by game-threads"


LEAGUE_PROFILES: Dict[str, LeagueProfile] = {
    "nfl": LeagueProfile(
        key="nfl",
        label="NFL",
        columns=("away", "home", "scheduled"),
        idle_threshold=timedelta(hours=6),
        preseason_guard=True,
        embed_digest=True,
        schedule_path="/nfl/official/trial/v6/en/games/{year}/{season_type}/{week}/schedule.json",
        schedule_url="https://www.espn.com/nfl/schedule",
        week1_start=date(2021, 9, 9),
        week1_end=date(2021, 9, 14),
    ),
    "nba": LeagueProfile(
        key="nba",
        label="NBA",
        columns=("away", "home"),
        idle_threshold=timedelta(hours=16),
        preseason_guard=False,
        embed_digest=False,
        schedule_path="/nba/trial/v7/en/games/{year}/{season_type}/schedule.json",
        schedule_url="https://www.espn.com/nba/schedule",
        week1_start=date(2021, 10, 19),
        week1_end=date(2021, 10, 26),
    ),
}


def get_profile(key: str) -> LeagueProfile:
    """Look up a built-in league profile by key (case-insensitive)."""
    try:
        return LEAGUE_PROFILES[key.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(LEAGUE_PROFILES))
        raise ConfigError(f"unknown league {key!r} (known: {known})") from None


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable app configuration.

    Fields are read from the environment when the instance is created, so
    tests can set variables before constructing one.
    """

    debug: bool = field(default_factory=lambda: _env_bool("GAME_THREADS_DEBUG"))
    bot_token: str = field(default_factory=lambda: os.getenv("GAME_THREADS_BOT_TOKEN", ""))
    channel_id: str = field(default_factory=lambda: os.getenv("GAME_THREADS_CHANNEL", ""))
    guild_id: str = field(default_factory=lambda: os.getenv("GAME_THREADS_GUILD", ""))
    api_key: str = field(default_factory=lambda: os.getenv("GAME_THREADS_API_KEY", ""))
    api_base: str = field(default_factory=lambda: os.getenv("GAME_THREADS_API_BASE", "https://api.sportradar.us"))
    league: str = field(default_factory=lambda: os.getenv("GAME_THREADS_LEAGUE", "nfl"))
    season_year: int = field(default_factory=lambda: _env_int("GAME_THREADS_SEASON", 0))
    state_file: str = field(default_factory=lambda: os.getenv("GAME_THREADS_STATE_FILE", ".state.json"))
    tz: str = field(default_factory=lambda: os.getenv("TZ", "America/New_York"))

    # Filled in __post_init__ from `league` plus the optional overrides
    profile: Optional[LeagueProfile] = None

    def __post_init__(self):
        """
        Resolve the league profile and apply env overrides.

        Supported env options:
          - GAME_THREADS_WEEK1_START / GAME_THREADS_WEEK1_END (ISO dates)
          - GAME_THREADS_IDLE_HOURS (int)
        """
        # dataclass frozen => use object.__setattr__
        profile = self.profile or get_profile(self.league)

        start = _env_date("GAME_THREADS_WEEK1_START")
        end = _env_date("GAME_THREADS_WEEK1_END")
        if start or end:
            profile = replace(
                profile,
                week1_start=start or profile.week1_start,
                week1_end=end or profile.week1_end,
            )

        idle_hours = _env_int("GAME_THREADS_IDLE_HOURS", 0)
        if idle_hours > 0:
            profile = replace(profile, idle_threshold=timedelta(hours=idle_hours))

        object.__setattr__(self, "profile", profile)

    @property
    def app_tz(self):
        """Configured timezone; the machine's local zone when TZ is not a known name."""
        return dateutil_tz.gettz(self.tz) or dateutil_tz.tzlocal()

    def masked_token(self) -> str:
        """The bot token with all but the last four characters hidden."""
        if len(self.bot_token) <= 4:
            return "*" * len(self.bot_token)
        return "*" * (len(self.bot_token) - 4) + self.bot_token[-4:]
