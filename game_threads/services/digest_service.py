# game_threads/services/digest_service.py
"""
Rendering of the daily schedule digest and the idle filler message.
"""

from __future__ import annotations

import random
from datetime import date, tzinfo
from typing import List, Optional, Sequence

from ..config import LeagueProfile
from ..models import Embed, Game

COLUMN_HEADERS = {
    "away": "AWAY",
    "home": "HOME",
    "scheduled": "SCHEDULED",
}

# Gap between columns
CELL_PADDING = 2

WELCOME_MESSAGE = "Welcome to the thread for the current game week.\n\n"


def default_filler(league: str) -> str:
    return (
        f"Hi! I'm the {league} Threads bot. "
        f"I'm here to help you keep track of the games in the {league}."
    )


def format_kickoff(game: Game, local_tz: Optional[tzinfo]) -> str:
    """Local kickoff like "1:00 PM EDT"; "TBD" when the time is unknown."""
    local = game.scheduled_local(local_tz)
    if local is None:
        return "TBD"
    return f"{local.strftime('%I:%M %p').lstrip('0')} {local.strftime('%Z')}".strip()


def _cell(game: Game, column: str, local_tz: Optional[tzinfo]) -> str:
    if column == "away":
        return game.away.name
    if column == "home":
        return game.home.name
    if column == "scheduled":
        return format_kickoff(game, local_tz)
    raise ValueError(f"unknown digest column: {column!r}")


def render_table(rows: Sequence[Sequence[str]]) -> str:
    """
    Left-aligned fixed-width table.

    Every column except the last is padded to its widest cell plus
    CELL_PADDING. Each row ends with a newline.
    """
    if not rows:
        return ""

    ncols = max(len(r) for r in rows)
    widths = [0] * ncols
    for r in rows:
        for i, cell in enumerate(r[:-1]):
            widths[i] = max(widths[i], len(cell))

    lines: List[str] = []
    for r in rows:
        parts = [cell.ljust(widths[i] + CELL_PADDING) for i, cell in enumerate(r[:-1])]
        parts.append(r[-1] if r else "")
        lines.append("".join(parts))
    return "\n".join(lines) + "\n"


def render_digest_table(games: Sequence[Game], columns: Sequence[str], local_tz: Optional[tzinfo]) -> str:
    """Header row plus one row per game."""
    unknown = [c for c in columns if c not in COLUMN_HEADERS]
    if unknown:
        raise ValueError(f"unknown digest column: {unknown[0]!r}")

    rows = [[COLUMN_HEADERS[c] for c in columns]]
    for g in games:
        rows.append([_cell(g, c, local_tz) for c in columns])
    return render_table(rows)


def digest_title(day: date) -> str:
    return f"Today's games {day:%A}, {day:%b} {day.day}."


def build_digest_embed(profile: LeagueProfile, day: date, games: Sequence[Game], local_tz: Optional[tzinfo]) -> Embed:
    body = render_digest_table(games, profile.columns, local_tz)
    return Embed(
        title=digest_title(day),
        description=f"```\n{body}\n```",
        url=profile.schedule_url,
        footer=profile.footer,
    )


def build_digest_text(profile: LeagueProfile, day: date, games: Sequence[Game], local_tz: Optional[tzinfo]) -> str:
    body = render_digest_table(games, profile.columns, local_tz)
    return f"**{digest_title(day)}**\n```\n{body}\n```"


def choose_filler(messages: Sequence[str], rng: random.Random, league: str) -> str:
    """Uniform pick from messages; the default greeting when there are none."""
    if not messages:
        return default_filler(league)
    return rng.choice(list(messages))
