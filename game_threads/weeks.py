# game_threads/weeks.py
"""
Game week calendar.

Weeks are derived, never stored: week 1 is the anchor pair and every later
week is the previous one shifted by seven days. The whole calendar is
recomputed on each run.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Mapping

from .errors import NoCurrentWeekError
from .models import GameWeek

WEEKS_IN_SEASON = 18
WEEK_SHIFT = timedelta(days=7)


def generate_game_weeks(first_week_start: date, first_week_end: date) -> Dict[int, GameWeek]:
    """Return weeks 1..18 keyed by week number."""
    weeks = {1: GameWeek(1, first_week_start, first_week_end)}
    for n in range(2, WEEKS_IN_SEASON + 1):
        prev = weeks[n - 1]
        weeks[n] = GameWeek(n, prev.first_day + WEEK_SHIFT, prev.last_day + WEEK_SHIFT)
    return weeks


def resolve_current_week(weeks: Mapping[int, GameWeek], today: date) -> GameWeek:
    """
    Return the first week (in week-number order) whose last day is after today.

    A date before week 1 resolves to week 1; callers decide whether the week
    has started. Raises NoCurrentWeekError once today is past the final week.
    """
    for n in sorted(weeks):
        week = weeks[n]
        if today < week.last_day:
            return week
    raise NoCurrentWeekError()


def _month_day(d: date) -> str:
    return f"{d:%b} {d.day:>2}"


def thread_name(week: GameWeek, league: str) -> str:
    """
    Thread title for a week, e.g. "NFL Game Week 1 (Sep  9 - 14)".

    Used as the lookup key for an existing thread, so the format must not drift.
    Day numbers are space padded to two characters.
    """
    start = _month_day(week.first_day)
    if week.first_day.month == week.last_day.month:
        stop = f"{week.last_day.day:>2}"
    else:
        stop = _month_day(week.last_day)
    return f"{league} Game Week {week.week_no} ({start} - {stop})"


def _midnight(d: date) -> datetime:
    return datetime.combine(d, time.min, tzinfo=timezone.utc)


def time_in_week(instant: datetime, week: GameWeek) -> bool:
    """
    True when instant is strictly between the week's first and last midnights (UTC).

    Naive datetimes are taken as UTC.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return _midnight(week.first_day) < instant < _midnight(week.last_day)
