# game_threads/state.py
"""
JSON state file shared between runs.

A missing file is the zero state. Anything else that stops the file from
being read or written raises StateError. There is no locking; at most one
run may use a given file at a time.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dateutil import parser as dtparser

from .errors import StateError
from .models import BotState, safe_int

PathLike = Union[str, Path]


def _pick(raw: Dict[str, Any], *keys: str):
    """First present, non-null value among keys (current names first, then legacy ones)."""
    for k in keys:
        if raw.get(k) is not None:
            return raw[k]
    return None


def _parse_instant(value: Any) -> Optional[datetime]:
    if not value:
        return None
    dt = dtparser.isoparse(str(value))
    # Year 1 is the zero timestamp written by older state files
    if dt.year <= 1:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _parse_day(value: Any) -> Optional[date]:
    instant = _parse_instant(value)
    return instant.date() if instant else None


def state_from_dict(raw: Dict[str, Any]) -> BotState:
    """Build a BotState; accepts both snake_case keys and the older CamelCase ones."""
    fillers = _pick(raw, "filler_messages", "FootballFacts") or []
    if not isinstance(fillers, list):
        raise ValueError("filler_messages must be a list")

    return BotState(
        last_activity=_parse_instant(_pick(raw, "last_activity", "LastActivity")),
        last_digest_day=_parse_day(_pick(raw, "last_digest_day", "LastDay")),
        season_year=safe_int(_pick(raw, "season_year", "Year")),
        filler_messages=[str(m) for m in fillers],
    )


def state_to_dict(state: BotState) -> Dict[str, Any]:
    return {
        "last_activity": state.last_activity.isoformat() if state.last_activity else None,
        "last_digest_day": state.last_digest_day.isoformat() if state.last_digest_day else None,
        "season_year": state.season_year,
        "filler_messages": list(state.filler_messages),
    }


def load_state(path: PathLike) -> BotState:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        return BotState()
    except OSError as e:
        raise StateError(f"failed to read state file {p}: {e}") from e

    try:
        raw = json.loads(text)
        if not isinstance(raw, dict):
            raise ValueError("state file must contain a JSON object")
        return state_from_dict(raw)
    except (ValueError, OverflowError) as e:
        raise StateError(f"failed to decode state file {p}: {e}") from e


def save_state(path: PathLike, state: BotState) -> None:
    """Write the whole state, replacing the previous file atomically."""
    p = Path(path)
    tmp = p.with_name(p.name + ".tmp")
    try:
        tmp.write_text(json.dumps(state_to_dict(state), indent=2), encoding="utf-8")
        tmp.replace(p)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise StateError(f"failed to write state file {p}: {e}") from e
