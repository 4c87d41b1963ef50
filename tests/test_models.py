"""Tests for game payload parsing and the effective kickoff instant."""

from datetime import datetime, timezone

import pytest

from dateutil import tz

from game_threads.models import Game
from tests.fakes import make_game


def test_effective_instant_applies_offset_to_wall_clock() -> None:
    game = make_game("g1", "2021-09-12T13:00:00-04:00", utc_offset=-4)

    assert game.scheduled_utc() == datetime(2021, 9, 12, 9, 0, tzinfo=timezone.utc)


def test_effective_instant_differs_from_iso_parse() -> None:
    game = make_game("g1", "2021-09-12T13:00:00-04:00", utc_offset=-4)

    assert game.scheduled_utc() != datetime(2021, 9, 12, 17, 0, tzinfo=timezone.utc)


def test_effective_instant_with_zero_offset_keeps_wall_clock() -> None:
    game = make_game("g1", "2021-10-19T23:30:00+00:00")

    assert game.scheduled_utc() == datetime(2021, 10, 19, 23, 30, tzinfo=timezone.utc)


def test_unparseable_schedule_has_no_instant() -> None:
    game = make_game("g1", "not a date")

    assert game.scheduled_utc() is None
    assert game.scheduled_local(tz.gettz("America/New_York")) is None


def test_scheduled_local_converts_to_zone() -> None:
    game = make_game("g1", "2021-09-12T17:00:00+00:00")

    local = game.scheduled_local(tz.gettz("America/New_York"))

    assert (local.day, local.hour, local.minute) == (12, 13, 0)


def test_from_payload_reads_nested_fields() -> None:
    game = Game.from_payload({
        "id": "abc",
        "status": "scheduled",
        "scheduled": "2021-09-12T13:00:00-04:00",
        "utc_offset": -4,
        "home": {"id": "h", "name": "Buffalo Bills", "alias": "BUF"},
        "away": {"id": "a", "name": "Pittsburgh Steelers", "alias": "PIT"},
        "venue": {"id": "v", "name": "Highmark Stadium", "city": "Orchard Park", "state": "NY"},
        "scoring": {"home_points": 16, "away_points": 23},
    })

    assert game.home.name == "Buffalo Bills"
    assert game.away.alias == "PIT"
    assert game.venue.city == "Orchard Park"
    assert game.scoring.away_points == 23
    assert game.utc_offset == -4


def test_from_payload_tolerates_missing_fields() -> None:
    game = Game.from_payload({"id": "abc", "scheduled": "2021-09-12T13:00:00+00:00"})

    assert game.utc_offset == 0
    assert game.home.name == "TBD"
    assert game.scoring.home_points == 0


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"id": "g", "scheduled": 123}, "game.scheduled"),
        ({"id": "g", "home": "BUF"}, "team"),
        ({"id": "g", "utc_offset": "-4"}, "game.utc_offset"),
        ({"id": "g", "scoring": {"home_points": True}}, "scoring.home_points"),
        (["g"], "game"),
    ],
)
def test_from_payload_rejects_wrong_shapes(payload, message) -> None:
    with pytest.raises(ValueError, match=message):
        Game.from_payload(payload)
