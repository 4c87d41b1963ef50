"""Tests for the Sportradar client, schedule service and game-day filter."""

from datetime import date

import pytest
import requests
from dateutil import tz

from game_threads.config import LEAGUE_PROFILES
from game_threads.services.schedule_service import ScheduleService, games_on_day
from game_threads.sportradar_client import SportradarClient
from tests.fakes import FakeResponse, FakeSession, make_game

EASTERN = tz.gettz("America/New_York")


def _week_games():
    return [
        # effective 17:00Z -> 1:00 PM EDT on Sep 12
        make_game("sun", "2021-09-12T17:00:00+00:00"),
        # effective 16:15Z -> Sep 13 local
        make_game("mon", "2021-09-13T20:15:00-04:00", utc_offset=-4),
    ]


def test_games_on_day_returns_matching_game() -> None:
    result = games_on_day(_week_games(), date(2021, 9, 12), EASTERN)

    assert [g.id for g in result] == ["sun"]


def test_games_on_day_returns_empty_for_day_without_games() -> None:
    assert games_on_day(_week_games(), date(2021, 9, 15), EASTERN) == []


def test_games_on_day_uses_local_calendar_date() -> None:
    # 01:00Z on Sep 12 is still Sep 11 in New York
    late = make_game("late", "2021-09-12T01:00:00+00:00")

    assert games_on_day([late], date(2021, 9, 12), EASTERN) == []
    assert games_on_day([late], date(2021, 9, 11), EASTERN) == [late]


def test_games_on_day_skips_unparseable_times() -> None:
    assert games_on_day([make_game("tbd", "")], date(2021, 9, 12), EASTERN) == []


def test_client_builds_schedule_url_with_api_key() -> None:
    session = FakeSession(FakeResponse(200, {"week": {"games": []}}))
    client = SportradarClient("https://api.example.com/", "secret", session=session)

    client.schedule(LEAGUE_PROFILES["nfl"].schedule_path, 2021, 3)

    req = session.requests[0]
    assert req["url"] == "https://api.example.com/nfl/official/trial/v6/en/games/2021/REG/3/schedule.json"
    assert req["params"] == {"api_key": "secret"}


def test_client_raises_on_non_success_status() -> None:
    session = FakeSession(FakeResponse(403, {"message": "forbidden"}))
    client = SportradarClient("https://api.example.com", "secret", session=session)

    with pytest.raises(requests.HTTPError):
        client.get_json("/anything")


def test_client_raises_on_undecodable_body() -> None:
    session = FakeSession(FakeResponse(200, text="<html>oops</html>"))
    client = SportradarClient("https://api.example.com", "secret", session=session)

    with pytest.raises(ValueError):
        client.get_json("/anything")


def test_service_reads_weekly_payload_shape() -> None:
    payload = {
        "id": "season",
        "week": {
            "sequence": 1,
            "games": [
                {"id": "g1", "scheduled": "2021-09-12T17:00:00+00:00", "home": {"name": "Bills"}, "away": {"name": "Steelers"}},
                {"id": "g2", "scheduled": "2021-09-13T20:15:00-04:00", "utc_offset": -4},
            ],
        },
    }
    client = SportradarClient("https://api.example.com", "k", session=FakeSession(FakeResponse(200, payload)))
    service = ScheduleService(client, LEAGUE_PROFILES["nfl"].schedule_path, "America/New_York")

    games = service.get_games_on_day(2021, 1, date(2021, 9, 12))

    assert [(g.id, g.away.name, g.home.name) for g in games] == [("g1", "Steelers", "Bills")]


def test_service_reads_flat_games_payload_shape() -> None:
    payload = {"games": [{"id": "n1", "scheduled": "2021-10-19T23:30:00+00:00"}]}
    client = SportradarClient("https://api.example.com", "k", session=FakeSession(FakeResponse(200, payload)))
    service = ScheduleService(client, LEAGUE_PROFILES["nba"].schedule_path, "America/New_York")

    assert [g.id for g in service.get_week_schedule(2021, 1)] == ["n1"]


def test_service_returns_nothing_for_unknown_payload_shape() -> None:
    client = SportradarClient("https://api.example.com", "k", session=FakeSession(FakeResponse(200, {"other": 1})))
    service = ScheduleService(client, LEAGUE_PROFILES["nfl"].schedule_path, "America/New_York")

    assert service.get_week_schedule(2021, 1) == []
