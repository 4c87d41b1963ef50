# game_threads/handlers/reconcile_handler.py
"""
Handler responsible for one reconciliation pass.

A pass makes sure the current game week has a thread, posts today's digest
once per calendar day and keeps the thread alive when it has been quiet for
too long. It is a function of (config, state, today, now, collaborators): the
input state is never mutated and the updated state is returned for the
caller to persist.
"""

from __future__ import annotations

import logging
import random
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Iterator, List, Optional

import requests

from ..config import AppConfig, LeagueProfile
from ..errors import CollaboratorError
from ..gateways import ARCHIVE_ONE_DAY, PUBLIC_THREAD, ChatPlatform, ScheduleProvider
from ..models import BotState, GameWeek, Thread
from ..services.digest_service import (
    WELCOME_MESSAGE,
    build_digest_embed,
    build_digest_text,
    choose_filler,
)
from ..weeks import generate_game_weeks, resolve_current_week, thread_name


@contextmanager
def _step(name: str) -> Iterator[None]:
    """Wrap collaborator failures with the name of the step that made the call."""
    try:
        yield
    except (requests.RequestException, ValueError) as e:
        raise CollaboratorError(name, e) from e


@dataclass
class ReconcileHandler:
    """Runs the thread / digest / keep-alive pass against the given collaborators."""

    config: AppConfig
    schedule: ScheduleProvider
    chat: ChatPlatform
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    rng: random.Random = field(default_factory=random.Random)

    @property
    def profile(self) -> LeagueProfile:
        return self.config.profile

    @property
    def app_tz(self):
        return self.config.app_tz

    def current_week(self, today: date) -> GameWeek:
        weeks = generate_game_weeks(self.profile.week1_start, self.profile.week1_end)
        return resolve_current_week(weeks, today)

    def season_year(self, state: BotState) -> int:
        """State wins, then config, then the year of the first week."""
        return state.season_year or self.config.season_year or self.profile.week1_start.year

    def _find_thread(self, threads: List[Thread], name: str) -> Optional[Thread]:
        for th in threads:
            self.logger.debug(
                "found thread id=%s name=%r topic=%r channel=%s", th.id, th.name, th.topic, th.parent_id
            )
            if th.parent_id == self.config.channel_id and th.name == name:
                return th
        return None

    def _ensure_thread(self, week: GameWeek, state: BotState, now: datetime):
        name = thread_name(week, self.profile.label)

        with _step("list active threads"):
            threads = self.chat.list_active_threads(self.config.guild_id)

        target = self._find_thread(threads, name)
        if target is not None:
            return target, state

        with _step("create thread"):
            target = self.chat.create_thread(
                self.config.channel_id, name, thread_type=PUBLIC_THREAD, auto_archive=ARCHIVE_ONE_DAY
            )
        with _step("send welcome message"):
            self.chat.send_message(target.id, WELCOME_MESSAGE)

        self.logger.info("created thread %r (%s)", name, target.id)
        return target, replace(state, last_activity=now)

    def _post_digest(self, thread: Thread, week: GameWeek, state: BotState, today: date, now: datetime) -> BotState:
        with _step("get games"):
            games = self.schedule.get_games_on_day(state.season_year, week.week_no, today)

        if self.profile.embed_digest:
            embed = build_digest_embed(self.profile, today, games, self.app_tz)
            with _step("send daily schedule"):
                self.chat.send_embed(thread.id, embed)
        else:
            text = build_digest_text(self.profile, today, games, self.app_tz)
            with _step("send daily schedule"):
                self.chat.send_message(thread.id, text)

        self.logger.info("sent daily schedule to thread (%d games)", len(games))
        return replace(state, last_activity=now, last_digest_day=today)

    def _is_idle(self, state: BotState, now: datetime) -> bool:
        if state.last_activity is None:
            return True
        return now - state.last_activity > self.profile.idle_threshold

    def _post_filler(self, thread: Thread, state: BotState, now: datetime) -> BotState:
        message = choose_filler(state.filler_messages, self.rng, self.profile.label)
        with _step("send filler message"):
            self.chat.send_message(thread.id, message)

        self.logger.info("sent filler message to thread")
        return replace(state, last_activity=now)

    def run(self, state: BotState, today: date, now: datetime) -> BotState:
        """
        Execute one pass and return the updated state.

        Raises:
            NoCurrentWeekError when today is past the last week.
            CollaboratorError when a schedule or chat call fails.
        """
        week = self.current_week(today)

        if self.profile.preseason_guard and today < week.first_day:
            self.logger.debug("waiting for first day of week %d (%s)", week.week_no, week.first_day)
            return state

        self.logger.debug("starting week %d (%s - %s)", week.week_no, week.first_day, week.last_day)

        state = replace(state, season_year=self.season_year(state))

        thread, state = self._ensure_thread(week, state, now)

        if state.last_digest_day != today:
            state = self._post_digest(thread, week, state, today, now)
        else:
            self.logger.debug("digest already sent for %s", today)

        if self._is_idle(state, now):
            state = self._post_filler(thread, state, now)

        return state
