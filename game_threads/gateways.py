# game_threads/gateways.py
"""
Contracts for the external collaborators the reconciliation loop talks to.

Real implementations live in services/schedule_service.py and
discord_client.py; tests provide in-memory fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import List

from .models import Embed, Game, Thread

# Discord channel type for a public thread
PUBLIC_THREAD = 11
# Minutes before an idle thread is archived
ARCHIVE_ONE_DAY = 1440


class ScheduleProvider(ABC):
    """Source of scheduled games."""

    @abstractmethod
    def get_week_schedule(self, year: int, week: int) -> List[Game]:
        """All games of a season week."""

    @abstractmethod
    def get_games_on_day(self, year: int, week: int, day: date) -> List[Game]:
        """Games of a season week whose local kickoff falls on day."""


class ChatPlatform(ABC):
    """Threads and messages in a chat guild."""

    @abstractmethod
    def list_active_threads(self, guild_id: str) -> List[Thread]:
        ...

    @abstractmethod
    def create_thread(
        self,
        channel_id: str,
        name: str,
        thread_type: int = PUBLIC_THREAD,
        auto_archive: int = ARCHIVE_ONE_DAY,
    ) -> Thread:
        ...

    @abstractmethod
    def send_message(self, thread_id: str, text: str) -> None:
        ...

    @abstractmethod
    def send_embed(self, thread_id: str, embed: Embed) -> None:
        ...
