# game_threads/discord_client.py
"""
Discord REST client covering the handful of calls the bot needs.

The bot runs once and exits, so it talks to the HTTP API directly instead of
holding a gateway connection open.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from .gateways import ARCHIVE_ONE_DAY, PUBLIC_THREAD, ChatPlatform
from .models import Embed, Thread, as_object

DISCORD_API_BASE = "https://discord.com/api/v10"


def _thread_from_payload(payload: Any) -> Thread:
    """Raises ValueError for anything that is not a channel object with an id."""
    if not isinstance(payload, dict):
        raise ValueError(f"thread: expected an object, got {type(payload).__name__}")
    if not payload.get("id"):
        raise ValueError("thread: missing id")
    return Thread(
        id=str(payload["id"]),
        name=str(payload.get("name") or ""),
        parent_id=str(payload.get("parent_id") or ""),
        topic=str(payload.get("topic") or ""),
    )


class DiscordClient(ChatPlatform):
    """Bot-token authenticated client for threads and messages."""

    def __init__(
        self,
        token: str,
        base_url: str = DISCORD_API_BASE,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self._headers = {
            "Authorization": f"Bot {token}",
            "User-Agent": "DiscordBot (https://github.com/game-threads, 1.0)",
        }

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a request and return the decoded JSON body (None for empty bodies).

        Raises:
            requests.HTTPError on non-2xx responses.
        """
        r = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=payload,
            headers=self._headers,
            timeout=self.timeout,
        )
        r.raise_for_status()
        if not r.content:
            return None
        return r.json()

    def list_active_threads(self, guild_id: str) -> List[Thread]:
        data = as_object(self._request("GET", f"/guilds/{guild_id}/threads/active"), "active threads")
        threads = data.get("threads") or []
        if not isinstance(threads, list):
            raise ValueError(f"active threads: expected a list, got {type(threads).__name__}")
        return [_thread_from_payload(t) for t in threads]

    def create_thread(
        self,
        channel_id: str,
        name: str,
        thread_type: int = PUBLIC_THREAD,
        auto_archive: int = ARCHIVE_ONE_DAY,
    ) -> Thread:
        data = self._request(
            "POST",
            f"/channels/{channel_id}/threads",
            {"name": name, "type": thread_type, "auto_archive_duration": auto_archive},
        )
        return _thread_from_payload(data)

    def send_message(self, thread_id: str, text: str) -> None:
        self._request("POST", f"/channels/{thread_id}/messages", {"content": text})

    def send_embed(self, thread_id: str, embed: Embed) -> None:
        body: Dict[str, Any] = {"title": embed.title, "description": embed.description}
        if embed.url:
            body["url"] = embed.url
        if embed.footer:
            body["footer"] = {"text": embed.footer}
        self._request("POST", f"/channels/{thread_id}/messages", {"embeds": [body]})
