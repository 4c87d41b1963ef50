# game_threads/sportradar_client.py
"""
Thin HTTP client wrapper for the Sportradar schedule endpoints.
"""

from __future__ import annotations

import requests
from typing import Any, Dict, Optional


class SportradarClient:
    """A minimal client for retrieving JSON from the Sportradar API base."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
    ) -> None:
        """Store the base URL, credential and HTTP session."""
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout
        self._headers = {"User-Agent": "game-threads/1.0", "Accept": "application/json"}

    def get_json(self, path: str) -> Dict[str, Any]:
        """
        Execute a GET request to base_url + path and return parsed JSON.

        Raises:
            requests.HTTPError on non-2xx responses.
            ValueError when the body is not JSON.
        """
        url = f"{self.base_url}{path}"
        r = self.session.get(
            url,
            params={"api_key": self.api_key},
            headers=self._headers,
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    def schedule(self, path_template: str, year: int, week: int, season_type: str = "REG") -> Dict[str, Any]:
        """Fetch a schedule payload; path_template is formatted with year, week and season_type."""
        path = path_template.format(year=year, week=week, season_type=season_type)
        return self.get_json(path)
