from __future__ import annotations

import asyncio
from typing import Any

import httpx

from voltweb.services.api_client import ApiError
from voltweb.storage import MemStorage


def status_payload(current: int = 5, max_players: int = 20, online: bool = True) -> dict[str, Any]:
    """A /api/query-server body as the site API returns it."""
    return {
        "online": online,
        "players": {"current": current, "max": max_players},
        "version": "1.20.4",
        "motd": "Welcome to VoltServers",
        "ping": 42,
        "hostname": "demo.voltservers.com",
        "port": 25565,
        "software": "Paper",
    }


class FakeStatusClient:
    """
    Stands in for SiteClient.query_server.

    `answers` maps an address to an httpx.Response, an exception instance to
    raise, or nothing (then a healthy online payload is returned).
    """

    def __init__(self, answers: dict[str, Any] | None = None) -> None:
        self.answers = dict(answers or {})
        self.calls: list[tuple[str, int]] = []
        self.gate: asyncio.Event | None = None

    async def query_server(self, address: str, port: int) -> httpx.Response:
        self.calls.append((address, port))
        if self.gate is not None:
            await self.gate.wait()
        answer = self.answers.get(address)
        if isinstance(answer, BaseException):
            raise answer
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(200, json=status_payload())


class FakeSiteClient(FakeStatusClient):
    """Serves the seeded listings in-process, the way the /api routes would."""

    def __init__(self, storage: MemStorage | None = None, answers: dict[str, Any] | None = None) -> None:
        super().__init__(answers)
        self.storage = storage or MemStorage()
        self.fail_paths: set[str] = set()
        # Raw rows appended to a listing, for malformed-entry cases
        self.extra_rows: dict[str, list[Any]] = {}

    def _listings(self) -> dict[str, Any]:
        s = self.storage
        return {
            "/api/games": [g.to_dict() for g in s.get_all_games()],
            "/api/demo-servers": [d.to_dict() for d in s.get_active_demo_servers()],
            "/api/server-status": [x.to_dict() for x in s.get_all_service_status()],
            "/api/server-locations": [x.to_dict() for x in s.get_all_server_locations()],
            "/api/blog": [p.to_dict() for p in s.get_published_blog_posts()],
            "/api/faqs": [f.to_dict() for f in s.get_all_faqs()],
        }

    async def get_json(self, path: str) -> Any:
        data = await self._resolve(path)
        if isinstance(data, list):
            return data + self.extra_rows.get(path, [])
        return data

    async def _resolve(self, path: str) -> Any:
        if path in self.fail_paths:
            raise ApiError("Failed to fetch", 500)
        listings = self._listings()
        if path in listings:
            return listings[path]
        parts = path.strip("/").split("/")
        if parts[:2] == ["api", "games"] and len(parts) == 3:
            game = self.storage.get_game(parts[2]) or self.storage.get_game_by_slug(parts[2])
            if game is None:
                raise ApiError("Game not found", 404)
            return game.to_dict()
        if parts[:2] == ["api", "games"] and len(parts) == 4:
            return [d.to_dict() for d in self.storage.get_demo_servers_by_game_id(parts[2])]
        raise ApiError("Request failed (404)", 404)

    async def get_list(self, path: str) -> list[Any]:
        try:
            data = await self.get_json(path)
        except ApiError:
            return []
        return data if isinstance(data, list) else []

    async def aclose(self) -> None:
        return None
