from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

UNKNOWN = "Unknown"
OFFLINE_MOTD = "Server offline"

T = TypeVar("T")


@dataclass(frozen=True)
class ServerDescriptor:
    """A game server the views want live status for."""

    id: str
    address: str  # hostname or IP
    port: int  # uint16
    declared_max_players: int = 0

    def __post_init__(self) -> None:
        if not self.address:
            raise ValueError("ServerDescriptor.address must be non-empty")
        if not 0 < int(self.port) <= 0xFFFF:
            raise ValueError(f"ServerDescriptor.port out of range: {self.port}")
        if self.declared_max_players < 0:
            raise ValueError("ServerDescriptor.declared_max_players must be >= 0")

    @property
    def endpoint(self) -> str:
        return f"{self.address}:{self.port}"

    @classmethod
    def from_demo_server(cls, server: DemoServer) -> ServerDescriptor:
        return cls(
            id=server.id,
            address=server.server_ip,
            port=server.server_port,
            declared_max_players=server.max_players,
        )


@dataclass(frozen=True)
class ServerStatus:
    online: bool
    current_players: int = 0
    max_players: int = 0
    version: str = UNKNOWN
    motd: str = ""
    ping_ms: int = 0
    software: str = UNKNOWN

    @classmethod
    def from_payload(cls, payload: Any) -> ServerStatus:
        """
        Parse the /api/query-server body:
        {online, players: {current, max}, version, motd, ping, software}.

        Raises ValueError when the body is not a status object.
        """
        if not isinstance(payload, Mapping) or "online" not in payload:
            raise ValueError(f"Not a server status payload: {payload!r}")
        players = payload.get("players")
        if not isinstance(players, Mapping):
            players = {}
        return cls(
            online=bool(payload["online"]),
            current_players=_as_uint(players.get("current")),
            max_players=_as_uint(players.get("max")),
            version=str(payload.get("version") or UNKNOWN),
            motd=str(payload.get("motd") or ""),
            ping_ms=_as_uint(payload.get("ping")),
            software=str(payload.get("software") or UNKNOWN),
        )

    @classmethod
    def offline(cls, descriptor: ServerDescriptor) -> ServerStatus:
        """Stand-in status for a server whose query failed."""
        return cls(
            online=False,
            current_players=0,
            max_players=descriptor.declared_max_players,
            version=UNKNOWN,
            motd=OFFLINE_MOTD,
            ping_ms=0,
            software=UNKNOWN,
        )


# descriptor.id -> ServerStatus, replaced wholesale every poll cycle
StatusMap = Mapping[str, ServerStatus]


def _as_uint(value: Any) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


# ---- Listing records (wire keys are camelCase) ----


@dataclass
class Game:
    id: str
    name: str
    slug: str
    description: str
    image_url: str = ""
    base_price: str = "0.00"  # decimal string
    player_count: int = 0
    is_popular: bool = False
    is_new: bool = False
    is_trending: bool = False

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> Game:
        return Game(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            slug=str(d.get("slug", "")),
            description=str(d.get("description", "")),
            image_url=str(d.get("imageUrl", "")),
            base_price=str(d.get("basePrice", "0.00")),
            player_count=int(d.get("playerCount", 0) or 0),
            is_popular=bool(d.get("isPopular", False)),
            is_new=bool(d.get("isNew", False)),
            is_trending=bool(d.get("isTrending", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "imageUrl": self.image_url,
            "basePrice": self.base_price,
            "playerCount": self.player_count,
            "isPopular": self.is_popular,
            "isNew": self.is_new,
            "isTrending": self.is_trending,
        }


@dataclass
class DemoServer:
    id: str
    server_name: str
    game_type: str
    server_ip: str
    server_port: int
    max_players: int
    description: str = ""
    game_id: str | None = None
    playtime: int = 60  # minutes per session
    is_enabled: bool = True
    sort_order: int = 0

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> DemoServer:
        return DemoServer(
            id=str(d.get("id", "")),
            server_name=str(d.get("serverName", "")),
            game_type=str(d.get("gameType", "")),
            server_ip=str(d.get("serverIp", "")).strip(),
            server_port=int(d.get("serverPort", 0) or 0),
            max_players=int(d.get("maxPlayers", 0) or 0),
            description=str(d.get("description", "")),
            game_id=d.get("gameId"),
            playtime=int(d.get("playtime", 60) or 60),
            is_enabled=bool(d.get("isEnabled", True)),
            sort_order=int(d.get("sortOrder", 0) or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "serverName": self.server_name,
            "gameType": self.game_type,
            "serverIp": self.server_ip,
            "serverPort": self.server_port,
            "maxPlayers": self.max_players,
            "description": self.description,
            "gameId": self.game_id,
            "playtime": self.playtime,
            "isEnabled": self.is_enabled,
            "sortOrder": self.sort_order,
        }


@dataclass
class ServiceStatus:
    id: str
    service: str
    status: str  # "operational" | "degraded" | "down"
    response_time: int | None = None  # ms
    uptime: str | None = None  # percentage, decimal string

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> ServiceStatus:
        return ServiceStatus(
            id=str(d.get("id", "")),
            service=str(d.get("service", "")),
            status=str(d.get("status", "operational")),
            response_time=d.get("responseTime"),
            uptime=d.get("uptime"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "service": self.service,
            "status": self.status,
            "responseTime": self.response_time,
            "uptime": self.uptime,
        }


@dataclass
class ServerLocation:
    id: str
    name: str
    region: str
    status: str  # "online" | "offline" | "maintenance"
    icon: str = "public"

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> ServerLocation:
        return ServerLocation(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            region=str(d.get("region", "")),
            status=str(d.get("status", "online")),
            icon=str(d.get("icon", "public")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "region": self.region,
            "status": self.status,
            "icon": self.icon,
        }


@dataclass
class BlogPost:
    id: str
    slug: str
    title: str
    excerpt: str
    content: str = ""
    author: str = "VoltServers Team"
    tags: list[str] = field(default_factory=list)
    is_published: bool = True

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> BlogPost:
        return BlogPost(
            id=str(d.get("id", "")),
            slug=str(d.get("slug", "")),
            title=str(d.get("title", "")),
            excerpt=str(d.get("excerpt", "")),
            content=str(d.get("content", "")),
            author=str(d.get("author", "VoltServers Team")),
            tags=[str(t) for t in d.get("tags") or []],
            is_published=bool(d.get("isPublished", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "excerpt": self.excerpt,
            "content": self.content,
            "author": self.author,
            "tags": list(self.tags),
            "isPublished": self.is_published,
        }


@dataclass
class Faq:
    id: str
    question: str
    answer: str
    category: str = "general"
    sort_order: int = 0

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> Faq:
        return Faq(
            id=str(d.get("id", "")),
            question=str(d.get("question", "")),
            answer=str(d.get("answer", "")),
            category=str(d.get("category", "general")),
            sort_order=int(d.get("sortOrder", 0) or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "answer": self.answer,
            "category": self.category,
            "sortOrder": self.sort_order,
        }


def parse_rows(rows: list[Any], factory: Callable[[Mapping[str, Any]], T], kind: str) -> list[T]:
    """Build records from API rows, logging and skipping any row that does not parse."""
    records: list[T] = []
    for row in rows:
        try:
            if not isinstance(row, Mapping):
                raise TypeError(f"expected an object, got {type(row).__name__}")
            records.append(factory(row))
        except (TypeError, ValueError, AttributeError) as e:
            logging.warning("Bad %s entry %r: %s", kind, row, e)
    return records
