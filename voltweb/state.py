from __future__ import annotations

from dataclasses import field

from nicegui import binding

from voltweb.models import UNKNOWN, ServerStatus, StatusMap


# Per-card view state; labels and badges bind to these fields
@binding.bindable_dataclass
class ServerCardState:
    server_id: str = ""
    polled: bool = False  # False until the first cycle lands
    online: bool = False
    current_players: int = 0
    max_players: int = 0
    version: str = UNKNOWN
    motd: str = ""
    ping_ms: int = 0
    software: str = UNKNOWN
    # Derived strings for cheap text bindings
    status_text: str = "Checking..."
    players_text: str = "-"
    fill_ratio: float = 0.0

    def apply(self, status: ServerStatus) -> None:
        self.polled = True
        self.online = status.online
        self.current_players = status.current_players
        self.max_players = status.max_players
        self.version = status.version
        self.motd = status.motd
        self.ping_ms = status.ping_ms
        self.software = status.software
        self.status_text = "Online" if status.online else "Offline"
        self.players_text = f"{status.current_players}/{status.max_players}"
        self.fill_ratio = (
            min(1.0, status.current_players / status.max_players)
            if status.max_players
            else 0.0
        )


@binding.bindable_dataclass
class ServerBoardState:
    """Cards for one view plus a summary line."""

    cards: dict[str, ServerCardState] = field(default_factory=dict)
    online_count: int = 0
    summary_text: str = "Checking servers..."

    def card(self, server_id: str) -> ServerCardState:
        if server_id not in self.cards:
            self.cards[server_id] = ServerCardState(server_id=server_id)
        return self.cards[server_id]

    def apply(self, status_map: StatusMap) -> None:
        for server_id, status in status_map.items():
            self.card(server_id).apply(status)
        self.online_count = sum(1 for s in status_map.values() if s.online)
        self.summary_text = f"{self.online_count}/{len(status_map)} servers online"


@binding.bindable_dataclass
class CatalogFilterState:
    search: str = ""
    category: str = "all"
    platform: str = "all"
    sort_by: str = "popular"
