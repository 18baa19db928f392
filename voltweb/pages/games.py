from __future__ import annotations

import logging

from nicegui import ui

from voltweb.catalog import (
    CATEGORIES,
    PLATFORMS,
    SORT_OPTIONS,
    CatalogGame,
    enhance,
    filter_games,
)
from voltweb.models import DemoServer, Game, parse_rows
from voltweb.services.api_client import ApiError, client
from voltweb.state import CatalogFilterState


class GamesPage:
    """Game catalog with search, category/platform filters and sorting."""

    def __init__(self) -> None:
        self.games: list[CatalogGame] = []
        self.filters = CatalogFilterState()

    async def load(self) -> None:
        rows = await client.get_list("/api/games")
        self.games = [enhance(g) for g in parse_rows(rows, Game.from_dict, "game")]

    def visible_games(self) -> list[CatalogGame]:
        f = self.filters
        return filter_games(self.games, f.search, f.category, f.platform, f.sort_by)

    def update(self, name: str, value: str | None) -> None:
        defaults = {"search": "", "sort_by": "popular"}
        setattr(self.filters, name, value or defaults.get(name, "all"))
        self.grid.refresh()

    # ---- UI ----

    def build_filters(self) -> None:
        with ui.row().classes("w-full items-end gap-4"):
            ui.input(label="Search games", placeholder="Name, genre or tag").classes(
                "w-64"
            ).props("clearable").bind_value(self.filters, "search").on_value_change(
                lambda e: self.update("search", e.value)
            )
            ui.select(dict(CATEGORIES), label="Category").classes("w-40").bind_value(
                self.filters, "category"
            ).on_value_change(lambda e: self.update("category", e.value))
            ui.select(dict(PLATFORMS), label="Platform").classes("w-40").bind_value(
                self.filters, "platform"
            ).on_value_change(lambda e: self.update("platform", e.value))
            ui.select(dict(SORT_OPTIONS), label="Sort by").classes("w-40").bind_value(
                self.filters, "sort_by"
            ).on_value_change(lambda e: self.update("sort_by", e.value))

    def build_game_card(self, item: CatalogGame) -> None:
        game = item.game
        with ui.card().classes("w-full gap-2"):
            with ui.row().classes("w-full items-center justify-between no-wrap"):
                ui.link(game.name, f"/games/{game.id}").classes("text-lg font-medium")
                with ui.row().classes("gap-1"):
                    if game.is_popular:
                        ui.badge("Popular", color="primary")
                    if game.is_new:
                        ui.badge("New", color="info")
                    if game.is_trending:
                        ui.badge("Trending", color="warning")
            ui.label(game.description).classes("text-sm text-[var(--volt-muted)]")
            with ui.row().classes("gap-1"):
                for tag in item.tags:
                    ui.chip(tag).props("dense outline")
            with ui.row().classes("w-full items-center justify-between"):
                ui.label(f"{item.platform} · up to {item.max_players} players").classes("text-xs")
                ui.label(f"from ${game.base_price}/mo").classes("font-bold text-primary")

    @ui.refreshable
    def grid(self) -> None:
        games = self.visible_games()
        if not games:
            with ui.column().classes("w-full items-center py-8"):
                ui.label("No games found").classes("text-lg")
                ui.label("Try adjusting your search criteria or filters").classes("text-sm")
            return
        ui.label(f"{len(games)} games").classes("text-sm")
        with ui.element("div").classes("volt-grid"):
            for item in games:
                self.build_game_card(item)

    async def build(self) -> None:
        ui.label("Game Servers").classes("text-3xl font-bold")
        await self.load()
        self.build_filters()
        self.grid()


class GameDetailPage:
    """One game with its demo servers; API errors surface as toasts."""

    def __init__(self, game_id: str) -> None:
        self.game_id = game_id

    async def build(self) -> None:
        try:
            data = await client.get_json(f"/api/games/{self.game_id}")
            parsed = parse_rows([data], Game.from_dict, "game")
            if not parsed:
                raise ApiError("Game not found")
            game = enhance(parsed[0])
        except ApiError as e:
            logging.warning("Game %s unavailable: %s", self.game_id, e.message)
            ui.notify(e.message, color="negative")
            ui.label("This game could not be loaded.").classes("text-lg")
            ui.link("Back to all games", "/games")
            return

        ui.label(game.game.name).classes("text-3xl font-bold")
        ui.label(game.game.description).classes("text-lg text-[var(--volt-muted)]")
        with ui.row().classes("gap-4"):
            ui.label(f"Category: {game.category}")
            ui.label(f"Platform: {game.platform}")
            ui.label(f"Up to {game.max_players} players")
            ui.label(f"from ${game.game.base_price}/mo").classes("font-bold text-primary")

        rows = await client.get_list(f"/api/games/{game.game.id}/demo-servers")
        servers = parse_rows(rows, DemoServer.from_dict, "demo server")
        if servers:
            ui.label("Demo servers").classes("text-xl font-medium")
            for server in servers:
                ui.label(
                    f"{server.server_name}: {server.server_ip}:{server.server_port}"
                ).classes("font-mono text-sm")
        ui.link("Back to all games", "/games")
