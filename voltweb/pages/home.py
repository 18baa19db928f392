from __future__ import annotations

from nicegui import ui

from voltweb.components.live_servers import LiveServers, status_badge
from voltweb.constants import STATUS_POLL_INTERVAL_S
from voltweb.models import DemoServer, parse_rows
from voltweb.services.api_client import client


class HomePage:
    """Landing page: hero plus live demo servers."""

    def __init__(self, poll_interval: float = STATUS_POLL_INTERVAL_S) -> None:
        self.live = LiveServers(client, poll_interval)

    async def load_demo_servers(self) -> list[DemoServer]:
        rows = await client.get_list("/api/demo-servers")
        return parse_rows(rows, DemoServer.from_dict, "demo server")

    async def copy_address(self, server: DemoServer) -> None:
        address = f"{server.server_ip}:{server.server_port}"
        ui.clipboard.write(address)
        ui.notify(f"Copied {address}", color="positive")

    # ---- UI ----

    def build_hero(self) -> None:
        with ui.column().classes("w-full items-center text-center gap-3 py-8"):
            ui.label("Game Server Hosting, Charged Up").classes("text-4xl font-bold")
            ui.label(
                "Instant setup, DDoS protection and NVMe hardware in four regions."
            ).classes("text-lg text-[var(--volt-muted)]")
            with ui.row().classes("gap-2"):
                ui.button("Browse Games", on_click=lambda: ui.navigate.to("/games")).props(
                    "unelevated color=primary"
                )
                ui.button("Server Status", on_click=lambda: ui.navigate.to("/status")).props(
                    "outline"
                )

    def build_server_card(self, server: DemoServer) -> None:
        card = self.live.card(server.id)
        with ui.card().classes("w-full gap-2"):
            with ui.row().classes("w-full items-center justify-between no-wrap"):
                ui.label(server.server_name).classes("text-lg font-medium")
                status_badge(card)
            if server.description:
                ui.label(server.description).classes("text-sm text-[var(--volt-muted)]")
            with ui.row().classes("w-full items-center gap-4"):
                ui.icon("group")
                ui.label().bind_text_from(card, "players_text", backward=lambda t: f"Players: {t}")
                ui.label().bind_text_from(card, "version", backward=lambda v: f"Version: {v}")
                ui.label().bind_text_from(card, "ping_ms", backward=lambda p: f"Ping: {p} ms")
            ui.linear_progress(show_value=False).bind_value_from(card, "fill_ratio")
            ui.label().classes("text-xs italic").bind_text_from(card, "motd")
            with ui.row().classes("w-full items-center justify-between"):
                ui.label(f"{server.server_ip}:{server.server_port}").classes("font-mono text-sm")
                ui.button(
                    icon="content_copy", on_click=lambda s=server: self.copy_address(s)
                ).props("flat round dense")
            ui.label(f"{server.playtime} min play time").classes("text-xs")

    async def build(self) -> None:
        self.build_hero()
        with ui.column().classes("w-full gap-3"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Try Our Servers").classes("text-2xl font-bold")
                ui.label().classes("text-sm").bind_text_from(self.live.board, "summary_text")
            servers = await self.load_demo_servers()
            if not servers:
                ui.label("Demo servers are unavailable right now.").classes("text-sm")
                return
            with ui.element("div").classes("volt-grid"):
                for server in servers:
                    self.build_server_card(server)
            self.live.attach(servers)
