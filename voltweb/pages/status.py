from __future__ import annotations

from nicegui import ui

from voltweb.common.logging_config import attach_ui_log, detach_ui_log
from voltweb.components.live_servers import LiveServers, status_badge
from voltweb.constants import STATUS_POLL_INTERVAL_S
from voltweb.models import DemoServer, ServerLocation, ServiceStatus, parse_rows
from voltweb.services.api_client import client

_OK_STATES = ("operational", "online")


class StatusPage:
    """Platform status, locations and live demo server status."""

    def __init__(self, poll_interval: float = STATUS_POLL_INTERVAL_S) -> None:
        self.live = LiveServers(client, poll_interval)
        self.log: ui.log | None = None

    async def build_services(self) -> None:
        rows = await client.get_list("/api/server-status")
        services = parse_rows(rows, ServiceStatus.from_dict, "service status")
        all_ok = bool(services) and all(s.status in _OK_STATES for s in services)
        with ui.card().classes("w-full"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Overall Status").classes("text-xl font-medium")
                ui.label(
                    "All Systems Operational" if all_ok else "Some Issues Detected"
                ).classes("text-positive" if all_ok else "text-negative")
            for s in services:
                ok = s.status in _OK_STATES
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label(s.service)
                    with ui.row().classes("items-center gap-3"):
                        if s.response_time is not None:
                            ui.label(f"{s.response_time} ms").classes("text-xs")
                        if s.uptime:
                            ui.label(f"{s.uptime}% uptime").classes("text-xs")
                        ui.label("Operational" if ok else s.status.capitalize()).classes(
                            "text-positive" if ok else "text-negative"
                        )

    async def build_locations(self) -> None:
        rows = await client.get_list("/api/server-locations")
        locations = parse_rows(rows, ServerLocation.from_dict, "server location")
        with ui.card().classes("w-full"):
            ui.label("Server Locations").classes("text-xl font-medium")
            with ui.element("div").classes("volt-grid"):
                for loc in locations:
                    with ui.column().classes("items-center gap-1 p-2"):
                        ui.icon(loc.icon).classes("text-2xl text-primary")
                        ui.label(loc.region).classes("font-medium")
                        ui.label(loc.name).classes("text-sm")
                        ui.label(loc.status.capitalize()).classes(
                            "text-xs text-positive" if loc.status == "online" else "text-xs text-negative"
                        )

    async def build_live_servers(self) -> None:
        rows = await client.get_list("/api/demo-servers")
        servers = parse_rows(rows, DemoServer.from_dict, "demo server")
        with ui.card().classes("w-full"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Demo Servers").classes("text-xl font-medium")
                with ui.row().classes("items-center gap-2"):
                    ui.label().classes("text-sm").bind_text_from(self.live.board, "summary_text")
                    ui.button("Refresh now", icon="refresh", on_click=self.live.refresh).props(
                        "outline dense"
                    )
            for server in servers:
                card = self.live.card(server.id)
                with ui.row().classes("w-full items-center justify-between"):
                    with ui.column().classes("gap-0"):
                        ui.label(server.server_name).classes("font-medium")
                        ui.label(f"{server.server_ip}:{server.server_port}").classes(
                            "font-mono text-xs"
                        )
                    with ui.row().classes("items-center gap-4"):
                        ui.label().bind_text_from(card, "players_text")
                        ui.label().bind_text_from(card, "software")
                        ui.label().bind_text_from(card, "ping_ms", backward=lambda p: f"{p} ms")
                        status_badge(card)
        self.live.attach(servers)

    def build_log(self) -> None:
        with ui.expansion("Activity log", icon="terminal").classes("w-full"):
            self.log = ui.log(max_lines=200).classes("w-full h-48")
        attach_ui_log(self.log)
        ui.context.client.on_disconnect(lambda: detach_ui_log(self.log))

    async def build(self) -> None:
        ui.label("System Status").classes("text-3xl font-bold")
        await self.build_services()
        await self.build_live_servers()
        await self.build_locations()
        self.build_log()
