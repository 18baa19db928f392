from __future__ import annotations

import logging

from nicegui import ui

from voltweb.constants import STATUS_POLL_INTERVAL_S
from voltweb.models import OFFLINE_MOTD, DemoServer, ServerDescriptor, ServerStatus
from voltweb.services.status_poller import StatusPoller, StatusQueryClient
from voltweb.state import ServerBoardState, ServerCardState


class LiveServers:
    """
    Live status for a list of demo servers, owned by one page.

    Wraps a StatusPoller and pushes each published map into bindable card
    state; the poller follows the page's client connection.
    """

    def __init__(
        self, client: StatusQueryClient, interval: float = STATUS_POLL_INTERVAL_S
    ) -> None:
        self.client = client
        self.interval = interval
        self.board = ServerBoardState()
        self.servers: list[DemoServer] = []
        self.poller: StatusPoller | None = None

    def card(self, server_id: str) -> ServerCardState:
        return self.board.card(server_id)

    def attach(self, servers: list[DemoServer]) -> None:
        """Start polling once the demo server list is known."""
        self.servers = list(servers)
        descriptors: list[ServerDescriptor] = []
        for s in self.servers:
            try:
                descriptors.append(ServerDescriptor.from_demo_server(s))
            except ValueError as e:
                logging.warning("Skipping demo server %s: %s", s.server_name, e)
                # Never polled, so show it offline instead of "Checking..."
                self.board.card(s.id).apply(
                    ServerStatus(online=False, max_players=max(0, s.max_players), motd=OFFLINE_MOTD)
                )
                continue
            self.board.card(s.id)
        if not descriptors:
            self.board.summary_text = "No demo servers available"
            return

        self.poller = StatusPoller(descriptors, self.client, self.interval)
        self.poller.subscribe(self.board.apply)
        self.poller.start()

        client = ui.context.client
        client.on_connect(self.poller.start)
        client.on_disconnect(self.stop)

    def stop(self) -> None:
        if self.poller is not None:
            self.poller.stop()

    async def refresh(self) -> None:
        if self.poller is None:
            return
        await self.poller.refresh()
        ui.notify(self.board.summary_text, color="primary")


def status_badge(card: ServerCardState) -> None:
    """Colored dot and Online/Offline text bound to one card."""
    with ui.row().classes("items-center gap-1 no-wrap"):
        ui.element("span").classes("status-dot pending").bind_visibility_from(
            card, "polled", backward=lambda polled: not polled
        )
        ui.element("span").classes("status-dot online").bind_visibility_from(
            card, "status_text", backward=lambda text: text == "Online"
        )
        ui.element("span").classes("status-dot offline").bind_visibility_from(
            card, "status_text", backward=lambda text: text == "Offline"
        )
        ui.label().classes("text-sm").bind_text_from(card, "status_text")
