from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from nicegui import app as ng_app
from nicegui import ui

from voltweb.common.theme import apply_theme, get_theme, inject_layout_css, toggle_theme
from voltweb.components.cookie_banner import CookieBanner
from voltweb.constants import SITE_NAME, SUPPORT_URL
from voltweb.services.consent import ConsentStore

NAV_LINKS: list[tuple[str, str]] = [
    ("Home", "/"),
    ("Games", "/games"),
    ("Status", "/status"),
    ("Knowledge Base", "/knowledgebase"),
]


def build_header() -> None:
    with ui.header().classes("items-center justify-between px-4 py-2"):
        with ui.row().classes("items-center gap-2"):
            ui.icon("bolt").classes("text-2xl text-primary")
            ui.link(SITE_NAME, "/").classes("text-lg font-bold no-underline text-inherit")
        with ui.row().classes("items-center gap-4"):
            for label, target in NAV_LINKS:
                ui.link(label, target).classes("no-underline text-inherit")
        with ui.row().classes("items-center gap-2"):
            ui.button(icon="contrast", on_click=toggle_theme).props("flat round")
            ui.button(
                "Support",
                on_click=lambda: ui.navigate.to(SUPPORT_URL, new_tab=True),
            ).props("unelevated color=primary")


def build_footer() -> None:
    with ui.footer().classes("justify-between items-center px-4 py-1"):
        ui.label(f"© {SITE_NAME}").classes("text-sm")
        ui.label("Premium game server hosting").classes("text-sm text-[var(--volt-muted)]")


@contextmanager
def frame(title: str) -> Iterator[None]:
    """Shared page chrome: theme, header, content column, footer, cookie banner."""
    apply_theme(get_theme())
    inject_layout_css()
    ui.page_title(f"{title} | {SITE_NAME}")
    build_header()
    with ui.column().classes("volt-section gap-6"):
        yield
    build_footer()
    CookieBanner(ConsentStore(ng_app.storage.user)).build()
