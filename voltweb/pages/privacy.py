from __future__ import annotations

from nicegui import app as ng_app
from nicegui import ui

from voltweb.constants import COOKIE_CONSENT_KEY
from voltweb.services.consent import DEFAULT_CATEGORIES, get_cookie_preferences


class PrivacyPage:
    """Cookie policy with the visitor's current choices."""

    def reset_consent(self) -> None:
        ng_app.storage.user.pop(COOKIE_CONSENT_KEY, None)
        ui.notify("Cookie choices cleared", color="primary")
        ui.navigate.reload()

    def build(self) -> None:
        ui.label("Cookie Policy").classes("text-3xl font-bold")
        prefs = get_cookie_preferences(ng_app.storage.user)
        with ui.card().classes("w-full"):
            for category in DEFAULT_CATEGORIES:
                with ui.row().classes("w-full items-center justify-between"):
                    with ui.column().classes("gap-0"):
                        ui.label(category.name).classes("font-medium")
                        ui.label(category.description).classes("text-sm")
                    if not prefs:
                        state = "Not chosen"
                    else:
                        state = "Allowed" if prefs.get(category.id) else "Blocked"
                    ui.label(state).classes("text-sm")
        ui.button("Change my choices", on_click=self.reset_consent).props("outline")
