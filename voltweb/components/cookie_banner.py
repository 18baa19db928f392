from __future__ import annotations

import json

from nicegui import ui

from voltweb.constants import COOKIE_POLICY_TEXT, COOKIE_POLICY_URL
from voltweb.services.consent import ConsentStore


class CookieBanner:
    """Bottom banner asking for cookie consent, with a per-category preferences dialog."""

    def __init__(self, store: ConsentStore) -> None:
        self.store = store
        self.preferences: dict[str, bool] = store.preferences()
        self.banner: ui.element | None = None
        self.dialog: ui.dialog | None = None
        self.switches: dict[str, ui.switch] = {}

    # ---- Actions ----

    def accept_all(self) -> None:
        self._finish(self.store.accept_all())

    def accept_necessary(self) -> None:
        self._finish(self.store.accept_necessary())

    def save_preferences(self) -> None:
        self._finish(self.store.save(self.preferences))

    def _on_switch(self, category_id: str, value: bool) -> None:
        if bool(self.preferences.get(category_id)) != bool(value):
            self.preferences = self.store.toggle(self.preferences, category_id)

    def _finish(self, prefs: dict[str, bool]) -> None:
        self.preferences = dict(prefs)
        if self.dialog is not None:
            self.dialog.close()
            self.dialog.delete()
            self.dialog = None
            self.switches = {}
        if self.banner is not None:
            self.banner.delete()
            self.banner = None
        # Let page scripts (analytics, pixels) react to the new choices
        ui.run_javascript(
            "window.dispatchEvent(new CustomEvent('cookieConsentUpdate', "
            f"{{detail: {json.dumps(prefs)}}}))"
        )
        ui.notify("Cookie preferences saved", color="positive")

    # ---- UI ----

    def build(self) -> None:
        if not self.store.needs_banner():
            return
        self._build_dialog()
        with ui.element("div").classes("cookie-banner") as self.banner:
            with ui.row().classes("w-full max-w-4xl mx-auto items-center justify-between gap-4"):
                with ui.column().classes("gap-1"):
                    ui.label(COOKIE_POLICY_TEXT).classes("text-sm text-white")
                    ui.link("Learn more", COOKIE_POLICY_URL).classes("text-sm")
                with ui.row().classes("gap-2"):
                    ui.button("Preferences", icon="settings", on_click=self._open_dialog).props(
                        "outline"
                    )
                    ui.button("Necessary Only", icon="close", on_click=self.accept_necessary).props(
                        "outline"
                    )
                    ui.button("Accept All", icon="check", on_click=self.accept_all).props(
                        "unelevated color=primary"
                    )

    def _open_dialog(self) -> None:
        if self.dialog:
            for category_id, switch in self.switches.items():
                switch.value = bool(self.preferences.get(category_id, False))
            self.dialog.open()

    def _build_dialog(self) -> None:
        with ui.dialog() as self.dialog, ui.card().classes("w-full max-w-2xl"):
            ui.label("Cookie Preferences").classes("text-lg font-medium")
            ui.label(
                "Choose which cookies you want to allow. "
                "Required cookies are necessary for the website to function."
            ).classes("text-sm text-[var(--volt-muted)]")
            for category in self.store.categories:
                with ui.row().classes("w-full items-start justify-between no-wrap"):
                    with ui.column().classes("gap-1"):
                        with ui.row().classes("items-center gap-2"):
                            ui.label(category.name).classes("font-medium")
                            if category.required:
                                ui.badge("Required", color="grey")
                        ui.label(category.description).classes("text-sm")
                    switch = ui.switch(
                        value=bool(self.preferences.get(category.id, False)),
                        on_change=lambda e, cid=category.id: self._on_switch(cid, e.value),
                    )
                    if category.required:
                        switch.disable()
                    self.switches[category.id] = switch
            with ui.row().classes("w-full gap-2 pt-2"):
                ui.button("Accept All", on_click=self.accept_all).props("unelevated color=primary")
                ui.button("Save Preferences", on_click=self.save_preferences).props("outline")
