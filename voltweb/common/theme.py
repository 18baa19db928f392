from __future__ import annotations

import logging
from typing import Literal, cast, get_args

from nicegui import app, ui

ThemeMode = Literal["light", "dark", "system"]


def get_palette(mode: ThemeMode) -> dict[str, str]:
    """Return the site palette tokens for the given mode."""
    if mode == "dark":
        return {
            "primary": "#22C55E",  # volt green
            "primary_hover": "#16A34A",
            "background": "#0A0A0A",
            "surface": "#141414",
            "surface_top": "#1F1F1F",
            "text": "#F5F5F5",
            "muted": "#9CA3AF",
            "on_primary": "#0A0A0A",
            "accent": "#A3E635",
            "positive": "#22C55E",
            "negative": "#EF4444",
            "info": "#38BDF8",
            "warning": "#FACC15",
        }
    # light
    return {
        "primary": "#16A34A",
        "primary_hover": "#15803D",
        "background": "#F4F4F5",
        "surface": "#FFFFFF",
        "surface_top": "#E4E4E7",
        "text": "#18181B",
        "muted": "#71717A",
        "on_primary": "#FFFFFF",
        "accent": "#65A30D",
        "positive": "#16A34A",
        "negative": "#DC2626",
        "info": "#0284C7",
        "warning": "#CA8A04",
    }


def _inject_css_vars(p: dict[str, str]) -> None:
    ui.add_css(
        f"""
:root {{
  --volt-primary: {p["primary"]};
  --volt-primary-hover: {p["primary_hover"]};
  --volt-bg: {p["background"]};
  --volt-surface: {p["surface"]};
  --volt-surface-top: {p["surface_top"]};
  --volt-text: {p["text"]};
  --volt-muted: {p["muted"]};
  --volt-on-primary: {p["on_primary"]};
  --volt-positive: {p["positive"]};
  --volt-negative: {p["negative"]};
}}

body, .q-page {{ background: var(--volt-bg); color: var(--volt-text); }}
.q-header, .q-footer {{ background: var(--volt-surface); color: var(--volt-text); }}
.q-card {{ background: var(--volt-surface); color: var(--volt-text); }}
.q-btn.bg-primary {{ color: var(--volt-on-primary) !important; }}
.q-btn.bg-primary:hover {{ background: var(--volt-primary-hover) !important; }}
"""
    )


def apply_theme(mode: ThemeMode) -> None:
    """Set Quasar colors and dark mode, then inject the CSS variables."""
    choice = mode
    if mode == "system":
        # No browser preference is read here; system means dark
        choice = "dark"
        logging.debug("System theme resolved to %s", choice)

    pal = get_palette(choice)
    ui.colors(
        primary=pal["primary"],
        secondary=pal["primary_hover"],
        accent=pal["accent"],
        positive=pal["positive"],
        negative=pal["negative"],
        info=pal["info"],
        warning=pal["warning"],
    )
    if choice == "dark":
        ui.dark_mode().enable()
    else:
        ui.dark_mode().disable()
    _inject_css_vars(pal)


def get_theme() -> ThemeMode:
    """Return the visitor's requested mode ('light'/'dark'/'system')."""
    mode = app.storage.user.get("theme_mode", "system")
    if isinstance(mode, str) and mode in get_args(ThemeMode):
        return cast("ThemeMode", mode)
    return cast("ThemeMode", "system")


def set_theme(mode: ThemeMode) -> ThemeMode:
    """Persist, set and apply theme mode."""
    app.storage.user["theme_mode"] = mode
    apply_theme(mode)
    return mode


def toggle_theme() -> ThemeMode:
    """Flip between dark and light."""
    next_mode: ThemeMode = "light" if get_theme() in ("dark", "system") else "dark"
    set_theme(next_mode)
    return next_mode


def inject_layout_css() -> None:
    """Site layout and status badge styles."""
    ui.add_css(
        """
.volt-grid {
  display: grid;
  grid-template-columns: repeat(auto-fill, minmax(280px, 1fr));
  gap: 1rem;
  width: 100%;
}

.volt-section {
  width: 100%;
  max-width: 1200px;
  margin: 0 auto;
  padding: 2rem 1rem;
}

.status-dot {
  display: inline-block;
  width: 10px;
  height: 10px;
  border-radius: 50%;
}
.status-dot.online { background: var(--volt-positive); box-shadow: 0 0 6px var(--volt-positive); }
.status-dot.offline { background: var(--volt-negative); }
.status-dot.pending { background: var(--volt-muted); }

.cookie-banner {
  position: fixed;
  left: 0;
  right: 0;
  bottom: 0;
  z-index: 2000;
  padding: 1rem;
  background: rgba(10, 10, 10, 0.95);
  border-top: 1px solid var(--volt-primary);
}

@media (max-width: 600px) {
  .volt-section { padding: 1rem 0.5rem; }
  .volt-grid { grid-template-columns: 1fr; }
}
"""
    )
