from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi.responses import JSONResponse
from nicegui import app as ng_app

from voltweb.constants import (
    COOKIE_POLICY_TEXT,
    COOKIE_POLICY_URL,
    DEFAULT_QUERY_PORT,
    HTTP_TIMEOUT_S,
    STATUS_API_URL,
)
from voltweb.services.consent import DEFAULT_CATEGORIES
from voltweb.services.server_query import ServerOfflineError, query_server
from voltweb.storage import storage

# Shared client for the upstream status service (created on first use)
_upstream: httpx.AsyncClient | None = None


def _upstream_client() -> httpx.AsyncClient:
    global _upstream
    if _upstream is None or _upstream.is_closed:
        _upstream = httpx.AsyncClient(timeout=HTTP_TIMEOUT_S)
    return _upstream


async def _close_upstream() -> None:
    global _upstream
    if _upstream is not None:
        await _upstream.aclose()
        _upstream = None


ng_app.on_shutdown(_close_upstream)


def _message(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


# --------------- Games ---------------


@ng_app.get("/api/games")
async def list_games():
    try:
        return [g.to_dict() for g in storage.get_all_games()]
    except Exception as e:
        logging.error("Fetch games failed: %s", e)
        return _message(500, "Failed to fetch games")


@ng_app.get("/api/games/{game_id}")
async def get_game(game_id: str):
    try:
        game = storage.get_game(game_id) or storage.get_game_by_slug(game_id)
    except Exception as e:
        logging.error("Fetch game %s failed: %s", game_id, e)
        return _message(500, "Failed to fetch game")
    if game is None:
        return _message(404, "Game not found")
    return game.to_dict()


@ng_app.get("/api/games/{game_id}/demo-servers")
async def list_game_demo_servers(game_id: str):
    try:
        return [s.to_dict() for s in storage.get_demo_servers_by_game_id(game_id)]
    except Exception as e:
        logging.error("Fetch demo servers for %s failed: %s", game_id, e)
        return _message(500, "Failed to fetch demo servers for game")


# --------------- Demo servers ---------------


@ng_app.get("/api/demo-servers")
async def list_demo_servers():
    try:
        return [s.to_dict() for s in storage.get_active_demo_servers()]
    except Exception as e:
        logging.error("Fetch demo servers failed: %s", e)
        return _message(500, "Failed to fetch demo servers")


@ng_app.get("/api/demo-servers/{server_id}")
async def get_demo_server(server_id: str):
    try:
        server = storage.get_demo_server(server_id)
    except Exception as e:
        logging.error("Fetch demo server %s failed: %s", server_id, e)
        return _message(500, "Failed to fetch demo server")
    if server is None:
        return _message(404, "Demo server not found")
    return server.to_dict()


# --------------- Platform status ---------------


@ng_app.get("/api/server-status")
async def list_server_status():
    try:
        return [s.to_dict() for s in storage.get_all_service_status()]
    except Exception as e:
        logging.error("Fetch server status failed: %s", e)
        return _message(500, "Failed to fetch server status")


@ng_app.get("/api/server-locations")
async def list_server_locations():
    try:
        return [loc.to_dict() for loc in storage.get_all_server_locations()]
    except Exception as e:
        logging.error("Fetch server locations failed: %s", e)
        return _message(500, "Failed to fetch server locations")


# --------------- Content ---------------


@ng_app.get("/api/blog")
async def list_blog_posts():
    try:
        return [p.to_dict() for p in storage.get_published_blog_posts()]
    except Exception as e:
        logging.error("Fetch blog posts failed: %s", e)
        return _message(500, "Failed to fetch blog posts")


@ng_app.get("/api/blog/{slug}")
async def get_blog_post(slug: str):
    try:
        post = storage.get_blog_post_by_slug(slug)
    except Exception as e:
        logging.error("Fetch blog post %s failed: %s", slug, e)
        return _message(500, "Failed to fetch blog post")
    if post is None:
        return _message(404, "Blog post not found")
    return post.to_dict()


@ng_app.get("/api/faqs")
async def list_faqs():
    try:
        return [f.to_dict() for f in storage.get_all_faqs()]
    except Exception as e:
        logging.error("Fetch faqs failed: %s", e)
        return _message(500, "Failed to fetch faqs")


@ng_app.get("/api/theme-settings")
async def get_theme_settings():
    return {
        "showCookieBanner": True,
        "cookieConsentRequired": True,
        "cookiePolicyText": COOKIE_POLICY_TEXT,
        "cookiePolicyUrl": COOKIE_POLICY_URL,
        "cookieCategories": [c.to_dict() for c in DEFAULT_CATEGORIES],
    }


# --------------- Live server query ---------------


@ng_app.get("/api/query-server/{address}")
@ng_app.get("/api/query-server/{address}/{port}")
async def query_server_status(address: str, port: str = str(DEFAULT_QUERY_PORT)):
    try:
        port_num = int(port)
    except ValueError:
        port_num = -1
    if not 0 < port_num <= 0xFFFF:
        return _message(400, f"Invalid port: {port}")
    try:
        return await query_server(address, port_num, _upstream_client(), STATUS_API_URL)
    except ServerOfflineError:
        return _message(404, "Server is offline or not found", online=False)
    except Exception as e:
        logging.error("Server query error for %s:%s: %s", address, port, e)
        return _message(500, "Failed to query server")
