import argparse
import logging
import os
import sys

from nicegui import app as ng_app
from nicegui import ui

import voltweb.routes  # noqa: F401  registers the /api endpoints
from voltweb.common.logging_config import configure_logging, resolve_cli_level
from voltweb.components.layout import frame
from voltweb.constants import (
    LOG_LEVEL,
    SERVER_HOST,
    SERVER_PORT,
    SITE_NAME,
    STATUS_POLL_INTERVAL_S,
    STORAGE_SECRET,
)
from voltweb.pages.games import GameDetailPage, GamesPage
from voltweb.pages.home import HomePage
from voltweb.pages.knowledgebase import KnowledgeBasePage
from voltweb.pages.privacy import PrivacyPage
from voltweb.pages.status import StatusPage
from voltweb.services.api_client import client

# Runtime configuration (resolved later from CLI/env)
RUNTIME_SERVER_HOST = SERVER_HOST
RUNTIME_SERVER_PORT = SERVER_PORT
RUNTIME_POLL_INTERVAL_S = STATUS_POLL_INTERVAL_S


# --------------- Pages ---------------


@ui.page("/")
async def index_page() -> None:
    with frame("Game Server Hosting"):
        await HomePage(poll_interval=RUNTIME_POLL_INTERVAL_S).build()


@ui.page("/games")
async def games_page() -> None:
    with frame("Games"):
        await GamesPage().build()


@ui.page("/games/{game_id}")
async def game_detail_page(game_id: str) -> None:
    with frame("Game"):
        await GameDetailPage(game_id).build()


@ui.page("/status")
async def status_page() -> None:
    with frame("Status"):
        await StatusPage(poll_interval=RUNTIME_POLL_INTERVAL_S).build()


@ui.page("/knowledgebase")
async def knowledgebase_page() -> None:
    with frame("Knowledge Base"):
        await KnowledgeBasePage().build()


@ui.page("/privacy-policy")
def privacy_page() -> None:
    with frame("Cookie Policy"):
        PrivacyPage().build()


async def _app_shutdown() -> None:
    await client.aclose()
    logging.info("Site API client closed")


ng_app.on_shutdown(_app_shutdown)


if __name__ in {"__main__", "__mp_main__"}:
    parser = argparse.ArgumentParser(description=f"{SITE_NAME} website")
    parser.add_argument("--host", default=SERVER_HOST, help="Webserver bind host")
    parser.add_argument(
        "--port", type=int, default=SERVER_PORT, help="Webserver bind port"
    )
    parser.add_argument(
        "--api-base-url",
        default=None,
        help="Base URL of the site API (default: this server)",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=STATUS_POLL_INTERVAL_S,
        help="Seconds between live server status cycles",
    )
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set log level",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Enable WARNING logging"
    )
    args, _ = parser.parse_known_args()

    RUNTIME_SERVER_HOST = args.host
    RUNTIME_SERVER_PORT = int(args.port)
    RUNTIME_POLL_INTERVAL_S = max(1.0, float(args.poll_interval))

    client.base_url = (
        args.api_base_url
        or os.getenv("VOLT_API_BASE_URL")
        or f"http://127.0.0.1:{RUNTIME_SERVER_PORT}"
    )

    if args.verbose >= 3:
        os.environ["VOLT_TRACE"] = "1"
    configure_logging(
        resolve_cli_level(args.log_level, args.verbose, args.quiet, LOG_LEVEL)
    )
    logging.info(
        f"Webserver bind: host={RUNTIME_SERVER_HOST} port={RUNTIME_SERVER_PORT}"
    )
    logging.info(
        f"Site API: {client.base_url} (status poll every {RUNTIME_POLL_INTERVAL_S:.0f}s)"
    )

    ui.run(
        title=f"{SITE_NAME} | Game Server Hosting",
        host=RUNTIME_SERVER_HOST,
        port=RUNTIME_SERVER_PORT,
        reload=False,
        show=False,
        favicon="⚡",
        storage_secret=STORAGE_SECRET,
        loop="uvloop" if sys.platform != "win32" else "asyncio",
        http="httptools",
        ws="wsproto",
    )
