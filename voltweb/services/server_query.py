from __future__ import annotations

import logging
from typing import Any

import httpx

from voltweb.constants import STATUS_API_URL


class ServerOfflineError(Exception):
    """Upstream answered, but the server is offline or unknown."""


def _join_motd(motd: Any) -> str:
    if isinstance(motd, dict):
        for key in ("clean", "raw"):
            lines = motd.get(key)
            if isinstance(lines, list) and lines:
                return " ".join(str(x) for x in lines)
            if isinstance(lines, str) and lines:
                return lines
    return "No MOTD"


def normalize_status(data: dict[str, Any], address: str, port: int) -> dict[str, Any]:
    """Map an mcsrvstat.us v3 answer onto the /api/query-server payload."""
    players = data.get("players") or {}
    debug = data.get("debug") or {}
    return {
        "online": bool(data.get("online")),
        "players": {
            "current": int(players.get("online") or 0),
            "max": int(players.get("max") or 0),
        },
        "version": str(data.get("version") or "Unknown"),
        "motd": _join_motd(data.get("motd")),
        "ping": int(debug.get("ping") or 0),
        "hostname": str(data.get("hostname") or address),
        "port": int(data.get("port") or port),
        "software": str(data.get("software") or "Unknown"),
    }


async def query_server(
    address: str,
    port: int,
    http: httpx.AsyncClient,
    base_url: str = STATUS_API_URL,
) -> dict[str, Any]:
    """
    Ask the upstream status service about address:port.

    Returns:
        Normalized status payload for an online server

    Raises:
        ServerOfflineError: If upstream reports the server offline
        httpx.HTTPError: On transport errors or a non-2xx upstream answer
    """
    url = f"{base_url.rstrip('/')}/{address}:{port}"
    response = await http.get(url)
    response.raise_for_status()
    data = response.json()
    if not isinstance(data, dict) or not data.get("online"):
        logging.debug("Upstream reports %s:%s offline", address, port)
        raise ServerOfflineError(f"{address}:{port} is offline")
    return normalize_status(data, address, port)
