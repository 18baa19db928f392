from __future__ import annotations

import httpx
import pytest

from voltweb.services.server_query import ServerOfflineError, normalize_status, query_server

MCSRVSTAT_ONLINE = {
    "online": True,
    "ip": "203.0.113.7",
    "port": 25565,
    "hostname": "demo.voltservers.com",
    "debug": {"ping": True},
    "version": "Paper 1.20.4",
    "software": "Paper",
    "players": {"online": 5, "max": 20},
    "motd": {"raw": ["§aWelcome"], "clean": ["Welcome", "to VoltServers"]},
}


@pytest.mark.unit
def test_normalize_joins_clean_motd_lines():
    status = normalize_status(MCSRVSTAT_ONLINE, "demo.voltservers.com", 25565)

    assert status["online"] is True
    assert status["players"] == {"current": 5, "max": 20}
    assert status["motd"] == "Welcome to VoltServers"
    assert status["software"] == "Paper"
    assert status["hostname"] == "demo.voltservers.com"


@pytest.mark.unit
def test_normalize_fills_defaults():
    status = normalize_status({"online": True}, "1.2.3.4", 25570)

    assert status["motd"] == "No MOTD"
    assert status["version"] == "Unknown"
    assert status["hostname"] == "1.2.3.4"
    assert status["port"] == 25570
    assert status["players"] == {"current": 0, "max": 0}


def _http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.unit
async def test_query_builds_upstream_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=MCSRVSTAT_ONLINE)

    async with _http(handler) as http:
        status = await query_server("demo.voltservers.com", 25565, http, "https://status.test/3/")

    assert seen == ["https://status.test/3/demo.voltservers.com:25565"]
    assert status["players"]["current"] == 5


@pytest.mark.unit
async def test_query_offline_raises_server_offline():
    async with _http(lambda r: httpx.Response(200, json={"online": False})) as http:
        with pytest.raises(ServerOfflineError):
            await query_server("gone.example", 25565, http, "https://status.test/3")


@pytest.mark.unit
async def test_query_upstream_error_propagates():
    async with _http(lambda r: httpx.Response(502)) as http:
        with pytest.raises(httpx.HTTPStatusError):
            await query_server("demo.voltservers.com", 25565, http, "https://status.test/3")
