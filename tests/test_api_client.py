from __future__ import annotations

import httpx
import pytest

from voltweb.services.api_client import ApiError, SiteClient


def make_client(handler) -> SiteClient:
    return SiteClient(base_url="http://site.test", transport=httpx.MockTransport(handler))


@pytest.mark.unit
async def test_get_json_returns_body():
    client = make_client(lambda r: httpx.Response(200, json={"id": "g1"}))
    try:
        assert await client.get_json("/api/games/g1") == {"id": "g1"}
    finally:
        await client.aclose()


@pytest.mark.unit
async def test_error_carries_upstream_message():
    client = make_client(lambda r: httpx.Response(404, json={"message": "Game not found"}))
    try:
        with pytest.raises(ApiError) as excinfo:
            await client.get_json("/api/games/nope")
    finally:
        await client.aclose()

    assert excinfo.value.message == "Game not found"
    assert excinfo.value.status_code == 404


@pytest.mark.unit
async def test_error_without_body_uses_status_code():
    client = make_client(lambda r: httpx.Response(503, text="unavailable"))
    try:
        with pytest.raises(ApiError, match=r"Request failed \(503\)"):
            await client.get_json("/api/faqs")
    finally:
        await client.aclose()


@pytest.mark.unit
async def test_transport_error_becomes_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = make_client(handler)
    try:
        with pytest.raises(ApiError):
            await client.get_json("/api/faqs")
    finally:
        await client.aclose()


@pytest.mark.unit
@pytest.mark.parametrize(
    "response",
    [httpx.Response(500, json={"message": "Failed to fetch faqs"}), httpx.Response(200, json={"not": "a list"})],
)
async def test_get_list_degrades_to_empty(response):
    client = make_client(lambda r: response)
    try:
        assert await client.get_list("/api/faqs") == []
    finally:
        await client.aclose()


@pytest.mark.unit
async def test_query_server_hits_status_route_and_returns_raw_response():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(404, json={"message": "Server is offline or not found", "online": False})

    client = make_client(handler)
    try:
        response = await client.query_server("demo.voltservers.com", 25565)
    finally:
        await client.aclose()

    assert seen == ["/api/query-server/demo.voltservers.com/25565"]
    assert response.status_code == 404
