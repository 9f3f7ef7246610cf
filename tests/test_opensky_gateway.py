import httpx
import pytest

from app.ingestors.opensky import OpenSkyGateway
from app.models import GatewayError


@pytest.mark.anyio
async def test_gateway_relays_upstream_body():
    seen = {}

    def handler(request: httpx.Request):
        seen["params"] = dict(request.url.params)
        seen["path"] = request.url.path
        return httpx.Response(200, json={"time": 1, "states": []})

    gateway = OpenSkyGateway(
        base_url="https://example.test/api/states/all",
        transport=httpx.MockTransport(handler),
    )

    result = await gateway.fetch_states(10, 10, 20, 20)

    assert result.status_code == 200
    assert result.ok
    assert result.body == {"time": 1, "states": []}
    assert seen["path"] == "/api/states/all"
    assert seen["params"] == {"lamin": "10", "lomin": "10", "lamax": "20", "lomax": "20"}


@pytest.mark.anyio
async def test_gateway_forwards_values_without_validation():
    seen = {}

    def handler(request: httpx.Request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(400, text="bad request")

    gateway = OpenSkyGateway(
        base_url="https://example.test", transport=httpx.MockTransport(handler)
    )

    result = await gateway.fetch_states("north", None, "91", "-200")

    assert seen["params"] == {"lamin": "north", "lomin": "", "lamax": "91", "lomax": "-200"}
    assert result.status_code == 400


@pytest.mark.anyio
async def test_gateway_maps_upstream_error_status():
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="down"))
    gateway = OpenSkyGateway(base_url="https://example.test", transport=transport)

    result = await gateway.fetch_states(10, 10, 20, 20)

    assert result.status_code == 503
    assert not result.ok
    assert result.body == {
        "error": "Error fetching from OpenSky Network: Service Unavailable"
    }


@pytest.mark.anyio
async def test_gateway_maps_transport_failure_to_500():
    def handler(request: httpx.Request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = OpenSkyGateway(
        base_url="https://example.test", transport=httpx.MockTransport(handler)
    )

    result = await gateway.fetch_states(10, 10, 20, 20)

    assert result.status_code == 500
    assert result.body["error"].startswith("Internal Server Error:")
    assert "connection refused" in result.body["error"]


@pytest.mark.anyio
async def test_gateway_maps_invalid_json_to_500():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, text="<html>not json</html>")
    )
    gateway = OpenSkyGateway(base_url="https://example.test", transport=transport)

    result = await gateway.fetch_states(10, 10, 20, 20)

    assert result.status_code == 500
    assert "Internal Server Error" in result.body["error"]


@pytest.mark.anyio
async def test_gateway_uses_shared_client():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"time": 5, "states": None})
    )
    async with httpx.AsyncClient(transport=transport) as client:
        gateway = OpenSkyGateway(base_url="https://example.test", client=client)
        result = await gateway.fetch_states(1, 2, 3, 4)

    assert result.body == {"time": 5, "states": None}


@pytest.mark.anyio
async def test_gateway_error_bodies_match_error_model():
    transport = httpx.MockTransport(lambda request: httpx.Response(429))
    gateway = OpenSkyGateway(base_url="https://example.test", transport=transport)

    result = await gateway.fetch_states(10, 10, 20, 20)

    assert result.status_code == 429
    error = GatewayError.model_validate(result.body)
    assert error.error == "Error fetching from OpenSky Network: Too Many Requests"
    assert set(result.body) == {"error"}
