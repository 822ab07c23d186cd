import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_gateway
from app.errors import GatewayError, MalformedResponseError, MissingCredentialError
from app.main import create_app
from app.services.openrouter import OpenRouterClient
from conftest import make_settings


class RecordingTransport(httpx.MockTransport):
    def __init__(self, response: httpx.Response | None = None, error: Exception | None = None):
        self.requests: list[httpx.Request] = []
        self._response = response
        self._error = error
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return self._response


def _completion(content) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


def _complete(client: OpenRouterClient):
    return asyncio.run(
        client.complete_json(model="openai/gpt-4o-mini", system_prompt="sys", user_content="usr")
    )


def test_complete_json_posts_chat_completion() -> None:
    transport = RecordingTransport(_completion('{"summary": "ok"}'))
    client = OpenRouterClient(
        make_settings(openrouter_site_url="https://carboncal.example", openrouter_app_name="LowCarb"),
        transport=transport,
    )

    assert _complete(client) == '{"summary": "ok"}'

    [request] = transport.requests
    assert request.method == "POST"
    assert str(request.url) == "https://openrouter.ai/api/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.headers["HTTP-Referer"] == "https://carboncal.example"
    assert request.headers["X-Title"] == "LowCarb"
    assert json.loads(request.content) == {
        "model": "openai/gpt-4o-mini",
        "response_format": {"type": "json_object"},
        "messages": [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "usr"},
        ],
    }


def test_attribution_headers_default(settings) -> None:
    transport = RecordingTransport(_completion("{}"))
    _complete(OpenRouterClient(settings, transport=transport))

    headers = transport.requests[0].headers
    assert headers["HTTP-Referer"] == ""
    assert headers["X-Title"] == "CarbonCal"


def test_content_is_returned_unexamined(settings) -> None:
    blocks = [{"type": "text", "text": "{}"}]
    transport = RecordingTransport(_completion(blocks))
    assert _complete(OpenRouterClient(settings, transport=transport)) == blocks


@pytest.mark.parametrize(
    "payload", [{}, {"choices": []}, {"choices": [{}]}, {"choices": [{"message": {}}]}]
)
def test_missing_content_is_none(settings, payload) -> None:
    transport = RecordingTransport(httpx.Response(200, json=payload))
    assert _complete(OpenRouterClient(settings, transport=transport)) is None


def test_missing_credential_fails_before_network() -> None:
    transport = RecordingTransport(_completion("{}"))
    client = OpenRouterClient(make_settings(openrouter_api_key=None), transport=transport)

    with pytest.raises(MissingCredentialError, match="OPENROUTER_API_KEY"):
        _complete(client)
    assert transport.requests == []


def test_non_success_status_is_gateway_error(settings) -> None:
    transport = RecordingTransport(httpx.Response(429, text="rate limited"))

    with pytest.raises(GatewayError) as excinfo:
        _complete(OpenRouterClient(settings, transport=transport))
    assert excinfo.value.status == 429
    assert excinfo.value.body == "rate limited"


def test_transport_failure_is_gateway_error(settings) -> None:
    transport = RecordingTransport(error=httpx.ConnectError("connection refused"))

    with pytest.raises(GatewayError) as excinfo:
        _complete(OpenRouterClient(settings, transport=transport))
    assert excinfo.value.status is None


def test_non_json_body_is_malformed(settings) -> None:
    transport = RecordingTransport(httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(MalformedResponseError):
        _complete(OpenRouterClient(settings, transport=transport))


def _client_with_transport(transport: httpx.MockTransport, **overrides) -> TestClient:
    settings = make_settings(**overrides)
    app = create_app(settings)
    app.dependency_overrides[get_gateway] = lambda: OpenRouterClient(settings, transport=transport)
    return TestClient(app)


def test_upstream_500_maps_to_generic_error() -> None:
    transport = RecordingTransport(httpx.Response(500, text="upstream trace"))
    response = _client_with_transport(transport).post(
        "/api/estimate", json={"description": "ate a beef burger"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to estimate carbon footprint."}
    assert "details" not in response.json()


@pytest.mark.parametrize(
    "path, body",
    [
        ("/api/estimate", {"description": "ate a beef burger"}),
        ("/api/analyze", {"mode": "single", "description": "ate a beef burger"}),
    ],
)
def test_missing_credential_surfaces_as_500(path, body) -> None:
    transport = RecordingTransport(_completion("{}"))
    client = _client_with_transport(transport, openrouter_api_key=None, app_env="development")
    response = client.post(path, json=body)

    assert response.status_code == 500
    assert response.json()["details"] == "Missing OPENROUTER_API_KEY"
    assert transport.requests == []


def test_startup_warns_without_credential(caplog) -> None:
    with caplog.at_level("WARNING", logger="app.main"):
        create_app(make_settings(openrouter_api_key=None))
    assert "OPENROUTER_API_KEY is not set" in caplog.text


def test_end_to_end_estimate_through_real_client() -> None:
    content = json.dumps(
        {"category": "food", "carbon_grams": 3000.4, "carbon_calories": 3000.4,
         "assumptions": "150 g beef patty", "explanation": "Beef is emissions-heavy."}
    )
    transport = RecordingTransport(_completion(content))
    response = _client_with_transport(transport).post(
        "/api/estimate", json={"description": "ate a beef burger"}
    )

    assert response.status_code == 200
    assert response.json()["carbon_grams"] == 3000
    assert json.loads(transport.requests[0].content)["messages"][1]["content"] == "ate a beef burger"
