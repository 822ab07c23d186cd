from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_gateway
from app.main import create_app
from app.settings import Settings


class FakeGateway:
    """Stands in for OpenRouterClient; records every call it receives."""

    def __init__(self, content: Any = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def complete_json(self, model: str, system_prompt: str, user_content: str) -> Any:
        self.calls.append(
            {"model": model, "system_prompt": system_prompt, "user_content": user_content}
        )
        if self.error is not None:
            raise self.error
        return self.content


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {"openrouter_api_key": "test-key"}
    values.update(overrides)
    return Settings(**values)


def make_client(gateway: FakeGateway | None = None, **overrides: Any) -> TestClient:
    app = create_app(make_settings(**overrides))
    if gateway is not None:
        app.dependency_overrides[get_gateway] = lambda: gateway
    return TestClient(app)


@pytest.fixture
def settings() -> Settings:
    return make_settings()
