import logging
from typing import Any

import httpx

from ..errors import GatewayError, MalformedResponseError, MissingCredentialError
from ..settings import Settings

logger = logging.getLogger(__name__)


class OpenRouterClient:
    """Chat-completions client for OpenRouter, always asking for a JSON object."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.openrouter_api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.openrouter_site_url or "",
            "X-Title": self.settings.openrouter_app_name,
        }

    async def complete_json(self, model: str, system_prompt: str, user_content: str) -> Any:
        """Send one system + user exchange and return the first choice's content as-is."""
        if not self.settings.openrouter_api_key:
            raise MissingCredentialError("Missing OPENROUTER_API_KEY")

        body = {
            "model": model,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
        }
        url = f"{self.settings.openrouter_base_url.rstrip('/')}/chat/completions"

        logger.info("Calling OpenRouter model %s", model)
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.openrouter_timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json=body, headers=self._headers())
        except httpx.HTTPError as exc:
            raise GatewayError(None, str(exc)) from exc

        if not response.is_success:
            raise GatewayError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("OpenRouter returned a non-JSON body") from exc

        try:
            return data["choices"][0]["message"].get("content")
        except (KeyError, IndexError, TypeError, AttributeError):
            return None
