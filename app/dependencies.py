from fastapi import Depends, Request

from .services.openrouter import OpenRouterClient
from .settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(settings: Settings = Depends(get_settings)) -> OpenRouterClient:
    return OpenRouterClient(settings)
