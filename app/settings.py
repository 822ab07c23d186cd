import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    openrouter_api_key: str | None = Field(default=None, alias="OPENROUTER_API_KEY")
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1", alias="OPENROUTER_BASE_URL"
    )
    openrouter_site_url: str | None = Field(default=None, alias="OPENROUTER_SITE_URL")
    openrouter_app_name: str = Field(default="CarbonCal", alias="OPENROUTER_APP_NAME")
    openrouter_timeout: float = Field(default=60.0, alias="OPENROUTER_TIMEOUT")
    estimate_model: str = Field(default="openai/gpt-4o-mini", alias="ESTIMATE_MODEL")
    analyze_model: str = Field(default="openai/gpt-4o", alias="ANALYZE_MODEL")
    port: int = Field(default=4000, alias="PORT")
    app_env: str = Field(default="production", alias="APP_ENV")

    @property
    def development_mode(self) -> bool:
        return self.app_env.lower() == "development"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        source = os.environ if env is None else env
        data = {
            "OPENROUTER_API_KEY": source.get("OPENROUTER_API_KEY") or None,
            "OPENROUTER_BASE_URL": source.get(
                "OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"
            ),
            "OPENROUTER_SITE_URL": source.get("OPENROUTER_SITE_URL") or None,
            "OPENROUTER_APP_NAME": source.get("OPENROUTER_APP_NAME") or "CarbonCal",
            "OPENROUTER_TIMEOUT": source.get("OPENROUTER_TIMEOUT") or 60.0,
            "ESTIMATE_MODEL": source.get("ESTIMATE_MODEL", "openai/gpt-4o-mini"),
            "ANALYZE_MODEL": source.get("ANALYZE_MODEL", "openai/gpt-4o"),
            "PORT": source.get("PORT") or 4000,
            "APP_ENV": source.get("APP_ENV", "production"),
        }
        return cls.model_validate(data)
