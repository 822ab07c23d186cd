from typing import Any

from pydantic import BaseModel, Field, model_validator


class EstimateRequest(BaseModel):
    description: str = Field(..., description="Free-text description of one activity")

    @model_validator(mode="before")
    @classmethod
    def _require_description(cls, data: Any) -> Any:
        description = data.get("description") if isinstance(data, dict) else None
        if not isinstance(description, str) or not description:
            raise ValueError("Missing or invalid 'description'")
        return data


class EstimateResult(BaseModel):
    category: str = Field(
        ..., description="One of transport, food, home, shopping, other"
    )
    carbon_grams: int = Field(..., ge=0, description="Lifecycle CO₂e in grams")
    carbon_calories: int = Field(
        ..., ge=0, description="User-facing score, 1 cc = 1 g CO₂e"
    )
    assumptions: Any = Field(
        default=None, description="Assumed distance, duration or emission factors"
    )
    explanation: Any = Field(
        default=None, description="Short human-friendly explanation of the estimate"
    )


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    status: str
    message: str
