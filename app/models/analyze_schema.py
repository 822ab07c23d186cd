from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


class AnalyzeRequest(BaseModel):
    mode: Literal["single", "day"]
    description: Optional[str] = Field(
        default=None, description="The activity to analyze in 'single' mode"
    )
    entries: Optional[List[Any]] = Field(
        default=None,
        description="Activities of the day in 'day' mode: [{label, category, amount, notes}]",
    )
    date: Any = None
    goal: Any = None

    @model_validator(mode="before")
    @classmethod
    def _check_mode(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            data = {}

        mode = data.get("mode")
        if mode not in ("single", "day"):
            raise ValueError("mode must be 'single' or 'day'")

        cleaned = {"mode": mode, "date": data.get("date"), "goal": data.get("goal")}
        if mode == "single":
            description = data.get("description")
            if not isinstance(description, str) or not description:
                raise ValueError("In 'single' mode, a description string is required")
            cleaned["description"] = description
        else:
            entries = data.get("entries")
            if not isinstance(entries, list):
                raise ValueError("In 'day' mode, an entries array is required")
            cleaned["entries"] = entries
        return cleaned


class AnalyzeResult(BaseModel):
    mode: Any = None
    headline: Any = None
    summary: str
    top_insights: Any = None
    suggested_actions: Any = None
