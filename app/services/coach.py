import json
import logging
from typing import Any

from ..models.analyze_schema import AnalyzeRequest, AnalyzeResult
from ..settings import Settings
from .contracts import check_analysis
from .normalizer import parse_model_content
from .openrouter import OpenRouterClient

logger = logging.getLogger(__name__)

PROMPT = """
You are an encouraging, practical sustainability coach for a "carbon calorie" tracker.

You will receive a JSON payload describing either:
- ONE activity ("single" mode), or
- a list of activities for a particular day ("day" mode).

You MUST respond with a single JSON object in this exact shape:

{
  "mode": "single" | "day",
  "headline": string,
  "summary": string,
  "top_insights": string[],
  "suggested_actions": string[]
}

Guidelines:
- "headline": 1 sentence, snappy, under ~100 characters.
- "summary": 2–4 sentences summarizing the activity/day in plain English.
- "top_insights": 3–5 observations about where the carbon impact comes from.
- "suggested_actions": 2–5 realistic behavior suggestions (small swaps, habit tweaks).

Tone:
- Encouraging, non-judgmental, practical.
- Emphasize progress, not perfection.
""".strip()


class ActivityCoachService:
    @staticmethod
    def build_payload(request: AnalyzeRequest) -> dict[str, Any]:
        """Shape the request the way the coaching prompt describes it.

        ``description`` is only sent in single mode and ``entries`` only in day
        mode; the unused one is left out entirely rather than sent as null.
        Empty ``date``/``goal`` values collapse to null.
        """
        payload: dict[str, Any] = {"mode": request.mode}
        if request.mode == "single":
            payload["description"] = request.description
        payload["date"] = request.date or None
        payload["goal"] = request.goal or None
        if request.mode == "day":
            payload["entries"] = request.entries
        return payload

    @classmethod
    async def analyze(
        cls, request: AnalyzeRequest, gateway: OpenRouterClient, settings: Settings
    ) -> AnalyzeResult:
        payload_json = json.dumps(cls.build_payload(request), ensure_ascii=False)
        logger.info("Analyzing activities in %s mode", request.mode)

        content = await gateway.complete_json(
            model=settings.analyze_model,
            system_prompt=PROMPT,
            user_content=payload_json,
        )
        return check_analysis(parse_model_content(content))
