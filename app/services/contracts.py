import logging
import math
from typing import Any

from ..errors import MalformedResponseError
from ..models.analyze_schema import AnalyzeResult
from ..schemas import EstimateResult

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    # JSON true/false decode to bool, which is an int subclass.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def check_estimate(parsed: Any) -> dict:
    """Return the estimate payload if it carries numeric scores and a category."""
    if (
        not isinstance(parsed, dict)
        or not _is_number(parsed.get("carbon_grams"))
        or not _is_number(parsed.get("carbon_calories"))
        or not isinstance(parsed.get("category"), str)
    ):
        logger.error("Estimate contract violated: %r", parsed)
        raise MalformedResponseError("Malformed structured response from model")
    return parsed


def check_analysis(parsed: Any) -> AnalyzeResult:
    if not isinstance(parsed, dict):
        logger.error("Analysis contract violated: %r", parsed)
        raise MalformedResponseError("Malformed analysis response from model")

    summary = parsed.get("summary")
    if not isinstance(summary, str) or not summary:
        logger.error("Analysis contract violated: %r", parsed)
        raise MalformedResponseError("Malformed analysis response from model")

    return AnalyzeResult(
        mode=parsed.get("mode"),
        headline=parsed.get("headline"),
        summary=summary,
        top_insights=parsed.get("top_insights"),
        suggested_actions=parsed.get("suggested_actions"),
    )


def clamp_grams(value: float) -> int:
    # round() is half-to-even; inputs are expected non-negative.
    return max(0, round(value))


def sanitize_estimate(estimate: dict) -> EstimateResult:
    return EstimateResult(
        category=estimate["category"],
        carbon_grams=clamp_grams(estimate["carbon_grams"]),
        carbon_calories=clamp_grams(estimate["carbon_calories"]),
        assumptions=estimate.get("assumptions"),
        explanation=estimate.get("explanation"),
    )
