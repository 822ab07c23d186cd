from ..schemas import EstimateResult
from ..settings import Settings
from .contracts import check_estimate, sanitize_estimate
from .normalizer import parse_model_content
from .openrouter import OpenRouterClient

SYSTEM_PROMPT = """
You are a carbon footprint estimator for a personal "carbon calorie" tracker.
The user will describe ONE activity in natural language (e.g. "Took an Uber 4km to campus" or "ate a beef burger").

You MUST return a single JSON object with this exact shape:

{
  "category": "transport" | "food" | "home" | "shopping" | "other",
  "carbon_grams": number,
  "carbon_calories": number,
  "assumptions": string,
  "explanation": string
}

Definitions:
- `carbon_grams` is your best estimate of the lifecycle CO₂e emissions, in grams, for this single activity.
- `carbon_calories` is a user-facing scoring unit. Set it equal to carbon_grams (1 cc = 1 g CO₂e).
- `assumptions` summarize any assumed distance, duration, or emission factors.
- `explanation` is a short, human-friendly explanation of how you got the estimate.

Be conservative and choose simple default assumptions if the user is vague.
If the activity is clearly low-impact (e.g. walking, biking), use a small positive number (e.g. 10–50 g) and explain why.
Never ask the user questions. Just estimate from what you have.
""".strip()


async def estimate_activity(
    description: str, gateway: OpenRouterClient, settings: Settings
) -> EstimateResult:
    content = await gateway.complete_json(
        model=settings.estimate_model,
        system_prompt=SYSTEM_PROMPT,
        user_content=description,
    )
    estimate = check_estimate(parse_model_content(content))
    return sanitize_estimate(estimate)
