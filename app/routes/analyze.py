import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_gateway, get_settings
from ..errors import failure_response
from ..models.analyze_schema import AnalyzeRequest, AnalyzeResult
from ..schemas import ErrorResponse
from ..services.coach import ActivityCoachService
from ..services.openrouter import OpenRouterClient
from ..settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


@router.post(
    "/analyze",
    response_model=AnalyzeResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(
    payload: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
    gateway: OpenRouterClient = Depends(get_gateway),
):
    try:
        return await ActivityCoachService.analyze(payload, gateway, settings)
    except Exception as exc:
        logger.exception("Error in /api/analyze: %s", exc)
        return failure_response("Failed to analyze activities.", exc, settings)
