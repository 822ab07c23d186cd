import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_gateway, get_settings
from ..errors import failure_response
from ..schemas import ErrorResponse, EstimateRequest, EstimateResult
from ..services.estimator import estimate_activity
from ..services.openrouter import OpenRouterClient
from ..settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


@router.post(
    "/estimate",
    response_model=EstimateResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def estimate(
    payload: EstimateRequest,
    settings: Settings = Depends(get_settings),
    gateway: OpenRouterClient = Depends(get_gateway),
):
    try:
        return await estimate_activity(payload.description, gateway, settings)
    except Exception as exc:
        logger.exception("Error in /api/estimate: %s", exc)
        return failure_response("Failed to estimate carbon footprint.", exc, settings)
