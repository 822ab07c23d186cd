import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import InvalidRequestError
from .routes.analyze import router as analyze_router
from .routes.estimate import router as estimate_router
from .schemas import HealthResponse
from .settings import Settings

logger = logging.getLogger(__name__)


def _invalid_request(exc: RequestValidationError) -> InvalidRequestError:
    errors = exc.errors()
    first = errors[0] if errors else {}
    if first.get("type") == "value_error":
        reason = first.get("ctx", {}).get("error")
        if reason is not None:
            return InvalidRequestError(str(reason))
    return InvalidRequestError("Invalid request body")


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = _invalid_request(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, error)
    return JSONResponse(status_code=error.status_code, content={"error": str(error)})


def create_app(settings: Settings) -> FastAPI:
    if not settings.openrouter_api_key:
        logger.warning("OPENROUTER_API_KEY is not set; model requests will fail")

    app = FastAPI(
        title="CarbonCal backend",
        version="1.0.0",
        description="Estimates and coaches on the carbon impact of everyday activities.",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/", response_model=HealthResponse)
    async def health():
        return {"status": "ok", "message": "CarbonCal backend running"}

    app.include_router(estimate_router)
    app.include_router(analyze_router)
    return app


load_dotenv()
settings = Settings.from_env()
app = create_app(settings)


def run() -> None:
    logging.basicConfig(level=logging.INFO)
    logger.info("CarbonCal backend listening on http://localhost:%s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
