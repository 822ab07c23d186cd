from fastapi.responses import JSONResponse

from .settings import Settings


class CarbonCalError(Exception):
    """Base class for every failure the backend knows how to report."""

    status_code = 500


class InvalidRequestError(CarbonCalError):
    status_code = 400


class MissingCredentialError(CarbonCalError):
    pass


class GatewayError(CarbonCalError):
    """The model provider answered with a non-success status, or not at all."""

    def __init__(self, status: int | None, body: str) -> None:
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"OpenRouter request failed: {body}")
        else:
            super().__init__(f"OpenRouter error {status}: {body}")


class NoContentError(CarbonCalError):
    pass


class MalformedResponseError(CarbonCalError):
    pass


def failure_response(message: str, exc: Exception, settings: Settings) -> JSONResponse:
    status_code = exc.status_code if isinstance(exc, CarbonCalError) else 500
    content: dict[str, str] = {"error": message}
    if settings.development_mode:
        content["details"] = str(exc)
    return JSONResponse(status_code=status_code, content=content)
