import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """Base error. Rendered as `{"error": ..., "details": ...}`."""

    status_code = 500

    def __init__(
        self,
        message: str,
        details: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_envelope(self) -> dict:
        envelope = {"error": self.message}
        if self.details:
            envelope["details"] = self.details
        return envelope


class ValidationError(RelayError):
    """Required input is missing or malformed."""

    status_code = 400


class UpstreamError(RelayError):
    """The provider answered with a non-2xx status."""

    status_code = 500


class NetworkError(RelayError):
    """No response was received from the provider."""

    status_code = 500


class UpstreamTimeoutError(NetworkError):
    status_code = 504


async def _relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    details = None
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        details = f"{location}: {errors[0].get('msg')}"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, details)
    error = ValidationError("Invalid request data", details=details)
    return JSONResponse(status_code=error.status_code, content=error.to_envelope())


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayError, _relay_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
