import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = structlog.get_logger()


class ModelFitError(Exception):
    """Base exception for ModelFit."""

    status_code = 500
    default_code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None) -> None:
        self.message = message
        self.code = code or self.default_code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(ModelFitError):
    status_code = 400
    default_code = "VALIDATION_ERROR"


class AuthenticationError(ModelFitError):
    """Caller is not (validly) authenticated. Always 401."""

    status_code = 401
    default_code = "UNAUTHORIZED"


class AuthorizationError(ModelFitError):
    """Caller is authenticated but its role is insufficient. Always 403."""

    status_code = 403
    default_code = "FORBIDDEN"


class NotFoundError(ModelFitError):
    status_code = 404
    default_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: str, code: str | None = None) -> None:
        super().__init__(message=f"{resource} with id '{resource_id}' not found", code=code)


class ConflictError(ModelFitError):
    status_code = 409
    default_code = "CONFLICT"


class InternalError(ModelFitError):
    status_code = 500
    default_code = "INTERNAL_ERROR"


def error_body(message: str, code: str, error_type: str) -> dict[str, str]:
    return {"error": message, "code": code, "type": error_type}


async def modelfit_error_handler(request: Request, exc: ModelFitError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, code=exc.code, error=exc.message)
        message = "Internal server error"
    else:
        message = exc.message
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, exc.code, type(exc).__name__),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), "HTTP_ERROR", "HTTPException"),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    locations = (".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors())
    fields = [loc for loc in locations if loc]
    message = f"Invalid request: {', '.join(fields)}" if fields else "Invalid request"
    return JSONResponse(
        status_code=400,
        content=error_body(message, "VALIDATION_ERROR", "ValidationError"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=error_body("Internal server error", InternalError.default_code, InternalError.__name__),
    )
