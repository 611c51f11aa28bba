import logging
import traceback
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from app.schemas.common import error_response, validation_error_response
from app.utils.exceptions import AppException

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle all AppException subclasses (our custom exceptions)."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.status_code, exc.message),
    )


def _field_name(loc) -> str:
    # loc is a tuple like ("body", "email"); a non-object body is just ("body",)
    parts = [str(l) for l in loc if l != "body"]
    return ".".join(parts) if parts else "body"


def _clean_message(msg: str) -> str:
    # pydantic prefixes messages raised from our own validators
    return msg.removeprefix("Value error, ")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle Pydantic validation errors (400).
    Collects every failing field into a field -> message mapping.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = _field_name(error.get("loc", ()))
        # Keep the first message per field
        errors.setdefault(field, _clean_message(error.get("msg", "Invalid value")))

    logger.warning(f"Validation failed on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=validation_error_response(status.HTTP_400_BAD_REQUEST, errors),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """
    Handle SQLAlchemy IntegrityError (unique constraint violations, FK violations).
    Prevents raw DB errors from leaking to the client.
    """
    logger.warning(f"IntegrityError on {request.method} {request.url}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_response(status.HTTP_409_CONFLICT, "A record with this data already exists."),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all handler for unexpected exceptions.
    Logs the full traceback, returns a safe 500 response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url}\n"
        f"{''.join(traceback.format_exception(exc))}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred. Please try again later.",
        ),
    )
