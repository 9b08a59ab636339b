"""Error Handlers - global exception handlers for the Stays API.

Invariants:
    - StaysError -> its http_status with {"message": ...}
    - RequestValidationError -> 422 {"message": "Bad Request", "errors": {field: msg}}
    - A malformed id in the path names no resource: 404 of that resource
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - Field messages come from the schema modules (one message per field),
      falling back to Pydantic's own message for unknown fields
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import (
    StaysError, ErrorSeverity, SpotImageNotFoundError, SpotNotFoundError,
)
from app.schemas.review import REVIEW_FIELD_MESSAGES
from app.schemas.spot import SPOT_FIELD_MESSAGES

logger = logging.getLogger(__name__)

FIELD_MESSAGES: dict[str, str] = {**SPOT_FIELD_MESSAGES, **REVIEW_FIELD_MESSAGES}

PATH_NOT_FOUND = {
    "spot_id": SpotNotFoundError,
    "image_id": SpotImageNotFoundError,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_stays_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_stays_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StaysError)
    async def stays_error_handler(request: Request, exc: StaysError):
        """Handle all Stays domain/infrastructure errors."""
        log = (
            logger.error if exc.severity == ErrorSeverity.CRITICAL
            else logger.warning
        )
        log(
            f"StaysError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": exc.http_status,
                "user_id": exc.context.user_id,
                "spot_id": exc.context.spot_id,
                "image_id": exc.context.image_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        not_found = path_not_found_error(exc.errors())
        if not_found is not None:
            return JSONResponse(
                status_code=not_found.http_status,
                content=not_found.to_response(),
            )
        return JSONResponse(
            status_code=422,
            content=build_validation_error_response(exc.errors()),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all, never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def path_not_found_error(errors) -> StaysError | None:
    """404 for the first unparsable resource id in the path, if any."""
    for e in errors:
        loc = e["loc"]
        if len(loc) == 2 and loc[0] == "path" and loc[1] in PATH_NOT_FOUND:
            return PATH_NOT_FOUND[loc[1]](None)
    return None


def build_validation_error_response(errors) -> dict:
    """Collapse Pydantic errors into one message per field (first error wins)."""
    by_field: dict[str, str] = {}
    for e in errors:
        loc = [str(part) for part in e["loc"]]
        field = loc[-1] if len(loc) > 1 else loc[0]
        if field not in by_field:
            by_field[field] = FIELD_MESSAGES.get(field, e["msg"])
    return {"message": "Bad Request", "errors": by_field}
