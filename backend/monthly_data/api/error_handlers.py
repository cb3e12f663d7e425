"""Error Handlers — global exception handlers for the Monthly Data API.

Invariants:
    - MonthlyDataError → {"message", "code"} with the error's HTTP status
    - RequestValidationError → 400 {"errors": [{msg, param, location, type}]}
    - Exception (catch-all) → 500 {"message": "Server error"}, never internal detail

Design Decisions:
    - Three-layer handler: domain (MonthlyDataError), validation (Pydantic), catch-all
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from monthly_data.core.errors import MonthlyDataError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MonthlyDataError)
    async def domain_error_handler(request: Request, exc: MonthlyDataError):
        """Handle all Monthly Data domain/infrastructure errors."""
        level = (
            logging.ERROR if exc.severity == ErrorSeverity.CRITICAL
            else logging.WARNING
        )
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": exc.http_status,
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
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc.errors()),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Server error", "code": "INTERNAL_ERROR"},
        )


def build_validation_error_response(errors) -> dict:
    """One entry per failed rule, keyed by the offending parameter."""
    details = []
    for e in errors:
        loc = [str(part) for part in e.get("loc", ())]
        location = loc[0] if loc else "body"
        param = ".".join(loc[1:]) if len(loc) > 1 else location
        details.append({
            "msg": e["msg"],
            "param": param,
            "location": location,
            "type": e["type"],
        })
    return {"errors": details}
