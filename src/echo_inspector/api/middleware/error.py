"""
Error handling for the echo-inspector server.

The echo routes never fail on malformed input; these handlers cover
everything else (framework validation on the service routes and genuine
bugs) with a consistent JSON error body.
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from echo_inspector.constants import ERROR_EXECUTION, ERROR_VALIDATION
from echo_inspector.utils.logging import logger


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle FastAPI request validation errors.

    Args:
        request: FastAPI request object
        exc: Validation exception

    Returns:
        JSON response with error details
    """
    errors = []
    for error in exc.errors():
        loc = " > ".join(str(part) for part in error.get("loc", []))
        errors.append(f"{loc}: {error.get('msg', '')}")

    error_message = "Validation error"
    if errors:
        error_message += ": " + "; ".join(errors)

    logger.warning(
        f"Request validation error: {error_message}",
        component="api",
        operation="validation",
        context={"path": request.url.path},
    )

    return JSONResponse(
        status_code=422,
        content={
            "error": {
                "code": ERROR_VALIDATION,
                "message": error_message,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected exceptions.

    Args:
        request: FastAPI request object
        exc: Exception

    Returns:
        JSON response with error details
    """
    tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    logger.error(
        f"Unhandled exception: {str(exc)}",
        component="api",
        operation="exception",
        context={
            "exception_type": type(exc).__name__,
            "traceback": tb_str,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": ERROR_EXECUTION,
                "message": str(exc),
                "exception_type": type(exc).__name__,
            }
        },
    )


def add_error_handlers(app: FastAPI):
    """
    Add exception handlers to the FastAPI app.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
