"""
Request/response logging middleware for the echo-inspector server.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from echo_inspector.utils.logging import logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging requests and responses.

    Logs every incoming request and its outcome with timing information,
    and tags the response with X-Request-ID and X-Process-Time.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request and log information.

        Args:
            request: Incoming request
            call_next: Function to call the next middleware

        Returns:
            Response from the next middleware
        """
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        logger.info(
            f"Request {request_id}: {request.method} {request.url.path}",
            component="api",
            operation="request",
            context={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "query": str(request.query_params),
                "client_host": request.client.host if request.client else "unknown",
                "user_agent": request.headers.get("user-agent", "unknown"),
            },
        )

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Error processing request {request_id}: {str(e)}",
                component="api",
                operation="request",
                context={
                    "request_id": request_id,
                    "process_time": time.time() - start_time,
                },
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"Response {request_id}: {response.status_code} ({process_time:.3f}s)",
            component="api",
            operation="response",
            context={
                "request_id": request_id,
                "status_code": response.status_code,
                "process_time": process_time,
            },
        )

        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        response.headers["X-Request-ID"] = request_id
        return response


def add_logging_middleware(app: FastAPI) -> None:
    """
    Add request logging middleware to the FastAPI app.

    Args:
        app: FastAPI application
    """
    app.add_middleware(RequestLoggingMiddleware)
