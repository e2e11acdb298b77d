"""FastAPI exception handlers for converting PaymentError to HTTP responses.

Each PaymentError subclass carries its own status code (422 for missing
parameters, 400 for everything else), so the handler only has to serialize
the error in the ErrorResponse format.

Usage:
    from checkout_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from checkout.models.errors import PaymentError

logger = logging.getLogger(__name__)


async def payment_error_handler(request: Request, exc: PaymentError) -> JSONResponse:
    """Handle PaymentError exceptions and convert to JSON response.

    Client-side failures are logged at warning level with the error kind and
    request path; anything at 500 or above is logged with its traceback.

    Args:
        request: The incoming request
        exc: The PaymentError exception

    Returns:
        JSONResponse with error details and the error's status code.
    """
    if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.exception("Payment error on %s: %s", request.url.path, exc.message)
    else:
        logger.warning(
            "%s on %s %s: %s",
            exc.kind.value,
            request.method,
            request.url.path,
            exc.message,
            extra={"error_kind": exc.kind.value, "status_code": exc.status_code},
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(PaymentError, payment_error_handler)  # type: ignore[arg-type]
