"""FastAPI application for the checkout service.

This package provides REST endpoints for:
- Health checks
- Checkout session creation and retrieval
- Stripe webhook delivery
"""

import logging
import os
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from mangum import Mangum

from checkout.utils.logging import configure_logging
from checkout_api.exceptions import register_exception_handlers
from checkout_api.middleware.correlation import CorrelationIdMiddleware
from checkout_api.routes import checkout_router, webhooks_router

configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Checkout Service API",
    description="Stripe Checkout sessions and webhook handling",
    version="0.1.0",
)

app.add_middleware(CorrelationIdMiddleware)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.include_router(checkout_router, prefix="/api")
app.include_router(webhooks_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Health check endpoint at /api/ping."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "checkout-api",
    }


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = True) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run(
            "checkout_api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
