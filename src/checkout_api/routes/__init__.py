"""API route modules."""

from .checkout import router as checkout_router
from .webhooks import router as webhooks_router

__all__ = ["checkout_router", "webhooks_router"]
