"""Checkout session endpoints.

Provides REST endpoints for:
- Creating a Stripe Checkout session
- Retrieving a Checkout session's current state
"""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from checkout.models.checkout import CheckoutSessionRequest, CheckoutSessionResult
from checkout.services.stripe_service import StripeService
from checkout_api.dependencies import get_stripe_service

router = APIRouter(tags=["checkout"])


@router.post(
    "/checkout/sessions",
    summary="Create checkout session",
    description="""
Create a Stripe Checkout session for a one-time card payment.

**Notes:**
- Amount is in minor currency units (cents)
- Supported currencies: usd, eur
- Extra body fields are passed through onto the line item
- The session ID is appended to `success_url` as `session_id`
""",
    response_model=CheckoutSessionResult,
    status_code=HTTP_201_CREATED,
    responses={
        201: {"description": "Checkout session created"},
        400: {"description": "Invalid parameters or Stripe failure"},
    },
)
async def create_checkout_session(
    body: CheckoutSessionRequest,
    stripe_service: StripeService = Depends(get_stripe_service),
) -> CheckoutSessionResult:
    """Create a checkout session and return its redirect URL."""
    return stripe_service.create_checkout_session(body)


@router.get(
    "/checkout/sessions/{session_id}",
    summary="Get checkout session",
    description="Return the Checkout session exactly as Stripe reports it.",
    responses={
        200: {"description": "Session found"},
        400: {"description": "Session could not be retrieved"},
    },
)
async def get_checkout_session(
    session_id: str,
    stripe_service: StripeService = Depends(get_stripe_service),
) -> dict[str, Any]:
    """Retrieve a checkout session by ID."""
    session = stripe_service.get_checkout_session(session_id)
    return session.to_dict() if hasattr(session, "to_dict") else dict(session)
