"""Webhook endpoints for Stripe.

This endpoint does NOT require authentication as it receives signed payloads
from Stripe. The raw body is passed to the service untouched so the
signature check sees exactly what Stripe signed.
"""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from checkout.models.errors import ErrorResponse, WebhookSignatureVerificationError
from checkout.services.stripe_service import StripeService
from checkout.utils.logging import get_logger
from checkout_api.dependencies import get_stripe_service

logger = get_logger(__name__)

router = APIRouter(tags=["webhooks"])

SIGNATURE_HEADER = "Stripe-Signature"


class WebhookResponse(BaseModel):
    """Standard webhook response."""

    received: bool
    event_id: str | None = None
    event_type: str | None = None
    processing_result: str  # "handled" or "skipped"


@router.post(
    "/webhooks/stripe",
    summary="Receive Stripe webhook events",
    description="""
Endpoint for Stripe webhook events. Handles:
- payment_intent.created, payment_intent.succeeded
- charge.updated, charge.succeeded
- checkout.session.completed

Other event types are acknowledged with `processing_result=skipped`.

**No authentication required** - signature is verified using Stripe webhook secret.
""",
    response_model=WebhookResponse,
    responses={
        200: {"description": "Event received", "model": WebhookResponse},
        400: {
            "description": "Invalid signature or processing failure",
            "model": ErrorResponse,
        },
    },
)
async def handle_stripe_webhook(
    request: Request,
    stripe_service: StripeService = Depends(get_stripe_service),
) -> WebhookResponse:
    """Verify and dispatch an incoming Stripe webhook event."""
    signature = request.headers.get(SIGNATURE_HEADER)
    if not signature:
        logger.warning("Webhook request missing Stripe-Signature header")
        raise WebhookSignatureVerificationError("Missing Stripe-Signature header")

    payload = await request.body()

    event = stripe_service.construct_event(payload, signature)
    handled = stripe_service.dispatch_event(event)

    return WebhookResponse(
        received=True,
        event_id=event.id,
        event_type=event.type,
        processing_result="skipped" if handled is None else "handled",
    )
