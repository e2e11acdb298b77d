"""Stripe payment service for checkout sessions and webhooks.

Provides integration with Stripe using the v8+ StripeClient pattern:
- Checkout session creation
- Checkout session retrieval
- Webhook signature verification and dispatch
"""

import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import stripe
from pydantic import ValidationError
from stripe import StripeClient

from ..models.checkout import (
    CheckoutSessionRequest,
    CheckoutSessionResult,
    GetCheckoutSessionRequest,
)
from ..models.errors import (
    CheckoutSessionCreationError,
    MissingRequiredParameterError,
    SessionRetrievalError,
    StripeInitializationError,
    WebhookProcessingError,
    WebhookSignatureVerificationError,
)
from ..models.events import WebhookEvent, parse_event
from ..utils.logging import get_logger, log_payment_operation
from .webhook_handler import WebhookHandler

if TYPE_CHECKING:
    from ..config import StripeSettings

logger = get_logger(__name__)

STRIPE_API_VERSION = "2025-01-27.acacia"
DEFAULT_MAX_NETWORK_RETRIES = 3
DEFAULT_PRODUCT_NAME = "Your Product Name"
CHECKOUT_SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


def _success_url_with_session_id(success_url: str) -> str:
    separator = "&" if "?" in success_url else "?"
    return f"{success_url}{separator}session_id={CHECKOUT_SESSION_ID_PLACEHOLDER}"


class StripeService:
    """Service for Stripe checkout and webhook operations.

    Every public method raises a single operation-specific PaymentError
    subclass; the underlying failure is chained as ``__cause__``.

    Usage:
        stripe_svc = StripeService("sk_test_...", "whsec_...")
        result = stripe_svc.create_checkout_session(
            CheckoutSessionRequest(
                amount=500,
                currency="usd",
                success_url="https://example.com/ok",
                cancel_url="https://example.com/cancel",
            )
        )
    """

    def __init__(
        self,
        secret_key: str,
        webhook_secret: str,
        *,
        client: StripeClient | None = None,
        handler: WebhookHandler | None = None,
        api_version: str = STRIPE_API_VERSION,
        max_network_retries: int = DEFAULT_MAX_NETWORK_RETRIES,
        product_name: str = DEFAULT_PRODUCT_NAME,
        tolerance: int = stripe.Webhook.DEFAULT_TOLERANCE,
    ) -> None:
        """Initialize the service and its Stripe client.

        Args:
            secret_key: Stripe secret API key (sk_xxx).
            webhook_secret: Webhook endpoint signing secret (whsec_xxx).
            client: Pre-built StripeClient, mainly for tests.
            handler: Webhook handler receiving verified events.
            api_version: Stripe API version pinned for all requests.
            max_network_retries: Retries the SDK performs on network errors.
            product_name: Line item name shown on the Checkout page.
            tolerance: Maximum webhook timestamp age in seconds.

        Raises:
            StripeInitializationError: If either secret is missing.
        """
        if not secret_key:
            raise StripeInitializationError("Stripe secret key is required.")

        if not webhook_secret:
            raise StripeInitializationError("Stripe webhook secret is required.")

        self._client = client or StripeClient(
            secret_key,
            stripe_version=api_version,
            max_network_retries=max_network_retries,
        )
        self._webhook_secret = webhook_secret
        self._handler = handler or WebhookHandler()
        self._product_name = product_name
        self._tolerance = tolerance

    @classmethod
    def from_settings(cls, settings: "StripeSettings", **kwargs: Any) -> "StripeService":
        """Build a service from resolved StripeSettings."""
        return cls(
            settings.secret_key,
            settings.webhook_secret,
            api_version=settings.api_version,
            max_network_retries=settings.max_network_retries,
            product_name=settings.product_name,
            **kwargs,
        )

    def create_checkout_session(
        self, request: CheckoutSessionRequest | Mapping[str, Any]
    ) -> CheckoutSessionResult:
        """Create a Stripe Checkout session for a single one-time payment.

        Args:
            request: Amount, currency, success and cancel URLs, plus optional
                extra line-item fields.

        Returns:
            CheckoutSessionResult with the redirect URL, session ID and the
            client_reference_id attached to the session.

        Raises:
            CheckoutSessionCreationError: On invalid input or Stripe failure.
        """
        try:
            checkout = self._validate_checkout_request(request)
            client_reference_id = str(uuid.uuid4())

            log_payment_operation(
                logger,
                "create_checkout_session",
                client_reference_id=client_reference_id,
                amount=checkout.amount,
                currency=checkout.currency,
            )

            session = self._client.checkout.sessions.create(
                params={
                    "payment_method_types": ["card"],
                    "line_items": [
                        {
                            "price_data": {
                                "currency": checkout.currency,
                                "product_data": {"name": self._product_name},
                                "unit_amount": checkout.amount,
                            },
                            "quantity": 1,
                            **checkout.line_item_extras,
                        }
                    ],
                    "mode": "payment",
                    "success_url": _success_url_with_session_id(checkout.success_url),
                    "cancel_url": checkout.cancel_url,
                    "client_reference_id": client_reference_id,
                }
            )

            if not session.url or not session.id:
                raise CheckoutSessionCreationError(
                    "Stripe returned a checkout session without url or id."
                )

            log_payment_operation(
                logger,
                "create_checkout_session",
                session_id=session.id,
                client_reference_id=client_reference_id,
                status="created",
            )

            return CheckoutSessionResult(
                url=session.url,
                session_id=session.id,
                client_reference_id=client_reference_id,
            )

        except Exception as e:
            error_code = getattr(e, "code", None) or getattr(e, "stripe_error_code", None)
            logger.error("Error creating checkout session: %s", e)
            raise CheckoutSessionCreationError(
                "Failed to create checkout session.",
                stripe_error_code=error_code,
            ) from e

    def get_checkout_session(
        self, request: GetCheckoutSessionRequest | Mapping[str, Any] | str
    ) -> "stripe.checkout.Session":
        """Retrieve a Checkout session as Stripe returns it.

        Args:
            request: Session ID, or a request/mapping carrying ``session_id``.

        Returns:
            The Stripe Checkout Session object, unchanged.

        Raises:
            SessionRetrievalError: On missing ID or Stripe failure.
        """
        try:
            if isinstance(request, str):
                session_id = request
            elif isinstance(request, GetCheckoutSessionRequest):
                session_id = request.session_id
            else:
                session_id = request.get("session_id")

            if not session_id:
                raise MissingRequiredParameterError("Session ID is required.")

            return self._client.checkout.sessions.retrieve(session_id)

        except Exception as e:
            logger.error("Error retrieving session: %s", e)
            raise SessionRetrievalError(
                "Failed to retrieve session.",
                stripe_error_code=getattr(e, "code", None),
            ) from e

    def handle_webhook(self, payload: bytes | str, signature: str) -> WebhookEvent | None:
        """Verify a webhook delivery and dispatch it by event type.

        Args:
            payload: Raw, unmodified request body.
            signature: Stripe-Signature header value.

        Returns:
            The handled event, or None for event types without a handler.

        Raises:
            WebhookSignatureVerificationError: If the signature or payload is
                invalid. The event is never dispatched in that case.
            WebhookProcessingError: If parsing or the handler fails.
        """
        return self.dispatch_event(self.construct_event(payload, signature))

    def construct_event(self, payload: bytes | str, signature: str) -> WebhookEvent:
        """Verify a webhook delivery and parse it into a typed event.

        Raises:
            WebhookSignatureVerificationError: If the signature or payload is
                invalid.
            WebhookProcessingError: If the verified envelope is malformed.
        """
        try:
            verified = stripe.Webhook.construct_event(
                payload, signature, self._webhook_secret, self._tolerance
            )
        except (stripe.SignatureVerificationError, ValueError) as e:
            logger.warning("Webhook signature verification failed: %s", e)
            raise WebhookSignatureVerificationError(
                f"Webhook signature verification failed: {e}"
            ) from e

        try:
            return parse_event(verified)
        except Exception as e:
            logger.error("Webhook processing error: %s", e)
            raise WebhookProcessingError(f"Webhook processing error: {e}") from e

    def dispatch_event(self, event: WebhookEvent) -> WebhookEvent | None:
        """Hand a verified event to the webhook handler.

        Returns:
            The handled event, or None for event types without a handler.

        Raises:
            WebhookProcessingError: If the handler fails.
        """
        try:
            return self._handler.dispatch(event)
        except Exception as e:
            logger.error("Webhook processing error: %s", e)
            raise WebhookProcessingError(f"Webhook processing error: {e}") from e

    @staticmethod
    def _validate_checkout_request(
        request: CheckoutSessionRequest | Mapping[str, Any],
    ) -> CheckoutSessionRequest:
        if not isinstance(request, CheckoutSessionRequest):
            try:
                request = CheckoutSessionRequest.model_validate(dict(request))
            except ValidationError as e:
                raise MissingRequiredParameterError(
                    f"Invalid checkout session parameters: {e.error_count()} error(s)"
                ) from e

        if (
            not request.amount
            or not request.currency
            or not request.success_url
            or not request.cancel_url
        ):
            raise MissingRequiredParameterError(
                "Amount, currency, successUrl, and cancelUrl are required."
            )

        return request
