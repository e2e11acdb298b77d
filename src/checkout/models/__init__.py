"""Pydantic models and error types for checkout and webhook handling."""

from .checkout import (
    CheckoutSessionRequest,
    CheckoutSessionResult,
    GetCheckoutSessionRequest,
)
from .errors import (
    ERROR_RECOVERY,
    STRIPE_RETRYABLE_ERRORS,
    CheckoutSessionCreationError,
    ErrorResponse,
    MissingRequiredParameterError,
    PaymentError,
    PaymentErrorKind,
    SessionRetrievalError,
    StripeInitializationError,
    WebhookProcessingError,
    WebhookSignatureVerificationError,
    is_stripe_error_retryable,
)
from .events import (
    ChargeSucceededEvent,
    ChargeUpdatedEvent,
    CheckoutSessionCompletedEvent,
    EventData,
    GenericEvent,
    PaymentIntentCreatedEvent,
    PaymentIntentSucceededEvent,
    StripeEventBase,
    WebhookEvent,
    WebhookEventType,
    parse_event,
)

__all__ = [
    # Checkout
    "CheckoutSessionRequest",
    "CheckoutSessionResult",
    "GetCheckoutSessionRequest",
    # Errors
    "ERROR_RECOVERY",
    "STRIPE_RETRYABLE_ERRORS",
    "CheckoutSessionCreationError",
    "ErrorResponse",
    "MissingRequiredParameterError",
    "PaymentError",
    "PaymentErrorKind",
    "SessionRetrievalError",
    "StripeInitializationError",
    "WebhookProcessingError",
    "WebhookSignatureVerificationError",
    "is_stripe_error_retryable",
    # Events
    "ChargeSucceededEvent",
    "ChargeUpdatedEvent",
    "CheckoutSessionCompletedEvent",
    "EventData",
    "GenericEvent",
    "PaymentIntentCreatedEvent",
    "PaymentIntentSucceededEvent",
    "StripeEventBase",
    "WebhookEvent",
    "WebhookEventType",
    "parse_event",
]
