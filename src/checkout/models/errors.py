"""Error taxonomy for checkout and webhook operations.

Every public operation of the Stripe service surfaces exactly one of the
error kinds below. Each kind carries a fixed HTTP-style status code so callers
(the FastAPI layer in particular) can turn it into a response without a
lookup of their own.
"""

import functools
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class PaymentErrorKind(str, Enum):
    """Tags identifying each error variant."""

    INIT_ERROR = "InitError"
    MISSING_PARAM = "MissingParam"
    SESSION_CREATE_ERROR = "SessionCreateError"
    SESSION_RETRIEVE_ERROR = "SessionRetrieveError"
    SIGNATURE_ERROR = "SignatureError"
    PROCESSING_ERROR = "ProcessingError"


# Recovery suggestions for callers
ERROR_RECOVERY: dict[PaymentErrorKind, str] = {
    PaymentErrorKind.INIT_ERROR: "Verify Stripe secret key and webhook secret configuration",
    PaymentErrorKind.MISSING_PARAM: "Provide all required parameters and try again",
    PaymentErrorKind.SESSION_CREATE_ERROR: "Check the checkout parameters or try again later",
    PaymentErrorKind.SESSION_RETRIEVE_ERROR: "Verify the session ID or try again later",
    PaymentErrorKind.SIGNATURE_ERROR: "Reject the request and verify the webhook secret",
    PaymentErrorKind.PROCESSING_ERROR: "Log the failure and let Stripe redeliver the event",
}


class ErrorResponse(BaseModel):
    """Standard error body returned to HTTP callers."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: PaymentErrorKind
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None


class PaymentError(Exception):
    """Base error for all checkout and webhook failures.

    Attributes are frozen once the constructor returns. The original failure,
    when there is one, travels as ``__cause__`` via ``raise ... from exc``.
    """

    kind: PaymentErrorKind = PaymentErrorKind.PROCESSING_ERROR
    default_status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        *,
        stripe_error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        object.__setattr__(self, "message", message)
        object.__setattr__(
            self,
            "status_code",
            self.default_status_code if status_code is None else status_code,
        )
        object.__setattr__(self, "stripe_error_code", stripe_error_code)
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name: str, value: Any) -> None:
        # Python's raise machinery sets these on the instance
        if getattr(self, "_frozen", False) and not name.startswith("__"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    def __reduce__(self):
        # Rebuild through __init__; the default reduce restores state via __setattr__
        return (
            functools.partial(type(self), stripe_error_code=self.stripe_error_code),
            (self.message, self.status_code),
        )

    def to_response(self, details: Optional[dict[str, str]] = None) -> ErrorResponse:
        """Convert this exception to an ErrorResponse for HTTP responses.

        When a Stripe error code is attached, ``details`` also carries it
        together with a ``retryable`` hint.
        """
        if self.stripe_error_code:
            details = {
                **(details or {}),
                "stripe_error_code": self.stripe_error_code,
                "retryable": str(is_stripe_error_retryable(self.stripe_error_code)).lower(),
            }

        return ErrorResponse(
            error_code=self.kind,
            message=self.message,
            recovery=ERROR_RECOVERY[self.kind],
            details=details,
        )


class StripeInitializationError(PaymentError):
    kind = PaymentErrorKind.INIT_ERROR
    default_status_code = 400


class MissingRequiredParameterError(PaymentError):
    kind = PaymentErrorKind.MISSING_PARAM
    default_status_code = 422


class CheckoutSessionCreationError(PaymentError):
    kind = PaymentErrorKind.SESSION_CREATE_ERROR
    default_status_code = 400


class SessionRetrievalError(PaymentError):
    kind = PaymentErrorKind.SESSION_RETRIEVE_ERROR
    default_status_code = 400


class WebhookSignatureVerificationError(PaymentError):
    kind = PaymentErrorKind.SIGNATURE_ERROR
    default_status_code = 400


class WebhookProcessingError(PaymentError):
    kind = PaymentErrorKind.PROCESSING_ERROR
    default_status_code = 400


# Stripe error codes that indicate the caller may retry
STRIPE_RETRYABLE_ERRORS: set[str] = {
    "processing_error",
    "rate_limit",
    "lock_timeout",
    "api_connection_error",
}


def is_stripe_error_retryable(stripe_error_code: Optional[str]) -> bool:
    """Check if a Stripe error is likely transient and retryable.

    Args:
        stripe_error_code: The Stripe error code.

    Returns:
        True if the error may be resolved by retrying.
    """
    return stripe_error_code in STRIPE_RETRYABLE_ERRORS if stripe_error_code else False
