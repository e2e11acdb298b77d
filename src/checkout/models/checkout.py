"""Checkout session request and result models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CheckoutSessionRequest(BaseModel):
    """Parameters for a one-time card payment via Stripe Checkout.

    Presence of the four named fields is enforced by the service so that a
    missing field surfaces as a checkout error, not a pydantic error. Any
    extra keys are passed through onto the single line item.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "examples": [
                {
                    "amount": 500,
                    "currency": "usd",
                    "success_url": "https://example.com/ok",
                    "cancel_url": "https://example.com/cancel",
                }
            ]
        },
    )

    amount: int | None = Field(
        default=None,
        gt=0,
        description="Unit amount in minor currency units (cents)",
        examples=[500],
    )
    currency: Literal["usd", "eur"] | None = Field(
        default=None,
        description="Three-letter ISO currency code, lowercase",
        examples=["usd"],
    )
    success_url: str | None = Field(
        default=None,
        description="Redirect after payment; the session ID is appended as a query parameter",
        examples=["https://example.com/ok"],
    )
    cancel_url: str | None = Field(
        default=None,
        description="Redirect when the customer cancels",
        examples=["https://example.com/cancel"],
    )

    @property
    def line_item_extras(self) -> dict:
        """Extra fields supplied by the caller for the line item."""
        return dict(self.model_extra or {})


class CheckoutSessionResult(BaseModel):
    """Result of a checkout session creation."""

    model_config = ConfigDict(strict=True)

    url: str = Field(
        ...,
        min_length=1,
        description="Stripe-hosted Checkout URL to redirect the customer to",
        examples=["https://checkout.stripe.com/c/pay/cs_test_abc123"],
    )
    session_id: str = Field(
        ...,
        min_length=1,
        description="Stripe Checkout Session ID (cs_xxx)",
        examples=["cs_test_abc123def456"],
    )
    client_reference_id: str = Field(
        ...,
        description="Correlation ID attached to the session as client_reference_id",
    )


class GetCheckoutSessionRequest(BaseModel):
    """Parameters for looking up a checkout session."""

    session_id: str | None = Field(
        default=None,
        description="Stripe Checkout Session ID (cs_xxx)",
        examples=["cs_test_abc123def456"],
    )
