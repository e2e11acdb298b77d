"""Stripe webhook event models.

Recognized event types get their own model so handlers can rely on the shape
of ``data.object``. The domain object itself (PaymentIntent, Charge, Checkout
Session) is kept exactly as Stripe sent it; only the envelope is typed.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class WebhookEventType(str, Enum):
    """Stripe event types with a dedicated handler."""

    PAYMENT_INTENT_CREATED = "payment_intent.created"
    PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
    CHARGE_UPDATED = "charge.updated"
    CHARGE_SUCCEEDED = "charge.succeeded"
    CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


class EventData(BaseModel):
    """The ``data`` member of a Stripe event."""

    model_config = ConfigDict(extra="allow")

    object: dict[str, Any] = Field(
        ...,
        description="Stripe object the event is about, verbatim",
    )
    previous_attributes: dict[str, Any] | None = Field(
        default=None,
        description="Changed attributes for *.updated events",
    )


class StripeEventBase(BaseModel):
    """Envelope fields shared by every Stripe event."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(
        ...,
        description="Stripe event ID (evt_xxx)",
        examples=["evt_1ABC123DEF456"],
    )
    type: str = Field(
        ...,
        description="Stripe event type",
        examples=["checkout.session.completed"],
    )
    object: str = "event"
    api_version: str | None = None
    created: int | None = Field(default=None, description="Unix timestamp")
    livemode: bool = False
    pending_webhooks: int | None = None
    request: dict[str, Any] | None = None
    data: EventData


class PaymentIntentCreatedEvent(StripeEventBase):
    type: Literal["payment_intent.created"]

    @property
    def payment_intent(self) -> dict[str, Any]:
        return self.data.object


class PaymentIntentSucceededEvent(StripeEventBase):
    type: Literal["payment_intent.succeeded"]

    @property
    def payment_intent(self) -> dict[str, Any]:
        return self.data.object


class ChargeUpdatedEvent(StripeEventBase):
    type: Literal["charge.updated"]

    @property
    def charge(self) -> dict[str, Any]:
        return self.data.object


class ChargeSucceededEvent(StripeEventBase):
    type: Literal["charge.succeeded"]

    @property
    def charge(self) -> dict[str, Any]:
        return self.data.object


class CheckoutSessionCompletedEvent(StripeEventBase):
    type: Literal["checkout.session.completed"]

    @property
    def session(self) -> dict[str, Any]:
        return self.data.object


class GenericEvent(StripeEventBase):
    """Any event type without a dedicated model."""


WebhookEvent = Union[
    PaymentIntentCreatedEvent,
    PaymentIntentSucceededEvent,
    ChargeUpdatedEvent,
    ChargeSucceededEvent,
    CheckoutSessionCompletedEvent,
    GenericEvent,
]

EVENT_MODELS: dict[WebhookEventType, type[StripeEventBase]] = {
    WebhookEventType.PAYMENT_INTENT_CREATED: PaymentIntentCreatedEvent,
    WebhookEventType.PAYMENT_INTENT_SUCCEEDED: PaymentIntentSucceededEvent,
    WebhookEventType.CHARGE_UPDATED: ChargeUpdatedEvent,
    WebhookEventType.CHARGE_SUCCEEDED: ChargeSucceededEvent,
    WebhookEventType.CHECKOUT_SESSION_COMPLETED: CheckoutSessionCompletedEvent,
}


def parse_event(payload: Mapping[str, Any]) -> WebhookEvent:
    """Build the typed event model for a verified Stripe event.

    Args:
        payload: Event as returned by ``stripe.Webhook.construct_event``
            (a StripeObject) or a plain dict.

    Returns:
        The matching event model, or GenericEvent for unrecognized types.

    Raises:
        pydantic.ValidationError: If the envelope is malformed.
    """
    if hasattr(payload, "to_dict"):
        payload = payload.to_dict()

    try:
        event_type = WebhookEventType(payload.get("type"))
    except ValueError:
        return GenericEvent.model_validate(dict(payload))

    return EVENT_MODELS[event_type].model_validate(dict(payload))
