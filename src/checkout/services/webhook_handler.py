"""Webhook handler for dispatching verified Stripe events.

Keeps per-event-type logic apart from signature verification and HTTP
routing. Each handler logs the fields relevant to its event type and returns
the event unchanged; subclass and override a handler to attach real work
(database updates, notifications) to that event type.
"""

from typing import Callable

from ..models.events import (
    ChargeSucceededEvent,
    ChargeUpdatedEvent,
    CheckoutSessionCompletedEvent,
    PaymentIntentCreatedEvent,
    PaymentIntentSucceededEvent,
    StripeEventBase,
    WebhookEvent,
    WebhookEventType,
)
from ..utils.logging import get_logger, log_webhook_event

logger = get_logger(__name__)


class WebhookHandler:
    """Routes Stripe events to the handler for their type.

    Unrecognized event types are logged and produce ``None``; that is an
    expected outcome, not an error.
    """

    def _handlers(self) -> dict[WebhookEventType, Callable[[StripeEventBase], StripeEventBase]]:
        return {
            WebhookEventType.PAYMENT_INTENT_CREATED: self.handle_payment_intent_created,
            WebhookEventType.PAYMENT_INTENT_SUCCEEDED: self.handle_payment_intent_succeeded,
            WebhookEventType.CHARGE_UPDATED: self.handle_charge_updated,
            WebhookEventType.CHARGE_SUCCEEDED: self.handle_charge_succeeded,
            WebhookEventType.CHECKOUT_SESSION_COMPLETED: self.handle_checkout_session_completed,
        }

    def dispatch(self, event: WebhookEvent) -> WebhookEvent | None:
        """Run the handler registered for the event's type.

        Args:
            event: Verified, parsed Stripe event

        Returns:
            The handled event, or None if the type has no handler.
        """
        try:
            event_type = WebhookEventType(event.type)
        except ValueError:
            log_webhook_event(logger, event.type, event.id, result="skipped")
            return None

        return self._handlers()[event_type](event)

    def handle_payment_intent_created(
        self, event: PaymentIntentCreatedEvent
    ) -> PaymentIntentCreatedEvent:
        payment_intent = event.payment_intent
        log_webhook_event(
            logger,
            event.type,
            event.id,
            result="handled",
            id=payment_intent.get("id"),
            amount=payment_intent.get("amount"),
            currency=payment_intent.get("currency"),
            created_at=payment_intent.get("created"),
        )
        return event

    def handle_payment_intent_succeeded(
        self, event: PaymentIntentSucceededEvent
    ) -> PaymentIntentSucceededEvent:
        payment_intent = event.payment_intent
        log_webhook_event(
            logger,
            event.type,
            event.id,
            result="handled",
            id=payment_intent.get("id"),
            amount=payment_intent.get("amount"),
            currency=payment_intent.get("currency"),
            status=payment_intent.get("status"),
            receipt_email=payment_intent.get("receipt_email"),
        )
        return event

    def handle_charge_updated(self, event: ChargeUpdatedEvent) -> ChargeUpdatedEvent:
        charge = event.charge
        log_webhook_event(
            logger,
            event.type,
            event.id,
            result="handled",
            id=charge.get("id"),
            amount=charge.get("amount"),
            paid=charge.get("paid"),
            status=charge.get("status"),
        )
        return event

    def handle_charge_succeeded(self, event: ChargeSucceededEvent) -> ChargeSucceededEvent:
        charge = event.charge
        log_webhook_event(
            logger,
            event.type,
            event.id,
            result="handled",
            id=charge.get("id"),
            amount=charge.get("amount"),
            payment_method=charge.get("payment_method"),
            status=charge.get("status"),
        )
        return event

    def handle_checkout_session_completed(
        self, event: CheckoutSessionCompletedEvent
    ) -> CheckoutSessionCompletedEvent:
        """Log a completed checkout session.

        ``client_reference_id`` is the correlation ID generated when the
        session was created; it links this event back to the caller's records.
        """
        session = event.session
        log_webhook_event(
            logger,
            event.type,
            event.id,
            result="handled",
            id=session.get("id"),
            customer=session.get("customer"),
            payment_status=session.get("payment_status"),
            amount_total=session.get("amount_total"),
            currency=session.get("currency"),
            session_url=session.get("url"),
            client_reference_id=session.get("client_reference_id"),
        )
        return event
