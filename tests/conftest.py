"""Pytest configuration and fixtures for checkout service tests.

This module provides reusable fixtures for testing:
- A StripeService wired to a mocked StripeClient
- Sample Stripe webhook events for every handled type
- Real Stripe webhook signatures for end-to-end verification
"""

import hashlib
import hmac
import json
import os
import time
from typing import Any, Generator
from unittest.mock import MagicMock

import pytest

# === Environment Setup ===

# Fake credentials for moto; never touch real AWS from tests
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from checkout.services.stripe_service import StripeService  # noqa: E402
from checkout.services.webhook_handler import WebhookHandler  # noqa: E402

TEST_SECRET_KEY = "sk_test_abc123xyz"
TEST_WEBHOOK_SECRET = "whsec_test_secret123"


# === Helper Functions ===


def create_stripe_signature(
    payload: bytes, secret: str = TEST_WEBHOOK_SECRET, timestamp: int | None = None
) -> str:
    """Create a valid Stripe webhook signature.

    Stripe signatures use HMAC-SHA256 with format: t={timestamp},v1={signature}
    """
    ts = str(timestamp if timestamp is not None else int(time.time()))
    signed_payload = f"{ts}.{payload.decode('utf-8')}"
    signature = hmac.new(
        secret.encode("utf-8"),
        signed_payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return f"t={ts},v1={signature}"


def make_event(event_type: str, obj: dict[str, Any], event_id: str = "evt_test_123") -> dict:
    """Build a Stripe event envelope around a domain object."""
    return {
        "id": event_id,
        "object": "event",
        "api_version": "2025-01-27.acacia",
        "created": 1704067200,
        "livemode": False,
        "pending_webhooks": 1,
        "request": {"id": None, "idempotency_key": None},
        "type": event_type,
        "data": {"object": obj},
    }


# === Isolation ===


@pytest.fixture(autouse=True)
def clean_stripe_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove Stripe settings from the environment and reset cached services."""
    from checkout_api.dependencies import reset_services

    for name in (
        "STRIPE_SECRET_KEY",
        "STRIPE_WEBHOOK_SECRET",
        "STRIPE_MAX_NETWORK_RETRIES",
        "CHECKOUT_PRODUCT_NAME",
        "SSM_PARAMETER_PREFIX",
        "ENVIRONMENT",
    ):
        monkeypatch.delenv(name, raising=False)

    reset_services()
    yield
    reset_services()


# === Service Fixtures ===


@pytest.fixture
def mock_stripe_client() -> MagicMock:
    """Mock StripeClient for API calls."""
    client = MagicMock()
    session = MagicMock()
    session.id = "cs_test_123"
    session.url = "https://checkout.stripe.com/c/pay/cs_test_123"
    client.checkout.sessions.create.return_value = session
    return client


@pytest.fixture
def stripe_service(mock_stripe_client: MagicMock) -> StripeService:
    """StripeService backed by the mocked client."""
    return StripeService(
        TEST_SECRET_KEY,
        TEST_WEBHOOK_SECRET,
        client=mock_stripe_client,
    )


@pytest.fixture
def mock_handler() -> MagicMock:
    """WebhookHandler double for counting dispatch calls."""
    return MagicMock(spec=WebhookHandler)


# === Sample Events ===


@pytest.fixture
def payment_intent_created_event() -> dict:
    return make_event(
        "payment_intent.created",
        {
            "id": "pi_test_abc",
            "object": "payment_intent",
            "amount": 500,
            "currency": "usd",
            "created": 1704067100,
            "status": "requires_payment_method",
        },
        event_id="evt_pi_created_1",
    )


@pytest.fixture
def payment_intent_succeeded_event() -> dict:
    return make_event(
        "payment_intent.succeeded",
        {
            "id": "pi_test_abc",
            "object": "payment_intent",
            "amount": 500,
            "currency": "usd",
            "status": "succeeded",
            "receipt_email": "buyer@example.com",
        },
        event_id="evt_pi_succeeded_1",
    )


@pytest.fixture
def charge_updated_event() -> dict:
    return make_event(
        "charge.updated",
        {
            "id": "ch_test_def",
            "object": "charge",
            "amount": 500,
            "paid": True,
            "status": "succeeded",
        },
        event_id="evt_charge_updated_1",
    )


@pytest.fixture
def charge_succeeded_event() -> dict:
    return make_event(
        "charge.succeeded",
        {
            "id": "ch_test_def",
            "object": "charge",
            "amount": 500,
            "payment_method": "pm_test_card",
            "status": "succeeded",
        },
        event_id="evt_charge_succeeded_1",
    )


@pytest.fixture
def checkout_completed_event() -> dict:
    return make_event(
        "checkout.session.completed",
        {
            "id": "cs_test_session_abc",
            "object": "checkout.session",
            "customer": "cus_test_123",
            "payment_status": "paid",
            "amount_total": 500,
            "currency": "usd",
            "url": None,
            "client_reference_id": "7f8c2a0e-1d5b-4c1e-9a55-3f0f3c2b9d11",
        },
        event_id="evt_checkout_completed_1",
    )


@pytest.fixture
def unhandled_event() -> dict:
    return make_event(
        "invoice.paid",
        {"id": "in_test_1", "object": "invoice", "amount_paid": 500},
        event_id="evt_invoice_paid_1",
    )


@pytest.fixture
def signed_payload():
    """Factory returning (payload bytes, Stripe-Signature header) for an event."""

    def _sign(
        event: dict, secret: str = TEST_WEBHOOK_SECRET, timestamp: int | None = None
    ) -> tuple[bytes, str]:
        payload = json.dumps(event).encode("utf-8")
        return payload, create_stripe_signature(payload, secret, timestamp)

    return _sign
