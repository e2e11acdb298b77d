"""Stripe checkout and webhook services."""

from .ssm_service import SSMService, SSMServiceError, get_ssm_service
from .stripe_service import StripeService
from .webhook_handler import WebhookHandler

__all__ = [
    "SSMService",
    "SSMServiceError",
    "get_ssm_service",
    "StripeService",
    "WebhookHandler",
]
