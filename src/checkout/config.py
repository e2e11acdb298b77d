"""Stripe credential and client settings.

Secrets come from the environment when set (local development, tests) and
from SSM Parameter Store otherwise:

    STRIPE_SECRET_KEY / STRIPE_WEBHOOK_SECRET
    /{SSM_PARAMETER_PREFIX}/{ENVIRONMENT}/stripe/secret_key
    /{SSM_PARAMETER_PREFIX}/{ENVIRONMENT}/stripe/webhook_secret
"""

import os

from pydantic import BaseModel, ConfigDict, Field

from .services.ssm_service import SSMService, get_ssm_service
from .services.stripe_service import (
    DEFAULT_MAX_NETWORK_RETRIES,
    DEFAULT_PRODUCT_NAME,
    STRIPE_API_VERSION,
)


class StripeSettings(BaseModel):
    """Resolved configuration for StripeService."""

    model_config = ConfigDict(frozen=True)

    secret_key: str = Field(default="", repr=False)
    webhook_secret: str = Field(default="", repr=False)
    api_version: str = STRIPE_API_VERSION
    max_network_retries: int = Field(default=DEFAULT_MAX_NETWORK_RETRIES, ge=0)
    product_name: str = DEFAULT_PRODUCT_NAME

    @staticmethod
    def parameter_path(name: str, environment: str | None = None) -> str:
        """Build the SSM path for a Stripe parameter.

        Args:
            name: Parameter leaf name (secret_key, webhook_secret).
            environment: Environment name. Defaults to ENVIRONMENT env var.
        """
        prefix = os.environ.get("SSM_PARAMETER_PREFIX", "checkout")
        env = environment or os.environ.get("ENVIRONMENT", "dev")
        return f"/{prefix}/{env}/stripe/{name}"

    @classmethod
    def load(
        cls,
        environment: str | None = None,
        ssm: SSMService | None = None,
    ) -> "StripeSettings":
        """Resolve settings from environment variables, falling back to SSM.

        Args:
            environment: Environment name used in SSM paths.
            ssm: SSM service to read from. Defaults to the shared instance.

        Returns:
            StripeSettings with both secrets populated.

        Raises:
            SSMServiceError: If a secret is not in the environment and cannot
                be read from SSM.
        """
        secret_key = os.environ.get("STRIPE_SECRET_KEY")
        webhook_secret = os.environ.get("STRIPE_WEBHOOK_SECRET")

        if not secret_key or not webhook_secret:
            ssm = ssm or get_ssm_service()
            if not secret_key:
                secret_key = ssm.get_parameter(cls.parameter_path("secret_key", environment))
            if not webhook_secret:
                webhook_secret = ssm.get_parameter(
                    cls.parameter_path("webhook_secret", environment)
                )

        overrides = {}
        if os.environ.get("STRIPE_MAX_NETWORK_RETRIES"):
            overrides["max_network_retries"] = int(os.environ["STRIPE_MAX_NETWORK_RETRIES"])
        if os.environ.get("CHECKOUT_PRODUCT_NAME"):
            overrides["product_name"] = os.environ["CHECKOUT_PRODUCT_NAME"]

        return cls(secret_key=secret_key, webhook_secret=webhook_secret, **overrides)
