"""Unit tests for StripeSettings and SSM credential retrieval.

SSM calls run against moto's in-memory Parameter Store.
"""

from typing import Generator

import boto3
import pytest
from moto import mock_aws

from checkout.config import StripeSettings
from checkout.models.errors import StripeInitializationError
from checkout.services.ssm_service import SSMService, SSMServiceError, get_ssm_service
from checkout.services.stripe_service import STRIPE_API_VERSION, StripeService
from checkout_api.dependencies import get_stripe_service, get_stripe_settings, reset_services

TEST_SECRET_KEY = "sk_test_from_ssm"
TEST_WEBHOOK_SECRET = "whsec_test_from_ssm"


@pytest.fixture
def ssm_client() -> Generator:
    """Mocked SSM client with Stripe parameters for the dev environment."""
    with mock_aws():
        client = boto3.client("ssm", region_name="eu-west-1")
        client.put_parameter(
            Name="/checkout/dev/stripe/secret_key",
            Value=TEST_SECRET_KEY,
            Type="SecureString",
        )
        client.put_parameter(
            Name="/checkout/dev/stripe/webhook_secret",
            Value=TEST_WEBHOOK_SECRET,
            Type="SecureString",
        )
        yield client


class TestSSMService:
    def test_reads_secure_string(self, ssm_client):
        ssm = SSMService(client=ssm_client)

        assert ssm.get_parameter("/checkout/dev/stripe/secret_key") == TEST_SECRET_KEY

    def test_caches_values(self, ssm_client):
        ssm = SSMService(client=ssm_client)
        ssm.get_parameter("/checkout/dev/stripe/secret_key")

        ssm_client.put_parameter(
            Name="/checkout/dev/stripe/secret_key",
            Value="sk_test_rotated",
            Type="SecureString",
            Overwrite=True,
        )

        assert ssm.get_parameter("/checkout/dev/stripe/secret_key") == TEST_SECRET_KEY
        assert (
            ssm.get_parameter("/checkout/dev/stripe/secret_key", use_cache=False)
            == "sk_test_rotated"
        )

    def test_missing_parameter_raises(self, ssm_client):
        ssm = SSMService(client=ssm_client)

        with pytest.raises(SSMServiceError) as exc_info:
            ssm.get_parameter("/checkout/dev/stripe/missing")

        assert "not found" in str(exc_info.value)


class TestStripeSettings:
    def test_defaults(self):
        settings = StripeSettings(secret_key="sk", webhook_secret="whsec")

        assert settings.api_version == STRIPE_API_VERSION
        assert settings.max_network_retries == 3
        assert settings.product_name == "Your Product Name"

    def test_secrets_hidden_from_repr(self):
        settings = StripeSettings(secret_key="sk_live_secret", webhook_secret="whsec_secret")

        assert "sk_live_secret" not in repr(settings)
        assert "whsec_secret" not in repr(settings)

    def test_parameter_path(self, monkeypatch):
        monkeypatch.setenv("SSM_PARAMETER_PREFIX", "shop")

        assert StripeSettings.parameter_path("secret_key", "prod") == "/shop/prod/stripe/secret_key"

    def test_environment_variables_take_precedence(self, monkeypatch):
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_env")
        monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", "whsec_env")
        monkeypatch.setenv("STRIPE_MAX_NETWORK_RETRIES", "1")
        monkeypatch.setenv("CHECKOUT_PRODUCT_NAME", "Gift Card")

        settings = StripeSettings.load(ssm=SSMService(client=object()))

        assert settings.secret_key == "sk_env"
        assert settings.webhook_secret == "whsec_env"
        assert settings.max_network_retries == 1
        assert settings.product_name == "Gift Card"

    def test_falls_back_to_ssm(self, ssm_client):
        settings = StripeSettings.load(ssm=SSMService(client=ssm_client))

        assert settings.secret_key == TEST_SECRET_KEY
        assert settings.webhook_secret == TEST_WEBHOOK_SECRET

    def test_uses_environment_name_in_ssm_path(self, ssm_client, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "prod")

        with pytest.raises(SSMServiceError):
            StripeSettings.load(ssm=SSMService(client=ssm_client))


class TestServiceProvider:
    """The FastAPI dependency builds one service from settings."""

    def test_builds_service_from_ssm(self, ssm_client):
        service = get_stripe_service()

        assert isinstance(service, StripeService)
        assert get_stripe_service() is service
        assert get_stripe_settings().secret_key == TEST_SECRET_KEY

    def test_ssm_failure_becomes_init_error(self):
        with mock_aws():
            with pytest.raises(StripeInitializationError) as exc_info:
                get_stripe_service()

        assert isinstance(exc_info.value.__cause__, SSMServiceError)

    def test_reset_services_clears_ssm_cache(self, ssm_client):
        ssm = get_ssm_service()
        ssm.get_parameter("/checkout/dev/stripe/secret_key")

        reset_services()

        assert ssm._cache == {}
        assert get_ssm_service() is not ssm

    def test_reset_services_picks_up_rotated_secret(self, ssm_client):
        assert get_stripe_settings().secret_key == TEST_SECRET_KEY

        ssm_client.put_parameter(
            Name="/checkout/dev/stripe/secret_key",
            Value="sk_test_rotated",
            Type="SecureString",
            Overwrite=True,
        )
        reset_services()

        assert get_stripe_settings().secret_key == "sk_test_rotated"
