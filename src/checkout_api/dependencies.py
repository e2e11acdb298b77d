"""FastAPI dependency providers for shared services.

The StripeService is built once per process from StripeSettings (environment
variables first, SSM Parameter Store otherwise) and reused across requests.

Testing:
    Override ``get_stripe_service`` via ``app.dependency_overrides`` or call
    ``reset_services()`` between tests.
"""

from functools import lru_cache

from checkout.config import StripeSettings
from checkout.models.errors import StripeInitializationError
from checkout.services.ssm_service import SSMServiceError, get_ssm_service
from checkout.services.stripe_service import StripeService


@lru_cache
def get_stripe_settings() -> StripeSettings:
    """Get cached StripeSettings.

    Raises:
        StripeInitializationError: If secrets cannot be read from SSM.
    """
    try:
        return StripeSettings.load()
    except SSMServiceError as e:
        raise StripeInitializationError(
            f"Failed to load Stripe credentials: {e}"
        ) from e


@lru_cache
def get_stripe_service() -> StripeService:
    """Get cached StripeService instance."""
    return StripeService.from_settings(get_stripe_settings())


def reset_services() -> None:
    """Clear all cached service instances and the SSM cache.

    Call after rotating Stripe credentials so the next request re-reads them.
    """
    get_stripe_service.cache_clear()
    get_stripe_settings.cache_clear()
    if get_ssm_service.cache_info().currsize:
        get_ssm_service().clear_cache()
    get_ssm_service.cache_clear()
