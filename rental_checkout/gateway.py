"""
Payment gateway adapter.

The handler only knows the narrow ``PaymentGateway`` interface; the
Stripe implementation translates provider errors into the checkout
error taxonomy so no Stripe type leaks past this module.
"""

from typing import Optional, Protocol

import stripe

from rental_checkout.config import StripeConfig
from rental_checkout.errors import (
    ConfigurationError,
    GatewayError,
    GatewayTimeoutError,
)
from rental_checkout.logging_context import get_request_logger
from rental_checkout.schemas.checkout_schema import CheckoutSessionRequest

logger = get_request_logger(__name__)

_BUYER_FACING_ERRORS = (stripe.CardError, stripe.InvalidRequestError)


class PaymentGateway(Protocol):
    """Creates a hosted checkout session and returns its redirect URL."""

    def create_session(self, request: CheckoutSessionRequest) -> str:
        ...


def build_stripe_client(config: StripeConfig) -> stripe.StripeClient:
    """Build a client whose requests give up after the configured timeout."""
    return stripe.StripeClient(
        config.secret_key,
        http_client=stripe.RequestsClient(timeout=config.timeout_seconds),
        max_network_retries=config.max_network_retries,
    )


class StripeGateway:
    """``PaymentGateway`` backed by Stripe Checkout."""

    def __init__(
        self,
        config: StripeConfig,
        client: Optional[stripe.StripeClient] = None,
    ) -> None:
        self._config = config
        if client is None and config.secret_key:
            client = build_stripe_client(config)
        self._client = client

    def create_session(self, request: CheckoutSessionRequest) -> str:
        """Create a Checkout Session.

        Raises:
            ConfigurationError: No secret key is configured.
            GatewayTimeoutError: Stripe could not be reached in time.
            GatewayError: Stripe rejected the request or returned no URL.
        """
        if self._client is None:
            raise ConfigurationError()

        try:
            session = self._client.checkout.sessions.create(
                params=request.to_stripe_params()
            )
        except stripe.APIConnectionError as exc:
            logger.error("Stripe unreachable: %s", exc)
            raise GatewayTimeoutError() from exc
        except stripe.StripeError as exc:
            logger.error(
                "Stripe error (%s, status %s): %s",
                type(exc).__name__,
                exc.http_status,
                exc,
            )
            # Only card and request errors carry text meant for the buyer.
            if isinstance(exc, _BUYER_FACING_ERRORS):
                raise GatewayError(exc.user_message) from exc
            raise GatewayError() from exc

        if not session.url:
            logger.error("Stripe session %s has no redirect URL", session.id)
            raise GatewayError()

        logger.info("Stripe session created: %s", session.id)
        return session.url
