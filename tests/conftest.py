"""Shared test fixtures and helpers."""

import json
from typing import Any, Optional

import pytest

from rental_checkout.config import AppConfig, PricingConfig, SiteConfig, StripeConfig
from rental_checkout.handler import CheckoutRequestHandler
from rental_checkout.schemas.checkout_schema import CheckoutSessionRequest

TEST_BASE_URL = "https://kickndji.test"
REDIRECT_URL = "https://checkout.stripe.com/c/pay/cs_test_123"

# Pass as a field value to leave the field out of the payload entirely.
DROP = object()


class FakeGateway:
    """Records session requests and answers with a fixed URL or error."""

    def __init__(self, url: str = REDIRECT_URL, error: Optional[Exception] = None) -> None:
        self.url = url
        self.error = error
        self.requests: list[CheckoutSessionRequest] = []

    def create_session(self, request: CheckoutSessionRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.url

    @property
    def last_request(self) -> CheckoutSessionRequest:
        return self.requests[-1]


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        site=SiteConfig(base_url=TEST_BASE_URL),
        pricing=PricingConfig(
            docent_rate_cents=1000,
            leerling_rate_cents=1500,
            currency="eur",
            product_name="DJI OSMO Pocket 3",
        ),
        stripe=StripeConfig(
            secret_key="sk_test_dummy",
            timeout_seconds=10.0,
            max_network_retries=0,
        ),
        log_level="INFO",
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def checkout(config, gateway) -> CheckoutRequestHandler:
    return CheckoutRequestHandler(config, gateway=gateway)


def make_payload(**overrides: Any) -> dict[str, Any]:
    """Booking form payload with sensible defaults (Scenario A)."""
    payload = {
        "name": "Jan",
        "email": "jan@x.nl",
        "phone": "0612345678",
        "role": "docent",
        "date": "2024-06-01",
        "startTime": "10:00",
        "hours": 2,
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not DROP}


def make_body(**overrides: Any) -> str:
    return json.dumps(make_payload(**overrides))
