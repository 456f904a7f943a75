"""
Centralized configuration with environment variable overrides.

Rates, redirect URLs, and Stripe settings are configurable here. Values
are read when a config object is built (not at import), so a serverless
process picks up its environment on first use and tests can override it.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from rental_checkout.logging_context import build_log_handler

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://kickndji.netlify.app"


def _env(env_var: str, default: str) -> str:
    return os.getenv(env_var, default)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class SiteConfig:
    """Where the checkout page sends the buyer back to."""

    # An empty URL falls back to the default, same as an unset one.
    base_url: str = field(
        default_factory=lambda: _env("URL", "") or DEFAULT_BASE_URL
    )

    @property
    def success_url(self) -> str:
        return f"{self.base_url}?success=true&session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.base_url}?cancelled=true"


@dataclass(frozen=True)
class PricingConfig:
    """Hourly rates (minor currency units) and line-item labels."""

    docent_rate_cents: int = field(
        default_factory=lambda: _safe_int("DOCENT_RATE_CENTS", "1000")
    )
    leerling_rate_cents: int = field(
        default_factory=lambda: _safe_int("LEERLING_RATE_CENTS", "1500")
    )
    currency: str = field(default_factory=lambda: _env("CURRENCY", "eur"))
    product_name: str = field(
        default_factory=lambda: _env("PRODUCT_NAME", "DJI OSMO Pocket 3")
    )


@dataclass(frozen=True)
class StripeConfig:
    """Credentials and network settings for the Stripe API."""

    secret_key: str = field(
        default_factory=lambda: _env("STRIPE_SECRET_KEY", ""), repr=False
    )
    timeout_seconds: float = field(
        default_factory=lambda: _safe_float("GATEWAY_TIMEOUT_SECONDS", "10")
    )
    max_network_retries: int = field(
        default_factory=lambda: _safe_int("GATEWAY_MAX_RETRIES", "0")
    )
    payment_method_types: tuple[str, ...] = ("card", "ideal")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    site: SiteConfig = field(default_factory=SiteConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    stripe: StripeConfig = field(default_factory=StripeConfig)
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not config.site.base_url.startswith(("http://", "https://")):
        raise ValueError(
            f"URL must start with http:// or https://, got {config.site.base_url!r}"
        )
    if config.pricing.docent_rate_cents < 1:
        raise ValueError(
            f"DOCENT_RATE_CENTS must be >= 1, got {config.pricing.docent_rate_cents}"
        )
    if config.pricing.leerling_rate_cents < 1:
        raise ValueError(
            f"LEERLING_RATE_CENTS must be >= 1, got {config.pricing.leerling_rate_cents}"
        )
    if config.stripe.timeout_seconds <= 0:
        raise ValueError(
            "GATEWAY_TIMEOUT_SECONDS must be > 0, "
            f"got {config.stripe.timeout_seconds}"
        )
    if config.stripe.max_network_retries < 0:
        raise ValueError(
            f"GATEWAY_MAX_RETRIES must be >= 0, got {config.stripe.max_network_retries}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[build_log_handler()],
    )
    if not config.stripe.secret_key:
        logger.warning("STRIPE_SECRET_KEY is not set; checkout sessions will fail")
    logger.info("Configuration loaded, redirect base %s", config.site.base_url)
    return config
