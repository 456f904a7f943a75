"""Tests for configuration loading and validation."""

from dataclasses import replace

import pytest

from rental_checkout.config import (
    DEFAULT_BASE_URL,
    AppConfig,
    PricingConfig,
    SiteConfig,
    StripeConfig,
    _safe_float,
    _safe_int,
    _validate_config,
    load_config,
)


class TestEnvironmentDefaults:
    def test_base_url_fallback(self, monkeypatch):
        monkeypatch.delenv("URL", raising=False)
        assert SiteConfig().base_url == DEFAULT_BASE_URL

    def test_empty_base_url_falls_back(self, monkeypatch):
        monkeypatch.setenv("URL", "")
        assert SiteConfig().base_url == DEFAULT_BASE_URL

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv("URL", "https://deploy-preview-7.netlify.app")
        site = SiteConfig()
        assert site.success_url == (
            "https://deploy-preview-7.netlify.app?success=true&session_id={CHECKOUT_SESSION_ID}"
        )
        assert site.cancel_url == "https://deploy-preview-7.netlify.app?cancelled=true"

    def test_default_rates(self, monkeypatch):
        monkeypatch.delenv("DOCENT_RATE_CENTS", raising=False)
        monkeypatch.delenv("LEERLING_RATE_CENTS", raising=False)
        pricing = PricingConfig()
        assert pricing.docent_rate_cents == 1000
        assert pricing.leerling_rate_cents == 1500

    def test_rates_from_env(self, monkeypatch):
        monkeypatch.setenv("DOCENT_RATE_CENTS", "1100")
        assert PricingConfig().docent_rate_cents == 1100

    def test_secret_key_from_env(self, monkeypatch):
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_env")
        assert StripeConfig().secret_key == "sk_test_env"

    def test_bad_integer_env(self, monkeypatch):
        monkeypatch.setenv("GATEWAY_MAX_RETRIES", "lots")
        with pytest.raises(ValueError, match="GATEWAY_MAX_RETRIES"):
            StripeConfig()


class TestConfigValidation:
    @pytest.fixture
    def valid(self, config) -> AppConfig:
        return config

    def test_valid_config_passes(self, valid):
        _validate_config(valid)  # should not raise

    def test_base_url_must_be_http(self, valid):
        config = replace(valid, site=SiteConfig(base_url="kickndji.netlify.app"))
        with pytest.raises(ValueError, match="URL"):
            _validate_config(config)

    def test_docent_rate_must_be_positive(self, valid):
        config = replace(valid, pricing=replace(valid.pricing, docent_rate_cents=0))
        with pytest.raises(ValueError, match="DOCENT_RATE_CENTS"):
            _validate_config(config)

    def test_leerling_rate_must_be_positive(self, valid):
        config = replace(valid, pricing=replace(valid.pricing, leerling_rate_cents=-5))
        with pytest.raises(ValueError, match="LEERLING_RATE_CENTS"):
            _validate_config(config)

    def test_timeout_must_be_positive(self, valid):
        config = replace(valid, stripe=replace(valid.stripe, timeout_seconds=0))
        with pytest.raises(ValueError, match="GATEWAY_TIMEOUT_SECONDS"):
            _validate_config(config)

    def test_retries_not_negative(self, valid):
        config = replace(valid, stripe=replace(valid.stripe, max_network_retries=-1))
        with pytest.raises(ValueError, match="GATEWAY_MAX_RETRIES"):
            _validate_config(config)


class TestLoadConfig:
    def test_load_config_reads_env(self, monkeypatch):
        monkeypatch.setenv("URL", "https://example.nl")
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_load")
        config = load_config()
        assert config.site.base_url == "https://example.nl"
        assert config.stripe.secret_key == "sk_test_load"

    def test_load_config_rejects_invalid(self, monkeypatch):
        monkeypatch.setenv("URL", "ftp://example.nl")
        with pytest.raises(ValueError):
            load_config()

    def test_missing_secret_key_warns(self, monkeypatch, caplog):
        monkeypatch.setenv("STRIPE_SECRET_KEY", "")
        with caplog.at_level("WARNING"):
            load_config()
        assert "STRIPE_SECRET_KEY" in caplog.text


class TestSafeParsing:
    def test_safe_int_parsing(self):
        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_float_parsing(self):
        assert _safe_float("NONEXISTENT_VAR_12345", "3.14") == pytest.approx(3.14)
