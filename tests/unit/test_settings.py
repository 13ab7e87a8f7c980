"""Tests for configuration settings."""
import pytest
from pydantic import ValidationError

from src.shopify_graphql.config.settings import Settings, get_settings, reset_settings


class TestSettings:
    """Test Settings configuration."""

    def test_settings_default_values(self, monkeypatch):
        """Test default values are set correctly."""
        monkeypatch.delenv("SHOPIFY_GRAPHQL_SHOP_NAME", raising=False)
        monkeypatch.delenv("SHOPIFY_GRAPHQL_ACCESS_TOKEN", raising=False)

        settings = Settings(_env_file=None)

        # env might be 'test' in test environment
        assert settings.env in ("development", "test")
        assert settings.log_level == "INFO"
        assert settings.shop_name == ""
        assert settings.access_token is None
        assert settings.api_version == "2024-10"
        assert settings.request_timeout_s == 30
        assert settings.page_size == 250

    def test_settings_env_prefix(self, monkeypatch):
        """Test that SHOPIFY_GRAPHQL_ prefix works for environment variables."""
        monkeypatch.setenv("SHOPIFY_GRAPHQL_ENV", "production")
        monkeypatch.setenv("SHOPIFY_GRAPHQL_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SHOPIFY_GRAPHQL_API_VERSION", "2025-01")

        settings = Settings(_env_file=None)

        assert settings.env == "production"
        assert settings.log_level == "DEBUG"
        assert settings.api_version == "2025-01"

    def test_access_token_is_secret(self, monkeypatch):
        """The token is not exposed by repr."""
        monkeypatch.setenv("SHOPIFY_GRAPHQL_ACCESS_TOKEN", "shpat_secret")

        settings = Settings(_env_file=None)

        assert settings.access_token.get_secret_value() == "shpat_secret"
        assert "shpat_secret" not in repr(settings)

    def test_credentials_shape(self, monkeypatch):
        """Settings map onto the shopifyGraphQlApi credential fields."""
        monkeypatch.setenv("SHOPIFY_GRAPHQL_SHOP_NAME", "acme")
        monkeypatch.setenv("SHOPIFY_GRAPHQL_ACCESS_TOKEN", "shpat_x")

        settings = Settings(_env_file=None)

        assert settings.credentials() == {
            "shopName": "acme",
            "accessToken": "shpat_x",
            "apiVersion": "2024-10",
        }

    @pytest.mark.parametrize("value", ["0", "-5"])
    def test_request_timeout_validation(self, monkeypatch, value):
        """Test that the request timeout must be positive."""
        monkeypatch.setenv("SHOPIFY_GRAPHQL_REQUEST_TIMEOUT_S", value)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    @pytest.mark.parametrize("value", ["0", "251"])
    def test_page_size_validation(self, monkeypatch, value):
        """Test that page size stays within the API maximum."""
        monkeypatch.setenv("SHOPIFY_GRAPHQL_PAGE_SIZE", value)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self):
        """Test the global settings instance and its reset."""
        reset_settings()
        first = get_settings()

        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first
        reset_settings()
