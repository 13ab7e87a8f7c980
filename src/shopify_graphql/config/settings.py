"""Configuration and settings management using pydantic-settings."""
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for running the node outside a workflow host (CLI, scripts)."""

    model_config = SettingsConfigDict(
        env_prefix="SHOPIFY_GRAPHQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Core settings
    env: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Log level")

    # Shop credentials
    shop_name: str = Field(
        default="",
        description="Store name, the part before .myshopify.com",
    )
    access_token: SecretStr | None = Field(
        default=None,
        description="Admin API access token",
    )
    api_version: str = Field(
        default="2024-10",
        description="Admin API version",
    )

    # Request behaviour
    request_timeout_s: float = Field(
        default=30,
        description="Timeout for a single GraphQL request in seconds",
    )
    page_size: int = Field(
        default=250,
        description="Page size used when returning all results",
    )

    @field_validator("request_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate that the timeout is positive."""
        if v <= 0:
            raise ValueError("request_timeout_s must be positive")
        return v

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Validate the page size against the API maximum."""
        if not 1 <= v <= 250:
            raise ValueError("page_size must be between 1 and 250")
        return v

    def credentials(self) -> dict[str, str]:
        """Credential data in the shape of the shopifyGraphQlApi credential."""
        return {
            "shopName": self.shop_name,
            "accessToken": self.access_token.get_secret_value() if self.access_token else "",
            "apiVersion": self.api_version,
        }


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
