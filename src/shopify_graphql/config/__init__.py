"""Configuration package."""
from src.shopify_graphql.config.settings import get_settings, reset_settings, Settings

__all__ = ["get_settings", "reset_settings", "Settings"]
