"""Observability package."""
from src.shopify_graphql.observability.logging import (
    node_context,
    setup_logging,
)

__all__ = ["node_context", "setup_logging"]
