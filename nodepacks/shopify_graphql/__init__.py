"""
Shopify GraphQL Node Pack.

- ShopifyGraphQl: run custom or pre-built queries against the Admin API
- shopifyGraphQlApi: shop name, access token and API version credential

All nodes are SYNC-CELERY SAFE.
"""

from .credentials import ShopifyGraphQlApiCredential
from .nodes import ShopifyGraphQlNode
from .manifest import MANIFEST, register_credentials, register_nodes

__all__ = [
    "ShopifyGraphQlNode",
    "ShopifyGraphQlApiCredential",
    "MANIFEST",
    "register_nodes",
    "register_credentials",
]
