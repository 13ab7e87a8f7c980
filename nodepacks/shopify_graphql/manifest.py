"""
Shopify GraphQL Node Pack Manifest - Registration function for entry-points.
"""

from src.node_registry.models import NodePackManifest
from .credentials import ShopifyGraphQlApiCredential
from .nodes import ShopifyGraphQlNode


MANIFEST = NodePackManifest(
    name="shopify-graphql",
    version="1.0.0",
    description="Execute GraphQL queries against the Shopify Admin API",
    author="shopify-graphql-node",
    license="MIT",
    nodes=[
        "shopifyGraphQl",
    ],
    credentials=[
        "shopifyGraphQlApi",
    ],
    entry_point="nodepacks.shopify_graphql",
)


# Node classes by type
NODE_CLASSES = {
    "shopifyGraphQl": ShopifyGraphQlNode,
}

# Credential classes by type
CREDENTIAL_CLASSES = {
    "shopifyGraphQlApi": ShopifyGraphQlApiCredential,
}


def register_nodes():
    """
    Entry point function for node pack discovery.

    Returns tuple of (manifest, node_classes).
    """
    return MANIFEST, NODE_CLASSES


def register_credentials():
    """Entry point function for credential type discovery."""
    return CREDENTIAL_CLASSES


__all__ = [
    "MANIFEST",
    "NODE_CLASSES",
    "CREDENTIAL_CLASSES",
    "register_nodes",
    "register_credentials",
]
