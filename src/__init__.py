"""
Shopify GraphQL node pack

A workflow node that runs pre-built GraphQL queries against the Shopify
Admin API, with cursor-based pagination for listings.

Architecture:
- node_sdk/: Node execution semantics (BaseNode, NodeExecutionContext, credentials)
- node_registry/: Plugin discovery + registration
- shopify_graphql/: GraphQL client, paged fetcher, query catalogue, settings, CLI
"""

__version__ = "1.0.0"
