"""
Shopify GraphQL - client, paged fetcher and query catalogue.

- GraphQLClient: one POST per query, `errors` checked before `data`
- PagedFetcher: cursor-driven pagination (fetch_page / fetch_all / fetch_bounded)
- queries: static query text and per-operation builders
"""

from .client import GraphQLClient
from .errors import TransportError, UpstreamError, ValidationError
from .pagination import (
    MAX_PAGE_SIZE,
    Connection,
    PagedFetcher,
    PageRequest,
    edges_connection,
)

__all__ = [
    "GraphQLClient",
    "PagedFetcher",
    "PageRequest",
    "Connection",
    "edges_connection",
    "MAX_PAGE_SIZE",
    "ValidationError",
    "TransportError",
    "UpstreamError",
]
