"""
Cursor-based pagination over GraphQL connections.

A PagedFetcher drains a listing one page at a time. Every request after
the first carries the endCursor of the page just received, so pages are
fetched strictly in sequence. The only state carried between requests is
that cursor.

There is no snapshot isolation: if the listing changes while a run is in
progress the result may be neither the old nor the new listing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from .client import GraphQLClient
from .errors import UpstreamError, ValidationError


logger = logging.getLogger(__name__)

# Largest `first:` value the Admin API accepts
MAX_PAGE_SIZE = 250

T = TypeVar("T")


@dataclass(frozen=True)
class Connection(Generic[T]):
    """One page of results plus pagination metadata."""
    items: List[T] = field(default_factory=list)
    has_next_page: bool = False
    end_cursor: Optional[str] = None

    def __post_init__(self) -> None:
        if self.has_next_page and self.items and self.end_cursor is None:
            raise UpstreamError("Page reports more results but no endCursor")


@dataclass(frozen=True)
class PageRequest:
    """Parameters for fetching one page."""
    page_size: int
    after_cursor: Optional[str] = None
    filter: Optional[str] = None

    def __post_init__(self) -> None:
        if (
            isinstance(self.page_size, bool)
            or not isinstance(self.page_size, int)
            or not 1 <= self.page_size <= MAX_PAGE_SIZE
        ):
            raise ValidationError(
                f"Page size must be an integer between 1 and {MAX_PAGE_SIZE}, "
                f"got {self.page_size!r}"
            )

    def to_variables(self) -> Dict[str, Any]:
        """GraphQL variables for this page; unset values are left out."""
        variables: Dict[str, Any] = {"first": self.page_size}
        if self.after_cursor is not None:
            variables["after"] = self.after_cursor
        if self.filter:
            variables["query"] = self.filter
        return variables


PageExtractor = Callable[[Dict[str, Any]], Connection[Any]]


def edges_connection(name: str) -> PageExtractor:
    """
    Build a page extractor for the Relay connection at data[name].

    Accepts both `edges { node }` and the `nodes` shorthand.
    """

    def extract(data: Dict[str, Any]) -> Connection[Any]:
        connection = data.get(name)
        if not isinstance(connection, dict):
            raise UpstreamError(f"GraphQL response has no '{name}' connection")

        malformed = UpstreamError(f"Malformed '{name}' connection")

        if "edges" in connection:
            edges = connection["edges"] or []
            if not isinstance(edges, list) or not all(
                isinstance(edge, dict) and "node" in edge for edge in edges
            ):
                raise malformed
            items = [edge["node"] for edge in edges]
        else:
            nodes = connection.get("nodes") or []
            if not isinstance(nodes, list):
                raise malformed
            items = list(nodes)

        page_info = connection.get("pageInfo") or {}
        if not isinstance(page_info, dict):
            raise malformed
        has_next_page = bool(page_info.get("hasNextPage", False))
        return Connection(
            items=items,
            has_next_page=has_next_page,
            end_cursor=page_info.get("endCursor"),
        )

    return extract


class PagedFetcher(Generic[T]):
    """
    Drains a cursor-paginated listing, or returns a single bounded page.

    Usage:
        fetcher = PagedFetcher(client, PRODUCTS_QUERY, edges_connection("products"))
        products = fetcher.fetch_all(filter="status:ACTIVE")
    """

    def __init__(
        self,
        client: GraphQLClient,
        query: str,
        extract_page: Callable[[Dict[str, Any]], Connection[T]],
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self.client = client
        self.query = query
        self.extract_page = extract_page
        self.max_page_size = max_page_size

    def fetch_page(self, request: PageRequest) -> Connection[T]:
        """
        Fetch one page.

        Raises:
            ValidationError: page_size exceeds this listing's maximum
            TransportError: The request failed
            UpstreamError: The API rejected the query
        """
        if request.page_size > self.max_page_size:
            raise ValidationError(
                f"Page size {request.page_size} exceeds the maximum of {self.max_page_size}"
            )
        data = self.client.execute(self.query, request.to_variables())
        return self.extract_page(data)

    def fetch_all(
        self,
        filter: Optional[str] = None,
        page_size: int = MAX_PAGE_SIZE,
    ) -> List[T]:
        """
        Fetch every page and return all items in order.

        The first error propagates; no partial result is returned.
        """
        results: List[T] = []
        cursor: Optional[str] = None
        pages = 0

        while True:
            page = self.fetch_page(
                PageRequest(page_size=page_size, after_cursor=cursor, filter=filter)
            )
            pages += 1
            results.extend(page.items)
            logger.debug(
                f"Page {pages}: {len(page.items)} items, has_next_page={page.has_next_page}"
            )
            if not page.has_next_page:
                break
            if page.end_cursor is None:
                # Requesting without a cursor would restart from the first page
                raise UpstreamError("Page reports more results but no endCursor")
            cursor = page.end_cursor

        logger.info(f"Fetched {len(results)} items in {pages} page(s)")
        return results

    def fetch_bounded(self, filter: Optional[str], limit: int) -> List[T]:
        """Fetch a single page of at most `limit` items."""
        page = self.fetch_page(PageRequest(page_size=limit, filter=filter))
        return list(page.items)
