"""
Tests for cursor-based pagination.

Covers completeness, termination, bounded mode, fail-fast and cursor
chaining against the in-memory backend from conftest.
"""

import pytest

from conftest import FakeShopify, make_products
from src.shopify_graphql.client import GraphQLClient
from src.shopify_graphql.errors import TransportError, UpstreamError, ValidationError
from src.shopify_graphql.pagination import (
    Connection,
    PagedFetcher,
    PageRequest,
    edges_connection,
)
from src.shopify_graphql.queries import ORDERS_QUERY, PRODUCTS_QUERY


def products_fetcher(backend):
    client = GraphQLClient("https://test-shop.myshopify.com/graphql.json", {}, backend)
    return PagedFetcher(client, PRODUCTS_QUERY, edges_connection("products"))


class TestFetchAll:
    """Draining every page of a listing."""

    def test_returns_every_item_in_server_order(self, shopify):
        """537 items at page size 250 take three requests: 250, 250, 37."""
        products = products_fetcher(shopify).fetch_all(page_size=250)

        assert len(shopify.requests) == 3
        assert len(products) == 537
        assert [p["id"] for p in products] == [
            f"gid://shopify/Product/{i}" for i in range(537)
        ]

    @pytest.mark.parametrize("page_size, expected_requests", [(1, 7), (3, 3), (7, 1), (250, 1)])
    def test_request_count_is_ceiling_of_size_over_page(self, page_size, expected_requests):
        """Each page size needs ceil(N / page_size) requests."""
        backend = FakeShopify(products=make_products(7))

        products = products_fetcher(backend).fetch_all(page_size=page_size)

        assert len(products) == 7
        assert len({p["id"] for p in products}) == 7
        assert len(backend.requests) == expected_requests

    def test_empty_listing_takes_one_request(self):
        """An empty result set ends after the first page."""
        backend = FakeShopify()

        assert products_fetcher(backend).fetch_all() == []
        assert len(backend.requests) == 1

    def test_each_request_carries_previous_end_cursor(self, shopify):
        """The first request has no cursor; later ones chain endCursor."""
        products_fetcher(shopify).fetch_all(page_size=250)

        assert "after" not in shopify.variables[0]
        assert shopify.variables[1]["after"] == "cursor-249"
        assert shopify.variables[2]["after"] == "cursor-499"

    def test_filter_is_sent_on_every_page(self, shopify):
        """The search string is repeated on each page request."""
        products_fetcher(shopify).fetch_all(filter="status:ACTIVE")

        assert all(v["query"] == "status:ACTIVE" for v in shopify.variables)
        assert all(v["first"] == 250 for v in shopify.variables)

    def test_upstream_error_on_second_page_stops_the_run(self, shopify):
        """A rejected 2nd page raises and no 3rd request is made."""
        shopify.responses[2] = {"errors": [{"message": "Throttled"}]}

        with pytest.raises(UpstreamError) as exc_info:
            products_fetcher(shopify).fetch_all(page_size=250)

        assert len(shopify.requests) == 2
        assert exc_info.value.errors == [{"message": "Throttled"}]

    def test_transport_error_propagates_without_retry(self, shopify):
        """Transport failures surface as-is after a single attempt."""
        shopify.responses[1] = TransportError("connection reset")

        with pytest.raises(TransportError):
            products_fetcher(shopify).fetch_all()

        assert len(shopify.requests) == 1

    def test_more_pages_without_cursor_is_rejected(self):
        """An empty page that claims more results cannot be followed."""
        backend = FakeShopify()
        backend.responses[1] = {
            "data": {"products": {"edges": [], "pageInfo": {"hasNextPage": True, "endCursor": None}}}
        }

        with pytest.raises(UpstreamError):
            products_fetcher(backend).fetch_all()

        assert len(backend.requests) == 1

    def test_orders_listing(self, shopify):
        """The same routine drains the orders connection."""
        client = GraphQLClient("https://test-shop.myshopify.com/graphql.json", {}, shopify)
        fetcher = PagedFetcher(client, ORDERS_QUERY, edges_connection("orders"))

        orders = fetcher.fetch_all(page_size=5)

        assert [o["name"] for o in orders] == [f"#{1000 + i}" for i in range(12)]
        assert len(shopify.requests) == 3


class TestFetchBounded:
    """Single bounded page."""

    def test_returns_what_the_single_page_holds(self):
        """limit=10 over 5 matches: one request, five items."""
        backend = FakeShopify(products=make_products(5))

        products = products_fetcher(backend).fetch_bounded("status:ACTIVE", limit=10)

        assert len(products) == 5
        assert len(backend.requests) == 1
        assert backend.variables[0] == {"first": 10, "query": "status:ACTIVE"}

    def test_does_not_follow_next_page(self, shopify):
        """More results upstream are ignored."""
        products = products_fetcher(shopify).fetch_bounded(None, limit=3)

        assert [p["id"] for p in products] == [f"gid://shopify/Product/{i}" for i in range(3)]
        assert len(shopify.requests) == 1

    def test_limit_above_maximum_is_rejected_before_request(self, shopify):
        """Limits outside 1..250 never reach the network."""
        with pytest.raises(ValidationError):
            products_fetcher(shopify).fetch_bounded(None, limit=251)

        assert shopify.requests == []


class TestPageRequest:
    """PageRequest validation and variables."""

    @pytest.mark.parametrize("page_size", [0, -1, 251, 2.5, "10", True])
    def test_invalid_page_size(self, page_size):
        with pytest.raises(ValidationError):
            PageRequest(page_size=page_size)

    def test_variables_omit_unset_values(self):
        assert PageRequest(page_size=5).to_variables() == {"first": 5}

    def test_variables_include_cursor_and_filter(self):
        request = PageRequest(page_size=5, after_cursor="abc", filter="status:DRAFT")

        assert request.to_variables() == {"first": 5, "after": "abc", "query": "status:DRAFT"}

    def test_fetcher_maximum_is_enforced(self, shopify):
        """A fetcher may declare a lower maximum than the API's."""
        client = GraphQLClient("https://test-shop.myshopify.com/graphql.json", {}, shopify)
        fetcher = PagedFetcher(client, PRODUCTS_QUERY, edges_connection("products"), max_page_size=50)

        with pytest.raises(ValidationError):
            fetcher.fetch_page(PageRequest(page_size=100))

        assert shopify.requests == []


class TestEdgesConnection:
    """Page extraction from connection payloads."""

    def test_edges_shape(self):
        extract = edges_connection("products")

        page = extract({
            "products": {
                "edges": [{"cursor": "a", "node": {"id": 1}}, {"cursor": "b", "node": {"id": 2}}],
                "pageInfo": {"hasNextPage": True, "endCursor": "b"},
            }
        })

        assert page == Connection(items=[{"id": 1}, {"id": 2}], has_next_page=True, end_cursor="b")

    def test_nodes_shape(self):
        extract = edges_connection("orders")

        page = extract({"orders": {"nodes": [{"id": 1}], "pageInfo": {"hasNextPage": False}}})

        assert page.items == [{"id": 1}]
        assert page.has_next_page is False
        assert page.end_cursor is None

    def test_missing_connection(self):
        with pytest.raises(UpstreamError):
            edges_connection("products")({"orders": {"edges": []}})

    @pytest.mark.parametrize("connection", [
        {"edges": [{"cursor": "a"}], "pageInfo": {"hasNextPage": False}},
        {"edges": None, "pageInfo": "x"},
        {"edges": {"node": {"id": 1}}},
        {"nodes": "not-a-list"},
    ])
    def test_malformed_connection(self, connection):
        with pytest.raises(UpstreamError, match="Malformed 'products' connection"):
            edges_connection("products")({"products": connection})

    def test_items_with_more_pages_need_cursor(self):
        with pytest.raises(UpstreamError):
            Connection(items=[{"id": 1}], has_next_page=True, end_cursor=None)
