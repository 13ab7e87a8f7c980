"""Pytest configuration and fixtures."""
import os
import re
from unittest.mock import Mock, patch

import pytest

# Set test environment variables
os.environ["SHOPIFY_GRAPHQL_ENV"] = "test"
os.environ["SHOPIFY_GRAPHQL_SHOP_NAME"] = "test-shop"
os.environ["SHOPIFY_GRAPHQL_ACCESS_TOKEN"] = "shpat_test_token"


class FakeShopify:
    """
    In-memory Admin GraphQL endpoint used as a request executor.

    Serves `products` and `orders` connections with opaque cursors and
    records every request it receives. `responses` maps a 1-based request
    number to a canned response (or an exception to raise).
    """

    def __init__(self, products=None, orders=None, shop_name="Test Shop"):
        self.listings = {"products": products or [], "orders": orders or []}
        self.shop_name = shop_name
        self.requests = []
        self.responses = {}

    def __call__(self, url, headers, body):
        self.requests.append({"url": url, "headers": dict(headers), "body": body})

        canned = self.responses.get(len(self.requests))
        if isinstance(canned, Exception):
            raise canned
        if canned is not None:
            return canned

        query = body["query"]
        variables = body["variables"]

        if "GetProductBySku" in query:
            sku = variables["query"].split(":", 1)[1]
            matches = [
                product for product in self.listings["products"]
                if any(v["node"]["sku"] == sku for v in product.get("variants", {}).get("edges", []))
            ]
            return {"data": {"products": {"edges": [{"node": p} for p in matches[:1]]}}}

        if "orders(" in query:
            return {"data": {"orders": self._page(self.listings["orders"], variables)}}
        if "products(" in query:
            items = self._filter_products(variables.get("query"))
            return {"data": {"products": self._page(items, variables)}}

        return {"data": {"shop": {"name": self.shop_name}}}

    @property
    def variables(self):
        return [request["body"]["variables"] for request in self.requests]

    def _filter_products(self, search):
        products = self.listings["products"]
        match = re.search(r"status:(\S+)", search or "")
        if not match:
            return products
        statuses = set(match.group(1).split(","))
        return [p for p in products if p["status"] in statuses]

    @staticmethod
    def _page(items, variables):
        start = int(variables["after"][len("cursor-"):]) + 1 if "after" in variables else 0
        page = items[start:start + variables["first"]]
        end = start + len(page)
        return {
            "edges": [
                {"cursor": f"cursor-{start + i}", "node": node}
                for i, node in enumerate(page)
            ],
            "pageInfo": {
                "hasNextPage": end < len(items),
                "endCursor": f"cursor-{end - 1}" if page else None,
            },
        }


def make_products(count, status="ACTIVE"):
    return [
        {
            "id": f"gid://shopify/Product/{i}",
            "title": f"Product {i}",
            "status": status,
            "variants": {"edges": [{"node": {"id": f"gid://shopify/ProductVariant/{i}", "sku": f"SKU-{i}"}}]},
        }
        for i in range(count)
    ]


def make_orders(count):
    return [{"id": f"gid://shopify/Order/{i}", "name": f"#{1000 + i}"} for i in range(count)]


@pytest.fixture
def shopify():
    """Fake Shopify backend with 537 active products and 12 orders."""
    return FakeShopify(products=make_products(537), orders=make_orders(12))


@pytest.fixture
def credentials():
    """Credential data for the shopifyGraphQlApi credential."""
    return {
        "shopName": "test-shop",
        "accessToken": "shpat_test_token",
        "apiVersion": "2024-10",
    }


@pytest.fixture
def client(shopify, credentials):
    """GraphQL client wired to the fake backend."""
    from src.shopify_graphql.client import GraphQLClient

    return GraphQLClient(
        "https://test-shop.myshopify.com/admin/api/2024-10/graphql.json",
        {"X-Shopify-Access-Token": credentials["accessToken"]},
        shopify,
    )


def fake_entry_point(name, target):
    entry_point = Mock()
    entry_point.name = name
    entry_point.load.return_value = target
    return entry_point


@pytest.fixture
def installed_pack():
    """Entry-point lookup that reports the shopify-graphql pack as installed."""
    from nodepacks.shopify_graphql import register_credentials, register_nodes
    from src.node_registry.registry import CREDENTIAL_ENTRY_POINT, NODE_PACK_ENTRY_POINT

    groups = {
        NODE_PACK_ENTRY_POINT: [fake_entry_point("shopify-graphql", register_nodes)],
        CREDENTIAL_ENTRY_POINT: [fake_entry_point("shopify-graphql", register_credentials)],
    }
    with patch(
        "src.node_registry.registry.entry_points",
        side_effect=lambda group: groups.get(group, []),
    ) as mock_entry_points:
        yield mock_entry_points
