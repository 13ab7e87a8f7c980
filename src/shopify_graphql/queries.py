"""
Query catalogue for the Shopify Admin GraphQL API.

Query text is static. Each single-shot operation maps to a pure builder
params -> (query, variables); each listing operation maps to a
ListingQuery that a PagedFetcher drives page by page.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .errors import ValidationError


GraphQLRequest = Tuple[str, Dict[str, Any]]

DEFAULT_QUERY = "{\n  shop {\n    name\n    email\n  }\n}"

SHOP_NAME_QUERY = "{ shop { name } }"

PRODUCT_STATUSES = ("ACTIVE", "ARCHIVED", "DRAFT")


PRODUCT_BY_SKU_QUERY = """
query GetProductBySku($query: String!) {
    products(first: 1, query: $query) {
        edges {
            node {
                id
                title
                description
                handle
                status
                createdAt
                updatedAt
                variants(first: 100) {
                    edges {
                        node {
                            id
                            title
                            price
                            sku
                            inventoryQuantity
                            compareAtPrice
                            barcode
                            inventoryItem {
                                id
                            }
                        }
                    }
                }
                images(first: 5) {
                    edges {
                        node {
                            id
                            url
                            altText
                        }
                    }
                }
            }
        }
    }
}
"""

PRODUCTS_QUERY = """
query GetProducts($first: Int!, $after: String, $query: String) {
    products(first: $first, after: $after, query: $query) {
        edges {
            cursor
            node {
                id
                title
                description
                handle
                status
                createdAt
                updatedAt
                variants(first: 10) {
                    edges {
                        node {
                            id
                            title
                            price
                            sku
                            inventoryItem {
                                id
                            }
                        }
                    }
                }
            }
        }
        pageInfo {
            hasNextPage
            endCursor
        }
    }
}
"""

ORDERS_QUERY = """
query GetOrders($first: Int!, $after: String, $query: String) {
    orders(first: $first, after: $after, query: $query) {
        edges {
            cursor
            node {
                id
                name
                email
                createdAt
                totalPriceSet {
                    shopMoney {
                        amount
                        currencyCode
                    }
                }
                lineItems(first: 10) {
                    edges {
                        node {
                            id
                            title
                            quantity
                        }
                    }
                }
            }
        }
        pageInfo {
            hasNextPage
            endCursor
        }
    }
}
"""


def parse_variables(raw: Any) -> Dict[str, Any]:
    """
    Accept variables as a mapping or a JSON object string.

    Raises:
        ValidationError: malformed JSON, or JSON that is not an object
    """
    if raw is None or raw == "":
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, str):
        raise ValidationError("Variables must be valid JSON")
    try:
        variables = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Variables must be valid JSON: {e.msg}") from e
    if not isinstance(variables, dict):
        raise ValidationError("Variables must be a JSON object")
    return variables


def build_custom_query(params: Mapping[str, Any]) -> GraphQLRequest:
    query = params.get("query") or ""
    if not query.strip():
        raise ValidationError("GraphQL query must not be empty")
    return query, parse_variables(params.get("variables"))


def build_product_by_sku(params: Mapping[str, Any]) -> GraphQLRequest:
    sku = (params.get("sku") or "").strip()
    if not sku:
        raise ValidationError("SKU must not be empty")
    return PRODUCT_BY_SKU_QUERY, {"query": f"sku:{sku}"}


def _join_filters(*parts: Optional[str]) -> Optional[str]:
    terms = [part.strip() for part in parts if part and part.strip()]
    return " ".join(terms) or None


def product_filter(params: Mapping[str, Any]) -> Optional[str]:
    """Shopify search string: status:<S1,S2> plus optional free text."""
    statuses = params.get("status") or ["ACTIVE"]
    if isinstance(statuses, str):
        statuses = [statuses]
    unknown = [status for status in statuses if status not in PRODUCT_STATUSES]
    if unknown:
        raise ValidationError(
            f"Unknown product status {', '.join(map(str, unknown))}; "
            f"expected one of {', '.join(PRODUCT_STATUSES)}"
        )
    return _join_filters(f"status:{','.join(statuses)}", params.get("filter"))


def order_filter(params: Mapping[str, Any]) -> Optional[str]:
    return _join_filters(params.get("filter"))


@dataclass(frozen=True)
class ListingQuery:
    """A paginated listing: its connection field, document and filter builder."""
    connection: str
    document: str
    build_filter: Callable[[Mapping[str, Any]], Optional[str]]


SINGLE_OPERATIONS: Dict[str, Callable[[Mapping[str, Any]], GraphQLRequest]] = {
    "query": build_custom_query,
    "getProductBySku": build_product_by_sku,
}

LISTING_OPERATIONS: Dict[str, ListingQuery] = {
    "getProducts": ListingQuery("products", PRODUCTS_QUERY, product_filter),
    "getOrders": ListingQuery("orders", ORDERS_QUERY, order_filter),
}


def operation_names() -> List[str]:
    return [*SINGLE_OPERATIONS, *LISTING_OPERATIONS]
