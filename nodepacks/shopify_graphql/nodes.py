"""
Shopify GraphQL node.

Runs pre-built (or custom) GraphQL queries against the Shopify Admin API.
Input items are processed one at a time, in order; listings are drained
page by page through a PagedFetcher.

SYNC-CELERY SAFE: every request goes through the context's timeout-bounded
request executor.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from src.node_sdk.basenode import BaseNode, NodeExecutionData, NodeOperationError
from src.shopify_graphql.client import GraphQLClient
from src.shopify_graphql.errors import ValidationError
from src.shopify_graphql.observability import node_context
from src.shopify_graphql.pagination import MAX_PAGE_SIZE, PagedFetcher, edges_connection
from src.shopify_graphql.queries import (
    DEFAULT_QUERY,
    LISTING_OPERATIONS,
    SINGLE_OPERATIONS,
    operation_names,
)

from .credentials import ShopifyGraphQlApiCredential


logger = logging.getLogger(__name__)


# Parameters each operation reads, with their defaults
OPERATION_PARAMETERS: Dict[str, Dict[str, Any]] = {
    "query": {"query": DEFAULT_QUERY, "variables": "{}"},
    "getProductBySku": {"sku": ""},
    "getProducts": {"status": ["ACTIVE"], "filter": ""},
    "getOrders": {"filter": ""},
}


class ShopifyGraphQlNode(BaseNode):
    """
    Shopify GraphQL Node - Execute GraphQL queries against the Admin API.

    Operations:
    - query: custom query text with JSON variables
    - getProductBySku: first product whose variant has the SKU
    - getProducts / getOrders: listings, bounded by `limit` or all pages
    """

    type = "shopifyGraphQl"
    version = 1

    description = {
        "displayName": "Shopify GraphQL",
        "name": "shopifyGraphQl",
        "icon": "file:shopify.svg",
        "group": ["transform"],
        "subtitle": '={{$parameter["operation"]}}',
        "description": "Execute GraphQL queries against Shopify Admin API",
        "version": 1,
        "defaults": {"name": "Shopify GraphQL"},
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [
            {"name": "shopifyGraphQlApi", "required": True},
        ],
    }

    properties = {
        "parameters": [
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "noDataExpression": True,
                "options": [
                    {
                        "name": "Execute Query",
                        "value": "query",
                        "description": "Execute a GraphQL query",
                    },
                    {
                        "name": "Get Product by SKU",
                        "value": "getProductBySku",
                        "description": "Get a product by variant SKU",
                    },
                    {
                        "name": "Get Products",
                        "value": "getProducts",
                        "description": "Get a list of products",
                    },
                    {
                        "name": "Get Orders",
                        "value": "getOrders",
                        "description": "Get a list of orders",
                    },
                ],
                "default": "query",
            },
            # ========== EXECUTE QUERY ==========
            {
                "displayName": "GraphQL Query",
                "name": "query",
                "type": "string",
                "typeOptions": {"rows": 10},
                "displayOptions": {"show": {"operation": ["query"]}},
                "default": DEFAULT_QUERY,
                "description": "The GraphQL query to execute",
                "required": True,
            },
            {
                "displayName": "Variables",
                "name": "variables",
                "type": "json",
                "displayOptions": {"show": {"operation": ["query"]}},
                "default": "{}",
                "description": "GraphQL query variables (as JSON)",
            },
            # ========== GET PRODUCT BY SKU ==========
            {
                "displayName": "SKU",
                "name": "sku",
                "type": "string",
                "displayOptions": {"show": {"operation": ["getProductBySku"]}},
                "default": "",
                "placeholder": "ABC-123",
                "description": "The SKU of the product variant to search for",
                "required": True,
            },
            # ========== LISTINGS ==========
            {
                "displayName": "Return All",
                "name": "returnAll",
                "type": "boolean",
                "displayOptions": {"show": {"operation": ["getProducts", "getOrders"]}},
                "default": False,
                "description": "Whether to return all results or only up to a given limit",
            },
            {
                "displayName": "Limit",
                "name": "limit",
                "type": "number",
                "displayOptions": {
                    "show": {
                        "operation": ["getProducts", "getOrders"],
                        "returnAll": [False],
                    },
                },
                "typeOptions": {"minValue": 1, "maxValue": MAX_PAGE_SIZE},
                "default": 10,
                "description": (
                    "Max number of results to return. Results are output as a flat "
                    "list of records (not the raw edges connection), the same shape "
                    "as Return All"
                ),
            },
            {
                "displayName": "Page Size",
                "name": "pageSize",
                "type": "number",
                "displayOptions": {
                    "show": {
                        "operation": ["getProducts", "getOrders"],
                        "returnAll": [True],
                    },
                },
                "typeOptions": {"minValue": 1, "maxValue": MAX_PAGE_SIZE},
                "default": MAX_PAGE_SIZE,
                "description": "Number of results requested per page",
            },
            {
                "displayName": "Status",
                "name": "status",
                "type": "multiOptions",
                "displayOptions": {"show": {"operation": ["getProducts"]}},
                "options": [
                    {
                        "name": "Active",
                        "value": "ACTIVE",
                        "description": "Products visible in online stores and sales channels",
                    },
                    {
                        "name": "Archived",
                        "value": "ARCHIVED",
                        "description": "Products no longer available for sale",
                    },
                    {
                        "name": "Draft",
                        "value": "DRAFT",
                        "description": "Products not yet published",
                    },
                ],
                "default": ["ACTIVE"],
                "description": "Filter products by status. You can select multiple statuses.",
            },
            {
                "displayName": "Search Query",
                "name": "filter",
                "type": "string",
                "displayOptions": {"show": {"operation": ["getProducts", "getOrders"]}},
                "default": "",
                "placeholder": "created_at:>2024-01-01",
                "description": "Additional Shopify search syntax applied to the listing",
            },
        ],
        "credentials": [
            {"name": "shopifyGraphQlApi", "required": True},
        ],
    }

    def execute(self) -> List[List[NodeExecutionData]]:
        """Run the selected operation once per input item."""
        items = self.get_input_data()
        operation = self.get_node_parameter("operation", 0, "query")

        if operation not in operation_names():
            raise ValidationError(f"Unsupported operation '{operation}'", node=self)

        credentials = ShopifyGraphQlApiCredential(self.get_credentials("shopifyGraphQlApi"))
        client = credentials.client(self.get_request_executor())

        results: List[NodeExecutionData] = []

        for i in range(len(items)):
            self.logger.info(
                f"Running {operation} for item {i}",
                extra=node_context(self.type, operation, i),
            )
            try:
                result = self._run_operation(client, operation, i)
            except NodeOperationError as e:
                if e.item_index is None:
                    e.item_index = i
                if e.node is None:
                    e.node = self
                # Malformed input is never downgraded to an error item
                if isinstance(e, ValidationError) or not self.continue_on_fail:
                    raise
                self.logger.warning(
                    f"Item {i} failed, continuing: {e.message}",
                    extra=node_context(self.type, operation, i),
                )
                results.append({"json": {"error": e.message}, "pairedItem": {"item": i}})
                continue

            results.append({"json": result, "pairedItem": {"item": i}})

        return [results]

    def _read_parameters(self, operation: str, item_index: int) -> Dict[str, Any]:
        return {
            name: self.get_node_parameter(name, item_index, default)
            for name, default in OPERATION_PARAMETERS[operation].items()
        }

    def _run_operation(
        self,
        client: GraphQLClient,
        operation: str,
        item_index: int,
    ) -> Dict[str, Any]:
        params = self._read_parameters(operation, item_index)

        if operation in SINGLE_OPERATIONS:
            query, variables = SINGLE_OPERATIONS[operation](params)
            return client.execute(query, variables)

        listing = LISTING_OPERATIONS[operation]
        search = listing.build_filter(params)
        fetcher = PagedFetcher(client, listing.document, edges_connection(listing.connection))

        if self.get_node_parameter("returnAll", item_index, False):
            page_size = self._get_count("pageSize", item_index, MAX_PAGE_SIZE)
            records = fetcher.fetch_all(search, page_size=page_size)
        else:
            limit = self._get_count("limit", item_index, 10)
            records = fetcher.fetch_bounded(search, limit)

        return {listing.connection: records}

    def _get_count(self, name: str, item_index: int, default: int) -> Any:
        """Number parameters arrive as floats from the editor; keep whole ones as int."""
        value = self.get_node_parameter(name, item_index, default)
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


__all__ = ["ShopifyGraphQlNode"]
