"""
Shopify GraphQL API credential.

Supplies the endpoint URL and the access-token header for the Admin
GraphQL API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from src.node_sdk.basenode import RequestExecutor, NodeOperationError
from src.node_sdk.credentials import BaseCredential
from src.node_sdk.http import post_json
from src.shopify_graphql.client import GraphQLClient
from src.shopify_graphql.queries import SHOP_NAME_QUERY


logger = logging.getLogger(__name__)


class ShopifyGraphQlApiCredential(BaseCredential):
    name = "shopifyGraphQlApi"
    display_name = "Shopify GraphQL API"
    documentation_url = "https://shopify.dev/docs/api/admin-graphql"

    properties = [
        {
            "displayName": "Shop Name",
            "name": "shopName",
            "type": "string",
            "required": True,
            "default": "",
            "placeholder": "your-store-name",
            "description": "The name of your Shopify store (the part before .myshopify.com)",
        },
        {
            "displayName": "Access Token",
            "name": "accessToken",
            "type": "string",
            "required": True,
            "typeOptions": {"password": True},
            "default": "",
            "description": "Admin API access token for your Shopify store",
        },
        {
            "displayName": "API Version",
            "name": "apiVersion",
            "type": "string",
            "required": True,
            "default": "2024-10",
            "description": "Shopify API version (e.g., 2024-10)",
        },
    ]

    def base_url(self) -> str:
        shop_name = self.data.get("shopName")
        if not shop_name:
            raise NodeOperationError("Shop name is required for the Shopify GraphQL API")
        api_version = self.data.get("apiVersion") or "2024-10"
        return f"https://{shop_name}.myshopify.com/admin/api/{api_version}/graphql.json"

    def authenticate(self) -> Dict[str, Any]:
        """
        Generate authenticate headers dynamically based on credential data.
        Equivalent to n8n's `authenticate` object.
        """
        return {
            "type": "generic",
            "properties": {
                "headers": {
                    "X-Shopify-Access-Token": self.data.get("accessToken", ""),
                    "Content-Type": "application/json",
                }
            },
        }

    def client(self, executor: RequestExecutor) -> GraphQLClient:
        """GraphQL client bound to this shop's endpoint and headers."""
        return GraphQLClient(
            self.base_url(),
            self.authenticate()["properties"]["headers"],
            executor,
        )

    def test(self, executor: Optional[RequestExecutor] = None) -> Dict[str, Any]:
        validation = self.validate()
        if not validation["valid"]:
            return {"success": False, "message": validation["message"]}

        try:
            data = self.client(executor or post_json).execute(SHOP_NAME_QUERY)
        except NodeOperationError as e:
            logger.warning(f"Shopify credential test failed: {e}")
            return {"success": False, "message": f"Error testing Shopify credential: {e}"}

        shop = data.get("shop") or {}
        return {
            "success": True,
            "message": f"Connected to shop '{shop.get('name', self.data['shopName'])}'.",
        }
