"""
Shopify GraphQL CLI - run the node outside a workflow host.

Credentials come from settings (SHOPIFY_GRAPHQL_SHOP_NAME,
SHOPIFY_GRAPHQL_ACCESS_TOKEN, SHOPIFY_GRAPHQL_API_VERSION or a .env file).
Results are printed to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional, Tuple

import click

from src.node_sdk.basenode import NodeExecutionContext, NodeOperationError
from src.shopify_graphql.config import get_settings
from src.shopify_graphql.observability import setup_logging


logger = logging.getLogger("shopify_graphql")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-q", "--quiet", is_flag=True, help="Suppress output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool):
    """Shopify GraphQL - query the Shopify Admin API."""
    ctx.ensure_object(dict)

    if verbose:
        setup_logging("DEBUG")
    elif quiet:
        setup_logging("ERROR")
    else:
        setup_logging()


def _run_node(ctx: click.Context, parameters: Dict[str, Any]) -> None:
    """Run the Shopify GraphQL node on a single empty item and print its output."""
    from nodepacks.shopify_graphql import ShopifyGraphQlNode

    settings = get_settings()
    context = NodeExecutionContext(
        parameters=parameters,
        credentials={"shopifyGraphQlApi": settings.credentials()},
        input_data=[{"json": {}}],
        request_executor=ctx.obj.get("executor"),
        request_timeout=settings.request_timeout_s,
        node_name="Shopify GraphQL",
    )
    node = ShopifyGraphQlNode()
    node.set_context(context)

    try:
        output = node.execute()
    except NodeOperationError as e:
        logger.error(f"{parameters['operation']} failed: {e.message}")
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    click.echo(json.dumps(output[0][0]["json"], indent=2))


def _listing_parameters(
    operation: str,
    return_all: bool,
    limit: int,
    search: Optional[str],
) -> Dict[str, Any]:
    return {
        "operation": operation,
        "returnAll": return_all,
        "limit": limit,
        "pageSize": get_settings().page_size,
        "filter": search or "",
    }


@cli.command("query")
@click.argument("query_text")
@click.option("--variables", "-V", default="{}", help="GraphQL variables as a JSON object")
@click.pass_context
def query(ctx: click.Context, query_text: str, variables: str):
    """
    Execute a custom GraphQL query.

    Examples:

        shopify-graphql query '{ shop { name email } }'
    """
    _run_node(ctx, {"operation": "query", "query": query_text, "variables": variables})


@cli.command("product-by-sku")
@click.argument("sku")
@click.pass_context
def product_by_sku(ctx: click.Context, sku: str):
    """Get the product whose variant has SKU."""
    _run_node(ctx, {"operation": "getProductBySku", "sku": sku})


@cli.command("products")
@click.option("--return-all", is_flag=True, help="Fetch every page")
@click.option("--limit", "-l", type=click.IntRange(1, 250), default=10, show_default=True)
@click.option(
    "--status", "-s",
    type=click.Choice(["ACTIVE", "ARCHIVED", "DRAFT"]),
    multiple=True,
    help="Product status filter (repeatable, default ACTIVE)",
)
@click.option("--filter", "search", help="Additional Shopify search syntax")
@click.pass_context
def products(
    ctx: click.Context,
    return_all: bool,
    limit: int,
    status: Tuple[str, ...],
    search: Optional[str],
):
    """List products."""
    parameters = _listing_parameters("getProducts", return_all, limit, search)
    parameters["status"] = list(status) or ["ACTIVE"]
    _run_node(ctx, parameters)


@cli.command("orders")
@click.option("--return-all", is_flag=True, help="Fetch every page")
@click.option("--limit", "-l", type=click.IntRange(1, 250), default=10, show_default=True)
@click.option("--filter", "search", help="Shopify search syntax")
@click.pass_context
def orders(ctx: click.Context, return_all: bool, limit: int, search: Optional[str]):
    """List orders."""
    _run_node(ctx, _listing_parameters("getOrders", return_all, limit, search))


@cli.command("test-credentials")
@click.pass_context
def test_credentials(ctx: click.Context):
    """Check the configured shop name and access token."""
    from nodepacks.shopify_graphql import ShopifyGraphQlApiCredential

    settings = get_settings()
    credential = ShopifyGraphQlApiCredential(settings.credentials())
    result = credential.test(ctx.obj.get("executor"))

    click.echo(result["message"])
    if not result["success"]:
        sys.exit(1)


@cli.command("describe")
def describe():
    """Print the node and credential definitions of installed node packs."""
    from src.node_registry import NodeRegistry

    registry = NodeRegistry()
    registry.discover_entry_points()

    click.echo(json.dumps(
        {
            "nodes": [node.model_dump() for node in registry.list_nodes()],
            "credentials": [cred.model_dump() for cred in registry.list_credentials()],
        },
        indent=2,
    ))


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
