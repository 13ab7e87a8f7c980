"""
GraphQL client - one POST per call, errors checked before data.

The client owns no transport. It is given a request executor
(url, headers, body) -> parsed JSON, normally the host's
NodeExecutionContext.http_post, and turns its outcome into either the
`data` object or one of the errors in `errors.py`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from src.node_sdk.basenode import RequestExecutor
from src.node_sdk.http import HttpApiError, NodeTimeoutError

from .errors import TransportError, UpstreamError


logger = logging.getLogger(__name__)


class GraphQLClient:
    """
    Executes GraphQL documents against a single endpoint.

    Usage:
        client = GraphQLClient(url, headers, executor)
        data = client.execute("{ shop { name } }")
    """

    def __init__(
        self,
        url: str,
        headers: Mapping[str, str],
        executor: RequestExecutor,
    ) -> None:
        self.url = url
        self.headers = dict(headers)
        self._executor = executor

    def execute(
        self,
        query: str,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Run one query and return the response's `data` object.

        Raises:
            TransportError: The executor failed or returned a non-object body
            UpstreamError: The response has a non-empty `errors` array
                (even alongside `data`) or carries no `data` at all
        """
        body = {"query": query, "variables": dict(variables or {})}

        try:
            response = self._executor(self.url, self.headers, body)
        except TransportError:
            raise
        except NodeTimeoutError as e:
            raise TransportError(str(e)) from e
        except HttpApiError as e:
            raise TransportError(
                str(e),
                status_code=e.status_code,
                response_body=e.response_body,
            ) from e

        if not isinstance(response, dict):
            raise TransportError(
                f"Expected a JSON object from {self.url}, got {type(response).__name__}"
            )

        errors = response.get("errors")
        if errors:
            logger.warning(f"GraphQL request rejected with {len(errors)} error(s)")
            raise UpstreamError.from_payload(errors)

        data = response.get("data")
        if not isinstance(data, dict):
            raise UpstreamError("GraphQL response carried no data")
        return data
