"""
Error taxonomy for GraphQL calls.

- ValidationError: malformed caller input, raised before any request
- TransportError: network or HTTP failure
- UpstreamError: well-formed response carrying an `errors` array

None of them is retried.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional

from src.node_sdk.basenode import NodeApiError, NodeOperationError


class ValidationError(NodeOperationError):
    """Caller input rejected before any network call."""


class TransportError(NodeApiError):
    """The request did not produce a usable JSON response."""


class UpstreamError(NodeApiError):
    """
    The API answered but rejected the query.

    `errors` holds the raw upstream payload for diagnostics.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[Any]] = None,
        item_index: Optional[int] = None,
    ) -> None:
        super().__init__(
            message,
            response_body=json.dumps(errors) if errors is not None else None,
            item_index=item_index,
        )
        self.errors = errors or []

    @classmethod
    def from_payload(cls, errors: List[Any]) -> "UpstreamError":
        return cls(f"GraphQL Error: {json.dumps(errors)}", errors=errors)


__all__ = ["ValidationError", "TransportError", "UpstreamError"]
