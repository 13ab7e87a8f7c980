"""
Node SDK - Minimal Python node execution semantics.

This package provides the host side of a node pack:
- NodeExecutionContext: parameters, credentials, input items, request executor
- BaseNode: Abstract base class for node implementations
- BaseCredential: Base class for credential types
- HttpClient: timeout-bounded HTTP transport

All nodes execute synchronously (sync-Celery safe).
"""

from .basenode import (
    BaseNode,
    NodeExecutionContext,
    NodeExecutionData,
    NodeParameter,
    NodeParameterType,
    RequestExecutor,
    NodeOperationError,
    NodeApiError,
)
from .credentials import BaseCredential
from .http import HttpClient, HttpResponse, HttpApiError, NodeTimeoutError, post_json

__all__ = [
    # Context
    "NodeExecutionContext",
    "NodeExecutionData",
    "RequestExecutor",
    # Base classes
    "BaseNode",
    "BaseCredential",
    "NodeParameter",
    "NodeParameterType",
    # Errors
    "NodeOperationError",
    "NodeApiError",
    "HttpApiError",
    "NodeTimeoutError",
    # HTTP
    "HttpClient",
    "HttpResponse",
    "post_json",
]
