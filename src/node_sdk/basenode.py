"""
BaseNode - Abstract base class for Python node implementations.

A node sees its host through two narrow capabilities held by the
NodeExecutionContext:

- a parameter reader: get_node_parameter(name, item_index, default)
- a request executor: (url, headers, body) -> parsed JSON

Both can be replaced in tests, so node logic runs without a host.

SYNC-CELERY SAFE: execute() is synchronous.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field

from .http import DEFAULT_TIMEOUT, post_json


logger = logging.getLogger(__name__)


# Executes one POST request: (url, headers, json_body) -> parsed JSON body
RequestExecutor = Callable[[str, Dict[str, str], Dict[str, Any]], Any]


# ==============================================================================
# NodeParameter - declarative parameter schema
# ==============================================================================

NodeParameterType = Literal[
    "string", "number", "boolean", "options", "multiOptions",
    "json", "collection", "notice",
]


class NodeParameter(BaseModel):
    """
    A single parameter in the node's properties.

    Node classes declare parameters as plain dicts; get_definition()
    validates them through this model.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Parameter key (internal name)")
    display_name: str = Field(..., alias="displayName", description="Human-readable label")
    type: NodeParameterType = Field(..., description="Parameter type")
    default: Any = Field(None, description="Default value")
    required: bool = Field(False, description="Is parameter required?")
    description: Optional[str] = Field(None, description="Help text")
    placeholder: Optional[str] = Field(None, description="Input placeholder")
    options: Optional[List[Dict[str, Any]]] = Field(
        None,
        description="Options for options/multiOptions type"
    )
    type_options: Optional[Dict[str, Any]] = Field(
        None,
        alias="typeOptions",
        description="Editor hints (rows, min/max values)"
    )
    display_options: Optional[Dict[str, Any]] = Field(
        None,
        alias="displayOptions",
        description="Conditional visibility"
    )


# ==============================================================================
# NodeExecutionData - Output data format
# ==============================================================================

class NodeExecutionData(TypedDict, total=False):
    """
    Single item of execution output data.

    Format: {"json": {...}, "pairedItem": {"item": 0}}
    """
    json: Dict[str, Any]
    pairedItem: Optional[Dict[str, int]]


# ==============================================================================
# BaseNode - Abstract base class
# ==============================================================================

class BaseNode(ABC):
    """
    Abstract base class for all Python node implementations.

    Nodes define:
    - type: Unique identifier (e.g., "shopifyGraphQl")
    - version: Node version number
    - description: Node metadata dict
    - properties: Parameters and credentials

    And implement execute() which processes input items in order.
    """

    type: str = "base"
    version: int = 1

    description: Dict[str, Any] = {
        "displayName": "Base Node",
        "name": "base",
        "description": "",
        "group": [],
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
    }

    properties: Dict[str, Any] = {
        "parameters": [],
        "credentials": [],
    }

    # Record a failed item and move on instead of aborting the run
    continue_on_fail: bool = False

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"node.{self.type}")
        self._context: Optional[NodeExecutionContext] = None

    @abstractmethod
    def execute(self) -> List[List[NodeExecutionData]]:
        """
        Execute node operation.

        Returns:
            List[List[NodeExecutionData]]: outer list is output branches,
            inner list the items in that branch.

        Raises:
            NodeOperationError: On operation failure
            NodeApiError: On API call failure
        """
        raise NotImplementedError

    # ==== Context Management ====

    def set_context(self, context: "NodeExecutionContext") -> None:
        """Set the execution context."""
        self._context = context
        self.continue_on_fail = context.continue_on_fail

    # ==== Helper methods for subclasses ====

    def get_node_parameter(
        self,
        name: str,
        item_index: int = 0,
        default: Any = None,
    ) -> Any:
        """
        Get parameter value for one input item.

        Args:
            name: Parameter name
            item_index: Index of the input item
            default: Default if not set
        """
        if self._context is None:
            return default
        return self._context.get_node_parameter(name, item_index, default)

    def get_credentials(self, name: str) -> Dict[str, Any]:
        """
        Get credentials by type name.

        Args:
            name: Credential type name (e.g., "shopifyGraphQlApi")
        """
        if self._context is None:
            raise NodeOperationError("No context set", node=self)
        return self._context.get_credentials(name)

    def get_input_data(self) -> List[Dict[str, Any]]:
        """Get input items from previous node, each with a 'json' key."""
        if self._context is None:
            return []
        return self._context.get_input_data()

    def get_request_executor(self) -> RequestExecutor:
        """Get the host's request executor."""
        if self._context is None:
            raise NodeOperationError("No context set", node=self)
        return self._context.request_executor

    @classmethod
    def get_definition(cls) -> Dict[str, Any]:
        """Get full node definition for registration."""
        parameters = [
            NodeParameter.model_validate(param).model_dump(by_alias=True, exclude_none=True)
            for param in cls.properties.get("parameters", [])
        ]
        return {
            "type": cls.type,
            "version": cls.version,
            "description": cls.description,
            "properties": {
                "parameters": parameters,
                "credentials": cls.properties.get("credentials", []),
            },
        }


# ==============================================================================
# NodeExecutionContext - Runtime context for node execution
# ==============================================================================

class NodeExecutionContext:
    """
    Runtime context provided to nodes during execution.

    Provides access to:
    - Parameters (run-wide, with optional per-item overrides)
    - Credentials
    - Input data
    - The request executor
    """

    def __init__(
        self,
        parameters: Dict[str, Any],
        credentials: Dict[str, Dict[str, Any]],
        input_data: List[Dict[str, Any]],
        item_parameters: Optional[List[Dict[str, Any]]] = None,
        request_executor: Optional[RequestExecutor] = None,
        continue_on_fail: bool = False,
        request_timeout: float = DEFAULT_TIMEOUT,
        workflow_id: Optional[str] = None,
        node_name: Optional[str] = None,
    ) -> None:
        self._parameters = parameters
        self._item_parameters = item_parameters or []
        self._credentials = credentials
        self._input_data = input_data
        self.request_executor: RequestExecutor = request_executor or self.http_post
        self.continue_on_fail = continue_on_fail
        self.request_timeout = request_timeout
        self.workflow_id = workflow_id
        self.node_name = node_name

    def get_node_parameter(
        self,
        name: str,
        item_index: int = 0,
        default: Any = None,
    ) -> Any:
        """Get parameter value, item overrides first."""
        if item_index < len(self._item_parameters):
            overrides = self._item_parameters[item_index]
            if name in overrides:
                return overrides[name]
        return self._parameters.get(name, default)

    def get_credentials(self, name: str) -> Dict[str, Any]:
        """Get credentials by type name."""
        if name not in self._credentials:
            raise NodeOperationError(f"Credentials '{name}' not found")
        return self._credentials[name]

    def get_input_data(self) -> List[Dict[str, Any]]:
        """Get input items."""
        return self._input_data

    def http_post(
        self,
        url: str,
        headers: Dict[str, str],
        body: Dict[str, Any],
    ) -> Any:
        """
        Default request executor: one JSON POST, parsed JSON back.

        SYNC-CELERY SAFE: Timeout enforced.
        """
        return post_json(url, headers, body, timeout=self.request_timeout)


# ==============================================================================
# Errors
# ==============================================================================

class NodeOperationError(Exception):
    """Error during node operation."""

    def __init__(
        self,
        message: str,
        node: Optional[BaseNode] = None,
        item_index: Optional[int] = None,
    ) -> None:
        self.message = message
        self.node = node
        self.item_index = item_index
        super().__init__(message)


class NodeApiError(NodeOperationError):
    """Error from external API call."""

    def __init__(
        self,
        message: str,
        node: Optional[BaseNode] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        item_index: Optional[int] = None,
    ) -> None:
        super().__init__(message, node, item_index)
        self.status_code = status_code
        self.response_body = response_body


__all__ = [
    "BaseNode",
    "NodeExecutionContext",
    "NodeExecutionData",
    "NodeParameter",
    "NodeParameterType",
    "RequestExecutor",
    "NodeOperationError",
    "NodeApiError",
]
