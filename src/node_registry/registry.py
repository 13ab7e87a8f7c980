"""
Node Registry - Central registry for node and credential discovery.

Supports two discovery methods:
1. Manual registration
2. Entry-points (for plugin node packs)
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import Dict, Iterator, List, Optional, Type, TYPE_CHECKING

from .models import CredentialDefinition, NodeDefinition, NodePackManifest


if TYPE_CHECKING:
    from src.node_sdk.basenode import BaseNode
    from src.node_sdk.credentials import BaseCredential


logger = logging.getLogger(__name__)

# Entry point groups for node packs and credential types
NODE_PACK_ENTRY_POINT = "shopify_graphql.nodepacks"
CREDENTIAL_ENTRY_POINT = "shopify_graphql.credentials"


class NodeRegistry:
    """
    Central registry for discovering and instantiating nodes.

    Usage:
        registry = NodeRegistry()
        registry.register_pack(*register_nodes())

        node = registry.create_node("shopifyGraphQl")
    """

    def __init__(self):
        """Initialize empty registry."""
        self._nodes: Dict[str, NodeDefinition] = {}
        self._node_classes: Dict[str, Type["BaseNode"]] = {}
        self._credentials: Dict[str, CredentialDefinition] = {}
        self._credential_classes: Dict[str, Type["BaseCredential"]] = {}
        self._packs: Dict[str, NodePackManifest] = {}
        self._discovered = False

    def register_node(
        self,
        node_class: Type["BaseNode"],
        node_type: Optional[str] = None,
    ) -> NodeDefinition:
        """
        Register a node class.

        Args:
            node_class: BaseNode subclass
            node_type: Override node type (uses class.type if not provided)
        """
        definition = NodeDefinition.from_node_class(node_class)
        if node_type is not None:
            definition.node_type = node_type

        self._nodes[definition.node_type] = definition
        self._node_classes[definition.node_type] = node_class

        logger.debug(f"Registered node: {definition.node_type}")
        return definition

    def register_credential(
        self,
        credential_class: Type["BaseCredential"],
    ) -> CredentialDefinition:
        """Register a credential type under its name."""
        definition = CredentialDefinition.from_credential_class(credential_class)
        self._credentials[definition.name] = definition
        self._credential_classes[definition.name] = credential_class

        logger.debug(f"Registered credential: {definition.name}")
        return definition

    def register_pack(
        self,
        manifest: NodePackManifest,
        node_classes: Dict[str, Type["BaseNode"]],
    ) -> None:
        """
        Register a node pack with its nodes.

        Args:
            manifest: Pack manifest
            node_classes: Map of node_type -> node class
        """
        self._packs[manifest.name] = manifest

        for node_type, node_class in node_classes.items():
            definition = self.register_node(node_class, node_type)
            definition.node_pack = manifest.name

        logger.info(f"Registered pack '{manifest.name}' with {len(node_classes)} nodes")

    def discover_entry_points(self, force: bool = False) -> int:
        """
        Discover node packs and credential types via entry points.

        Entry points are defined in pyproject.toml:

            [project.entry-points."shopify_graphql.nodepacks"]
            mypack = "mypack:register_nodes"

        A node pack entry point returns (manifest, node_classes); a
        credential entry point returns {name: credential_class}.

        Returns:
            Number of packs discovered
        """
        if self._discovered and not force:
            return len(self._packs)

        count = 0

        for ep in entry_points(group=NODE_PACK_ENTRY_POINT):
            try:
                manifest, node_classes = ep.load()()
            except Exception as e:
                logger.error(f"Failed to load node pack '{ep.name}': {e}")
                continue
            self.register_pack(manifest, node_classes)
            count += 1
            logger.info(f"Discovered node pack: {ep.name}")

        for ep in entry_points(group=CREDENTIAL_ENTRY_POINT):
            try:
                credential_classes = ep.load()()
            except Exception as e:
                logger.error(f"Failed to load credentials '{ep.name}': {e}")
                continue
            for credential_class in credential_classes.values():
                self.register_credential(credential_class)

        self._discovered = True
        return count

    def get_node(self, node_type: str) -> Optional[NodeDefinition]:
        """Get node definition by type."""
        return self._nodes.get(node_type)

    def get_node_class(self, node_type: str) -> Optional[Type["BaseNode"]]:
        """Get node class by type."""
        return self._node_classes.get(node_type)

    def get_credential_class(self, name: str) -> Optional[Type["BaseCredential"]]:
        """Get credential class by type name."""
        return self._credential_classes.get(name)

    def create_node(self, node_type: str) -> Optional["BaseNode"]:
        """Create a node instance, or None if the type is unknown."""
        node_class = self.get_node_class(node_type)
        if node_class:
            return node_class()
        return None

    def list_nodes(self) -> List[NodeDefinition]:
        """List all registered nodes."""
        return list(self._nodes.values())

    def list_credentials(self) -> List[CredentialDefinition]:
        """List all registered credential types."""
        return list(self._credentials.values())

    def list_packs(self) -> List[NodePackManifest]:
        """List all registered packs."""
        return list(self._packs.values())

    def has_node(self, node_type: str) -> bool:
        """Check if node type is registered."""
        return node_type in self._nodes

    def __len__(self) -> int:
        """Number of registered nodes."""
        return len(self._nodes)

    def __iter__(self) -> Iterator[NodeDefinition]:
        """Iterate over node definitions."""
        return iter(self._nodes.values())

    def __contains__(self, node_type: str) -> bool:
        """Check if node type is registered."""
        return self.has_node(node_type)


__all__ = [
    "NodeRegistry",
    "NODE_PACK_ENTRY_POINT",
    "CREDENTIAL_ENTRY_POINT",
]
