"""
Node Registry - Discovery and registration of node implementations.

This package provides:
- NodeDefinition / CredentialDefinition: Metadata about registered types
- NodePackManifest: Package metadata for a node pack
- NodeRegistry: Central registry for discovering nodes

Supports entry-points based discovery for plugin node packs.
"""

from .models import CredentialDefinition, NodeDefinition, NodePackManifest
from .registry import NodeRegistry

__all__ = [
    "CredentialDefinition",
    "NodeDefinition",
    "NodePackManifest",
    "NodeRegistry",
]
