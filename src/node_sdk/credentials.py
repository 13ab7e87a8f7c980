"""
BaseCredential - Base class for credential types.

A credential type declares its fields (properties), how they are turned
into request headers (authenticate) and how to check them against the
remote service (test). Storage and encryption belong to the host.
"""

from __future__ import annotations

from typing import Any, Dict, List


class BaseCredential:
    """Base credential implementation."""

    name: str = "base"
    display_name: str = "Base Credential"
    documentation_url: str = ""
    properties: List[Dict[str, Any]] = []

    def __init__(self, data: Dict[str, Any]) -> None:
        self.data = data

    def validate(self) -> Dict[str, Any]:
        """
        Check that every required property has a value.

        Returns:
            {"valid": bool, "message": str}
        """
        missing = [
            prop["name"]
            for prop in self.properties
            if prop.get("required") and not self.data.get(prop["name"])
        ]
        if missing:
            return {
                "valid": False,
                "message": f"Missing required fields: {', '.join(missing)}",
            }
        return {"valid": True, "message": "Credential data is valid"}

    def authenticate(self) -> Dict[str, Any]:
        """Generic authentication block (headers injected into requests)."""
        return {"type": "generic", "properties": {"headers": {}}}

    def test(self) -> Dict[str, Any]:
        """Test the credential against the remote service."""
        validation = self.validate()
        return {"success": validation["valid"], "message": validation["message"]}

    @classmethod
    def get_definition(cls) -> Dict[str, Any]:
        """Get credential type definition for registration."""
        return {
            "name": cls.name,
            "displayName": cls.display_name,
            "documentationUrl": cls.documentation_url,
            "properties": cls.properties,
        }
