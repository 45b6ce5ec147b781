"""Package specific exception hierarchy."""

from __future__ import annotations

__all__ = ["ToolBridgeError", "UnsupportedProviderFamilyError"]


class ToolBridgeError(Exception):
    """Base exception for tool_bridge package."""


class UnsupportedProviderFamilyError(ToolBridgeError, ValueError):
    """Raised when a provider family selector is not recognised."""

    def __init__(self, family: object) -> None:
        super().__init__(f"Unsupported provider family: {family!r}")
        self.family = family
