"""Pure transformation adapters for the supported tool-call dialects."""

from __future__ import annotations

from tool_bridge.providers import ProviderFamily, coerce_family

from .base import ToolAdapter
from .converse import ConverseAdapter
from .invoke import InvokeAdapter
from .openai import OpenAIAdapter

_ADAPTERS: dict[ProviderFamily, type[ConverseAdapter] | type[InvokeAdapter]] = {
    ProviderFamily.CONVERSE_STREAM: ConverseAdapter,
    ProviderFamily.INVOKE_STREAM: InvokeAdapter,
}


def get_adapter(family: ProviderFamily | str) -> ConverseAdapter | InvokeAdapter:
    """Return the adapter for *family*; raises UnsupportedProviderFamilyError."""
    return _ADAPTERS[coerce_family(family)]()


__all__ = [
    "ToolAdapter",
    "ConverseAdapter",
    "InvokeAdapter",
    "OpenAIAdapter",
    "get_adapter",
]
