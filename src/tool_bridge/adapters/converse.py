"""Converse adapter for pure tool configuration and tool-call transformations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Optional

from tool_bridge.adapters.base import ToolAdapter
from tool_bridge.parsers import ConverseStreamParser
from tool_bridge.parsers.base import as_mapping
from tool_bridge.providers import ProviderFamily
from tool_bridge.schema import build_provider_tool_config
from tool_bridge.types import ToolCallRequest, ToolDefinition


class ConverseAdapter(ToolAdapter):
    """Adapter for the Converse request and stream grammar."""

    family = ProviderFamily.CONVERSE_STREAM

    def tool_config(
        self, defs: Optional[Iterable[ToolDefinition | Mapping[str, Any]]]
    ) -> dict[str, Any]:
        """Request fragment declaring *defs*; empty when there are no tools."""
        config = build_provider_tool_config(defs, self.family)
        return {"toolConfig": config} if config else {}

    def tool_call_from(self, block: Any) -> Optional[ToolCallRequest]:
        """Convert a ``{"toolUse": {...}}`` content block to ToolCallRequest."""
        data = as_mapping(block)
        tool_use = as_mapping(data.get("toolUse")) if data else None
        if not tool_use:
            return None
        arguments = tool_use.get("input")
        return ToolCallRequest(
            id=tool_use.get("toolUseId") or "",
            name=tool_use.get("name") or "",
            arguments=dict(arguments) if isinstance(arguments, Mapping) else {},
        )

    def tool_call_to(self, request: ToolCallRequest) -> dict[str, Any]:
        return {
            "toolUse": {
                "toolUseId": request.id,
                "name": request.name,
                "input": request.arguments,
            }
        }

    def stream_parser(self, **kwargs: Any) -> ConverseStreamParser:
        """Fresh parser for one Converse response stream."""
        return ConverseStreamParser(**kwargs)
