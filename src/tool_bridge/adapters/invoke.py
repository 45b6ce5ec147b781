"""Native Messages adapter for pure tool configuration and tool-call transformations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Optional

from anthropic.types import ToolUseBlockParam

from tool_bridge.adapters.base import ToolAdapter
from tool_bridge.parsers import InvokeStreamParser
from tool_bridge.parsers.base import as_mapping
from tool_bridge.providers import ProviderFamily
from tool_bridge.schema import build_provider_tool_config
from tool_bridge.types import ToolCallRequest, ToolDefinition


class InvokeAdapter(ToolAdapter):
    """Adapter for the native Messages request and stream grammar."""

    family = ProviderFamily.INVOKE_STREAM

    def tool_config(
        self, defs: Optional[Iterable[ToolDefinition | Mapping[str, Any]]]
    ) -> dict[str, Any]:
        """Request fragment declaring *defs*; empty when there are no tools."""
        config = build_provider_tool_config(defs, self.family)
        return {"tools": config} if config else {}

    def tool_call_from(self, block: Any) -> Optional[ToolCallRequest]:
        """Convert a ``tool_use`` block (dict or anthropic ToolUseBlock)."""
        data = as_mapping(block)
        if not data or data.get("type") != "tool_use":
            return None
        arguments = data.get("input")
        return ToolCallRequest(
            id=data.get("id") or "",
            name=data.get("name") or "",
            arguments=dict(arguments) if hasattr(arguments, "items") else {},
        )

    def tool_call_to(self, request: ToolCallRequest) -> dict[str, Any]:
        block: ToolUseBlockParam = {
            "type": "tool_use",
            "id": request.id,
            "name": request.name,
            "input": request.arguments,
        }
        return dict(block)

    def stream_parser(self, **kwargs: Any) -> InvokeStreamParser:
        """Fresh parser for one Messages response stream."""
        return InvokeStreamParser(**kwargs)
