"""OpenAI adapter for tool definitions and ``function`` tool calls."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from openai.types.chat import ChatCompletionMessageToolCallParam, ChatCompletionToolParam

from tool_bridge.adapters.base import ToolAdapter
from tool_bridge.parsers.base import as_mapping
from tool_bridge.schema import normalize_tool_definition
from tool_bridge.types import ToolCallRequest, ToolDefinition

logger = logging.getLogger(__name__)


class OpenAIAdapter(ToolAdapter):
    """Adapter for converting between unified tool types and OpenAI format."""

    def tool_definitions(
        self, defs: Optional[Iterable[ToolDefinition | Mapping[str, Any]]]
    ) -> list[ChatCompletionToolParam]:
        """Render *defs* as OpenAI ``tools`` entries."""
        tools = []
        for tool in defs or ():
            if isinstance(tool, ToolDefinition):
                tool = {
                    "name": tool.name,
                    "description": tool.description,
                    "input_schema": tool.parameters,
                }
            tools.append(normalize_tool_definition(tool, "openai"))
        return tools

    def tool_call_from(self, block: Any) -> Optional[ToolCallRequest]:
        """Convert a ChatCompletionMessageToolCall (or its dict form)."""
        data = as_mapping(block)
        func = as_mapping(data.get("function")) if data else None
        if not func:
            return None

        raw_args = func.get("arguments")
        arguments: dict[str, Any] = {}
        if isinstance(raw_args, Mapping):
            arguments = dict(raw_args)
        elif isinstance(raw_args, str) and raw_args.strip():
            try:
                arguments = json.loads(raw_args)
            except json.JSONDecodeError:
                logger.warning("Skipping tool call %s with malformed arguments", data.get("id"))
                return None
            if not isinstance(arguments, dict):
                logger.warning("Skipping tool call %s with non-object arguments", data.get("id"))
                return None

        return ToolCallRequest(
            id=data.get("id") or "",
            name=func.get("name") or "",
            arguments=arguments,
        )

    def tool_call_to(self, request: ToolCallRequest) -> dict[str, Any]:
        call: ChatCompletionMessageToolCallParam = {
            "id": request.id,
            "type": "function",
            "function": {
                "name": request.name,
                "arguments": json.dumps(request.arguments),
            },
        }
        return dict(call)
