"""
Tool-definition normalization and provider tool configuration.

Two tool-definition dialects are understood:
  native:  {"name", "description", "input_schema"}
  openai:  {"type": "function", "function": {"name", "description", "parameters"}}

Anything else is passed through untouched so that already-correct or newer
shapes are never rejected.
"""

from __future__ import annotations

from typing import Any, Iterable, Literal, Mapping, Optional, Union

from anthropic.types import ToolParam
from openai.types.chat import ChatCompletionToolParam

from tool_bridge.providers import ProviderFamily, coerce_family
from tool_bridge.types import ToolDefinition

__all__ = [
    "ConverseToolConfig",
    "InvokeToolConfig",
    "ProviderToolConfig",
    "normalize_tool_definition",
    "build_provider_tool_config",
]

Dialect = Literal["native", "openai"]
ConverseToolConfig = dict[str, Any]
InvokeToolConfig = list[Any]
ProviderToolConfig = Union[ConverseToolConfig, InvokeToolConfig]


def _is_openai_shape(raw: Mapping[str, Any]) -> bool:
    return isinstance(raw.get("function"), Mapping)


def _to_native(raw: Mapping[str, Any]) -> Any:
    if "input_schema" in raw:
        return raw
    if _is_openai_shape(raw):
        func = raw["function"]
        return {
            "name": func.get("name"),
            "description": func.get("description"),
            "input_schema": func.get("parameters"),
        }
    return raw


def _to_openai(raw: Mapping[str, Any]) -> Any:
    if _is_openai_shape(raw):
        return raw
    if "input_schema" in raw:
        tool: ChatCompletionToolParam = {
            "type": "function",
            "function": {
                "name": raw.get("name", ""),
                "description": raw.get("description") or "",
                "parameters": raw["input_schema"] or {},
            },
        }
        return tool
    return raw


def normalize_tool_definition(raw: Any, dialect: Dialect = "native") -> Any:
    """
    Rewrite a tool definition of unknown dialect into *dialect*.

    Records already in the target dialect and unrecognised records are
    returned unchanged. Never raises.

    Example
    -------
    >>> normalize_tool_definition(
    ...     {"function": {"name": "f", "description": "d", "parameters": {"type": "object"}}}
    ... )
    {'name': 'f', 'description': 'd', 'input_schema': {'type': 'object'}}
    """
    if not isinstance(raw, Mapping):
        return raw
    if dialect == "openai":
        return _to_openai(raw)
    return _to_native(raw)


def _invoke_entry(tool: ToolDefinition | Mapping[str, Any]) -> Any:
    # Native and unrecognised records pass through untouched
    if isinstance(tool, Mapping) and _is_openai_shape(tool) and "input_schema" not in tool:
        tool = ToolDefinition.from_dict(tool)
    if not isinstance(tool, ToolDefinition):
        return tool
    entry: ToolParam = {
        "name": tool.name,
        "description": tool.description,
        "input_schema": tool.parameters,
    }
    return entry


def _converse_entry(tool: ToolDefinition | Mapping[str, Any]) -> Any:
    if isinstance(tool, Mapping) and ("input_schema" in tool or _is_openai_shape(tool)):
        tool = ToolDefinition.from_dict(tool)
    if not isinstance(tool, ToolDefinition):
        return tool
    spec: dict[str, Any] = {"name": tool.name}
    # Bedrock rejects an empty description
    if tool.description:
        spec["description"] = tool.description
    spec["inputSchema"] = {"json": tool.parameters}
    return {"toolSpec": spec}


def build_provider_tool_config(
    defs: Optional[Iterable[ToolDefinition | Mapping[str, Any]]],
    family: ProviderFamily | str,
) -> Optional[ProviderToolConfig]:
    """
    Serialize tool definitions for the given provider family.

    Returns None when there is nothing to declare: callers must then omit
    the tools field from the request entirely, since an empty tools array
    is rejected as malformed by some providers. Tool choice is always
    automatic. Raw records that are neither native nor OpenAI-style are
    placed in the output unchanged.

    Raises:
        UnsupportedProviderFamilyError: if *family* is not a known family.
    """
    family = coerce_family(family)
    tools = list(defs or ())
    if not tools:
        return None

    if family is ProviderFamily.CONVERSE_STREAM:
        return {
            "tools": [_converse_entry(t) for t in tools],
            "toolChoice": {"auto": {}},
        }

    return [_invoke_entry(t) for t in tools]
