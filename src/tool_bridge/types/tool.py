"""
Provider‑neutral dataclasses for tool definitions and tool calls.

They are intentionally minimal: everything provider‑specific lives in adapters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

__all__ = ["ToolDefinition", "ToolCallRequest"]


@dataclass(slots=True, frozen=True)
class ToolDefinition:
    """A tool the model may call, described by a JSON schema. Unhashable."""
    name: str
    description: str = ""
    parameters: dict[str, Any] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ToolDefinition":
        """
        Build a definition from a native, OpenAI-style or unified record.

        Native records carry ``input_schema``, OpenAI-style records nest
        everything under ``function``, unified records use ``parameters``.
        """
        from tool_bridge.schema import normalize_tool_definition

        record = normalize_tool_definition(raw)
        schema = record.get("input_schema")
        if schema is None:
            schema = record.get("parameters")
        return cls(
            name=record.get("name") or "",
            description=record.get("description") or "",
            parameters=dict(schema or {}),
        )


@dataclass(slots=True)
class ToolCallRequest:
    """A model‑agnostic request emitted by the LLM to call a local tool."""
    id: str
    name: str
    arguments: dict[str, Any]
