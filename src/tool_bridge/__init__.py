"""
Tool Bridge - Unified tool-call streaming across provider grammars.
"""

from .adapters import ConverseAdapter, InvokeAdapter, OpenAIAdapter, get_adapter
from .errors import ToolBridgeError, UnsupportedProviderFamilyError
from .parsers import ConverseStreamParser, EventParser, InvokeStreamParser
from .providers import ProviderFamily, default_family, family_for_model
from .schema import build_provider_tool_config, normalize_tool_definition
from .stream_utils import (
    StreamResult,
    accumulate_tool_calls,
    aaccumulate_tool_calls,
    aiter_json_events,
    iter_json_events,
)
from .types import TextEvent, ToolCallEvent, ToolCallRequest, ToolDefinition, UnifiedEvent

__version__ = "0.1.0"

__all__ = [
    "ConverseAdapter",
    "InvokeAdapter",
    "OpenAIAdapter",
    "get_adapter",
    "ToolBridgeError",
    "UnsupportedProviderFamilyError",
    "EventParser",
    "ConverseStreamParser",
    "InvokeStreamParser",
    "ProviderFamily",
    "default_family",
    "family_for_model",
    "build_provider_tool_config",
    "normalize_tool_definition",
    "StreamResult",
    "accumulate_tool_calls",
    "aaccumulate_tool_calls",
    "aiter_json_events",
    "iter_json_events",
    "TextEvent",
    "ToolCallEvent",
    "ToolCallRequest",
    "ToolDefinition",
    "UnifiedEvent",
]
