from .events import TextEvent, ToolCallEvent, UnifiedEvent
from .tool import ToolCallRequest, ToolDefinition

__all__ = [
    "TextEvent",
    "ToolCallEvent",
    "UnifiedEvent",
    "ToolCallRequest",
    "ToolDefinition",
]
