"""Common interface for per-dialect tool-call adapters."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from tool_bridge.types import ToolCallRequest

__all__ = ["ToolAdapter"]


class ToolAdapter(ABC):
    """Pure conversions between a provider's tool-call blocks and ToolCallRequest."""

    @abstractmethod
    def tool_call_from(self, block: Any) -> Optional[ToolCallRequest]:
        """Convert one provider block; None if it is not a tool call."""
        ...

    @abstractmethod
    def tool_call_to(self, request: ToolCallRequest) -> dict[str, Any]:
        """Render a ToolCallRequest in this provider's block shape."""
        ...

    def tool_calls_from(self, blocks: Iterable[Any] | None) -> list[ToolCallRequest]:
        """Convert every tool call found in *blocks*, skipping everything else."""
        calls = []
        for block in blocks or ():
            call = self.tool_call_from(block)
            if call is not None:
                calls.append(call)
        return calls
