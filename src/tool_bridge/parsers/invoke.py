"""Parser for the native Messages streaming grammar (``type`` discriminated)."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from tool_bridge.parsers.base import EventParser, as_mapping, block_index
from tool_bridge.types import TextEvent, UnifiedEvent

__all__ = ["InvokeStreamParser"]


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


class InvokeStreamParser(EventParser):
    """
    Translate Messages stream events into unified events.

    Handles content_block_start, content_block_delta and content_block_stop;
    message_start, message_delta, message_stop and ping are ignored. Accepts
    plain dicts as well as anthropic SDK stream event models.
    """

    def _step(self, data: Mapping[str, Any]) -> Optional[UnifiedEvent]:
        event_type = data.get("type")
        index = block_index(data.get("index"))

        if event_type == "content_block_start":
            block = as_mapping(data.get("content_block")) or {}
            block_type = block.get("type")
            if block_type == "text":
                return TextEvent(text=_text(block.get("text")))
            if block_type == "tool_use":
                self._start_call(block.get("id") or "", block.get("name") or "", index)
            return None

        if event_type == "content_block_delta":
            delta = as_mapping(data.get("delta")) or {}
            delta_type = delta.get("type")
            if delta_type == "text_delta":
                return TextEvent(text=_text(delta.get("text")))
            if delta_type == "input_json_delta":
                # id and name must both be set
                if not (self._call.id and self._call.name):
                    self._log("Dropping tool delta with no tool call open", logging.DEBUG)
                    return None
                return self._fragment(delta.get("partial_json"), index)
            return None

        if event_type == "content_block_stop":
            self._stop_block(index)
            return None

        return None
