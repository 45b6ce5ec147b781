"""Parser for the Converse streaming grammar (camelCase, one key per event)."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from tool_bridge.parsers.base import EventParser, as_mapping, block_index
from tool_bridge.types import TextEvent, UnifiedEvent

__all__ = ["ConverseStreamParser"]

_EMPTY: Mapping[str, Any] = {}


def _get(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return as_mapping(data.get(key)) or _EMPTY


class ConverseStreamParser(EventParser):
    """
    Translate Converse stream events into unified events.

    Recognised events:
      {"contentBlockStart": {"start": {"toolUse": {"toolUseId", "name"}}, "contentBlockIndex"}}
      {"contentBlockDelta": {"delta": {"text"} | {"toolUse": {"input"}}, "contentBlockIndex"}}
      {"contentBlockStop": {"contentBlockIndex"}}

    messageStart, messageStop, metadata and reasoning deltas are ignored.
    """

    def _step(self, data: Mapping[str, Any]) -> Optional[UnifiedEvent]:
        if "contentBlockStart" in data:
            body = _get(data, "contentBlockStart")
            tool_use = _get(_get(body, "start"), "toolUse")
            if tool_use:
                self._start_call(
                    tool_use.get("toolUseId") or "",
                    tool_use.get("name") or "",
                    block_index(body.get("contentBlockIndex")),
                )
            return None

        if "contentBlockDelta" in data:
            body = _get(data, "contentBlockDelta")
            delta = _get(body, "delta")
            text = delta.get("text")
            if isinstance(text, str):
                return TextEvent(text=text)
            if "toolUse" not in delta:
                return None
            if not self._call.id:
                self._log("Dropping tool delta with no tool call open", logging.DEBUG)
                return None
            return self._fragment(
                _get(delta, "toolUse").get("input"),
                block_index(body.get("contentBlockIndex")),
            )

        if "contentBlockStop" in data:
            body = _get(data, "contentBlockStop")
            self._stop_block(block_index(body.get("contentBlockIndex")))
            return None

        return None
