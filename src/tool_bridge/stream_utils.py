"""Shared streaming utilities: transport chunk decoding and tool-call accumulation."""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, AsyncGenerator, AsyncIterable, Dict, Iterable, Iterator, List, Optional

from tool_bridge.types import TextEvent, ToolCallEvent, ToolCallRequest, UnifiedEvent

__all__ = [
    "StreamResult",
    "iter_json_events",
    "aiter_json_events",
    "accumulate_tool_calls",
    "aaccumulate_tool_calls",
]

logger = logging.getLogger(__name__)

_SSE_DATA_PREFIX = "data:"
# SSE framing fields that never carry an event payload
_SSE_SKIPPED_FIELDS = ("event:", "id:", "retry:")


@dataclass
class StreamResult:
    """Text and complete tool calls rebuilt from a unified event stream."""

    text: str = ""
    tool_calls: List[ToolCallRequest] = field(default_factory=list)


def _decode_line(line: bytes | str) -> Optional[Dict[str, Any]]:
    if isinstance(line, (bytes, bytearray)):
        line = line.decode("utf-8", errors="replace")
    line = line.strip()
    if line.startswith(":") or line.startswith(_SSE_SKIPPED_FIELDS):
        return None
    if line.startswith(_SSE_DATA_PREFIX):
        line = line[len(_SSE_DATA_PREFIX):].strip()
    if not line:
        return None
    try:
        event = json.loads(line)
    except json.JSONDecodeError:
        logger.warning("Skipping undecodable stream line: %.80s", line)
        return None
    if not isinstance(event, dict):
        logger.warning("Skipping non-object stream line: %.80s", line)
        return None
    return event


def _decode(item: Any) -> Optional[Dict[str, Any]]:
    if isinstance(item, Mapping):
        # Bedrock response-stream envelope: {"chunk": {"bytes": b"{...}"}}
        chunk = item.get("chunk")
        if isinstance(chunk, Mapping) and "bytes" in chunk:
            return _decode_line(chunk["bytes"])
        return dict(item)
    if isinstance(item, (bytes, bytearray, str)):
        return _decode_line(item)
    logger.warning("Skipping stream item of unsupported type %s", type(item).__name__)
    return None


def iter_json_events(raw: Iterable[Any]) -> Iterator[Dict[str, Any]]:
    """
    Decode raw transport items into event dicts.

    Accepts already-decoded dicts, Bedrock ``{"chunk": {"bytes": ...}}``
    envelopes and JSON lines (bytes or str, optionally SSE ``data:`` prefixed).
    Blank lines, SSE comments and non-data SSE fields are skipped quietly;
    undecodable lines are skipped with a warning.
    """
    for item in raw:
        event = _decode(item)
        if event is not None:
            yield event


async def aiter_json_events(raw: AsyncIterable[Any]) -> AsyncGenerator[Dict[str, Any], None]:
    """Async variant of :func:`iter_json_events`."""
    async for item in raw:
        event = _decode(item)
        if event is not None:
            yield event


class _Accumulator:
    def __init__(self) -> None:
        self.text_parts: List[str] = []
        # key -> [id, name, fragments]; dicts keep first-seen order
        self.calls: Dict[str, List[Any]] = {}

    def add(self, event: UnifiedEvent) -> None:
        if isinstance(event, TextEvent):
            self.text_parts.append(event.text)
        elif isinstance(event, ToolCallEvent):
            key = event.id or f"name:{event.name}"
            entry = self.calls.setdefault(key, [event.id, event.name, []])
            entry[2].append(event.arguments_fragment)

    def result(self) -> StreamResult:
        tool_calls: List[ToolCallRequest] = []
        for call_id, name, fragments in self.calls.values():
            document = "".join(fragments)
            if not document.strip():
                arguments: Any = {}
            else:
                try:
                    arguments = json.loads(document)
                except json.JSONDecodeError:
                    logger.warning("Skipping tool call %s (%s) with malformed arguments", call_id, name)
                    continue
            if not isinstance(arguments, dict):
                logger.warning("Skipping tool call %s (%s) with non-object arguments", call_id, name)
                continue
            tool_calls.append(ToolCallRequest(id=call_id, name=name, arguments=arguments))
        return StreamResult(text="".join(self.text_parts), tool_calls=tool_calls)


async def aaccumulate_tool_calls(events: AsyncIterable[UnifiedEvent]) -> StreamResult:
    """
    Pure function that folds a unified event stream into text and tool calls.

    Args:
        events: Async iterable of TextEvent / ToolCallEvent objects

    Returns:
        A StreamResult; tool calls appear in first-seen order
    """
    acc = _Accumulator()
    async for event in events:
        acc.add(event)
    return acc.result()


def accumulate_tool_calls(events: Iterable[UnifiedEvent]) -> StreamResult:
    """
    Synchronous counterpart of :func:`aaccumulate_tool_calls`.

    Args:
        events: Iterable of TextEvent / ToolCallEvent objects

    Returns:
        A StreamResult; tool calls appear in first-seen order
    """
    acc = _Accumulator()
    for event in events:
        acc.add(event)
    return acc.result()
