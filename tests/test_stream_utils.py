"""Tests for transport decoding and tool-call accumulation."""

import asyncio
import json
import logging

from tool_bridge.parsers import ConverseStreamParser, InvokeStreamParser
from tool_bridge.stream_utils import (
    aaccumulate_tool_calls,
    accumulate_tool_calls,
    aiter_json_events,
    iter_json_events,
)
from tool_bridge.types import TextEvent, ToolCallEvent, ToolCallRequest


class TestIterJsonEvents:
    """Test decoding of raw transport items."""

    def test_json_lines(self):
        raw = [b'{"type": "ping"}\n', "\n", '  {"type": "message_stop"}  ']
        assert list(iter_json_events(raw)) == [{"type": "ping"}, {"type": "message_stop"}]

    def test_sse_data_prefix(self, caplog):
        """Test SSE framing lines are skipped without warnings."""
        raw = [
            "event: content_block_stop",
            'data: {"type": "content_block_stop", "index": 0}',
            "",
            ": keep-alive",
            "id: 42",
            "retry: 3000",
            "event: ping",
            'data: {"type": "ping"}',
            "data:",
        ]
        with caplog.at_level(logging.WARNING, logger="tool_bridge.stream_utils"):
            events = list(iter_json_events(raw))
        assert events == [{"type": "content_block_stop", "index": 0}, {"type": "ping"}]
        assert caplog.records == []

    def test_bedrock_chunk_envelope(self):
        payload = {"type": "content_block_stop", "index": 1}
        raw = [{"chunk": {"bytes": json.dumps(payload).encode()}}]
        assert list(iter_json_events(raw)) == [payload]

    def test_decoded_dicts_pass_through(self):
        event = {"contentBlockStop": {"contentBlockIndex": 0}}
        assert list(iter_json_events([event])) == [event]

    def test_bad_lines_are_skipped_with_warning(self, caplog):
        raw = ['{"type": ', "[1, 2]", object(), '{"type": "ping"}']
        with caplog.at_level(logging.WARNING, logger="tool_bridge.stream_utils"):
            events = list(iter_json_events(raw))
        assert events == [{"type": "ping"}]
        assert len(caplog.records) == 3

    def test_async_variant(self):
        async def source():
            yield b'{"type": "ping"}'
            yield ""

        async def collect():
            return [e async for e in aiter_json_events(source())]

        assert asyncio.run(collect()) == [{"type": "ping"}]


class TestAccumulateToolCalls:
    """Test the reference downstream consumer."""

    def test_fragments_joined_per_id(self):
        events = [
            TextEvent("Looking "),
            ToolCallEvent("A", "foo", '{"x": '),
            TextEvent("up"),
            ToolCallEvent("A", "foo", "1}"),
            ToolCallEvent("B", "bar", "{}"),
        ]

        result = accumulate_tool_calls(events)

        assert result.text == "Looking up"
        assert result.tool_calls == [
            ToolCallRequest("A", "foo", {"x": 1}),
            ToolCallRequest("B", "bar", {}),
        ]

    def test_empty_arguments_parse_to_empty_dict(self):
        result = accumulate_tool_calls([ToolCallEvent("A", "noop", "")])
        assert result.tool_calls == [ToolCallRequest("A", "noop", {})]

    def test_falls_back_to_name_when_id_empty(self):
        events = [ToolCallEvent("", "foo", '{"a"'), ToolCallEvent("", "foo", ": 2}")]
        assert accumulate_tool_calls(events).tool_calls == [ToolCallRequest("", "foo", {"a": 2})]

    def test_malformed_document_is_skipped(self, caplog):
        events = [ToolCallEvent("A", "foo", '{"x": '), ToolCallEvent("B", "bar", '{"ok": true}')]
        with caplog.at_level(logging.WARNING, logger="tool_bridge.stream_utils"):
            result = accumulate_tool_calls(events)
        assert result.tool_calls == [ToolCallRequest("B", "bar", {"ok": True})]
        assert "malformed" in caplog.text

    def test_non_object_document_is_skipped(self):
        assert accumulate_tool_calls([ToolCallEvent("A", "foo", "[1]")]).tool_calls == []

    def test_async_variant(self):
        async def source():
            yield ToolCallEvent("A", "foo", "{}")
            yield TextEvent("done")

        result = asyncio.run(aaccumulate_tool_calls(source()))
        assert result.text == "done"
        assert result.tool_calls == [ToolCallRequest("A", "foo", {})]


class TestEndToEnd:
    """Test raw lines through parser and accumulator."""

    def test_converse_lines(self):
        lines = [
            '{"contentBlockDelta": {"delta": {"text": "On it."}, "contentBlockIndex": 0}}',
            '{"contentBlockStop": {"contentBlockIndex": 0}}',
            '{"contentBlockStart": {"start": {"toolUse": {"toolUseId": "t1", "name": "search"}}, "contentBlockIndex": 1}}',
            '{"contentBlockDelta": {"delta": {"toolUse": {"input": "{\\"q\\":"}}, "contentBlockIndex": 1}}',
            '{"contentBlockDelta": {"delta": {"toolUse": {"input": "\\"cats\\"}"}}, "contentBlockIndex": 1}}',
            '{"contentBlockStop": {"contentBlockIndex": 1}}',
        ]

        result = accumulate_tool_calls(ConverseStreamParser().parse(iter_json_events(lines)))

        assert result.text == "On it."
        assert result.tool_calls == [ToolCallRequest("t1", "search", {"q": "cats"})]

    def test_invoke_chunks(self):
        payloads = [
            {"type": "content_block_start", "index": 0, "content_block": {"type": "tool_use", "id": "tu1", "name": "lookup"}},
            {"type": "content_block_delta", "index": 0, "delta": {"type": "input_json_delta", "partial_json": '{"id"'}},
            {"type": "content_block_delta", "index": 0, "delta": {"type": "input_json_delta", "partial_json": ": 7}"}},
            {"type": "content_block_stop", "index": 0},
        ]
        raw = [{"chunk": {"bytes": json.dumps(p).encode()}} for p in payloads]

        result = accumulate_tool_calls(InvokeStreamParser().parse(iter_json_events(raw)))

        assert result.tool_calls == [ToolCallRequest("tu1", "lookup", {"id": 7})]
