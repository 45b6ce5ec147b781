from __future__ import annotations

import argparse
import logging
import pathlib

from tool_bridge import (
    ProviderFamily,
    accumulate_tool_calls,
    family_for_model,
    get_adapter,
    iter_json_events,
)

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


def replay(path: pathlib.Path, family: ProviderFamily) -> None:
    """
    Replay a recorded JSON-lines stream through the matching parser.

    1) Decode each line into an event
    2) Translate events into unified text / tool-call fragments
    3) Rebuild complete tool calls from the fragments
    """
    adapter = get_adapter(family)
    parser = adapter.stream_parser()

    with path.open("rb") as fh:
        result = accumulate_tool_calls(parser.parse(iter_json_events(fh)))

    if result.text:
        logger.info("Text: %s", result.text)
    if not result.tool_calls:
        logger.warning("No tool calls in %s", path)
    for call in result.tool_calls:
        logger.info("Tool call %s -> %s(%s)", call.id, call.name, call.arguments)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("events", type=pathlib.Path, help="JSON-lines file of stream events")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--family", choices=[f.value for f in ProviderFamily])
    group.add_argument(
        "--model",
        default="anthropic.claude-3-5-haiku-20241022-v1:0",
        help="Model id used to pick the stream grammar",
    )
    args = parser.parse_args()

    family = ProviderFamily(args.family) if args.family else family_for_model(args.model)
    replay(args.events, family)
