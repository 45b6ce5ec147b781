"""Unified streaming events produced by every stream parser."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, Union

__all__ = ["TextEvent", "ToolCallEvent", "UnifiedEvent"]


@dataclass(slots=True, frozen=True)
class TextEvent:
    """A fragment of assistant-visible text."""

    type: ClassVar[Literal["text"]] = "text"
    text: str


@dataclass(slots=True, frozen=True)
class ToolCallEvent:
    """
    A fragment of a tool call's JSON argument string.

    Fragments are not valid JSON on their own; concatenate them in arrival
    order, keyed by ``id``, to rebuild the argument document.
    """

    type: ClassVar[Literal["tool_call"]] = "tool_call"
    id: str
    name: str
    arguments_fragment: str


UnifiedEvent = Union[TextEvent, ToolCallEvent]
