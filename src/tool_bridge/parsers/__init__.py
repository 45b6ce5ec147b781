"""Stateful parsers translating vendor stream grammars into unified events."""

from .base import EventParser, InFlightToolCall
from .converse import ConverseStreamParser
from .invoke import InvokeStreamParser

__all__ = [
    "EventParser",
    "InFlightToolCall",
    "ConverseStreamParser",
    "InvokeStreamParser",
]
