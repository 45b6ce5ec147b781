"""Shared state and driver loop for streaming event parsers."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, AsyncGenerator, AsyncIterable, Iterable, Iterator, Optional

from tool_bridge.types import ToolCallEvent, UnifiedEvent

__all__ = ["EventParser", "InFlightToolCall"]


@dataclass(slots=True)
class InFlightToolCall:
    """
    The single tool call a parser is currently streaming.

    Empty when ``id`` is blank. Argument fragments are forwarded as they
    arrive and never accumulated here, so ``arguments`` only marks that a
    fresh call started with an empty buffer.
    """

    id: str = ""
    name: str = ""
    arguments: str = ""
    index: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return bool(self.id)

    def open(self, id: str, name: str, index: Optional[int] = None) -> None:
        self.id = id
        self.name = name
        self.arguments = ""
        self.index = index

    def reset(self) -> None:
        self.open("", "", None)

    def matches(self, index: Optional[int]) -> bool:
        """True unless both indices are known and differ."""
        return index is None or self.index is None or index == self.index


def as_mapping(value: Any) -> Optional[Mapping[str, Any]]:
    """Return *value* as a mapping, dumping SDK models; None if impossible."""
    if isinstance(value, Mapping):
        return value
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        dumped = dump()
        if isinstance(dumped, Mapping):
            return dumped
    return None


def block_index(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


class EventParser(ABC):
    """
    Base class for the per-grammar stream parsers.

    A parser advances one step per inbound event and produces at most one
    unified event per step. It owns exactly one InFlightToolCall and reuses
    it across calls. Stream noise is dropped, never raised.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.name = name or self.__class__.__name__
        self._call = InFlightToolCall()

    @property
    def in_flight(self) -> InFlightToolCall:
        """A copy of the current in-flight call."""
        return replace(self._call)

    def reset(self) -> None:
        self._call.reset()

    def feed(self, event: Any) -> Optional[UnifiedEvent]:
        """Advance the parser by one decoded event."""
        data = as_mapping(event)
        if data is None:
            self._log(f"Ignoring non-mapping event {type(event).__name__}", logging.DEBUG)
            return None
        return self._step(data)

    @abstractmethod
    def _step(self, data: Mapping[str, Any]) -> Optional[UnifiedEvent]:
        """Apply one grammar-specific transition."""
        ...

    def parse(self, events: Iterable[Any]) -> Iterator[UnifiedEvent]:
        """Lazily translate a forward-only event stream."""
        for event in events:
            out = self.feed(event)
            if out is not None:
                yield out

    async def aparse(self, events: AsyncIterable[Any]) -> AsyncGenerator[UnifiedEvent, None]:
        """Async variant of :meth:`parse`."""
        async for event in events:
            out = self.feed(event)
            if out is not None:
                yield out

    # --- in-flight lifecycle ----------------------------------------------
    def _start_call(self, id: str, name: str, index: Optional[int]) -> None:
        if self._call.is_open:
            self._log(
                f"Tool call {id!r} started while {self._call.id!r} still open; replacing it",
                logging.DEBUG,
            )
        self._call.open(id, name, index)

    def _stop_block(self, index: Optional[int]) -> None:
        if not self._call.matches(index):
            self._log(
                f"Stop for block {index} does not close tool call at block {self._call.index}",
                logging.DEBUG,
            )
            return
        self._call.reset()

    def _fragment(self, fragment: Any, index: Optional[int]) -> Optional[ToolCallEvent]:
        if not isinstance(fragment, str):
            self._log("Dropping tool delta without an argument fragment", logging.DEBUG)
            return None
        if not self._call.matches(index):
            self._log(
                f"Dropping tool delta for block {index}; open call is at block {self._call.index}",
                logging.DEBUG,
            )
            return None
        return ToolCallEvent(
            id=self._call.id,
            name=self._call.name,
            arguments_fragment=fragment,
        )

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")
