"""Event messages and the channel that carries them to the main loop.

Producers (reader thread, terminal-input thread) only ever hold an
``EventSender``. The main loop is the single consumer and owns the
``EventChannel`` itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from queue import Queue

from .errors import ChannelDisconnected


@dataclass(frozen=True)
class Event:
    """Base class for every message delivered through ``EventChannel``."""


@dataclass(frozen=True)
class TerminalInput(Event):
    """Base class for events produced by the terminal-input thread."""


@dataclass(frozen=True)
class KeyPressed(TerminalInput):
    """One normalized key token such as ``"j"``, ``"ESC"`` or ``"ENTER"``."""

    key: str


@dataclass(frozen=True)
class TerminalResized(TerminalInput):
    columns: int
    rows: int


@dataclass(frozen=True)
class TerminalInputFailed(Event):
    """Terminal-input thread stopped on a read error; carries the cause."""

    cause: Exception


@dataclass(frozen=True)
class NewLines(Event):
    """A batch of complete, tab-expanded lines in source order."""

    lines: tuple[str, ...]


@dataclass(frozen=True)
class EndOfInput(Event):
    pass


@dataclass(frozen=True)
class ReaderFailed(Event):
    """Terminal reader event carrying the failure cause."""

    cause: Exception


@dataclass(frozen=True)
class ReaderTerminationObserved(Event):
    """Reader thread exited abnormally; join it to recover the cause."""


@dataclass(frozen=True)
class _SenderClosed:
    name: str


class EventSender:
    """Producer handle for one thread; ``close`` once the producer stops."""

    def __init__(self, queue: Queue, name: str) -> None:
        self._queue = queue
        self.name = name
        self._closed = False

    def send(self, event: Event) -> None:
        if self._closed:
            raise RuntimeError(f"sender {self.name!r} is closed")
        self._queue.put(event)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put(_SenderClosed(self.name))

    @property
    def closed(self) -> bool:
        return self._closed


class EventChannel:
    """Unbounded ordered multi-producer/single-consumer event channel.

    Messages from one sender arrive in send order. There is no ordering
    between senders beyond arrival order. Senders must be created on the
    consumer thread before their producer starts.
    """

    def __init__(self) -> None:
        self._queue: Queue[Event | _SenderClosed] = Queue()
        self._open_senders = 0

    def sender(self, name: str) -> EventSender:
        self._open_senders += 1
        return EventSender(self._queue, name)

    def recv(self) -> Event:
        """Block until the next event arrives.

        Raises ``ChannelDisconnected`` once every sender has closed and all
        queued events have been received.
        """
        while True:
            if self._open_senders <= 0 and self._queue.empty():
                raise ChannelDisconnected("all event producers have stopped")
            item = self._queue.get()
            if isinstance(item, _SenderClosed):
                self._open_senders -= 1
                continue
            return item
