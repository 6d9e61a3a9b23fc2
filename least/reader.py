"""Background ingestion of one input source.

The reader thread polls the source for readability, splits chunks into lines,
and flushes completed lines to the main loop in batches. A batch is sent once
the flush interval has elapsed since the previous flush, and unconditionally
at end of input, so visibility latency stays bounded without sending one
message per line.
"""

from __future__ import annotations

import logging
import select
import threading
import time
from collections.abc import Callable

from .errors import IOReadError, PagerError
from .events import EndOfInput, EventSender, NewLines, ReaderFailed, ReaderTerminationObserved
from .source import OpenedSource, Source, open_source

logger = logging.getLogger(__name__)

FLUSH_INTERVAL_SECONDS = 0.016
READ_CHUNK_SIZE = 64 * 1024
DEFAULT_TAB_WIDTH = 8


def normalize_line(raw: bytes, tab_width: int = DEFAULT_TAB_WIDTH) -> str:
    """Turn one raw line (terminator already removed) into display text."""
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw.decode("utf-8", errors="replace").expandtabs(tab_width)


class LineSplitter:
    """Accumulate byte chunks and hand out completed lines.

    A trailing partial line is kept as bytes until its terminator arrives, so
    multi-byte characters split across chunks decode correctly.
    """

    def __init__(self, tab_width: int = DEFAULT_TAB_WIDTH) -> None:
        self.tab_width = tab_width
        self._partial = b""

    def feed(self, chunk: bytes) -> list[str]:
        if b"\n" not in chunk:
            self._partial += chunk
            return []
        parts = (self._partial + chunk).split(b"\n")
        self._partial = parts.pop()
        return [normalize_line(part, self.tab_width) for part in parts]

    def finish(self) -> list[str]:
        """Complete the trailing partial line, if any, as a final line."""
        if not self._partial:
            return []
        line = normalize_line(self._partial, self.tab_width)
        self._partial = b""
        return [line]


class ReaderTask:
    """Own one ``Source`` and stream its lines into an ``EventSender``.

    Emits ``NewLines`` batches followed by exactly one of ``EndOfInput`` or
    ``ReaderFailed``. ``start`` runs the task on a daemon thread; ``run`` can
    be called directly to read synchronously.
    """

    def __init__(
        self,
        source: Source,
        sender: EventSender,
        *,
        tab_width: int = DEFAULT_TAB_WIDTH,
        flush_interval: float = FLUSH_INTERVAL_SECONDS,
        chunk_size: int = READ_CHUNK_SIZE,
        clock: Callable[[], float] = time.monotonic,
        stdin_fd: int | None = None,
    ) -> None:
        self.source = source
        self._sender = sender
        self.tab_width = tab_width
        self.flush_interval = flush_interval
        self.chunk_size = chunk_size
        self._clock = clock
        self._stdin_fd = stdin_fd
        self._thread: threading.Thread | None = None
        self.failure: BaseException | None = None

    def start(self) -> threading.Thread:
        thread = threading.Thread(target=self._run_guarded, name="least-reader", daemon=True)
        self._thread = thread
        thread.start()
        return thread

    def join(self, timeout: float | None = None) -> BaseException | None:
        """Wait for the reader thread and return the recorded failure, if any."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self.failure

    def _run_guarded(self) -> None:
        try:
            self.run()
        except Exception as exc:
            self.failure = exc
            logger.exception("reader thread for %s crashed", self.source.describe())
            self._sender.send(ReaderTerminationObserved())
        finally:
            self._sender.close()

    def run(self) -> None:
        try:
            opened = open_source(self.source, self._stdin_fd)
        except PagerError as exc:
            logger.error("cannot open %s: %s", self.source.describe(), exc)
            self._sender.send(ReaderFailed(exc))
            return
        logger.info("reading from %s", opened.name)
        try:
            self._pump(opened)
        finally:
            opened.close()

    def _flush(self, batch: list[str]) -> None:
        logger.debug("flushing %d lines", len(batch))
        self._sender.send(NewLines(tuple(batch)))

    def _pump(self, opened: OpenedSource) -> None:
        splitter = LineSplitter(self.tab_width)
        batch: list[str] = []
        last_flush = self._clock()
        while True:
            # Nothing to flush: block until the source has data.
            if batch:
                timeout: float | None = max(0.0, self.flush_interval - (self._clock() - last_flush))
            else:
                timeout = None
            try:
                ready, _, _ = select.select([opened.fd], [], [], timeout)
                chunk = opened.read_chunk(self.chunk_size) if ready else None
            except OSError as exc:
                logger.error("read from %s failed: %s", opened.name, exc)
                self._sender.send(ReaderFailed(IOReadError(f"'{opened.name}': {exc.strerror or exc}")))
                return

            if chunk is not None:
                if not chunk:
                    batch.extend(splitter.finish())
                    if batch:
                        self._flush(batch)
                    logger.info("end of input from %s", opened.name)
                    self._sender.send(EndOfInput())
                    return
                batch.extend(splitter.feed(chunk))

            if batch and self._clock() - last_flush >= self.flush_interval:
                self._flush(batch)
                batch = []
                last_flush = self._clock()
