"""Input sources and their one-time resolution into a readable stream.

A ``Source`` is either an ordinary file path or standard input. ``open``
resolves it exactly once into an ``OpenedSource`` exposing the file
descriptor the reader polls for readiness.
"""

from __future__ import annotations

import os
import stat
import sys
from dataclasses import dataclass
from pathlib import Path

from .errors import SourceIsDirectory, SourceOpenError


@dataclass(frozen=True)
class OrdinaryFile:
    path: Path

    def describe(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class StandardInput:
    def describe(self) -> str:
        return "<stdin>"


Source = OrdinaryFile | StandardInput


class OpenedSource:
    """A byte stream ready for ``select``/``os.read`` on ``fd``."""

    def __init__(self, fd: int, name: str, owns_fd: bool) -> None:
        self.fd = fd
        self.name = name
        self._owns_fd = owns_fd

    def read_chunk(self, size: int) -> bytes:
        return os.read(self.fd, size)

    def close(self) -> None:
        if self._owns_fd:
            self._owns_fd = False
            os.close(self.fd)


def source_from_paths(paths: list[Path]) -> Source:
    """Pick the source for the given CLI paths.

    Only the last path is ever opened; with no paths, read standard input.
    """
    if not paths:
        return StandardInput()
    return OrdinaryFile(paths[-1])


def _open_file(path: Path) -> OpenedSource:
    try:
        fd = os.open(path, os.O_RDONLY)
    except IsADirectoryError as exc:
        raise SourceIsDirectory(path) from exc
    except OSError as exc:
        raise SourceOpenError(path, exc.strerror or str(exc)) from exc
    try:
        is_dir = stat.S_ISDIR(os.fstat(fd).st_mode)
    except OSError as exc:
        os.close(fd)
        raise SourceOpenError(path, exc.strerror or str(exc)) from exc
    if is_dir:
        os.close(fd)
        raise SourceIsDirectory(path)
    return OpenedSource(fd, str(path), owns_fd=True)


def open_source(source: Source, stdin_fd: int | None = None) -> OpenedSource:
    """Resolve ``source`` into an ``OpenedSource``.

    Raises ``SourceOpenError`` or ``SourceIsDirectory`` for unusable paths.
    """
    if isinstance(source, OrdinaryFile):
        return _open_file(source.path)
    fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    return OpenedSource(fd, source.describe(), owns_fd=False)
