"""Text writers: targets that receive log text."""

from __future__ import annotations

import io
import os
import sys
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import TextIO


class Color(IntEnum):
    """Colours a writer may use to highlight text. ``NONE`` means no colour."""

    NONE = 0
    BLUE = 1
    RED = 2
    YELLOW = 3
    GREEN = 4
    MAGENTA = 5
    CYAN = 6
    BLACK = 7
    WHITE = 8
    ORANGE = 9
    BROWN = 10


RESET_SEQUENCE = "\033[0m"

_ANSI_CODES = {
    Color.BLUE: "\033[40m\033[1;34m",
    Color.RED: "\033[40m\033[1;31m",
    Color.YELLOW: "\033[40m\033[1;33m",
    Color.GREEN: "\033[40m\033[1;32m",
    Color.MAGENTA: "\033[40m\033[1;35m",
    Color.CYAN: "\033[40m\033[1;36m",
    Color.BLACK: "\033[47m\033[1;30m",
    Color.WHITE: "\033[40m\033[1;37m",
    Color.ORANGE: "\033[43m\033[1;30m",
    Color.BROWN: "\033[40m\033[33m",
}


class TextWriter(ABC):
    """Something that text can be written to."""

    @abstractmethod
    def write_text(self, txt: str, color: int = 0) -> None:
        """Write ``txt``, optionally highlighted with ``color``."""


class NullWriter(TextWriter):
    """Writer that discards everything."""

    def write_text(self, txt: str, color: int = 0) -> None:
        pass


class StringWriter(TextWriter):
    """Writer that collects all text in memory."""

    def __init__(self) -> None:
        self.stream = io.StringIO()

    def write_text(self, txt: str, color: int = 0) -> None:
        self.stream.write(txt)

    def text(self) -> str:
        """Return everything written so far."""
        return self.stream.getvalue()


class FileWriter(TextWriter):
    """Writer that writes into a file, flushing after each write."""

    def __init__(self, file_path: str | os.PathLike[str]) -> None:
        self.path = file_path
        try:
            self._file = open(file_path, "w", encoding="utf-8")
        except OSError as exc:
            raise OSError(f"Could not open {os.fspath(file_path)} for writing") from exc

    def write_text(self, txt: str, color: int = 0) -> None:
        self._file.write(txt)
        self._file.flush()

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def __enter__(self) -> FileWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AvoidDuplicatesWriter(TextWriter):
    """Adapter that drops text already present at the start of the last line."""

    def __init__(self, writer: TextWriter) -> None:
        self.orig_writer = writer
        self._last_line = ""

    def write_text(self, txt: str, color: int = 0) -> None:
        if self._last_line.startswith(txt):
            return
        self.orig_writer.write_text(txt, color)
        if "\n" in self._last_line:
            self._last_line = ""
        self._last_line += txt

    def reset(self) -> None:
        """Forget the remembered line."""
        self._last_line = ""


class StdStreamWriter(TextWriter):
    """Writer to standard output or standard error, using ANSI colours."""

    def __init__(self, stdout_or_stderr: bool = True, stream: TextIO | None = None) -> None:
        self.stdout_or_stderr = stdout_or_stderr
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        if self._stream is not None:
            return self._stream
        return sys.stdout if self.stdout_or_stderr else sys.stderr

    def write_text(self, txt: str, color: int = 0) -> None:
        if color:
            self.set_color(color)
        self.stream.write(txt)
        self.stream.flush()
        if color:
            self.reset_color()

    def set_color(self, color: int) -> None:
        """Switch the stream to ``color``; unknown colours reset it."""
        try:
            code = _ANSI_CODES.get(Color(color), RESET_SEQUENCE)
        except ValueError:
            code = RESET_SEQUENCE
        self.stream.write(code)

    def reset_color(self) -> None:
        """Return the stream to its default colour."""
        self.stream.write(RESET_SEQUENCE)