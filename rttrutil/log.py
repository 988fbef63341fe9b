"""Logging to standard streams and a log file with printf-like formatting."""

from __future__ import annotations

import functools
import os
import re
import sys
from datetime import datetime
from enum import IntFlag
from pathlib import Path

from rttrutil.writers import FileWriter, StdStreamWriter, TextWriter


class LogTarget(IntFlag):
    """Where a log message goes."""

    STDOUT = 1
    STDERR = 2
    FILE = 4
    STDOUT_AND_STDERR = STDOUT | STDERR
    FILE_AND_STDOUT = FILE | STDOUT
    FILE_AND_STDERR = FILE | STDERR
    ALL = STDOUT | STDERR | FILE


_DIRECTIVE = re.compile(
    r"%(?:(?P<percent>%)|(?P<pos>\d+)%"
    r"|(?P<flags>[-+ 0#]*)(?P<width>\d*)(?:\.(?P<prec>\d+))?(?P<conv>[diuxXoeEfFgGcs])"
    r"|(?P<bad>))"
)


def _convert(value: object, flags: str, width: str, prec: str | None, conv: str) -> str:
    conv = "d" if conv in "iu" else conv
    spec = "%" + flags + width + (f".{prec}" if prec is not None else "") + conv
    try:
        return spec % (value,)
    except (TypeError, ValueError):
        return ("%" + ("-" if "-" in flags else "") + width + "s") % (str(value),)


def format_message(fmt: str, *args: object) -> str:
    """Format ``fmt`` with printf-style (``%s``) or positional (``%1%``) directives.

    Raises ValueError on a malformed format or a wrong number of arguments.
    """
    pieces: list[str | tuple] = []
    pos = 0
    sequential = 0
    max_index = 0
    for match in _DIRECTIVE.finditer(fmt):
        pieces.append(fmt[pos:match.start()])
        pos = match.end()
        if match.group("percent"):
            pieces.append("%")
        elif match.group("pos") is not None:
            index = int(match.group("pos"))
            if index < 1:
                raise ValueError(f"Invalid positional directive in format: {fmt!r}")
            max_index = max(max_index, index)
            pieces.append(("pos", index))
        elif match.group("conv"):
            pieces.append(("seq", sequential, match.group("flags"), match.group("width"),
                           match.group("prec"), match.group("conv")))
            sequential += 1
        else:
            raise ValueError(f"Bad format string: {fmt!r}")
    pieces.append(fmt[pos:])

    if sequential and max_index:
        raise ValueError(f"Format mixes positional and sequential directives: {fmt!r}")
    expected = sequential or max_index
    if len(args) < expected:
        raise ValueError(f"Too few arguments for format {fmt!r}: {len(args)} < {expected}")
    if len(args) > expected:
        raise ValueError(f"Too many arguments for format {fmt!r}: {len(args)} > {expected}")

    out = []
    for piece in pieces:
        if isinstance(piece, str):
            out.append(piece)
        elif piece[0] == "pos":
            out.append(str(args[piece[1] - 1]))
        else:
            _, index, flags, width, prec, conv = piece
            out.append(_convert(args[index], flags, width, prec, conv))
    return "".join(out)


def last_error() -> str:
    """Describe the error currently being handled, or the empty-error text."""
    exc = sys.exc_info()[1]
    if exc is None:
        return os.strerror(0)
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


class Log:
    """Dispatches formatted messages to stdout, stderr and a log file."""

    def __init__(self) -> None:
        self.stdout_writer: TextWriter = StdStreamWriter(True)
        self.stderr_writer: TextWriter = StdStreamWriter(False)
        self.file_writer: TextWriter | None = None
        self.log_filepath = Path("logs")

    def set_log_filepath(self, filepath: str | os.PathLike[str]) -> None:
        """Set the directory for log files; only allowed before the file is opened."""
        if self.file_writer is not None:
            raise RuntimeError("Cannot set log filepath after having already opened the log file")
        self.log_filepath = Path(filepath)

    def open(self) -> None:
        """Open the log file if it is not open yet."""
        if self.file_writer is None:
            name = datetime.now().strftime("%Y-%m-%d_%H-%M-%S") + ".log"
            self.file_writer = FileWriter(self.log_filepath / name)

    def set_writer(self, writer: TextWriter | None, target: LogTarget) -> None:
        """Use ``writer`` for the given targets; ``None`` restores the default."""
        if target & LogTarget.STDOUT:
            self.stdout_writer = writer if writer is not None else StdStreamWriter(True)
        if target & LogTarget.STDERR:
            self.stderr_writer = writer if writer is not None else StdStreamWriter(False)
        if target & LogTarget.FILE:
            self.file_writer = writer

    def flush(self, txt: str, target: LogTarget, color: int = 0) -> None:
        """Send already formatted text to the given targets."""
        if target & LogTarget.STDOUT:
            self.stdout_writer.write_text(txt, color)
        if target & LogTarget.STDERR:
            self.stderr_writer.write_text(txt, color)
        if target & LogTarget.FILE:
            self.open()
            assert self.file_writer is not None
            self.file_writer.write_text(txt, color)

    def write(self, fmt: str, *args: object, target: LogTarget = LogTarget.FILE_AND_STDOUT) -> None:
        """Format and write a message; empty messages are dropped."""
        self.write_colored(fmt, 0, *args, target=target)

    def write_colored(self, fmt: str, color: int, *args: object,
                      target: LogTarget = LogTarget.FILE_AND_STDOUT) -> None:
        """Format and write a message in ``color``."""
        msg = format_message(fmt, *args)
        if msg:
            self.flush(msg, target, color)

    def write_to_file(self, fmt: str, *args: object) -> None:
        """Format and write a message to the log file only."""
        self.write(fmt, *args, target=LogTarget.FILE)

    def write_last_error(self, text: str) -> None:
        """Write ``text`` followed by the description of the current error."""
        self.write("%s: %s\n", text, last_error())


@functools.lru_cache(maxsize=None)
def get_log() -> Log:
    """Return the shared log instance."""
    return Log()


EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def fatal_error(msg: str, log: Log | None = None) -> int:
    """Log ``msg`` as a fatal error and return the failure exit code."""
    (log or get_log()).write("\n\nFATAL ERROR: %1%\n", msg)
    return EXIT_FAILURE


def error(msg: str, log: Log | None = None) -> int:
    """Log ``msg`` as an error and return the failure exit code."""
    (log or get_log()).write("\n\nERROR: %1%\n", msg)
    return EXIT_FAILURE


def warning(msg: str, log: Log | None = None) -> int:
    """Log ``msg`` as a warning and return the success exit code."""
    (log or get_log()).write("\n\nWARNING: %1%\n", msg)
    return EXIT_SUCCESS