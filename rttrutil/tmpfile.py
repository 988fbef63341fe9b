"""Temporary files and folders that remove themselves."""

from __future__ import annotations

import contextlib
import os
import secrets
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

MAX_TRIES = 50


def _unique_name() -> str:
    return "-".join(secrets.token_hex(2) for _ in range(4))


def unlink_file(path: str | os.PathLike[str]) -> None:
    """Remove ``path`` if it exists, ignoring failures."""
    if not os.path.exists(path):
        return
    with contextlib.suppress(OSError):
        os.unlink(path)


class TmpFile:
    """A freshly created, empty binary file that is deleted on close."""

    def __init__(self, ext: str = ".tmp", directory: str | os.PathLike[str] | None = None) -> None:
        self.path: Path | None = None
        self.stream: BinaryIO | None = None
        self._closed = False
        base = Path(directory) if directory is not None else Path(tempfile.gettempdir())
        for _ in range(MAX_TRIES):
            candidate = base / (_unique_name() + ext)
            try:
                self.stream = open(candidate, "xb")
            except OSError:
                continue
            self.path = candidate
            break

    def is_valid(self) -> bool:
        """Tell whether a file could be created."""
        return self.path is not None

    def close(self) -> None:
        """Close the stream and delete the file."""
        if not self.is_valid() or self._closed:
            return
        self._closed = True
        assert self.stream is not None and self.path is not None
        self.stream.close()
        unlink_file(self.path)

    def __enter__(self) -> TmpFile:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class TmpFolder:
    """A freshly created folder that is removed with its contents on cleanup."""

    def __init__(self, parent: str | os.PathLike[str] | None = None) -> None:
        base = Path(parent) if parent else Path(tempfile.gettempdir())
        for _ in range(MAX_TRIES):
            candidate = base / _unique_name()
            if candidate.exists():
                continue
            try:
                candidate.mkdir(parents=True)
            except OSError:
                continue
            self.path = candidate
            return
        raise RuntimeError("Can't create temporary folder")

    def cleanup(self) -> None:
        """Remove the folder and everything in it."""
        shutil.rmtree(self.path, ignore_errors=True)

    def __enter__(self) -> TmpFolder:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cleanup()