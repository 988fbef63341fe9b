"""Helpers for UTF-8 validation and conversion from Windows-1252 text."""

from __future__ import annotations


def _high_ansi_char(byte: int) -> str:
    # Bytes undefined in Windows-1252 map to the code point of the same value.
    try:
        return bytes([byte]).decode("cp1252")
    except UnicodeDecodeError:
        return chr(byte)


_HIGH_ANSI_TO_UNICODE = tuple(_high_ansi_char(b) for b in range(0x80, 0x100))


def utf8_to_32(data: bytes) -> str:
    """Decode UTF-8 bytes into code points; invalid sequences become U+FFFD."""
    return bytes(data).decode("utf-8", errors="replace")


def utf32_to_8(text: str) -> bytes:
    """Encode code points as UTF-8; code points that cannot be encoded become U+FFFD."""
    cleaned = "".join("\ufffd" if 0xD800 <= ord(c) <= 0xDFFF else c for c in text)
    return cleaned.encode("utf-8")


def find_invalid_utf8(data: bytes) -> int:
    """Return the offset of the first invalid or incomplete sequence, or ``len(data)``."""
    data = bytes(data)
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as exc:
        return exc.start
    return len(data)


def is_valid_utf8(data: bytes) -> bool:
    """Tell whether ``data`` is entirely valid UTF-8."""
    data = bytes(data)
    return find_invalid_utf8(data) == len(data)


def ansi_to_utf8(data: bytes) -> bytes:
    """Convert Windows-1252 bytes to UTF-8; data that already is UTF-8 is kept."""
    data = bytes(data)
    if is_valid_utf8(data):
        return data
    text = "".join(chr(b) if b < 0x80 else _HIGH_ANSI_TO_UNICODE[b - 0x80] for b in data)
    return text.encode("utf-8")