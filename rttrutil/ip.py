"""Parsing dotted IPv4 addresses."""

from __future__ import annotations

_DIGITS = "0123456789"


def _parse_byte(part: str) -> int:
    if not part or len(part) > 3:
        raise ValueError("Invalid input")
    if any(c not in _DIGITS for c in part):
        raise ValueError("Invalid char")
    value = int(part)
    if value > 255:
        raise ValueError("Out of range")
    return value


def string_to_ip(ip_str: str) -> int:
    """Convert a dotted IPv4 address into its 32-bit integer value."""
    result = 0
    parts = ip_str.split(".")
    try:
        for part in parts:
            result = (result << 8) + _parse_byte(part)
    except ValueError:
        raise ValueError(f"Not a valid IP: {ip_str}") from None
    if len(parts) != 4:
        raise ValueError(f"Not a valid IP or incomplete: {ip_str}")
    return result