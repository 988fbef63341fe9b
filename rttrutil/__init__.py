"""Log writers and logging, UTF-8 helpers, temporary files, IPv4 parsing and framed message queues."""

__version__ = "0.1.0"
__all__ = ["writers", "log", "utf8", "tmpfile", "ip", "messaging"]