"""Length-prefixed network messages and a queue to send and receive them."""

from __future__ import annotations

import contextlib
import select
import socket
import struct
import time
from collections import deque
from typing import Callable, Optional

from rttrutil.log import Log, get_log

_HEADER = struct.Struct("<Hi")
HEADER_SIZE = _HEADER.size
MAX_MESSAGE_SIZE = 64 * 1024
MAX_INCOMPLETE_TRIES = 120
_POLL_INTERVAL = 0.001


class MessageError(Exception):
    """Raised when a message cannot be sent or received."""


class Message:
    """A network message identified by ``msg_id``; subclasses add a payload."""

    def __init__(self, msg_id: int) -> None:
        self.msg_id = msg_id

    @classmethod
    def create(cls, msg_id: int) -> Message:
        """Create an empty message of this kind."""
        return cls(msg_id)

    def serialize(self) -> bytes:
        """Return the payload bytes."""
        return b""

    def deserialize(self, data: bytes) -> None:
        """Load the payload from ``data``."""

    def clone(self) -> Message:
        """Return an independent copy made through serialisation."""
        msg = self.create(self.msg_id)
        msg.deserialize(self.serialize())
        return msg


def encode_header(msg_id: int, length: int) -> bytes:
    """Pack the message id and payload length (little endian)."""
    try:
        return _HEADER.pack(msg_id, length)
    except struct.error as exc:
        raise ValueError(f"Invalid header values: id={msg_id}, length={length}") from exc


def decode_header(data: bytes) -> tuple[int, int]:
    """Unpack ``(msg_id, length)`` from the first header bytes of ``data``."""
    try:
        msg_id, length = _HEADER.unpack_from(data)
    except struct.error as exc:
        raise MessageError("Incomplete message header") from exc
    if length < 0:
        raise MessageError("Integer overflow during recv of message")
    return msg_id, length


CreateMsgFunction = Callable[[int], Optional[Message]]


def _peek_available(sock: socket.socket, count: int, deadline: float) -> bytes | None:
    """Wait until ``count`` bytes can be read; return them (unread) or None on timeout."""
    while True:
        remaining = max(0.0, deadline - time.monotonic())
        ready, _, _ = select.select([sock], [], [], remaining)
        if not ready:
            return None
        available = sock.recv(count, socket.MSG_PEEK)
        if not available:
            raise MessageError("Connection closed by peer")
        if len(available) >= count:
            return available
        if remaining <= 0:
            return None
        time.sleep(min(remaining, _POLL_INTERVAL))


def _read_exact(sock: socket.socket, count: int) -> bytes:
    buf = bytearray()
    while len(buf) < count:
        chunk = sock.recv(count - len(buf))
        if not chunk:
            raise MessageError(f"Only got {len(buf)} bytes instead of {count}")
        buf += chunk
    return bytes(buf)


class MessageHandler:
    """Sends messages and receives them, creating instances with ``create_msg``."""

    def __init__(self, create_msg: CreateMsgFunction, log: Log | None = None) -> None:
        self.create_msg = create_msg
        self.log = log
        self._incomplete = 0

    @property
    def _logger(self) -> Log:
        return self.log if self.log is not None else get_log()

    def send(self, sock: socket.socket, msg: Message) -> int:
        """Send ``msg`` and return the number of bytes written."""
        payload = msg.serialize()
        total = HEADER_SIZE + len(payload)
        if total > MAX_MESSAGE_SIZE:
            raise MessageError(
                f"Message with length {total} exceeds maximum of {MAX_MESSAGE_SIZE}"
            )
        data = encode_header(msg.msg_id, len(payload)) + payload
        try:
            sock.sendall(data)
        except OSError as exc:
            raise MessageError(f"Sending failed: {exc}") from exc
        return total

    def recv(self, sock: socket.socket, timeout_ms: int = 0) -> Message | None:
        """Receive one message, or return None if no complete message arrived in time."""
        deadline = time.monotonic() + timeout_ms / 1000
        try:
            head = _peek_available(sock, HEADER_SIZE, deadline)
            if head is None:
                return None
            msg_id, length = decode_header(head)
            total = HEADER_SIZE + length
            if _peek_available(sock, total, deadline) is None:
                self._incomplete += 1
                if self._incomplete >= MAX_INCOMPLETE_TRIES:
                    raise MessageError("Timed out waiting for the rest of a message")
                return None
            self._incomplete = 0
            data = _read_exact(sock, total)
        except OSError as exc:
            raise MessageError(f"Receiving failed: {exc}") from exc
        msg = self.create_msg(msg_id)
        if msg is None:
            raise MessageError(f"Message with id {msg_id} couldn't be created")
        msg.deserialize(data[HEADER_SIZE:])
        return msg


class MessageQueue(MessageHandler):
    """A FIFO of messages that can be flushed to or filled from a socket."""

    def __init__(self, create_msg: CreateMsgFunction, log: Log | None = None) -> None:
        super().__init__(create_msg, log)
        self._messages: deque[Message] = deque()

    def clear(self) -> None:
        """Remove all queued messages."""
        self._messages.clear()

    def push(self, message: Message) -> None:
        """Append ``message`` to the queue."""
        self._messages.append(message)

    def peek(self) -> Message | None:
        """Return the first message without removing it, or None."""
        return self._messages[0] if self._messages else None

    def pop(self) -> Message | None:
        """Remove and return the first message, or None."""
        return self._messages.popleft() if self._messages else None

    def recv(self, sock: socket.socket, timeout_ms: int = 0) -> int:
        """Receive one message into the queue; return 1 if one arrived, else 0."""
        msg = super().recv(sock, timeout_ms)
        if msg is None:
            return 0
        self.push(msg)
        return 1

    def recv_all(self, sock: socket.socket, timeout_ms: int = 0) -> int:
        """Receive a first message, waiting up to the timeout, then all that are ready."""
        result = self.recv(sock, timeout_ms)
        if result > 0:
            with contextlib.suppress(MessageError):
                while self.recv(sock) > 0:
                    result += 1
        return result

    def flush(self, sock: socket.socket) -> bool:
        """Send every queued message."""
        return self.send(sock, len(self._messages), None)

    def send(self, sock: socket.socket, max_count: int, size_limit: int | None = None) -> bool:
        """Send queued messages; stop after one whose size exceeds ``size_limit``."""
        if sock.fileno() < 0:
            return False
        count = 0
        while count <= max_count and self._messages:
            msg = self._messages[0]
            if msg.msg_id > 0:
                try:
                    sent = MessageHandler.send(self, sock, msg)
                except MessageError:
                    self._logger.write("Sending Message to server failed\n")
                    return False
                if size_limit is not None and sent > size_limit:
                    self.pop()
                    break
            self.pop()
            count += 1
        return True

    def __len__(self) -> int:
        return len(self._messages)