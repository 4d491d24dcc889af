from __future__ import annotations

from stdiolink.transport.base import MessageFramer

DELIMITER = b"\n"


class NewlineFramer(MessageFramer):
    """Newline-delimited framing (one JSON document or batch per line).

    Payloads must not contain an embedded newline; neither direction checks it.
    Blank lines on input are skipped rather than reported as empty messages.
    """

    def __init__(self) -> None:
        self._pending = bytearray()

    @property
    def pending(self) -> bytes:
        """Bytes received that do not yet form a complete frame."""
        return bytes(self._pending)

    def encode(self, message: bytes) -> bytes:
        return bytes(message) + DELIMITER

    def feed(self, data: bytes) -> list[bytes]:
        self._pending += data
        messages: list[bytes] = []
        start = 0
        while True:
            index = self._pending.find(DELIMITER, start)
            if index < 0:
                break
            if index > start:
                messages.append(bytes(self._pending[start:index]))
            start = index + 1
        if start:
            del self._pending[:start]
        return messages
