from __future__ import annotations

import abc
import logging
from collections.abc import AsyncIterator


class Transport(abc.ABC):
    """Abstract point-to-point transport carrying opaque message blobs."""

    logger: logging.Logger

    @abc.abstractmethod
    async def connect(self) -> None:
        """Establish the transport. Calling it again while connected is a no-op."""

    @abc.abstractmethod
    async def disconnect(self) -> None:
        """Stop delivering messages. Calling it again is a no-op."""

    @abc.abstractmethod
    async def send(self, message: bytes) -> None:
        """Deliver one message to the peer."""

    @abc.abstractmethod
    def receive(self) -> AsyncIterator[bytes]:
        """Return the sequence of messages received from the peer."""

    async def aclose(self) -> None:
        """Close transport resources."""
        await self.disconnect()

    async def __aenter__(self) -> Transport:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


class MessageFramer(abc.ABC):
    """Abstract stream framer turning a byte stream into messages and back."""

    @abc.abstractmethod
    def encode(self, message: bytes) -> bytes: ...

    @abc.abstractmethod
    def feed(self, data: bytes) -> list[bytes]: ...
