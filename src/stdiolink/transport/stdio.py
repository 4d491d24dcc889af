from __future__ import annotations

import asyncio
import contextlib
import enum
import errno
import logging
import os
from typing import Any

from stdiolink.config import TransportConfig
from stdiolink.errors import (
    NotConnectedError,
    ReadError,
    TransportClosedError,
    TransportConfigurationError,
    TransportError,
    WriteError,
)
from stdiolink.transport.base import Transport
from stdiolink.transport.framing import NewlineFramer
from stdiolink.transport.nonblocking import (
    fileno_of,
    is_transient,
    restore_flags,
    set_non_blocking,
)
from stdiolink.transport.stream import MessageStream

STDIN_FILENO = 0
STDOUT_FILENO = 1


class TransportState(enum.Enum):
    NEW = "new"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class StdioTransport(Transport):
    """Newline-delimited message transport over a pair of byte streams.

    Reads from ``stdin`` and writes to ``stdout`` (descriptors or objects with
    ``fileno()``; the process's standard streams by default). Both descriptors
    are switched to non-blocking mode on ``connect()`` and polled: a would-block
    condition is retried after ``config.retry_delay`` seconds.

    All state lives on the event loop thread. The pending buffer is owned by
    the read loop task; connection state changes happen under ``_state_lock``
    and writes are serialized under ``_write_lock`` so frames never interleave.

    The transport does not close the descriptors; the caller owns them.
    Disconnection is terminal: build a new transport to reconnect.
    """

    def __init__(
        self,
        stdin: Any = STDIN_FILENO,
        stdout: Any = STDOUT_FILENO,
        logger: logging.Logger | None = None,
        config: TransportConfig | None = None,
    ) -> None:
        self._input = fileno_of(stdin)
        self._output = fileno_of(stdout)
        self.logger = logger or logging.getLogger(__name__)
        self._config = config or TransportConfig()
        self._state = TransportState.NEW
        self._state_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._framer = NewlineFramer()
        self._stream = MessageStream()
        self._read_task: asyncio.Task[None] | None = None

    @property
    def state(self) -> TransportState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is TransportState.CONNECTED

    async def connect(self) -> None:
        async with self._state_lock:
            if self._state is TransportState.CONNECTED:
                return
            if self._state is TransportState.DISCONNECTED:
                raise TransportClosedError(
                    "Transport was disconnected; create a new transport to reconnect"
                )

            input_flags = set_non_blocking(self._input)
            try:
                set_non_blocking(self._output)
            except TransportConfigurationError:
                # Leave the input as we found it when connect() fails
                with contextlib.suppress(TransportConfigurationError):
                    restore_flags(self._input, input_flags)
                raise

            self._state = TransportState.CONNECTED
            self.logger.info("Transport connected successfully")
            task = asyncio.create_task(self._read_loop(), name=f"stdiolink-read-{self._input}")
            # A task cancelled before its first step never reaches the loop's finally
            task.add_done_callback(lambda _: self._stream.finish())
            self._read_task = task

    async def disconnect(self) -> None:
        async with self._state_lock:
            if self._state is not TransportState.CONNECTED:
                return
            self._state = TransportState.DISCONNECTED
            self._stream.finish()
            self.logger.info("Transport disconnected")

    async def aclose(self) -> None:
        """Disconnect and wait for the read loop to wind down."""
        async with self._state_lock:
            if self._state is TransportState.NEW:
                # Never connected: still release anyone waiting on receive()
                self._state = TransportState.DISCONNECTED
                self._stream.finish()
        await self.disconnect()
        task = self._read_task
        if task is not None and task is not asyncio.current_task():
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def send(self, message: bytes) -> None:
        """Send one message followed by a newline.

        The message must not contain a newline itself; that is not checked.
        Blocks (asynchronously) until the whole frame is written or a write
        fails. Cancelling the caller does not abandon a started frame: it is
        still written out in full before the next send can start.
        """
        if self._state is not TransportState.CONNECTED:
            raise NotConnectedError()
        if isinstance(message, str):
            raise TypeError("message must be bytes, not str")

        frame = memoryview(self._framer.encode(message))
        await self._write_lock.acquire()
        # The writer task owns the lock from here; it is released only once the
        # frame is fully written or has failed, even if this caller is cancelled.
        writer = asyncio.create_task(self._write_frame(frame))
        writer.add_done_callback(lambda _: self._write_lock.release())
        try:
            await asyncio.shield(writer)
        except asyncio.CancelledError:
            writer.add_done_callback(self._report_abandoned_write)
            raise

    async def _write_frame(self, frame: memoryview) -> None:
        while frame:
            try:
                written = os.write(self._output, frame)
            except OSError as e:
                if is_transient(e):
                    await asyncio.sleep(self._config.retry_delay)
                    continue
                if e.errno == errno.ENOTCONN:
                    raise NotConnectedError(f"write failed: {os.strerror(e.errno)}") from e
                raise WriteError.from_os_error(e, "write") from e
            if written > 0:
                frame = frame[written:]
            else:
                await asyncio.sleep(self._config.retry_delay)

    def _report_abandoned_write(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.warning("Write failed after send was cancelled: %s", exc)

    def receive(self) -> MessageStream:
        """Return the stream of received messages.

        There is one stream per transport; it ends on EOF or disconnect and
        raises ``ReadError`` once if reading failed.
        """
        return self._stream

    async def _read_loop(self) -> None:
        error: TransportError | None = None
        try:
            while self._state is TransportState.CONNECTED:
                try:
                    chunk = os.read(self._input, self._config.read_chunk_size)
                except OSError as e:
                    if is_transient(e):
                        await asyncio.sleep(self._config.retry_delay)
                        continue
                    error = ReadError.from_os_error(e, "read")
                    error.__cause__ = e
                    if not _cancelling():
                        self.logger.error("Read error occurred: %s", e)
                    break

                if not chunk:
                    self.logger.info("EOF received")
                    break

                for message in self._framer.feed(chunk):
                    self.logger.debug("Message received (size=%d)", len(message))
                    self._stream.put(message)
                # Yield so a busy input cannot starve the loop
                await asyncio.sleep(0)
        finally:
            self._stream.finish(error)


def _cancelling() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0
