from __future__ import annotations

import asyncio
from dataclasses import dataclass


@dataclass(frozen=True)
class _Terminal:
    error: BaseException | None = None


class MessageStream:
    """Single-producer, single-consumer message channel with a terminal signal.

    Messages already queued are delivered before the terminal signal. The
    terminal signal (plain completion, or the error passed to ``finish``) is
    observed exactly once; iterating afterwards ends immediately.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[bytes | _Terminal] = asyncio.Queue()
        self._finished = False
        self._exhausted = False

    @property
    def finished(self) -> bool:
        return self._finished

    def put(self, message: bytes) -> None:
        if self._finished:
            return
        self._queue.put_nowait(message)

    def finish(self, error: BaseException | None = None) -> bool:
        """Finalize the stream. Returns False if it was already finalized."""
        if self._finished:
            return False
        self._finished = True
        self._queue.put_nowait(_Terminal(error))
        return True

    def __aiter__(self) -> MessageStream:
        return self

    async def __anext__(self) -> bytes:
        if self._exhausted:
            raise StopAsyncIteration
        item = await self._queue.get()
        if isinstance(item, _Terminal):
            self._exhausted = True
            if item.error is not None:
                raise item.error
            raise StopAsyncIteration
        return item
