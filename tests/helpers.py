"""Helpers for driving transports over real pipes in tests."""

from __future__ import annotations

import asyncio
import os


def read_exactly(fd: int, size: int) -> bytes:
    data = b""
    while len(data) < size:
        chunk = os.read(fd, size - len(data))
        if not chunk:
            break
        data += chunk
    return data


async def take(stream, count: int, timeout: float = 2.0) -> list[bytes]:
    async def _take() -> list[bytes]:
        out: list[bytes] = []
        async for message in stream:
            out.append(message)
            if len(out) == count:
                break
        return out

    return await asyncio.wait_for(_take(), timeout=timeout)


async def drain(stream, timeout: float = 2.0) -> list[bytes]:
    async def _drain() -> list[bytes]:
        return [message async for message in stream]

    return await asyncio.wait_for(_drain(), timeout=timeout)
