import asyncio

import pytest

from stdiolink.errors import ReadError
from stdiolink.transport.stream import MessageStream


async def collect(stream: MessageStream) -> list[bytes]:
    return [m async for m in stream]


@pytest.mark.asyncio
async def test_messages_delivered_in_order_before_completion():
    stream = MessageStream()
    stream.put(b"one")
    stream.put(b"two")
    assert stream.finish() is True
    assert await collect(stream) == [b"one", b"two"]


@pytest.mark.asyncio
async def test_finish_is_idempotent():
    stream = MessageStream()
    assert stream.finish() is True
    assert stream.finish() is False
    assert stream.finish(ReadError("late")) is False
    assert stream.finished
    assert await collect(stream) == []


@pytest.mark.asyncio
async def test_put_after_finish_is_dropped():
    stream = MessageStream()
    stream.finish()
    stream.put(b"ignored")
    assert await collect(stream) == []


@pytest.mark.asyncio
async def test_error_is_raised_once_then_stream_ends():
    stream = MessageStream()
    stream.put(b"before")
    err = ReadError("read failed", errno=5)
    stream.finish(err)

    it = stream.__aiter__()
    assert await it.__anext__() == b"before"
    with pytest.raises(ReadError) as excinfo:
        await it.__anext__()
    assert excinfo.value is err
    assert await collect(stream) == []


@pytest.mark.asyncio
async def test_second_iteration_of_exhausted_stream_is_empty():
    stream = MessageStream()
    stream.put(b"x")
    stream.finish()
    assert await collect(stream) == [b"x"]
    assert await collect(stream) == []


@pytest.mark.asyncio
async def test_waiting_consumer_is_woken_by_finish():
    stream = MessageStream()
    consumer = asyncio.create_task(collect(stream))
    await asyncio.sleep(0.01)
    assert not consumer.done()
    stream.put(b"late")
    stream.finish()
    assert await asyncio.wait_for(consumer, timeout=1.0) == [b"late"]
