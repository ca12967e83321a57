"""Signal 测试"""

import asyncio

import pytest

from uistate.hooks.signal import Signal
from uistate.telemetry import metrics


@pytest.fixture
def signal():
    return Signal("test")


class TestConnect:
    """订阅测试"""

    def test_fire_calls_connected(self, signal):
        received = []
        signal.connect(lambda *args: received.append(args))

        signal.fire("B", "A")

        assert received == [("B", "A")]

    def test_disconnect(self, signal):
        received = []
        connection = signal.connect(lambda *args: received.append(args))

        connection.disconnect()
        signal.fire("B", "A")

        assert received == []
        assert connection.connected is False
        assert signal.connection_count == 0

    def test_disconnect_all(self, signal):
        signal.connect(lambda *args: None)
        signal.connect(lambda *args: None)

        signal.disconnect_all()

        assert signal.connection_count == 0

    async def test_async_callback_scheduled(self, signal):
        received = []

        async def callback(new, old):
            received.append(new)

        signal.connect(callback)
        signal.fire("B", "A")
        await asyncio.sleep(0)

        assert received == ["B"]


class TestAwait:
    """wait / stream 测试"""

    async def test_wait(self, signal):
        waiter = asyncio.create_task(signal.wait())
        await asyncio.sleep(0)

        signal.fire("B", "A")

        assert await waiter == ("B", "A")
        assert signal.connection_count == 0

    async def test_stream(self, signal):
        received = []

        async def consume():
            async for args in signal.stream():
                received.append(args)
                if len(received) == 2:
                    break

        consumer = asyncio.create_task(consume())
        await asyncio.sleep(0)

        signal.fire("A", None)
        signal.fire("B", "A")
        await asyncio.wait_for(consumer, timeout=1.0)

        assert received == [("A", None), ("B", "A")]

    async def test_stream_drops_oldest_when_full(self):
        """读取过慢时缓冲满，丢弃最旧事件"""
        small = Signal("small", stream_max_size=2)
        stream = small.stream()
        first = asyncio.create_task(anext(stream))
        await asyncio.sleep(0)

        for value in ("1", "2", "3"):
            small.fire(value)

        assert await first == ("2",)
        assert await anext(stream) == ("3",)
        assert metrics.get_counter("signal.dropped", {"signal": "small"}) == 1

        await stream.aclose()
