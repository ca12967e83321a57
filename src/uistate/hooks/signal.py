"""Signal - 推送式状态变更通知

init() 会把 StateChange hook 接到 UIStateManager.state_changed 上，
偏好订阅而不是注册 hook 的调用方使用它：

    conn = manager.state_changed.connect(lambda new, old: ...)
    conn.disconnect()

    async for new_state, old_state in manager.state_changed.stream():
        ...
"""

import asyncio
import inspect
from collections.abc import AsyncIterator, Callable
from typing import Any

from ..config import METRICS_ENABLED, SIGNAL_STREAM_MAX_SIZE
from ..telemetry import get_logger, metrics

logger = get_logger(__name__)

SignalCallback = Callable[..., Any]


class Connection:
    """Signal 订阅句柄"""

    def __init__(self, signal: "Signal", callback: SignalCallback):
        self._signal = signal
        self.callback = callback
        self.connected = True

    def disconnect(self) -> None:
        if self.connected:
            self.connected = False
            self._signal._disconnect(self)


class Signal:
    """简单的事件信号

    - connect: 订阅回调（同步回调直接调用，async 回调包成 task）
    - stream: 以 async iterator 方式消费
    - wait: 等待下一次触发
    """

    def __init__(self, name: str = "signal", stream_max_size: int = SIGNAL_STREAM_MAX_SIZE):
        self.name = name
        self._stream_max_size = stream_max_size
        self._connections: list[Connection] = []
        self._queues: list[asyncio.Queue] = []
        self._tasks: set[asyncio.Task] = set()

    def connect(self, callback: SignalCallback) -> Connection:
        """订阅回调"""
        connection = Connection(self, callback)
        self._connections.append(connection)
        return connection

    def _disconnect(self, connection: Connection) -> None:
        if connection in self._connections:
            self._connections.remove(connection)

    def disconnect_all(self) -> None:
        """断开所有订阅"""
        for connection in list(self._connections):
            connection.disconnect()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def fire(self, *args: Any) -> None:
        """触发信号

        Args:
            *args: 透传给订阅者的参数
        """
        for connection in list(self._connections):
            result = connection.callback(*args)
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)

        for queue in list(self._queues):
            self._enqueue(queue, args)

    def _enqueue(self, queue: asyncio.Queue, args: tuple) -> None:
        """写入 stream 缓冲，满时丢弃最旧事件"""
        if queue.full():
            queue.get_nowait()
            logger.warning(f"[Signal] {self.name} stream full, dropped oldest event")
            if METRICS_ENABLED:
                metrics.inc("signal.dropped", {"signal": self.name})
        queue.put_nowait(args)

    async def wait(self) -> tuple:
        """等待下一次触发，返回触发参数"""
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def _resolve(*args: Any) -> None:
            if not future.done():
                future.set_result(args)

        connection = self.connect(_resolve)
        try:
            return await future
        finally:
            connection.disconnect()

    async def stream(self) -> AsyncIterator[tuple]:
        """以 async iterator 消费触发参数

        迭代器退出时自动取消订阅。缓冲满时丢弃最旧事件，
        读取过慢的订阅者不会无限占用内存。
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._stream_max_size)
        self._queues.append(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._queues.remove(queue)
            logger.debug(f"[Signal] {self.name} stream closed")
