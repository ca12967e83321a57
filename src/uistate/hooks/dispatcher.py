"""HookDispatcher - 流转生命周期回调

固定 4 个类别（HookCategory），每个类别维护一个有序回调列表。
UIStateManager 在流转的固定节点同步调用 run()。

回调异常默认直接抛出，中止剩余流转步骤；
config.HOOK_ISOLATE_ERRORS 打开后逐个 catch 并记录日志。
"""

import inspect
from collections.abc import Callable
from typing import Any

from ..config import HOOK_ISOLATE_ERRORS, METRICS_ENABLED
from ..state.types import ErrorKind, HookCategory
from ..telemetry import get_logger, metrics, report_warning

logger = get_logger(__name__)

# 回调类型: (first_state, second_state) -> None | Awaitable
HookCallback = Callable[[str | None, str | None], Any]


class HookDispatcher:
    """Hook 分发器

    使用示例:
        hooks = HookDispatcher()
        hooks.register("StateChange", lambda new, old: print(new, old))
        await hooks.run(HookCategory.STATE_CHANGE, "Gameplay", None)
    """

    def __init__(self, isolate_errors: bool | None = None):
        """初始化

        Args:
            isolate_errors: 是否隔离回调异常，None 使用配置默认值
        """
        self._isolate_errors = HOOK_ISOLATE_ERRORS if isolate_errors is None else isolate_errors
        self._callbacks: dict[HookCategory, list[HookCallback]] = {
            category: [] for category in HookCategory
        }

    def register(self, category: HookCategory | str, callback: HookCallback) -> bool:
        """注册回调

        Args:
            category: HookCategory 或其字符串值（如 "StateChange"）
            callback: 回调函数（同步或异步）

        Returns:
            是否注册成功（未知类别返回 False）
        """
        parsed = HookCategory.parse(category)
        if parsed is None:
            report_warning(
                logger,
                ErrorKind.UNKNOWN_HOOK_CATEGORY.value,
                f"Unsupported event hook {category}",
            )
            return False

        self._callbacks[parsed].append(callback)
        return True

    def unregister(self, category: HookCategory | str, callback: HookCallback) -> bool:
        """取消注册回调"""
        parsed = HookCategory.parse(category)
        if parsed is None or callback not in self._callbacks[parsed]:
            return False
        self._callbacks[parsed].remove(callback)
        return True

    def count(self, category: HookCategory) -> int:
        """某类别已注册的回调数"""
        return len(self._callbacks[category])

    async def run(self, category: HookCategory, first: str | None, second: str | None) -> None:
        """按注册顺序调用回调

        Args:
            category: Hook 类别
            first: 第一个状态参数（BeforeStateChange 为旧状态，其余为新状态）
            second: 第二个状态参数
        """
        if METRICS_ENABLED:
            metrics.inc("hooks.calls", labels={"category": category.value})

        for callback in list(self._callbacks[category]):
            if not self._isolate_errors:
                await self._invoke(callback, first, second)
                continue
            try:
                await self._invoke(callback, first, second)
            except Exception as e:
                logger.error(f"[HookDispatcher] {category.value} callback failed: {e}")
                if METRICS_ENABLED:
                    metrics.inc("hooks.errors", labels={"category": category.value})

    @staticmethod
    async def _invoke(callback: HookCallback, first: str | None, second: str | None) -> None:
        result = callback(first, second)
        if inspect.isawaitable(result):
            await result
