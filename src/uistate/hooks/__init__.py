"""Hook 系统 - 状态流转生命周期回调

模块结构：
- dispatcher: HookDispatcher 固定类别的有序回调
- signal: Signal 推送式通知（state_changed）
"""

from .dispatcher import HookCallback, HookDispatcher
from .signal import Connection, Signal

__all__ = [
    "HookCallback",
    "HookDispatcher",
    "Connection",
    "Signal",
]
