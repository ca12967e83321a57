"""uistate - UI 可见性/状态注册表

跟踪单一的“当前 UI 状态”，流转时显示/隐藏已注册组件，
并切换平台开关（系统 overlay、触控按钮、移动控制）。
"""

# state 必须最先导入（hooks / components 依赖 state.types）
from .state import (
    ErrorKind,
    HookCategory,
    OverlayConfig,
    StateDefinition,
    TransitionOptions,
    TransitionResult,
    UIStateManager,
)
from .hooks import HookDispatcher, Signal
from .platform import InputCapability, MemoryPlatform, OverlayCapability

__version__ = "0.1.0"

__all__ = [
    "UIStateManager",
    "StateDefinition",
    "OverlayConfig",
    "TransitionOptions",
    "TransitionResult",
    "ErrorKind",
    "HookCategory",
    "HookDispatcher",
    "Signal",
    "OverlayCapability",
    "InputCapability",
    "MemoryPlatform",
]
