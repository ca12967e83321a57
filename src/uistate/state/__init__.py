"""State 模块

提供状态管理的核心组件：
- types: 数据类型定义（StateDefinition, TransitionResult, HookCategory 等）
- predicates: 组件名匹配谓词库
- registry: StateRegistry
- manager: UIStateManager（状态流转引擎）
"""

from .predicates import (
    blocks_target,
    expand_group,
    has_wildcard,
    is_group_pattern,
    matches_group,
)
from .registry import StateRegistry
from .types import (
    ErrorKind,
    HookCategory,
    ManagerSnapshot,
    ManagerState,
    OverlayConfig,
    StateDefinition,
    TransitionOptions,
    TransitionResult,
)
from .manager import UIStateManager

__all__ = [
    # Types
    "ErrorKind",
    "HookCategory",
    "ManagerSnapshot",
    "ManagerState",
    "OverlayConfig",
    "StateDefinition",
    "TransitionOptions",
    "TransitionResult",
    # Predicates
    "blocks_target",
    "expand_group",
    "has_wildcard",
    "is_group_pattern",
    "matches_group",
    # Registry
    "StateRegistry",
    # Manager
    "UIStateManager",
]
