"""State 模块数据类型定义

包含：
- ErrorKind: 非致命错误类型
- HookCategory: Hook 事件类别
- OverlayConfig: 系统 overlay 显示/隐藏配置
- StateDefinition: UI 状态定义
- TransitionOptions: 状态流转参数
- TransitionResult: (success, reason) 结果
- ManagerState: 当前/上一个/默认状态指针
- TypedDict definitions for dict structures
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, TypedDict

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """错误类型枚举

    全部为非致命错误，通过 (success, reason) 或 warning 上报。
    """

    STATE_NOT_FOUND = "StateNotFound"
    COMPONENT_NOT_FOUND = "ComponentNotFound"
    DUPLICATE_REGISTRATION = "DuplicateRegistration"
    TRANSITION_BLOCKED = "TransitionBlocked"
    NO_DEFAULT_REGISTERED = "NoDefaultRegistered"
    UNKNOWN_HOOK_CATEGORY = "UnknownHookCategory"
    MISSING_COMPONENT_CAPABILITY = "MissingComponentCapability"


class HookCategory(Enum):
    """Hook 类别

    回调参数顺序:
    - STATE_CHANGE / AFTER_STATE_CHANGE / CORE_GUI_CHANGE: (new_state, old_state)
    - BEFORE_STATE_CHANGE: (old_state, new_state)
    """

    STATE_CHANGE = "StateChange"
    BEFORE_STATE_CHANGE = "BeforeStateChange"
    AFTER_STATE_CHANGE = "AfterStateChange"
    CORE_GUI_CHANGE = "CoreGuiChange"

    @classmethod
    def parse(cls, value: "HookCategory | str") -> "HookCategory | None":
        """字符串 -> HookCategory，未知返回 None"""
        if isinstance(value, HookCategory):
            return value
        for category in cls:
            if value in (category.value, category.name):
                return category
        return None


# TypedDict definitions for dict structures


class ManagerSnapshot(TypedDict):
    """UIStateManager.snapshot() return type.

    Used by render/console.py and web/server.py.
    """

    current_state: str | None
    previous_state: str | None
    default_state: str | None
    states: list[str]
    components: list[str]
    pending_hides: int


# 原始 PascalCase 键 -> 字段名
_KEY_ALIASES = {
    "Hides": "hides",
    "Shows": "shows",
    "CoreGui": "overlay",
    "core_gui": "overlay",
    "TouchControlsEnabled": "touch_controls_enabled",
    "MovementEnabled": "movement_enabled",
    "Blocks": "blocks",
    "Whitelist": "whitelist",
}


def _as_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass
class OverlayConfig:
    """系统 overlay 配置

    Attributes:
        shows: 需要显示的 overlay 元素（或 ["*"]）
        hides: 需要隐藏的 overlay 元素（或 ["*"]）
    """

    shows: list[str] | None = None
    hides: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OverlayConfig":
        return cls(
            shows=_as_list(data.get("shows", data.get("Shows"))),
            hides=_as_list(data.get("hides", data.get("Hides"))),
        )


@dataclass
class StateDefinition:
    """UI 状态定义

    Attributes:
        hides: 需要隐藏的组件 pattern（或 ["*"] 表示所有未显示组件）
        shows: 需要显示的组件 pattern（或 ["*"] 表示所有组件）
        overlay: 系统 overlay 配置（可选）
        touch_controls_enabled: None=不变, True/False=设置
        movement_enabled: None=默认启用, True/False=设置
        blocks: 禁止从本状态流转到的目标状态（或 ["*"]），force 可绕过
        whitelist: 额外允许单独 show 的组件名
    """

    hides: list[str] = field(default_factory=list)
    shows: list[str] = field(default_factory=list)
    overlay: OverlayConfig | None = None
    touch_controls_enabled: bool | None = None
    movement_enabled: bool | None = None
    blocks: list[str] | None = None
    whitelist: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StateDefinition":
        """从 dict 构造，兼容 snake_case 与 PascalCase 键

        Args:
            data: 状态配置，例如 {"Shows": ["A"], "Hides": ["*"]}

        Returns:
            StateDefinition 实例
        """
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                logger.debug(f"[StateDefinition] Ignoring unknown key: {key}")
                continue
            values[name] = value

        overlay = values.get("overlay")
        if isinstance(overlay, Mapping):
            values["overlay"] = OverlayConfig.from_dict(overlay)

        for name in ("hides", "shows"):
            values[name] = _as_list(values.get(name)) or []
        for name in ("blocks", "whitelist"):
            if name in values:
                values[name] = _as_list(values[name])

        return cls(**values)


@dataclass
class TransitionOptions:
    """状态流转参数

    Attributes:
        force: 忽略当前状态的 blocks
        properties: 透传给被显示组件的数据
    """

    force: bool = False
    properties: Any = None

    @classmethod
    def coerce(cls, options: "TransitionOptions | Mapping[str, Any] | None") -> "TransitionOptions":
        """None / dict / TransitionOptions -> TransitionOptions"""
        if options is None:
            return cls()
        if isinstance(options, TransitionOptions):
            return options
        return cls(
            force=bool(options.get("force", options.get("Force", False))),
            properties=options.get("properties", options.get("Properties")),
        )


class TransitionResult(NamedTuple):
    """(success, reason) 结果

    success 为 None 表示前置条件不满足（沿用 set_default /
    register_default_state 的返回约定），False 表示被拒绝。
    """

    success: bool | None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return bool(self.success)


@dataclass
class ManagerState:
    """管理器状态指针

    Attributes:
        current_state: 当前状态名，首次成功流转前为 None
        previous_state: 上一个状态名
        default_state: 默认状态名（set_default 使用）
        last_properties: 最近一次流转携带的 properties
    """

    current_state: str | None = None
    previous_state: str | None = None
    default_state: str | None = None
    last_properties: Any = None
