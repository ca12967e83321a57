"""StateRegistry - 状态定义存储

状态名 -> StateDefinition 的映射，只负责存取。
默认状态 / 当前状态的约束由 UIStateManager.unregister_state 处理。
"""

from collections.abc import Iterator, Mapping
from typing import Any

from ..telemetry import get_logger, report_warning
from .types import ErrorKind, StateDefinition

logger = get_logger(__name__)


class StateRegistry:
    """状态注册表

    Attributes:
        _states: {name: StateDefinition}，保持注册顺序
    """

    def __init__(self):
        self._states: dict[str, StateDefinition] = {}

    def register(self, name: str, definition: StateDefinition | Mapping[str, Any]) -> bool:
        """注册状态

        重复注册会被拒绝，已有定义保持不变。

        Args:
            name: 状态名
            definition: StateDefinition 或 dict 配置

        Returns:
            是否注册成功
        """
        if name in self._states:
            report_warning(
                logger, ErrorKind.DUPLICATE_REGISTRATION.value, f"UIState {name} already exists."
            )
            return False

        if not isinstance(definition, StateDefinition):
            definition = StateDefinition.from_dict(definition)

        self._states[name] = definition
        logger.debug(f"[StateRegistry] Registered state: {name}")
        return True

    def remove(self, name: str) -> StateDefinition | None:
        """移除状态（不做任何检查）"""
        definition = self._states.pop(name, None)
        if definition is not None:
            logger.debug(f"[StateRegistry] Removed state: {name}")
        return definition

    def get(self, name: str | None) -> StateDefinition | None:
        """获取状态定义"""
        if name is None:
            return None
        return self._states.get(name)

    def names(self) -> list[str]:
        """获取所有状态名（注册顺序）"""
        return list(self._states)

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._states)
