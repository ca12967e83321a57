"""ComponentRegistry - 组件存储

组件名 -> 组件 handle 的映射，只负责存取与能力校验。
注册后的自动显示由 UIStateManager.register_component 处理。
"""

from collections.abc import Iterator

from ..state.types import ErrorKind
from ..telemetry import get_logger, report_warning
from .base import missing_capabilities

logger = get_logger(__name__)


class ComponentRegistry:
    """组件注册表

    Attributes:
        _components: {name: handle}，保持注册顺序
    """

    def __init__(self):
        self._components: dict[str, object] = {}

    def register(self, name: str, handle: object) -> bool:
        """注册组件

        缺少 show/hide 只警告，不阻止注册。

        Args:
            name: 组件名
            handle: 组件对象

        Returns:
            是否注册成功（重复注册返回 False）
        """
        if name in self._components:
            report_warning(
                logger,
                ErrorKind.DUPLICATE_REGISTRATION.value,
                f"UIComponent {name} already exists.",
            )
            return False

        for method in missing_capabilities(handle):
            report_warning(
                logger,
                ErrorKind.MISSING_COMPONENT_CAPABILITY.value,
                f"UIComponent {name} is missing method {method}.",
            )

        self._components[name] = handle
        logger.debug(f"[ComponentRegistry] Registered component: {name}")
        return True

    def remove(self, name: str) -> object | None:
        """移除组件（不做任何检查）"""
        return self._components.pop(name, None)

    def get(self, name: str) -> object | None:
        """获取组件 handle"""
        return self._components.get(name)

    def names(self) -> list[str]:
        """获取所有组件名（注册顺序）"""
        return list(self._components)

    def items(self) -> list[tuple[str, object]]:
        """(name, handle) 快照，迭代期间注册表可被修改"""
        return list(self._components.items())

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._components))

    def __len__(self) -> int:
        return len(self._components)
