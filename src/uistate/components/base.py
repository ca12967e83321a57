"""UIComponent 抽象接口

组件只需要提供两个能力：
- show(properties): 显示，可携带任意数据
- hide(): 隐藏

两者都可以是同步函数或 async 函数，由 UIStateManager 统一处理。
"""

import inspect
from typing import Any, Protocol, runtime_checkable

REQUIRED_CAPABILITIES = ("show", "hide")


@runtime_checkable
class UIComponent(Protocol):
    """UI 组件能力接口"""

    def show(self, properties: Any = None) -> Any: ...

    def hide(self) -> Any: ...


def missing_capabilities(handle: object) -> list[str]:
    """返回 handle 缺少的能力名

    Args:
        handle: 组件对象

    Returns:
        缺少的方法名列表，例如 ["hide"]
    """
    return [name for name in REQUIRED_CAPABILITIES if not callable(getattr(handle, name, None))]


async def call_capability(handle: object, name: str, *args: Any) -> Any:
    """调用组件能力，兼容同步/异步实现

    Args:
        handle: 组件对象
        name: 能力名（show / hide）
        *args: 透传参数

    Returns:
        能力的返回值；handle 缺少该能力时返回 None
    """
    method = getattr(handle, name, None)
    if method is None:
        return None
    result = method(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
