"""Platform 能力抽象接口

UIStateManager 通过两类能力操作宿主平台：
- OverlayCapability: 系统 overlay（系统菜单、聊天框等）显示/隐藏
- InputCapability: 移动控制、触控按钮开关

设计原则：
1. 最小接口：只定义状态流转需要的操作
2. 同步调用：平台开关是即时生效的属性设置
"""

from abc import ABC, abstractmethod

from ..config import ALL_OVERLAY

__all__ = ["ALL_OVERLAY", "InputCapability", "OverlayCapability"]


class OverlayCapability(ABC):
    """系统 overlay 能力

    element 为单个 overlay 元素名，或 ALL_OVERLAY 表示全部。
    """

    @abstractmethod
    def set_overlay_visible(self, element: str, visible: bool) -> None:
        """设置 overlay 元素可见性

        Args:
            element: overlay 元素名或 ALL_OVERLAY
            visible: 是否可见
        """
        pass


class InputCapability(ABC):
    """输入控制能力"""

    @abstractmethod
    def enable_movement(self) -> None:
        """启用移动控制"""
        pass

    @abstractmethod
    def disable_movement(self) -> None:
        """禁用移动控制"""
        pass

    @abstractmethod
    def set_touch_controls_enabled(self, enabled: bool) -> None:
        """设置触控按钮开关

        Args:
            enabled: 是否启用
        """
        pass
