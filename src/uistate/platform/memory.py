"""MemoryPlatform - 内存平台实现

宿主未提供平台能力时的默认实现，只记录开关状态，
供调试服务展示与测试断言使用。
"""

from dataclasses import dataclass, field

from ..telemetry import get_logger
from .base import ALL_OVERLAY, InputCapability, OverlayCapability

logger = get_logger(__name__)


@dataclass
class PlatformCall:
    """平台调用记录"""

    method: str
    args: tuple = ()


@dataclass
class MemoryPlatform(OverlayCapability, InputCapability):
    """同时实现 overlay 与输入能力的内存平台

    Attributes:
        all_overlay_visible: 最近一次 ALL_OVERLAY 设置的值（None=未设置过）
        overlay: 单个 overlay 元素的可见性
        movement_enabled: 移动控制是否启用
        touch_controls_enabled: 触控按钮是否启用
        calls: 调用记录（按顺序）
    """

    all_overlay_visible: bool | None = None
    overlay: dict[str, bool] = field(default_factory=dict)
    movement_enabled: bool = True
    touch_controls_enabled: bool = True
    calls: list[PlatformCall] = field(default_factory=list)

    def set_overlay_visible(self, element: str, visible: bool) -> None:
        self.calls.append(PlatformCall("set_overlay_visible", (element, visible)))
        if element == ALL_OVERLAY:
            self.all_overlay_visible = visible
            # 整体设置覆盖单个元素
            self.overlay.clear()
        else:
            self.overlay[element] = visible
        logger.debug(f"[MemoryPlatform] overlay {element} -> {visible}")

    def is_overlay_visible(self, element: str) -> bool:
        """某个 overlay 元素当前是否可见（默认可见）"""
        if element in self.overlay:
            return self.overlay[element]
        if self.all_overlay_visible is not None:
            return self.all_overlay_visible
        return True

    def enable_movement(self) -> None:
        self.calls.append(PlatformCall("enable_movement"))
        self.movement_enabled = True

    def disable_movement(self) -> None:
        self.calls.append(PlatformCall("disable_movement"))
        self.movement_enabled = False

    def set_touch_controls_enabled(self, enabled: bool) -> None:
        self.calls.append(PlatformCall("set_touch_controls_enabled", (enabled,)))
        self.touch_controls_enabled = enabled

    def to_dict(self) -> dict:
        """转换为可序列化的字典"""
        return {
            "all_overlay_visible": self.all_overlay_visible,
            "overlay": dict(self.overlay),
            "movement_enabled": self.movement_enabled,
            "touch_controls_enabled": self.touch_controls_enabled,
        }
