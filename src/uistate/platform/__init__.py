"""Platform 能力

- base: OverlayCapability / InputCapability 抽象接口
- memory: MemoryPlatform 内存实现
"""

from .base import ALL_OVERLAY, InputCapability, OverlayCapability
from .memory import MemoryPlatform, PlatformCall

__all__ = [
    "ALL_OVERLAY",
    "InputCapability",
    "OverlayCapability",
    "MemoryPlatform",
    "PlatformCall",
]
