"""组件模块

- base: UIComponent 能力接口
- registry: ComponentRegistry
"""

from .base import UIComponent, call_capability, missing_capabilities
from .registry import ComponentRegistry

__all__ = [
    "UIComponent",
    "ComponentRegistry",
    "call_capability",
    "missing_capabilities",
]
