"""组件名匹配谓词库

状态定义中的 pattern 有三种形式：
- "*": 通配符，匹配所有组件
- "HUD_*": 分组 pattern，前缀匹配（HUD_Bar, HUD_Map）
- "Inventory": 精确组件名

可用函数：
- has_wildcard(patterns): 列表是否包含通配符
- is_group_pattern(pattern): 是否为分组 pattern
- group_prefix(pattern): 分组 pattern 的前缀
- matches_group(name, pattern): 组件名是否属于分组
- expand_group(pattern, names): 展开分组 pattern
- blocks_target(blocks, target): 当前状态是否阻止流转到 target
"""

from collections.abc import Iterable

from ..config import GROUP_SUFFIX, WILDCARD


def has_wildcard(patterns: Iterable[str] | None) -> bool:
    """列表是否包含通配符"""
    return bool(patterns) and WILDCARD in patterns


def is_group_pattern(pattern: str) -> bool:
    """是否为分组 pattern（以 _* 结尾）"""
    return pattern.endswith(GROUP_SUFFIX)


def group_prefix(pattern: str) -> str:
    """分组 pattern 的前缀（保留下划线）

    "HUD_*" -> "HUD_"
    """
    return pattern[: -len(WILDCARD)]


def matches_group(name: str, pattern: str) -> bool:
    """组件名是否属于分组 pattern"""
    return name.startswith(group_prefix(pattern))


def expand_group(pattern: str, names: Iterable[str]) -> list[str]:
    """展开分组 pattern，保持 names 的迭代顺序

    Args:
        pattern: 分组 pattern（如 "HUD_*"）
        names: 已注册组件名

    Returns:
        匹配的组件名列表
    """
    return [name for name in names if matches_group(name, pattern)]


def blocks_target(blocks: Iterable[str] | None, target: str) -> bool:
    """blocks 列表是否阻止流转到 target

    只识别通配符和精确状态名。
    """
    if not blocks:
        return False
    blocks = list(blocks)
    return WILDCARD in blocks or target in blocks
