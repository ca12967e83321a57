"""终端渲染模块"""

from .console import build_state_table, build_summary, print_state

__all__ = ["build_state_table", "build_summary", "print_state"]
