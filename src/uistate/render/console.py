"""UIStateManager 状态的终端渲染（Rich）"""

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..platform.memory import MemoryPlatform

if TYPE_CHECKING:
    from ..state.manager import UIStateManager


def _flag(value: bool | None) -> Text:
    if value is None:
        return Text("-", style="dim")
    return Text("on", style="green") if value else Text("off", style="red")


def build_state_table(manager: "UIStateManager") -> Table:
    """构造状态列表表格

    当前状态高亮，默认状态标记 *。
    """
    snapshot = manager.snapshot()
    table = Table(title="UI States", show_lines=False)
    table.add_column("State")
    table.add_column("Shows")
    table.add_column("Hides")
    table.add_column("Blocks")
    table.add_column("Touch")
    table.add_column("Movement")

    for name in snapshot["states"]:
        definition = manager.states.get(name)
        if definition is None:
            continue

        label = Text(name + (" *" if name == snapshot["default_state"] else ""))
        if name == snapshot["current_state"]:
            label.stylize("bold cyan")

        table.add_row(
            label,
            ", ".join(definition.shows) or "-",
            ", ".join(definition.hides) or "-",
            ", ".join(definition.blocks or []) or "-",
            _flag(definition.touch_controls_enabled),
            _flag(definition.movement_enabled),
        )
    return table


def build_summary(manager: "UIStateManager") -> Text:
    """单行摘要: current / previous / components / pending hides"""
    snapshot = manager.snapshot()
    text = Text()
    text.append("current=", style="dim")
    text.append(str(snapshot["current_state"]), style="bold cyan")
    text.append("  previous=", style="dim")
    text.append(str(snapshot["previous_state"]))
    text.append("  components=", style="dim")
    text.append(str(len(snapshot["components"])))
    text.append("  pending_hides=", style="dim")
    text.append(str(snapshot["pending_hides"]))

    platform = manager.controls
    if isinstance(platform, MemoryPlatform):
        text.append("  movement=", style="dim")
        text.append_text(_flag(platform.movement_enabled))
        text.append("  touch=", style="dim")
        text.append_text(_flag(platform.touch_controls_enabled))
    return text


def print_state(manager: "UIStateManager", console: Console | None = None) -> None:
    """打印状态表格和摘要（调试用）"""
    console = console or Console()
    console.print(build_state_table(manager))
    console.print(build_summary(manager))
