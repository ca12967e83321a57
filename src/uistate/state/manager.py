"""UIStateManager - UI 状态管理器

职责：
- 持有 StateRegistry / ComponentRegistry / HookDispatcher / 平台能力
- 状态流转（blocks 检查、hide/show 解析、平台开关、hook 调用）
- 默认状态 / 上一个状态回退
- 单个组件的显示/隐藏

并发模型：
- hide: 立即调用组件的 hide()，返回 awaitable 时包成独立 task，不等待、无序、失败只记录日志
- show: 按顺序 await，全部完成后才继续后续步骤
- set_state 不可重入：不要在 hook 回调里再次调用 set_state
"""

import asyncio
import inspect
from collections.abc import Mapping
from dataclasses import replace
from functools import partial
from typing import Any

from ..components.base import call_capability
from ..components.registry import ComponentRegistry
from ..config import ALL_OVERLAY, GAMEPLAY_STATE, HIDE_ALL_STATE, METRICS_ENABLED
from ..hooks.dispatcher import HookCallback, HookDispatcher
from ..hooks.signal import Signal
from ..platform.base import InputCapability, OverlayCapability
from ..platform.memory import MemoryPlatform
from ..telemetry import get_logger, metrics, report_warning
from .predicates import blocks_target, expand_group, has_wildcard, is_group_pattern
from .registry import StateRegistry
from .types import (
    ErrorKind,
    HookCategory,
    ManagerSnapshot,
    ManagerState,
    OverlayConfig,
    StateDefinition,
    TransitionOptions,
    TransitionResult,
)

logger = get_logger(__name__)


class UIStateManager:
    """UI 状态管理器

    使用示例:
        manager = UIStateManager(overlay=platform, controls=platform)
        manager.init()

        manager.register_state("Inventory", {"Shows": ["Inventory"], "Hides": ["*"]})
        await manager.register_component("Inventory", inventory_ui)

        ok, reason = await manager.set_state("Inventory")
        await manager.set_default()
    """

    def __init__(
        self,
        overlay: OverlayCapability | None = None,
        controls: InputCapability | None = None,
        hooks: HookDispatcher | None = None,
    ):
        """初始化

        Args:
            overlay: 系统 overlay 能力（可选，默认 MemoryPlatform）
            controls: 输入控制能力（可选，默认 MemoryPlatform）
            hooks: HookDispatcher 实例（可选，默认创建新的）
        """
        if overlay is None or controls is None:
            fallback = MemoryPlatform()
            overlay = overlay or fallback
            controls = controls or fallback

        self._overlay = overlay
        self._controls = controls
        self._hooks = hooks or HookDispatcher()

        self._states = StateRegistry()
        self._components = ComponentRegistry()
        self._state = ManagerState()

        # 进行中的 hide task
        self._pending_hides: set[asyncio.Task] = set()

        self.state_changed = Signal("state_changed")
        self._initialized = False

    # === 初始化 ===

    def init(self) -> None:
        """注册内置状态，并把 StateChange hook 接到 state_changed 信号"""
        if self._initialized:
            logger.warning("[UIStateManager] init() called twice, ignoring")
            return
        self._initialized = True

        # 默认状态：隐藏所有组件，显示所有系统 overlay
        self.register_state(
            GAMEPLAY_STATE,
            StateDefinition(
                hides=["*"],
                shows=[],
                overlay=OverlayConfig(shows=["*"]),
                touch_controls_enabled=True,
            ),
        )
        self.register_default_state(GAMEPLAY_STATE)

        # 隐藏所有 UI
        self.register_state(
            HIDE_ALL_STATE,
            StateDefinition(
                hides=["*"],
                shows=[],
                overlay=OverlayConfig(hides=["*"]),
                touch_controls_enabled=False,
            ),
        )

        self.register_event_hook(HookCategory.STATE_CHANGE, self._emit_state_changed)
        logger.info("[UIStateManager] Initialized built-in states")

    def _emit_state_changed(self, new_state: str | None, old_state: str | None) -> None:
        self.state_changed.fire(new_state, old_state)

    # === 状态流转 ===

    async def set_state(
        self,
        target: str,
        options: TransitionOptions | Mapping[str, Any] | None = None,
        *,
        force: bool | None = None,
        properties: Any = None,
    ) -> TransitionResult:
        """流转到目标状态

        Args:
            target: 目标状态名
            options: TransitionOptions 或 {"force": ..., "properties": ...}
            force: 忽略当前状态的 blocks（覆盖 options.force）
            properties: 透传给被显示组件的数据（覆盖 options.properties）

        Returns:
            TransitionResult(success, reason)
        """
        opts = TransitionOptions.coerce(options)
        if force is not None:
            opts = replace(opts, force=force)
        if properties is not None:
            opts = replace(opts, properties=properties)

        definition = self._states.get(target)
        if definition is None:
            report_warning(
                logger, ErrorKind.STATE_NOT_FOUND.value, f"State {target} could not be found."
            )
            self._count_fail(ErrorKind.STATE_NOT_FOUND)
            return TransitionResult(False, f"State {target} was not found.")

        current = self._state.current_state
        if current is not None:
            current_definition = self._states.get(current)
            if (
                not opts.force
                and current_definition is not None
                and blocks_target(current_definition.blocks, target)
            ):
                logger.info(
                    f"[UIStateManager] {ErrorKind.TRANSITION_BLOCKED.value}: {current} -> {target}"
                )
                self._count_fail(ErrorKind.TRANSITION_BLOCKED)
                return TransitionResult(False, f"State was blocked by {current}")

            self._state.previous_state = current

        self._state.current_state = target
        previous = self._state.previous_state

        # 参数顺序与其他 hook 相反：(old, new)
        await self._hooks.run(HookCategory.BEFORE_STATE_CHANGE, previous, target)

        if definition.movement_enabled is False:
            self._controls.disable_movement()
        else:
            self._controls.enable_movement()

        if opts.properties is not None:
            self._state.last_properties = opts.properties

        self._hide_components(target, definition)
        await self._show_components(target, definition, opts.properties)

        await self._hooks.run(HookCategory.AFTER_STATE_CHANGE, target, previous)

        if definition.overlay is not None:
            self._apply_overlay(definition.overlay)
            await self._hooks.run(HookCategory.CORE_GUI_CHANGE, target, previous)

        if definition.touch_controls_enabled is not None:
            self._controls.set_touch_controls_enabled(definition.touch_controls_enabled)

        await self._hooks.run(HookCategory.STATE_CHANGE, target, previous)

        logger.info(f"[UIStateManager] State {previous} -> {target}")
        if METRICS_ENABLED:
            metrics.inc("transition.ok")
        return TransitionResult(True, None)

    def _count_fail(self, kind: ErrorKind) -> None:
        if METRICS_ENABLED:
            metrics.inc("transition.fail", labels={"kind": kind.value})

    # === hide / show 解析 ===

    def _resolve_shows(
        self, state_name: str, shows: list[str], *, warn: bool
    ) -> list[tuple[str, object]]:
        """解析 shows 为 (name, handle) 列表

        - "*": 所有组件，排除与状态同名的组件
        - "HUD_*": 前缀匹配
        - 精确名：不存在时警告
        """
        if has_wildcard(shows):
            return [
                (name, handle) for name, handle in self._components.items() if name != state_name
            ]

        resolved: list[tuple[str, object]] = []
        for pattern in shows:
            if is_group_pattern(pattern):
                resolved.extend(
                    (name, self._components.get(name))
                    for name in expand_group(pattern, self._components.names())
                )
                continue

            handle = self._components.get(pattern)
            if handle is None:
                if warn:
                    report_warning(
                        logger,
                        ErrorKind.COMPONENT_NOT_FOUND.value,
                        f"UIComponent {pattern} could not be found.",
                    )
                continue
            resolved.append((pattern, handle))
        return resolved

    def _hide_components(self, state_name: str, definition: StateDefinition) -> None:
        """hide 解析：每个被隐藏的组件启动一个独立 task

        被本次 show 解析命中的组件不会被隐藏（show 优先）。
        """
        to_hide = definition.hides or []
        to_show = definition.shows or []
        shown = {name for name, _ in self._resolve_shows(state_name, to_show, warn=False)}

        if has_wildcard(to_hide):
            for name, handle in self._components.items():
                if name == state_name or name in to_show or name in shown:
                    continue
                self._spawn_hide(name, handle)
            return

        for pattern in to_hide:
            if pattern in to_show:
                continue

            if is_group_pattern(pattern):
                for name in expand_group(pattern, self._components.names()):
                    if name not in shown:
                        self._spawn_hide(name, self._components.get(name))
                continue

            handle = self._components.get(pattern)
            if handle is None:
                report_warning(
                    logger,
                    ErrorKind.COMPONENT_NOT_FOUND.value,
                    f"UIComponent {pattern} could not be found.",
                )

            if pattern in shown:
                continue

            if handle is None:
                logger.debug(f"[UIStateManager] Skipping hide of missing component {pattern}")
                continue

            self._spawn_hide(pattern, handle)

    def _spawn_hide(self, name: str, handle: object) -> None:
        """立即调用 hide()，同步部分在返回前执行完

        只有 awaitable 的剩余部分才放进 _pending_hides，
        保证后续状态的 show 不会被前一个状态的 hide 覆盖。
        """
        method = getattr(handle, "hide", None)
        if not callable(method):
            logger.debug(f"[UIStateManager] Component {name} has no hide capability")
            return

        try:
            result = method()
        except Exception as e:
            self._record_hide(name, e)
            return

        if not inspect.isawaitable(result):
            self._record_hide(name, None)
            return

        task = asyncio.ensure_future(result)
        self._pending_hides.add(task)
        task.add_done_callback(partial(self._on_hide_done, name))

    def _on_hide_done(self, name: str, task: asyncio.Future) -> None:
        self._pending_hides.discard(task)
        if task.cancelled():
            logger.debug(f"[UIStateManager] Hide of {name} cancelled")
            return
        self._record_hide(name, task.exception())

    def _record_hide(self, name: str, error: BaseException | None) -> None:
        if error is not None:
            logger.error(f"[UIStateManager] Hide of {name} failed: {error}")
            if METRICS_ENABLED:
                metrics.inc("component.hide_errors")
            return

        if METRICS_ENABLED:
            metrics.inc("component.hide")

    async def _show_components(
        self, state_name: str, definition: StateDefinition, props: Any
    ) -> None:
        """show 解析：按顺序逐个 await"""
        for name, handle in self._resolve_shows(state_name, definition.shows or [], warn=True):
            await self._show(name, handle, props)

    async def _show(self, name: str, handle: object, props: Any) -> None:
        await call_capability(handle, "show", props)
        logger.debug(f"[UIStateManager] Shown component: {name}")
        if METRICS_ENABLED:
            metrics.inc("component.show")

    def _apply_overlay(self, overlay: OverlayConfig) -> None:
        """先 show 再 hide"""
        self._set_overlay(overlay.shows or [], True)
        self._set_overlay(overlay.hides or [], False)

    def _set_overlay(self, elements: list[str], visible: bool) -> None:
        if has_wildcard(elements):
            self._overlay.set_overlay_visible(ALL_OVERLAY, visible)
            return
        for element in elements:
            self._overlay.set_overlay_visible(element, visible)

    # === 状态注册 ===

    def register_state(self, name: str, definition: StateDefinition | Mapping[str, Any]) -> bool:
        """注册状态（重复注册警告并忽略）"""
        return self._states.register(name, definition)

    async def unregister_state(self, name: str) -> bool:
        """取消注册状态

        默认状态不可取消注册；如果是当前状态，先回到默认状态。

        Returns:
            是否已移除
        """
        if name not in self._states:
            report_warning(
                logger, ErrorKind.STATE_NOT_FOUND.value, f"UIState {name} does not exist."
            )
            return False

        if self._state.default_state == name:
            logger.warning(
                f"[UIStateManager] Could not unbind default state {name}. "
                "Change default state and try again."
            )
            return False

        if self.get_state() == name:
            await self.set_default()

        self._states.remove(name)
        return True

    def register_default_state(self, name: str) -> TransitionResult:
        """设置 set_default() 使用的默认状态"""
        if name not in self._states:
            return TransitionResult(None, "Could not set default UI state. State did not exist.")

        self._state.default_state = name
        return TransitionResult(True, None)

    # === 组件注册 ===

    async def register_component(
        self, name: str, handle: object, initial_props: Any = None
    ) -> bool:
        """注册组件

        注册成功后立即尝试显示：只有当前状态的 shows / whitelist 允许时才会显示。

        Args:
            name: 组件名
            handle: 组件对象（提供 show / hide）
            initial_props: 首次显示时透传的数据

        Returns:
            是否注册成功
        """
        if not self._components.register(name, handle):
            return False

        await self.show_component(name, {"properties": initial_props})
        return True

    async def unregister_component(self, name: str, hide_first: bool = False) -> bool:
        """取消注册组件

        Args:
            name: 组件名
            hide_first: 移除前是否调用 hide

        Returns:
            是否已移除
        """
        handle = self._components.get(name)
        if handle is None:
            report_warning(
                logger,
                ErrorKind.COMPONENT_NOT_FOUND.value,
                f"Failed to unregister component {name}, component did not exist.",
            )
            return False

        if hide_first and callable(getattr(handle, "hide", None)):
            await call_capability(handle, "hide")

        self._components.remove(name)
        return True

    # === 单个组件 ===

    def _allows_show(self, name: str) -> bool:
        """当前状态是否允许单独显示该组件（shows 规则 + whitelist）"""
        state_name = self.get_state()
        definition = self._states.get(state_name)
        if definition is None:
            return False

        if definition.whitelist and name in definition.whitelist:
            return True

        allowed = self._resolve_shows(state_name, list(definition.shows or []), warn=False)
        return any(allowed_name == name for allowed_name, _ in allowed)

    async def show_component(self, name: str, props: Mapping[str, Any] | None = None) -> bool:
        """显示单个组件

        Args:
            name: 组件名
            props: {"properties": ..., "bypass_whitelist": bool}

        Returns:
            是否调用了 show
        """
        handle = self._components.get(name)
        if handle is None:
            report_warning(
                logger,
                ErrorKind.COMPONENT_NOT_FOUND.value,
                f"Failed to show UIComponent {name}, component did not exist!",
            )
            return False

        props = props or {}
        bypass = props.get("bypass_whitelist", props.get("BypassWhitelist", False))
        if not bypass and not self._allows_show(name):
            return False

        await self._show(name, handle, props.get("properties", props.get("Properties")))
        return True

    async def hide_component(self, name: str) -> bool:
        """隐藏单个组件（不受当前状态约束）"""
        handle = self._components.get(name)
        if handle is None:
            report_warning(
                logger,
                ErrorKind.COMPONENT_NOT_FOUND.value,
                f"Failed to hide UIComponent {name}, component did not exist!",
            )
            return False

        await call_capability(handle, "hide")
        if METRICS_ENABLED:
            metrics.inc("component.hide")
        return True

    # === 查询 / 回退 ===

    def get_state(self) -> str | None:
        """当前状态名"""
        return self._state.current_state

    async def go_previous(self) -> TransitionResult | None:
        """回到上一个状态（不强制，可能被 blocks 拒绝）

        Returns:
            set_state 的结果；没有上一个状态时返回 None
        """
        if self._state.previous_state is None:
            return None
        return await self.set_state(self._state.previous_state)

    async def set_default(self) -> TransitionResult:
        """强制流转到默认状态"""
        if self._state.default_state is None:
            return TransitionResult(
                None, "Could not set state to default. No default state registered."
            )

        result = await self.set_state(self._state.default_state, force=True)
        if not result.ok:
            return result
        return TransitionResult(True, None)

    # === Hook ===

    def register_event_hook(self, category: HookCategory | str, callback: HookCallback) -> bool:
        """注册流转 hook

        回调参数:
        - StateChange(new_state, old_state)
        - BeforeStateChange(old_state, new_state)
        - AfterStateChange(new_state, old_state)
        - CoreGuiChange(new_state, old_state)
        """
        return self._hooks.register(category, callback)

    # === pending hides ===

    @property
    def pending_hide_count(self) -> int:
        return len(self._pending_hides)

    async def wait_pending_hides(self) -> None:
        """等待所有进行中的 hide 完成（测试 / 关闭时使用）"""
        while self._pending_hides:
            await asyncio.gather(*list(self._pending_hides), return_exceptions=True)

    def cancel_pending_hides(self) -> int:
        """取消所有进行中的 hide，返回取消数量"""
        tasks = list(self._pending_hides)
        for task in tasks:
            task.cancel()
        return len(tasks)

    async def aclose(self) -> None:
        """关闭：等待 hide 完成，断开信号订阅"""
        await self.wait_pending_hides()
        self.state_changed.disconnect_all()

    # === 查询 ===

    @property
    def states(self) -> StateRegistry:
        return self._states

    @property
    def components(self) -> ComponentRegistry:
        return self._components

    @property
    def hooks(self) -> HookDispatcher:
        return self._hooks

    @property
    def manager_state(self) -> ManagerState:
        return self._state

    @property
    def previous_state(self) -> str | None:
        return self._state.previous_state

    @property
    def default_state(self) -> str | None:
        return self._state.default_state

    @property
    def last_properties(self) -> Any:
        return self._state.last_properties

    @property
    def overlay(self) -> OverlayCapability:
        return self._overlay

    @property
    def controls(self) -> InputCapability:
        return self._controls

    def snapshot(self) -> ManagerSnapshot:
        """当前状态快照（用于展示和调试）"""
        return ManagerSnapshot(
            current_state=self._state.current_state,
            previous_state=self._state.previous_state,
            default_state=self._state.default_state,
            states=self._states.names(),
            components=self._components.names(),
            pending_hides=len(self._pending_hides),
        )
