"""HookDispatcher 测试"""

import pytest

from uistate.hooks.dispatcher import HookDispatcher
from uistate.state.types import HookCategory
from uistate.telemetry import metrics


@pytest.fixture
def hooks():
    """创建测试用 HookDispatcher（异常不隔离）"""
    return HookDispatcher(isolate_errors=False)


class TestRegister:
    """注册测试"""

    def test_register_by_string(self, hooks):
        assert hooks.register("StateChange", lambda new, old: None) is True
        assert hooks.count(HookCategory.STATE_CHANGE) == 1

    def test_register_by_enum(self, hooks):
        assert hooks.register(HookCategory.CORE_GUI_CHANGE, lambda new, old: None) is True
        assert hooks.count(HookCategory.CORE_GUI_CHANGE) == 1

    def test_register_unknown(self, hooks):
        assert hooks.register("OnTeleport", lambda new, old: None) is False
        assert metrics.get_counter("uistate.warnings", {"kind": "UnknownHookCategory"}) == 1

    def test_unregister(self, hooks):
        def callback(new, old):
            pass

        hooks.register("StateChange", callback)

        assert hooks.unregister("StateChange", callback) is True
        assert hooks.unregister("StateChange", callback) is False
        assert hooks.count(HookCategory.STATE_CHANGE) == 0


class TestRun:
    """调用测试"""

    async def test_registration_order(self, hooks):
        calls = []
        hooks.register("StateChange", lambda new, old: calls.append(("first", new, old)))
        hooks.register("StateChange", lambda new, old: calls.append(("second", new, old)))

        await hooks.run(HookCategory.STATE_CHANGE, "B", "A")

        assert calls == [("first", "B", "A"), ("second", "B", "A")]
        assert metrics.get_counter("hooks.calls", {"category": "StateChange"}) == 1

    async def test_only_matching_category(self, hooks):
        calls = []
        hooks.register("AfterStateChange", lambda new, old: calls.append(new))

        await hooks.run(HookCategory.STATE_CHANGE, "B", "A")

        assert calls == []

    async def test_async_callback(self, hooks):
        calls = []

        async def callback(new, old):
            calls.append(new)

        hooks.register("StateChange", callback)
        await hooks.run(HookCategory.STATE_CHANGE, "B", None)

        assert calls == ["B"]

    async def test_error_propagates_and_stops(self, hooks):
        """默认不隔离：异常抛出，后续回调不执行"""
        calls = []

        def broken(new, old):
            raise RuntimeError("broken hook")

        hooks.register("StateChange", broken)
        hooks.register("StateChange", lambda new, old: calls.append(new))

        with pytest.raises(RuntimeError):
            await hooks.run(HookCategory.STATE_CHANGE, "B", "A")

        assert calls == []

    async def test_isolated_errors(self):
        """隔离模式：异常被记录，后续回调继续"""
        hooks = HookDispatcher(isolate_errors=True)
        calls = []

        def broken(new, old):
            raise RuntimeError("broken hook")

        hooks.register("StateChange", broken)
        hooks.register("StateChange", lambda new, old: calls.append(new))

        await hooks.run(HookCategory.STATE_CHANGE, "B", "A")

        assert calls == ["B"]
        assert metrics.get_counter("hooks.errors", {"category": "StateChange"}) == 1
