"""StateRegistry / ComponentRegistry 测试"""

import logging

from uistate.components.registry import ComponentRegistry
from uistate.state.registry import StateRegistry
from uistate.state.types import StateDefinition
from uistate.telemetry import metrics


class TestStateRegistry:
    """状态注册表测试"""

    def test_register_and_get(self):
        registry = StateRegistry()
        definition = StateDefinition(shows=["A"])

        assert registry.register("S1", definition) is True
        assert registry.get("S1") is definition
        assert "S1" in registry

    def test_register_dict(self):
        registry = StateRegistry()
        registry.register("S1", {"Shows": ["A"], "Hides": ["*"]})

        assert registry.get("S1").hides == ["*"]

    def test_duplicate_keeps_first(self, caplog):
        """重复注册保持第一个定义"""
        registry = StateRegistry()
        first = StateDefinition(shows=["A"])
        registry.register("S1", first)

        with caplog.at_level(logging.WARNING):
            result = registry.register("S1", StateDefinition(shows=["B"]))

        assert result is False
        assert registry.get("S1") is first
        assert "DuplicateRegistration" in caplog.text
        assert metrics.get_counter("uistate.warnings", {"kind": "DuplicateRegistration"}) == 1

    def test_remove(self):
        registry = StateRegistry()
        registry.register("S1", StateDefinition())

        assert registry.remove("S1") is not None
        assert "S1" not in registry
        assert registry.remove("S1") is None

    def test_get_none(self):
        assert StateRegistry().get(None) is None

    def test_names_in_registration_order(self):
        registry = StateRegistry()
        for name in ("B", "A", "C"):
            registry.register(name, StateDefinition())

        assert registry.names() == ["B", "A", "C"]
        assert len(registry) == 3


class _ShowOnly:
    def show(self, properties=None):
        pass


class _NoneHide:
    hide = None

    def show(self, properties=None):
        pass


class TestComponentRegistry:
    """组件注册表测试"""

    def test_register(self, make_component):
        registry = ComponentRegistry()
        component = make_component("A")

        assert registry.register("A", component) is True
        assert registry.get("A") is component
        assert registry.names() == ["A"]

    def test_duplicate(self, make_component):
        registry = ComponentRegistry()
        first = make_component("A")
        registry.register("A", first)

        assert registry.register("A", make_component("A")) is False
        assert registry.get("A") is first

    def test_missing_capability_still_registers(self, caplog):
        """缺少 hide 只警告"""
        registry = ComponentRegistry()

        with caplog.at_level(logging.WARNING):
            result = registry.register("ShowOnly", _ShowOnly())

        assert result is True
        assert "ShowOnly" in registry
        assert "MissingComponentCapability" in caplog.text
        assert "hide" in caplog.text

    def test_non_callable_capability_warns(self, caplog):
        """hide = None 视为缺少能力"""
        registry = ComponentRegistry()

        with caplog.at_level(logging.WARNING):
            result = registry.register("NoneHide", _NoneHide())

        assert result is True
        assert "MissingComponentCapability" in caplog.text
        assert metrics.get_counter(
            "uistate.warnings", {"kind": "MissingComponentCapability"}
        ) == 1

    def test_items_is_snapshot(self, make_component):
        registry = ComponentRegistry()
        registry.register("A", make_component("A"))
        registry.register("B", make_component("B"))

        for name, _ in registry.items():
            registry.remove(name)

        assert len(registry) == 0

    def test_protocol_check(self, make_component):
        from uistate.components import UIComponent, missing_capabilities

        assert isinstance(make_component("A"), UIComponent)
        assert not isinstance(_ShowOnly(), UIComponent)
        assert missing_capabilities(_ShowOnly()) == ["hide"]
        assert missing_capabilities(object()) == ["show", "hide"]
