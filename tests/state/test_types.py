"""State 数据类型测试"""

from uistate.state.types import (
    HookCategory,
    OverlayConfig,
    StateDefinition,
    TransitionOptions,
    TransitionResult,
)


class TestStateDefinitionFromDict:
    """StateDefinition.from_dict 测试"""

    def test_snake_case_keys(self):
        definition = StateDefinition.from_dict(
            {
                "shows": ["A"],
                "hides": ["*"],
                "blocks": ["B"],
                "movement_enabled": False,
            }
        )

        assert definition.shows == ["A"]
        assert definition.hides == ["*"]
        assert definition.blocks == ["B"]
        assert definition.movement_enabled is False
        assert definition.touch_controls_enabled is None

    def test_pascal_case_keys(self):
        definition = StateDefinition.from_dict(
            {
                "Shows": ["Inventory"],
                "Hides": ["*"],
                "CoreGui": {"Hides": ["*"]},
                "TouchControlsEnabled": False,
                "Whitelist": ["Tooltip"],
            }
        )

        assert definition.shows == ["Inventory"]
        assert definition.overlay == OverlayConfig(shows=None, hides=["*"])
        assert definition.touch_controls_enabled is False
        assert definition.whitelist == ["Tooltip"]

    def test_missing_lists_default_to_empty(self):
        definition = StateDefinition.from_dict({})

        assert definition.shows == []
        assert definition.hides == []
        assert definition.overlay is None
        assert definition.blocks is None

    def test_unknown_keys_ignored(self):
        definition = StateDefinition.from_dict({"Shows": ["A"], "Animation": "fade"})

        assert definition.shows == ["A"]

    def test_single_string_becomes_list(self):
        definition = StateDefinition.from_dict({"hides": "*"})

        assert definition.hides == ["*"]


class TestTransitionOptions:
    """TransitionOptions.coerce 测试"""

    def test_none(self):
        assert TransitionOptions.coerce(None) == TransitionOptions()

    def test_dict(self):
        options = TransitionOptions.coerce({"force": True, "properties": {"tab": 2}})

        assert options.force is True
        assert options.properties == {"tab": 2}

    def test_pascal_case_dict(self):
        options = TransitionOptions.coerce({"Force": True, "Properties": "x"})

        assert options.force is True
        assert options.properties == "x"

    def test_passthrough(self):
        options = TransitionOptions(force=True)
        assert TransitionOptions.coerce(options) is options


class TestTransitionResult:
    """TransitionResult 测试"""

    def test_unpack(self):
        success, reason = TransitionResult(False, "blocked")

        assert success is False
        assert reason == "blocked"

    def test_ok(self):
        assert TransitionResult(True).ok is True
        assert TransitionResult(None, "no default").ok is False


class TestHookCategory:
    """HookCategory.parse 测试"""

    def test_parse_value_and_name(self):
        assert HookCategory.parse("StateChange") is HookCategory.STATE_CHANGE
        assert HookCategory.parse("BEFORE_STATE_CHANGE") is HookCategory.BEFORE_STATE_CHANGE
        assert HookCategory.parse(HookCategory.CORE_GUI_CHANGE) is HookCategory.CORE_GUI_CHANGE

    def test_parse_unknown(self):
        assert HookCategory.parse("Teleport") is None
