"""组件名匹配谓词测试"""

from uistate.state.predicates import (
    blocks_target,
    expand_group,
    group_prefix,
    has_wildcard,
    is_group_pattern,
    matches_group,
)


class TestWildcard:
    """通配符测试"""

    def test_has_wildcard(self):
        assert has_wildcard(["A", "*"]) is True
        assert has_wildcard(["A", "B"]) is False

    def test_empty_or_none(self):
        assert has_wildcard([]) is False
        assert has_wildcard(None) is False

    def test_group_pattern_is_not_wildcard(self):
        assert has_wildcard(["HUD_*"]) is False


class TestGroupPattern:
    """分组 pattern 测试"""

    def test_is_group_pattern(self):
        assert is_group_pattern("HUD_*") is True
        assert is_group_pattern("HUD*") is False
        assert is_group_pattern("HUD_Bar") is False
        assert is_group_pattern("*") is False

    def test_group_prefix_keeps_underscore(self):
        assert group_prefix("HUD_*") == "HUD_"

    def test_matches_group_is_prefix_match(self):
        assert matches_group("HUD_Bar", "HUD_*") is True
        assert matches_group("HUDBar", "HUD_*") is False
        assert matches_group("Menu_HUD_Bar", "HUD_*") is False

    def test_expand_group_keeps_order(self):
        names = ["HUD_Map", "Inventory", "HUD_Bar", "Shop"]

        assert expand_group("HUD_*", names) == ["HUD_Map", "HUD_Bar"]
        assert expand_group("Chat_*", names) == []


class TestBlocks:
    """blocks 规则测试"""

    def test_exact_target(self):
        assert blocks_target(["B"], "B") is True
        assert blocks_target(["B"], "C") is False

    def test_wildcard_blocks_everything(self):
        assert blocks_target(["*"], "Anything") is True

    def test_no_blocks(self):
        assert blocks_target(None, "B") is False
        assert blocks_target([], "B") is False
