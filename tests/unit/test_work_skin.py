#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_work_skin.py
"""Unit tests for work skin scraping."""

import pytest

from ao3kit.document.skin import EMPTY_SKIN, WorkSkin


@pytest.mark.unit
class TestWorkSkinFromCss:
    """Tests for WorkSkin.from_css."""

    def test_colored_classes(self, skin_css) -> None:
        """Test color rules are collected and normalized."""
        skin = WorkSkin.from_css(skin_css)

        assert skin.color_for("FogLandry") == "fc4e47"
        assert skin.color_for("Narrator") == "00aaff"

    def test_background_color_ignored(self, skin_css) -> None:
        """Test background-color does not count as a text color."""
        skin = WorkSkin.from_css("#workskin .Dark { background-color: #000000; }")
        assert not skin.has_color("Dark")

    def test_rule_without_color_skipped(self, skin_css) -> None:
        """Test classes without a color declaration are absent."""
        skin = WorkSkin.from_css(skin_css)
        assert not skin.has_color("Plain")
        assert sorted(skin.class_names) == ["FogLandry", "Narrator"]

    def test_last_declaration_wins(self) -> None:
        """Test repeated declarations in one rule."""
        skin = WorkSkin.from_css("#workskin .A { color: #111111; color: #222222 }")
        assert skin.color_for("A") == "222222"

    def test_later_rule_wins(self) -> None:
        """Test a later rule for the same class overrides an earlier one."""
        css = "#workskin .A { color: #111111 }\n#workskin .A { color: #333333 }"
        assert WorkSkin.from_css(css).color_for("A") == "333333"

    def test_rules_outside_workskin_ignored(self) -> None:
        """Test only #workskin-scoped rules contribute."""
        skin = WorkSkin.from_css(".A { color: #111111 } body { color: #222222 }")
        assert len(skin) == 0

    @pytest.mark.parametrize("css", [None, "", "   "])
    def test_empty_input(self, css) -> None:
        """Test empty stylesheets give an empty skin."""
        assert len(WorkSkin.from_css(css)) == 0


@pytest.mark.unit
class TestWorkSkinLookup:
    """Tests for WorkSkin lookups."""

    def test_case_sensitive(self) -> None:
        """Test lookups are exact."""
        skin = WorkSkin({"FogLandry": "fc4e47"})
        assert skin.color_for("foglandry") is None
        assert skin.color_for("FogLandry") == "fc4e47"

    def test_iteration(self) -> None:
        """Test iterating yields class names."""
        skin = WorkSkin({"A": "111111", "B": "222222"})
        assert list(skin) == ["A", "B"]
        assert len(skin) == 2

    def test_colors_are_read_only(self) -> None:
        """Test the color table cannot be modified."""
        source = {"A": "111111"}
        skin = WorkSkin(source)
        source["B"] = "222222"

        assert not skin.has_color("B")
        with pytest.raises(TypeError):
            skin.colors["C"] = "333333"  # type: ignore[index]

    def test_hashable_value(self) -> None:
        """Test equal skins hash alike regardless of insertion order."""
        first = WorkSkin({"A": "111111", "B": "222222"})
        second = WorkSkin({"B": "222222", "A": "111111"})

        assert first == second
        assert hash(first) == hash(second)
        assert hash(first) != hash(WorkSkin({"A": "111111"}))

    def test_empty_skin(self) -> None:
        """Test the shared empty skin."""
        assert len(EMPTY_SKIN) == 0
        assert EMPTY_SKIN.color_for("Anything") is None
