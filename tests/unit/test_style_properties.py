"""Property-based tests for the style algebra and color resolution.

This test module uses Hypothesis to check the laws the render walk relies
on: merging styles is monotone in every flag, associative, and has the
empty style as identity; class colors are deterministic; and hex parsing
never raises.

Test Coverage:
- TextStyle.merge monotonicity, associativity, identity
- ColorInfo.from_hex totality
- ColorInfo.from_class_name determinism and range
- Text survives the render walk unchanged
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ao3kit.document.nodes import ColorInfo, Paragraph, Text, TextAlignment, TextStyle
from ao3kit.document.render import StyledRun, render

FLAGS = ("bold", "italic", "underline", "strikethrough", "superscript", "subscript", "code", "rtl")

channels = st.floats(min_value=0.0, max_value=1.0, allow_nan=False)
colors = st.builds(ColorInfo, channels, channels, channels)
styles = st.builds(
    TextStyle,
    bold=st.booleans(),
    italic=st.booleans(),
    underline=st.booleans(),
    strikethrough=st.booleans(),
    superscript=st.booleans(),
    subscript=st.booleans(),
    code=st.booleans(),
    color=st.none() | colors,
    alignment=st.none() | st.sampled_from(TextAlignment),
    rtl=st.booleans(),
)


@pytest.mark.unit
class TestMergeProperties:
    """Algebraic properties of TextStyle.merge."""

    @given(styles, styles)
    def test_flags_are_monotone(self, parent, child):
        """Test a flag set on either side stays set after merging."""
        merged = parent.merge(child)
        for flag in FLAGS:
            assert getattr(merged, flag) == (getattr(parent, flag) or getattr(child, flag))

    @given(styles, styles, styles)
    def test_associative(self, a, b, c):
        """Test grouping does not matter when merging root-to-leaf."""
        assert a.merge(b).merge(c) == a.merge(b.merge(c))

    @given(styles)
    def test_empty_style_is_identity(self, style):
        """Test merging with the empty style changes nothing."""
        assert TextStyle().merge(style) == style
        assert style.merge(TextStyle()) == style

    @given(styles)
    def test_idempotent(self, style):
        """Test merging a style with itself changes nothing."""
        assert style.merge(style) == style

    @given(styles, styles)
    def test_child_overrides_win(self, parent, child):
        """Test color and alignment come from the child when present."""
        merged = parent.merge(child)
        assert merged.color == (child.color if child.color is not None else parent.color)
        assert merged.alignment == (child.alignment if child.alignment is not None else parent.alignment)


@pytest.mark.unit
class TestColorProperties:
    """Properties of color parsing and fallback colors."""

    @given(st.text(max_size=20))
    def test_from_hex_never_raises(self, value):
        """Test arbitrary input always yields a color."""
        color = ColorInfo.from_hex(value)
        assert 0.0 <= color.red <= 1.0
        assert 0.0 <= color.green <= 1.0
        assert 0.0 <= color.blue <= 1.0

    @given(st.text(alphabet="0123456789abcdefABCDEF", min_size=6, max_size=6))
    def test_valid_hex_preserved(self, value):
        """Test six hex digits survive parsing exactly."""
        assert ColorInfo.from_hex(value).to_hex() == value.lower()

    @given(st.text(min_size=1, max_size=40))
    def test_class_color_deterministic(self, class_name):
        """Test the same class name always gives the same in-range color."""
        first = ColorInfo.from_class_name(class_name)
        assert first == ColorInfo.from_class_name(class_name)
        for channel in (first.red, first.green, first.blue):
            assert 0.0 <= channel <= 1.0


@pytest.mark.unit
class TestRenderProperties:
    """Properties of the render walk."""

    @given(st.text(min_size=1, max_size=50))
    def test_text_survives_render(self, text):
        """Test a paragraph's text is emitted unchanged in one default run."""
        items = render([Paragraph([Text(text)])])
        text_runs = [item for item in items if isinstance(item, StyledRun)]
        assert [run.text for run in text_runs] == [text]
        assert text_runs[0].style == TextStyle()
