#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_colors.py
"""Unit tests for color parsing and class color resolution."""

import os
import subprocess
import sys

import pytest

from ao3kit.document.colors import resolve_color
from ao3kit.document.nodes import ColorInfo, stable_hash
from ao3kit.document.skin import WorkSkin

FOG = ColorInfo(0xFC / 255.0, 0x4E / 255.0, 0x47 / 255.0)
BLACK = ColorInfo(0.0, 0.0, 0.0)


@pytest.mark.unit
class TestColorInfoFromHex:
    """Tests for ColorInfo.from_hex."""

    @pytest.mark.parametrize("value", ["fc4e47", "FC4E47", "#fc4e47", "  #Fc4E47\n"])
    def test_valid_hex(self, value) -> None:
        """Test accepted spellings of the same color."""
        assert ColorInfo.from_hex(value) == FOG

    @pytest.mark.parametrize("value", ["zzz", "", "#", "fc4e4", "fc4e477", "##fc4e47", "gg0000", "#fff"])
    def test_malformed_hex_is_black(self, value) -> None:
        """Test malformed input yields black without raising."""
        assert ColorInfo.from_hex(value) == BLACK

    def test_primary_channels(self) -> None:
        """Test channel order is red, green, blue."""
        assert ColorInfo.from_hex("ff0000") == ColorInfo(1.0, 0.0, 0.0)
        assert ColorInfo.from_hex("00ff00") == ColorInfo(0.0, 1.0, 0.0)
        assert ColorInfo.from_hex("0000ff") == ColorInfo(0.0, 0.0, 1.0)

    def test_to_rgb255_and_hex(self) -> None:
        """Test conversion back to integer channels and hex."""
        assert FOG.to_rgb255() == (252, 78, 71)
        assert FOG.to_hex() == "fc4e47"


@pytest.mark.unit
class TestClassNameColors:
    """Tests for the deterministic fallback palette."""

    def test_same_name_same_color(self) -> None:
        """Test repeated calls agree."""
        assert ColorInfo.from_class_name("FogLandry") == ColorInfo.from_class_name("FogLandry")

    def test_channels_in_range(self) -> None:
        """Test fallback channels are valid normalized values."""
        color = ColorInfo.from_class_name("Narrator")
        for channel in (color.red, color.green, color.blue):
            assert 0.0 <= channel <= 1.0

    def test_channels_come_from_low_hash_bits(self) -> None:
        """Test the color is built from the low 24 bits of the stable hash."""
        bits = stable_hash("Narrator") & 0xFFFFFF
        assert ColorInfo.from_class_name("Narrator").to_hex() == f"{bits:06x}"

    def test_stable_across_processes(self) -> None:
        """Test the fallback color does not depend on the interpreter's hash seed."""
        code = "from ao3kit.document.nodes import ColorInfo; print(ColorInfo.from_class_name('FogLandry').to_hex())"
        outputs = set()
        for seed in ("1", "2"):
            env = {**os.environ, "PYTHONHASHSEED": seed}
            result = subprocess.run(
                [sys.executable, "-c", code], env=env, capture_output=True, text=True, check=True
            )
            outputs.add(result.stdout.strip())

        assert outputs == {ColorInfo.from_class_name("FogLandry").to_hex()}


@pytest.mark.unit
class TestResolveColor:
    """Tests for resolve_color."""

    def test_skin_hit(self) -> None:
        """Test a skin entry is parsed from hex."""
        skin = WorkSkin({"FogLandry": "fc4e47"})
        assert resolve_color("FogLandry", skin) == FOG

    def test_skin_miss_uses_fallback(self) -> None:
        """Test a class absent from the skin gets its fallback color."""
        skin = WorkSkin({"FogLandry": "fc4e47"})
        assert resolve_color("Other", skin) == ColorInfo.from_class_name("Other")

    def test_no_skin_uses_fallback(self) -> None:
        """Test resolution without a skin."""
        assert resolve_color("FogLandry") == ColorInfo.from_class_name("FogLandry")
        assert resolve_color("FogLandry", WorkSkin()) == ColorInfo.from_class_name("FogLandry")

    def test_malformed_skin_entry_is_black(self) -> None:
        """Test a malformed skin value does not fall back to the palette."""
        skin = WorkSkin({"Broken": "not-a-color"})
        assert resolve_color("Broken", skin) == BLACK

    def test_lookup_is_case_sensitive(self) -> None:
        """Test class names must match exactly."""
        skin = WorkSkin({"FogLandry": "fc4e47"})
        assert resolve_color("foglandry", skin) == ColorInfo.from_class_name("foglandry")
