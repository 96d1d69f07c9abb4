"""Tests for palforge.core.skin: fixed skin-color overlay."""

from palforge.core.palette import get_color
from palforge.core.skin import (
    SKIN_INDICES,
    SKIN_RAMPS,
    SkinTone,
    apply_skin_overlay,
    exclude_skin_indices,
    skin_colors,
)

from conftest import make_palette


class TestSkinTable:
    def test_indices(self):
        assert SKIN_INDICES == tuple(range(32, 40)) + tuple(range(128, 136))

    def test_ramps_have_eight_opaque_colors(self):
        for ramp in SKIN_RAMPS.values():
            assert len(ramp) == 8
            assert all(color[3] == 255 for color in ramp)

    def test_default_ramp_first_color(self):
        assert SKIN_RAMPS[SkinTone.DEFAULT][0] == (0xE9, 0x9F, 0x91, 255)

    def test_dark_ramp_last_color(self):
        assert SKIN_RAMPS[SkinTone.DARK][7] == (0x3B, 0x23, 0x31, 255)

    def test_mirrored(self):
        colors = skin_colors(SkinTone.DARK)
        for offset in range(8):
            assert colors[32 + offset] == colors[128 + offset]


class TestApplyOverlay:
    def test_writes_ramp(self):
        data = bytearray(make_palette())
        apply_skin_overlay(data, SkinTone.DEFAULT)

        ramp = SKIN_RAMPS[SkinTone.DEFAULT]
        for offset in range(8):
            assert get_color(data, 32 + offset) == ramp[offset]
            assert get_color(data, 128 + offset) == ramp[offset]

    def test_other_indices_untouched(self):
        original = make_palette(fill=(1, 2, 3, 4))
        data = bytearray(original)
        apply_skin_overlay(data, SkinTone.DARK)

        for index in range(256):
            if index not in SKIN_INDICES:
                assert get_color(data, index) == (1, 2, 3, 4)


class TestExcludeSkinIndices:
    def test_order_preserved(self):
        assert exclude_skin_indices([136, 30, 32, 40, 128, 135, 5]) == [136, 30, 40, 5]

    def test_only_skin(self):
        assert exclude_skin_indices(range(32, 40)) == []
