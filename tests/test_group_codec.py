"""Tests for palforge.parsers.group_codec: persisted color group encoding."""

import pytest

from palforge.core.color_group import ColorGroup
from palforge.core.exceptions import GroupEncodingError
from palforge.core.parameters import GenerationMode, GenerationParameters, GrayscaleType
from palforge.parsers.group_codec import (
    decode_groups,
    decode_parameters,
    encode_group,
    encode_groups,
    escape_name,
)


def sample_groups():
    tuned = GenerationParameters(
        hue_min=12.5, hue_max=300.0, hue_step=0.1,
        saturation_min=-0.3, saturation_max=1e-7, saturation_step=0.05,
        lightness_min=2.0, lightness_max=3.0, lightness_step=0.25,
        colorize_hue_light=-45.0, colorize_hue_medium=90.0, colorize_hue_dark=1 / 3,
        colorize_saturation=1.5, colorize_brightness=-2.0,
        grayscale_type=GrayscaleType.BOTH,
        grayscale_light_tone=0.9, grayscale_medium_tone=0.45, grayscale_dark_tone=0.1,
        grayscale_contrast=0.3, grayscale_brightness=-1.0,
    )
    return [
        ColorGroup(name='Hair', indices=[16, 17, 18, 19], mode=GenerationMode.COLORIZE,
                   parameters=tuned, variation_count=12),
        ColorGroup(name='Cloth;Top', indices=[80, 64, 72], mode=GenerationMode.HSV_STANDARD,
                   variation_count=3),
        ColorGroup(name='a|b', indices=[1], mode=GenerationMode.GRAYSCALE, variation_count=1),
        ColorGroup(name='x||;;y;', indices=[255, 0], variation_count=7),
        ColorGroup(name='|', indices=[2]),
    ]


class TestEncode:
    def test_empty(self):
        assert encode_groups([]) == (0, '')

    def test_count(self):
        count, _ = encode_groups(sample_groups())
        assert count == 5

    def test_escape(self):
        assert escape_name('a;b|c') == 'a;;b||c'

    def test_layout(self):
        group = ColorGroup(name='Hair', indices=[3, 1], mode=GenerationMode.COLORIZE,
                           variation_count=4)
        fields = encode_group(group).split(';')
        assert fields[:4] == ['Hair', '1', '4', '3,1']
        blocks = fields[4].split('|')
        assert [b.split(':')[0] for b in blocks] == ['hsv', 'colorize', 'grayscale']
        assert len(blocks[0].split(':')[1].split(',')) == 9
        assert len(blocks[1].split(':')[1].split(',')) == 5
        assert blocks[2].split(':')[1].split(',')[0] == '1'
        assert len(blocks[2].split(':')[1].split(',')) == 6


class TestRoundTrip:
    def test_empty(self):
        assert decode_groups(*encode_groups([])) == []

    def test_groups_round_trip_exactly(self):
        groups = sample_groups()
        assert decode_groups(*encode_groups(groups)) == groups

    def test_single_group(self):
        groups = [ColorGroup(name=';', indices=[5])]
        assert decode_groups(*encode_groups(groups)) == groups

    def test_float_precision_kept(self):
        groups = sample_groups()
        decoded = decode_groups(*encode_groups(groups))
        assert decoded[0].parameters.colorize_hue_dark == 1 / 3
        assert decoded[0].parameters.saturation_max == 1e-7

    def test_invalid_group_preserved(self):
        groups = [ColorGroup(name='Empty', indices=[], variation_count=2)]
        decoded = decode_groups(*encode_groups(groups))
        assert decoded == groups
        assert not decoded[0].is_valid()


class TestDecodeErrors:
    def test_nothing_stored(self):
        assert decode_groups(0, '') == []
        assert decode_groups(None, None) == []

    def test_garbage(self, capsys):
        assert decode_groups(1, 'garbage') == []
        assert '[WARN]' in capsys.readouterr().out

    def test_malformed_group_skipped(self, capsys):
        first = ColorGroup(name='First', indices=[1])
        last = ColorGroup(name='Last', indices=[2], mode=GenerationMode.COLORIZE)
        data = '||'.join([encode_group(first), 'Bad;9;x;;', encode_group(last)])

        assert decode_groups(3, data) == [first, last]

        out = capsys.readouterr().out
        assert 'Skipping color group' in out
        assert 'Expected 3 color groups, decoded 2' in out

    def test_wrong_field_count_skipped(self, capsys):
        good = ColorGroup(name='Good', indices=[1])
        data = 'Short;1;2||' + encode_group(good)
        assert decode_groups(2, data) == [good]

    def test_missing_parameter_blocks_use_defaults(self):
        groups = decode_groups(1, 'Hair;1;5;1,2,3;')
        assert groups == [ColorGroup(name='Hair', indices=[1, 2, 3],
                                     mode=GenerationMode.COLORIZE, variation_count=5)]

    def test_parameter_errors(self):
        with pytest.raises(GroupEncodingError):
            decode_parameters('hsv:1,2')
        with pytest.raises(GroupEncodingError):
            decode_parameters('rgb:1,2,3')
        with pytest.raises(GroupEncodingError):
            decode_parameters('grayscale:9,1,1,1,1,1')
        with pytest.raises(GroupEncodingError):
            decode_parameters('colorize:1,2,x,4,5')
