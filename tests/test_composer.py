"""Tests for palforge.core.composer: batch composition, preview and single-mode batches."""

import random

import pytest

from palforge.core.color_group import ColorGroup
from palforge.core.composer import (
    apply_group,
    batch_size,
    compose_batch,
    compose_variation,
    generate_single_mode,
    preview_palette,
    random_group_variations,
)
from palforge.core.exceptions import InvalidInputError
from palforge.core.palette import get_color
from palforge.core.parameters import GenerationMode, GenerationParameters, GrayscaleType
from palforge.core.skin import SKIN_INDICES, SKIN_RAMPS, SkinTone


def hsv_group(indices, count, name='Hue'):
    return ColorGroup(name=name, indices=indices, mode=GenerationMode.HSV_STANDARD,
                      variation_count=count)


def colorize_group(indices, count, name='Tint'):
    return ColorGroup(name=name, indices=indices, mode=GenerationMode.COLORIZE,
                      variation_count=count)


class TestComposeBatch:
    def test_batch_size_is_max_count(self, gradient_palette):
        groups = [hsv_group([1, 2, 3], 3), colorize_group([4, 5, 6], 5)]
        assert batch_size(groups) == 5
        assert len(list(compose_batch(gradient_palette, groups))) == 5

    def test_cyclic_group_variations(self, gradient_palette):
        first = hsv_group([1, 2, 3], 3)
        second = colorize_group([4, 5, 6], 5)

        outputs = list(compose_batch(gradient_palette, [first, second]))

        for v, palette in enumerate(outputs):
            expected_first = apply_group(gradient_palette, first, [0, 1, 2, 0, 1][v])
            expected_second = apply_group(gradient_palette, second, v)
            for index, color in expected_first.items():
                assert get_color(palette, index) == color
            for index, color in expected_second.items():
                assert get_color(palette, index) == color

    def test_transparency_key_zero(self, gradient_palette):
        assert gradient_palette[3] == 255
        for palette in compose_batch(gradient_palette, [hsv_group([0, 1], 4)]):
            assert len(palette) == 1024
            assert palette[3] == 0

    def test_skin_overlay_wins(self, gradient_palette):
        group = hsv_group(list(range(30, 140)), 2)
        ramp = SKIN_RAMPS[SkinTone.DARK]

        for palette in compose_batch(gradient_palette, [group], SkinTone.DARK):
            for position, index in enumerate(SKIN_INDICES):
                assert get_color(palette, index) == ramp[position % 8]

    def test_untouched_indices_keep_base(self, gradient_palette):
        palette = next(compose_batch(gradient_palette, [hsv_group([1, 2], 1)]))
        for index in (10, 200, 255):
            assert get_color(palette, index) == get_color(gradient_palette, index)

    def test_later_group_wins_on_overlap(self, gradient_palette):
        first = hsv_group([1, 2], 2)
        second = ColorGroup(name='Gray', indices=[2], mode=GenerationMode.GRAYSCALE,
                            variation_count=2)

        palette = compose_variation(gradient_palette, [first, second], 1)

        assert get_color(palette, 2) == apply_group(gradient_palette, second, 1)[2]
        assert get_color(palette, 1) == apply_group(gradient_palette, first, 1)[1]

    def test_deterministic(self, gradient_palette):
        groups = [hsv_group([1, 2, 3], 4), colorize_group([7, 8], 3)]
        assert list(compose_batch(gradient_palette, groups)) == \
            list(compose_batch(gradient_palette, groups))

    def test_compose_variation_matches_batch(self, gradient_palette):
        groups = [hsv_group([1, 2, 3], 4), colorize_group([7, 8], 3)]
        outputs = list(compose_batch(gradient_palette, groups))
        for v, palette in enumerate(outputs):
            assert compose_variation(gradient_palette, groups, v) == palette

    def test_groups_from_generator(self, gradient_palette):
        groups = [hsv_group([1, 2, 3], 3), colorize_group([7, 8], 2)]
        outputs = list(compose_batch(gradient_palette, (g for g in groups)))
        assert outputs == list(compose_batch(gradient_palette, groups))
        assert len(outputs) == 3


class TestComposeBatchErrors:
    def test_missing_base(self):
        with pytest.raises(InvalidInputError):
            compose_batch(None, [hsv_group([1], 1)])

    def test_wrong_size(self):
        with pytest.raises(InvalidInputError):
            compose_batch(b'\x00' * 1000, [hsv_group([1], 1)])

    def test_no_groups(self, gradient_palette):
        with pytest.raises(InvalidInputError):
            compose_batch(gradient_palette, [])

    def test_invalid_group_named(self, gradient_palette):
        with pytest.raises(InvalidInputError) as exc_info:
            compose_batch(gradient_palette, [hsv_group([1], 1), hsv_group([], 2, name='Empty')])
        assert exc_info.value.group_name == 'Empty'

    def test_zero_variation_count(self, gradient_palette):
        with pytest.raises(InvalidInputError):
            compose_batch(gradient_palette, [hsv_group([1], 0)])

    def test_mode_edited_after_creation(self, gradient_palette):
        group = hsv_group([1, 2], 3, name='Edited')
        group.mode = 7
        with pytest.raises(InvalidInputError) as exc_info:
            compose_batch(gradient_palette, [group])
        assert exc_info.value.group_name == 'Edited'


class TestPreview:
    def test_matches_composed_variation(self, gradient_palette):
        group = hsv_group([1, 2, 3], 5)
        assert preview_palette(gradient_palette, [group], [2]) == \
            compose_variation(gradient_palette, [group], 2)

    def test_missing_entries_default_to_zero(self, gradient_palette):
        groups = [hsv_group([1, 2, 3], 5), colorize_group([4], 5)]
        assert preview_palette(gradient_palette, groups, [3]) == \
            preview_palette(gradient_palette, groups, [3, 0])

    def test_invalid_groups_skipped(self, gradient_palette):
        invalid = hsv_group([], 3, name='Empty')
        valid = colorize_group([4, 5], 3)
        assert preview_palette(gradient_palette, [invalid, valid], [0, 1]) == \
            preview_palette(gradient_palette, [valid], [1])

    def test_no_groups_applies_skin_only(self, gradient_palette):
        palette = preview_palette(gradient_palette, [], skin=SkinTone.DEFAULT)
        assert get_color(palette, 32) == SKIN_RAMPS[SkinTone.DEFAULT][0]
        assert palette[3] == 0

    def test_random_variations_in_range(self):
        groups = [hsv_group([1], 3), colorize_group([2], 7), hsv_group([], 4)]
        variations = random_group_variations(groups, random.Random(42))
        assert len(variations) == 3
        assert 0 <= variations[0] < 3
        assert 0 <= variations[1] < 7


class TestSingleMode:
    def test_hsv_distributed_count(self, gradient_palette):
        outputs = list(generate_single_mode(gradient_palette, [1, 2, 3],
                                            GenerationMode.HSV_STANDARD,
                                            GenerationParameters(), 3))
        assert len(outputs) == 3

    def test_hsv_step_sweep_when_count_zero(self, gradient_palette):
        outputs = list(generate_single_mode(gradient_palette, [1],
                                            GenerationMode.HSV_STANDARD,
                                            GenerationParameters(), 0))
        assert len(outputs) == 36

    def test_colorize_count(self, gradient_palette):
        outputs = list(generate_single_mode(gradient_palette, [1], GenerationMode.COLORIZE,
                                            GenerationParameters(), 4))
        assert len(outputs) == 4

    def test_grayscale_both_emits_six_per_variation(self, gradient_palette):
        params = GenerationParameters(grayscale_type=GrayscaleType.BOTH)
        outputs = list(generate_single_mode(gradient_palette, [1], GenerationMode.GRAYSCALE,
                                            params, 2))
        assert len(outputs) == 12

    def test_grayscale_black_white_binarized(self, gradient_palette):
        params = GenerationParameters(grayscale_type=GrayscaleType.BLACK_WHITE)
        for palette in generate_single_mode(gradient_palette, [], GenerationMode.GRAYSCALE,
                                            params, 1):
            for index in range(1, 256):
                assert get_color(palette, index)[:3] in ((0, 0, 0), (255, 255, 255))

    def test_empty_indices_means_all_and_no_skin_overlay(self, gradient_palette):
        params = GenerationParameters(grayscale_type=GrayscaleType.GRAY)
        palette = next(generate_single_mode(gradient_palette, [], GenerationMode.GRAYSCALE,
                                            params, 1))
        for index in (1, 32, 128, 255):
            r, g, b, _ = get_color(palette, index)
            assert r == g == b
        assert get_color(palette, 32) != SKIN_RAMPS[SkinTone.DEFAULT][0]

    def test_transparency_key_zero(self, gradient_palette):
        for palette in generate_single_mode(gradient_palette, [5], GenerationMode.COLORIZE,
                                            GenerationParameters(), 3):
            assert palette[3] == 0

    def test_rejects_bad_input(self, gradient_palette):
        with pytest.raises(InvalidInputError):
            generate_single_mode(None, [1], GenerationMode.COLORIZE, GenerationParameters(), 1)
        with pytest.raises(InvalidInputError):
            generate_single_mode(gradient_palette, [300], GenerationMode.COLORIZE,
                                 GenerationParameters(), 1)
        with pytest.raises(InvalidInputError):
            generate_single_mode(gradient_palette, [1], GenerationMode.COLORIZE,
                                 GenerationParameters(), -1)
