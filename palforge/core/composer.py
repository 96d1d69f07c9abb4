# ==============================================================================
# BATCH COMPOSER
# ==============================================================================
# Turns a base palette and an ordered list of color groups into a batch of
# output palettes.
#
# COMPOSITION RULES:
# ------------------
#   batch size N = max(group.variation_count)
#
#   for output v in 0..N-1:
#       scratch = copy of base
#       for group in groups (in order):
#           apply group transform at variation (v % group.variation_count)
#           over group.indices minus the skin slots
#       apply skin overlay
#       force byte 3 to 0
#
# Later groups win where indices overlap. Everything reads from the
# immutable base palette, so output v never depends on output v-1 and any
# single output can be computed on its own (see compose_variation()).
#
# compose_batch() validates up front and returns a generator; stop iterating
# to cancel a batch.
#
# Usage:
#   for v, palette in enumerate(compose_batch(base, groups, SkinTone.DARK)):
#       write(v, palette)
# ==============================================================================

import random
from typing import Iterator, List, Optional, Sequence

from .color_group import ColorGroup
from .exceptions import InvalidInputError
from .palette import PALETTE_COLOR_COUNT, ColorUpdates, apply_updates, ensure_palette, finalize
from .parameters import GenerationMode, GenerationParameters, ScalingRule
from .skin import SkinTone, apply_skin_overlay, exclude_skin_indices
from .transforms import (
    DistributedHue, colorize, grayscale, grayscale_tone_set, grayscale_with_tone,
    hsv_standard, step_sweep_variants,
)


# ==============================================================================
# GROUP VALIDATION
# ==============================================================================

def validate_groups(groups: Sequence[ColorGroup]):
    """
    Check that a group list can be composed.

    Raises:
        InvalidInputError: If the list is empty or any group is invalid
    """
    if not groups:
        raise InvalidInputError("No color groups defined")

    for group in groups:
        errors = group.validation_errors()
        if errors:
            raise InvalidInputError(
                f"Color group '{group.name}' is invalid: {'; '.join(errors)}",
                group_name=group.name,
            )


def batch_size(groups: Sequence[ColorGroup]) -> int:
    """Number of palettes a composed batch produces."""
    return max((group.variation_count for group in groups), default=0)


# ==============================================================================
# SINGLE GROUP
# ==============================================================================

def apply_group(base: bytes, group: ColorGroup, variation_index: int,
                indices: Optional[Sequence[int]] = None) -> ColorUpdates:
    """
    Run one group's transform for one of its variations.

    Args:
        base:            Base palette (read only)
        group:           Color group to apply
        variation_index: Variation of this group, 0 <= v < variation_count
        indices:         Working indices (defaults to the group's indices
                         minus the skin slots)

    Returns:
        Colors to write into the scratch palette
    """
    if indices is None:
        indices = exclude_skin_indices(group.indices)

    total = group.variation_count
    if group.mode == GenerationMode.HSV_STANDARD:
        variant = DistributedHue(variation_index, total)
        return hsv_standard(base, indices, group.parameters, variant)
    if group.mode == GenerationMode.COLORIZE:
        return colorize(base, indices, group.parameters, variation_index, total)
    if group.mode == GenerationMode.GRAYSCALE:
        return grayscale(base, indices, group.parameters, variation_index, total)

    raise InvalidInputError(f"Unknown generation mode: {group.mode}", group_name=group.name)


# ==============================================================================
# COMPOSITION
# ==============================================================================

def _compose(base: bytes, groups: Sequence[ColorGroup], working: List[List[int]],
             group_variations: Sequence[int], skin: SkinTone) -> bytes:
    scratch = bytearray(base)
    for group, indices, variation in zip(groups, working, group_variations):
        apply_updates(scratch, apply_group(base, group, variation, indices))
    apply_skin_overlay(scratch, skin)
    return finalize(scratch)


def compose_variation(base: bytes, groups: Sequence[ColorGroup], variation: int,
                      skin: SkinTone = SkinTone.DEFAULT) -> bytes:
    """
    Compute output palette number `variation` of a batch.

    Args:
        base:      1024-byte base palette
        groups:    Ordered color groups
        variation: 0-based output index
        skin:      Skin ramp applied last

    Returns:
        1024-byte palette

    Raises:
        InvalidInputError: On a bad base palette or group list
    """
    base = ensure_palette(base)
    groups = list(groups)
    validate_groups(groups)

    working = [exclude_skin_indices(group.indices) for group in groups]
    per_group = [variation % group.variation_count for group in groups]
    return _compose(base, groups, working, per_group, skin)


def compose_batch(base: bytes, groups: Sequence[ColorGroup],
                  skin: SkinTone = SkinTone.DEFAULT) -> Iterator[bytes]:
    """
    Produce the whole batch, one palette per variation.

    Input is validated immediately, so an InvalidInputError is raised by
    this call rather than on the first iteration.

    Returns:
        Generator of max(variation_count) palettes in variation order
    """
    base = ensure_palette(base)
    groups = list(groups)
    validate_groups(groups)

    working = [exclude_skin_indices(group.indices) for group in groups]
    total = batch_size(groups)

    def generate():
        for v in range(total):
            per_group = [v % group.variation_count for group in groups]
            yield _compose(base, groups, working, per_group, skin)

    return generate()


# ==============================================================================
# PREVIEW
# ==============================================================================

def preview_palette(base: bytes, groups: Sequence[ColorGroup],
                    group_variations: Optional[Sequence[int]] = None,
                    skin: SkinTone = SkinTone.DEFAULT) -> bytes:
    """
    Compose a preview with an explicit variation per group.

    Invalid groups are skipped instead of rejected, so a half-edited group
    list still previews. Missing variation entries default to 0.

    Args:
        base:             1024-byte base palette (never modified)
        groups:           Ordered color groups
        group_variations: Variation index per group, by position
        skin:             Skin ramp applied last

    Returns:
        1024-byte preview palette
    """
    base = ensure_palette(base)
    group_variations = list(group_variations or [])

    usable, working, per_group = [], [], []
    for position, group in enumerate(groups):
        if not group.is_valid():
            continue
        requested = group_variations[position] if position < len(group_variations) else 0
        usable.append(group)
        working.append(exclude_skin_indices(group.indices))
        per_group.append(requested % group.variation_count)

    return _compose(base, usable, working, per_group, skin)


def random_group_variations(groups: Sequence[ColorGroup],
                            rng: Optional[random.Random] = None) -> List[int]:
    """Pick a random variation index for every group (0 for invalid ones)."""
    rng = rng or random.Random()
    variations = []
    for group in groups:
        count = group.variation_count
        variations.append(rng.randrange(count) if isinstance(count, int) and count > 0 else 0)
    return variations


# ==============================================================================
# SINGLE-MODE BATCHES
# ==============================================================================

def generate_single_mode(base: bytes, indices: Sequence[int], mode: GenerationMode,
                         parameters: GenerationParameters, variation_count: int,
                         scaling: Optional[ScalingRule] = None) -> Iterator[bytes]:
    """
    Run one mode over one index set, without groups or skin overlay.

    HSV Standard:  variation_count > 0 -> distributed hue, one palette each
                   variation_count == 0 -> full step sweep
    Colorize:      variation_count palettes
    Grayscale:     variation_count x (tones in the grayscale type) palettes

    Args:
        base:            1024-byte base palette
        indices:         Palette indices to transform (empty = all 256)
        mode:            GenerationMode to run
        parameters:      Parameters for the mode
        variation_count: Variations to produce
        scaling:         Override for the HSV scaling rule

    Returns:
        Generator of 1024-byte palettes

    Raises:
        InvalidInputError: On a bad base palette or negative count
    """
    base = ensure_palette(base)
    mode = GenerationMode(mode)
    if variation_count < 0:
        raise InvalidInputError(f"Variation count must be >= 0 (got {variation_count})")

    indices = list(indices) or list(range(PALETTE_COLOR_COUNT))
    out_of_range = [i for i in indices if i < 0 or i >= PALETTE_COLOR_COUNT]
    if out_of_range:
        raise InvalidInputError(f"Indices out of range 0-255: {out_of_range}")

    def emit(updates: ColorUpdates) -> bytes:
        scratch = bytearray(base)
        apply_updates(scratch, updates)
        return finalize(scratch)

    def generate():
        if mode == GenerationMode.HSV_STANDARD:
            if variation_count > 0:
                rule = ScalingRule.MULTIPLICATIVE if scaling is None else scaling
                for v in range(variation_count):
                    variant = DistributedHue(v, variation_count, rule)
                    yield emit(hsv_standard(base, indices, parameters, variant))
            else:
                rule = ScalingRule.ADDITIVE if scaling is None else scaling
                for variant in step_sweep_variants(parameters, rule):
                    yield emit(hsv_standard(base, indices, parameters, variant))

        elif mode == GenerationMode.COLORIZE:
            for v in range(variation_count):
                yield emit(colorize(base, indices, parameters, v, variation_count))

        elif mode == GenerationMode.GRAYSCALE:
            tone_set = grayscale_tone_set(parameters)
            for _ in range(variation_count):
                for tone, binarize in tone_set:
                    yield emit(grayscale_with_tone(base, indices, parameters, tone, binarize))

    return generate()
