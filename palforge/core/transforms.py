# ==============================================================================
# TRANSFORMATION FUNCTIONS
# ==============================================================================
# The three palette transforms. Each one is a pure function:
#
#   (base palette, ordered indices, parameters, variation) -> {index: RGBA}
#
# They only read the base palette and return the colors to write; applying
# the result to a scratch copy is the composer's job.
#
# HSV STANDARD
# ------------
# Rotates the hue of each selected slot. Two variants exist and are chosen
# by passing one of two tagged variant objects:
#
#   DistributedHue(v, total)   The hue range is spread evenly over the
#                              selected slots (slot p gets p * range / n)
#                              and the whole spread rotates by
#                              v * range / total for variation v.
#   StepSweep(h, s, l)         One point of the Cartesian sweep over the
#                              hue/saturation/lightness step grids; see
#                              step_sweep_variants().
#
# Saturation/lightness offsets go through a ScalingRule. DistributedHue
# defaults to MULTIPLICATIVE, StepSweep to ADDITIVE.
#
# COLORIZE
# --------
# Slots are split into light / medium / dark bands by source lightness and
# each band's hue is REPLACED with (primary hue + band offset).
#
# GRAYSCALE
# ---------
# BT.601 luminance scaled by a tone, then contrast and brightness, optionally
# binarized at 0.5.
# ==============================================================================

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Sequence, Union

from .color import RGBA, clamp, from_hsl, luminance, to_byte, to_hsl, wrap_degrees, wrap_hue
from .palette import ColorUpdates, get_color
from .parameters import GenerationParameters, GrayscaleType, ScalingRule, scale_channel


# ==============================================================================
# HSV STANDARD
# ==============================================================================

@dataclass(frozen=True)
class DistributedHue:
    """
    HSV variant for a fixed number of variations.

    Attributes:
        variation_index (int):  0-based variation being produced
        total_variations (int): Number of variations in the cycle
        scaling (ScalingRule):  Saturation/lightness rule
    """
    variation_index: int
    total_variations: int
    scaling: ScalingRule = ScalingRule.MULTIPLICATIVE


@dataclass(frozen=True)
class StepSweep:
    """
    HSV variant for one point of the hue/saturation/lightness step grid.

    Attributes:
        hue_offset (float):        Degrees added to every slot's hue
        saturation_offset (float): Offset applied through the scaling rule
        lightness_offset (float):  Offset applied through the scaling rule
        scaling (ScalingRule):     Saturation/lightness rule
    """
    hue_offset: float
    saturation_offset: float
    lightness_offset: float
    scaling: ScalingRule = ScalingRule.ADDITIVE


HsvVariant = Union[DistributedHue, StepSweep]


def hsv_standard(base: bytes, indices: Sequence[int],
                 parameters: GenerationParameters,
                 variant: HsvVariant) -> ColorUpdates:
    """
    Apply the HSV Standard transform.

    Args:
        base:       Base palette (1024 bytes, read only)
        indices:    Palette indices in selection order
        parameters: Generation parameters (HSV fields are used)
        variant:    DistributedHue or StepSweep

    Returns:
        Mapping of palette index to new RGBA color
    """
    if isinstance(variant, DistributedHue):
        return _hsv_distributed(base, indices, parameters, variant)
    if isinstance(variant, StepSweep):
        return _hsv_step(base, indices, variant)
    raise TypeError(f"Unknown HSV variant: {variant!r}")


def distributed_hue_offset(position: int, count: int, hue_range: float,
                           variation_index: int, total_variations: int) -> float:
    """
    Hue offset in degrees (relative to hue_min) for one slot.

    The slot's share of the range plus the variation rotation, wrapped
    into [0, hue_range). A zero-width range always yields 0.
    """
    if hue_range == 0 or count <= 0:
        return 0.0

    base_offset = position * (hue_range / count)
    shift = variation_index * (hue_range / total_variations) if total_variations > 1 else 0.0

    combined = (base_offset + shift) % hue_range
    if combined == hue_range:
        combined = 0.0
    return combined


def _hsv_distributed(base: bytes, indices: Sequence[int],
                     parameters: GenerationParameters,
                     variant: DistributedHue) -> ColorUpdates:
    updates = {}
    if variant.total_variations <= 0:
        return updates

    hue_range = parameters.hue_range
    count = len(indices)

    for position, index in enumerate(indices):
        original = get_color(base, index)
        hue, saturation, lightness = to_hsl(original)

        offset = distributed_hue_offset(position, count, hue_range,
                                        variant.variation_index,
                                        variant.total_variations)
        new_hue = wrap_hue(hue + (offset + parameters.hue_min) / 360.0)
        new_sat = scale_channel(saturation, parameters.saturation_min, variant.scaling)
        new_light = scale_channel(lightness, parameters.lightness_min, variant.scaling)

        updates[index] = from_hsl(new_hue, new_sat, new_light, original[3])

    return updates


def _hsv_step(base: bytes, indices: Sequence[int], variant: StepSweep) -> ColorUpdates:
    updates = {}
    for index in indices:
        original = get_color(base, index)
        hue, saturation, lightness = to_hsl(original)

        new_hue = wrap_hue(hue + variant.hue_offset / 360.0)
        new_sat = scale_channel(saturation, variant.saturation_offset, variant.scaling)
        new_light = scale_channel(lightness, variant.lightness_offset, variant.scaling)

        updates[index] = from_hsl(new_hue, new_sat, new_light, original[3])

    return updates


def _axis_offsets(minimum: float, maximum: float, step: float,
                  min_step: float) -> List[float]:
    """Offsets along one sweep axis: min, min+step, ... while <= max."""
    count = int(max(1, math.ceil((maximum - minimum) / max(min_step, step))))
    offsets = []
    for i in range(count):
        offset = minimum + i * step
        if offset > maximum and step > 0:
            break
        offsets.append(offset)
    return offsets


def step_sweep_variants(parameters: GenerationParameters,
                        scaling: ScalingRule = ScalingRule.ADDITIVE) -> Iterator[StepSweep]:
    """
    Enumerate the Cartesian hue x saturation x lightness step sweep.

    Hue is the outermost axis and lightness the innermost. The hue axis
    uses a minimum step of 0.1 degrees and the others 0.01 when computing
    how many steps to take.

    Yields:
        StepSweep variants in generation order
    """
    p = parameters
    hue_offsets = _axis_offsets(p.hue_min, p.hue_max, p.hue_step, 0.1)
    sat_offsets = _axis_offsets(p.saturation_min, p.saturation_max, p.saturation_step, 0.01)
    light_offsets = _axis_offsets(p.lightness_min, p.lightness_max, p.lightness_step, 0.01)

    for hue_offset in hue_offsets:
        for sat_offset in sat_offsets:
            for light_offset in light_offsets:
                yield StepSweep(hue_offset, sat_offset, light_offset, scaling)


# ==============================================================================
# COLORIZE
# ==============================================================================

class Band(Enum):
    """Lightness band used by Colorize."""
    LIGHT = "light"
    MEDIUM = "medium"
    DARK = "dark"


def classify_band(lightness: float) -> Band:
    """Light above 0.66, medium above 0.33, dark otherwise."""
    if lightness > 0.66:
        return Band.LIGHT
    if lightness > 0.33:
        return Band.MEDIUM
    return Band.DARK


def colorize_primary_hue(parameters: GenerationParameters,
                         variation_index: int, total_variations: int) -> float:
    """Base hue in degrees [0, 360) for a colorize variation."""
    if total_variations > 1:
        hue = parameters.hue_min + (parameters.hue_range / total_variations) * variation_index
    else:
        hue = parameters.hue_min
    return wrap_degrees(hue)


def colorize(base: bytes, indices: Sequence[int],
             parameters: GenerationParameters,
             variation_index: int, total_variations: int) -> ColorUpdates:
    """
    Apply the Colorize transform.

    Every slot's hue is replaced by its band's target hue; saturation and
    lightness are scaled multiplicatively by the colorize offsets.

    Args:
        base:             Base palette (read only)
        indices:          Palette indices to recolor
        parameters:       Generation parameters (colorize fields + hue range)
        variation_index:  0-based variation
        total_variations: Number of variations in the cycle

    Returns:
        Mapping of palette index to new RGBA color
    """
    updates = {}
    if total_variations <= 0:
        return updates

    primary = colorize_primary_hue(parameters, variation_index, total_variations)
    band_hues = {
        Band.LIGHT: wrap_degrees(primary + parameters.colorize_hue_light),
        Band.MEDIUM: wrap_degrees(primary + parameters.colorize_hue_medium),
        Band.DARK: wrap_degrees(primary + parameters.colorize_hue_dark),
    }

    for index in indices:
        original = get_color(base, index)
        _, saturation, lightness = to_hsl(original)

        new_hue = wrap_hue(band_hues[classify_band(lightness)] / 360.0)
        new_sat = scale_channel(saturation, parameters.colorize_saturation,
                                ScalingRule.MULTIPLICATIVE)
        new_light = scale_channel(lightness, parameters.colorize_brightness,
                                  ScalingRule.MULTIPLICATIVE)

        updates[index] = from_hsl(new_hue, new_sat, new_light, original[3])

    return updates


# ==============================================================================
# GRAYSCALE
# ==============================================================================

def convert_to_grayscale(color: RGBA, tone: float, binarize: bool,
                         contrast: float, brightness: float) -> RGBA:
    """
    Convert one color to gray.

    Args:
        color:      Source RGBA color
        tone:       Luminance multiplier
        binarize:   Snap to pure black/white at 0.5
        contrast:   Contrast around mid-gray (0 = unchanged)
        brightness: Brightness offset, applied as brightness / 10

    Returns:
        (gray, gray, gray, original alpha)
    """
    value = luminance(color) * tone
    value = (value - 0.5) * (1.0 + contrast) + 0.5
    value = clamp(value + brightness / 10.0)

    if binarize:
        value = 1.0 if value > 0.5 else 0.0

    gray = to_byte(value)
    return (gray, gray, gray, color[3])


def grayscale_with_tone(base: bytes, indices: Sequence[int],
                        parameters: GenerationParameters,
                        tone: float, binarize: bool) -> ColorUpdates:
    """Gray out every index with an explicit tone and binarize flag."""
    return {
        index: convert_to_grayscale(get_color(base, index), tone, binarize,
                                    parameters.grayscale_contrast,
                                    parameters.grayscale_brightness)
        for index in indices
    }


def grayscale(base: bytes, indices: Sequence[int],
              parameters: GenerationParameters,
              variation_index: int, total_variations: int) -> ColorUpdates:
    """
    Apply the Grayscale transform for one variation of a group.

    The tone cycles light, medium, dark with the variation index. Only
    BLACK_WHITE binarizes; GRAY and BOTH keep continuous values.
    """
    if total_variations <= 0:
        return {}

    tone = parameters.tones[variation_index % 3]
    binarize = parameters.grayscale_type == GrayscaleType.BLACK_WHITE
    return grayscale_with_tone(base, indices, parameters, tone, binarize)


def grayscale_tone_set(parameters: GenerationParameters) -> List[tuple]:
    """
    (tone, binarize) pairs emitted per variation by a standalone batch.

    BLACK_WHITE -> three binarized tones
    GRAY        -> three continuous tones
    BOTH        -> three binarized, then three continuous
    """
    gtype = parameters.grayscale_type
    tones = []
    if gtype in (GrayscaleType.BLACK_WHITE, GrayscaleType.BOTH):
        tones.extend((tone, True) for tone in parameters.tones)
    if gtype in (GrayscaleType.GRAY, GrayscaleType.BOTH):
        tones.extend((tone, False) for tone in parameters.tones)
    return tones
