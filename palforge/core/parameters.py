# ==============================================================================
# GENERATION PARAMETERS
# ==============================================================================
# Per-mode numeric configuration for palette generation.
#
# A single GenerationParameters record carries the fields of all three modes
# at once. Only the subset belonging to the active mode is read at
# generation time; the others are kept so a group can switch modes without
# losing its settings.
#
#   HSV Standard: hue_min/max/step, saturation_min/max/step,
#                 lightness_min/max/step   (hue in degrees)
#   Colorize:     colorize_hue_light/medium/dark (relative degrees),
#                 colorize_saturation, colorize_brightness
#                 (also reuses hue_min/hue_max as its per-variation range)
#   Grayscale:    grayscale_type, grayscale_light/medium/dark_tone,
#                 grayscale_contrast, grayscale_brightness
# ==============================================================================

from dataclasses import dataclass, replace
from enum import IntEnum

from .color import clamp


class GenerationMode(IntEnum):
    """Transformation applied by a color group. Values are persisted."""
    HSV_STANDARD = 0
    COLORIZE = 1
    GRAYSCALE = 2

    @property
    def label(self) -> str:
        return {
            GenerationMode.HSV_STANDARD: "HSV Standard",
            GenerationMode.COLORIZE: "Colorize",
            GenerationMode.GRAYSCALE: "Grayscale",
        }[self]


class GrayscaleType(IntEnum):
    """Grayscale output style. Values are persisted."""
    BLACK_WHITE = 0
    GRAY = 1
    BOTH = 2


class ScalingRule(IntEnum):
    """
    How a saturation/lightness offset is applied to a source value.

    MULTIPLICATIVE: clamp(original * (1 + offset / 10))
    ADDITIVE:       clamp(original + offset)
    """
    MULTIPLICATIVE = 0
    ADDITIVE = 1


@dataclass
class GenerationParameters:
    """
    All tunable values for the three generation modes.

    Defaults match a freshly created group: a full 0-360 hue sweep with
    untouched saturation/lightness, neutral colorize offsets and the
    0.8 / 0.5 / 0.2 grayscale tone set.
    """

    # HSV Standard
    hue_min: float = 0.0
    hue_max: float = 360.0
    hue_step: float = 10.0
    saturation_min: float = 0.0
    saturation_max: float = 0.0
    saturation_step: float = 0.0
    lightness_min: float = 0.0
    lightness_max: float = 0.0
    lightness_step: float = 0.0

    # Colorize
    colorize_hue_light: float = 0.0
    colorize_hue_medium: float = 0.0
    colorize_hue_dark: float = 0.0
    colorize_saturation: float = 0.0
    colorize_brightness: float = 0.0

    # Grayscale
    grayscale_type: GrayscaleType = GrayscaleType.GRAY
    grayscale_light_tone: float = 0.8
    grayscale_medium_tone: float = 0.5
    grayscale_dark_tone: float = 0.2
    grayscale_contrast: float = 0.0
    grayscale_brightness: float = 0.0

    @property
    def hue_range(self) -> float:
        """Width of the hue sweep in degrees."""
        return self.hue_max - self.hue_min

    @property
    def tones(self):
        """Grayscale tones in light, medium, dark order."""
        return (self.grayscale_light_tone,
                self.grayscale_medium_tone,
                self.grayscale_dark_tone)

    def copy(self) -> 'GenerationParameters':
        """Return an independent copy of these parameters."""
        return replace(self)


def scale_channel(original: float, offset: float, rule: ScalingRule) -> float:
    """
    Apply a saturation/lightness offset using the given scaling rule.

    Args:
        original: Source value in [0,1]
        offset:   Offset from the parameter set
        rule:     ScalingRule to apply

    Returns:
        New value clamped to [0,1]
    """
    if rule == ScalingRule.ADDITIVE:
        value = original + offset
    else:
        value = original * (1.0 + offset / 10.0)
    return clamp(value)
