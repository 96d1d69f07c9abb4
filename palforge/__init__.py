# ==============================================================================
# PALFORGE
# ==============================================================================
# Palette variation generator for Ragnarok Online sprites.
#
# Usage:
#   from palforge import ColorGroup, GenerationMode, compose_batch
#   groups = [ColorGroup(name="Hair", indices=list(range(16, 24)),
#                        mode=GenerationMode.COLORIZE, variation_count=8)]
#   for palette in compose_batch(base, groups):
#       ...
# ==============================================================================

__version__ = "1.0.0"

from .core.color_group import ColorGroup
from .core.composer import compose_batch, compose_variation, generate_single_mode, preview_palette
from .core.exceptions import GroupEncodingError, InvalidInputError, PaletteWriteError, PalForgeError
from .core.parameters import GenerationMode, GenerationParameters, GrayscaleType, ScalingRule
from .core.skin import SkinTone

__all__ = [
    '__version__',
    'ColorGroup',
    'GenerationMode',
    'GenerationParameters',
    'GrayscaleType',
    'ScalingRule',
    'SkinTone',
    'compose_batch',
    'compose_variation',
    'generate_single_mode',
    'preview_palette',
    'PalForgeError',
    'InvalidInputError',
    'PaletteWriteError',
    'GroupEncodingError',
]
