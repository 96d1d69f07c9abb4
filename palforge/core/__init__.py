# ==============================================================================
# CORE MODULE INIT
# ==============================================================================
# The generation engine and the application services around it.
#
# This package contains:
#   - Color / palette helpers and the three transforms
#   - ColorGroup and GenerationParameters
#   - Composer: batch composition, preview, single-mode batches
#   - Naming: output file names with collision handling
#   - Database: SQLite generation history (SQLAlchemy ORM)
#   - Config / Paths: settings file and data locations
#
# Usage:
#   from palforge.core import ColorGroup, compose_batch, SkinTone
#   from palforge.core.config import get_config
# ==============================================================================

from .color_group import ColorGroup, format_indices, parse_indices
from .composer import (
    batch_size, compose_batch, compose_variation, generate_single_mode,
    preview_palette, random_group_variations, validate_groups,
)
from .config import Config, get_config
from .database import Database, GeneratedPalette, GenerationRun
from .exceptions import GroupEncodingError, InvalidInputError, PaletteWriteError, PalForgeError
from .naming import NamingScheme, resolve_name
from .parameters import GenerationMode, GenerationParameters, GrayscaleType, ScalingRule
from .paths import Paths
from .skin import SKIN_INDICES, SkinTone, apply_skin_overlay
from .transforms import DistributedHue, StepSweep, colorize, grayscale, hsv_standard

__all__ = [
    # Groups and parameters
    'ColorGroup',
    'format_indices',
    'parse_indices',
    'GenerationMode',
    'GenerationParameters',
    'GrayscaleType',
    'ScalingRule',

    # Transforms
    'DistributedHue',
    'StepSweep',
    'hsv_standard',
    'colorize',
    'grayscale',

    # Skin overlay
    'SkinTone',
    'SKIN_INDICES',
    'apply_skin_overlay',

    # Composition
    'batch_size',
    'compose_batch',
    'compose_variation',
    'generate_single_mode',
    'preview_palette',
    'random_group_variations',
    'validate_groups',

    # Naming
    'NamingScheme',
    'resolve_name',

    # Errors
    'PalForgeError',
    'InvalidInputError',
    'PaletteWriteError',
    'GroupEncodingError',

    # Services
    'Config',
    'get_config',
    'Database',
    'GenerationRun',
    'GeneratedPalette',
    'Paths',
]
