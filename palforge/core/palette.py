# ==============================================================================
# PALETTE BUFFER HELPERS
# ==============================================================================
# Raw access to Ragnarok Online palettes as the engine sees them.
#
# PALETTE LAYOUT:
# ---------------
#   256 entries x 4 bytes (R, G, B, A) = 1024 bytes
#   Byte 3 (alpha of index 0) is the transparency key and must be 0 in
#   every palette the engine hands back.
#
# The base palette is always kept as immutable bytes. Transforms read from
# it and their results are written into a fresh bytearray copy, so repeated
# generation or preview never alters the source.
# ==============================================================================

from typing import Dict, Optional, Union

from .color import RGBA
from .exceptions import InvalidInputError


# ==============================================================================
# CONSTANTS
# ==============================================================================

# Palette size in bytes (256 colors * 4 bytes each)
PALETTE_SIZE = 1024

# Number of colors in a palette
PALETTE_COLOR_COUNT = 256

# Absolute offset of the transparency-key byte
TRANSPARENCY_KEY_OFFSET = 3


# Color updates produced by a transform: palette index -> new RGBA
ColorUpdates = Dict[int, RGBA]


def ensure_palette(data: Optional[Union[bytes, bytearray]]) -> bytes:
    """
    Validate a base palette and return it as immutable bytes.

    Args:
        data: Raw palette data

    Returns:
        The same data as bytes

    Raises:
        InvalidInputError: If the palette is missing or not 1024 bytes
    """
    if data is None:
        raise InvalidInputError("No base palette provided")
    if len(data) != PALETTE_SIZE:
        raise InvalidInputError(
            f"Invalid palette: expected {PALETTE_SIZE} bytes, got {len(data)}"
        )
    return bytes(data)


def get_color(data: Union[bytes, bytearray], index: int) -> RGBA:
    """Read the RGBA entry at a palette index."""
    offset = index * 4
    return (data[offset], data[offset + 1], data[offset + 2], data[offset + 3])


def set_color(data: bytearray, index: int, color: RGBA):
    """Write an RGBA entry at a palette index."""
    offset = index * 4
    data[offset:offset + 4] = bytes(color)


def apply_updates(data: bytearray, updates: ColorUpdates):
    """Write every (index, color) pair of a transform result into data."""
    for index, color in updates.items():
        set_color(data, index, color)


def finalize(data: bytearray) -> bytes:
    """Force the transparency key to 0 and freeze the palette."""
    data[TRANSPARENCY_KEY_OFFSET] = 0
    return bytes(data)
