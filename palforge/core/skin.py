# ==============================================================================
# SKIN-COLOR OVERLAY
# ==============================================================================
# Ragnarok Online body sprites keep the skin ramp in two fixed blocks of
# eight palette slots:
#
#   32..39    front half of the ramp
#   128..135  the same ramp mirrored
#
# After every group transform has run, these 16 slots are overwritten with
# one of two fixed ramps (DEFAULT or DARK). Group transforms never touch
# them: each group's working set is its indices minus these slots.
#
# Ramp colors are stored as #AARRGGBB, lightest first.
# ==============================================================================

from enum import IntEnum
from typing import Dict, FrozenSet, Iterable, List, Tuple

from .color import RGBA, from_hex
from .palette import set_color


class SkinTone(IntEnum):
    """Skin ramp applied by the overlay. Values are persisted."""
    DEFAULT = 0
    DARK = 1


# First slot of each mirrored block
SKIN_BLOCK_STARTS = (32, 128)

# Number of colors in one ramp
SKIN_RAMP_LENGTH = 8

# Fixed ordered list of overridden slots: 32..39 then 128..135
SKIN_INDICES: Tuple[int, ...] = tuple(
    start + offset
    for start in SKIN_BLOCK_STARTS
    for offset in range(SKIN_RAMP_LENGTH)
)

SKIN_INDEX_SET: FrozenSet[int] = frozenset(SKIN_INDICES)


SKIN_RAMPS: Dict[SkinTone, Tuple[RGBA, ...]] = {
    SkinTone.DEFAULT: tuple(from_hex(c) for c in (
        "#FFE99F91", "#FFFFE1CF", "#FFFFC6B2", "#FFF6AE9F",
        "#FFDC9084", "#FFBD736B", "#FF9E5652", "#FF823F3B",
    )),
    SkinTone.DARK: tuple(from_hex(c) for c in (
        "#FFDEB3A2", "#FFC39B8F", "#FFAF867F", "#FF99726F",
        "#FF835E5F", "#FF6D494F", "#FF543640", "#FF3B2331",
    )),
}


def skin_colors(tone: SkinTone) -> Dict[int, RGBA]:
    """Map every skin slot to the color the overlay writes there."""
    ramp = SKIN_RAMPS[SkinTone(tone)]
    return {
        index: ramp[position % SKIN_RAMP_LENGTH]
        for position, index in enumerate(SKIN_INDICES)
    }


def apply_skin_overlay(data: bytearray, tone: SkinTone = SkinTone.DEFAULT):
    """Overwrite the 16 skin slots of a scratch palette with a ramp."""
    for index, color in skin_colors(tone).items():
        set_color(data, index, color)


def exclude_skin_indices(indices: Iterable[int]) -> List[int]:
    """Group indices with the skin slots removed, order preserved."""
    return [index for index in indices if index not in SKIN_INDEX_SET]
