# ==============================================================================
# OUTPUT NAMING
# ==============================================================================
# Assigns a file name to each generated palette.
#
# NAME FORMATS (ordinal is 1-based):
# ----------------------------------
#   Class sprite:    {class}_{gender}_1_{ordinal}.pal
#   Costume sprite:  {class}_{gender}_{300 + ordinal - 1}_{costume}.pal
#   No class set:    {prefix}_{ordinal:03}.pal
#
# The class/gender formats are only used when BOTH codes are non-empty.
#
# COLLISIONS:
# -----------
# When the candidate is taken, "_{n}" is appended to the stem. n starts one
# past the highest counter already present for that stem and goes up until a
# free name turns up:
#
#   existing: knight_m_1_1.pal, knight_m_1_1_2.pal
#   request:  ordinal 1  ->  knight_m_1_1_3.pal
#
# The resolver works on a set of names supplied by the caller, so it never
# touches the filesystem itself.
# ==============================================================================

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Set


# Extension of every generated palette
PALETTE_EXTENSION = ".pal"

# First variation number used by costume palettes
COSTUME_VARIATION_BASE = 300

DEFAULT_PREFIX = "palette"

INVALID_FILENAME_CHARS = '<>:"/\\|?*'


@dataclass
class NamingScheme:
    """
    How generated palettes are named.

    Attributes:
        prefix (str):          Prefix for unstructured names
        class_name (str):      Job/class sprite code (e.g. "knight")
        gender (str):          Gender code as used in sprite names
        costume (bool):        Use the costume numbering
        costume_number (int):  Costume id for costume names
    """
    prefix: str = DEFAULT_PREFIX
    class_name: str = ""
    gender: str = ""
    costume: bool = False
    costume_number: int = 0

    @property
    def structured(self) -> bool:
        """Whether class/gender naming applies."""
        return bool(self.class_name) and bool(self.gender)


def sanitize_component(text: str) -> str:
    """Replace characters that are not allowed in file names."""
    for char in INVALID_FILENAME_CHARS:
        text = text.replace(char, "_")
    return text.strip(" .")


def candidate_stem(ordinal: int, scheme: NamingScheme) -> str:
    """Name for a 1-based ordinal, without extension or counter."""
    if scheme.structured:
        class_name = sanitize_component(scheme.class_name)
        gender = sanitize_component(scheme.gender)
        if scheme.costume:
            variation = COSTUME_VARIATION_BASE + ordinal - 1
            return f"{class_name}_{gender}_{variation}_{scheme.costume_number}"
        return f"{class_name}_{gender}_1_{ordinal}"

    prefix = sanitize_component(scheme.prefix or "") or DEFAULT_PREFIX
    return f"{prefix}_{ordinal:03d}"


def highest_counter(stem: str, existing: Iterable[str]) -> int:
    """Largest "_{n}" counter present for stem among existing names (0 if none)."""
    pattern = re.compile(rf"^{re.escape(stem)}_(\d+){re.escape(PALETTE_EXTENSION)}$")
    highest = 0
    for name in existing:
        match = pattern.match(name)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest


def resolve_name(ordinal: int, scheme: NamingScheme,
                 existing: Optional[Set[str]] = None) -> str:
    """
    Pick a free file name for a generated palette.

    Args:
        ordinal:  1-based output number
        scheme:   NamingScheme to use
        existing: File names already present in the output folder

    Returns:
        File name (no directory) that is not in existing
    """
    existing = existing or set()
    stem = candidate_stem(ordinal, scheme)

    name = stem + PALETTE_EXTENSION
    if name not in existing:
        return name

    counter = highest_counter(stem, existing) + 1
    while True:
        name = f"{stem}_{counter}{PALETTE_EXTENSION}"
        if name not in existing:
            return name
        counter += 1
