# ==============================================================================
# COLOR GROUP
# ==============================================================================
# A color group is the unit a user authors: a named set of palette indices,
# the transformation mode to run on them, that mode's parameters and how many
# variations the group cycles through.
#
# Index order matters. The HSV Standard transform spreads its hue range over
# the indices in the order they were selected, so the list is kept exactly
# as given (duplicates dropped, first occurrence wins) and never re-sorted.
#
# Validity is a derived predicate (is_valid / validation_errors). Invalid
# groups are reported to the caller, never silently repaired.
#
# Usage:
#   group = ColorGroup(name="Hair", indices=[16, 17, 18, 19],
#                      mode=GenerationMode.COLORIZE, variation_count=12)
#   if group.is_valid():
#       ...
#   copy = group.duplicate()     # "Hair (Copy)"
# ==============================================================================

from dataclasses import dataclass, field
from typing import Iterable, List

from .palette import PALETTE_COLOR_COUNT
from .parameters import GenerationMode, GenerationParameters


# Name given to groups created without one
DEFAULT_GROUP_NAME = "New Group"

# Variation count of a freshly created group
DEFAULT_VARIATION_COUNT = 10


def unique_indices(indices: Iterable[int]) -> List[int]:
    """Drop repeated indices while keeping first-seen order."""
    seen = set()
    result = []
    for index in indices:
        index = int(index)
        if index not in seen:
            seen.add(index)
            result.append(index)
    return result


@dataclass
class ColorGroup:
    """
    A named bundle of palette indices, a mode, parameters and a
    variation count.

    Attributes:
        name (str):                  Display name (never empty)
        indices (List[int]):         Palette indices in selection order
        mode (GenerationMode):       Transformation to apply
        parameters:                  GenerationParameters for all modes
        variation_count (int):       Number of variations this group cycles
    """
    name: str = DEFAULT_GROUP_NAME
    indices: List[int] = field(default_factory=list)
    mode: GenerationMode = GenerationMode.HSV_STANDARD
    parameters: GenerationParameters = field(default_factory=GenerationParameters)
    variation_count: int = DEFAULT_VARIATION_COUNT

    def __post_init__(self):
        if not self.name:
            self.name = DEFAULT_GROUP_NAME
        self.indices = unique_indices(self.indices or [])
        self.mode = GenerationMode(self.mode)
        if self.parameters is None:
            self.parameters = GenerationParameters()

    # ==========================================================================
    # VALIDATION
    # ==========================================================================

    def validation_errors(self) -> List[str]:
        """
        List every reason this group cannot be used for generation.

        Returns:
            Human-readable problems; empty if the group is valid
        """
        errors = []

        try:
            GenerationMode(self.mode)
        except ValueError:
            errors.append(f"unknown generation mode: {self.mode!r}")

        if not self.indices:
            errors.append("no palette indices selected")

        out_of_range = [i for i in self.indices if i < 0 or i >= PALETTE_COLOR_COUNT]
        if out_of_range:
            errors.append(f"indices out of range 0-255: {out_of_range}")

        if not isinstance(self.variation_count, int) or self.variation_count < 1:
            errors.append(f"variation count must be >= 1 (got {self.variation_count})")

        return errors

    def is_valid(self) -> bool:
        """Whether this group can be used for generation."""
        return not self.validation_errors()

    # ==========================================================================
    # COPYING / DISPLAY
    # ==========================================================================

    def duplicate(self) -> 'ColorGroup':
        """Deep copy of this group with " (Copy)" appended to the name."""
        return ColorGroup(
            name=f"{self.name} (Copy)",
            indices=list(self.indices),
            mode=self.mode,
            parameters=self.parameters.copy(),
            variation_count=self.variation_count,
        )

    def indices_string(self) -> str:
        """Sorted indices as compact ranges, e.g. "1-5,10,32-39"."""
        return format_indices(self.indices)

    def __str__(self):
        return (f"{self.name} [{self.mode.label}] x{self.variation_count}: "
                f"{self.indices_string()}")


# ==============================================================================
# INDEX RANGE STRINGS
# ==============================================================================

def format_indices(indices: Iterable[int]) -> str:
    """
    Format indices as sorted, comma-separated ranges.

    Example:
        >>> format_indices([5, 1, 2, 3, 10])
        '1-3,5,10'
    """
    ordered = sorted(set(indices))
    if not ordered:
        return ""

    ranges = []
    start = end = ordered[0]
    for index in ordered[1:]:
        if index == end + 1:
            end = index
            continue
        ranges.append(str(start) if start == end else f"{start}-{end}")
        start = end = index
    ranges.append(str(start) if start == end else f"{start}-{end}")

    return ",".join(ranges)


def parse_indices(text: str) -> List[int]:
    """
    Parse a range string such as "16-23,40,42" into a list of indices.

    Ranges expand in the direction written, so "23-16" selects the same
    slots in reverse order.

    Raises:
        ValueError: On malformed tokens
    """
    indices = []
    for token in text.split(','):
        token = token.strip()
        if not token:
            continue
        if '-' in token[1:]:
            split_at = token.index('-', 1)
            start = int(token[:split_at])
            end = int(token[split_at + 1:])
            step = 1 if end >= start else -1
            indices.extend(range(start, end + step, step))
        else:
            indices.append(int(token))
    return unique_indices(indices)
