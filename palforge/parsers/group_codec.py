# ==============================================================================
# COLOR GROUP ENCODING
# ==============================================================================
# Text encoding used to persist a list of color groups in the settings file.
#
# FORMAT:
# -------
# A group list is stored as a pair (count, data):
#
#   count   number of groups
#   data    the groups joined by "||"
#
# Each group is five ";"-separated fields:
#
#   name ; mode ; variation_count ; indices ; parameters
#
#   name        ";" written as ";;" and "|" written as "||"
#   mode        0 = HSV Standard, 1 = Colorize, 2 = Grayscale
#   indices     comma-separated, in selection order
#   parameters  three "|"-separated blocks:
#                 hsv:hMin,hMax,hStep,sMin,sMax,sStep,lMin,lMax,lStep
#                 colorize:light,medium,dark,saturation,brightness
#                 grayscale:type,light,medium,dark,contrast,brightness
#
# Floats are written with repr(), the shortest string that reads back to the
# same float, so encode -> decode is exact.
#
# Example (one group):
#   Hair;1;12;16,17,18;hsv:0.0,360.0,10.0,0.0,0.0,0.0,0.0,0.0,0.0|colorize:...
#
# DECODING:
# ---------
# The name is read with an escape-aware scanner (a doubled ";" or "|" is a
# literal, a single ";" ends the name). The remaining fields run up to the
# next "||" or the end of the data. A group that cannot be decoded is
# reported and skipped; the rest of the list still loads.
# ==============================================================================

from typing import List, Optional, Sequence, Tuple

from ..core.color_group import ColorGroup
from ..core.exceptions import GroupEncodingError
from ..core.parameters import GenerationMode, GenerationParameters, GrayscaleType


GROUP_SEPARATOR = "||"
FIELD_SEPARATOR = ";"
BLOCK_SEPARATOR = "|"

HSV_FIELDS = (
    'hue_min', 'hue_max', 'hue_step',
    'saturation_min', 'saturation_max', 'saturation_step',
    'lightness_min', 'lightness_max', 'lightness_step',
)

COLORIZE_FIELDS = (
    'colorize_hue_light', 'colorize_hue_medium', 'colorize_hue_dark',
    'colorize_saturation', 'colorize_brightness',
)

GRAYSCALE_FIELDS = (
    'grayscale_light_tone', 'grayscale_medium_tone', 'grayscale_dark_tone',
    'grayscale_contrast', 'grayscale_brightness',
)


# ==============================================================================
# ENCODING
# ==============================================================================

def escape_name(name: str) -> str:
    """Double every ';' and '|' so the name cannot end a field or group."""
    return name.replace(';', ';;').replace('|', '||')


def _floats(parameters: GenerationParameters, fields: Sequence[str]) -> str:
    return ",".join(repr(float(getattr(parameters, name))) for name in fields)


def encode_parameters(parameters: GenerationParameters) -> str:
    """Encode a parameter set as its three tagged blocks."""
    blocks = [
        "hsv:" + _floats(parameters, HSV_FIELDS),
        "colorize:" + _floats(parameters, COLORIZE_FIELDS),
        f"grayscale:{int(parameters.grayscale_type)},"
        + _floats(parameters, GRAYSCALE_FIELDS),
    ]
    return BLOCK_SEPARATOR.join(blocks)


def encode_group(group: ColorGroup) -> str:
    """Encode a single group record."""
    fields = [
        escape_name(group.name),
        str(int(group.mode)),
        str(int(group.variation_count)),
        ",".join(str(i) for i in group.indices),
        encode_parameters(group.parameters),
    ]
    return FIELD_SEPARATOR.join(fields)


def encode_groups(groups: Sequence[ColorGroup]) -> Tuple[int, str]:
    """
    Encode a group list for persistence.

    Returns:
        (count, data); (0, "") for an empty list
    """
    if not groups:
        return 0, ""
    return len(groups), GROUP_SEPARATOR.join(encode_group(g) for g in groups)


# ==============================================================================
# DECODING
# ==============================================================================

def _scan_name(data: str, start: int) -> Tuple[str, int]:
    """
    Read an escaped name starting at `start`.

    Returns:
        (name, position just past the terminating ';')

    Raises:
        GroupEncodingError: If the name is never terminated
    """
    chars = []
    i = start
    length = len(data)
    while i < length:
        ch = data[i]
        if ch == ';':
            if i + 1 < length and data[i + 1] == ';':
                chars.append(';')
                i += 2
                continue
            return "".join(chars), i + 1
        if ch == '|' and i + 1 < length and data[i + 1] == '|':
            chars.append('|')
            i += 2
            continue
        chars.append(ch)
        i += 1

    raise GroupEncodingError(f"Unterminated group name at offset {start}")


def _parse_floats(text: str, expected: int, block: str) -> List[float]:
    parts = text.split(',')
    if len(parts) != expected:
        raise GroupEncodingError(
            f"{block} block has {len(parts)} values, expected {expected}"
        )
    try:
        return [float(p) for p in parts]
    except ValueError as e:
        raise GroupEncodingError(f"Bad number in {block} block: {e}") from e


def decode_parameters(text: str) -> GenerationParameters:
    """
    Decode the tagged parameter blocks. Missing blocks keep their defaults.

    Raises:
        GroupEncodingError: On unknown tags or wrong value counts
    """
    parameters = GenerationParameters()
    if not text:
        return parameters

    for block in text.split(BLOCK_SEPARATOR):
        tag, sep, values = block.partition(':')
        if not sep:
            raise GroupEncodingError(f"Parameter block without tag: {block!r}")

        if tag == 'hsv':
            for name, value in zip(HSV_FIELDS, _parse_floats(values, len(HSV_FIELDS), tag)):
                setattr(parameters, name, value)
        elif tag == 'colorize':
            for name, value in zip(COLORIZE_FIELDS,
                                   _parse_floats(values, len(COLORIZE_FIELDS), tag)):
                setattr(parameters, name, value)
        elif tag == 'grayscale':
            type_text, _, rest = values.partition(',')
            try:
                parameters.grayscale_type = GrayscaleType(int(type_text))
            except ValueError as e:
                raise GroupEncodingError(f"Bad grayscale type: {type_text!r}") from e
            for name, value in zip(GRAYSCALE_FIELDS,
                                   _parse_floats(rest, len(GRAYSCALE_FIELDS), tag)):
                setattr(parameters, name, value)
        else:
            raise GroupEncodingError(f"Unknown parameter block: {tag!r}")

    return parameters


def decode_group(name: str, fields: str) -> ColorGroup:
    """
    Build a group from its unescaped name and the text after it.

    Raises:
        GroupEncodingError: If any field is malformed
    """
    parts = fields.split(FIELD_SEPARATOR)
    if len(parts) != 4:
        raise GroupEncodingError(
            f"Group '{name}' has {len(parts) + 1} fields, expected 5"
        )
    mode_text, count_text, indices_text, parameters_text = parts

    try:
        mode = GenerationMode(int(mode_text))
        variation_count = int(count_text)
        indices = [int(i) for i in indices_text.split(',')] if indices_text else []
    except ValueError as e:
        raise GroupEncodingError(f"Group '{name}': {e}") from e

    return ColorGroup(
        name=name,
        indices=indices,
        mode=mode,
        parameters=decode_parameters(parameters_text),
        variation_count=variation_count,
    )


def decode_groups(count: Optional[int], data: Optional[str]) -> List[ColorGroup]:
    """
    Decode a persisted (count, data) pair.

    Malformed groups are skipped with a warning. An empty or wholly
    unreadable blob decodes to an empty list.

    Args:
        count: Stored group count
        data:  Encoded groups

    Returns:
        Decoded groups in stored order
    """
    if not count or not data:
        return []

    groups = []
    position = 0
    length = len(data)

    while position < length:
        try:
            name, position = _scan_name(data, position)
        except GroupEncodingError as e:
            print(f"[WARN] Skipping color group: {e}")
            break

        end = data.find(GROUP_SEPARATOR, position)
        if end == -1:
            end = length

        try:
            groups.append(decode_group(name, data[position:end]))
        except GroupEncodingError as e:
            print(f"[WARN] Skipping color group: {e}")

        position = end + len(GROUP_SEPARATOR)

    if len(groups) != count:
        print(f"[WARN] Expected {count} color groups, decoded {len(groups)}")

    return groups
