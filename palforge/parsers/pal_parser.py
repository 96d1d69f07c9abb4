# ==============================================================================
# PAL (PALETTE) FILE PARSER
# ==============================================================================
# Reads and writes Ragnarok Online .pal palette files.
#
# PAL FILE FORMAT:
# ----------------
# 256 colors x 4 bytes (R, G, B, A) = exactly 1024 bytes, no header.
# The bytes are kept exactly as read: the generator works on the raw buffer
# and only touches the slots it is told to.
#
# USAGE EXAMPLE:
# --------------
#   parser = PALParser()
#   if parser.load("body_1.pal"):
#       base = parser.data                    # 1024 immutable bytes
#       parser.to_image().save("body_1.png")  # 16x16 swatch grid
# ==============================================================================

from typing import List, Optional, Sequence

from PIL import Image, ImageDraw

from ..core.color import RGBA
from ..core.palette import PALETTE_COLOR_COUNT, PALETTE_SIZE, get_color


# Colors per swatch row
SWATCH_COLUMNS = 16


# ==============================================================================
# PAL PARSER CLASS
# ==============================================================================

class PALParser:
    """
    Parser for Ragnarok Online .pal palette files.

    Attributes:
        filename (str): Path of the loaded file
        data (bytes):   Raw 1024-byte palette (None until loaded)

    Usage:
        parser = PALParser()
        if parser.load("sprite_1.pal"):
            colors = parser.palette
    """

    def __init__(self, data: Optional[bytes] = None):
        self.filename: str = ""
        self.data: Optional[bytes] = None
        if data is not None:
            self.load_from_bytes(data)

    # ==========================================================================
    # PUBLIC METHODS
    # ==========================================================================

    def load(self, file_path: str) -> bool:
        """
        Load a palette from a .pal file.

        Args:
            file_path: Path to the .pal file

        Returns:
            True if loaded successfully, False otherwise
        """
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except FileNotFoundError:
            print(f"[ERROR] Palette file not found: {file_path}")
            return False
        except OSError as e:
            print(f"[ERROR] Failed to load palette {file_path}: {e}")
            return False

        self.filename = file_path
        return self.load_from_bytes(data)

    def load_from_bytes(self, data: bytes) -> bool:
        """
        Load a palette from raw bytes.

        Args:
            data: Raw palette bytes (must be exactly 1024)

        Returns:
            True if accepted, False otherwise
        """
        if len(data) != PALETTE_SIZE:
            print(f"[ERROR] Invalid palette size: {len(data)} bytes (expected {PALETTE_SIZE})")
            return False

        self.data = bytes(data)
        return True

    def save(self, file_path: str) -> bool:
        """
        Save the current palette to a .pal file.

        Returns:
            True if saved successfully, False otherwise
        """
        if self.data is None:
            print(f"[ERROR] No palette loaded")
            return False

        try:
            with open(file_path, 'wb') as f:
                f.write(self.data)
        except OSError as e:
            print(f"[ERROR] Failed to save palette: {e}")
            return False

        return True

    @property
    def is_loaded(self) -> bool:
        """Whether palette data is present."""
        return self.data is not None

    @property
    def palette(self) -> List[RGBA]:
        """The 256 colors as RGBA tuples."""
        if self.data is None:
            return []
        return [get_color(self.data, i) for i in range(PALETTE_COLOR_COUNT)]

    def get_color(self, index: int) -> RGBA:
        """
        Get a specific color from the palette.

        Args:
            index: Color index (0-255)

        Returns:
            RGBA tuple, (0, 0, 0, 0) if out of range or nothing is loaded
        """
        if self.data is None or not 0 <= index < PALETTE_COLOR_COUNT:
            return (0, 0, 0, 0)
        return get_color(self.data, index)

    # ==========================================================================
    # UTILITY METHODS
    # ==========================================================================

    def to_image(self, cell_size: int = 16) -> Optional[Image.Image]:
        """
        Render the palette as a 16x16 grid of color cells.

        Alpha is ignored: RO palettes use a color key, not alpha, so every
        cell is drawn opaque.

        Args:
            cell_size: Size of each color cell in pixels

        Returns:
            PIL.Image, or None if nothing is loaded
        """
        if self.data is None:
            return None
        return render_swatch(self.data, cell_size)


def render_swatch(data: bytes, cell_size: int = 16) -> Image.Image:
    """Draw a 1024-byte palette as a 16x16 grid of opaque cells."""
    size = SWATCH_COLUMNS * cell_size
    img = Image.new('RGB', (size, size), (128, 128, 128))
    draw = ImageDraw.Draw(img)

    for i in range(PALETTE_COLOR_COUNT):
        r, g, b, _ = get_color(data, i)
        x = (i % SWATCH_COLUMNS) * cell_size
        y = (i // SWATCH_COLUMNS) * cell_size
        draw.rectangle([x, y, x + cell_size - 1, y + cell_size - 1], fill=(r, g, b))

    return img


def contact_sheet(palettes: Sequence[bytes], columns: int = 5, cell_size: int = 4,
                  padding: int = 4,
                  background=(32, 32, 48)) -> Optional[Image.Image]:
    """
    Lay out several palette swatches on one image.

    Args:
        palettes:   1024-byte palettes, drawn left to right, top to bottom
        columns:    Swatches per row
        cell_size:  Pixel size of one color cell
        padding:    Gap between swatches
        background: Sheet background color

    Returns:
        PIL.Image, or None for an empty list
    """
    if not palettes:
        return None

    columns = max(1, min(columns, len(palettes)))
    rows = (len(palettes) + columns - 1) // columns
    swatch = SWATCH_COLUMNS * cell_size

    width = columns * swatch + (columns + 1) * padding
    height = rows * swatch + (rows + 1) * padding
    sheet = Image.new('RGB', (width, height), background)

    for n, data in enumerate(palettes):
        x = padding + (n % columns) * (swatch + padding)
        y = padding + (n // columns) * (swatch + padding)
        sheet.paste(render_swatch(data, cell_size), (x, y))

    return sheet
