# ==============================================================================
# PARSERS MODULE
# ==============================================================================
# File formats and persistence for PalForge.
#
#   - PAL: 1024-byte Ragnarok Online palettes, plus swatch images
#   - Group codec: text encoding of saved color groups
#   - BatchExporter: writes generated batches to disk
# ==============================================================================

from .pal_parser import PALParser, contact_sheet, render_swatch
from .group_codec import decode_groups, encode_groups
from .batch_exporter import BatchExporter, ExportResult

__all__ = [
    # PAL Parser
    'PALParser', 'render_swatch', 'contact_sheet',

    # Group codec
    'encode_groups', 'decode_groups',

    # Batch Exporter
    'BatchExporter', 'ExportResult',
]
