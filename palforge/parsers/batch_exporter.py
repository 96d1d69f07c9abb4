# ==============================================================================
# BATCH EXPORT MODULE
# ==============================================================================
# Writes a generated batch of palettes to an output folder.
#
# Files are written one per variation as the palettes come out of the
# composer. Each one goes to a ".tmp" file that is renamed once complete, so
# no truncated palette is ever left under a final name. A long batch can be
# cancelled between files, and a failure part way through keeps every
# completed file on disk:
#
#   - the output folder cannot be created  -> PaletteWriteError(variation=None)
#   - file v cannot be written              -> PaletteWriteError(variation=v,
#                                              written_files=[...])
#
# Every written file can be recorded in the generation history (with its
# MD5) and optionally gets a .png swatch next to it.
#
# Usage:
#   exporter = BatchExporter("out", NamingScheme(prefix="hair"))
#   result = exporter.export(compose_batch(base, groups), total=10)
#   print(result.files)
# ==============================================================================

import hashlib
import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from ..core.database import STATUS_CANCELLED, STATUS_COMPLETED, STATUS_FAILED, Database
from ..core.exceptions import PaletteWriteError
from ..core.naming import PALETTE_EXTENSION, NamingScheme, resolve_name
from .pal_parser import render_swatch


# Suffix of the scratch file a palette is written to before its rename
TEMP_SUFFIX = ".tmp"


# ==============================================================================
# DATA CLASSES
# ==============================================================================

@dataclass
class ExportResult:
    """
    Result of a batch export.

    Attributes:
        success (bool):     Whether every palette was written
        output_path (str):  Destination folder
        count (int):        Number of palettes written
        files (list):       Full paths of the written palettes, in order
        previews (list):    Full paths of written .png swatches
        cancelled (bool):   Whether the batch was stopped early
        run_id (int):       History run id, if recorded
    """
    success: bool = False
    output_path: str = ""
    count: int = 0
    files: List[str] = field(default_factory=list)
    previews: List[str] = field(default_factory=list)
    cancelled: bool = False
    run_id: Optional[int] = None


def palette_md5(data: bytes) -> str:
    """32-character MD5 of a palette buffer."""
    return hashlib.md5(data).hexdigest()


# ==============================================================================
# BATCH EXPORTER CLASS
# ==============================================================================

class BatchExporter:
    """
    Writes generated palettes to disk.

    Attributes:
        output_path: Destination folder
        naming: NamingScheme used to name each file
        database: Optional Database to record the run in
        write_preview: Also save a .png swatch per palette
    """

    def __init__(self, output_path: str, naming: Optional[NamingScheme] = None,
                 database: Optional[Database] = None, write_preview: bool = False):
        self.output_path = output_path
        self.naming = naming or NamingScheme()
        self.database = database
        self.write_preview = write_preview

    def _prepare_folder(self):
        try:
            os.makedirs(self.output_path, exist_ok=True)
        except OSError as e:
            raise PaletteWriteError(
                f"Cannot create output folder {self.output_path}: {e}",
                path=self.output_path,
            ) from e

    def _write_file(self, path: str, data: bytes):
        """Write a palette next to its final name, then move it into place."""
        temp_path = path + TEMP_SUFFIX
        try:
            with open(temp_path, 'wb') as f:
                f.write(data)
            os.replace(temp_path, path)
        except OSError:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

    def export(self, palettes: Iterable[bytes], total: int = 0,
               kind: str = 'groups', source_palette: Optional[str] = None,
               source_data: Optional[bytes] = None, group_count: int = 0,
               skin_type: Optional[int] = None,
               progress_callback: Optional[Callable] = None,
               cancel_check: Optional[Callable[[], bool]] = None) -> ExportResult:
        """
        Write every palette of a batch.

        Args:
            palettes:          Iterable of 1024-byte palettes in variation order
            total:             Expected number of palettes (for progress/history)
            kind:              Label stored in the history ("groups" or a mode)
            source_palette:    Path of the base palette (history only)
            source_data:       Base palette bytes (history MD5 only)
            group_count:       Number of groups composed (history only)
            skin_type:         Skin ramp used (history only)
            progress_callback: Optional callback(current, total, message)
            cancel_check:      Called before each file; True stops the batch

        Returns:
            ExportResult listing the written files

        Raises:
            PaletteWriteError: If the folder or a file cannot be written
        """
        self._prepare_folder()

        result = ExportResult(output_path=self.output_path)
        existing = set(os.listdir(self.output_path))

        run_id = None
        if self.database is not None:
            run = self.database.create_run(
                source_palette, self.output_path, kind=kind, requested=total,
                group_count=group_count, skin_type=skin_type,
                source_md5=palette_md5(source_data) if source_data else None,
            )
            run_id = run.id
            result.run_id = run_id

        variation = -1
        path = ""
        try:
            for variation, data in enumerate(palettes):
                if cancel_check and cancel_check():
                    result.cancelled = True
                    break

                name = resolve_name(variation + 1, self.naming, existing)
                path = os.path.join(self.output_path, name)

                if progress_callback:
                    progress_callback(variation, total, f"Writing {name}...")

                self._write_file(path, data)
                existing.add(name)
                result.files.append(path)

                if run_id is not None:
                    self.database.add_palette(run_id, variation, path, palette_md5(data))

                if self.write_preview:
                    preview_path = path[:-len(PALETTE_EXTENSION)] + ".png"
                    render_swatch(data).save(preview_path, "PNG")
                    result.previews.append(preview_path)

        except OSError as e:
            if run_id is not None:
                self.database.finish_run(run_id, len(result.files),
                                         status=STATUS_FAILED, error=str(e))
            raise PaletteWriteError(
                f"Failed to write variation {variation + 1} ({path}): {e}",
                variation=variation,
                path=path,
                written_files=result.files,
            ) from e
        except Exception as e:
            if run_id is not None:
                self.database.finish_run(run_id, len(result.files),
                                         status=STATUS_FAILED, error=str(e))
            raise

        result.count = len(result.files)
        result.success = not result.cancelled

        if run_id is not None:
            status = STATUS_CANCELLED if result.cancelled else STATUS_COMPLETED
            self.database.finish_run(run_id, result.count, status=status)

        if progress_callback:
            progress_callback(result.count, total, f"Wrote {result.count} palettes")

        return result
