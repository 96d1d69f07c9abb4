# ==============================================================================
# PALFORGE - EXCEPTIONS
# ==============================================================================
# Typed failures raised by the generation engine and its I/O layers.
#
#   PalForgeError
#     ├── InvalidInputError   - bad base palette, empty/invalid group list
#     ├── PaletteWriteError   - output folder or file could not be written
#     └── GroupEncodingError  - malformed persisted group record
#
# Every failure is recoverable by the caller. Nothing is written when an
# InvalidInputError is raised; files written before a PaletteWriteError are
# kept and listed on the exception.
# ==============================================================================

from typing import List, Optional


class PalForgeError(Exception):
    """Base exception for all PalForge errors."""
    pass


class InvalidInputError(PalForgeError):
    """
    Raised when the engine is handed input it cannot work with.

    Attributes:
        group_name: Name of the offending color group, if any
    """

    def __init__(self, message: str, group_name: Optional[str] = None):
        super().__init__(message)
        self.group_name = group_name


class PaletteWriteError(PalForgeError):
    """
    Raised when a generated palette cannot be written to disk.

    Attributes:
        variation:     0-based variation that failed (None if the output
                       folder itself could not be created)
        path:          Path that could not be written
        written_files: Files successfully written before the failure
    """

    def __init__(self, message: str, variation: Optional[int] = None,
                 path: str = "", written_files: Optional[List[str]] = None):
        super().__init__(message)
        self.variation = variation
        self.path = path
        self.written_files = list(written_files or [])


class GroupEncodingError(PalForgeError):
    """Raised when a persisted color group record cannot be decoded."""
    pass
