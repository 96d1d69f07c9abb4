# ==============================================================================
# PALFORGE - PATH UTILITIES
# ==============================================================================
# Where PalForge keeps its own files.
#
# User data (settings, generation history) lives in a per-user folder:
#   - Windows: %APPDATA%/PalForge/
#   - Linux:   $XDG_CONFIG_HOME/PalForge/ (default ~/.config/PalForge/)
#   - macOS:   ~/Library/Application Support/PalForge/
#
# Setting PALFORGE_DATA_DIR overrides the location entirely.
#
# Usage:
#   from palforge.core.paths import Paths
#   config_path = Paths.get_config_path()
#   db_path = Paths.get_database_path()
# ==============================================================================

import os
import sys
from typing import Optional


class Paths:
    """
    Centralized path management for PalForge.

    All lookups are class methods; computed folders are cached on the class
    and can be cleared with reset().
    """

    # Application name for folder creation
    APP_NAME = "PalForge"

    # Environment variable that overrides the user data folder
    DATA_DIR_ENV = "PALFORGE_DATA_DIR"

    _user_data_dir: Optional[str] = None

    @classmethod
    def reset(cls):
        """Forget cached folders (used after changing PALFORGE_DATA_DIR)."""
        cls._user_data_dir = None

    @classmethod
    def get_user_data_dir(cls) -> str:
        """
        Get the user data directory, creating it if needed.

        Returns:
            Absolute path to the user data directory
        """
        if cls._user_data_dir is None:
            override = os.environ.get(cls.DATA_DIR_ENV)
            if override:
                cls._user_data_dir = os.path.abspath(override)
            elif sys.platform == 'win32':
                base = os.environ.get('APPDATA', os.path.expanduser('~'))
                cls._user_data_dir = os.path.join(base, cls.APP_NAME)
            elif sys.platform == 'darwin':
                cls._user_data_dir = os.path.join(
                    os.path.expanduser('~'),
                    'Library', 'Application Support', cls.APP_NAME
                )
            else:
                base = os.environ.get('XDG_CONFIG_HOME',
                                      os.path.join(os.path.expanduser('~'), '.config'))
                cls._user_data_dir = os.path.join(base, cls.APP_NAME)

            os.makedirs(cls._user_data_dir, exist_ok=True)

        return cls._user_data_dir

    @classmethod
    def get_config_path(cls) -> str:
        """Absolute path to config.json."""
        return os.path.join(cls.get_user_data_dir(), 'config.json')

    @classmethod
    def get_database_path(cls) -> str:
        """Absolute path to the generation history database."""
        return os.path.join(cls.get_user_data_dir(), 'palforge.db')

    @classmethod
    def get_default_output_dir(cls) -> str:
        """
        Default folder for generated palettes.

        Returns:
            Documents/PalForge on Windows, ~/PalForge elsewhere
        """
        if sys.platform == 'win32':
            docs = os.path.join(os.path.expanduser('~'), 'Documents')
        else:
            docs = os.path.expanduser('~')
        return os.path.join(docs, cls.APP_NAME)
