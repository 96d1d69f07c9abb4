# ==============================================================================
# PALFORGE - CONFIGURATION MODULE
# ==============================================================================
# Persistent settings for palette generation.
#
# This module handles:
#   - Loading/saving settings from a JSON file
#   - Default values for every setting
#   - The saved color group list (stored as an encoded (count, data) pair)
#
# Configuration is stored in: <user data dir>/config.json (see Paths)
#
# Usage:
#   from palforge.core.config import get_config
#   config = get_config()
#   config.last_output_folder = "C:/ro/data/palette"
#   config.save_groups(groups)
#   config.save()
# ==============================================================================

import json
import os
from typing import Any, Dict, List, Optional

from .color_group import ColorGroup
from .paths import Paths
from .skin import SkinTone


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================
# These are used when no config file exists or when values are missing.

DEFAULT_CONFIG = {
    # -------------------------------------------------------------------------
    # FILES
    # -------------------------------------------------------------------------
    # Base palette used for the last generation
    "last_input_palette": "",

    # Folder the last batch was written to
    "last_output_folder": "",

    # Prefix for palettes named without a class (prefix_001.pal)
    "file_prefix": "palette",

    # -------------------------------------------------------------------------
    # OUTPUT NAMING
    # -------------------------------------------------------------------------
    # Class sprite code; empty disables class/gender naming
    "class_name": "",

    # Gender code as used in sprite names
    "gender": "",

    # 0 = default sprite, 1 = costume
    "sprite_type": 0,

    # Costume id for costume palettes
    "costume_number": 1,

    # -------------------------------------------------------------------------
    # GENERATION
    # -------------------------------------------------------------------------
    # Skin ramp (0 = default, 1 = dark)
    "skin_type": 0,

    # Saved color groups (see parsers.group_codec)
    "color_group_count": 0,
    "color_groups": "",

    # Write a .png swatch next to every generated palette
    "write_preview": False,

    # Record every batch in the history database
    "record_history": True,

    # -------------------------------------------------------------------------
    # ADVANCED
    # -------------------------------------------------------------------------
    # Enable debug logging
    "debug_mode": False,
}


# ==============================================================================
# CONFIGURATION CLASS
# ==============================================================================
class Config:
    """
    Configuration manager for PalForge.

    Settings are stored in a JSON file and exposed as properties.

    Attributes:
        config_path: Path to the configuration file
        data: Dictionary containing all settings

    Example:
        >>> config = Config("settings.json")
        >>> config.load()
        >>> config.skin_type = SkinTone.DARK
        >>> config.save()
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to config file. If None, uses Paths.get_config_path().
        """
        self.config_path = config_path or Paths.get_config_path()
        self.data: Dict[str, Any] = DEFAULT_CONFIG.copy()

    # -------------------------------------------------------------------------
    # LOADING AND SAVING
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """
        Load configuration from file.

        Unknown keys are ignored and missing keys keep their defaults.

        Returns:
            True if file was loaded, False if using defaults
        """
        if not os.path.isfile(self.config_path):
            print(f"[INFO] Config file not found, using defaults")
            return False

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            print(f"[ERROR] Invalid config file: {e}")
            return False
        except OSError as e:
            print(f"[ERROR] Failed to load config: {e}")
            return False

        if not isinstance(loaded, dict):
            print(f"[ERROR] Invalid config file: expected a JSON object")
            return False

        for key, value in loaded.items():
            if key in self.data:
                self.data[key] = value

        if self.debug_mode:
            print(f"[INFO] Loaded config from {self.config_path}")
        return True

    def save(self) -> bool:
        """
        Save configuration to file, creating its folder if needed.

        Returns:
            True if saved successfully
        """
        try:
            folder = os.path.dirname(self.config_path)
            if folder:
                os.makedirs(folder, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=4, sort_keys=True)
        except OSError as e:
            print(f"[ERROR] Failed to save config: {e}")
            return False

        if self.debug_mode:
            print(f"[INFO] Saved config to {self.config_path}")
        return True

    # -------------------------------------------------------------------------
    # PROPERTY ACCESS
    # -------------------------------------------------------------------------

    @property
    def last_input_palette(self) -> str:
        return self.data.get('last_input_palette', '')

    @last_input_palette.setter
    def last_input_palette(self, value: str):
        self.data['last_input_palette'] = value or ''

    @property
    def last_output_folder(self) -> str:
        return self.data.get('last_output_folder', '')

    @last_output_folder.setter
    def last_output_folder(self, value: str):
        self.data['last_output_folder'] = value or ''

    @property
    def file_prefix(self) -> str:
        """Prefix for unstructured names (never empty)."""
        return self.data.get('file_prefix') or 'palette'

    @file_prefix.setter
    def file_prefix(self, value: str):
        self.data['file_prefix'] = value.strip() if value else 'palette'

    @property
    def class_name(self) -> str:
        return self.data.get('class_name', '')

    @class_name.setter
    def class_name(self, value: str):
        self.data['class_name'] = value or ''

    @property
    def gender(self) -> str:
        return self.data.get('gender', '')

    @gender.setter
    def gender(self, value: str):
        self.data['gender'] = value or ''

    @property
    def sprite_type(self) -> int:
        """0 = default sprite, 1 = costume."""
        return self.data.get('sprite_type', 0)

    @sprite_type.setter
    def sprite_type(self, value: int):
        if int(value) not in (0, 1):
            raise ValueError("sprite_type must be 0 (default) or 1 (costume)")
        self.data['sprite_type'] = int(value)

    @property
    def costume_number(self) -> int:
        return self.data.get('costume_number', 1)

    @costume_number.setter
    def costume_number(self, value: int):
        self.data['costume_number'] = max(0, int(value))

    @property
    def skin_type(self) -> SkinTone:
        """Skin ramp applied by the overlay."""
        try:
            return SkinTone(self.data.get('skin_type', 0))
        except ValueError:
            return SkinTone.DEFAULT

    @skin_type.setter
    def skin_type(self, value: int):
        self.data['skin_type'] = int(SkinTone(value))

    @property
    def write_preview(self) -> bool:
        return self.data.get('write_preview', False)

    @write_preview.setter
    def write_preview(self, value: bool):
        self.data['write_preview'] = bool(value)

    @property
    def record_history(self) -> bool:
        return self.data.get('record_history', True)

    @record_history.setter
    def record_history(self, value: bool):
        self.data['record_history'] = bool(value)

    @property
    def debug_mode(self) -> bool:
        """Check if debug mode is enabled."""
        return self.data.get('debug_mode', False)

    @debug_mode.setter
    def debug_mode(self, value: bool):
        self.data['debug_mode'] = bool(value)

    # -------------------------------------------------------------------------
    # COLOR GROUPS
    # -------------------------------------------------------------------------

    def load_groups(self) -> List[ColorGroup]:
        """Decode the saved color group list (malformed groups are skipped)."""
        from ..parsers.group_codec import decode_groups

        return decode_groups(self.data.get('color_group_count', 0),
                             self.data.get('color_groups', ''))

    def save_groups(self, groups: List[ColorGroup]):
        """Encode and store a color group list (call save() to persist)."""
        from ..parsers.group_codec import encode_groups

        count, data = encode_groups(groups)
        self.data['color_group_count'] = count
        self.data['color_groups'] = data


# ==============================================================================
# GLOBAL CONFIG INSTANCE
# ==============================================================================

_global_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Creates and loads config on first call.
    """
    global _global_config

    if _global_config is None:
        _global_config = Config()
        _global_config.load()

    return _global_config
