# ==============================================================================
# MODVFS - CONFIGURATION MODULE
# ==============================================================================
# Centralized configuration management for the application.
#
# This module handles:
#   - Loading/saving configuration from JSON file
#   - Default values for all settings
#   - The mount profile: ordered list of containers to mount
#
# Configuration is stored in: data/config.json
#
# Usage:
#   from modvfs.core.config import Config
#   config = Config()
#   config.load()
#   config.add_container("Data/Base.pak")
#   config.add_container("Data/Mod1.pak", password="secret")
#   config.save()
# ==============================================================================

import os
import json
import codecs
from typing import Optional, Dict, Any, List


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================
# These are used when no config file exists or when values are missing.

DEFAULT_CONFIG = {
    # -------------------------------------------------------------------------
    # MOUNT PROFILE
    # -------------------------------------------------------------------------
    # Containers mounted in order, later ones override earlier ones.
    # Each item: {"path": "Data/Mod1.pak", "password": null}
    "containers": [],

    # -------------------------------------------------------------------------
    # READING
    # -------------------------------------------------------------------------
    # Encoding used when reading files as text
    "default_encoding": "utf-8",

    # Default number of reads for the benchmark command
    "benchmark_iterations": 10000,

    # -------------------------------------------------------------------------
    # BROWSER SETTINGS
    # -------------------------------------------------------------------------
    # Max characters shown in text preview
    "text_preview_limit": 10000,

    # Bytes shown in hex preview
    "hex_preview_bytes": 256,

    # Remember window size/position
    "remember_window_state": True,

    # Window width
    "window_width": 1200,

    # Window height
    "window_height": 800,

    # -------------------------------------------------------------------------
    # ADVANCED
    # -------------------------------------------------------------------------
    # Enable debug output
    "debug_mode": False,
}


# ==============================================================================
# CONFIGURATION CLASS
# ==============================================================================
class Config:
    """
    Configuration manager for ModVFS.

    Handles loading, saving, and accessing application settings.
    Settings are stored in a JSON file and can be accessed as
    properties on this object.

    Attributes:
        config_path: Path to the configuration file
        data: Dictionary containing all settings

    Example:
        >>> config = Config("my_config.json")
        >>> config.load()
        >>> config.default_encoding = "latin-1"
        >>> config.save()
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to config file. If None, uses default location.
        """
        if config_path:
            self.config_path = config_path
        else:
            # Default: data/config.json relative to project root
            self.config_path = os.path.join(get_project_root(), 'data', 'config.json')

        # Initialize with defaults (lists copied so instances never share them)
        self.data: Dict[str, Any] = _default_data()

        # Track if config has been modified
        self._modified = False

    # -------------------------------------------------------------------------
    # LOADING AND SAVING
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """
        Load configuration from file.

        If the file doesn't exist, defaults are used.
        Missing keys are filled with defaults, unknown keys are dropped.

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
            print(f"[ERROR] Invalid config file: top level must be an object")
            return False

        # Merge with defaults (so new settings get default values)
        for key, value in loaded.items():
            if key in self.data:
                self.data[key] = value

        self._modified = False
        return True

    def save(self) -> bool:
        """
        Save configuration to file.

        Creates the directory if it doesn't exist.

        Returns:
            True if saved successfully
        """
        try:
            os.makedirs(os.path.dirname(os.path.abspath(self.config_path)), exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=4, sort_keys=True)

            print(f"[INFO] Saved config to {self.config_path}")
            self._modified = False
            return True

        except OSError as e:
            print(f"[ERROR] Failed to save config: {e}")
            return False

    def reset_to_defaults(self):
        """Reset all settings to their default values."""
        self.data = _default_data()
        self._modified = True

    @property
    def modified(self) -> bool:
        """True if settings changed since the last load/save."""
        return self._modified

    # -------------------------------------------------------------------------
    # MOUNT PROFILE
    # -------------------------------------------------------------------------

    @property
    def containers(self) -> List[Dict[str, Any]]:
        """Get the mount profile (ordered list of {"path", "password"})."""
        return [dict(item) for item in self.data.get('containers', [])]

    def add_container(self, path: str, password: Optional[str] = None):
        """
        Append a container to the mount profile.

        Args:
            path: Folder or archive path
            password: Optional obfuscation password for archives
        """
        if not path:
            raise ValueError("container path must not be empty")
        self.data.setdefault('containers', []).append({'path': path, 'password': password})
        self._modified = True

    def remove_container(self, path: str) -> bool:
        """
        Remove every profile entry with the given path.

        Returns:
            True if something was removed
        """
        before = self.data.get('containers', [])
        after = [item for item in before if item.get('path') != path]
        self.data['containers'] = after
        removed = len(after) != len(before)
        if removed:
            self._modified = True
        return removed

    # -------------------------------------------------------------------------
    # PROPERTY ACCESS
    # -------------------------------------------------------------------------

    @property
    def default_encoding(self) -> str:
        """Get the default text encoding."""
        return self.data.get('default_encoding', 'utf-8')

    @default_encoding.setter
    def default_encoding(self, value: str):
        """Set the default text encoding (must be known to Python)."""
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"Unknown encoding: {value}")
        self.data['default_encoding'] = value
        self._modified = True

    @property
    def debug_mode(self) -> bool:
        """Check if debug mode is enabled."""
        return self.data.get('debug_mode', False)

    @debug_mode.setter
    def debug_mode(self, value: bool):
        self.data['debug_mode'] = bool(value)
        self._modified = True

    @property
    def benchmark_iterations(self) -> int:
        """Get the default benchmark iteration count."""
        return self.data.get('benchmark_iterations', 10000)

    @benchmark_iterations.setter
    def benchmark_iterations(self, value: int):
        self.data['benchmark_iterations'] = max(1, int(value))
        self._modified = True

    @property
    def text_preview_limit(self) -> int:
        return self.data.get('text_preview_limit', 10000)

    @text_preview_limit.setter
    def text_preview_limit(self, value: int):
        self.data['text_preview_limit'] = max(100, int(value))
        self._modified = True

    @property
    def hex_preview_bytes(self) -> int:
        return self.data.get('hex_preview_bytes', 256)

    @hex_preview_bytes.setter
    def hex_preview_bytes(self, value: int):
        self.data['hex_preview_bytes'] = max(16, min(65536, int(value)))
        self._modified = True

    # -------------------------------------------------------------------------
    # GENERIC ACCESS
    # -------------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            The configuration value
        """
        return self.data.get(key, default)

    def set(self, key: str, value: Any):
        """Set a configuration value."""
        self.data[key] = value
        self._modified = True

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access: config['key']"""
        return self.data[key]

    def __setitem__(self, key: str, value: Any):
        """Allow dictionary-style setting: config['key'] = value"""
        self.data[key] = value
        self._modified = True

    # -------------------------------------------------------------------------
    # PATH RESOLUTION
    # -------------------------------------------------------------------------

    def resolve_path(self, path: str) -> str:
        """
        Resolve a path relative to the config file's directory.

        Mount profile paths may be relative so a profile can travel with the
        game data; absolute paths are returned as-is.
        """
        if os.path.isabs(path):
            return path
        base = os.path.dirname(os.path.abspath(self.config_path))
        return os.path.normpath(os.path.join(base, path))


# ==============================================================================
# HELPERS
# ==============================================================================

def get_project_root() -> str:
    """Project root (this file is in modvfs/core/, so go up 3 levels)."""
    return os.path.dirname(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    )


def _default_data() -> Dict[str, Any]:
    data = DEFAULT_CONFIG.copy()
    data['containers'] = []
    return data


# ==============================================================================
# GLOBAL CONFIG INSTANCE
# ==============================================================================
# This provides a singleton-like access to configuration

_global_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Creates and loads config on first call.

    Returns:
        The global Config instance
    """
    global _global_config

    if _global_config is None:
        _global_config = Config()
        _global_config.load()

    return _global_config
