# ==============================================================================
# CORE MODULE INIT
# ==============================================================================
# Core engine modules for ModVFS.
#
# This package contains the fundamental building blocks:
#   - VFSManager: mounts containers and answers queries
#   - OverlayIndex: merged path -> handle registry (last mount wins)
#   - paths: virtual path normalization
#   - obfuscation: XOR transform used by packed archives
#   - exceptions: error taxonomy
#   - Config: application configuration management
#
# Usage:
#   from modvfs.core import VFSManager
#   from modvfs.core.config import get_config
# ==============================================================================

from .exceptions import (
    VFSError,
    InvalidArgumentError,
    UnsupportedContainerError,
    SourceFolderNotFoundError,
    UnsafeOutputPathError,
    VirtualFileNotFoundError,
    InvalidContainerError,
    ContainerAccessError,
    VFSClosedError,
)
from .paths import normalize_path, folder_key, parent_folders, output_path_for
from .obfuscation import generate_key, transform_bytes
from .index import OverlayIndex
from .config import Config, get_config
from .manager import VFSManager

__all__ = [
    # Manager
    'VFSManager',
    'OverlayIndex',

    # Paths
    'normalize_path',
    'folder_key',
    'parent_folders',
    'output_path_for',

    # Obfuscation
    'generate_key',
    'transform_bytes',

    # Errors
    'VFSError',
    'InvalidArgumentError',
    'UnsupportedContainerError',
    'SourceFolderNotFoundError',
    'UnsafeOutputPathError',
    'VirtualFileNotFoundError',
    'InvalidContainerError',
    'ContainerAccessError',
    'VFSClosedError',

    # Configuration
    'Config',
    'get_config',
]
