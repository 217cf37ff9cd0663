# ==============================================================================
# MODVFS - SOURCE PACKAGE
# ==============================================================================
# Layered, read-only virtual file system for game data and mod packages.
#
# Subpackages:
#   - core: VFS manager, overlay index, paths, obfuscation, configuration
#   - containers: folder and zip containers, file handles, folder packer
#   - gui: PyQt6 browser for the merged hierarchy
#
# Entry points:
#   - main.py: GUI/CLI launcher
#   - modvfs/cli.py: Command-line interface
#   - modvfs/gui/main_window.py: GUI application
# ==============================================================================

__version__ = "1.0.0"
__description__ = "Layered virtual file system for game mods and DLC packages"

# Convenience imports
from .core import (
    VFSManager,
    Config,
    get_config,
    normalize_path,
    VFSError,
    InvalidArgumentError,
    UnsupportedContainerError,
    SourceFolderNotFoundError,
    VirtualFileNotFoundError,
    InvalidContainerError,
    ContainerAccessError,
    VFSClosedError,
)
from .containers import pack_folder

__all__ = [
    '__version__',
    '__description__',

    # Core
    'VFSManager',
    'Config',
    'get_config',
    'normalize_path',
    'pack_folder',

    # Errors
    'VFSError',
    'InvalidArgumentError',
    'UnsupportedContainerError',
    'SourceFolderNotFoundError',
    'VirtualFileNotFoundError',
    'InvalidContainerError',
    'ContainerAccessError',
    'VFSClosedError',
]
