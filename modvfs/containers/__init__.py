# ==============================================================================
# CONTAINERS MODULE INIT
# ==============================================================================
# Mountable containers and the virtual file handles they produce.
#
#   - BaseContainer / ContainerRegistry: container interface and type lookup
#   - ZipContainer: zip archives (plain or obfuscated entries)
#   - DirectoryContainer: folders on disk
#   - VirtualFile and its variants: lazy per-file handles
#   - pack_folder: build a zip archive ZipContainer can mount
#
# Detection order matters only in theory: a path is either a file (zip) or a
# directory, never both.
# ==============================================================================

from .base import BaseContainer, ContainerRegistry, open_container
from .virtual_files import (
    VirtualFile, VirtualDiskFile, VirtualZippedFile, VirtualObfuscatedZippedFile
)

# Each import registers the container type
from .archive import ZipContainer
from .directory import DirectoryContainer

from .packer import pack_folder

__all__ = [
    'BaseContainer',
    'ContainerRegistry',
    'open_container',

    'VirtualFile',
    'VirtualDiskFile',
    'VirtualZippedFile',
    'VirtualObfuscatedZippedFile',

    'ZipContainer',
    'DirectoryContainer',

    'pack_folder',
]
