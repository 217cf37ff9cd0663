# ==============================================================================
# MODVFS - VIRTUAL PATH UTILITIES
# ==============================================================================
# Canonical form for virtual paths used as keys everywhere in the VFS.
#
# Rules:
#   - Backslashes become forward slashes ("Data\\Mods" -> "Data/Mods")
#   - Trailing slashes are removed ("folder/" -> "folder")
#   - Letter case is preserved, comparison is case-insensitive
#   - "" denotes the root of the virtual hierarchy
#
# Folder keys are the normalized path with a trailing slash ("a/b/"), and the
# root folder key is the empty string.
#
# Usage:
#   from modvfs.core.paths import normalize_path, folder_key
#   normalize_path("Textures\\Hero.PNG")   # "Textures/Hero.PNG"
#   folder_key("textures/")                # "textures/"
# ==============================================================================

import os
from typing import List

from .exceptions import UnsafeOutputPathError


def normalize_path(path: str) -> str:
    """
    Convert any input path into the canonical virtual path.

    Never fails; normalizing an already normalized path is a no-op.

    Args:
        path: Path using either slash style, any case, optional trailing slash

    Returns:
        Normalized virtual path (case preserved)

    Example:
        >>> normalize_path("Folder\\\\Sub\\\\File.txt")
        'Folder/Sub/File.txt'
        >>> normalize_path("folder/")
        'folder'
    """
    return (
        path
        .replace('\\\\', '\\')
        .replace('\\', '/')
        .rstrip('/')
    )


def path_key(path: str) -> str:
    """Case-folded lookup key for a virtual path (file or folder)."""
    return path.lower()


def folder_key(path: str) -> str:
    """
    Build the folder form of a path: normalized with a trailing slash.

    The root ("", "/" or "\\") maps to the empty string.
    """
    normalized = normalize_path(path)
    if not normalized:
        return ''
    return normalized + '/'


def parent_folders(path: str) -> List[str]:
    """
    Get every ancestor folder key implied by a file path.

    Args:
        path: Normalized virtual file path

    Returns:
        Folder keys from the shallowest to the deepest, root excluded

    Example:
        >>> parent_folders("a/b/c.txt")
        ['a/', 'a/b/']
    """
    parts = normalize_path(path).split('/')[:-1]
    folders = []
    current = ''
    for part in parts:
        current += part + '/'
        folders.append(current)
    return folders


def has_extension(path: str, extension: str) -> bool:
    """Check a path ends with ".extension", ignoring case."""
    return path.lower().endswith('.' + extension.lower())


def output_path_for(output_dir: str, virtual_path: str) -> str:
    """
    Map a virtual file path to a physical path below output_dir.

    Entry names come from untrusted packages, so the resolved target must
    stay inside the resolved output folder.

    Raises:
        UnsafeOutputPathError: If the path is absolute or climbs out with ".."
    """
    root = os.path.realpath(output_dir)
    target = os.path.realpath(os.path.join(root, normalize_path(virtual_path).replace('/', os.sep)))

    prefix = root if root.endswith(os.sep) else root + os.sep
    if not target.startswith(prefix):
        raise UnsafeOutputPathError(virtual_path, output_dir)
    return target
