# ==============================================================================
# FOLDER PACKER
# ==============================================================================
# Packs a folder into a zip archive that ZipContainer can mount.
#
# Archive layout (the only format contract for mod build pipelines):
#   - one entry per file, named by its path relative to the source folder
#     with "/" separators
#   - store-only (no compression) for fast seekable access
#   - optionally obfuscated with transform_bytes(data, generate_key(password))
#   - no directory entries; empty folders are not preserved
#
# Usage:
#   pack_folder("mods/MyMod", "Data/MyMod.pak")
#   pack_folder("mods/MyMod", "Data/MyMod.pak", password="secret")
# ==============================================================================

import os
import zipfile
from typing import Callable, List, Optional, Tuple

from ..core.exceptions import SourceFolderNotFoundError
from ..core.obfuscation import generate_key, transform_bytes
from ..core.paths import normalize_path


def collect_files(source_dir: str, exclude: Optional[str] = None) -> List[Tuple[str, str]]:
    """
    List every file under a folder.

    Args:
        source_dir: Folder to scan
        exclude: Absolute path of a file to leave out (the archive being written)

    Returns:
        Sorted list of (relative virtual path, absolute path) tuples
    """
    root = os.path.abspath(source_dir)
    files = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            full_path = os.path.join(dirpath, filename)
            if exclude and os.path.abspath(full_path) == exclude:
                continue
            relative = normalize_path(os.path.relpath(full_path, root))
            files.append((relative, full_path))

    return files


def pack_folder(source_dir: str, output_path: str, password: Optional[str] = None,
                progress_callback: Callable[[int, int, str], None] = None) -> int:
    """
    Pack a folder into a store-only zip archive.

    Any existing file at output_path is replaced.

    Args:
        source_dir: Folder to pack
        output_path: Archive file to create
        password: Optional obfuscation password
        progress_callback: Optional callback(current, total, virtual_path)

    Returns:
        Number of files written

    Raises:
        SourceFolderNotFoundError: If source_dir is empty or not a directory
    """
    if not source_dir or not source_dir.strip() or not os.path.isdir(source_dir):
        raise SourceFolderNotFoundError(source_dir)

    output_path = os.path.abspath(output_path)

    # Clear the output file
    if os.path.isfile(output_path):
        os.remove(output_path)

    files = collect_files(source_dir, exclude=output_path)

    os.makedirs(os.path.dirname(output_path) or '.', exist_ok=True)

    key = generate_key(password) if password is not None else None
    total = len(files)

    with zipfile.ZipFile(output_path, 'w', compression=zipfile.ZIP_STORED) as zip_file:
        for idx, (relative, full_path) in enumerate(files):
            if progress_callback:
                progress_callback(idx + 1, total, relative)

            with open(full_path, 'rb') as f:
                data = f.read()

            if key is not None:
                data = transform_bytes(data, key)

            zip_file.writestr(relative, data, compress_type=zipfile.ZIP_STORED)

    return total
