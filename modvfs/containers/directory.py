# ==============================================================================
# DIRECTORY CONTAINER
# ==============================================================================
# Mounts a plain folder on disk. Every subdirectory (including empty ones)
# becomes a virtual folder and every file becomes a VirtualDiskFile, with
# virtual paths relative to the folder root.
#
# Example layout:
#   Data/Mod1.pak/            <- container root (a folder named like a package)
#       file1.txt             -> "file1.txt"
#       folder/file2.txt      -> "folder/file2.txt"
#       empty/                -> folder "empty/"
# ==============================================================================

import os
from typing import Optional

from .base import BaseContainer, ContainerRegistry
from .virtual_files import VirtualDiskFile
from ..core.exceptions import ContainerAccessError


class DirectoryContainer(BaseContainer):
    """Container backed by a directory tree on the host file system."""

    def __init__(self, path: str, password: Optional[str] = None):
        super().__init__(path, password)
        # Trailing separators are dropped so relpath() works for "Mod2.pak/"
        self.root = os.path.abspath(path)

    @property
    def kind(self) -> str:
        return "folder"

    @classmethod
    def detect(cls, path: str) -> bool:
        return os.path.isdir(path)

    def ingest(self, index) -> int:
        """
        Walk the directory and register its folders and files.

        Raises:
            ContainerAccessError: If part of the tree cannot be listed
        """
        def on_error(error: OSError):
            raise ContainerAccessError(self.path, str(error)) from error

        folders = []
        files = []

        for dirpath, dirnames, filenames in os.walk(self.root, onerror=on_error):
            dirnames.sort()

            for dirname in dirnames:
                folders.append(os.path.relpath(os.path.join(dirpath, dirname), self.root))

            for filename in sorted(filenames):
                full_path = os.path.join(dirpath, filename)
                files.append((os.path.relpath(full_path, self.root), full_path))

        # Walk finished without errors, publish everything at once
        for folder in folders:
            index.union_folder(folder)
        for relative, full_path in files:
            index.upsert(relative, VirtualDiskFile(full_path))

        self.folder_count = len(folders)
        self.file_count = len(files)
        return self.file_count


ContainerRegistry.register(DirectoryContainer)
