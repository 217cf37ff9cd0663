# ==============================================================================
# ZIP ARCHIVE CONTAINER
# ==============================================================================
# Mounts a zip archive (any extension, e.g. "Mod3.pak") as a container.
#
# Entry rules:
#   - Names ending in "/" are directory markers: the folder is registered,
#     nothing else
#   - Every other entry becomes a VirtualZippedFile and all of its ancestor
#     folders are registered, so folders never need explicit markers
#   - With a password, entries become VirtualObfuscatedZippedFile and are
#     decoded with the derived key on open
#
# The ZipFile stays open for the manager's lifetime because the handles read
# from it lazily. Any compression method supported by zipfile is readable;
# pack_folder() writes store-only archives.
# ==============================================================================

import os
import zipfile
from typing import Optional

from .base import BaseContainer, ContainerRegistry
from .virtual_files import VirtualZippedFile, VirtualObfuscatedZippedFile
from ..core.exceptions import InvalidContainerError, ContainerAccessError
from ..core.obfuscation import generate_key


class ZipContainer(BaseContainer):
    """
    Container backed by a zip archive.

    Attributes:
        zip_file: Open ZipFile (None until ingest() or after close())
        key: Obfuscation key derived from the password, or None
    """

    supports_password = True

    def __init__(self, path: str, password: Optional[str] = None):
        super().__init__(path, password)
        self.zip_file: Optional[zipfile.ZipFile] = None
        self.key: Optional[bytes] = generate_key(password) if password is not None else None

    @property
    def kind(self) -> str:
        return "obfuscated zip" if self.key else "zip"

    @classmethod
    def detect(cls, path: str) -> bool:
        return os.path.isfile(path)

    @property
    def holds_resources(self) -> bool:
        return self.zip_file is not None

    def open(self) -> zipfile.ZipFile:
        """
        Open the archive for reading.

        Raises:
            InvalidContainerError: If the file is not a valid zip archive
            ContainerAccessError: If the file cannot be read
        """
        if self.zip_file is not None:
            return self.zip_file

        try:
            self.zip_file = zipfile.ZipFile(self.path, 'r')
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise InvalidContainerError(self.path, str(e)) from e
        except (NotImplementedError, EOFError) as e:
            raise InvalidContainerError(self.path, str(e)) from e
        except OSError as e:
            raise ContainerAccessError(self.path, str(e)) from e

        return self.zip_file

    def ingest(self, index) -> int:
        """Register every entry of the archive in the index."""
        zip_file = self.open()

        folders = []
        files = []

        # Nothing reaches the index until the whole directory has been read
        try:
            for info in zip_file.infolist():
                # Directory marker ("folder/") - register and move on
                if info.is_dir():
                    folders.append(info.filename)
                    continue

                if self.key is not None:
                    handle = VirtualObfuscatedZippedFile(zip_file, info.filename, self.key)
                else:
                    handle = VirtualZippedFile(zip_file, info.filename)
                files.append((info.filename, handle))
        except Exception:
            self.close()
            raise

        for folder in folders:
            index.add_folder(folder)
        for filename, handle in files:
            index.add_file(filename, handle)

        self.folder_count = len(folders)
        self.file_count = len(files)
        return self.file_count

    def close(self):
        """Close the archive. Safe to call more than once."""
        if self.zip_file is not None:
            self.zip_file.close()
            self.zip_file = None


ContainerRegistry.register(ZipContainer)
