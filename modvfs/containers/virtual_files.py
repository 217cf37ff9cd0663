# ==============================================================================
# MODVFS - VIRTUAL FILE HANDLES
# ==============================================================================
# A virtual file is a lazy reference to the one physical source that
# currently provides the bytes for a virtual path. Nothing is read until
# get_file_stream() is called.
#
# Variants:
#   - VirtualDiskFile:             plain file inside a directory container
#   - VirtualZippedFile:           entry inside an open zip archive
#   - VirtualObfuscatedZippedFile: zip entry scrambled with transform_bytes()
#
# Handles pointing into a zip archive become invalid once the owning
# VFSManager is closed; reading them afterwards raises ValueError from zipfile.
# ==============================================================================

import io
import os
import zipfile
from abc import ABC, abstractmethod
from typing import BinaryIO

from ..core.obfuscation import transform_bytes


class VirtualFile(ABC):
    """
    Base class for all virtual file handles.

    Subclasses only need to implement get_file_stream() and source.
    """

    @abstractmethod
    def get_file_stream(self) -> BinaryIO:
        """
        Open a readable binary stream with the file contents.

        The caller owns the stream and should close it.
        """
        pass

    @property
    @abstractmethod
    def source(self) -> str:
        """Human-readable description of where the bytes come from."""
        pass

    def get_data(self) -> bytes:
        """Read the whole file into memory."""
        with self.get_file_stream() as stream:
            return stream.read()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.source})"


class VirtualDiskFile(VirtualFile):
    """File that lives on the host file system."""

    def __init__(self, os_path: str):
        self.os_path = os_path

    def get_file_stream(self) -> BinaryIO:
        return open(self.os_path, 'rb')

    @property
    def source(self) -> str:
        return self.os_path

    @property
    def size(self) -> int:
        return os.path.getsize(self.os_path)


class VirtualZippedFile(VirtualFile):
    """
    Entry inside a zip archive.

    Attributes:
        zip_file: Open ZipFile owned by the VFS manager
        entry_name: Exact entry name inside the archive (not normalized)
    """

    def __init__(self, zip_file: zipfile.ZipFile, entry_name: str):
        self.zip_file = zip_file
        self.entry_name = entry_name

    def get_file_stream(self) -> BinaryIO:
        return self.zip_file.open(self.entry_name, 'r')

    @property
    def source(self) -> str:
        return f"{self.zip_file.filename}:{self.entry_name}"

    @property
    def size(self) -> int:
        return self.zip_file.getinfo(self.entry_name).file_size


class VirtualObfuscatedZippedFile(VirtualZippedFile):
    """
    Zip entry whose bytes were scrambled with transform_bytes() when packed.

    The whole entry is decoded when the stream is opened and returned as an
    in-memory stream.
    """

    def __init__(self, zip_file: zipfile.ZipFile, entry_name: str, key: bytes):
        super().__init__(zip_file, entry_name)
        if not key:
            raise ValueError("key must not be empty")
        self.key = key

    def get_file_stream(self) -> BinaryIO:
        with self.zip_file.open(self.entry_name, 'r') as entry_stream:
            encrypted = entry_stream.read()

        return io.BytesIO(transform_bytes(encrypted, self.key))

    @property
    def source(self) -> str:
        return f"{self.zip_file.filename}:{self.entry_name} (obfuscated)"
