# ==============================================================================
# MODVFS - VIRTUAL FILE SYSTEM MANAGER
# ==============================================================================
# Builds one read-only virtual hierarchy out of an ordered list of
# containers (folders or zip archives). Files with the same virtual path in
# a later container override those in earlier ones, the way games layer
# DLC and mod packages over their base data.
#
# Features:
#   - Mount folders and zip archives in priority order (mount order)
#   - Case-insensitive virtual paths with either slash style
#   - Folder membership derived from file paths
#   - Optional per-archive XOR obfuscation (see obfuscation.py)
#   - Packing folders into compatible archives
#
# Usage:
#   with VFSManager() as vfs:
#       vfs.add_root_container("Data/Base.pak")
#       vfs.add_root_container("Data/Mod1.pak")           # overrides Base
#       vfs.add_root_container("Data/Mod2.pak", password="secret")
#       text = vfs.get_file_contents_as_text("config/game.ini")
# ==============================================================================

import codecs
import os
from typing import BinaryIO, Dict, List, Optional

from .exceptions import InvalidArgumentError, VirtualFileNotFoundError, VFSClosedError
from .index import OverlayIndex
from .paths import normalize_path, folder_key, path_key, has_extension
from ..containers import BaseContainer, VirtualFile, open_container, pack_folder


DEFAULT_ENCODING = 'utf-8'


class VFSManager:
    """
    Virtual File System manager.

    Owns the overlay index and every archive opened for it. Archives stay
    open until close() (or the end of a ``with`` block) and are released
    together; close() may be called any number of times.

    Threading: mounting is not thread-safe. Mount every container first,
    then the manager may be shared between threads for read-only queries,
    since the index is no longer mutated. No internal locking is done.

    Use after close: existence checks and listings keep answering from the
    index, while mounting and reading raise VFSClosedError. Handles obtained
    before close() (see get_file_info) fail when read.
    """

    def __init__(self, default_encoding: str = DEFAULT_ENCODING, debug: bool = False):
        """
        Initialize an empty VFS.

        Args:
            default_encoding: Encoding used by get_file_contents_as_text()
            debug: Print [DEBUG] messages
        """
        self.default_encoding = default_encoding
        self.debug = debug
        self._index = OverlayIndex()
        self._containers: List[BaseContainer] = []
        self._closed = False

    @classmethod
    def from_config(cls, config) -> 'VFSManager':
        """
        Create a manager and mount the config's mount profile in order.

        Args:
            config: Config instance

        Returns:
            Populated VFSManager
        """
        vfs = cls(default_encoding=config.default_encoding, debug=config.debug_mode)
        try:
            for item in config.containers:
                vfs.add_root_container(config.resolve_path(item['path']), item.get('password'))
        except Exception:
            vfs.close()
            raise
        return vfs

    # ==========================================================================
    # MOUNTING
    # ==========================================================================

    def add_root_container(self, path: str, password: Optional[str] = None) -> BaseContainer:
        """
        Mount a folder or zip archive on top of everything mounted so far.

        Args:
            path: Existing directory or archive file
            password: Obfuscation password for archive entries (None = plain)

        Returns:
            The mounted container

        Raises:
            UnsupportedContainerError: Path is neither a file nor a directory
            InvalidContainerError: Archive data is malformed
            ContainerAccessError: Container could not be read
            VFSClosedError: Manager was already closed
        """
        if self._closed:
            raise VFSClosedError("add a container")

        container = open_container(path, password)

        if password is not None and not container.supports_password:
            print(f"[WARN] Password ignored for folder container: {path}")

        count = container.ingest(self._index)
        self._containers.append(container)

        print(f"[INFO] Mounted {container.kind}: {os.path.basename(os.path.normpath(path))} "
              f"({count} files, {container.folder_count} folders)")
        return container

    # ==========================================================================
    # EXISTENCE CHECKS
    # ==========================================================================

    def file_exists(self, virtual_path: str) -> bool:
        """Check if a file with the given virtual path exists in the VFS."""
        if not isinstance(virtual_path, str):
            return False
        return self._index.contains_file(virtual_path)

    def folder_exists(self, virtual_path: str) -> bool:
        """Check if a folder with the given virtual path exists in the VFS."""
        if not isinstance(virtual_path, str):
            return False
        return self._index.contains_folder(virtual_path)

    # ==========================================================================
    # READING
    # ==========================================================================

    def get_file_info(self, virtual_path: str) -> Optional[VirtualFile]:
        """
        Get the handle currently providing a virtual path.

        Returns:
            VirtualFile if found, None otherwise
        """
        return self._index.get(virtual_path)

    def _resolve(self, virtual_path: str, operation: str) -> VirtualFile:
        if self._closed:
            raise VFSClosedError(operation)

        handle = self._index.get(virtual_path)
        if handle is None:
            raise VirtualFileNotFoundError(virtual_path)
        return handle

    def get_file_stream(self, virtual_path: str) -> BinaryIO:
        """
        Open a readable binary stream for a virtual file.

        Obfuscated archive entries are decoded before the stream is returned.

        Raises:
            VirtualFileNotFoundError: No container provides the path
        """
        return self._resolve(virtual_path, "open a file").get_file_stream()

    def get_file_contents(self, virtual_path: str) -> bytes:
        """Read all data from the file and return it as bytes."""
        return self._resolve(virtual_path, "read a file").get_data()

    def get_file_contents_as_text(self, virtual_path: str, encoding: Optional[str] = None) -> str:
        """
        Read all data from the file and decode it as text.

        Undecodable bytes become U+FFFD instead of failing, and one leading
        byte order mark is dropped when decoding as UTF-8.

        Args:
            virtual_path: Virtual file path
            encoding: Text encoding (defaults to the manager's default_encoding)

        Raises:
            InvalidArgumentError: If the encoding is unknown
        """
        encoding = encoding or self.default_encoding
        try:
            codec = codecs.lookup(encoding)
        except LookupError as e:
            raise InvalidArgumentError(f"Unknown text encoding: {encoding!r}") from e

        data = self.get_file_contents(virtual_path)
        if codec.name == 'utf-8' and data.startswith(codecs.BOM_UTF8):
            data = data[len(codecs.BOM_UTF8):]
        return data.decode(codec.name, errors='replace')

    # ==========================================================================
    # LISTING
    # ==========================================================================

    @property
    def entries(self) -> List[str]:
        """Get a list of all virtual file entries in the VFS."""
        return self._index.files

    @property
    def folders(self) -> List[str]:
        """Get a list of all virtual folders in the VFS (with trailing slash)."""
        return self._index.folders

    def get_files_in_folder(self, virtual_path: str, recursive: bool = False,
                            extension: Optional[str] = None) -> List[str]:
        """
        Get the paths of files in a folder.

        Args:
            virtual_path: Folder path ("" or "/" for the root)
            recursive: Include files in subfolders
            extension: Only keep files ending in ".extension" (leading dot optional)

        Returns:
            List of virtual file paths (empty if the folder does not exist)

        Raises:
            InvalidArgumentError: If the extension is empty or contains a separator
        """
        if extension is not None:
            extension = _clean_extension(extension)

        prefix = folder_key(virtual_path)
        files = self._index.files

        if not prefix:
            if recursive:
                result = files
            else:
                result = [path for path in files if '/' not in path]
        elif not self._index.contains_folder(prefix):
            return []
        else:
            prefix_key = path_key(prefix)
            result = []
            for path in files:
                if not path_key(path).startswith(prefix_key):
                    continue
                if recursive or '/' not in path_key(path)[len(prefix_key):]:
                    result.append(path)

        if extension is not None:
            result = [path for path in result if has_extension(path, extension)]

        return result

    def get_folders_in_folder(self, virtual_path: str, recursive: bool = False) -> List[str]:
        """
        Get the folders inside a folder.

        Args:
            virtual_path: Folder path ("" or "/" for the root)
            recursive: Include every nested folder, not only direct children

        Returns:
            List of folder keys (trailing slash), parent excluded
        """
        prefix_key = path_key(folder_key(virtual_path))
        result = []

        for folder in self._index.folders:
            key = path_key(folder)
            if not key.startswith(prefix_key) or key == prefix_key:
                continue
            # Direct child: exactly one more segment after the parent
            if recursive or key[len(prefix_key):].count('/') == 1:
                result.append(folder)

        return result

    # Language-neutral aliases
    def open_file(self, virtual_path: str) -> BinaryIO:
        return self.get_file_stream(virtual_path)

    def read_all_bytes(self, virtual_path: str) -> bytes:
        return self.get_file_contents(virtual_path)

    def read_all_text(self, virtual_path: str, encoding: Optional[str] = None) -> str:
        return self.get_file_contents_as_text(virtual_path, encoding)

    def list_files(self, virtual_path: str = "", recursive: bool = False,
                   extension: Optional[str] = None) -> List[str]:
        return self.get_files_in_folder(virtual_path, recursive, extension)

    def list_folders(self, virtual_path: str = "", recursive: bool = False) -> List[str]:
        return self.get_folders_in_folder(virtual_path, recursive)

    def list_all_files(self) -> List[str]:
        return self.entries

    def list_all_folders(self) -> List[str]:
        return self.folders

    # ==========================================================================
    # INTROSPECTION
    # ==========================================================================

    @property
    def containers(self) -> List[str]:
        """Paths of the mounted containers, in mount order."""
        return [container.path for container in self._containers]

    @property
    def closed(self) -> bool:
        return self._closed

    def get_statistics(self) -> Dict[str, object]:
        """
        Return index statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            'total_files': len(self._index),
            'total_folders': len(self._index.folders),
            'mounted_containers': len(self._containers),
            'open_archives': sum(1 for c in self._containers if c.holds_resources),
            'closed': self._closed,
        }

    # ==========================================================================
    # PACKING
    # ==========================================================================

    @staticmethod
    def pack_folder(source_dir: str, output_path: str, password: Optional[str] = None,
                    progress_callback=None) -> int:
        """
        Pack a folder into a store-only zip archive this manager can mount.

        See containers.packer.pack_folder().
        """
        return pack_folder(source_dir, output_path, password, progress_callback)

    # ==========================================================================
    # DISPOSAL
    # ==========================================================================

    def close(self):
        """Release every open archive. Safe to call more than once."""
        if self._closed:
            return

        for container in self._containers:
            container.close()
        self._closed = True

        if self.debug:
            print("[DEBUG] VFS close called.")

    def dispose(self):
        self.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, virtual_path: str) -> bool:
        return self.file_exists(virtual_path)


def _clean_extension(extension: str) -> str:
    """Validate an extension filter and drop one leading dot."""
    if extension.startswith('.'):
        extension = extension[1:]
    if not extension or '/' in extension or '\\' in extension:
        raise InvalidArgumentError(f"Invalid extension filter: {extension!r}")
    return extension
