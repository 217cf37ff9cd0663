# ==============================================================================
# MODVFS - OVERLAY INDEX
# ==============================================================================
# Central registry of the merged virtual hierarchy.
#
#   files:   case-insensitive virtual path -> VirtualFile (last write wins)
#   folders: case-insensitive set of folder keys ("a/", "a/b/")
#
# Containers are ingested in mount order, so a later container replacing an
# earlier one's file is the whole override mechanism. There is no priority
# field and no merging of file contents.
#
# The index only grows. Once every container is mounted it is never mutated
# again, which is what makes concurrent read-only queries safe.
# ==============================================================================

from typing import Dict, Iterator, List, Tuple

from .paths import normalize_path, path_key, parent_folders


class OverlayIndex:
    """
    Ordered, case-insensitive mapping of virtual paths to file handles,
    plus the set of known virtual folders.

    Keys are stored in the case of the most recent write for files and of
    the first registration for folders. Iteration follows first insertion.
    """

    def __init__(self):
        # lowered path -> (display path, handle)
        self._files: Dict[str, Tuple[str, object]] = {}
        # lowered folder key -> display folder key
        self._folders: Dict[str, str] = {}

    # -------------------------------------------------------------------------
    # MUTATION
    # -------------------------------------------------------------------------

    def upsert(self, virtual_path: str, handle) -> None:
        """
        Register a file, replacing any existing mapping for the same path.

        Args:
            virtual_path: Raw or normalized virtual file path
            handle: VirtualFile providing the bytes
        """
        normalized = normalize_path(virtual_path)
        self._files[path_key(normalized)] = (normalized, handle)

    def union_folder(self, virtual_folder_path: str) -> None:
        """Add a folder key if it is not known yet."""
        normalized = normalize_path(virtual_folder_path)
        if not normalized:
            return
        key = normalized + '/'
        self._folders.setdefault(path_key(key), key)

    def add_file(self, virtual_path: str, handle) -> None:
        """Upsert a file and union every ancestor folder it implies."""
        self.upsert(virtual_path, handle)
        for folder in parent_folders(virtual_path):
            self.union_folder(folder)

    def add_folder(self, virtual_folder_path: str) -> None:
        """Union a declared folder together with its ancestors."""
        normalized = normalize_path(virtual_folder_path)
        if not normalized:
            return
        for folder in parent_folders(normalized):
            self.union_folder(folder)
        self.union_folder(normalized)

    # -------------------------------------------------------------------------
    # LOOKUP
    # -------------------------------------------------------------------------

    def get(self, virtual_path: str):
        """Get the handle for a path, or None if no container provides it."""
        entry = self._files.get(path_key(normalize_path(virtual_path)))
        return entry[1] if entry else None

    def contains_file(self, virtual_path: str) -> bool:
        return path_key(normalize_path(virtual_path)) in self._files

    def contains_folder(self, virtual_folder_path: str) -> bool:
        normalized = normalize_path(virtual_folder_path)
        return path_key(normalized + '/') in self._folders

    @property
    def files(self) -> List[str]:
        """All virtual file paths."""
        return [display for display, _ in self._files.values()]

    @property
    def folders(self) -> List[str]:
        """All virtual folder keys (with trailing slash)."""
        return list(self._folders.values())

    def items(self) -> Iterator[Tuple[str, object]]:
        """Iterate (virtual path, handle) pairs."""
        return iter(list(self._files.values()))

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, virtual_path: str) -> bool:
        return self.contains_file(virtual_path)
