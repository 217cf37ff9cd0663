# ==============================================================================
# BASE CONTAINER MODULE
# ==============================================================================
# Abstract base class for VFS containers, plus a registry used to pick the
# right container type for a path.
#
# A container walks its source (a directory tree, a zip archive, ...) and
# feeds files and folders into an OverlayIndex. Containers that hold open
# resources (zip archives) keep them until close() is called by the manager.
#
# To add a new container type:
#   1. Subclass BaseContainer and implement kind, detect() and ingest()
#   2. Call ContainerRegistry.register(MyContainer) at module level
#   3. Import the module in containers/__init__.py
# ==============================================================================

from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.exceptions import UnsupportedContainerError


class BaseContainer(ABC):
    """
    Abstract base class for a mountable container.

    The typical workflow (driven by VFSManager) is:
        1. container = open_container(path, password)
        2. container.ingest(index)
        3. ... queries ...
        4. container.close()

    Attributes:
        path: Path the container was mounted from
        password: Optional obfuscation password
        file_count: Number of files registered by the last ingest()
        folder_count: Number of folders registered by the last ingest()
    """

    # Whether a password changes how entries are read
    supports_password = False

    def __init__(self, path: str, password: Optional[str] = None):
        self.path = path
        self.password = password
        self.file_count = 0
        self.folder_count = 0

    # ==========================================================================
    # ABSTRACT MEMBERS - Must be implemented by subclasses
    # ==========================================================================

    @property
    @abstractmethod
    def kind(self) -> str:
        """Short name of the container type (e.g., "folder", "zip")."""
        pass

    @classmethod
    @abstractmethod
    def detect(cls, path: str) -> bool:
        """
        Check if this container type can mount the given path.

        Args:
            path: Path to a file or directory

        Returns:
            True if this container type handles the path
        """
        pass

    @abstractmethod
    def ingest(self, index) -> int:
        """
        Register every file and folder of the container in the index.

        Args:
            index: OverlayIndex to populate (later calls override earlier ones)

        Returns:
            Number of files registered
        """
        pass

    # ==========================================================================
    # COMMON METHODS
    # ==========================================================================

    @property
    def holds_resources(self) -> bool:
        """True if the container keeps something open until close()."""
        return False

    def close(self):
        """Release resources held by the container."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path!r})"


# ==============================================================================
# CONTAINER REGISTRY
# ==============================================================================
class ContainerRegistry:
    """
    Registry of available container types.

    Usage:
        ContainerRegistry.register(ZipContainer)
        container_class = ContainerRegistry.get_container_class("Data/Mod1.pak")
    """

    _containers: List[type] = []

    @classmethod
    def register(cls, container_class: type):
        """Register a container class (registration order is detection order)."""
        if container_class not in cls._containers:
            cls._containers.append(container_class)

    @classmethod
    def get_container_class(cls, path: str) -> Optional[type]:
        """
        Find the container class able to mount a path.

        Returns:
            Container class, or None if no type matches
        """
        for container_class in cls._containers:
            if container_class.detect(path):
                return container_class
        return None

    @classmethod
    def get_all(cls) -> List[type]:
        return list(cls._containers)


def open_container(path: str, password: Optional[str] = None) -> BaseContainer:
    """
    Create the right container for a path.

    Args:
        path: Existing archive file or directory
        password: Optional obfuscation password (archives only)

    Returns:
        Un-ingested container instance

    Raises:
        UnsupportedContainerError: If the path is neither a file nor a directory
    """
    container_class = ContainerRegistry.get_container_class(path)
    if container_class is None:
        raise UnsupportedContainerError(path)
    return container_class(path, password)
