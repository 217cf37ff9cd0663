# ==============================================================================
# MODVFS - EXCEPTIONS
# ==============================================================================
# Error taxonomy for the virtual file system.
#
#   VFSError
#   ├── InvalidArgumentError        bad input to a call (also a ValueError)
#   │   ├── UnsupportedContainerError   path is neither a file nor a directory
#   │   ├── SourceFolderNotFoundError   folder to pack does not exist
#   │   └── UnsafeOutputPathError       extraction target escapes the output folder
#   ├── VirtualFileNotFoundError    virtual path is not in the index
#   ├── InvalidContainerError       archive data cannot be parsed
#   ├── ContainerAccessError        I/O failure while opening a container
#   └── VFSClosedError              manager used after close()
#
# Every error carries an error_code and the offending path so callers can
# tell a broken mod package apart from a missing file.
# ==============================================================================

from typing import Any, Dict, Optional


class VFSError(Exception):
    """
    Base class for all virtual file system errors.

    Attributes:
        error_code: Short code for programmatic handling
        path: Virtual or physical path the error refers to (if any)
        suggestion: Optional hint on how to fix the problem
    """

    def __init__(self, message: str, error_code: str = "VFS_ERROR",
                 path: Optional[str] = None, suggestion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.path = path
        self.suggestion = suggestion

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for reporting."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "path": self.path,
            "suggestion": self.suggestion,
        }

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} (suggestion: {self.suggestion})"
        return self.message


class InvalidArgumentError(VFSError, ValueError):
    """An argument passed to the VFS is not acceptable."""

    def __init__(self, message: str, error_code: str = "INVALID_ARGUMENT", **kwargs):
        super().__init__(message, error_code=error_code, **kwargs)


class UnsupportedContainerError(InvalidArgumentError):
    """Container path is neither an existing file nor an existing directory."""

    def __init__(self, path: str):
        super().__init__(
            f"Incorrect container path: {path}",
            error_code="UNSUPPORTED_CONTAINER",
            path=path,
            suggestion="The container must be an existing folder or zip archive",
        )


class SourceFolderNotFoundError(InvalidArgumentError, FileNotFoundError):
    """The folder given to pack_folder() does not exist."""

    def __init__(self, path: str):
        super().__init__(
            f"Folder not found: {path}",
            error_code="SOURCE_FOLDER_NOT_FOUND",
            path=path,
        )


class UnsafeOutputPathError(InvalidArgumentError):
    """A virtual path would be written outside the extraction folder."""

    def __init__(self, path: str, output_dir: str):
        super().__init__(
            f"Refusing to extract '{path}' outside of {output_dir}",
            error_code="UNSAFE_OUTPUT_PATH",
            path=path,
            suggestion="The package contains absolute or '..' entry names",
        )


class VirtualFileNotFoundError(VFSError, FileNotFoundError):
    """A virtual path was requested that no container provides."""

    def __init__(self, path: str):
        super().__init__(
            f"The virtual file '{path}' does not exist.",
            error_code="FILE_NOT_FOUND",
            path=path,
        )


class InvalidContainerError(VFSError):
    """Archive container is malformed or not a zip archive."""

    def __init__(self, path: str, reason: str = ""):
        message = f"The zip archive is invalid: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(
            message,
            error_code="INVALID_CONTAINER",
            path=path,
            suggestion="Re-create the package with pack_folder()",
        )


class ContainerAccessError(VFSError, OSError):
    """The container exists but could not be read."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Failed to access the container: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, error_code="CONTAINER_ACCESS", path=path)


class VFSClosedError(VFSError, RuntimeError):
    """The manager was used after its archives were released."""

    def __init__(self, operation: str = ""):
        message = "The VFS manager has been closed"
        if operation:
            message += f"; cannot {operation}"
        super().__init__(message, error_code="VFS_CLOSED")
