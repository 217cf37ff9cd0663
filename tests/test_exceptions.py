"""
Tests for modvfs.core.exceptions.

This module tests:
- VFSError base class attributes and formatting
- The specialized errors and the built-in types they extend
"""

import pytest

from modvfs.core.exceptions import (
    VFSError,
    InvalidArgumentError,
    UnsupportedContainerError,
    SourceFolderNotFoundError,
    UnsafeOutputPathError,
    VirtualFileNotFoundError,
    InvalidContainerError,
    ContainerAccessError,
    VFSClosedError,
)


class TestVFSError:
    """Tests for the base VFSError class."""

    def test_basic_creation(self):
        error = VFSError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.error_code == "VFS_ERROR"
        assert error.path is None

    def test_with_suggestion(self):
        error = VFSError("Broken", suggestion="Fix it")

        assert str(error) == "Broken (suggestion: Fix it)"

    def test_to_dict(self):
        error = VirtualFileNotFoundError("a/b.txt")

        assert error.to_dict() == {
            "error_type": "VirtualFileNotFoundError",
            "error_code": "FILE_NOT_FOUND",
            "message": "The virtual file 'a/b.txt' does not exist.",
            "path": "a/b.txt",
            "suggestion": None,
        }


class TestSpecializedErrors:
    """Tests for the error hierarchy."""

    @pytest.mark.parametrize("error, builtin", [
        (InvalidArgumentError("bad"), ValueError),
        (UnsupportedContainerError("x"), ValueError),
        (SourceFolderNotFoundError("x"), FileNotFoundError),
        (UnsafeOutputPathError("../x", "out"), ValueError),
        (VirtualFileNotFoundError("x"), FileNotFoundError),
        (ContainerAccessError("x"), OSError),
        (VFSClosedError(), RuntimeError),
    ])
    def test_builtin_bases(self, error, builtin):
        assert isinstance(error, VFSError)
        assert isinstance(error, builtin)

    def test_invalid_container_is_not_io_error(self):
        error = InvalidContainerError("Mod.pak", "File is not a zip file")

        assert not isinstance(error, OSError)
        assert "File is not a zip file" in str(error)
        assert error.path == "Mod.pak"

    def test_closed_message(self):
        assert "cannot read a file" in str(VFSClosedError("read a file"))

    def test_catch_by_base(self):
        with pytest.raises(VFSError):
            raise UnsupportedContainerError("missing.pak")
