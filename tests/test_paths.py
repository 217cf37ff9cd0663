"""
Tests for modvfs.core.paths.
"""

import os

import pytest

from modvfs.core.paths import (
    normalize_path, path_key, folder_key, parent_folders, has_extension, output_path_for
)
from modvfs.core.exceptions import UnsafeOutputPathError


class TestNormalizePath:
    """Tests for normalize_path()."""

    @pytest.mark.parametrize("raw, expected", [
        ("folder/file.txt", "folder/file.txt"),
        ("folder\\file.txt", "folder/file.txt"),
        ("folder\\\\file.txt", "folder/file.txt"),
        ("Folder/Sub/", "Folder/Sub"),
        ("folder//", "folder"),
        ("", ""),
        ("/", ""),
        ("\\", ""),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_path(raw) == expected

    def test_preserves_case(self):
        assert normalize_path("Textures\\Hero.PNG") == "Textures/Hero.PNG"

    def test_idempotent(self):
        for raw in ["a\\b\\", "A/B/c.txt", "x\\\\y", "/"]:
            once = normalize_path(raw)
            assert normalize_path(once) == once

    def test_equivalent_spellings_share_key(self):
        spellings = ["Folder\\Sub\\File.TXT", "folder/sub/file.txt", "FOLDER/SUB/FILE.TXT/"]
        keys = {path_key(normalize_path(p)) for p in spellings}
        assert len(keys) == 1


class TestFolderKey:
    """Tests for folder_key()."""

    def test_root_forms(self):
        assert folder_key("") == ""
        assert folder_key("/") == ""
        assert folder_key("\\") == ""

    def test_adds_single_trailing_slash(self):
        assert folder_key("folder") == "folder/"
        assert folder_key("folder/") == "folder/"
        assert folder_key("a\\b\\") == "a/b/"


class TestParentFolders:
    """Tests for parent_folders()."""

    def test_nested_file(self):
        assert parent_folders("a/b/c.txt") == ["a/", "a/b/"]

    def test_root_file(self):
        assert parent_folders("file.txt") == []

    def test_backslashes(self):
        assert parent_folders("a\\b\\c.txt") == ["a/", "a/b/"]


class TestHasExtension:
    """Tests for has_extension()."""

    def test_case_insensitive(self):
        assert has_extension("Hero.PNG", "png")
        assert has_extension("hero.png", "PNG")

    def test_requires_dot(self):
        assert not has_extension("readme_txt", "txt")
        assert not has_extension("file.txt.bak", "txt")


class TestOutputPathFor:
    """Tests for output_path_for()."""

    def test_nested_path(self, tmp_path):
        target = output_path_for(str(tmp_path), "Folder\\Sub/file.txt")

        assert target == os.path.join(os.path.realpath(str(tmp_path)), "Folder", "Sub", "file.txt")

    @pytest.mark.parametrize("virtual_path", [
        "../escaped.txt",
        "folder/../../escaped.txt",
        "..\\escaped.txt",
        "/etc/passwd",
        "..",
    ])
    def test_refuses_escaping_paths(self, tmp_path, virtual_path):
        with pytest.raises(UnsafeOutputPathError) as exc_info:
            output_path_for(str(tmp_path / "out"), virtual_path)

        assert exc_info.value.path == virtual_path
        assert isinstance(exc_info.value, ValueError)

    def test_dot_segments_inside_are_allowed(self, tmp_path):
        target = output_path_for(str(tmp_path), "a/../b.txt")

        assert target == os.path.join(os.path.realpath(str(tmp_path)), "b.txt")
