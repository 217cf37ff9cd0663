"""
Shared fixtures for the modvfs test suite.

Containers are built in pytest's tmp_path:
- scenario_dir: folder with file1.txt, folder/file2.txt, folder/sub/file3.txt
- base_dir / mod_dir: two folders overriding each other
- make_zip: helper writing a zip archive from a {name: bytes} mapping
"""

import os
import zipfile

import pytest

from modvfs.core.manager import VFSManager


def write_tree(root, files):
    """Create files below root from a {relative path: bytes} mapping."""
    for relative, data in files.items():
        full_path = os.path.join(str(root), *relative.split('/'))
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, 'wb') as f:
            f.write(data)
    return str(root)


@pytest.fixture
def scenario_dir(tmp_path):
    """Folder container with the three-file listing scenario."""
    return write_tree(tmp_path / "Mod1.pak", {
        "file1.txt": b"one",
        "folder/file2.txt": b"two",
        "folder/sub/file3.txt": b"three",
    })


@pytest.fixture
def base_dir(tmp_path):
    return write_tree(tmp_path / "Base", {
        "config/game.ini": b"[game]\nmode=base\n",
        "textures/hero.png": b"base-hero",
        "readme.txt": b"base readme",
    })


@pytest.fixture
def mod_dir(tmp_path):
    return write_tree(tmp_path / "Mod", {
        "CONFIG/game.ini": b"[game]\nmode=mod\n",
        "textures/villain.png": b"mod-villain",
    })


@pytest.fixture
def make_zip(tmp_path):
    """Return a function building a zip archive under tmp_path."""
    def _make_zip(name, entries, compression=zipfile.ZIP_STORED):
        path = tmp_path / name
        with zipfile.ZipFile(str(path), 'w', compression=compression) as zf:
            for entry_name, data in entries.items():
                zf.writestr(entry_name, data)
        return str(path)
    return _make_zip


@pytest.fixture
def vfs():
    """Empty manager, closed after the test."""
    manager = VFSManager()
    yield manager
    manager.close()


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "config" / "config.json")
