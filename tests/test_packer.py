"""
Tests for modvfs.containers.packer.pack_folder.
"""

import os
import zipfile

import pytest

from modvfs.containers.packer import collect_files, pack_folder
from modvfs.core.exceptions import InvalidArgumentError, SourceFolderNotFoundError
from modvfs.core.manager import VFSManager
from modvfs.core.obfuscation import generate_key, transform_bytes

from conftest import write_tree


@pytest.fixture
def source_dir(tmp_path):
    return write_tree(tmp_path / "MyMod", {
        "config/game.ini": b"[game]\nmode=mod\n",
        "textures/hero.png": bytes(range(256)),
        "empty.txt": b"",
    })


class TestPackFolder:
    """Tests for the archive layout written by pack_folder()."""

    def test_returns_file_count(self, source_dir, tmp_path):
        assert pack_folder(source_dir, str(tmp_path / "Out.pak")) == 3

    def test_one_stored_entry_per_file(self, source_dir, tmp_path):
        output = str(tmp_path / "Out.pak")
        pack_folder(source_dir, output)

        with zipfile.ZipFile(output) as zf:
            infos = zf.infolist()

        assert sorted(info.filename for info in infos) == [
            "config/game.ini", "empty.txt", "textures/hero.png"
        ]
        assert all(info.compress_type == zipfile.ZIP_STORED for info in infos)
        assert not any(info.is_dir() for info in infos)

    def test_plain_round_trip(self, source_dir, tmp_path):
        output = str(tmp_path / "Out.pak")
        pack_folder(source_dir, output)

        with VFSManager() as vfs:
            vfs.add_root_container(output)
            assert vfs.get_file_contents("textures/hero.png") == bytes(range(256))
            assert vfs.get_file_contents("empty.txt") == b""

    def test_password_round_trip(self, source_dir, tmp_path):
        output = str(tmp_path / "Secret.pak")
        pack_folder(source_dir, output, password="secret")

        with VFSManager() as vfs:
            vfs.add_root_container(output, password="secret")
            assert vfs.get_file_contents("config/game.ini") == b"[game]\nmode=mod\n"
            assert vfs.get_file_contents("textures/hero.png") == bytes(range(256))

    def test_stored_bytes_are_transformed(self, source_dir, tmp_path):
        output = str(tmp_path / "Secret.pak")
        pack_folder(source_dir, output, password="secret")

        with zipfile.ZipFile(output) as zf:
            stored = zf.read("config/game.ini")

        assert stored == transform_bytes(b"[game]\nmode=mod\n", generate_key("secret"))

    def test_wrong_password_gives_garbage(self, source_dir, tmp_path):
        output = str(tmp_path / "Secret.pak")
        pack_folder(source_dir, output, password="secret")

        with VFSManager() as vfs:
            vfs.add_root_container(output, password="wrong")
            data = vfs.get_file_contents("config/game.ini")

        assert data != b"[game]\nmode=mod\n"
        assert len(data) == len(b"[game]\nmode=mod\n")

    def test_missing_password_gives_garbage(self, source_dir, tmp_path):
        output = str(tmp_path / "Secret.pak")
        pack_folder(source_dir, output, password="secret")

        with VFSManager() as vfs:
            vfs.add_root_container(output)
            assert vfs.get_file_contents("config/game.ini") != b"[game]\nmode=mod\n"

    def test_overwrites_existing_output(self, source_dir, tmp_path):
        output = tmp_path / "Out.pak"
        output.write_bytes(b"old junk that is not a zip")

        pack_folder(source_dir, str(output))

        assert zipfile.is_zipfile(str(output))

    def test_creates_output_folder(self, source_dir, tmp_path):
        output = str(tmp_path / "build" / "Data" / "Out.pak")

        pack_folder(source_dir, output)

        assert os.path.isfile(output)

    def test_output_inside_source_is_skipped(self, source_dir):
        output = os.path.join(source_dir, "Self.pak")

        assert pack_folder(source_dir, output) == 3
        assert pack_folder(source_dir, output) == 3

    def test_empty_folders_are_not_stored(self, source_dir, tmp_path):
        os.makedirs(os.path.join(source_dir, "unused"))
        output = str(tmp_path / "Out.pak")
        pack_folder(source_dir, output)

        with VFSManager() as vfs:
            vfs.add_root_container(output)
            assert not vfs.folder_exists("unused")

    def test_progress_callback(self, source_dir, tmp_path):
        calls = []
        pack_folder(source_dir, str(tmp_path / "Out.pak"),
                    progress_callback=lambda current, total, name: calls.append((current, total, name)))

        assert [c[0] for c in calls] == [1, 2, 3]
        assert all(c[1] == 3 for c in calls)

    def test_manager_static_method(self, source_dir, tmp_path):
        assert VFSManager.pack_folder(source_dir, str(tmp_path / "Out.pak")) == 3


class TestPackFolderErrors:
    """Tests for invalid sources."""

    def test_missing_source(self, tmp_path):
        with pytest.raises(SourceFolderNotFoundError) as exc_info:
            pack_folder(str(tmp_path / "missing"), str(tmp_path / "Out.pak"))

        assert isinstance(exc_info.value, FileNotFoundError)
        assert isinstance(exc_info.value, InvalidArgumentError)
        assert not os.path.exists(str(tmp_path / "Out.pak"))

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_source(self, blank, tmp_path):
        with pytest.raises(SourceFolderNotFoundError):
            pack_folder(blank, str(tmp_path / "Out.pak"))

    def test_file_as_source(self, tmp_path):
        source = tmp_path / "file.txt"
        source.write_bytes(b"x")

        with pytest.raises(SourceFolderNotFoundError):
            pack_folder(str(source), str(tmp_path / "Out.pak"))


class TestCollectFiles:
    """Tests for collect_files()."""

    def test_sorted_relative_paths(self, source_dir):
        relative = [rel for rel, _ in collect_files(source_dir)]

        assert relative == ["empty.txt", "config/game.ini", "textures/hero.png"]

    def test_exclude(self, source_dir):
        excluded = os.path.abspath(os.path.join(source_dir, "empty.txt"))
        relative = [rel for rel, _ in collect_files(source_dir, exclude=excluded)]

        assert "empty.txt" not in relative
