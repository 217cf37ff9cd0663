"""
Tests for modvfs.core.config.
"""

import json
import os

import pytest

from modvfs.core.config import Config, DEFAULT_CONFIG


class TestLoadSave:
    """Tests for reading and writing the JSON file."""

    def test_missing_file_uses_defaults(self, config_path):
        config = Config(config_path)

        assert config.load() is False
        assert config.default_encoding == "utf-8"
        assert config.containers == []

    def test_round_trip(self, config_path):
        config = Config(config_path)
        config.add_container("Data/Base.pak")
        config.add_container("Data/Mod.pak", password="secret")
        config.benchmark_iterations = 50

        assert config.save() is True
        assert not config.modified

        loaded = Config(config_path)
        assert loaded.load() is True
        assert loaded.containers == [
            {'path': "Data/Base.pak", 'password': None},
            {'path': "Data/Mod.pak", 'password': "secret"},
        ]
        assert loaded.benchmark_iterations == 50

    def test_unknown_keys_dropped(self, config_path):
        os.makedirs(os.path.dirname(config_path))
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump({"debug_mode": True, "not_a_setting": 1}, f)

        config = Config(config_path)
        config.load()

        assert config.debug_mode is True
        assert config.get("not_a_setting") is None
        assert config.get("hex_preview_bytes") == DEFAULT_CONFIG["hex_preview_bytes"]

    def test_invalid_json(self, config_path, capsys):
        os.makedirs(os.path.dirname(config_path))
        with open(config_path, 'w', encoding='utf-8') as f:
            f.write("{not json")

        assert Config(config_path).load() is False
        assert "[ERROR] Invalid config file" in capsys.readouterr().out

    def test_non_object_top_level(self, config_path):
        os.makedirs(os.path.dirname(config_path))
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(["a", "b"], f)

        assert Config(config_path).load() is False

    def test_reset_to_defaults(self, config_path):
        config = Config(config_path)
        config.add_container("A.pak")
        config.reset_to_defaults()

        assert config.containers == []
        assert config.modified


class TestMountProfile:
    """Tests for the containers list."""

    def test_instances_do_not_share_profile(self, tmp_path):
        first = Config(str(tmp_path / "a.json"))
        second = Config(str(tmp_path / "b.json"))
        first.add_container("A.pak")

        assert second.containers == []
        assert DEFAULT_CONFIG["containers"] == []

    def test_containers_returns_copies(self, config_path):
        config = Config(config_path)
        config.add_container("A.pak")
        config.containers[0]['path'] = "changed"

        assert config.containers[0]['path'] == "A.pak"

    def test_empty_path_rejected(self, config_path):
        with pytest.raises(ValueError):
            Config(config_path).add_container("")

    def test_remove(self, config_path):
        config = Config(config_path)
        config.add_container("A.pak")
        config.add_container("B.pak")

        assert config.remove_container("A.pak") is True
        assert config.remove_container("A.pak") is False
        assert [item['path'] for item in config.containers] == ["B.pak"]

    def test_resolve_path(self, tmp_path):
        config = Config(str(tmp_path / "cfg" / "config.json"))

        assert config.resolve_path("Data/A.pak") == os.path.normpath(
            str(tmp_path / "cfg" / "Data" / "A.pak"))
        absolute = str(tmp_path / "elsewhere.pak")
        assert config.resolve_path(absolute) == absolute


class TestProperties:
    """Tests for typed setters."""

    def test_unknown_encoding(self, config_path):
        config = Config(config_path)

        with pytest.raises(ValueError):
            config.default_encoding = "no-such-encoding"

        config.default_encoding = "latin-1"
        assert config.default_encoding == "latin-1"

    def test_clamping(self, config_path):
        config = Config(config_path)
        config.benchmark_iterations = 0
        config.text_preview_limit = 5
        config.hex_preview_bytes = 10 ** 9

        assert config.benchmark_iterations == 1
        assert config.text_preview_limit == 100
        assert config.hex_preview_bytes == 65536

    def test_item_access(self, config_path):
        config = Config(config_path)
        config['window_width'] = 640

        assert config['window_width'] == 640
        assert config.modified
