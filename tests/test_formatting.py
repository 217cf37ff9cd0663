"""
Tests for modvfs.gui.formatting (no Qt required).
"""

from modvfs.gui.formatting import (
    format_size, format_hex_dump, decode_preview_text, is_image_path, is_text_path
)


class TestFormatSize:

    def test_bytes(self):
        assert format_size(0) == "0 B"
        assert format_size(512) == "512 B"

    def test_kilobytes(self):
        assert format_size(2048) == "2.0 KB"

    def test_megabytes(self):
        assert format_size(5 * 1024 * 1024) == "5.0 MB"


class TestHexDump:

    def test_single_line(self):
        dump = format_hex_dump(b"AB\x00")

        assert dump.startswith("0000: 41 42 00")
        assert dump.endswith(" AB.")

    def test_line_per_16_bytes(self):
        dump = format_hex_dump(bytes(range(40)), limit=256)

        lines = dump.split('\n')
        assert len(lines) == 3
        assert lines[1].startswith("0010: ")

    def test_truncation_note(self):
        dump = format_hex_dump(bytes(100), limit=16)

        assert "(84 more bytes)" in dump
        assert dump.count("0000:") == 1

    def test_empty(self):
        assert format_hex_dump(b"") == ""


class TestDecodePreviewText:

    def test_utf8(self):
        assert decode_preview_text("héllo".encode('utf-8')) == "héllo"

    def test_fallback_encoding(self):
        assert decode_preview_text("héllo".encode('latin-1')) == "héllo"

    def test_undecodable(self):
        assert decode_preview_text(b"\xff\xfe\xfd", encodings=('utf-8',)) is None

    def test_truncates(self):
        text = decode_preview_text(b"x" * 500, limit=100)

        assert text.startswith("x" * 100)
        assert text.endswith("... (truncated)")


class TestFileTypes:

    def test_images(self):
        assert is_image_path("textures/Hero.PNG")
        assert not is_image_path("textures/hero.png.bak")

    def test_text(self):
        assert is_text_path("config/game.ini")
        assert is_text_path("README.TXT")
        assert not is_text_path("data.bin")
