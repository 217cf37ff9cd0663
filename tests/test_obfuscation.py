"""
Tests for modvfs.core.obfuscation.
"""

import hashlib

import pytest

from modvfs.core.exceptions import InvalidArgumentError
from modvfs.core.obfuscation import generate_key, transform_bytes


class TestGenerateKey:
    """Tests for key derivation."""

    def test_sha512_of_utf8_password(self):
        assert generate_key("secret") == hashlib.sha512(b"secret").digest()

    def test_fixed_length(self):
        assert len(generate_key("")) == 64
        assert len(generate_key("a much longer password than the key")) == 64

    def test_deterministic(self):
        assert generate_key("pässwörd") == generate_key("pässwörd")

    def test_different_passwords(self):
        assert generate_key("one") != generate_key("two")


class TestTransformBytes:
    """Tests for the XOR transform."""

    def test_self_inverse(self):
        key = generate_key("secret")
        data = bytes(range(256)) * 3
        assert transform_bytes(transform_bytes(data, key), key) == data

    def test_short_key_cycles(self):
        assert transform_bytes(b"\x00\x00\x00", b"\x01\x02") == b"\x01\x02\x01"

    def test_zero_data_reveals_key(self):
        key = generate_key("secret")
        assert transform_bytes(bytes(70), key) == key + key[:6]

    def test_changes_data(self):
        key = generate_key("secret")
        assert transform_bytes(b"hello world", key) != b"hello world"

    def test_empty_data(self):
        assert transform_bytes(b"", b"\x01") == b""

    def test_empty_key_rejected(self):
        with pytest.raises(InvalidArgumentError):
            transform_bytes(b"data", b"")
