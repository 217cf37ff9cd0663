# ==============================================================================
# MODVFS - FILE OBFUSCATION
# ==============================================================================
# Trivial, symmetric XOR obfuscation for files stored in packed archives.
#
# This is NOT encryption. There is no authentication and no integrity check;
# a wrong password simply produces garbage bytes. It only keeps casual users
# from opening packaged assets with a zip tool.
#
# Key derivation:
#   key = SHA-512(password encoded as UTF-8)   -> 64 bytes, used cyclically
#
# Transform (same function packs and unpacks):
#   out[i] = data[i] XOR key[i % len(key)]
#
# Usage:
#   key = generate_key("secret")
#   scrambled = transform_bytes(b"hello", key)
#   transform_bytes(scrambled, key)   # b"hello"
# ==============================================================================

import hashlib

from .exceptions import InvalidArgumentError


def generate_key(password: str) -> bytes:
    """
    Derive a fixed-length obfuscation key from a password.

    Args:
        password: Password text (may be empty)

    Returns:
        64-byte SHA-512 digest of the UTF-8 encoded password
    """
    return hashlib.sha512(password.encode('utf-8')).digest()


def transform_bytes(data: bytes, key: bytes) -> bytes:
    """
    XOR every byte of data with the key, repeating the key as needed.

    Applying the transform twice with the same key returns the original data.

    Args:
        data: Bytes to transform
        key: Key bytes (at least one byte)

    Returns:
        Transformed bytes, same length as data

    Raises:
        InvalidArgumentError: If the key is empty
    """
    if not key:
        raise InvalidArgumentError("Obfuscation key must not be empty")

    key_len = len(key)
    result = bytearray(len(data))

    for i, byte in enumerate(data):
        result[i] = byte ^ key[i % key_len]

    return bytes(result)
