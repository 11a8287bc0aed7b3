"""
Hash Functions

SHA-256 based helpers used by the transaction codec and address derivation.
RIPEMD-160 comes from pycryptodome since OpenSSL builds may not ship it.
"""

import hashlib

from Crypto.Hash import RIPEMD160


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def double_sha256(input_bytes: bytes) -> bytes:
    """SHA-256 applied twice."""
    return sha256_bytes(sha256_bytes(input_bytes))


def ripemd160_bytes(input_bytes: bytes) -> bytes:
    """Compute RIPEMD-160 hash of input bytes (20 bytes)."""
    return RIPEMD160.new(input_bytes).digest()


def hash160(input_bytes: bytes) -> bytes:
    """RIPEMD-160 of SHA-256, the program hash used for addresses."""
    return ripemd160_bytes(sha256_bytes(input_bytes))


def sha256_hex(hex_data: str) -> str:
    """SHA-256 over hex encoded data, returned as hex."""
    return sha256_bytes(bytes.fromhex(hex_data)).hex()
