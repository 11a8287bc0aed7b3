"""
Ontology Binary Codec Module

Key components:
- reader.py: hex cursor with fixed-length and var-length reads
- writer.py: binary writer with var-length counts and little-endian integers
- hashes.py: SHA-256 and hash160 helpers
- program.py: invocation and verification scripts
- transaction_codec.py: transaction serialization and hashing

program.py and transaction_codec.py depend on the crypto package and are
imported from their modules directly.
"""

from .hashes import sha256_bytes, double_sha256, hash160
from .reader import BinaryReader
from .writer import BinaryWriter

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "sha256_bytes",
    "double_sha256",
    "hash160",
]
