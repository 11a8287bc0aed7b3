"""
Account addresses.

An address is the 20-byte hash160 of an account's verification script. Its
printable form is base58check over a version byte and the hash; the address
checksum hash (first four bytes of a double SHA-256 over that printable form)
doubles as the scrypt salt and password check when keys are protected.
"""

from __future__ import annotations
from typing import Sequence

import base58

from ..codec.hashes import double_sha256, hash160
from ..codec.reader import BinaryReader
from ..constants import ADDR_VERSION, ADDRESS_SIZE
from ..runtime.errors import InvalidParamsError
from .key import PublicKey


class Address:
    """20-byte account address kept as hex."""

    def __init__(self, value: str):
        try:
            raw = bytes.fromhex(value)
        except (TypeError, ValueError) as e:
            raise InvalidParamsError("Address must be a hex string", cause=e)
        if len(raw) != ADDRESS_SIZE:
            raise InvalidParamsError(f"Address must be {ADDRESS_SIZE} bytes, got {len(raw)}")
        self.value = raw.hex()

    @classmethod
    def from_public_key(cls, public_key: PublicKey) -> Address:
        """Address of a single key account."""
        from ..codec.program import program_from_pub_key

        program = program_from_pub_key(public_key)
        return cls(hash160(bytes.fromhex(program)).hex())

    @classmethod
    def from_multi_public_keys(cls, m: int, public_keys: Sequence[PublicKey]) -> Address:
        """Address of an m-of-n multisig account."""
        from ..codec.program import program_from_multi_pub_key

        program = program_from_multi_pub_key(public_keys, m)
        return cls(hash160(bytes.fromhex(program)).hex())

    @classmethod
    def from_base58(cls, encoded: str) -> Address:
        """
        Parse a printable address.

        Raises:
            InvalidParamsError: On a bad checksum, version or length
        """
        try:
            decoded = base58.b58decode_check(encoded)
        except ValueError as e:
            raise InvalidParamsError(f"Invalid base58 address: {encoded}", cause=e)
        if decoded[:1].hex() != ADDR_VERSION:
            raise InvalidParamsError(f"Unexpected address version: {decoded[:1].hex()}")
        return cls(decoded[1:].hex())

    def to_base58(self) -> str:
        """Printable base58check form."""
        return base58.b58encode_check(bytes.fromhex(ADDR_VERSION + self.value)).decode("ascii")

    def get_b58_checksum(self) -> str:
        """
        Address checksum hash.

        Returns:
            8 hex chars: the first 4 bytes of SHA256(SHA256(base58 address))
        """
        return double_sha256(self.to_base58().encode("utf-8"))[:4].hex()

    def serialize(self) -> str:
        return self.value

    to_hex_string = serialize

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> Address:
        return cls(reader.read(ADDRESS_SIZE))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Address) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f"Address('{self.value}')"
