"""
Scalar transaction types: transaction type tags, Fixed64 amounts and fees.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum

from ..codec.reader import BinaryReader
from ..codec.writer import BinaryWriter
from ..crypto.address import Address
from ..runtime.errors import InvalidParamsError


class TxType(IntEnum):
    """Transaction type tag (second byte of every transaction)."""

    BookKeeping = 0x00
    IssueAsset = 0x01
    BookKeeper = 0x02
    Claim = 0x03
    Enrollment = 0x04
    Vote = 0x05
    DataFile = 0x12
    PrivacyPayload = 0x20
    RegisterAsset = 0x40
    TransferAsset = 0x80
    Record = 0x81
    Deploy = 0xD0
    Invoke = 0xD1


@dataclass(frozen=True)
class Fixed64:
    """Unsigned 64-bit amount, little-endian on the wire."""

    value: int = 0

    def __post_init__(self):
        if not 0 <= self.value <= 0xFFFFFFFFFFFFFFFF:
            raise InvalidParamsError(f"Fixed64 out of range: {self.value}")

    def serialize(self) -> str:
        return BinaryWriter().u64le(self.value).to_hex()

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> Fixed64:
        return cls(reader.read_uint64())


@dataclass
class Fee:
    """Fee amount and the address paying it."""

    amount: Fixed64
    payer: Address

    def serialize(self) -> str:
        return self.amount.serialize() + self.payer.serialize()

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> Fee:
        amount = Fixed64.deserialize(reader)
        return cls(amount, Address.deserialize(reader))
