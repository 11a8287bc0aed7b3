"""
Transaction attributes.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum

from ..codec.reader import BinaryReader
from ..codec.writer import BinaryWriter
from ..constants import ADDRESS_SIZE
from ..runtime.errors import MarshalError, UnmarshalError


class TransactionAttributeUsage(IntEnum):
    Nonce = 0x00
    Script = 0x20
    DescriptionUrl = 0x81
    Description = 0x90


@dataclass
class TransactionAttribute:
    """
    Usage tag plus data.

    Script data is a fixed 20-byte hash; every other usage is count prefixed.
    """

    usage: int
    data: str

    def serialize(self) -> str:
        writer = BinaryWriter().u8(self.usage)
        if self.usage == TransactionAttributeUsage.Script:
            if len(self.data) != ADDRESS_SIZE * 2:
                raise MarshalError(f"Script attribute must hold {ADDRESS_SIZE} bytes")
            writer.hex(self.data)
        elif self.usage in (
            TransactionAttributeUsage.Nonce,
            TransactionAttributeUsage.DescriptionUrl,
            TransactionAttributeUsage.Description,
        ):
            writer.var_hex(self.data)
        else:
            raise MarshalError(f"Unsupported attribute usage: {self.usage:#04x}")
        return writer.to_hex()

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> TransactionAttribute:
        usage = reader.read_uint8()
        if usage == TransactionAttributeUsage.Script:
            return cls(usage, reader.read(ADDRESS_SIZE))
        if usage in (
            TransactionAttributeUsage.Nonce,
            TransactionAttributeUsage.DescriptionUrl,
            TransactionAttributeUsage.Description,
        ):
            return cls(usage, reader.read_next_bytes())
        raise UnmarshalError(f"Unsupported attribute usage: {usage:#04x}")
