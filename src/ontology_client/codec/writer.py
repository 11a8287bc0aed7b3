"""
Binary Writer - counterpart of BinaryReader

Accumulates bytes for the transaction wire format and returns them as hex.
"""

import builtins
import struct
from typing import List

from ..runtime.errors import MarshalError


class BinaryWriter:
    """
    Binary writer producing the wire encoding.

    Integers are little-endian, counts use the smallest var-length width.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> "BinaryWriter":
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
        """
        if not 0 <= v <= 0xFF:
            raise MarshalError(f"Value does not fit in one byte: {v}")
        self._bb.append(v)
        return self

    def u16le(self, v: int) -> "BinaryWriter":
        """Write unsigned 16-bit integer in little-endian format."""
        self._bb.extend(struct.pack("<H", v))
        return self

    def u32le(self, v: int) -> "BinaryWriter":
        """Write unsigned 32-bit integer in little-endian format."""
        self._bb.extend(struct.pack("<I", v))
        return self

    def u64le(self, v: int) -> "BinaryWriter":
        """
        Write unsigned 64-bit integer in little-endian format.

        Args:
            v: Integer value to write as 64-bit little-endian
        """
        if not 0 <= v <= 0xFFFFFFFFFFFFFFFF:
            raise MarshalError(f"Value does not fit in 64 bits: {v}")
        self._bb.extend(struct.pack("<Q", v))
        return self

    def boolean(self, v: bool) -> "BinaryWriter":
        """Write a one byte boolean."""
        return self.u8(1 if v else 0)

    def bytes(self, v: bytes) -> "BinaryWriter":
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)
        return self

    def hex(self, v: str) -> "BinaryWriter":
        """Write raw bytes given as hex without length prefix."""
        try:
            return self.bytes(builtins.bytes.fromhex(v))
        except (TypeError, ValueError) as e:
            raise MarshalError(f"Not a hex string: {v!r}", cause=e)

    def var_uint(self, v: int) -> "BinaryWriter":
        """
        Write a var-length count using the smallest width.

        Args:
            v: Unsigned integer value
        """
        if v < 0:
            raise MarshalError("Var-length count cannot be negative")
        if v < 0xFD:
            return self.u8(v)
        if v <= 0xFFFF:
            return self.u8(0xFD).u16le(v)
        if v <= 0xFFFFFFFF:
            return self.u8(0xFE).u32le(v)
        return self.u8(0xFF).u64le(v)

    def var_bytes(self, v: builtins.bytes) -> "BinaryWriter":
        """
        Write bytes with a var-length prefix.

        Args:
            v: Bytes to write with length prefix
        """
        self.var_uint(len(v))
        return self.bytes(v)

    def var_hex(self, v: str) -> "BinaryWriter":
        """Write hex encoded bytes with a var-length prefix."""
        try:
            return self.var_bytes(builtins.bytes.fromhex(v))
        except (TypeError, ValueError) as e:
            raise MarshalError(f"Not a hex string: {v!r}", cause=e)

    def var_string(self, s: str) -> "BinaryWriter":
        """Write a UTF-8 string with a var-length prefix."""
        return self.var_bytes(s.encode("utf-8"))

    def to_bytes(self) -> builtins.bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return builtins.bytes(self._bb)

    def to_hex(self) -> str:
        """Return accumulated bytes as hex."""
        return self.to_bytes().hex()
