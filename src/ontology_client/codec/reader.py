"""
Binary Reader - sequential cursor over a hex encoded buffer

Every field deserializer in the codec takes the same reader and advances it
by exactly the number of bytes it consumes. Reads return hex strings, matching
the representation used across the wire format.
"""

import struct

from ..runtime.errors import BufferUnderrunError, InvalidParamsError, UnmarshalError


class BinaryReader:
    """
    Binary reader over a hex string.

    Owns its buffer and offset; there is no seeking backwards.
    """

    def __init__(self, hex_data: str):
        """
        Initialize reader with a hex string.

        Args:
            hex_data: Hex encoded bytes to read from

        Raises:
            InvalidParamsError: If the input is not valid hex
        """
        try:
            self._buf = bytes.fromhex(hex_data)
        except (TypeError, ValueError) as e:
            raise InvalidParamsError("Reader input is not a hex string", cause=e)
        self._off = 0

    @property
    def position(self) -> int:
        """Current byte offset."""
        return self._off

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._buf) - self._off

    def is_empty(self) -> bool:
        """
        Check if at end of buffer.

        Returns:
            True if no bytes are left
        """
        return self._off >= len(self._buf)

    def _take(self, n: int) -> bytes:
        if n < 0:
            raise InvalidParamsError(f"Cannot read a negative length: {n}")
        if self._off + n > len(self._buf):
            raise BufferUnderrunError(
                f"Attempting to read {n} bytes with {self.remaining} remaining",
                details={"offset": self._off, "requested": n},
            )
        out = self._buf[self._off:self._off + n]
        self._off += n
        return out

    def read(self, n: int) -> str:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            The bytes as a hex string

        Raises:
            BufferUnderrunError: If fewer than n bytes remain
        """
        return self._take(n).hex()

    def read_bytes(self, n: int) -> bytes:
        """Read n raw bytes."""
        return self._take(n)

    def read_uint8(self) -> int:
        """Read unsigned 8-bit integer."""
        return self._take(1)[0]

    def read_uint16(self) -> int:
        """Read unsigned 16-bit integer in little-endian format."""
        return struct.unpack("<H", self._take(2))[0]

    def read_uint32(self) -> int:
        """Read unsigned 32-bit integer in little-endian format."""
        return struct.unpack("<I", self._take(4))[0]

    def read_uint64(self) -> int:
        """Read unsigned 64-bit integer in little-endian format."""
        return struct.unpack("<Q", self._take(8))[0]

    def read_bool(self) -> bool:
        """Read a one byte boolean (any non-zero value is true)."""
        return self.read_uint8() != 0

    def read_next_len(self) -> int:
        """
        Read a var-length count.

        One byte below 0xfd; 0xfd, 0xfe and 0xff announce a 2, 4 or 8 byte
        little-endian count.

        Returns:
            Decoded count
        """
        prefix = self.read_uint8()
        if prefix == 0xFD:
            return self.read_uint16()
        if prefix == 0xFE:
            return self.read_uint32()
        if prefix == 0xFF:
            return self.read_uint64()
        return prefix

    read_var_length = read_next_len

    def read_next_bytes(self) -> str:
        """
        Read bytes with a var-length count prefix.

        Returns:
            The bytes as a hex string
        """
        return self.read(self.read_next_len())

    def read_var_string(self) -> str:
        """
        Read a UTF-8 string with a var-length count prefix.

        Returns:
            Decoded string
        """
        raw = self._take(self.read_next_len())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise UnmarshalError("String field is not valid UTF-8", cause=e)

    def read_rest(self) -> str:
        """Read everything that is left as hex."""
        return self.read(self.remaining)
