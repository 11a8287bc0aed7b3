"""
Transaction payloads.

Each payload owns its own sub-format; the transaction codec only picks the
class from the transaction type and hands it the shared reader.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..codec.reader import BinaryReader
from ..codec.writer import BinaryWriter


class Payload(ABC):
    """Base class for transaction payloads."""

    @abstractmethod
    def serialize(self) -> str:
        """Serialize to hex."""

    @classmethod
    @abstractmethod
    def deserialize(cls, reader: BinaryReader) -> Payload:
        """Read the payload from the reader, consuming exactly its bytes."""


@dataclass
class InvokeCode(Payload):
    """Contract invocation: the code to run."""

    code: str = ""

    def serialize(self) -> str:
        return BinaryWriter().var_hex(self.code).to_hex()

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> InvokeCode:
        return cls(reader.read_next_bytes())


@dataclass
class DeployCode(Payload):
    """Contract deployment: code plus descriptive metadata."""

    code: str = ""
    need_storage: bool = True
    name: str = ""
    version: str = ""
    author: str = ""
    email: str = ""
    description: str = ""

    def serialize(self) -> str:
        return (
            BinaryWriter()
            .var_hex(self.code)
            .boolean(self.need_storage)
            .var_string(self.name)
            .var_string(self.version)
            .var_string(self.author)
            .var_string(self.email)
            .var_string(self.description)
            .to_hex()
        )

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> DeployCode:
        return cls(
            code=reader.read_next_bytes(),
            need_storage=reader.read_bool(),
            name=reader.read_var_string(),
            version=reader.read_var_string(),
            author=reader.read_var_string(),
            email=reader.read_var_string(),
            description=reader.read_var_string(),
        )
