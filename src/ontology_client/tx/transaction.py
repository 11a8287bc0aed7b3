"""
Transaction model.

A new Transaction gets a random nonce, zero gas, the all-zero payer and the
Invoke type; callers then set the payload, attributes and gas before
serializing or signing it.
"""

from __future__ import annotations
import os
from typing import List, Optional

from ..constants import ADDRESS_SIZE, NONCE_SIZE
from ..crypto.address import Address
from .attribute import TransactionAttribute
from .payload import Payload
from .tx_signature import TxSignature
from .types import Fixed64, TxType


class Transaction:
    """Ontology transaction."""

    def __init__(self):
        self.version: int = 0x00
        self.type: int = TxType.Invoke
        self.nonce: str = os.urandom(NONCE_SIZE).hex()
        self.gas_price: Fixed64 = Fixed64()
        self.gas_limit: Fixed64 = Fixed64()
        self.payer: Address = Address("00" * ADDRESS_SIZE)
        self.payload: Optional[Payload] = None
        self.tx_attributes: List[TransactionAttribute] = []
        self.sigs: List[TxSignature] = []

    @classmethod
    def deserialize(cls, hex_data: str) -> Transaction:
        from ..codec.transaction_codec import TransactionCodec

        return TransactionCodec.deserialize(hex_data)

    def serialize(self) -> str:
        from ..codec.transaction_codec import TransactionCodec

        return TransactionCodec.serialize(self)

    def serialize_unsigned_data(self) -> str:
        from ..codec.transaction_codec import TransactionCodec

        return TransactionCodec.serialize_unsigned(self)

    def serialize_signed_data(self) -> str:
        from ..codec.transaction_codec import TransactionCodec

        return TransactionCodec.serialize_signed(self)

    def get_hash(self) -> str:
        """Hex hash of the unsigned portion; recomputed on every call."""
        from ..codec.transaction_codec import TransactionCodec

        return TransactionCodec.get_hash(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return (
            self.version == other.version
            and self.type == other.type
            and self.nonce == other.nonce
            and self.gas_price == other.gas_price
            and self.gas_limit == other.gas_limit
            and self.payer == other.payer
            and self.payload == other.payload
            and self.tx_attributes == other.tx_attributes
            and self.sigs == other.sigs
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Transaction(type={self.type:#04x}, nonce={self.nonce}, "
            f"payload={type(self.payload).__name__}, sigs={len(self.sigs)})"
        )
