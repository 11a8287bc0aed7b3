"""
Transaction Codec

Serializes transactions to the canonical hex wire format, parses them back
and computes the transaction hash.

Wire layout::

    version(1) | type(1) | nonce(4) | gas_price(8) | gas_limit(8) | payer(20)
    | payload | attribute count | attributes | signature count | signatures

Everything up to and including the attributes is the unsigned portion; the
hash is SHA256(SHA256(unsigned portion)) and is never read from the wire.
"""

from __future__ import annotations
import logging
from typing import Dict, Type, TYPE_CHECKING

from ..constants import NONCE_SIZE
from ..crypto.address import Address
from ..tx.attribute import TransactionAttribute
from ..tx.payload import DeployCode, InvokeCode, Payload
from ..tx.tx_signature import TxSignature
from ..tx.types import Fixed64, TxType
from ..runtime.errors import MarshalError
from .hashes import double_sha256
from .reader import BinaryReader
from .writer import BinaryWriter

if TYPE_CHECKING:
    from ..tx.transaction import Transaction

logger = logging.getLogger(__name__)

PAYLOAD_TYPES: Dict[int, Type[Payload]] = {
    TxType.Invoke: InvokeCode,
    TxType.Deploy: DeployCode,
}

# Unknown transaction types are read as invocations, not rejected.
DEFAULT_PAYLOAD_TYPE: Type[Payload] = InvokeCode


def payload_type_for(tx_type: int) -> Type[Payload]:
    """Payload class for a transaction type tag."""
    payload_type = PAYLOAD_TYPES.get(tx_type)
    if payload_type is None:
        logger.debug("No payload registered for tx type %#04x, reading as InvokeCode", tx_type)
        return DEFAULT_PAYLOAD_TYPE
    return payload_type


class TransactionCodec:
    """Static serialization and hashing of transactions."""

    @staticmethod
    def serialize_unsigned(tx: Transaction) -> str:
        """
        Serialize header, payload and attributes.

        Raises:
            MarshalError: If the transaction has no payload or a malformed field
        """
        if tx.payload is None:
            raise MarshalError("Transaction has no payload")
        if len(tx.nonce) != NONCE_SIZE * 2:
            raise MarshalError(f"Nonce must be {NONCE_SIZE} bytes")

        writer = BinaryWriter()
        writer.u8(tx.version)
        writer.u8(tx.type)
        writer.hex(tx.nonce)
        writer.hex(tx.gas_price.serialize())
        writer.hex(tx.gas_limit.serialize())
        writer.hex(tx.payer.serialize())
        writer.hex(tx.payload.serialize())

        writer.var_uint(len(tx.tx_attributes))
        for attribute in tx.tx_attributes:
            writer.hex(attribute.serialize())
        return writer.to_hex()

    @staticmethod
    def serialize_signed(tx: Transaction) -> str:
        """Serialize the signature list."""
        writer = BinaryWriter()
        writer.var_uint(len(tx.sigs))
        for sig in tx.sigs:
            writer.hex(sig.serialize())
        return writer.to_hex()

    @staticmethod
    def serialize(tx: Transaction) -> str:
        """Serialize the whole transaction to hex."""
        return TransactionCodec.serialize_unsigned(tx) + TransactionCodec.serialize_signed(tx)

    @staticmethod
    def deserialize(hex_data: str) -> Transaction:
        """
        Parse a transaction.

        Raises:
            BufferUnderrunError: If the data ends inside a field
        """
        from ..tx.transaction import Transaction

        reader = BinaryReader(hex_data)
        tx = Transaction()

        tx.version = reader.read_uint8()
        tx.type = reader.read_uint8()
        tx.nonce = reader.read(NONCE_SIZE)
        tx.gas_price = Fixed64.deserialize(reader)
        tx.gas_limit = Fixed64.deserialize(reader)
        tx.payer = Address.deserialize(reader)
        tx.payload = payload_type_for(tx.type).deserialize(reader)

        attribute_count = reader.read_next_len()
        tx.tx_attributes = [TransactionAttribute.deserialize(reader) for _ in range(attribute_count)]

        sig_count = reader.read_next_len()
        tx.sigs = [TxSignature.deserialize(reader) for _ in range(sig_count)]

        if not reader.is_empty():
            logger.debug("Ignoring %d trailing bytes after transaction", reader.remaining)
        return tx

    @staticmethod
    def get_hash(tx: Transaction) -> str:
        """Transaction hash over the unsigned portion, as hex."""
        unsigned = bytes.fromhex(TransactionCodec.serialize_unsigned(tx))
        return double_sha256(unsigned).hex()
