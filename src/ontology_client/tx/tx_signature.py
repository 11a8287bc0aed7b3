"""
Signatures attached to a transaction.

On the wire a TxSignature is two count-prefixed scripts: the invocation
script pushing every signature and the verification script naming the
key(s) and threshold.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from ..codec.program import (
    get_params_from_program,
    get_program_info,
    program_from_multi_pub_key,
    program_from_params,
    program_from_pub_key,
    sort_public_keys,
)
from ..codec.reader import BinaryReader
from ..codec.writer import BinaryWriter
from ..crypto.key import PublicKey
from ..crypto.signature import Signature
from ..runtime.errors import InvalidParamsError

logger = logging.getLogger(__name__)


@dataclass
class TxSignature:
    """
    Public keys, threshold and compact hex signatures of one signer.

    ``sig_data`` holds Signature.serialize_hex() values in signing order.
    """

    pub_keys: List[PublicKey] = field(default_factory=list)
    m: int = 0
    sig_data: List[str] = field(default_factory=list)

    def __post_init__(self):
        # multisig scripts carry keys in canonical order
        if len(self.pub_keys) > 1:
            self.pub_keys = sort_public_keys(self.pub_keys)

    @classmethod
    def create(cls, public_key: PublicKey, signature: Signature) -> TxSignature:
        """Single key signer."""
        return cls([public_key], 1, [signature.serialize_hex()])

    @classmethod
    def create_multi(cls, pub_keys: Sequence[PublicKey], m: int) -> TxSignature:
        """Multisig signer with no signatures yet; keys are kept in script order."""
        if not 1 <= m <= len(pub_keys):
            raise InvalidParamsError(f"Invalid multisig threshold {m} of {len(pub_keys)}")
        return cls(list(pub_keys), m, [])

    @property
    def signatures(self) -> List[Signature]:
        """Decoded signatures."""
        return [Signature.deserialize_hex(sig) for sig in self.sig_data]

    def add_signature(self, signature: Signature) -> None:
        if len(self.sig_data) >= len(self.pub_keys):
            raise InvalidParamsError("Signer already holds one signature per key")
        self.sig_data.append(signature.serialize_hex())

    def _verification_script(self) -> str:
        if len(self.pub_keys) == 1:
            return program_from_pub_key(self.pub_keys[0])
        return program_from_multi_pub_key(self.pub_keys, self.m)

    def serialize(self) -> str:
        return (
            BinaryWriter()
            .var_hex(program_from_params(self.sig_data))
            .var_hex(self._verification_script())
            .to_hex()
        )

    @classmethod
    def deserialize(cls, reader: BinaryReader) -> TxSignature:
        invocation = reader.read_next_bytes()
        verification = reader.read_next_bytes()
        info = get_program_info(verification)
        sig_data = get_params_from_program(invocation)
        logger.debug("Read signer with %d key(s), %d signature(s)", len(info.pub_keys), len(sig_data))
        return cls(info.pub_keys, info.m, sig_data)
