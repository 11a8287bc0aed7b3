"""
Signatures and their wire formats.

A Signature is one logical (scheme, value, optional key id) triple with three
encodings:

- compact hex: ``[scheme id][SM2 only: user id, 0x00][value]``
- JWT: base64url of the value, no padding
- PGP envelope: ``{PublicKeyId?, Format: "pgp", Algorithm, Value}`` where
  Value is base64 of the compact hex bytes
"""

from __future__ import annotations
import base64
import binascii
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from ..codec.reader import BinaryReader
from ..codec.writer import BinaryWriter
from ..constants import DEFAULT_SM2_ID
from ..runtime.errors import InvalidParamsError, MalformedSignatureError
from .schemes import SignatureScheme


class PgpSignature(BaseModel):
    """PGP representation of a signature with an optional key id."""

    public_key_id: Optional[str] = Field(default=None, alias="PublicKeyId")
    format: Literal["pgp"] = Field(default="pgp", alias="Format")
    algorithm: str = Field(alias="Algorithm")
    value: str = Field(alias="Value")

    model_config = {"populate_by_name": True}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON envelope, omitting an absent key id."""
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class Signature:
    """
    Signature generated by signing data with a private key.

    ``public_key_id`` is the full key id (``<ONT ID>#keys-<n>``) and is only
    carried by the envelope formats.
    """

    algorithm: SignatureScheme
    value: str
    public_key_id: Optional[str] = None

    @classmethod
    def deserialize_hex(cls, data: str) -> Signature:
        """
        Parse the compact hex format.

        Args:
            data: Hex string

        Raises:
            InvalidParamsError: If data is shorter than one byte
            UnknownSchemeError: If the scheme id is not known
            MalformedSignatureError: If an SM2 user id is not zero terminated
        """
        if not isinstance(data, str) or len(data) < 2:
            raise InvalidParamsError("Signature data is too short")

        reader = BinaryReader(data)
        scheme = SignatureScheme.from_hex(reader.read_uint8())

        if scheme is SignatureScheme.SM2withSM3:
            terminated = False
            while not reader.is_empty():
                if reader.read_uint8() == 0:
                    terminated = True
                    break
            if not terminated:
                raise MalformedSignatureError("SM2 signature user id is not zero terminated")

        return cls(scheme, reader.read_rest())

    def serialize_hex(self) -> str:
        """Serialize to the compact hex format."""
        writer = BinaryWriter().u8(self.algorithm.hex)
        if self.algorithm is SignatureScheme.SM2withSM3:
            writer.bytes(DEFAULT_SM2_ID.encode("ascii")).u8(0)
        return writer.hex(self.value).to_hex()

    @classmethod
    def deserialize_jwt(cls, encoded: str, algorithm: SignatureScheme, public_key_id: str) -> Signature:
        """
        Parse a base64url value. Scheme and key id travel outside the token.
        """
        padded = encoded + "=" * (-len(encoded) % 4)
        try:
            decoded = base64.urlsafe_b64decode(padded.encode("ascii"))
        except (binascii.Error, UnicodeEncodeError) as e:
            raise InvalidParamsError("Signature is not base64url", cause=e)
        return cls(algorithm, decoded.hex(), public_key_id)

    def serialize_jwt(self) -> str:
        """Serialize the value to base64url without padding."""
        return base64.urlsafe_b64encode(bytes.fromhex(self.value)).rstrip(b"=").decode("ascii")

    @classmethod
    def deserialize_pgp(cls, pgp_signature: Union[PgpSignature, Dict[str, Any]]) -> Signature:
        """
        Parse a PGP envelope.

        The scheme comes from the envelope's Algorithm label; any key id is
        dropped.
        """
        if not isinstance(pgp_signature, PgpSignature):
            try:
                pgp_signature = PgpSignature.model_validate(pgp_signature)
            except ValidationError as e:
                raise InvalidParamsError("Malformed PGP signature envelope", cause=e)
        try:
            value = base64.b64decode(pgp_signature.value, validate=True).hex()
        except binascii.Error as e:
            raise InvalidParamsError("PGP signature value is not base64", cause=e)
        return cls(SignatureScheme.from_label(pgp_signature.algorithm), cls.deserialize_hex(value).value)

    def serialize_pgp(self, key_id: Optional[str] = None) -> PgpSignature:
        """
        Serialize to a PGP envelope.

        Args:
            key_id: Whole public key id in the form <ONT ID>#keys-<id>
        """
        encoded = base64.b64encode(bytes.fromhex(self.serialize_hex())).decode("ascii")
        return PgpSignature(
            public_key_id=key_id,
            algorithm=self.algorithm.label,
            value=encoded,
        )
