"""
Key types, curves and signature schemes.

The scheme table maps every SignatureScheme to the digest it signs and the
key algorithm it requires. It is checked once at import so that hash
selection and key/scheme compatibility are answered from a single place.
"""

from __future__ import annotations
import hashlib
from enum import Enum
from typing import Dict, NamedTuple, Optional

from Crypto.Hash import RIPEMD160

from ..runtime.errors import UnknownSchemeError, InvalidParamsError


class KeyType(Enum):
    """Asymmetric key algorithm with its wire id."""

    ECDSA = ("ECDSA", 0x12)
    SM2 = ("SM2", 0x13)
    EDDSA = ("EDDSA", 0x14)

    def __init__(self, label: str, hex_id: int):
        self.label = label
        self.hex = hex_id

    @classmethod
    def from_label(cls, label: str) -> KeyType:
        for item in cls:
            if item.label == label:
                return item
        raise InvalidParamsError(f"Unknown key type: {label}")

    @classmethod
    def from_hex(cls, hex_id: int) -> KeyType:
        for item in cls:
            if item.hex == hex_id:
                return item
        raise InvalidParamsError(f"Unknown key type id: {hex_id:#04x}")


class CurveLabel(Enum):
    """Elliptic curve with its wire id."""

    SECP224R1 = ("P-224", 1)
    SECP256R1 = ("P-256", 2)
    SECP384R1 = ("P-384", 3)
    SECP521R1 = ("P-521", 4)
    SM2P256V1 = ("sm2p256v1", 20)
    ED25519 = ("ed25519", 25)

    def __init__(self, label: str, hex_id: int):
        self.label = label
        self.hex = hex_id

    @classmethod
    def from_label(cls, label: str) -> CurveLabel:
        for item in cls:
            if item.label == label:
                return item
        raise InvalidParamsError(f"Unknown curve: {label}")

    @classmethod
    def from_hex(cls, hex_id: int) -> CurveLabel:
        for item in cls:
            if item.hex == hex_id:
                return item
        raise InvalidParamsError(f"Unknown curve id: {hex_id}")


class HashAlgorithm(Enum):
    """Digest functions available to signing schemes."""

    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_224 = "sha3_224"
    SHA3_256 = "sha3_256"
    SHA3_384 = "sha3_384"
    SHA3_512 = "sha3_512"
    RIPEMD160 = "ripemd160"

    def digest(self, data: bytes) -> bytes:
        """Hash data with this algorithm."""
        if self is HashAlgorithm.RIPEMD160:
            return RIPEMD160.new(data).digest()
        return hashlib.new(self.value, data).digest()


class SignatureScheme(Enum):
    """Signature algorithm combined with a digest."""

    ECDSAwithSHA224 = ("SHA224withECDSA", 0, "ES224")
    ECDSAwithSHA256 = ("SHA256withECDSA", 1, "ES256")
    ECDSAwithSHA384 = ("SHA384withECDSA", 2, "ES384")
    ECDSAwithSHA512 = ("SHA512withECDSA", 3, "ES512")
    ECDSAwithSHA3_224 = ("SHA3-224withECDSA", 4, "ES3-224")
    ECDSAwithSHA3_256 = ("SHA3-256withECDSA", 5, "ES3-256")
    ECDSAwithSHA3_384 = ("SHA3-384withECDSA", 6, "ES3-384")
    ECDSAwithSHA3_512 = ("SHA3-512withECDSA", 7, "ES3-512")
    ECDSAwithRIPEMD160 = ("RIPEMD160withECDSA", 8, "ER160")
    SM2withSM3 = ("SM3withSM2", 9, "SM")
    EDDSAwithSHA512 = ("SHA512withEdDSA", 10, "EDS512")

    def __init__(self, label: str, hex_id: int, label_jws: str):
        self.label = label
        self.hex = hex_id
        self.label_jws = label_jws

    @classmethod
    def from_label(cls, label: str) -> SignatureScheme:
        for item in cls:
            if item.label == label:
                return item
        raise UnknownSchemeError(f"Unknown signature scheme label: {label}")

    @classmethod
    def from_label_jws(cls, label: str) -> SignatureScheme:
        for item in cls:
            if item.label_jws == label:
                return item
        raise UnknownSchemeError(f"Unknown JWS algorithm: {label}")

    @classmethod
    def from_hex(cls, hex_id: int) -> SignatureScheme:
        for item in cls:
            if item.hex == hex_id:
                return item
        raise UnknownSchemeError(f"Unknown signature scheme id: {hex_id}",
                                 details={"id": hex_id})

    @property
    def hash_algorithm(self) -> Optional[HashAlgorithm]:
        """Digest signed under this scheme, None when it is not a generic hash."""
        return SCHEME_TABLE[self].hash_algorithm

    @property
    def key_type(self) -> KeyType:
        """Key algorithm a key must have to use this scheme."""
        return SCHEME_TABLE[self].key_type


class SchemeSpec(NamedTuple):
    hash_algorithm: Optional[HashAlgorithm]
    key_type: KeyType


# SM3 is not a generic hash here; SM2 signers digest with their own user id.
SCHEME_TABLE: Dict[SignatureScheme, SchemeSpec] = {
    SignatureScheme.ECDSAwithSHA224: SchemeSpec(HashAlgorithm.SHA224, KeyType.ECDSA),
    SignatureScheme.ECDSAwithSHA256: SchemeSpec(HashAlgorithm.SHA256, KeyType.ECDSA),
    SignatureScheme.ECDSAwithSHA384: SchemeSpec(HashAlgorithm.SHA384, KeyType.ECDSA),
    SignatureScheme.ECDSAwithSHA512: SchemeSpec(HashAlgorithm.SHA512, KeyType.ECDSA),
    SignatureScheme.ECDSAwithSHA3_224: SchemeSpec(HashAlgorithm.SHA3_224, KeyType.ECDSA),
    SignatureScheme.ECDSAwithSHA3_256: SchemeSpec(HashAlgorithm.SHA3_256, KeyType.ECDSA),
    SignatureScheme.ECDSAwithSHA3_384: SchemeSpec(HashAlgorithm.SHA3_384, KeyType.ECDSA),
    SignatureScheme.ECDSAwithSHA3_512: SchemeSpec(HashAlgorithm.SHA3_512, KeyType.ECDSA),
    SignatureScheme.ECDSAwithRIPEMD160: SchemeSpec(HashAlgorithm.RIPEMD160, KeyType.ECDSA),
    SignatureScheme.SM2withSM3: SchemeSpec(None, KeyType.SM2),
    SignatureScheme.EDDSAwithSHA512: SchemeSpec(HashAlgorithm.SHA512, KeyType.EDDSA),
}


def _check_scheme_table() -> None:
    missing = set(SignatureScheme) - set(SCHEME_TABLE)
    if missing:
        raise RuntimeError(f"Signature schemes without a table entry: {sorted(s.name for s in missing)}")
    ids = [scheme.hex for scheme in SignatureScheme]
    if len(ids) != len(set(ids)):
        raise RuntimeError("Signature scheme ids are not unique")


_check_scheme_table()


__all__ = [
    "KeyType",
    "CurveLabel",
    "HashAlgorithm",
    "SignatureScheme",
    "SchemeSpec",
    "SCHEME_TABLE",
]
