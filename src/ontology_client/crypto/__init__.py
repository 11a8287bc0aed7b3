"""
Cryptographic primitives for the Ontology client.

Provides key descriptors, signature schemes, signatures, addresses and
password protection of private keys.
"""

from .schemes import KeyType, CurveLabel, HashAlgorithm, SignatureScheme, SCHEME_TABLE
from .key import Key, KeyParameters, PublicKey, PrivateKey
from .address import Address
from .signature import Signature, PgpSignature
from .scrypt import (
    ScryptParams,
    encrypt,
    decrypt,
    check_decrypted,
    encrypt_with_ecb,
    decrypt_with_ecb,
    check_ecb_decrypted,
)

__all__ = [
    "KeyType",
    "CurveLabel",
    "HashAlgorithm",
    "SignatureScheme",
    "SCHEME_TABLE",
    "Key",
    "KeyParameters",
    "PublicKey",
    "PrivateKey",
    "Address",
    "Signature",
    "PgpSignature",
    "ScryptParams",
    "encrypt",
    "decrypt",
    "check_decrypted",
    "encrypt_with_ecb",
    "decrypt_with_ecb",
    "check_ecb_decrypted",
]
