"""
Keys for the Ontology client.

Key is the algorithm descriptor shared by public and private keys: it answers
which digest a scheme signs and whether a scheme may be used with the key.
PrivateKey and PublicKey add signing, verification and wire serialization.

ECDSA arithmetic is delegated to the ``ecdsa`` package, Ed25519 to
``cryptography``. SM2 keys can be described and serialized but not used to
sign or verify.
"""

from __future__ import annotations
import hashlib
import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

import ecdsa
from ecdsa import SigningKey, VerifyingKey, NIST224p, NIST256p, NIST384p, NIST521p
from ecdsa.util import MalformedSignature, sigencode_string, sigdecode_string
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..codec.reader import BinaryReader
from ..codec.writer import BinaryWriter
from ..constants import DEFAULT_ALGORITHM
from ..runtime.errors import (
    InvalidKeyError,
    InvalidParamsError,
    PasswordError,
    UnsupportedHashAlgorithmError,
    UnsupportedSchemeError,
)
from .schemes import CurveLabel, HashAlgorithm, KeyType, SignatureScheme, SCHEME_TABLE

if TYPE_CHECKING:
    from .address import Address
    from .scrypt import ScryptParams
    from .signature import Signature

logger = logging.getLogger(__name__)

ECDSA_CURVES = {
    CurveLabel.SECP224R1: NIST224p,
    CurveLabel.SECP256R1: NIST256p,
    CurveLabel.SECP384R1: NIST384p,
    CurveLabel.SECP521R1: NIST521p,
}


class KeyParameters:
    """Specific parameters for the key type."""

    def __init__(self, curve: CurveLabel):
        self.curve = curve

    def serialize_json(self) -> Dict[str, str]:
        return {"curve": self.curve.label}

    @classmethod
    def deserialize_json(cls, data: Dict[str, Any]) -> KeyParameters:
        return cls(CurveLabel.from_label(data["curve"]))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, KeyParameters) and self.curve == other.curve

    def __hash__(self) -> int:
        return hash(self.curve)


class Key:
    """
    Common representation of a private or public key.

    The algorithm and its parameters are fixed at construction. There is no
    implicit default; see PrivateKey.insecure_default for the test-only path.
    """

    def __init__(self, key: str, algorithm: KeyType, parameters: KeyParameters):
        """
        Create a key.

        Args:
            key: Hex encoded key value
            algorithm: Key type
            parameters: Parameters of the key type
        """
        if not isinstance(algorithm, KeyType):
            raise InvalidParamsError(f"Key algorithm must be a KeyType, got {type(algorithm).__name__}")
        if not isinstance(parameters, KeyParameters):
            raise InvalidParamsError("Key parameters must be KeyParameters")
        try:
            bytes.fromhex(key)
        except (TypeError, ValueError) as e:
            raise InvalidKeyError("Key value must be a hex string", cause=e)
        self.key = key.lower()
        self.algorithm = algorithm
        self.parameters = parameters

    def hash_for(self, scheme: SignatureScheme) -> HashAlgorithm:
        """
        Return the digest signed under a scheme.

        Raises:
            UnsupportedHashAlgorithmError: For SM2withSM3 and non-members
        """
        spec = SCHEME_TABLE.get(scheme) if isinstance(scheme, SignatureScheme) else None
        if spec is None or spec.hash_algorithm is None:
            raise UnsupportedHashAlgorithmError(f"Unsupported hash algorithm for scheme: {scheme}")
        return spec.hash_algorithm

    def compute_hash(self, msg: str, scheme: SignatureScheme) -> str:
        """
        Compute the hash of a message with the scheme's digest.

        Args:
            msg: Hex encoded input data
            scheme: Signing scheme to use

        Returns:
            Hex encoded digest
        """
        return self.hash_for(scheme).digest(bytes.fromhex(msg)).hex()

    def is_schema_supported(self, scheme: SignatureScheme) -> bool:
        """
        Test if a signing scheme is compatible with this key type.

        Raises:
            UnsupportedSchemeError: If scheme is not a SignatureScheme
        """
        if not isinstance(scheme, SignatureScheme):
            raise UnsupportedSchemeError(f"Unsupported signature scheme: {scheme!r}")
        return SCHEME_TABLE[scheme].key_type == self.algorithm

    supports = is_schema_supported

    def require_scheme(self, scheme: SignatureScheme) -> None:
        """Raise UnsupportedSchemeError unless the scheme fits this key."""
        if not self.is_schema_supported(scheme):
            raise UnsupportedSchemeError(
                f"Scheme {scheme.label} requires a {scheme.key_type.label} key, "
                f"got {self.algorithm.label}"
            )

    def serialize_json(self) -> Dict[str, Any]:
        """JSON representation of the key."""
        return {
            "algorithm": self.algorithm.label,
            "parameters": self.parameters.serialize_json(),
            "key": self.key,
        }

    @classmethod
    def deserialize_json(cls, data: Dict[str, Any]) -> Key:
        return cls(
            data["key"],
            KeyType.from_label(data["algorithm"]),
            KeyParameters.deserialize_json(data["parameters"]),
        )

    def __eq__(self, other: object) -> bool:
        return (
            type(other) is type(self)
            and self.key == other.key
            and self.algorithm == other.algorithm
            and self.parameters == other.parameters
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.key, self.algorithm, self.parameters))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(algorithm={self.algorithm.label}, curve={self.parameters.curve.label})"

    def _ecdsa_curve(self):
        curve = ECDSA_CURVES.get(self.parameters.curve)
        if curve is None:
            raise InvalidKeyError(f"Curve {self.parameters.curve.label} is not an ECDSA curve")
        return curve


class PublicKey(Key):
    """Public key with wire serialization and verification."""

    def serialize_hex(self) -> str:
        """
        Serialize for programs and the wire.

        ECDSA P-256 keys are the bare compressed point; every other key is
        prefixed with its key type id and curve id.
        """
        if self.algorithm is KeyType.ECDSA and self.parameters.curve is CurveLabel.SECP256R1:
            return self.key
        return (
            BinaryWriter()
            .u8(self.algorithm.hex)
            .u8(self.parameters.curve.hex)
            .hex(self.key)
            .to_hex()
        )

    @classmethod
    def deserialize_hex(cls, reader: BinaryReader, length: int = 33) -> PublicKey:
        """
        Read a serialized public key.

        Args:
            reader: Reader positioned at the key
            length: Serialized length in bytes
        """
        if length == 33:
            return cls(reader.read(33), KeyType.ECDSA, KeyParameters(CurveLabel.SECP256R1))
        algorithm = KeyType.from_hex(reader.read_uint8())
        curve = CurveLabel.from_hex(reader.read_uint8())
        return cls(reader.read(length - 2), algorithm, KeyParameters(curve))

    def verify(self, msg: str, signature: Signature) -> bool:
        """
        Verify a signature over hex encoded data.

        Raises:
            UnsupportedSchemeError: If the signature scheme does not fit this key
        """
        self.require_scheme(signature.algorithm)
        digest = bytes.fromhex(self.compute_hash(msg, signature.algorithm))
        sig = bytes.fromhex(signature.value)

        if self.algorithm is KeyType.ECDSA:
            try:
                vk = VerifyingKey.from_string(bytes.fromhex(self.key), curve=self._ecdsa_curve())
            except ecdsa.MalformedPointError as e:
                raise InvalidKeyError("Invalid ECDSA public key", cause=e)
            try:
                return vk.verify_digest(sig, digest, sigdecode=sigdecode_string, allow_truncate=True)
            except (ecdsa.BadSignatureError, ecdsa.BadDigestError, MalformedSignature):
                return False

        if self.algorithm is KeyType.EDDSA:
            vk = CryptoEd25519PublicKey.from_public_bytes(bytes.fromhex(self.key))
            try:
                vk.verify(sig, digest)
                return True
            except InvalidSignature:
                return False

        raise UnsupportedHashAlgorithmError(f"Verification is not available for {self.algorithm.label} keys")


class PrivateKey(Key):
    """Private key able to sign and to protect itself with a password."""

    @classmethod
    def random(cls, algorithm: KeyType, parameters: KeyParameters) -> PrivateKey:
        """Generate a fresh private key."""
        if algorithm is KeyType.ECDSA:
            curve = ECDSA_CURVES.get(parameters.curve)
            if curve is None:
                raise InvalidKeyError(f"Curve {parameters.curve.label} is not an ECDSA curve")
            return cls(SigningKey.generate(curve=curve).to_string().hex(), algorithm, parameters)
        if algorithm is KeyType.EDDSA:
            raw = CryptoEd25519PrivateKey.generate().private_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PrivateFormat.Raw,
                encryption_algorithm=serialization.NoEncryption(),
            )
            return cls(raw.hex(), algorithm, parameters)
        raise InvalidKeyError(f"Key generation is not available for {algorithm.label} keys")

    @classmethod
    def insecure_default(cls, key: str) -> PrivateKey:
        """
        Build a key with the default ECDSA P-256 parameters.

        Only meant for tests; real keys must state their algorithm.
        """
        return cls(
            key,
            KeyType.from_label(DEFAULT_ALGORITHM["algorithm"]),
            KeyParameters.deserialize_json(DEFAULT_ALGORITHM["parameters"]),
        )

    def get_public_key(self) -> PublicKey:
        """Derive the matching public key."""
        raw = bytes.fromhex(self.key)

        if self.algorithm is KeyType.ECDSA:
            try:
                sk = SigningKey.from_string(raw, curve=self._ecdsa_curve())
            except (ValueError, ecdsa.MalformedPointError) as e:
                raise InvalidKeyError("Invalid ECDSA private key", cause=e)
            point = sk.get_verifying_key().to_string("compressed")
            return PublicKey(point.hex(), self.algorithm, self.parameters)

        if self.algorithm is KeyType.EDDSA:
            try:
                sk = CryptoEd25519PrivateKey.from_private_bytes(raw)
            except ValueError as e:
                raise InvalidKeyError("Invalid Ed25519 private key", cause=e)
            point = sk.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
            return PublicKey(point.hex(), self.algorithm, self.parameters)

        raise InvalidKeyError(f"Public key derivation is not available for {self.algorithm.label} keys")

    def sign(self, msg: str, scheme: SignatureScheme, public_key_id: Optional[str] = None) -> Signature:
        """
        Sign hex encoded data.

        Args:
            msg: Hex encoded data
            scheme: Signing scheme; must fit the key algorithm
            public_key_id: Optional id of the signing key, kept on the Signature

        Returns:
            Signature with a fixed width r||s value (ECDSA) or Ed25519 value

        Raises:
            UnsupportedSchemeError: If the scheme does not fit this key
        """
        from .signature import Signature

        self.require_scheme(scheme)
        digest = bytes.fromhex(self.compute_hash(msg, scheme))

        if self.algorithm is KeyType.ECDSA:
            sk = SigningKey.from_string(bytes.fromhex(self.key), curve=self._ecdsa_curve())
            value = sk.sign_digest_deterministic(
                digest,
                hashfunc=hashlib.sha256,
                sigencode=sigencode_string,
                allow_truncate=True,
            )
        elif self.algorithm is KeyType.EDDSA:
            value = CryptoEd25519PrivateKey.from_private_bytes(bytes.fromhex(self.key)).sign(digest)
        else:
            raise UnsupportedHashAlgorithmError(f"Signing is not available for {self.algorithm.label} keys")

        return Signature(scheme, value.hex(), public_key_id)

    def encrypt(self, keyphrase: str, params: Optional[ScryptParams] = None) -> str:
        """
        Protect this key with a password (stream mode).

        Args:
            keyphrase: Password
            params: Optional scrypt parameters

        Returns:
            Base64 encoded ciphertext
        """
        from .scrypt import encrypt

        public_key = self.get_public_key()
        return encrypt(self.key, public_key.serialize_hex(), keyphrase, params)

    @classmethod
    def decrypt(cls, encrypted: str, keyphrase: str, address: Address,
                algorithm: KeyType, parameters: KeyParameters,
                params: Optional[ScryptParams] = None) -> PrivateKey:
        """
        Recover a stream mode protected key and check the password.

        Raises:
            PasswordError: If the recovered key does not match the address
        """
        from .scrypt import decrypt, check_decrypted

        key = cls(decrypt(encrypted, keyphrase, address, params), algorithm, parameters)
        # a wrong password can yield bytes outside the curve order
        try:
            public_key = key.get_public_key()
        except InvalidKeyError as e:
            logger.warning("keyphrase error.")
            raise PasswordError(cause=e)
        check_decrypted(address, public_key.serialize_hex())
        return key
