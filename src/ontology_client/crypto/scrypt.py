"""
Password protection of private keys.

Two formats are supported, both keyed by scrypt over the NFC normalized
password with the address checksum hash as salt:

Stream mode (``encrypt``/``decrypt``)
    AES-256-CTR, iv = derived[0:16], key = derived[32:64]. Output is base64
    of the bare ciphertext. Nothing else is embedded, so the caller keeps
    the salt (or the address) and calls ``check_decrypted``.

Block mode (``encrypt_with_ecb``/``decrypt_with_ecb``)
    The private key is XORed with derived[0:32], then AES-256-ECB encrypted
    under derived[32:64]. Output is base58check of
    ``0x0142 | 0xe0 | address hash (4 bytes) | ciphertext``.

Neither format carries a MAC. Wrong passwords are detected by re-deriving
the address from the recovered key.
"""

from __future__ import annotations
import base64
import binascii
import logging
import unicodedata
from typing import Optional, Union

import base58
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from pydantic import BaseModel, Field, field_validator

from ..codec.reader import BinaryReader
from ..constants import DEFAULT_SCRYPT, OEP_FLAG, OEP_HEADER
from ..runtime.errors import InvalidParamsError, PasswordError
from .address import Address
from .key import PublicKey

logger = logging.getLogger(__name__)

# byte offsets into a decoded block mode key
_HASH_OFFSET = 3
_HASH_SIZE = 4
_CIPHERTEXT_SIZE = 32


class ScryptParams(BaseModel):
    """Scrypt cost parameters."""

    cost: int = Field(default=DEFAULT_SCRYPT["cost"], alias="n")
    block_size: int = Field(default=DEFAULT_SCRYPT["block_size"], alias="r")
    parallel: int = Field(default=DEFAULT_SCRYPT["parallel"], alias="p")
    size: int = Field(default=DEFAULT_SCRYPT["size"], alias="dkLen")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("cost")
    @classmethod
    def cost_is_power_of_two(cls, v: int) -> int:
        if v < 2 or v & (v - 1):
            raise ValueError("scrypt cost must be a power of two greater than 1")
        return v

    @field_validator("block_size", "parallel")
    @classmethod
    def positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("scrypt block size and parallelism must be positive")
        return v

    @field_validator("size")
    @classmethod
    def size_is_64(cls, v: int) -> int:
        if v != 64:
            raise ValueError("derived key size must be 64 bytes")
        return v

    def to_dict(self):
        return self.model_dump(by_alias=True)


DEFAULT_SCRYPT_PARAMS = ScryptParams()


def derive_key(keyphrase: str, salt: str, params: Optional[ScryptParams] = None) -> bytes:
    """
    Run scrypt over the normalized password.

    Args:
        keyphrase: Password, normalized to NFC before use
        salt: Hex encoded salt
        params: Optional scrypt parameters

    Returns:
        Derived key bytes
    """
    params = params or DEFAULT_SCRYPT_PARAMS
    kdf = Scrypt(
        salt=bytes.fromhex(salt),
        length=params.size,
        n=params.cost,
        r=params.block_size,
        p=params.parallel,
    )
    return kdf.derive(unicodedata.normalize("NFC", keyphrase).encode("utf-8"))


def _address_hash(public_key_encoded: str) -> str:
    reader = BinaryReader(public_key_encoded)
    public_key = PublicKey.deserialize_hex(reader, reader.remaining)
    return Address.from_public_key(public_key).get_b58_checksum()


def _resolve_salt(salt_or_address: Union[str, Address]) -> str:
    if isinstance(salt_or_address, Address):
        return salt_or_address.get_b58_checksum()
    if isinstance(salt_or_address, str) and len(salt_or_address) == 8:
        try:
            bytes.fromhex(salt_or_address)
        except ValueError as e:
            raise InvalidParamsError("Salt must be 4 hex encoded bytes", cause=e)
        return salt_or_address.lower()
    raise InvalidParamsError("Expected 4 hex encoded bytes of salt or an Address")


def _ctr_cipher(derived: bytes) -> Cipher:
    return Cipher(algorithms.AES(derived[32:64]), modes.CTR(derived[0:16]))


def _ecb_cipher(derived: bytes) -> Cipher:
    return Cipher(algorithms.AES(derived[32:64]), modes.ECB())


def _xor(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise InvalidParamsError(f"Cannot xor {len(a)} bytes with {len(b)} bytes")
    return bytes(x ^ y for x, y in zip(a, b))


def _hex_bytes(value: str, what: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except (TypeError, ValueError) as e:
        raise InvalidParamsError(f"{what} must be a hex string", cause=e)


def encrypt(private_key: str, public_key_encoded: str, keyphrase: str,
            scrypt_params: Optional[ScryptParams] = None) -> str:
    """
    Protect a private key in stream mode.

    Args:
        private_key: Hex encoded private key
        public_key_encoded: Serialized public key of the same key pair
        keyphrase: Password
        scrypt_params: Optional scrypt parameters

    Returns:
        Base64 encoded ciphertext
    """
    raw = _hex_bytes(private_key, "Private key")
    salt = _address_hash(public_key_encoded)
    derived = derive_key(keyphrase, salt, scrypt_params)

    encryptor = _ctr_cipher(derived).encryptor()
    ciphertext = encryptor.update(raw) + encryptor.finalize()
    return base64.b64encode(ciphertext).decode("ascii")


def decrypt(encrypted_key: str, keyphrase: str, salt_or_address: Union[str, Address],
            scrypt_params: Optional[ScryptParams] = None) -> str:
    """
    Recover a stream mode protected key.

    A wrong password yields garbage rather than an error; follow with
    check_decrypted.

    Args:
        encrypted_key: Base64 ciphertext
        keyphrase: Password
        salt_or_address: 4 hex encoded bytes of salt or the account Address
        scrypt_params: Optional scrypt parameters

    Returns:
        Hex encoded private key
    """
    salt = _resolve_salt(salt_or_address)
    try:
        ciphertext = base64.b64decode(encrypted_key, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidParamsError("Encrypted key is not base64", cause=e)

    derived = derive_key(keyphrase, salt, scrypt_params)
    decryptor = _ctr_cipher(derived).decryptor()
    return (decryptor.update(ciphertext) + decryptor.finalize()).hex()


def check_decrypted(salt_or_address: Union[str, Address], public_key_encoded: str) -> None:
    """
    Check that a stream mode decryption used the right password.

    Args:
        salt_or_address: 4 hex encoded bytes of salt or the account Address
        public_key_encoded: Public key derived from the decrypted key

    Raises:
        PasswordError: If the key does not belong to the salt's address
    """
    salt = _resolve_salt(salt_or_address)
    if _address_hash(public_key_encoded) != salt:
        logger.warning("keyphrase error.")
        raise PasswordError()


def encrypt_with_ecb(private_key: str, public_key_encoded: str, keyphrase: str,
                     scrypt_params: Optional[ScryptParams] = None) -> str:
    """
    Protect a private key in block mode.

    Returns:
        Base58check string of header, flag, address hash and ciphertext
    """
    raw = _hex_bytes(private_key, "Private key")
    address_hash = _address_hash(public_key_encoded)
    derived = derive_key(keyphrase, address_hash, scrypt_params)

    masked = _xor(raw, derived[0:32])
    encryptor = _ecb_cipher(derived).encryptor()
    try:
        ciphertext = encryptor.update(masked) + encryptor.finalize()
    except ValueError as e:
        raise InvalidParamsError("Private key length is not a multiple of the block size", cause=e)

    assembled = bytes.fromhex(OEP_HEADER + OEP_FLAG + address_hash) + ciphertext
    return base58.b58encode_check(assembled).decode("ascii")


def _decode_ecb(encrypted_key: str):
    try:
        assembled = base58.b58decode_check(encrypted_key)
    except ValueError as e:
        raise InvalidParamsError("Encrypted key is not valid base58check", cause=e)
    if len(assembled) < _HASH_OFFSET + _HASH_SIZE + _CIPHERTEXT_SIZE:
        raise InvalidParamsError("Encrypted key is too short")
    address_hash = assembled[_HASH_OFFSET:_HASH_OFFSET + _HASH_SIZE].hex()
    return address_hash, assembled[-_CIPHERTEXT_SIZE:]


def decrypt_with_ecb(encrypted_key: str, keyphrase: str,
                     scrypt_params: Optional[ScryptParams] = None) -> str:
    """
    Recover a block mode protected key.

    Follow with check_ecb_decrypted to detect a wrong password.

    Returns:
        Hex encoded private key
    """
    address_hash, ciphertext = _decode_ecb(encrypted_key)
    derived = derive_key(keyphrase, address_hash, scrypt_params)

    decryptor = _ecb_cipher(derived).decryptor()
    masked = decryptor.update(ciphertext) + decryptor.finalize()
    return _xor(masked, derived[0:32]).hex()


def check_ecb_decrypted(encrypted_key: str, decrypted_key: str, public_key_encoded: str) -> None:
    """
    Check that a block mode decryption used the right password.

    Args:
        encrypted_key: Original encrypted key
        decrypted_key: Key returned by decrypt_with_ecb
        public_key_encoded: Public key derived from the decrypted key

    Raises:
        PasswordError: If the key does not match the stored address hash
    """
    address_hash, _ = _decode_ecb(encrypted_key)
    if _address_hash(public_key_encoded) != address_hash:
        logger.warning("keyphrase error.")
        raise PasswordError(details={"decrypted_key_length": len(decrypted_key) // 2})
