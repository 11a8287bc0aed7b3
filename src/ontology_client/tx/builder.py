"""
Transaction construction and signing helpers.
"""

from __future__ import annotations
import logging
from typing import Optional, Sequence

from ..crypto.address import Address
from ..crypto.key import PrivateKey, PublicKey
from ..crypto.schemes import SignatureScheme
from ..runtime.errors import InvalidParamsError
from .payload import DeployCode, InvokeCode
from .transaction import Transaction
from .tx_signature import TxSignature
from .types import Fixed64, TxType

logger = logging.getLogger(__name__)

DEFAULT_GAS_LIMIT = 20000


def make_invoke_transaction(code: str, payer: Optional[Address] = None,
                            gas_price: int = 0, gas_limit: int = DEFAULT_GAS_LIMIT) -> Transaction:
    """
    Build an invocation transaction.

    Args:
        code: Hex encoded invocation code
        payer: Address paying the gas; all zero when omitted
        gas_price: Gas price
        gas_limit: Gas limit
    """
    tx = Transaction()
    tx.type = TxType.Invoke
    tx.payload = InvokeCode(code)
    tx.gas_price = Fixed64(gas_price)
    tx.gas_limit = Fixed64(gas_limit)
    if payer is not None:
        tx.payer = payer
    return tx


def make_deploy_transaction(code: str, name: str = "", version: str = "", author: str = "",
                            email: str = "", description: str = "", need_storage: bool = True,
                            payer: Optional[Address] = None, gas_price: int = 0,
                            gas_limit: int = DEFAULT_GAS_LIMIT) -> Transaction:
    """Build a contract deployment transaction."""
    tx = Transaction()
    tx.type = TxType.Deploy
    tx.payload = DeployCode(
        code=code,
        need_storage=need_storage,
        name=name,
        version=version,
        author=author,
        email=email,
        description=description,
    )
    tx.gas_price = Fixed64(gas_price)
    tx.gas_limit = Fixed64(gas_limit)
    if payer is not None:
        tx.payer = payer
    return tx


def sign_transaction(tx: Transaction, private_key: PrivateKey,
                     scheme: SignatureScheme = SignatureScheme.ECDSAwithSHA256) -> None:
    """
    Sign a transaction, replacing any existing signatures.

    Raises:
        UnsupportedSchemeError: If the scheme does not fit the key
    """
    signature = private_key.sign(tx.get_hash(), scheme)
    tx.sigs = [TxSignature.create(private_key.get_public_key(), signature)]
    logger.debug("Signed transaction %s with %s", tx.get_hash(), scheme.label)


def add_sign(tx: Transaction, private_key: PrivateKey,
             scheme: SignatureScheme = SignatureScheme.ECDSAwithSHA256) -> None:
    """Append a single key signature to a transaction."""
    signature = private_key.sign(tx.get_hash(), scheme)
    tx.sigs.append(TxSignature.create(private_key.get_public_key(), signature))
    logger.debug("Added signature %d to transaction %s", len(tx.sigs), tx.get_hash())


def sign_tx_multi(tx: Transaction, m: int, pub_keys: Sequence[PublicKey], private_key: PrivateKey,
                  scheme: SignatureScheme = SignatureScheme.ECDSAwithSHA256) -> None:
    """
    Add a signature to the multisig signer for ``pub_keys``.

    The signer entry is created on the first call and extended on later ones.

    Raises:
        InvalidParamsError: If the signing key is not one of pub_keys
    """
    public_key = private_key.get_public_key()
    if public_key not in pub_keys:
        raise InvalidParamsError("Signing key is not part of the multisig key set")

    template = TxSignature.create_multi(pub_keys, m)
    signature = private_key.sign(tx.get_hash(), scheme)

    for existing in tx.sigs:
        if existing.m == template.m and existing.pub_keys == template.pub_keys:
            existing.add_signature(signature)
            return

    template.add_signature(signature)
    tx.sigs.append(template)


def verify_tx_signature(tx: Transaction, tx_signature: TxSignature) -> bool:
    """
    Check that a signer entry holds enough valid signatures.

    Each signature must verify under a distinct key of the entry and at least
    ``m`` must do so.
    """
    tx_hash = tx.get_hash()
    remaining = list(tx_signature.pub_keys)
    valid = 0
    for signature in tx_signature.signatures:
        for key in remaining:
            if key.is_schema_supported(signature.algorithm) and key.verify(tx_hash, signature):
                remaining.remove(key)
                valid += 1
                break
    return valid >= tx_signature.m
