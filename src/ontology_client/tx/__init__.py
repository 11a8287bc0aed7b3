"""
Transactions: model, payloads, attributes, signatures and builders.
"""

from .types import TxType, Fixed64, Fee
from .payload import Payload, InvokeCode, DeployCode
from .attribute import TransactionAttribute, TransactionAttributeUsage
from .tx_signature import TxSignature
from .transaction import Transaction
from .builder import (
    make_invoke_transaction,
    make_deploy_transaction,
    sign_transaction,
    add_sign,
    sign_tx_multi,
    verify_tx_signature,
)

__all__ = [
    "TxType",
    "Fixed64",
    "Fee",
    "Payload",
    "InvokeCode",
    "DeployCode",
    "TransactionAttribute",
    "TransactionAttributeUsage",
    "TxSignature",
    "Transaction",
    "make_invoke_transaction",
    "make_deploy_transaction",
    "sign_transaction",
    "add_sign",
    "sign_tx_multi",
    "verify_tx_signature",
]
