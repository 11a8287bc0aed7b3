"""
Ontology Python client core

Transaction wire codec, signature formats and password protection of private
keys for the Ontology blockchain.
"""

from .runtime import errors as _errors
from .runtime.errors import *
from . import crypto as _crypto
from .crypto import *
from . import tx as _tx
from .tx import *
from .codec import BinaryReader, BinaryWriter
from .codec.transaction_codec import TransactionCodec

__version__ = "1.0.0"
__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "TransactionCodec",
    *_errors.__all__,
    *_crypto.__all__,
    *_tx.__all__,
]
