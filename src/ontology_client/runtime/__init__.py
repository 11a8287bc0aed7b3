"""Runtime helpers for the Ontology client core"""

from .errors import (
    ErrorCode,
    OntologyError,
    InvalidParamsError,
    EncodingError,
    BufferUnderrunError,
    MarshalError,
    UnmarshalError,
    UnknownSchemeError,
    UnsupportedSchemeError,
    UnsupportedHashAlgorithmError,
    MalformedSignatureError,
    InvalidKeyError,
    PasswordError,
)

__all__ = [
    "ErrorCode",
    "OntologyError",
    "InvalidParamsError",
    "EncodingError",
    "BufferUnderrunError",
    "MarshalError",
    "UnmarshalError",
    "UnknownSchemeError",
    "UnsupportedSchemeError",
    "UnsupportedHashAlgorithmError",
    "MalformedSignatureError",
    "InvalidKeyError",
    "PasswordError",
]
