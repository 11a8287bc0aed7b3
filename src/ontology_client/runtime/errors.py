"""
Ontology Error Model

This module provides the error handling framework for the Ontology client core.
Every failure in the codecs and the key protector is surfaced as a subclass of
OntologyError carrying a stable ErrorCode.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes for the client core."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    INVALID_PARAMS = 3

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    BUFFER_UNDERRUN = 101
    MARSHAL_ERROR = 103
    UNMARSHAL_ERROR = 104

    # Signature errors (300-399)
    UNKNOWN_SCHEME = 300
    UNSUPPORTED_SCHEME = 301
    UNSUPPORTED_HASH_ALGORITHM = 302
    MALFORMED_SIGNATURE = 303

    # Key errors (700-799)
    INVALID_KEY = 700
    DECRYPT_ERROR = 701


class OntologyError(Exception):
    """
    Base class for all Ontology client errors.

    Provides structured error information with a code, details and cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an Ontology error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidParamsError(OntologyError):
    """Malformed or too-short input rejected before parsing begins."""

    def __init__(self, message: str = "Invalid params",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_PARAMS, details, cause)


class EncodingError(OntologyError):
    """Data encoding/decoding errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class BufferUnderrunError(EncodingError):
    """A structural read ran past the end of the buffer."""

    def __init__(self, message: str = "Buffer underrun",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.BUFFER_UNDERRUN, details, cause)


class MarshalError(EncodingError):
    """Data marshaling error."""

    def __init__(self, message: str = "Marshal error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MARSHAL_ERROR, details, cause)


class UnmarshalError(EncodingError):
    """Data unmarshaling error."""

    def __init__(self, message: str = "Unmarshal error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNMARSHAL_ERROR, details, cause)


class UnknownSchemeError(OntologyError):
    """Signature scheme id or label outside the known table."""

    def __init__(self, message: str = "Unknown signature scheme",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNKNOWN_SCHEME, details, cause)


class UnsupportedSchemeError(OntologyError):
    """Scheme cannot be used with the given key."""

    def __init__(self, message: str = "Unsupported signature scheme",
                 code: ErrorCode = ErrorCode.UNSUPPORTED_SCHEME,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class UnsupportedHashAlgorithmError(UnsupportedSchemeError):
    """Scheme requires a digest this core does not implement (SM3)."""

    def __init__(self, message: str = "Unsupported hash algorithm",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_HASH_ALGORITHM, details, cause)


class MalformedSignatureError(EncodingError):
    """SM2 signature without a zero-terminated user id."""

    def __init__(self, message: str = "Malformed signature",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MALFORMED_SIGNATURE, details, cause)


class InvalidKeyError(OntologyError):
    """Key material that cannot be parsed or used."""

    def __init__(self, message: str = "Invalid key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY, details, cause)


class PasswordError(OntologyError):
    """Decrypted key does not reproduce the expected address."""

    def __init__(self, message: str = "Keyphrase error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DECRYPT_ERROR, details, cause)


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
