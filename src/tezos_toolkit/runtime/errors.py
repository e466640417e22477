"""
Tezos Toolkit Error Model

This module provides the error handling framework for the toolkit. Every
error raised by the toolkit itself derives from ToolkitError and carries a
structured code, optional details and the underlying cause.
"""

from __future__ import annotations
import re
from typing import Optional, Dict, Any, List
from enum import IntEnum


class ErrorCode(IntEnum):
    """Toolkit error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    CONFIGURATION = 3

    # Network errors (200-299)
    NETWORK_ERROR = 200
    HTTP_RESPONSE = 201
    TIMEOUT = 202

    # Signing errors (300-399)
    SIGNER_ERROR = 300
    SIGNER_NOT_CONFIGURED = 301
    INVALID_KEY = 302

    # Operation errors (400-499)
    OPERATION_FAILED = 400
    FORGING_MISMATCH = 401
    CONFIRMATION_TIMEOUT = 402

    # Format errors (500-599)
    UNSUPPORTED_UNIT = 500


class ToolkitError(Exception):
    """
    Base class for all toolkit errors.

    Provides structured error information (code, details and cause).
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a toolkit error.

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


class ConfigurationError(ToolkitError):
    """A provider or option could not be constructed from the given configuration."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.CONFIGURATION, details, cause)


class NetworkError(ToolkitError):
    """Transport level failures talking to a node."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, cause)


class HttpResponseError(NetworkError):
    """
    The node answered with a non-success HTTP status.

    The raw response text is kept in ``body`` so callers can match on the
    node's error identifiers.
    """

    def __init__(self, message: str, status: int, url: str, body: str = ""):
        super().__init__(message, {"status": status, "url": url})
        self.code = ErrorCode.HTTP_RESPONSE
        self.status = status
        self.url = url
        self.body = body


class SignerError(ToolkitError):
    """Base exception for signer operations."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.SIGNER_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class UnconfiguredSignerError(SignerError):
    """Raised by the no-op signer for every operation."""

    def __init__(self, message: str = "No signer has been configured"):
        super().__init__(message, ErrorCode.SIGNER_NOT_CONFIGURED)


class InvalidKeyError(SignerError):
    """Key material could not be decoded or decrypted."""

    def __init__(self, message: str = "Invalid key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY, details, cause)


class ForgingMismatchError(ToolkitError):
    """Two forgers produced different bytes for the same operation."""

    def __init__(self, message: str = "Forgers produced different results",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.FORGING_MISMATCH, details)


class TezosOperationError(ToolkitError):
    """
    The node rejected an operation during preapply.

    Attributes:
        errors: Raw error list reported by the node
    """

    def __init__(self, errors: List[Dict[str, Any]], message: Optional[str] = None):
        last_error = errors[-1] if errors else {}
        self.id = last_error.get("id", "")
        self.kind = last_error.get("kind", "")
        super().__init__(message or self.id or "Operation failed",
                         ErrorCode.OPERATION_FAILED, {"errors": errors})
        self.errors = errors


class ConfirmationTimeoutError(ToolkitError):
    """An operation was not confirmed within the polling timeout."""

    def __init__(self, operation_hash: str, timeout: float):
        super().__init__(
            f"Confirmation polling timed out after {timeout}s",
            ErrorCode.CONFIRMATION_TIMEOUT,
            {"hash": operation_hash, "timeout": timeout},
        )
        self.operation_hash = operation_hash


class UnsupportedUnitError(ToolkitError):
    """Unknown unit passed to the format helper."""

    def __init__(self, unit: str):
        super().__init__(f"Unsupported unit: {unit}", ErrorCode.UNSUPPORTED_UNIT, {"unit": unit})


INVALID_ACTIVATION_PATTERN = re.compile(r"invalid[ _]activation", re.IGNORECASE)


def is_invalid_activation(error: BaseException) -> bool:
    """
    Check whether an activation failure means the account is already active.

    The node rejects a second activation of the same commitment with an
    ``Invalid activation`` message (``...invalid_activation`` error id) in
    the response body.
    """
    body = getattr(error, "body", None)
    return bool(body) and isinstance(body, str) and INVALID_ACTIVATION_PATTERN.search(body) is not None


__all__ = [
    "ErrorCode",
    "ToolkitError",
    "ConfigurationError",
    "NetworkError",
    "HttpResponseError",
    "SignerError",
    "UnconfiguredSignerError",
    "InvalidKeyError",
    "ForgingMismatchError",
    "TezosOperationError",
    "ConfirmationTimeoutError",
    "UnsupportedUnitError",
    "INVALID_ACTIVATION_PATTERN",
    "is_invalid_activation",
]
