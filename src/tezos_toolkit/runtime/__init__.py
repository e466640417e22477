"""Runtime helpers for the Tezos toolkit"""

from .errors import (
    ErrorCode,
    ToolkitError,
    ConfigurationError,
    HttpResponseError,
    SignerError,
    UnconfiguredSignerError,
    TezosOperationError,
    is_invalid_activation,
)
from .encoding import b58_encode, b58_decode, blake2b_digest, Prefix

__all__ = [
    "ErrorCode",
    "ToolkitError",
    "ConfigurationError",
    "HttpResponseError",
    "SignerError",
    "UnconfiguredSignerError",
    "TezosOperationError",
    "is_invalid_activation",
    "b58_encode",
    "b58_decode",
    "blake2b_digest",
    "Prefix",
]
