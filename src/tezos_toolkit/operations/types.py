"""
Operation kinds and content builders.
"""

from enum import Enum
from typing import Any, Dict, Optional


class OpKind(str, Enum):
    """Operation content kinds understood by the toolkit."""

    ACTIVATION = "activate_account"
    REVEAL = "reveal"
    TRANSACTION = "transaction"
    DELEGATION = "delegation"
    ORIGINATION = "origination"


MANAGER_KINDS = frozenset({
    OpKind.REVEAL.value,
    OpKind.TRANSACTION.value,
    OpKind.DELEGATION.value,
    OpKind.ORIGINATION.value,
})


def activation(pkh: str, secret: str) -> Dict[str, Any]:
    return {"kind": OpKind.ACTIVATION.value, "pkh": pkh, "secret": secret}


def transaction(to: str, amount: int, fee: Optional[int] = None, gas_limit: Optional[int] = None,
                storage_limit: Optional[int] = None, parameters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Transaction contents, ``amount`` in mutez."""
    content: Dict[str, Any] = {
        "kind": OpKind.TRANSACTION.value,
        "destination": to,
        "amount": str(amount),
    }
    if parameters is not None:
        content["parameters"] = parameters
    return _with_limits(content, fee, gas_limit, storage_limit)


def delegation(delegate: Optional[str], fee: Optional[int] = None, gas_limit: Optional[int] = None,
               storage_limit: Optional[int] = None) -> Dict[str, Any]:
    """Delegation contents; a None delegate withdraws the delegation."""
    content: Dict[str, Any] = {"kind": OpKind.DELEGATION.value}
    if delegate is not None:
        content["delegate"] = delegate
    return _with_limits(content, fee, gas_limit, storage_limit)


def _with_limits(content: Dict[str, Any], fee: Optional[int], gas_limit: Optional[int],
                 storage_limit: Optional[int]) -> Dict[str, Any]:
    if fee is not None:
        content["fee"] = str(fee)
    if gas_limit is not None:
        content["gas_limit"] = str(gas_limit)
    if storage_limit is not None:
        content["storage_limit"] = str(storage_limit)
    return content
