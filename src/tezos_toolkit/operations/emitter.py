"""
Operation emission pipeline shared by the providers.

prepare (branch, counter, reveal) -> forge -> sign -> preapply -> inject.
Node calls are blocking requests calls and run in a worker thread so the
coroutines do not stall the event loop.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar, TYPE_CHECKING

from ..constants import DEFAULT_FEE, DEFAULT_GAS_LIMIT, DEFAULT_STORAGE_LIMIT
from ..runtime.errors import TezosOperationError
from .operation import Operation
from .types import MANAGER_KINDS, OpKind

if TYPE_CHECKING:
    from ..context import Context

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Generic operation watermark
OPERATION_WATERMARK = b"\x03"

_LIMIT_KEYS = {
    OpKind.REVEAL.value: "REVEAL",
    OpKind.TRANSACTION.value: "TRANSFER",
    OpKind.DELEGATION.value: "DELEGATION",
    OpKind.ORIGINATION.value: "ORIGINATION",
}


def collect_errors(results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Gather the errors reported in preapply results."""
    errors: List[Dict[str, Any]] = []
    for result in results:
        for content in result.get("contents", []):
            metadata = content.get("metadata", {})
            operation_result = metadata.get("operation_result", {})
            errors.extend(operation_result.get("errors", []))
            for internal in metadata.get("internal_operation_results", []):
                errors.extend(internal.get("result", {}).get("errors", []))
    return errors


class OperationEmitter:
    """Base class for providers that inject operations."""

    def __init__(self, context: Context):
        self.context = context

    @property
    def rpc(self):
        return self.context.rpc

    @property
    def signer(self):
        return self.context.signer

    async def _run(self, fn: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(fn, *args)

    async def prepare_operation(self, contents: List[Dict[str, Any]],
                                source: Optional[str] = None) -> Dict[str, Any]:
        """
        Complete ``contents`` into an operation ready to forge.

        Manager operations get source, counter and default limits; a reveal
        is prepended when the source's key is not revealed yet and the
        contents do not carry one. ``level`` is the head level the branch
        was taken from.
        """
        header = await self._run(self.rpc.get_block_header)
        prepared = [dict(content) for content in contents if content["kind"] not in MANAGER_KINDS]
        managed = [content for content in contents if content["kind"] in MANAGER_KINDS]

        if managed:
            source = source or self.signer.public_key_hash()
            contract = await self._run(self.rpc.get_contract, source)
            counter = int(contract.get("counter", 0))
            manager_key = await self._run(self.rpc.get_manager_key, source)
            if not manager_key and not any(c["kind"] == OpKind.REVEAL.value for c in managed):
                logger.debug("Prepending reveal for %s", source)
                managed.insert(0, {"kind": OpKind.REVEAL.value, "public_key": self.signer.public_key()})

            for content in managed:
                counter += 1
                prepared.append(self._fill_manager_fields(content, source, counter))

        return {
            "branch": header["hash"],
            "level": header.get("level"),
            "protocol": self.context.proto or header["protocol"],
            "contents": prepared,
        }

    def _fill_manager_fields(self, content: Dict[str, Any], source: str, counter: int) -> Dict[str, Any]:
        limits = _LIMIT_KEYS[content["kind"]]
        filled = dict(content)
        filled["source"] = source
        filled["counter"] = str(counter)
        filled.setdefault("fee", str(DEFAULT_FEE[limits]))
        filled.setdefault("gas_limit", str(DEFAULT_GAS_LIMIT[limits]))
        filled.setdefault("storage_limit", str(DEFAULT_STORAGE_LIMIT[limits]))
        return filled

    async def forge_and_sign(self, prepared: Dict[str, Any]) -> Dict[str, str]:
        forged = await self._run(self.context.forger.forge,
                                 {"branch": prepared["branch"], "contents": prepared["contents"]})
        return self.signer.sign(forged, OPERATION_WATERMARK)

    async def preapply(self, prepared: Dict[str, Any], signature: str) -> List[Dict[str, Any]]:
        """
        Preapply a signed operation.

        Raises:
            TezosOperationError: If the node reports errors in the results
        """
        operation = {
            "branch": prepared["branch"],
            "protocol": prepared["protocol"],
            "contents": prepared["contents"],
            "signature": signature,
        }
        results = await self._run(self.rpc.preapply_operations, [operation])
        errors = collect_errors(results)
        if errors:
            raise TezosOperationError(errors)
        return results

    async def send(self, contents: List[Dict[str, Any]], source: Optional[str] = None) -> Operation:
        """Prepare, sign, preapply and inject ``contents``."""
        prepared = await self.prepare_operation(contents, source)
        signed = await self.forge_and_sign(prepared)
        results = await self.preapply(prepared, signed["prefixSig"])
        op_hash = await self._run(self.rpc.inject_operation, signed["sbytes"])
        logger.info("Injected operation %s", op_hash)
        return Operation(op_hash, prepared["contents"], results, self.context,
                         start_level=prepared["level"])


__all__ = [
    "OPERATION_WATERMARK",
    "OperationEmitter",
    "collect_errors",
]
