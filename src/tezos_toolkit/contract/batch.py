"""
Batched operations: several contents injected as one operation.

Example:
    ```python
    op = await (
        toolkit.batch()
        .with_transfer("tz1...", 1)
        .with_transfer("tz1...", 2)
        .send()
    )
    await op.confirmation()
    ```
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..operations.emitter import OperationEmitter
from ..operations.operation import Operation
from ..operations.types import OpKind, activation, delegation, transaction
from .estimate import RpcEstimateProvider
from .provider import to_mutez

if TYPE_CHECKING:
    from ..context import Context

logger = logging.getLogger(__name__)

_LIMIT_FIELDS = ("fee", "gas_limit", "storage_limit")


class OperationBatch(OperationEmitter):
    """Accumulates contents and injects them together."""

    def __init__(self, context: Context, estimator: RpcEstimateProvider):
        super().__init__(context)
        self.estimator = estimator
        self.operations: List[Dict[str, Any]] = []

    def with_transfer(self, to: str, amount, mutez: bool = False, fee: Optional[int] = None,
                      gas_limit: Optional[int] = None, storage_limit: Optional[int] = None,
                      parameters: Optional[Dict[str, Any]] = None) -> OperationBatch:
        self.operations.append(
            transaction(to, to_mutez(amount, mutez), fee, gas_limit, storage_limit, parameters))
        return self

    def with_delegation(self, delegate: Optional[str], fee: Optional[int] = None,
                        gas_limit: Optional[int] = None,
                        storage_limit: Optional[int] = None) -> OperationBatch:
        self.operations.append(delegation(delegate, fee, gas_limit, storage_limit))
        return self

    def with_activation(self, pkh: str, secret: str) -> OperationBatch:
        self.operations.append(activation(pkh, secret))
        return self

    def with_contents(self, contents: List[Dict[str, Any]]) -> OperationBatch:
        """
        Append raw contents.

        Raises:
            ValueError: If a content has no or an unsupported ``kind``
        """
        kinds = {kind.value for kind in OpKind}
        for content in contents:
            if content.get("kind") not in kinds:
                raise ValueError(f"Unsupported operation kind: {content.get('kind')!r}")
            self.operations.append(dict(content))
        return self

    async def send(self, source: Optional[str] = None) -> Operation:
        """
        Estimate the contents missing limits, then inject the batch.

        Raises:
            ValueError: If the batch is empty
        """
        if not self.operations:
            raise ValueError("Cannot send an empty batch")

        contents = self.operations
        if any(c["kind"] != OpKind.ACTIVATION.value and not all(f in c for f in _LIMIT_FIELDS)
               for c in contents):
            estimates = await self.estimator.batch(contents, source)
            contents = [
                estimate.apply_to(content) if content["kind"] != OpKind.ACTIVATION.value else content
                for content, estimate in zip(contents, estimates)
            ]
        logger.debug("Sending batch of %d contents", len(contents))
        return await super().send(contents, source)


class RpcBatchProvider:
    """Creates OperationBatch instances bound to the context."""

    def __init__(self, context: Context, estimator: RpcEstimateProvider):
        self.context = context
        self.estimator = estimator

    def batch(self, operations: Optional[List[Dict[str, Any]]] = None) -> OperationBatch:
        batch = OperationBatch(self.context, self.estimator)
        if operations:
            batch.with_contents(operations)
        return batch


__all__ = [
    "OperationBatch",
    "RpcBatchProvider",
]
