"""
Injected operation handle.

An Operation is returned by every provider method that injects something.
Its ``confirmation()`` coroutine polls the node until the operation is
included and buried under the requested number of blocks.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..runtime.errors import ConfirmationTimeoutError

if TYPE_CHECKING:
    from ..context import Context

logger = logging.getLogger(__name__)

# Used when the node's constants do not expose a block delay
FALLBACK_POLLING_INTERVAL_SECOND = 10.0

# Blocks scanned back from head when the injection level is unknown
CONFIRMATION_LOOKBACK_BLOCKS = 10


class Operation:
    """
    Handle on an injected operation.

    Attributes:
        hash: Operation hash (``o...``)
        raw: Contents that were injected
        results: Preapply results, when available
        start_level: Head level when the operation was injected, None if unknown
        included_in_block: Level of the including block once found
    """

    def __init__(self, hash: str, raw: Optional[List[Dict[str, Any]]],
                 results: Optional[List[Dict[str, Any]]], context: Context,
                 start_level: Optional[int] = None):
        self.hash = hash
        self.raw = raw or []
        self.results = results or []
        self.context = context
        self.start_level = start_level
        self.included_in_block: Optional[int] = None

    async def _polling_interval(self) -> float:
        configured = self.context.config.confirmation_polling_interval_second
        if configured is not None:
            return configured
        constants = await asyncio.to_thread(self.context.rpc.get_constants)
        delay = constants.get("minimal_block_delay")
        if delay is None:
            delays = constants.get("time_between_blocks") or []
            delay = delays[0] if delays else None
        if delay is None:
            return FALLBACK_POLLING_INTERVAL_SECOND
        return max(int(delay) / 3, 1.0)

    def _first_level(self, head_level: int) -> int:
        if self.start_level is not None:
            return min(self.start_level, head_level)
        return max(head_level - CONFIRMATION_LOOKBACK_BLOCKS, 0)

    def _contains_operation(self, block: Dict[str, Any]) -> bool:
        for group in block.get("operations", []):
            for op in group:
                if op.get("hash") == self.hash:
                    return True
        return False

    async def confirmation(self, confirmations: Optional[int] = None,
                           timeout: Optional[float] = None) -> int:
        """
        Wait until the operation has ``confirmations`` blocks on top of it
        (the including block counts as the first).

        Args:
            confirmations: Depth to wait for (default: config.default_confirmation_count)
            timeout: Seconds before giving up (default: config.confirmation_polling_timeout_second)

        Returns:
            Level of the block that included the operation

        Raises:
            ValueError: If ``confirmations`` is lower than 1
            ConfirmationTimeoutError: If the depth is not reached in time
        """
        config = self.context.config
        if confirmations is None:
            confirmations = config.default_confirmation_count
        if confirmations < 1:
            raise ValueError("confirmations must be at least 1")
        if timeout is None:
            timeout = config.confirmation_polling_timeout_second

        interval = await self._polling_interval()
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        rpc = self.context.rpc
        last_level: Optional[int] = None

        while True:
            head = await asyncio.to_thread(rpc.get_block)
            head_level = head["header"]["level"]

            if self.included_in_block is None and head_level != last_level:
                start = self._first_level(head_level) if last_level is None else last_level + 1
                for level in range(start, head_level):
                    block = await asyncio.to_thread(rpc.get_block, str(level))
                    if self._contains_operation(block):
                        self.included_in_block = level
                        break
                if self.included_in_block is None and self._contains_operation(head):
                    self.included_in_block = head_level
                if self.included_in_block is not None:
                    logger.debug("Operation %s included at level %d", self.hash, self.included_in_block)
            last_level = head_level

            if self.included_in_block is not None and head_level - self.included_in_block + 1 >= confirmations:
                return self.included_in_block

            if loop.time() >= deadline:
                raise ConfirmationTimeoutError(self.hash, timeout)
            await asyncio.sleep(interval)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(hash='{self.hash}')"


__all__ = [
    "Operation",
]
