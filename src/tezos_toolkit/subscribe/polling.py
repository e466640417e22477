"""
Subscriptions fed by polling the head block.

Subscriptions run as asyncio tasks and must be created from a running
event loop.

Example:
    ```python
    sub = toolkit.stream.subscribe_operation({"destination": "tz1..."})
    sub.on("data", lambda op: print(op["hash"]))
    ...
    sub.close()
    ```
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, TYPE_CHECKING

from .interface import OperationFilter, SubscribeProvider, Subscription

if TYPE_CHECKING:
    from ..context import Context

logger = logging.getLogger(__name__)

EVENTS = ("data", "error", "close")


class PollingSubscription(Subscription):
    """
    Subscription draining an async iterator in a background task.

    A failure of the iterator is emitted as ``error`` and ends the
    subscription.
    """

    def __init__(self, source: AsyncIterator[Any]):
        self._listeners: Dict[str, List[Callable[[Any], None]]] = {event: [] for event in EVENTS}
        self._closed = False
        self._task = asyncio.get_running_loop().create_task(self._drain(source))

    @property
    def closed(self) -> bool:
        return self._closed

    def on(self, event: str, callback: Callable[[Any], None]) -> None:
        if event not in self._listeners:
            raise ValueError(f"Unknown subscription event: {event!r}")
        self._listeners[event].append(callback)

    def off(self, event: str, callback: Callable[[Any], None]) -> None:
        if event in self._listeners and callback in self._listeners[event]:
            self._listeners[event].remove(callback)

    def _emit(self, event: str, value: Any = None) -> None:
        for callback in list(self._listeners[event]):
            callback(value)

    async def _drain(self, source: AsyncIterator[Any]) -> None:
        try:
            async for item in source:
                self._emit("data", item)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Subscription stopped on error: %s", e)
            self._emit("error", e)
            self._finish()

    def _finish(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._emit("close")

    def close(self) -> None:
        if not self._task.done():
            self._task.cancel()
        self._finish()


def _content_matches(content: Dict[str, Any], criteria: Dict[str, Any]) -> bool:
    for key in ("kind", "source", "destination"):
        if key in criteria and content.get(key) != criteria[key]:
            return False
    return True


def operation_matches(operation: Dict[str, Any], filter: OperationFilter) -> bool:
    """
    Check an operation against a filter.

    A filter is a dict of ``hash``, ``kind``, ``source`` and ``destination``
    criteria (all must hold), or a list of such dicts (any may hold).
    """
    if isinstance(filter, list):
        return any(operation_matches(operation, criteria) for criteria in filter)
    if "hash" in filter and operation.get("hash") != filter["hash"]:
        return False
    if not any(key in filter for key in ("kind", "source", "destination")):
        return True
    return any(_content_matches(content, filter) for content in operation.get("contents", []))


class PollingSubscribeProvider(SubscribeProvider):
    """Subscribe provider polling the context's RPC client for new heads."""

    def __init__(self, context: Context, interval: Optional[float] = None):
        self.context = context
        self._interval = interval

    @property
    def interval(self) -> float:
        """Polling period in seconds."""
        if self._interval is not None:
            return self._interval
        return self.context.config.stream_polling_interval_ms / 1000

    async def _new_heads(self) -> AsyncIterator[Dict[str, Any]]:
        last_hash = None
        while True:
            block = await asyncio.to_thread(self.context.rpc.get_block)
            if block["hash"] != last_hash:
                last_hash = block["hash"]
                yield block
            await asyncio.sleep(self.interval)

    async def _head_hashes(self) -> AsyncIterator[str]:
        async for block in self._new_heads():
            yield block["hash"]

    async def _operations(self, filter: OperationFilter) -> AsyncIterator[Dict[str, Any]]:
        async for block in self._new_heads():
            for group in block.get("operations", []):
                for operation in group:
                    if operation_matches(operation, filter):
                        yield operation

    def subscribe(self, filter: str) -> PollingSubscription:
        """
        Raises:
            ValueError: If ``filter`` is not ``"head"``
        """
        if filter != "head":
            raise ValueError(f"Unsupported subscription filter: {filter!r}")
        return PollingSubscription(self._head_hashes())

    def subscribe_operation(self, filter: OperationFilter) -> PollingSubscription:
        return PollingSubscription(self._operations(filter))

    def __repr__(self) -> str:
        return f"PollingSubscribeProvider(rpc={self.context.rpc!r})"


__all__ = [
    "PollingSubscribeProvider",
    "PollingSubscription",
    "operation_matches",
]
