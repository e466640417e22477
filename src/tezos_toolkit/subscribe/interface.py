"""
Event subscription interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Union

OperationFilter = Union[Dict[str, Any], List[Dict[str, Any]]]


class Subscription(ABC):
    """Handle on a running subscription emitting ``data``, ``error`` and ``close``."""

    @abstractmethod
    def on(self, event: str, callback: Callable[[Any], None]) -> None:
        pass

    @abstractmethod
    def off(self, event: str, callback: Callable[[Any], None]) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass


class SubscribeProvider(ABC):

    @abstractmethod
    def subscribe(self, filter: str) -> Subscription:
        """Subscribe to new heads (``filter`` must be ``"head"``)."""
        pass

    @abstractmethod
    def subscribe_operation(self, filter: OperationFilter) -> Subscription:
        """Subscribe to operations of new blocks matching ``filter``."""
        pass
