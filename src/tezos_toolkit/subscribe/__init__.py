"""Event subscriptions"""

from .interface import OperationFilter, SubscribeProvider, Subscription
from .polling import PollingSubscribeProvider, PollingSubscription, operation_matches

__all__ = [
    "OperationFilter",
    "SubscribeProvider",
    "Subscription",
    "PollingSubscribeProvider",
    "PollingSubscription",
    "operation_matches",
]
