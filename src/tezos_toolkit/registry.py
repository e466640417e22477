"""
Provider registry.

Tracks, for each pluggable capability, the active instance and the last
override the caller expressed, and resolves new overrides according to the
slot's policy:

- STICKY (rpc, stream, signer): once the caller has expressed an override,
  later resolutions without one keep the current instance. Before any
  override the default is installed.
- ALWAYS_REBUILD (forger, wallet): every resolution without an override
  builds a fresh default bound to the current context.

Resolved instances of the rpc, signer, forger and wallet slots are written
into the Context. The stream slot is held here only.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from .context import Context
from .forger.interface import Forger
from .forger.rpc_forger import RpcForger
from .rpc.client import RpcClient
from .runtime.errors import ConfigurationError
from .signers.noop import NoopSigner
from .signers.signer import Signer
from .subscribe.interface import SubscribeProvider
from .subscribe.polling import PollingSubscribeProvider
from .wallet.interface import WalletProvider
from .wallet.legacy import LegacyWallet

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Unset:
    """Marker for an override the caller did not express."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def is_unset(value: Any) -> bool:
    """An omitted argument or an explicit None both leave a provider slot unexpressed."""
    return value is UNSET or value is None


class SlotKind(str, Enum):
    RPC = "rpc"
    STREAM = "stream"
    SIGNER = "signer"
    FORGER = "forger"
    WALLET = "wallet"


class SlotPolicy(str, Enum):
    STICKY = "sticky"
    ALWAYS_REBUILD = "always_rebuild"


@dataclass
class ProviderSlot(Generic[T]):
    """
    State of one capability.

    Attributes:
        kind: Capability held by the slot
        policy: How unexpressed overrides are resolved
        coerce: Turns an expressed override into an instance
        default_factory: Builds the default instance
        current: Active instance
        last_override: Last expressed override, UNSET until one is seen
    """
    kind: SlotKind
    policy: SlotPolicy
    coerce: Callable[[Any], T]
    default_factory: Callable[[], T]
    current: Optional[T] = None
    last_override: Any = field(default=UNSET)

    @property
    def overridden(self) -> bool:
        return self.last_override is not UNSET


class ProviderRegistry:
    """
    Owns the provider slots of one toolkit and keeps its Context in sync.

    Example:
        ```python
        registry = ProviderRegistry(context)
        registry.resolve(SlotKind.RPC, "https://ghostnet.ecadinfra.com")
        registry.resolve(SlotKind.RPC)  # sticky: keeps the ghostnet client
        ```
    """

    def __init__(self, context: Context):
        self.context = context
        self._slots: Dict[SlotKind, ProviderSlot] = {
            SlotKind.RPC: ProviderSlot(
                SlotKind.RPC, SlotPolicy.STICKY, self._coerce_rpc, RpcClient,
                current=context.rpc),
            SlotKind.STREAM: ProviderSlot(
                SlotKind.STREAM, SlotPolicy.STICKY, self._coerce_stream,
                lambda: PollingSubscribeProvider(self.context)),
            SlotKind.SIGNER: ProviderSlot(
                SlotKind.SIGNER, SlotPolicy.STICKY, self._coerce_instance(Signer), NoopSigner,
                current=context.signer),
            SlotKind.FORGER: ProviderSlot(
                SlotKind.FORGER, SlotPolicy.ALWAYS_REBUILD, self._coerce_instance(Forger),
                lambda: RpcForger(self.context), current=context.forger),
            SlotKind.WALLET: ProviderSlot(
                SlotKind.WALLET, SlotPolicy.ALWAYS_REBUILD, self._coerce_instance(WalletProvider),
                lambda: LegacyWallet(self.context), current=context.wallet),
        }

    # =========================================================================
    # Coercion of expressed overrides
    # =========================================================================

    @staticmethod
    def _coerce_rpc(value: Any) -> RpcClient:
        if isinstance(value, str):
            return RpcClient(value)
        if isinstance(value, RpcClient):
            return value
        raise ConfigurationError(f"rpc must be a url or an RpcClient, got {type(value).__name__}")

    @staticmethod
    def _coerce_stream(value: Any) -> SubscribeProvider:
        if isinstance(value, str):
            # Independent of the toolkit's own client
            return PollingSubscribeProvider(Context(rpc=RpcClient(value)))
        if isinstance(value, SubscribeProvider):
            return value
        raise ConfigurationError(
            f"stream must be a url or a SubscribeProvider, got {type(value).__name__}")

    @staticmethod
    def _coerce_instance(expected: type) -> Callable[[Any], Any]:
        def coerce(value: Any) -> Any:
            if not isinstance(value, expected):
                raise ConfigurationError(
                    f"Expected a {expected.__name__}, got {type(value).__name__}")
            return value
        return coerce

    # =========================================================================
    # Resolution
    # =========================================================================

    def slot(self, kind: SlotKind) -> ProviderSlot:
        return self._slots[kind]

    def current(self, kind: SlotKind) -> Any:
        return self._slots[kind].current

    def resolve(self, kind: SlotKind, override: Any = UNSET,
                default_factory: Optional[Callable[[], Any]] = None) -> Any:
        """
        Resolve the slot ``kind`` against ``override``.

        Args:
            kind: Slot to resolve
            override: Caller supplied value, UNSET (or None) when not expressed
            default_factory: Replaces the slot's default factory for this call

        Returns:
            The active instance after resolution

        Raises:
            ConfigurationError: If the override or the default cannot be built
        """
        slot = self._slots[kind]
        if not is_unset(override):
            value = slot.coerce(override)
            slot.last_override = override
            logger.debug("%s slot: installed override %r", kind.value, value)
        elif slot.policy is SlotPolicy.ALWAYS_REBUILD or not slot.overridden:
            value = (default_factory or slot.default_factory)()
            logger.debug("%s slot: installed default %r", kind.value, value)
        else:
            logger.debug("%s slot: kept %r", kind.value, slot.current)
            return slot.current

        slot.current = value
        if kind is not SlotKind.STREAM:
            setattr(self.context, kind.value, value)
        return value

    def resolve_rpc(self, rpc: Any = UNSET) -> RpcClient:
        return self.resolve(SlotKind.RPC, rpc)

    def resolve_stream(self, stream: Any = UNSET) -> SubscribeProvider:
        return self.resolve(SlotKind.STREAM, stream)

    def resolve_signer(self, signer: Any = UNSET) -> Signer:
        return self.resolve(SlotKind.SIGNER, signer)

    def resolve_forger(self, forger: Any = UNSET) -> Forger:
        return self.resolve(SlotKind.FORGER, forger)

    def resolve_wallet(self, wallet: Any = UNSET) -> WalletProvider:
        return self.resolve(SlotKind.WALLET, wallet)


__all__ = [
    "UNSET",
    "is_unset",
    "SlotKind",
    "SlotPolicy",
    "ProviderSlot",
    "ProviderRegistry",
]
