"""
Tests for TezosToolkit.configure and the provider registry policies.

Covers the fresh toolkit defaults, sticky slots (rpc, stream, signer),
always rebuilt slots (forger, wallet), config overlay and live updates of
providers held by derived components.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import ALICE_PKH, ALICE_SECRET_KEY, NODE_URL

from tezos_toolkit import (
    CompositeForger,
    ConfigurationError,
    Context,
    InMemorySigner,
    LegacyWallet,
    NoopSigner,
    PollingSubscribeProvider,
    Protocols,
    RpcClient,
    RpcForger,
    TezosToolkit,
    UNSET,
)
from tezos_toolkit.registry import ProviderRegistry, SlotKind, SlotPolicy, is_unset
from tezos_toolkit.wallet import WalletProvider


class TestDefaults:
    """A freshly built toolkit."""

    def test_fresh_toolkit_defaults(self):
        """Omitting every override yields default providers and a no-op signer."""
        toolkit = TezosToolkit(NODE_URL)

        assert isinstance(toolkit.rpc, RpcClient)
        assert toolkit.rpc.url == NODE_URL
        assert isinstance(toolkit.signer, NoopSigner)
        assert isinstance(toolkit.context.forger, RpcForger)
        assert isinstance(toolkit.wallet, LegacyWallet)
        assert isinstance(toolkit.stream, PollingSubscribeProvider)

    def test_default_rpc_url_from_environment(self, monkeypatch):
        """Without a url the client targets $TEZOS_RPC_URL."""
        monkeypatch.setenv("TEZOS_RPC_URL", "http://localhost:8732")
        toolkit = TezosToolkit()

        assert toolkit.rpc.url == "http://localhost:8732"

    def test_accepts_client_instance(self):
        client = RpcClient(NODE_URL)
        toolkit = TezosToolkit(client)

        assert toolkit.rpc is client

    def test_default_stream_polls_toolkit_client(self, toolkit):
        """The default subscriber reads through the toolkit's own context."""
        assert toolkit.stream.context is toolkit.context

    def test_configure_without_overrides_keeps_defaults(self, toolkit):
        toolkit.configure()

        assert isinstance(toolkit.signer, NoopSigner)
        assert toolkit.rpc.url == NODE_URL

    def test_config_defaults(self, toolkit):
        config = toolkit.config

        assert config.confirmation_polling_timeout_second == 180
        assert config.default_confirmation_count == 1
        assert config.stream_polling_interval_ms == 20000
        assert config.confirmation_polling_interval_second is None


class TestStickySlots:
    """Slots that keep an expressed override across later configure calls."""

    def test_rpc_url_is_sticky(self, toolkit):
        toolkit.configure(rpc="https://other.example.com")
        client = toolkit.rpc

        toolkit.configure()
        toolkit.configure(signer=NoopSigner())

        assert toolkit.rpc is client
        assert toolkit.rpc.url == "https://other.example.com"

    def test_rpc_instance_is_adopted(self, toolkit):
        client = RpcClient("https://other.example.com")

        toolkit.configure(rpc=client)

        assert toolkit.rpc is client
        assert toolkit.context.rpc is client

    def test_signer_is_sticky(self, toolkit, alice):
        toolkit.configure(signer=alice)

        toolkit.configure()
        toolkit.configure(rpc="https://other.example.com")

        assert toolkit.signer is alice

    def test_signer_default_before_override(self, toolkit):
        """Until a signer is expressed every configure installs a no-op signer."""
        first = toolkit.signer

        toolkit.configure()

        assert isinstance(toolkit.signer, NoopSigner)
        assert toolkit.signer is not first

    def test_none_counts_as_unexpressed(self, toolkit, alice):
        """Passing None does not clear a sticky slot."""
        toolkit.configure(signer=alice)

        toolkit.configure(signer=None, rpc=None, stream=None)

        assert toolkit.signer is alice
        assert toolkit.rpc.url == NODE_URL

    def test_stream_url_uses_independent_client(self, toolkit):
        toolkit.configure(stream="https://stream.example.com")
        stream = toolkit.stream

        assert isinstance(stream, PollingSubscribeProvider)
        assert stream.context is not toolkit.context
        assert stream.context.rpc.url == "https://stream.example.com"
        assert toolkit.rpc.url == NODE_URL

        toolkit.configure()
        toolkit.configure(rpc="https://other.example.com")

        assert toolkit.stream is stream

    def test_stream_instance_is_adopted(self, toolkit):
        stream = PollingSubscribeProvider(Context(rpc=RpcClient("https://stream.example.com")))

        toolkit.configure(stream=stream)
        toolkit.configure()

        assert toolkit.stream is stream

    def test_stream_not_part_of_context(self, toolkit):
        stream = PollingSubscribeProvider(toolkit.context, 1.0)

        toolkit.configure(stream=stream)

        assert not hasattr(toolkit.context, "stream")


class TestRebuiltSlots:
    """Forger and wallet are rebuilt on every configure call."""

    def test_forger_rebuilt_every_call(self, toolkit):
        first = toolkit.context.forger

        toolkit.configure()

        assert isinstance(toolkit.context.forger, RpcForger)
        assert toolkit.context.forger is not first

    def test_forger_override_not_sticky(self, toolkit):
        custom = CompositeForger([RpcForger(toolkit.context)])

        toolkit.configure(forger=custom)
        assert toolkit.context.forger is custom

        toolkit.configure()
        assert toolkit.context.forger is not custom
        assert isinstance(toolkit.context.forger, RpcForger)

    def test_wallet_rebuilt_every_call(self, toolkit):
        custom = Mock(spec=WalletProvider)

        toolkit.configure(wallet=custom)
        assert toolkit.wallet is custom

        toolkit.configure()
        assert isinstance(toolkit.wallet, LegacyWallet)

    def test_rebuilt_forger_bound_to_context(self, toolkit):
        toolkit.configure(rpc="https://other.example.com")

        assert toolkit.context.forger.context is toolkit.context


class TestConfigureErrors:
    """Construction failures of an override."""

    def test_malformed_url(self, toolkit):
        with pytest.raises(ConfigurationError):
            toolkit.configure(rpc="not a url")

    def test_wrong_provider_type(self, toolkit):
        with pytest.raises(ConfigurationError):
            toolkit.configure(signer="edsk...")

        with pytest.raises(ConfigurationError):
            toolkit.configure(rpc=42)

    def test_failure_leaves_later_slots_unresolved(self, toolkit, alice):
        """Slots after the failing one keep their previous instance."""
        previous = toolkit.signer

        with pytest.raises(ConfigurationError):
            toolkit.configure(rpc="ftp://node", signer=alice)

        assert toolkit.signer is previous
        assert toolkit.rpc.url == NODE_URL


class TestProtocolAndConfig:
    """Protocol replacement and config overlay."""

    def test_protocol_set(self, toolkit):
        toolkit.configure(protocol=Protocols.PtEdo2Zk)

        toolkit.configure()

        assert toolkit.context.proto == Protocols.PtEdo2Zk

    def test_config_overlays(self, toolkit):
        toolkit.configure(config={"confirmation_polling_timeout_second": 300})
        toolkit.configure(config={"default_confirmation_count": 3})

        assert toolkit.config.confirmation_polling_timeout_second == 300
        assert toolkit.config.default_confirmation_count == 3
        assert toolkit.config.stream_polling_interval_ms == 20000

    def test_config_camel_case_keys(self, toolkit):
        toolkit.configure(config={"streamerPollingIntervalMilliseconds": 500})

        assert toolkit.config.stream_polling_interval_ms == 500
        assert toolkit.stream.interval == 0.5

    def test_config_none_resets(self, toolkit):
        toolkit.configure(config={"confirmation_polling_timeout_second": 300})

        toolkit.configure(config=None)

        assert toolkit.config.confirmation_polling_timeout_second == 180

    def test_omitted_config_untouched(self, toolkit):
        toolkit.configure(config={"default_confirmation_count": 2})

        toolkit.configure(signer=NoopSigner())

        assert toolkit.config.default_confirmation_count == 2

    def test_invalid_config_value(self, toolkit):
        with pytest.raises(ValueError):
            toolkit.configure(config={"default_confirmation_count": 0})


class TestLiveContext:
    """Derived components observe provider swaps."""

    def test_tz_sees_new_rpc(self, toolkit):
        tz = toolkit.tz

        toolkit.configure(rpc="https://other.example.com")

        assert tz.rpc is toolkit.rpc
        assert tz.rpc.url == "https://other.example.com"

    def test_contract_sees_new_signer(self, toolkit, alice):
        contract = toolkit.contract

        toolkit.configure(signer=alice)

        assert contract.signer is alice

    def test_batch_uses_current_providers(self, toolkit):
        """Each batch is bound to the context, not to the client at construction."""
        toolkit.configure(rpc="https://other.example.com")

        batch = toolkit.batch()

        assert batch.rpc.url == "https://other.example.com"

    def test_batch_with_operations(self, toolkit):
        batch = toolkit.batch([{"kind": "delegation", "delegate": ALICE_PKH}])

        assert batch.operations == [{"kind": "delegation", "delegate": ALICE_PKH}]

    def test_get_factory(self, toolkit):
        make_stream = toolkit.get_factory(PollingSubscribeProvider)

        stream = make_stream(2.0)

        assert stream.context is toolkit.context
        assert stream.interval == 2.0

    def test_set_provider_alias(self, toolkit):
        signer = InMemorySigner(ALICE_SECRET_KEY)

        toolkit.set_provider(signer=signer)

        assert toolkit.signer is signer

    def test_format_helper(self):
        assert TezosToolkit.format("tz", "mutez", 1) == 1000000


class TestProviderRegistry:
    """Registry used directly, without the facade."""

    def test_slot_policies(self):
        registry = ProviderRegistry(Context(rpc=RpcClient(NODE_URL)))

        assert registry.slot(SlotKind.RPC).policy is SlotPolicy.STICKY
        assert registry.slot(SlotKind.STREAM).policy is SlotPolicy.STICKY
        assert registry.slot(SlotKind.SIGNER).policy is SlotPolicy.STICKY
        assert registry.slot(SlotKind.FORGER).policy is SlotPolicy.ALWAYS_REBUILD
        assert registry.slot(SlotKind.WALLET).policy is SlotPolicy.ALWAYS_REBUILD

    def test_records_last_override(self, alice):
        registry = ProviderRegistry(Context(rpc=RpcClient(NODE_URL)))
        slot = registry.slot(SlotKind.SIGNER)
        assert not slot.overridden

        registry.resolve_signer(alice)
        registry.resolve_signer()

        assert slot.overridden
        assert slot.last_override is alice
        assert slot.current is alice

    def test_default_factory_override(self):
        context = Context(rpc=RpcClient(NODE_URL))
        registry = ProviderRegistry(context)
        forger = RpcForger(context)

        result = registry.resolve(SlotKind.FORGER, default_factory=lambda: forger)

        assert result is forger
        assert context.forger is forger

    def test_is_unset(self):
        assert is_unset(UNSET)
        assert is_unset(None)
        assert not is_unset("")
        assert not UNSET
