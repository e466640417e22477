"""
Shared fixtures for the toolkit tests.

Every fixture works offline: RPC clients are mocks or real clients whose
session is never used.
"""

from unittest.mock import Mock

import pytest

from tezos_toolkit import Context, InMemorySigner, RpcClient, TezosToolkit

from helpers import (
    ALICE_PUBLIC_KEY,
    ALICE_SECRET_KEY,
    BRANCH,
    NODE_URL,
    OP_HASH,
    PROTOCOL,
    applied_result,
)


@pytest.fixture
def alice():
    return InMemorySigner(ALICE_SECRET_KEY)


@pytest.fixture
def mock_rpc():
    """RpcClient mock answering the calls of the operation pipeline."""
    rpc = Mock(spec=RpcClient)
    rpc.url = NODE_URL
    rpc.get_block_header.return_value = {"hash": BRANCH, "level": 100, "protocol": PROTOCOL}
    rpc.get_contract.return_value = {"balance": "1000000", "counter": "5"}
    rpc.get_manager_key.return_value = ALICE_PUBLIC_KEY
    rpc.get_constants.return_value = {
        "minimal_block_delay": "15",
        "hard_gas_limit_per_operation": "1040000",
        "hard_storage_limit_per_operation": "60000",
    }
    rpc.get_chain_id.return_value = "NetXdQprcVkpaWU"
    rpc.forge_operations.return_value = "00" * 100
    rpc.preapply_operations.return_value = [applied_result()]
    rpc.inject_operation.return_value = OP_HASH
    return rpc


@pytest.fixture
def context(mock_rpc, alice):
    return Context(rpc=mock_rpc, signer=alice)


@pytest.fixture
def toolkit():
    """Toolkit on a fake node; nothing is sent unless a test mocks the providers."""
    return TezosToolkit(NODE_URL)
