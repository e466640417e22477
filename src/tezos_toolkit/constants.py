"""
Network constants and defaults.
"""

from enum import Enum

DEFAULT_RPC_URL = "https://mainnet.api.tez.ie"
RPC_URL_ENV = "TEZOS_RPC_URL"

DEFAULT_GAS_LIMIT = {
    "DELEGATION": 10600,
    "ORIGINATION": 10600,
    "TRANSFER": 10600,
    "REVEAL": 10600,
}

DEFAULT_FEE = {
    "DELEGATION": 1257,
    "ORIGINATION": 10000,
    "TRANSFER": 10000,
    "REVEAL": 1420,
}

DEFAULT_STORAGE_LIMIT = {
    "DELEGATION": 0,
    "ORIGINATION": 257,
    "TRANSFER": 257,
    "REVEAL": 0,
}


class Protocols(str, Enum):
    """Known protocol hashes."""

    Pt24m4xi = "Pt24m4xiPbLDhVgVfABUjirbmda3yohdN82Sp9FeuAXJ4eV9otd"
    PsBABY5H = "PsBABY5HQTSkA4297zNHfsZNKtxULfL18y95qb3m53QJiXGmrbU"
    PsBabyM1 = "PsBabyM1eUXZseaJdmXFApDSBqj8YBfwELoxZHHW77EMcAbbwAS"
    PsCARTHA = "PsCARTHAGazKbHtnKfLzQg3kms52kSRpgnDY982a9oYsSXRLQEb"
    PsDELPH1 = "PsDELPH1Kxsxt8f9eWbxQeRxkjfbxoqM52jvs5Y5fBxWWh4ifpo"
    PtEdo2Zk = "PtEdo2ZkT9oKpimTah6x2embF25oss54njMuPzkJTEi5RqfdZFA"
