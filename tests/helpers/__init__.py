"""
Test data shared by the toolkit tests.
"""

# Well known sandbox account
ALICE_SECRET_KEY = "edsk3QoqBuvdamxouPhin7swCvkQNgq4jP5KZPbwWNnwdZpSpJiEbq"
ALICE_PUBLIC_KEY = "edpkvGfYw3LyB1UcCahKQk4rF2tvbMUk8GFiTuMjL75uGXrpvKXhjn"
ALICE_PKH = "tz1VSUr8wwNhLAzempoch5d6hLRiTh8Cjcjb"

BOB_PKH = "tz1aSkwEot3L2kmUvcoxzjMomb9mvBNuzFK6"

NODE_URL = "https://node.example.com"

BRANCH = "BLockGenesisGenesisGenesisGenesisGenesisf79b5d1CoW2"
PROTOCOL = "PtEdo2ZkT9oKpimTah6x2embF25oss54njMuPzkJTEi5RqfdZFA"
OP_HASH = "ooXyZ1xE8rhdVAWN7kRgKXMLHtMaJ7T6QVzGEz3K6HgZ6Qaes3T"

# Fundraiser material (any values derive a valid key)
FUNDRAISER_EMAIL = "vkbvlcdl.wdgfeysy@tezos.example.org"
FUNDRAISER_PASSWORD = "G7mjWNbI2V"
FUNDRAISER_MNEMONIC = ("fault dish long rifle elevator depend thumb wrap slice "
                       "trade vessel minimum grass swamp shell")
FUNDRAISER_SECRET = "6d6b8bb9a1d3b5ffd61a1c81b0ec4c2a1e13f1d0"

INVALID_ACTIVATION_BODY = (
    '[{"kind":"temporary","id":"proto.007-PsDELPH1.operation.invalid_activation",'
    '"pkh":"tz1..."}]'
)


def applied_result(kind="transaction", **operation_result):
    """A preapply or run_operation result with one applied content."""
    operation_result.setdefault("status", "applied")
    return {
        "contents": [
            {"kind": kind, "metadata": {"operation_result": operation_result}},
        ]
    }


def block(level, hash=None, operation_hashes=()):
    """Minimal block as returned by ``get_block``."""
    return {
        "hash": hash or f"BL{level}",
        "header": {"level": level},
        "operations": [[], [], [], [{"hash": h, "contents": []} for h in operation_hashes]],
    }
