"""
Pytest configuration and shared fixtures.
"""
import copy

import pytest
from httpx import ASGITransport, AsyncClient

from chainscope.api.main import app, get_indexer
from chainscope.config import Settings
from chainscope.infrastructure.gateways.local_mock import LocalMockIndexer

STAKER = "5Cnx9ZfNaSo9DeMNgjvFSqk9XiVpQ1ofX8Fourj6r5yLAtpv"
RECIPIENT = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"
EMPTY_ACCOUNT = "5FHneW46xGXgs5mUiveU4sbTyGBzmstUspZC92UhjJM694ty"

STAKE_HASH = "0x9f1c2a7be4d05c3e8a1b6f20d4c7e9a3b5f8021c6d4e7a9b0c3f5e8d1a2b4c6d"
TRANSFER_HASH = "0x1a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e6f708192a3b4c5d6e7f809"
REMARK_HASH = "0x5555555555555555555555555555555555555555555555555555555555555555"

EXTRINSICS = [
    {
        "hash": STAKE_HASH,
        "blockNumber": 4000100,
        "section": "appPromotion",
        "method": "stake",
        "createdAt": "2024-03-01T12:30:45.000Z",
        "events": [
            {"section": "balances", "method": "Withdraw", "data": {"0": STAKER, "1": "1200000000000000"}},
            {"section": "appPromotion", "method": "Stake", "data": {"0": STAKER, "1": "5000000000000000000"}},
        ],
    },
    {
        "hash": TRANSFER_HASH,
        "blockNumber": 4000050,
        "section": "balances",
        "method": "transfer_keep_alive",
        "createdAt": "2024-02-28T08:00:00.000Z",
        "events": [{"section": "balances", "method": "Transfer", "data": [STAKER, RECIPIENT, "3000000000000000000"]}],
    },
    {
        "hash": REMARK_HASH,
        "blockNumber": 4000010,
        "section": "system",
        "method": "remark",
        "createdAt": "2024-02-27T00:00:00.000Z",
    },
]

TRANSFERS = [
    {
        "event": {
            "extrinsicHash": TRANSFER_HASH,
            "blockNumber": 4000050,
            "extrinsic": {"section": "balances", "method": "transfer_keep_alive"},
        },
        "amount": "3000000000000000000",
        "from": STAKER,
        "to": RECIPIENT,
    },
]

BALANCE = {
    "address": STAKER,
    "available": "2000000000000000000",
    "staked": "0",
    "locked": "0",
    "total": "2000000000000000000",
    "free": "2000000000000000000",
    "reserved": "0",
    "unstaked": "0",
    "canstake": "2000000000000000000",
    "createdAtBlockNumber": 100,
    "updatedAtBlockNumber": 4000100,
    "fetchedAtBlockNumber": 4000200,
}


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def indexer():
    return LocalMockIndexer(
        extrinsics={STAKER: copy.deepcopy(EXTRINSICS)},
        transfers={STAKER: copy.deepcopy(TRANSFERS)},
        balances={STAKER: copy.deepcopy(BALANCE), EMPTY_ACCOUNT: {"address": EMPTY_ACCOUNT}},
    )


@pytest.fixture
async def client(indexer):
    """Async HTTP client for testing FastAPI endpoints against the mock indexer."""
    app.dependency_overrides[get_indexer] = lambda: indexer
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
