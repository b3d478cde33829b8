from datetime import datetime, timezone

import pytest

from chainscope.core.entities.transaction import TransactionRecord
from chainscope.core.use_cases.category_classifier import Category, classify, count_by_category

NOW = datetime(2024, 3, 1, tzinfo=timezone.utc)


def _record(n, section, method):
    return TransactionRecord(hash=f"0x{n:02x}", blockNumber=n, section=section, method=method, createdAt=NOW)


@pytest.fixture
def records():
    # Deliberately not sorted by block number
    return [
        _record(5, "appPromotion", "stake"),
        _record(9, "balances", "transfer_keep_alive"),
        _record(1, "system", "remark"),
        _record(7, "appPromotion", "Stake"),
        _record(3, "appPromotion", "stake"),
        _record(8, "balances", "transfer"),
        _record(2, "balances", "transfer_keep_alive"),
    ]


def test_all_is_identity(records):
    assert classify(records, Category.ALL) == records
    assert classify(records, "all") == records


def test_staking(records):
    assert [r.blockNumber for r in classify(records, "staking")] == [5, 3]


def test_transfers(records):
    assert [r.blockNumber for r in classify(records, Category.TRANSFERS)] == [9, 2]


@pytest.mark.parametrize("category", ["unknown", "", "STAKING"])
def test_unknown_category_is_empty(records, category):
    assert classify(records, category) == []


def test_categories_are_ordered_subsequences_of_all(records):
    everything = classify(records, Category.ALL)
    for category in (Category.STAKING, Category.TRANSFERS):
        positions = [everything.index(r) for r in classify(records, category)]
        assert positions == sorted(positions)


def test_count_by_category(records):
    assert count_by_category(records) == {"all": 7, "staking": 2, "transfers": 2}
    assert count_by_category([]) == {"all": 0, "staking": 0, "transfers": 0}
