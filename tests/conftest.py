from datetime import date, datetime

import pytest

from inventory_ledger.schemas import Item, Transaction
from inventory_ledger.store import LedgerStore


def make_transaction(
    item: Item,
    day: date,
    deposit: int = 0,
    withdrawal: int = 0,
    balance: int = 0,
    unit=None,
    txn_id: str = None,
    created_at: datetime = None,
) -> Transaction:
    created_at = created_at or datetime.combine(day, datetime.min.time())
    return Transaction(
        id=txn_id or f"{item.id}-{day.isoformat()}-{deposit}-{withdrawal}",
        date=day,
        item=item,
        deposit=deposit,
        withdrawal=withdrawal,
        balance=balance,
        unit=unit,
        created_at=created_at,
        updated_at=created_at,
    )


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def widgets() -> Item:
    return Item(id="1", name="Widgets", low_stock_threshold=10)


@pytest.fixture
def gadgets() -> Item:
    return Item(id="2", name="Gadgets", lowStockThreshold=3)


@pytest.fixture
def opening_stock(widgets):
    return make_transaction(widgets, date(2024, 1, 1), deposit=20, balance=20, txn_id="t1")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 2, 9, 30))


@pytest.fixture
def store(widgets, gadgets, opening_stock, clock) -> LedgerStore:
    counter = iter(range(100, 1000))
    return LedgerStore(
        [widgets, gadgets],
        [opening_stock],
        clock=clock,
        id_factory=lambda: f"t{next(counter)}",
    )
