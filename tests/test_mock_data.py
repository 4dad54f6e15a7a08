import random
from datetime import date, datetime, timedelta

from inventory_ledger import ledger, settings
from inventory_ledger.mock_data import generate_mock_transactions
from inventory_ledger.store import load_catalog

TODAY = date(2024, 6, 30)


def _catalog():
    return load_catalog()


def test_history_is_consistent_and_newest_first():
    items = _catalog()
    history = generate_mock_transactions(items, today=TODAY, rng=random.Random(42))

    keys = [(t.date, t.created_at) for t in history]
    assert keys == sorted(keys, reverse=True)
    assert ledger.find_balance_drift(history) == []
    assert all(t.balance >= 0 for t in history)

    for item in items:
        count = len(ledger.transactions_for_item(history, item.id))
        assert 5 <= count <= 12
        assert ledger.latest_recorded_balance(history, item.id) == ledger.compute_current_balance(
            history, item.id
        )


def test_dates_fall_inside_history_window():
    history = generate_mock_transactions(_catalog(), today=TODAY, rng=random.Random(1))

    earliest = TODAY - timedelta(days=settings.MOCK_HISTORY_DAYS - 1)
    assert all(earliest <= t.date <= TODAY for t in history)


def test_units_only_on_withdrawals():
    history = generate_mock_transactions(_catalog(), today=TODAY, rng=random.Random(3))

    for t in history:
        if t.withdrawal > 0:
            assert t.unit in settings.REQUESTING_UNITS
            assert t.deposit == 0
        else:
            assert t.unit is None


def test_same_seed_same_history():
    first = generate_mock_transactions(_catalog(), today=TODAY, rng=random.Random(9))
    second = generate_mock_transactions(_catalog(), today=TODAY, rng=random.Random(9))

    assert first == second


def test_todays_movements_are_stamped_before_generation_time():
    now = datetime(2024, 6, 30, 7, 15)
    history = generate_mock_transactions(
        _catalog(), rng=random.Random(0), history_days=1, now=now
    )

    assert all(t.date == now.date() for t in history)
    assert all(t.created_at < now for t in history)
    assert ledger.find_balance_drift(history) == []
