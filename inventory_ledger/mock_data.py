import random
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from . import settings
from .schemas import Item, Transaction


def generate_mock_transactions(
    items: Iterable[Item],
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
    history_days: int = settings.MOCK_HISTORY_DAYS,
    now: Optional[datetime] = None,
) -> list[Transaction]:
    """
    Builds a plausible random history for each item over the last `history_days` days.

    Per item: 5-12 movements, roughly 60% deposits of 1-50 units. Withdrawals
    are capped at the stock on hand and attributed to a random requesting
    unit. Dates are drawn first and balances accumulated oldest first, so every
    stored balance matches the running sum. Returned newest first.

    Movements dated on the day of `now` (the generation time, defaulting to
    the current time when `today` is not given) are stamped before `now`, so
    anything recorded afterwards sorts after them.
    """
    if now is None and today is None:
        now = datetime.now()
    today = today or now.date()
    rng = rng or random.Random(settings.MOCK_DATA_SEED)
    transactions = []

    for item_index, item in enumerate(items):
        count = rng.randint(5, 12)
        days = sorted(
            (today - timedelta(days=rng.randrange(history_days)) for _ in range(count))
        )

        balance = 0
        for i, day in enumerate(days):
            is_deposit = rng.random() > 0.4
            amount = rng.randint(1, 50)

            deposit = amount if is_deposit else 0
            withdrawal = 0 if is_deposit else min(amount, balance)
            balance += deposit - withdrawal

            # Spread same-day movements so creation order follows the sequence.
            created_at = datetime.combine(day, time(8)) + timedelta(minutes=i)
            if now and day == now.date():
                created_at = min(created_at, now - timedelta(seconds=count - i))
            transactions.append(
                Transaction(
                    id=f"{item_index}-{i}",
                    date=day,
                    item=item,
                    deposit=deposit,
                    withdrawal=withdrawal,
                    balance=balance,
                    unit=rng.choice(settings.REQUESTING_UNITS) if withdrawal > 0 else None,
                    created_at=created_at,
                    updated_at=created_at,
                )
            )

    return sorted(transactions, key=lambda t: (t.date, t.created_at), reverse=True)
