"""
Pure functions over the transaction list: balances, stock status, daily
activity, filtering and the append operation.

Nothing here mutates its inputs. The store owns the list and swaps it for
the one returned by `append_transaction`.
"""
import logging
import uuid
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from . import settings, utils, validators
from .schemas import DailyActivity, Item, ItemStock, StockStatus, Transaction

logger = logging.getLogger(__name__)


class TransactionRejected(ValueError):
    """A stock movement failed validation. The ledger is left untouched."""


def _chronological_key(transaction: Transaction):
    return (transaction.date, transaction.created_at)


def transactions_for_item(
    transactions: Iterable[Transaction], item_id: str
) -> list[Transaction]:
    return [t for t in transactions if t.item.id == item_id]


def chronological(transactions: Iterable[Transaction]) -> list[Transaction]:
    """
    Oldest first; same-day movements ordered by creation time. Exact ties keep
    ledger convention: the later a record sits in the (newest first) list, the older it is.
    """
    return sorted(reversed(list(transactions)), key=_chronological_key)


def running_balances(
    transactions: Iterable[Transaction], item_id: str
) -> list[tuple[Transaction, int]]:
    """Pairs each of the item's transactions with the balance right after it."""
    balance = 0
    result = []
    for transaction in chronological(transactions_for_item(transactions, item_id)):
        balance += transaction.deposit - transaction.withdrawal
        result.append((transaction, balance))
    return result


def compute_current_balance(transactions: Iterable[Transaction], item_id: str) -> int:
    """
    Quantity on hand for an item: the running sum of deposits minus
    withdrawals in chronological order. 0 if the item has no transactions.
    """
    history = running_balances(transactions, item_id)
    if not history:
        return 0
    return history[-1][1]


def latest_recorded_balance(transactions: Iterable[Transaction], item_id: str) -> int:
    """
    The stored `balance` of the item's most recent transaction (latest date,
    then latest creation time). Only reliable when every stored balance
    agrees with the running sum.
    """
    item_transactions = transactions_for_item(transactions, item_id)
    if not item_transactions:
        return 0
    return max(item_transactions, key=_chronological_key).balance


def find_balance_drift(transactions: Sequence[Transaction]) -> list[Transaction]:
    """Returns every transaction whose stored balance disagrees with the running sum."""
    item_ids = dict.fromkeys(t.item.id for t in transactions)
    drifted = []
    for item_id in item_ids:
        for transaction, expected in running_balances(transactions, item_id):
            if transaction.balance != expected:
                drifted.append(transaction)
    return drifted


def classify_stock_status(
    balance: int, low_threshold: int = settings.DEFAULT_LOW_STOCK_THRESHOLD
) -> StockStatus:
    if balance <= 0:
        return StockStatus.UNAVAILABLE
    if balance <= low_threshold:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def compute_daily_activity(
    transactions: Iterable[Transaction], today: utils.DateLike = None
) -> DailyActivity:
    """Counts and sums the movements dated exactly `today` (defaults to the current date)."""
    day = utils.to_date(today) or date.today()
    todays = [t for t in transactions if t.date == day]
    return DailyActivity(
        count=len(todays),
        total_deposits=sum(t.deposit for t in todays),
        total_withdrawals=sum(t.withdrawal for t in todays),
    )


def filter_transactions(
    transactions: Iterable[Transaction],
    item_filter: Optional[str] = settings.ALL_ITEMS,
    start_date: utils.DateLike = None,
    end_date: utils.DateLike = None,
    search: Optional[str] = None,
) -> list[Transaction]:
    """
    Keeps the order the transactions arrive in.

    - item_filter: an item id, or "all" / None for every item
    - start_date / end_date: inclusive bounds, each optional
    - search: case-insensitive substring of the item name
    """
    start = utils.to_date(start_date)
    end = utils.to_date(end_date)
    needle = search.strip().lower() if search else ""
    match_all = not item_filter or item_filter == settings.ALL_ITEMS

    filtered = []
    for transaction in transactions:
        if not match_all and transaction.item.id != item_filter:
            continue
        if start and transaction.date < start:
            continue
        if end and transaction.date > end:
            continue
        if needle and needle not in transaction.item.name.lower():
            continue
        filtered.append(transaction)
    return filtered


def group_by_date(transactions: Iterable[Transaction]) -> dict[date, list[Transaction]]:
    """Groups a listing by day, in order of first appearance."""
    grouped: dict[date, list[Transaction]] = {}
    for transaction in transactions:
        grouped.setdefault(transaction.date, []).append(transaction)
    return grouped


def inventory_summary(
    items: Iterable[Item], transactions: Sequence[Transaction]
) -> list[ItemStock]:
    """Current quantity and status for every catalog item, in catalog order."""
    summary = []
    for item in items:
        balance = compute_current_balance(transactions, item.id)
        summary.append(
            ItemStock(
                item_id=item.id,
                name=item.name,
                total_quantity=balance,
                status=classify_stock_status(balance, item.low_stock_threshold),
            )
        )
    return summary


def status_distribution(summary: Iterable[ItemStock]) -> dict[StockStatus, int]:
    counts = Counter(row.status for row in summary)
    return {status: counts.get(status, 0) for status in StockStatus}


def _creation_time_after(
    transactions: Iterable[Transaction], item_id: str, now: datetime
) -> datetime:
    """
    `now`, nudged forward if needed so the new record sorts after every
    same-day record of the item it was balanced against.
    """
    same_day = [
        t.created_at for t in transactions if t.item.id == item_id and t.date == now.date()
    ]
    if same_day and max(same_day) >= now:
        return max(same_day) + timedelta(microseconds=1)
    return now


def find_item(items: Iterable[Item], item_id: Optional[str]) -> Optional[Item]:
    if not item_id:
        return None
    return next((item for item in items if item.id == item_id), None)


def append_transaction(
    transactions: Sequence[Transaction],
    items: Sequence[Item],
    item_id: Optional[str],
    deposit: int = 0,
    withdrawal: int = 0,
    unit: Optional[str] = None,
    now: Optional[datetime] = None,
    transaction_id: Optional[str] = None,
    enforce_non_negative: bool = True,
) -> tuple[list[Transaction], Transaction]:
    """
    Records a stock movement dated `now`.

    Args:
        transactions: Current ledger, newest first
        items: Item catalog
        item_id: Item to move stock for
        deposit: Units added
        withdrawal: Units removed
        unit: Requesting unit, required when withdrawal > 0
        now: Timestamp of the movement (defaults to datetime.now())
        transaction_id: Identifier for the new record (defaults to a random hex id)
        enforce_non_negative: Reject withdrawals that exceed the stock on hand

    Returns:
        Tuple of (new ledger with the movement prepended, the new transaction)

    Raises:
        TransactionRejected: if any rule fails. `transactions` is never mutated.
    """
    item = find_item(items, item_id)
    is_valid, message = validators.validate_transaction_request(
        item, deposit, withdrawal, unit
    )
    if not is_valid:
        raise TransactionRejected(message)

    current_balance = compute_current_balance(transactions, item.id)
    if enforce_non_negative:
        is_valid, message = validators.validate_sufficient_stock(
            item, current_balance, deposit, withdrawal
        )
        if not is_valid:
            raise TransactionRejected(message)

    now = now or datetime.now()
    created_at = _creation_time_after(transactions, item.id, now)
    transaction = Transaction(
        id=transaction_id or uuid.uuid4().hex,
        date=now.date(),
        item=item,
        deposit=deposit,
        withdrawal=withdrawal,
        balance=current_balance + deposit - withdrawal,
        unit=unit if withdrawal > 0 else None,
        created_at=created_at,
        updated_at=created_at,
    )
    logger.debug(
        f"Appended {transaction.id}: {item.name} +{deposit} -{withdrawal} -> {transaction.balance}"
    )
    return [transaction, *transactions], transaction
