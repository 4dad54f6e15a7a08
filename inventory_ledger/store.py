import logging
from datetime import datetime
from typing import Callable, Iterable, Optional

from . import ledger, reports, settings, utils
from .schemas import DailyActivity, Item, ItemStock, Report, StockStatus, Transaction

logger = logging.getLogger(__name__)


def load_catalog(catalog: Iterable[dict] = settings.ITEM_CATALOG) -> list[Item]:
    """Builds the item catalog from plain dicts (the settings catalog by default)."""
    return [Item(**entry) for entry in catalog]


class LedgerStore:
    """
    Owns the item catalog and the transaction list for one session.

    Read views are computed on demand from the current list. The only way to
    change the list is `append_transaction`, which replaces it with the one
    returned by `ledger.append_transaction`.
    """

    def __init__(
        self,
        items: Iterable[Item],
        transactions: Iterable[Transaction] = (),
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Optional[Callable[[], str]] = None,
        enforce_non_negative: bool = True,
    ):
        self._items = tuple(items)
        self._transactions = list(transactions)
        self.clock = clock
        self.id_factory = id_factory
        self.enforce_non_negative = enforce_non_negative

    @property
    def items(self) -> tuple[Item, ...]:
        return self._items

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Snapshot of the ledger, newest first."""
        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def get_item(self, item_id: str) -> Optional[Item]:
        return ledger.find_item(self._items, item_id)

    def current_balance(self, item_id: str) -> int:
        return ledger.compute_current_balance(self._transactions, item_id)

    def stock_status(self, item_id: str) -> StockStatus:
        item = self.get_item(item_id)
        threshold = item.low_stock_threshold if item else settings.DEFAULT_LOW_STOCK_THRESHOLD
        return ledger.classify_stock_status(self.current_balance(item_id), threshold)

    def append_transaction(
        self,
        item_id: Optional[str],
        deposit: int = 0,
        withdrawal: int = 0,
        unit: Optional[str] = None,
    ) -> Transaction:
        """
        Records a movement dated by the store's clock.

        Raises:
            ledger.TransactionRejected: if validation fails; the ledger is unchanged
        """
        try:
            updated, transaction = ledger.append_transaction(
                self._transactions,
                self._items,
                item_id,
                deposit=deposit,
                withdrawal=withdrawal,
                unit=unit,
                now=self.clock(),
                transaction_id=self.id_factory() if self.id_factory else None,
                enforce_non_negative=self.enforce_non_negative,
            )
        except ledger.TransactionRejected as e:
            logger.warning(f"⚠️ Transaction rejected: {e}")
            raise

        self._transactions = updated
        logger.info(
            f"✅ Recorded {transaction.item.name}: +{transaction.deposit} / -{transaction.withdrawal} "
            f"(balance {transaction.balance})"
        )
        return transaction

    def daily_activity(self, today: utils.DateLike = None) -> DailyActivity:
        return ledger.compute_daily_activity(
            self._transactions, today or self.clock().date()
        )

    def inventory_summary(self) -> list[ItemStock]:
        return ledger.inventory_summary(self._items, self._transactions)

    def search(
        self,
        search: Optional[str] = None,
        item_filter: Optional[str] = settings.ALL_ITEMS,
        start_date: utils.DateLike = None,
        end_date: utils.DateLike = None,
    ) -> list[Transaction]:
        return ledger.filter_transactions(
            self._transactions, item_filter, start_date, end_date, search=search
        )

    def generate_report(
        self,
        item_filter: Optional[str] = settings.ALL_ITEMS,
        start_date: utils.DateLike = None,
        end_date: utils.DateLike = None,
    ) -> Report:
        return reports.generate_report(
            self._transactions,
            item_filter=item_filter,
            start_date=start_date,
            end_date=end_date,
            items=self._items,
            generated_at=self.clock(),
        )
