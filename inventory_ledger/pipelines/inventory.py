import logging

import pandas as pd

from inventory_ledger import data_handler, ledger, reports
from inventory_ledger.pipeline import DataPipeline
from inventory_ledger.schemas import ItemStock
from inventory_ledger.store import LedgerStore

logger = logging.getLogger(__name__)


class InventoryPipeline(DataPipeline):
    def __init__(self, store: LedgerStore, save_outputs: bool = False):
        super().__init__("inventory summary", store, save_outputs=save_outputs)

    def extract(self) -> pd.DataFrame:
        logger.info("--- Loading Ledger ---")
        df = reports.transactions_to_frame(self.store.transactions)
        logger.info(f"  > {len(df)} transactions across {len(self.store.items)} items")
        return df

    def transform(self, df: pd.DataFrame) -> list[ItemStock]:
        drifted = ledger.find_balance_drift(self.store.transactions)
        if drifted:
            logger.warning(
                f"⚠️ {len(drifted)} stored balance(s) disagree with the running sum; "
                "using the running sum."
            )

        # The running sum ends at the net of every movement, whatever the order.
        net = (df["deposit"] - df["withdrawal"]).groupby(df["item_id"]).sum()

        summary = []
        for item in self.store.items:
            balance = int(net.get(item.id, 0))
            summary.append(
                ItemStock(
                    item_id=item.id,
                    name=item.name,
                    total_quantity=balance,
                    status=ledger.classify_stock_status(balance, item.low_stock_threshold),
                )
            )
        return summary

    def load(self, summary: list[ItemStock]) -> None:
        logger.info("\n--- Current Stock Status ---")
        for row in summary:
            logger.info(f"{row.name}: {row.total_quantity} units ({row.status.value})")

        logger.info("\n--- Status Distribution ---")
        for status, count in ledger.status_distribution(summary).items():
            logger.info(f"{status.value}: {count}")

        if self.save_outputs:
            data_handler.save_inventory_summary(summary)
