import logging
from typing import Optional

import pandas as pd

from inventory_ledger import data_handler, ledger, reports, settings, utils
from inventory_ledger.pipeline import DataPipeline
from inventory_ledger.schemas import Report
from inventory_ledger.store import LedgerStore

logger = logging.getLogger(__name__)


class ReportPipeline(DataPipeline):
    def __init__(
        self,
        store: LedgerStore,
        item_filter: Optional[str] = settings.ALL_ITEMS,
        start_date: utils.DateLike = None,
        end_date: utils.DateLike = None,
        save_outputs: bool = False,
    ):
        super().__init__("report", store, save_outputs=save_outputs)
        self.item_filter = item_filter
        # Normalize up front so a bad date fails before any work is done.
        self.start_date = utils.to_date(start_date)
        self.end_date = utils.to_date(end_date)
        self.filtered = []

    def extract(self) -> pd.DataFrame:
        logger.info(f"--- Filtering: {reports.report_title(self.item_filter, self.store.items)} ---")
        caption = utils.format_date_range(self.start_date, self.end_date)
        if caption:
            logger.info(caption)

        self.filtered = ledger.filter_transactions(
            self.store.transactions, self.item_filter, self.start_date, self.end_date
        )
        logger.info(f"  > Matched {len(self.filtered)} of {len(self.store)} transactions")
        return reports.transactions_to_frame(self.filtered)

    def transform(self, df: pd.DataFrame) -> Report:
        logger.info("Aggregating report...")
        kept = set(df["id"])
        listing = [t for t in self.filtered if t.id in kept]
        return reports.report_from_frame(
            df,
            preview=listing[: settings.REPORT_PREVIEW_LIMIT],
            items=self.store.items,
            item_filter=self.item_filter,
            start_date=self.start_date,
            end_date=self.end_date,
            generated_at=self.store.clock(),
        )

    def load(self, report: Report) -> None:
        summary = report.summary
        logger.info(f"\n--- {report.title} ---")
        logger.info(f"Total Stock In:     {summary.total_deposits}")
        logger.info(f"Total Stock Out:    {summary.total_withdrawals}")
        logger.info(f"Net Balance:        {summary.final_balance}")
        logger.info(f"Transactions:       {summary.transaction_count}")

        if report.item_summary:
            logger.info("\n--- Item Breakdown ---")
            for name, row in report.item_summary.items():
                logger.info(
                    f"{name}: in {row.deposits}, out {row.withdrawals}, {row.transactions} transaction(s)"
                )

        if self.save_outputs:
            data_handler.save_outputs(report)
