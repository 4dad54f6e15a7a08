import logging
import random
from datetime import datetime

from inventory_ledger import data_handler, settings
from inventory_ledger.logger import setup_logger
from inventory_ledger.mock_data import generate_mock_transactions
from inventory_ledger.pipelines.inventory import InventoryPipeline
from inventory_ledger.pipelines.report import ReportPipeline
from inventory_ledger.session import Session
from inventory_ledger.store import LedgerStore, load_catalog

logger = logging.getLogger(__name__)


def build_store() -> LedgerStore:
    """Creates the session's store with the fixed catalog and a random history."""
    items = load_catalog()
    history = generate_mock_transactions(
        items, rng=random.Random(settings.MOCK_DATA_SEED), now=datetime.now()
    )
    return LedgerStore(items, history)


def run_process():
    """Runs a demo session: login, dashboard, inventory summary and a report."""
    setup_logger()
    logger.info("--- Starting Inventory Ledger Demo ---")

    with Session(build_store()) as session:
        if not session.login(settings.DEMO_EMAIL, settings.DEMO_PASSWORD):
            logger.error("❌ Demo credentials rejected. Check DEMO_EMAIL / DEMO_PASSWORD.")
            return

        store = session.store
        activity = store.daily_activity()
        logger.info("\n--- Today ---")
        logger.info(f"Transactions: {activity.count}")
        logger.info(f"Stock In:     {activity.total_deposits}")
        logger.info(f"Stock Out:    {activity.total_withdrawals}\n")

        InventoryPipeline(store, save_outputs=True).run()

        report = ReportPipeline(
            store,
            item_filter=settings.REPORT_ITEM,
            start_date=settings.REPORT_START_DATE,
            end_date=settings.REPORT_END_DATE,
        ).run()

        data_handler.export_report(report, "csv")

    logger.info("\n--- Process Finished Successfully ---")


if __name__ == "__main__":
    run_process()
