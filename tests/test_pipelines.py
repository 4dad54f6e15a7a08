import random
from datetime import date

import pytest

from conftest import make_transaction
from inventory_ledger import reports, settings
from inventory_ledger.mock_data import generate_mock_transactions
from inventory_ledger.pipelines.inventory import InventoryPipeline
from inventory_ledger.pipelines.report import ReportPipeline
from inventory_ledger.schemas import StockStatus
from inventory_ledger.store import LedgerStore, load_catalog


def test_report_pipeline_returns_report(store, widgets):
    store.append_transaction(widgets.id, withdrawal=15, unit="ICT")

    report = ReportPipeline(store, "all", "2024-01-01", "2024-01-02").run()

    assert report.summary.total_deposits == 20
    assert report.summary.total_withdrawals == 15
    assert report.summary.final_balance == 5
    assert report.summary.transaction_count == 2


def test_report_pipeline_with_no_matches(store):
    report = ReportPipeline(store, start_date="2030-01-01").run()

    assert report.summary.transaction_count == 0
    assert report.item_summary == {}


def test_report_pipeline_rejects_bad_dates_up_front(store):
    with pytest.raises(ValueError):
        ReportPipeline(store, start_date="not-a-date")


def test_report_transform_aggregates_the_frame_it_is_given(store, widgets, gadgets):
    store.append_transaction(widgets.id, withdrawal=15, unit="ICT")
    store.append_transaction(gadgets.id, deposit=4)
    pipeline = ReportPipeline(store)
    df = pipeline.extract()

    report = pipeline.transform(df[df["item_id"] == gadgets.id])

    assert report.summary.transaction_count == 1
    assert report.summary.total_deposits == 4
    assert report.summary.total_withdrawals == 0
    assert list(report.item_summary) == ["Gadgets"]
    assert [t.item.name for t in report.transactions] == ["Gadgets"]


def test_report_pipeline_saves_when_asked(store, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "OUTPUT_DIR", tmp_path)

    ReportPipeline(store, save_outputs=True).run()

    assert len(list(tmp_path.glob(f"{settings.REPORT_FILENAME_BASE}_*.csv"))) == 1


def test_inventory_pipeline_summary(store, gadgets):
    store.append_transaction(gadgets.id, deposit=2)

    summary = InventoryPipeline(store).run()

    assert [(row.name, row.total_quantity, row.status) for row in summary] == [
        ("Widgets", 20, StockStatus.IN_STOCK),
        ("Gadgets", 2, StockStatus.LOW_STOCK),
    ]


def test_inventory_pipeline_folds_drifted_history(widgets, clock, caplog):
    history = [
        make_transaction(widgets, date(2024, 1, 2), withdrawal=3, balance=99, unit="ICT"),
        make_transaction(widgets, date(2024, 1, 1), deposit=10, balance=10),
    ]
    store = LedgerStore([widgets], history, clock=clock)

    with caplog.at_level("WARNING"):
        summary = InventoryPipeline(store).run()

    assert summary[0].total_quantity == 7
    assert "disagree with the running sum" in caplog.text


def test_inventory_pipeline_saves_when_asked(store, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "OUTPUT_DIR", tmp_path)

    InventoryPipeline(store, save_outputs=True).run()

    assert len(list(tmp_path.glob(f"{settings.SUMMARY_FILENAME_BASE}_*.csv"))) == 1



def test_inventory_transform_aggregates_the_frame_it_is_given(store, widgets, gadgets):
    store.append_transaction(gadgets.id, deposit=5)
    df = reports.transactions_to_frame(store.transactions)

    summary = InventoryPipeline(store).transform(df[df["item_id"] == gadgets.id])

    assert [(row.name, row.total_quantity, row.status) for row in summary] == [
        ("Widgets", 0, StockStatus.UNAVAILABLE),
        ("Gadgets", 5, StockStatus.IN_STOCK),
    ]


def test_inventory_pipeline_matches_store_summary_over_mock_history():
    items = load_catalog()
    history = generate_mock_transactions(items, today=date(2024, 6, 30), rng=random.Random(5))
    store = LedgerStore(items, history)

    assert InventoryPipeline(store).run() == store.inventory_summary()
