import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

import pandas as pd

from . import ledger, settings, utils
from .schemas import Item, ItemBreakdown, Report, ReportSummary, Transaction

logger = logging.getLogger(__name__)

FRAME_COLUMNS = [
    "id",
    "date",
    "item_id",
    "item",
    "deposit",
    "withdrawal",
    "balance",
    "unit",
]

# Column headers used when a report listing is written to CSV.
CSV_COLUMNS = {
    "id": "ID",
    "date": "Date",
    "item_id": "Item ID",
    "item": "Item",
    "deposit": "Stock In",
    "withdrawal": "Stock Out",
    "balance": "Balance",
    "unit": "Requesting Unit",
}


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Flattens transactions into one row each, keeping their order."""
    rows = [
        {
            "id": t.id,
            "date": t.date,
            "item_id": t.item.id,
            "item": t.item.name,
            "deposit": t.deposit,
            "withdrawal": t.withdrawal,
            "balance": t.balance,
            "unit": t.unit or "",
        }
        for t in transactions
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def summarize_frame(df: pd.DataFrame) -> ReportSummary:
    total_deposits = int(df["deposit"].sum())
    total_withdrawals = int(df["withdrawal"].sum())
    return ReportSummary(
        total_deposits=total_deposits,
        total_withdrawals=total_withdrawals,
        final_balance=total_deposits - total_withdrawals,
        transaction_count=len(df),
    )


def breakdown_by_item(df: pd.DataFrame) -> dict[str, ItemBreakdown]:
    """Per item name, in order of first appearance in the frame."""
    if df.empty:
        return {}

    grouped = df.groupby("item", sort=False).agg(
        deposits=("deposit", "sum"),
        withdrawals=("withdrawal", "sum"),
        transactions=("id", "count"),
    )
    return {
        str(name): ItemBreakdown(
            deposits=int(row["deposits"]),
            withdrawals=int(row["withdrawals"]),
            transactions=int(row["transactions"]),
        )
        for name, row in grouped.iterrows()
    }


def report_title(item_filter: Optional[str], items: Sequence[Item] = ()) -> str:
    if not item_filter or item_filter == settings.ALL_ITEMS:
        return "Inventory Report On All Items"
    item = ledger.find_item(items, item_filter)
    return f"Inventory Report On {item.name if item else 'Unknown Item'}"


def build_report(
    filtered: Sequence[Transaction],
    items: Sequence[Item] = (),
    item_filter: Optional[str] = settings.ALL_ITEMS,
    start_date: utils.DateLike = None,
    end_date: utils.DateLike = None,
    preview_limit: int = settings.REPORT_PREVIEW_LIMIT,
    generated_at: Optional[datetime] = None,
) -> Report:
    """Aggregates an already-filtered set of transactions into a Report."""
    return report_from_frame(
        transactions_to_frame(filtered),
        preview=filtered[:preview_limit],
        items=items,
        item_filter=item_filter,
        start_date=start_date,
        end_date=end_date,
        generated_at=generated_at,
    )


def report_from_frame(
    df: pd.DataFrame,
    preview: Iterable[Transaction] = (),
    items: Sequence[Item] = (),
    item_filter: Optional[str] = settings.ALL_ITEMS,
    start_date: utils.DateLike = None,
    end_date: utils.DateLike = None,
    generated_at: Optional[datetime] = None,
) -> Report:
    """
    Builds a Report whose totals and per-item breakdown come from `df` (a
    frame shaped like `transactions_to_frame` output). `preview` is embedded
    as the listing as-is.
    """
    start = utils.to_date(start_date)
    end = utils.to_date(end_date)

    return Report(
        title=report_title(item_filter, items),
        item_filter=item_filter or settings.ALL_ITEMS,
        start_date=start,
        end_date=end,
        date_range=utils.format_date_range(start, end),
        transactions=list(preview),
        summary=summarize_frame(df),
        item_summary=breakdown_by_item(df),
        generated_at=generated_at or datetime.now(),
    )


def generate_report(
    transactions: Sequence[Transaction],
    item_filter: Optional[str] = settings.ALL_ITEMS,
    start_date: utils.DateLike = None,
    end_date: utils.DateLike = None,
    items: Sequence[Item] = (),
    preview_limit: int = settings.REPORT_PREVIEW_LIMIT,
    generated_at: Optional[datetime] = None,
) -> Report:
    """
    Filters by item and inclusive date range, then aggregates.

    The embedded listing holds the first `preview_limit` matches in the order
    the transactions arrive (newest first for a store's ledger); the summary
    and per-item breakdown cover every match.
    """
    filtered = ledger.filter_transactions(transactions, item_filter, start_date, end_date)
    logger.debug(f"Report filter matched {len(filtered)} of {len(transactions)} transactions")
    return build_report(
        filtered,
        items=items,
        item_filter=item_filter,
        start_date=start_date,
        end_date=end_date,
        preview_limit=preview_limit,
        generated_at=generated_at,
    )
