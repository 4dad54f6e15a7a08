import datetime as dt
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from . import settings


class StockStatus(str, Enum):
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    UNAVAILABLE = "Unavailable"


class Item(BaseModel):
    """A catalog entry. Reference data, never changed during a session."""

    id: str
    name: str
    description: Optional[str] = None
    low_stock_threshold: int = Field(
        default=settings.DEFAULT_LOW_STOCK_THRESHOLD, ge=0, alias="lowStockThreshold"
    )

    class Config:
        populate_by_name = True
        frozen = True


class Transaction(BaseModel):
    """
    A single stock movement against one item.

    `balance` is the quantity on hand right after this movement, as recorded
    when the transaction was created. The ledger never trusts it for the
    current balance; see `ledger.find_balance_drift`.
    """

    id: str
    date: dt.date
    item: Item
    deposit: int = Field(default=0, ge=0)
    withdrawal: int = Field(default=0, ge=0)
    balance: int
    unit: Optional[str] = None
    created_at: dt.datetime = Field(..., alias="createdAt")
    updated_at: dt.datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True


class DailyActivity(BaseModel):
    count: int = Field(default=0, ge=0)
    total_deposits: int = Field(default=0, ge=0, alias="totalDeposits")
    total_withdrawals: int = Field(default=0, ge=0, alias="totalWithdrawals")

    class Config:
        populate_by_name = True


class ReportSummary(BaseModel):
    total_deposits: int = Field(default=0, ge=0, alias="totalDeposits")
    total_withdrawals: int = Field(default=0, ge=0, alias="totalWithdrawals")
    final_balance: int = Field(default=0, alias="finalBalance")
    transaction_count: int = Field(default=0, ge=0, alias="transactionCount")

    class Config:
        populate_by_name = True


class ItemBreakdown(BaseModel):
    deposits: int = Field(default=0, ge=0)
    withdrawals: int = Field(default=0, ge=0)
    transactions: int = Field(default=0, ge=0)


class Report(BaseModel):
    """
    An ephemeral aggregate over a filtered set of transactions.
    Only the first few matches are embedded; the totals cover all of them.
    """

    title: str
    item_filter: str = Field(default=settings.ALL_ITEMS, alias="itemFilter")
    start_date: Optional[dt.date] = Field(default=None, alias="startDate")
    end_date: Optional[dt.date] = Field(default=None, alias="endDate")
    date_range: Optional[str] = Field(default=None, alias="dateRange")
    transactions: list[Transaction] = Field(default_factory=list)
    summary: ReportSummary
    item_summary: dict[str, ItemBreakdown] = Field(
        default_factory=dict, alias="itemSummary"
    )
    generated_at: dt.datetime = Field(..., alias="generatedAt")

    class Config:
        populate_by_name = True


class ItemStock(BaseModel):
    """One row of the inventory summary."""

    item_id: str = Field(..., alias="itemId")
    name: str
    total_quantity: int = Field(..., alias="totalQuantity")
    status: StockStatus

    class Config:
        populate_by_name = True
