"""
Business-rule validation for new stock movements.

Each check returns a (is_valid, error_message) tuple so callers can decide
how to surface the message.
"""
from typing import Optional, Sequence, Tuple

from . import settings
from .schemas import Item


def validate_transaction_request(
    item: Optional[Item],
    deposit: int,
    withdrawal: int,
    unit: Optional[str],
    units: Sequence[str] = settings.REQUESTING_UNITS,
) -> Tuple[bool, str]:
    """
    Validate the form-level rules for a stock movement.

    Args:
        item: The selected catalog item, or None if nothing matched
        deposit: Units added (Stock In)
        withdrawal: Units removed (Stock Out)
        unit: Requesting unit for the withdrawal
        units: Allowed requesting units

    Returns:
        Tuple of (is_valid, error_message)
    """
    if item is None:
        return False, "Please select an item"

    if deposit < 0 or withdrawal < 0:
        return False, "Stock In and Stock Out cannot be negative"

    if deposit <= 0 and withdrawal <= 0:
        return False, "Please enter either Stock In or Stock Out"

    if withdrawal > 0:
        if not unit:
            return False, "Please select a requesting unit for stock out"
        if unit not in units:
            return False, f"Unknown requesting unit: {unit}"

    return True, ""


def validate_sufficient_stock(
    item: Item, current_balance: int, deposit: int, withdrawal: int
) -> Tuple[bool, str]:
    """
    Validate that a withdrawal does not take the balance below zero.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if current_balance + deposit - withdrawal < 0:
        return False, (
            f"Insufficient stock for '{item.name}'. "
            f"Available: {current_balance + deposit}, Requested: {withdrawal}"
        )

    return True, ""
