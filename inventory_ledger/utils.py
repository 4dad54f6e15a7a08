from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime, str, None]


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def to_date(value: DateLike) -> Optional[date]:
    """
    Normalizes a filter value to a calendar date.
    Empty values mean "no bound" and come back as None. Strings must be
    ISO 'YYYY-MM-DD'; anything else raises ValueError.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        return None
    return date.fromisoformat(value)


def format_display_date(value: date) -> str:
    """'M/D/YYYY', without zero padding."""
    return f"{value.month}/{value.day}/{value.year}"


def format_date_range(start: Optional[date], end: Optional[date]) -> Optional[str]:
    """Builds the caption shown under a report title for the chosen date range."""
    if not start and not end:
        return None

    if start and end:
        if start == end:
            return f"For: {format_display_date(start)}"
        return f"From: {format_display_date(start)} To: {format_display_date(end)}"

    if start:
        return f"From: {format_display_date(start)}"

    return f"Up to: {format_display_date(end)}"
