"""Normalization helpers for dates, prices and file names."""
import logging
import math
import re
from datetime import date, datetime
from typing import Optional

logger = logging.getLogger(__name__)

# Leading float literal, as JavaScript's parseFloat reads it
FLOAT_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

INVALID_DATE = "invalid-date"


def normalize_price(price: str | None) -> float:
    """Convert a price string like '12.50€' to a float.

    Returns NaN when no number can be read.
    """
    if not price:
        return math.nan
    cleaned = price.replace("€", "", 1).strip()
    match = FLOAT_PREFIX.match(cleaned)
    if not match:
        logger.debug(f"Unparseable amount: {price!r}")
        return math.nan
    return float(match.group())


def to_epoch(date_str: str | None) -> Optional[datetime]:
    """Convert 'DD/MM/YYYY' to a datetime at local noon.

    Noon keeps the calendar day stable across timezone and DST shifts.
    Returns None when the text is not a valid date.
    """
    if not date_str:
        return None
    parts = date_str.strip().split("/")
    if len(parts) < 3:
        logger.debug(f"Unparseable date: {date_str!r}")
        return None
    try:
        day, month, year = (int(part) for part in parts[:3])
        return datetime(year, month, day, 12, 0, 0)
    except ValueError:
        logger.debug(f"Invalid date: {date_str!r}")
        return None


def extract_string_date(value: date | None) -> str:
    """Convert a date to 'YYYY-MM-DD' with zero-padded month and day."""
    if value is None:
        return INVALID_DATE
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def format_amount(amount: float) -> str:
    """Render an amount with exactly two decimals."""
    if math.isnan(amount):
        return "NaN"
    return f"{amount:.2f}"


def build_filename(
    bill_date: date | None,
    amount: float,
    vendor: str,
    vendor_ref: str | None = None,
    currency: str = "EUR",
) -> str:
    """Build '{YYYY-MM-DD}_{vendor}_{amount}EUR[_{vendor_ref}].pdf'."""
    suffix = f"_{vendor_ref}" if vendor_ref else ""
    return f"{extract_string_date(bill_date)}_{vendor}_{format_amount(amount)}{currency}{suffix}.pdf"
