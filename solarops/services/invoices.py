"""
Invoice arithmetic: running numbers, totals and amounts in words.

Amounts in words use the Indian numbering system (Crore, Lakh, Thousand,
Hundred), as printed on GST invoices and payment receipts.
"""
import logging
import re
import time
from typing import Any, Dict, Iterable, Mapping, Optional, Union

logger = logging.getLogger(__name__)

_SINGLE = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
_TEENS = ["Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
          "Seventeen", "Eighteen", "Nineteen"]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# (divisor, unit name), largest first
_INDIAN_UNITS = [(10_000_000, "Crore"), (100_000, "Lakh"), (1_000, "Thousand"), (100, "Hundred")]


def _two_digit_words(value: int) -> str:
    if value < 10:
        return _SINGLE[value]
    if value < 20:
        return _TEENS[value - 10]
    words = _TENS[value // 10]
    if value % 10:
        words += f" {_SINGLE[value % 10]}"
    return words


def number_to_words(number: Union[int, float]) -> str:
    """
    Spell out the whole-rupee part of ``number``.

    >>> number_to_words(148000)
    'One Lakh Forty Eight Thousand'
    """
    value = int(number)
    if value == 0:
        return "Zero"
    if value < 0:
        return f"Minus {number_to_words(-value)}"

    parts = []
    for divisor, unit in _INDIAN_UNITS:
        if value >= divisor:
            parts.append(f"{number_to_words(value // divisor)} {unit}")
            value %= divisor
    if value > 0:
        parts.append(_two_digit_words(value))
    return " ".join(parts)


def amount_in_words(amount: float) -> str:
    return f"{number_to_words(amount)} Rupees Only"


def format_currency(amount: Optional[float]) -> str:
    return f"₹{(amount or 0):.2f}"


def next_sequence_number(last_number: Optional[str], prefix: str, digits: int = 6) -> str:
    """
    Number following ``last_number`` in a ``<prefix><zero-padded int>`` series.

    Starts the series at 1 when there is no previous number. Only the digits
    directly after the prefix count, so "IN-000001-A" is followed by "IN-000002".
    An unparsable previous number falls back to the last ``digits`` digits
    of the current millisecond clock, so a new invoice is never blocked.
    """
    if not last_number:
        return f"{prefix}{1:0{digits}d}"

    suffix = last_number[len(prefix):] if last_number.startswith(prefix) else last_number
    match = re.match(r"(\d+)", suffix.strip())
    if not match:
        logger.warning("Cannot parse invoice number %r; falling back to clock value", last_number)
        millis = str(int(time.time() * 1000))
        return f"{prefix}{millis[-digits:]}"
    return f"{prefix}{int(match.group(1)) + 1:0{digits}d}"


def _item_value(item: Any, key: str) -> float:
    if isinstance(item, Mapping):
        value = item.get(key)
    else:
        value = getattr(item, key, None)
    return float(value or 0)


def calculate_invoice_totals(items: Iterable[Any]) -> Dict[str, float]:
    """
    Totals for a list of line items (dicts or objects).

    CGST and SGST rates are percentages applied to rate * quantity.
    """
    total_qty = 0.0
    taxable = 0.0
    cgst = 0.0
    sgst = 0.0
    for item in items:
        qty = _item_value(item, "quantity")
        line_value = _item_value(item, "rate") * qty
        total_qty += qty
        taxable += line_value
        cgst += line_value * _item_value(item, "cgst_rate") / 100
        sgst += line_value * _item_value(item, "sgst_rate") / 100

    return {
        "total_quantity": total_qty,
        "taxable_value": taxable,
        "total_cgst": cgst,
        "total_sgst": sgst,
        "total_amount": taxable + cgst + sgst,
    }
