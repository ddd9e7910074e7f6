"""
Project money arithmetic.

The balance of a project is always derived, never entered:
proposal_amount - advance_payment - paid_amount. paid_amount is the running
total of the project's payment_history rows.
"""
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from solarops.core.constants import PROJECT_STATUS_ACTIVE
from solarops.services.dates import parse_iso_date


def outstanding_balance(proposal_amount: Optional[float], advance_payment: Optional[float],
                        paid_amount: Optional[float]) -> float:
    return (proposal_amount or 0) - (advance_payment or 0) - (paid_amount or 0)


def max_payment(project) -> float:
    """Largest payment the project can still take."""
    return max(outstanding_balance(project.proposal_amount, project.advance_payment, project.paid_amount), 0)


def validate_payment_amount(amount: Optional[float], balance: float) -> Optional[str]:
    """
    Check a payment against the remaining balance.

    Returns:
        str: Reason the payment is rejected, or None when it may be written
    """
    if amount is None or amount <= 0:
        return "Payment amount must be greater than zero"
    if amount > balance:
        return f"Payment amount exceeds the outstanding balance of {balance:.2f}"
    return None


def refresh_totals(project, payments: Iterable) -> None:
    """Recompute paid_amount and balance_amount on ``project`` from its payment rows."""
    project.paid_amount = sum((p.amount or 0) for p in payments)
    project.balance_amount = outstanding_balance(
        project.proposal_amount, project.advance_payment, project.paid_amount
    )


def payment_rows(project, payments: Sequence) -> List[dict]:
    """
    Payment history as shown to users, oldest first.

    The advance is not stored as a payment row. It is prepended as a synthetic
    row with id "advance" unless a stored row already has the same amount and
    date (older data recorded the advance twice).
    """
    rows = [
        {
            "id": p.id,
            "amount": p.amount,
            "payment_mode": p.payment_mode,
            "payment_date": p.payment_date,
            "is_advance": False,
        }
        for p in sorted(payments, key=lambda p: (p.payment_date or "", p.created_at or ""))
    ]

    advance = project.advance_payment or 0
    if advance > 0:
        advance_date = project.start_date or (project.created_at or "")[:10] or None
        duplicate = any(
            row["amount"] == advance and (row["payment_date"] or "")[:10] == (advance_date or "")[:10]
            for row in rows
        )
        if not duplicate:
            rows.insert(0, {
                "id": "advance",
                "amount": advance,
                "payment_mode": "Cash",
                "payment_date": advance_date,
                "is_advance": True,
            })
    return rows


def collection_due_date(start_date: Optional[str], window_days: int) -> Optional[date]:
    start = parse_iso_date(start_date)
    if start is None:
        return None
    return start + timedelta(days=window_days)


def expected_this_month(projects: Iterable, today: date, window_days: int) -> float:
    """
    Balance expected to come in during the current calendar month.

    An active project is due ``window_days`` after its start date. Its balance
    counts when that due date falls in this month or has already passed.
    """
    total = 0.0
    for project in projects:
        if (project.status or "").lower() != PROJECT_STATUS_ACTIVE:
            continue
        due = collection_due_date(project.start_date, window_days)
        if due is None:
            continue
        in_this_month = due.year == today.year and due.month == today.month
        if in_this_month or due < today:
            total += project.balance_amount or 0
    return total


def attribute_tax(payments: Sequence, project_tax: Dict[int, float]) -> Dict[int, float]:
    """
    Share of each project's tax carried by each payment.

    tax(payment) = project_tax * amount / total payments of that project.
    Projects with no estimation, or no money paid, attribute nothing.

    Args:
        payments: payment_history rows
        project_tax: project_id -> project_tax from estimation_costs

    Returns:
        dict: payment id -> attributed tax
    """
    totals: Dict[int, float] = defaultdict(float)
    for payment in payments:
        totals[payment.project_id] += payment.amount or 0

    attributed = {}
    for payment in payments:
        tax = project_tax.get(payment.project_id, 0) or 0
        total = totals[payment.project_id]
        if tax and total:
            attributed[payment.id] = tax * (payment.amount or 0) / total
        else:
            attributed[payment.id] = 0.0
    return attributed
