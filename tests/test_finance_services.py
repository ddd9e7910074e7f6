from datetime import date, timedelta
from types import SimpleNamespace

from solarops.services import finance


def project(**kwargs):
    defaults = dict(
        proposal_amount=100000, advance_payment=20000, paid_amount=0, balance_amount=80000,
        status="active", start_date=None, created_at="2025-01-01T10:00:00",
    )
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def payment(id, amount, project_id=1, payment_date="2025-02-01", created_at="2025-02-01T09:00:00"):
    return SimpleNamespace(
        id=id, amount=amount, project_id=project_id, payment_mode="UPI",
        payment_date=payment_date, created_at=created_at,
    )


def test_outstanding_balance_subtracts_advance_and_paid():
    assert finance.outstanding_balance(100000, 20000, 30000) == 50000
    assert finance.outstanding_balance(None, None, None) == 0


def test_validate_payment_amount():
    assert finance.validate_payment_amount(0, 1000) is not None
    assert finance.validate_payment_amount(-5, 1000) is not None
    assert finance.validate_payment_amount(1001, 1000) is not None
    assert finance.validate_payment_amount(1000, 1000) is None


def test_refresh_totals_recomputes_from_rows():
    p = project()
    finance.refresh_totals(p, [payment(1, 10000), payment(2, 5000)])
    assert p.paid_amount == 15000
    assert p.balance_amount == 65000


def test_payment_rows_prepend_advance():
    p = project(start_date="2025-01-05")
    rows = finance.payment_rows(p, [payment(1, 10000)])
    assert rows[0]["id"] == "advance"
    assert rows[0]["amount"] == 20000
    assert rows[0]["payment_mode"] == "Cash"
    assert rows[1]["id"] == 1


def test_payment_rows_skip_advance_when_already_recorded():
    p = project(start_date="2025-01-05")
    rows = finance.payment_rows(p, [payment(1, 20000, payment_date="2025-01-05")])
    assert [r["id"] for r in rows] == [1]


def test_payment_rows_without_advance():
    p = project(advance_payment=0)
    assert finance.payment_rows(p, []) == []


def test_expected_this_month_counts_due_and_overdue_active_projects():
    today = date(2025, 6, 15)
    due_this_month = project(start_date=(date(2025, 6, 20) - timedelta(days=45)).isoformat(), balance_amount=1000)
    overdue = project(start_date="2025-01-01", balance_amount=2000)
    not_yet_due = project(start_date="2025-06-01", balance_amount=4000)
    completed = project(start_date="2025-01-01", balance_amount=8000, status="completed")
    no_start = project(start_date=None, balance_amount=16000)

    total = finance.expected_this_month(
        [due_this_month, overdue, not_yet_due, completed, no_start], today, 45
    )
    assert total == 3000


def test_attribute_tax_is_proportional_to_payment():
    payments = [payment(1, 30000, project_id=1), payment(2, 10000, project_id=1), payment(3, 5000, project_id=2)]
    shares = finance.attribute_tax(payments, {1: 4000})
    assert shares[1] == 3000
    assert shares[2] == 1000
    assert shares[3] == 0
