from types import SimpleNamespace

import pytest

from solarops.services import expenses, procurement


def purchase(supplier, qty, price, created_at):
    return SimpleNamespace(supplier=supplier, quantity=qty, price=price, created_at=created_at)


PURCHASES = [
    purchase("Waaree", 10, 12000, "2025-01-01"),
    purchase("Adani", 5, 13000, "2025-02-01"),
    purchase("Waaree", 2, 11000, "2025-03-01"),
]


def test_top_suppliers_ranked_by_spend():
    ranked = procurement.top_suppliers(PURCHASES)
    assert ranked[0] == {"supplier": "Waaree", "total": 142000}
    assert ranked[1] == {"supplier": "Adani", "total": 65000}


def test_valuation_adds_logistics_per_unit():
    result = procurement.inventory_valuation(PURCHASES, "LIFO", logistics_per_unit=100)
    assert result["total_units"] == 17
    assert result["total_cost"] == 142000 + 65000 + 17 * 100
    assert result["per_unit_cost"] == pytest.approx(result["total_cost"] / 17)


def test_valuation_rejects_unknown_method():
    with pytest.raises(ValueError):
        procurement.inventory_valuation(PURCHASES, "AVG")


def test_gross_margin():
    result = procurement.gross_margin(414000, PURCHASES)
    assert result["cost"] == 207000
    assert result["margin_percent"] == pytest.approx(50.0)
    assert procurement.gross_margin(0, PURCHASES)["margin_percent"] == 0


def test_stock_stats_counts_distinct_names():
    items = [
        SimpleNamespace(item_name="Panel 540W", quantity=10, updated_at="2025-01-02"),
        SimpleNamespace(item_name=" panel 540w ", quantity=5, updated_at="2025-03-02"),
        SimpleNamespace(item_name="Inverter", quantity=1, updated_at=None),
    ]
    stats = procurement.stock_stats(items)
    assert stats == {"total_units": 16, "unique_skus": 2, "last_updated": "2025-03-02"}


def expense(amount, category="Utilities", status="pending", date="2025-05-01", vendor="TSSPDCL", tax=0):
    return SimpleNamespace(amount=amount, category=category, status=status, date=date,
                           vendor=vendor, description=None, tax_amount=tax)


def test_expense_summary_and_filters():
    rows = [
        expense(500, tax=90),
        expense(1500, category="Travel & Transportation", status="approved", date="2025-05-10", vendor="Ola"),
        expense(200, status="rejected", date="2025-06-01"),
    ]
    summary = expenses.summarize_expenses(rows)
    assert summary["total"] == 2200
    assert summary["total_tax"] == 90
    assert summary["approved"] == 1500
    assert summary["pending"] == 500
    assert list(summary["by_category"]) == ["Travel & Transportation", "Utilities"]

    may = expenses.filter_expenses(rows, date_from="2025-05-01", date_to="2025-05-31", sort_by="amount")
    assert [e.amount for e in may] == [1500, 500]
    assert [e.amount for e in expenses.filter_expenses(rows, search="ola")] == [1500]


def test_per_unit_cost_adds_freight():
    assert procurement.per_unit_cost(12000, 350) == 12350
    assert procurement.per_unit_cost(None, 0) == 0
