"""
Procurement and stock analytics.
"""
from collections import defaultdict
from typing import Dict, Iterable, List


def stock_stats(items: Iterable) -> Dict:
    """Total units on hand, distinct item names (trimmed, case-folded) and the latest update."""
    rows = list(items)
    skus = {(item.item_name or "").strip().lower() for item in rows if (item.item_name or "").strip()}
    stamps = [item.updated_at for item in rows if item.updated_at]
    return {
        "total_units": sum(item.quantity or 0 for item in rows),
        "unique_skus": len(skus),
        "last_updated": max(stamps) if stamps else None,
    }


def top_suppliers(purchases: Iterable, limit: int = 6) -> List[Dict]:
    """Suppliers ranked by total spend (price * quantity)."""
    spend: Dict[str, float] = defaultdict(float)
    for purchase in purchases:
        supplier = (purchase.supplier or "").strip() or "Unknown"
        spend[supplier] += (purchase.price or 0) * (purchase.quantity or 0)
    ranked = sorted(spend.items(), key=lambda kv: kv[1], reverse=True)
    return [{"supplier": name, "total": total} for name, total in ranked[:limit]]


def inventory_valuation(purchases: Iterable, method: str = "FIFO",
                        logistics_per_unit: float = 0) -> Dict:
    """
    Value of purchased stock under FIFO or LIFO ordering.

    Each unit costs its purchase price plus ``logistics_per_unit``. With no
    consumption data every purchased unit is on hand, so the ordering only
    matters for which lots are listed first; totals are the same either way.
    """
    method = (method or "FIFO").upper()
    if method not in ("FIFO", "LIFO"):
        raise ValueError(f"Unknown valuation method: {method}")

    lots = sorted(purchases, key=lambda p: p.created_at or "", reverse=(method == "LIFO"))
    total_units = 0
    total_cost = 0.0
    for lot in lots:
        qty = lot.quantity or 0
        total_units += qty
        total_cost += qty * ((lot.price or 0) + (logistics_per_unit or 0))

    return {
        "method": method,
        "total_units": total_units,
        "total_cost": total_cost,
        "per_unit_cost": total_cost / total_units if total_units else 0.0,
    }


def gross_margin(revenue: float, purchases: Iterable, logistics_per_unit: float = 0) -> Dict:
    """
    margin % = (revenue - cost) / revenue * 100, where cost is every purchase
    at price * quantity plus logistics per unit. 0 when there is no revenue.
    """
    rows = list(purchases)
    units = sum(p.quantity or 0 for p in rows)
    cost = sum((p.price or 0) * (p.quantity or 0) for p in rows) + (logistics_per_unit or 0) * units
    margin = ((revenue - cost) / revenue * 100) if revenue else 0.0
    return {"revenue": revenue, "cost": cost, "margin_percent": margin}


def per_unit_cost(material_cost: float, logistics_cost: float) -> float:
    return (material_cost or 0) + (logistics_cost or 0)
