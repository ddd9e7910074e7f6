from collections import defaultdict
from typing import Dict, Iterable, List, Optional


def filter_expenses(expenses: Iterable, search: Optional[str] = None, category: Optional[str] = None,
                    status: Optional[str] = None, date_from: Optional[str] = None,
                    date_to: Optional[str] = None, sort_by: str = "date",
                    descending: bool = True) -> List:
    """Filter and sort expense rows the way the expense sheet does."""
    needle = (search or "").strip().lower()
    rows = []
    for expense in expenses:
        if needle and needle not in (expense.vendor or "").lower() \
                and needle not in (expense.description or "").lower():
            continue
        if category and expense.category != category:
            continue
        if status and expense.status != status:
            continue
        # ISO dates compare correctly as strings
        if date_from and (expense.date or "") < date_from:
            continue
        if date_to and (expense.date or "")[:10] > date_to:
            continue
        rows.append(expense)

    if sort_by == "amount":
        rows.sort(key=lambda e: e.amount or 0, reverse=descending)
    else:
        rows.sort(key=lambda e: e.date or "", reverse=descending)
    return rows


def summarize_expenses(expenses: Iterable, top: int = 10) -> Dict:
    rows = list(expenses)
    by_category: Dict[str, float] = defaultdict(float)
    for expense in rows:
        by_category[expense.category or "Other"] += expense.amount or 0

    ranked = sorted(by_category.items(), key=lambda kv: kv[1], reverse=True)[:top]
    return {
        "total": sum(e.amount or 0 for e in rows),
        "total_tax": sum(e.tax_amount or 0 for e in rows),
        "approved": sum(e.amount or 0 for e in rows if e.status == "approved"),
        "pending": sum(e.amount or 0 for e in rows if e.status == "pending"),
        "count": len(rows),
        "by_category": dict(ranked),
    }
