"""
Expense Endpoints Module

The company expense sheet: CRUD, filtering and a summary by category.
"""
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import reject_nulls, require_choice, require_fields
from solarops.core.constants import EXPENSE_CATEGORIES, EXPENSE_STATUSES, MODULE_FINANCE
from solarops.db.session import get_db
from solarops.models.finance import Expense
from solarops.models.user import User
from solarops.schemas.finance import ExpenseCreate, ExpenseSummary, ExpenseUpdate
from solarops.services.expenses import filter_expenses, summarize_expenses

router = APIRouter(dependencies=[Depends(deps.ModuleGuard(MODULE_FINANCE))])


def _get_expense(db: Session, expense_id: int) -> Expense:
    expense = db.get(Expense, expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.get("", response_model=List[Expense])
def list_expenses(
    search: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    sort_by: str = "date",
    order: str = "desc",
    db: Session = Depends(get_db),
):
    """
    List expenses.

    Args:
        search: Matches vendor or description
        category: Exact category
        status: "pending", "approved" or "rejected"
        date_from / date_to: Inclusive ISO date range
        sort_by: "date" or "amount"
        order: "asc" or "desc"
    """
    if sort_by not in ("date", "amount"):
        raise HTTPException(status_code=400, detail="sort_by must be date or amount")
    rows = db.exec(select(Expense)).all()
    return filter_expenses(
        rows, search=search, category=category, status=status,
        date_from=date_from, date_to=date_to, sort_by=sort_by,
        descending=(order != "asc"),
    )


@router.get("/categories", response_model=List[str])
def list_categories():
    return EXPENSE_CATEGORIES


@router.get("/summary", response_model=ExpenseSummary)
def expense_summary(
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Totals for the period, with the ten largest categories."""
    rows = filter_expenses(db.exec(select(Expense)).all(), date_from=date_from, date_to=date_to)
    return summarize_expenses(rows)


@router.post("", response_model=Expense)
def create_expense(
    expense_in: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Record an expense; created_by is the current user's email.

    Raises:
        HTTPException 400: If date, category or amount is missing, or a value is unknown
    """
    require_fields(expense_in, "date", "category", "amount")
    require_choice(expense_in.category, EXPENSE_CATEGORIES, "category")
    require_choice(expense_in.status, EXPENSE_STATUSES, "status")
    if expense_in.amount <= 0 or (expense_in.tax_amount or 0) < 0:
        raise HTTPException(status_code=400, detail="Amount must be greater than zero")

    expense = Expense(**expense_in.model_dump(), created_by=current_user.email)
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


@router.patch("/{expense_id}", response_model=Expense)
def update_expense(expense_id: int, expense_update: ExpenseUpdate, db: Session = Depends(get_db)):
    expense = _get_expense(db, expense_id)
    update_data = expense_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, Expense)
    require_choice(update_data.get("category"), EXPENSE_CATEGORIES, "category")
    require_choice(update_data.get("status"), EXPENSE_STATUSES, "status")
    if "amount" in update_data and (update_data["amount"] or 0) <= 0:
        raise HTTPException(status_code=400, detail="Amount must be greater than zero")

    for key, value in update_data.items():
        setattr(expense, key, value)
    expense.updated_at = datetime.utcnow().isoformat()
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


@router.delete("/{expense_id}")
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    expense = _get_expense(db, expense_id)
    db.delete(expense)
    db.commit()
    return {"status": "success", "detail": "Expense deleted"}
