"""
Finance Endpoints Module

Outstanding balances, the monthly collection forecast and the payments ledger.
Every endpoint needs the "finance" module and the finance (or an admin) role.
"""
from typing import List, Optional
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.core.config import settings
from solarops.core.constants import (
    MODULE_FINANCE,
    PROJECT_STATUS_ACTIVE,
    PROJECT_STATUS_COMPLETED,
    PROJECT_STATUS_DELETED,
)
from solarops.db.session import get_db
from solarops.models.finance import EstimationCost
from solarops.models.project import PaymentHistory, Project
from solarops.schemas.access import AccessProfile
from solarops.schemas.finance import FinanceSummary, LedgerRow
from solarops.services import access, finance

router = APIRouter(dependencies=[Depends(deps.require_finance)])

finance_module = deps.ModuleGuard(MODULE_FINANCE)

STATUS_FILTERS = {
    "all": None,
    "active": PROJECT_STATUS_ACTIVE,
    "completed": PROJECT_STATUS_COMPLETED,
}


@router.get("/summary", response_model=FinanceSummary)
def finance_summary(
    status: str = "all",
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(finance_module),
):
    """
    Outstanding money over the selected projects.

    expected_this_month adds up the balance of active projects whose
    collection date (start date + COLLECTION_WINDOW_DAYS) falls in the current
    month or has already passed.

    Args:
        status: "all", "active" or "completed"
        search: Matches project name, customer name or current stage

    Raises:
        HTTPException 400: If the status filter is unknown
    """
    if status not in STATUS_FILTERS:
        raise HTTPException(status_code=400, detail="Status filter must be all, active or completed")

    statement = select(Project).where(Project.status != PROJECT_STATUS_DELETED)
    if STATUS_FILTERS[status]:
        statement = statement.where(Project.status == STATUS_FILTERS[status])
    projects = [
        p for p in db.exec(statement.order_by(Project.created_at.desc())).all()
        if access.state_visible(profile, p.state)
    ]

    if search:
        needle = search.strip().lower()
        projects = [
            p for p in projects
            if any(needle in (value or "").lower() for value in (p.name, p.customer_name, p.current_stage))
        ]

    return FinanceSummary(
        total_outstanding=sum(p.balance_amount or 0 for p in projects),
        expected_this_month=finance.expected_this_month(
            projects, date.today(), settings.COLLECTION_WINDOW_DAYS
        ),
        project_count=len(projects),
        projects=projects,
    )


def _payment_visible(profile: AccessProfile, project: Optional[Project]) -> bool:
    """Region-restricted users only see payments of live projects in their regions."""
    if profile.is_admin or not profile.regions:
        return True
    if project is None or project.status == PROJECT_STATUS_DELETED:
        return False
    return access.state_visible(profile, project.state)


@router.get("/payments", response_model=List[LedgerRow])
def payments_ledger(
    project_id: Optional[int] = None,
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(finance_module),
):
    """
    Every recorded payment, newest first, with the project name and the share
    of the project's tax the payment carries.

    Tax is spread over a project's payments in proportion to their amounts,
    using project_tax from the project's estimation cost.
    """
    statement = select(PaymentHistory).order_by(PaymentHistory.payment_date.desc(), PaymentHistory.id.desc())
    if project_id is not None:
        statement = statement.where(PaymentHistory.project_id == project_id)
    payments = db.exec(statement).all()

    projects = {p.id: p for p in db.exec(select(Project)).all()}
    payments = [p for p in payments if _payment_visible(profile, projects.get(p.project_id))]

    project_tax = {}
    for estimation in db.exec(select(EstimationCost)).all():
        project_tax[estimation.project_id] = project_tax.get(estimation.project_id, 0) + (estimation.project_tax or 0)

    # Shares are computed over all of a project's payments, not just the filtered page
    all_payments = db.exec(select(PaymentHistory)).all()
    attributed = finance.attribute_tax(all_payments, project_tax)

    return [
        LedgerRow(
            id=p.id,
            project_id=p.project_id,
            project_name=projects[p.project_id].name if p.project_id in projects else "Unknown Project",
            amount=p.amount,
            payment_mode=p.payment_mode,
            payment_date=p.payment_date,
            attributed_tax=attributed.get(p.id, 0.0),
        )
        for p in payments
    ]
