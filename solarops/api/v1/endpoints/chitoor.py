"""
Chitoor Project Endpoints Module

Endpoints for the Chitoor subsidy projects. The router needs the "projects"
module and access to the Chitoor region.

Chitoor payments are stored in chitoor_payment_history only; amount_received
on the project is kept in step with those rows.
"""
import logging
from typing import Any, List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import reject_nulls, require_fields
from solarops.core.constants import (
    CHITOOR,
    CHITOOR_CAPACITY_COSTS,
    CHITOOR_PROJECT_STAGES,
    MODULE_PROJECTS,
)
from solarops.db.session import get_db
from solarops.models.chitoor import ChitoorPayment, ChitoorProject, ChitoorProjectRead
from solarops.models.user import User
from solarops.schemas.chitoor import (
    ChitoorMandal,
    ChitoorPaymentView,
    ChitoorProjectCreate,
    ChitoorProjectUpdate,
    ChitoorStats,
    ChitoorStatusChange,
)
from solarops.schemas.project import PaymentCreate
from solarops.services import locations, stages
from solarops.services.reports import to_number

logger = logging.getLogger(__name__)

router = APIRouter(
    dependencies=[Depends(deps.ModuleGuard(MODULE_PROJECTS)), Depends(deps.RegionGuard([CHITOOR]))]
)


def default_cost(capacity: Optional[str]) -> Optional[float]:
    """Standard project cost for a 2 kW or 3 kW plant; None for other sizes."""
    if capacity is None:
        return None
    key = str(capacity).strip().lower().replace("kw", "").strip()
    return CHITOOR_CAPACITY_COSTS.get(key)


def chitoor_balance(project: ChitoorProject) -> float:
    return max((project.project_cost or 0) - (project.amount_received or 0), 0)


def _get_project(db: Session, project_id: int) -> ChitoorProject:
    project = db.get(ChitoorProject, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Chitoor project not found")
    return project


def _canonical_status(value: str) -> str:
    idx = stages.stage_index(CHITOOR_PROJECT_STAGES, value)
    if idx < 0:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown status '{value}'. Expected one of: {', '.join(CHITOOR_PROJECT_STAGES)}"
        )
    return CHITOOR_PROJECT_STAGES[idx]


@router.get("", response_model=List[ChitoorProjectRead])
def list_chitoor_projects(
    status: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    List Chitoor projects, newest first.

    Args:
        status: Exact project_status filter
        search: Matches customer name, mobile number or service number
    """
    statement = select(ChitoorProject).order_by(ChitoorProject.created_at.desc())
    if status:
        statement = statement.where(ChitoorProject.project_status == status)
    rows = db.exec(statement).all()
    if search:
        needle = search.strip().lower()
        rows = [
            r for r in rows
            if any(needle in (value or "").lower()
                   for value in (r.customer_name, r.mobile_number, r.service_number))
        ]
    return rows


@router.get("/stats", response_model=ChitoorStats)
def chitoor_stats(db: Session = Depends(get_db)):
    """Header counts for the Chitoor screen; only "Completed" counts as completed."""
    rows = db.exec(select(ChitoorProject)).all()
    completed = sum(1 for r in rows if (r.project_status or "").strip().lower() == "completed")
    return ChitoorStats(
        total=len(rows),
        completed=completed,
        pending=len(rows) - completed,
        total_revenue=sum(r.project_cost or 0 for r in rows),
        total_capacity=sum(to_number(r.capacity) for r in rows),
    )


@router.get("/locations", response_model=List[ChitoorMandal])
def chitoor_locations(search: Optional[str] = None):
    """Mandals with their villages for the address picker on the project form."""
    return [
        ChitoorMandal(mandal=mandal, villages=villages)
        for mandal, villages in locations.find_mandals(search).items()
    ]


@router.post("", response_model=ChitoorProjectRead)
def create_chitoor_project(
    project_in: ChitoorProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Create a Chitoor project.

    When no cost is given, a 2 kW plant costs 148000 and a 3 kW plant 205000.
    The status starts at "Pending" unless given.

    Raises:
        HTTPException 400: If the customer name is missing or the status is unknown
    """
    require_fields(project_in, "customer_name")
    data = project_in.model_dump()
    if data["project_cost"] is None:
        data["project_cost"] = default_cost(data["capacity"])
    data["project_status"] = _canonical_status(data["project_status"] or CHITOOR_PROJECT_STAGES[0])
    if (data["amount_received"] or 0) < 0:
        raise HTTPException(status_code=400, detail="Amount received cannot be negative")

    project = ChitoorProject(**data)
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("%s created Chitoor project %s", current_user.email, project.id)
    return project


@router.get("/{project_id}", response_model=ChitoorProjectRead)
def read_chitoor_project(project_id: int, db: Session = Depends(get_db)):
    return _get_project(db, project_id)


@router.patch("/{project_id}", response_model=ChitoorProjectRead)
def update_chitoor_project(
    project_id: int,
    project_update: ChitoorProjectUpdate,
    db: Session = Depends(get_db),
):
    """
    Update a Chitoor project. amount_received is driven by payments and is not
    editable here. Changing the capacity without a cost re-applies the default cost.
    """
    project = _get_project(db, project_id)
    update_data = project_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, ChitoorProject)
    if "project_status" in update_data:
        update_data["project_status"] = _canonical_status(update_data["project_status"])
    if "capacity" in update_data and update_data.get("project_cost") is None:
        cost = default_cost(update_data["capacity"])
        if cost is not None:
            update_data["project_cost"] = cost

    for key, value in update_data.items():
        setattr(project, key, value)
    project.updated_at = datetime.utcnow().isoformat()

    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@router.delete("/{project_id}")
def delete_chitoor_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """Delete a Chitoor project together with its payments."""
    project = _get_project(db, project_id)
    for payment in db.exec(select(ChitoorPayment).where(ChitoorPayment.chitoor_project_id == project.id)).all():
        db.delete(payment)
    db.delete(project)
    db.commit()
    logger.info("%s deleted Chitoor project %s", current_user.email, project_id)
    return {"status": "success", "detail": "Chitoor project deleted"}


def _status_change(project: ChitoorProject) -> ChitoorStatusChange:
    return ChitoorStatusChange(
        **project.model_dump(),
        progress=stages.stage_progress(CHITOOR_PROJECT_STAGES, project.project_status),
        can_advance=stages.can_advance(CHITOOR_PROJECT_STAGES, project.project_status),
        can_regress=stages.can_regress(CHITOOR_PROJECT_STAGES, project.project_status),
    )


def _move_status(db: Session, project: ChitoorProject, target: Optional[str]) -> ChitoorStatusChange:
    if target is None:
        raise HTTPException(
            status_code=400,
            detail=f"Status cannot move from '{project.project_status}'"
        )
    project.project_status = target
    project.updated_at = datetime.utcnow().isoformat()
    db.add(project)
    db.commit()
    db.refresh(project)
    return _status_change(project)


@router.post("/{project_id}/advance-status", response_model=ChitoorStatusChange)
def advance_status(project_id: int, db: Session = Depends(get_db)):
    project = _get_project(db, project_id)
    return _move_status(db, project, stages.next_stage(CHITOOR_PROJECT_STAGES, project.project_status))


@router.post("/{project_id}/regress-status", response_model=ChitoorStatusChange)
def regress_status(project_id: int, db: Session = Depends(get_db)):
    project = _get_project(db, project_id)
    return _move_status(db, project, stages.previous_stage(CHITOOR_PROJECT_STAGES, project.project_status))


def _payment_view(db: Session, project: ChitoorProject) -> ChitoorPaymentView:
    payments = db.exec(
        select(ChitoorPayment)
        .where(ChitoorPayment.chitoor_project_id == project.id)
        .order_by(ChitoorPayment.payment_date, ChitoorPayment.created_at)
    ).all()
    rows = [
        {
            "id": p.id,
            "amount": p.amount,
            "payment_mode": p.payment_mode,
            "payment_date": p.payment_date,
        }
        for p in payments
    ]
    # Money recorded on the form before any payment row existed
    if not rows and (project.amount_received or 0) > 0:
        rows.append({
            "id": "initial",
            "amount": project.amount_received,
            "payment_mode": None,
            "payment_date": project.date_of_order,
            "is_initial": True,
        })
    return ChitoorPaymentView(
        chitoor_project_id=project.id,
        project_cost=project.project_cost or 0,
        amount_received=project.amount_received or 0,
        balance=chitoor_balance(project),
        payments=rows,
    )


@router.get("/{project_id}/payments", response_model=ChitoorPaymentView)
def list_chitoor_payments(project_id: int, db: Session = Depends(get_db)):
    return _payment_view(db, _get_project(db, project_id))


@router.post("/{project_id}/payments", response_model=ChitoorPaymentView)
def add_chitoor_payment(
    project_id: int,
    payment_in: PaymentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Record a payment and add it to amount_received.

    Raises:
        HTTPException 400: If the date is missing, or the amount is not positive
            or exceeds the remaining balance
    """
    project = _get_project(db, project_id)
    require_fields(payment_in, "amount", "payment_date")
    if payment_in.amount <= 0:
        raise HTTPException(status_code=400, detail="Payment amount must be greater than zero")
    balance = chitoor_balance(project)
    if payment_in.amount > balance:
        raise HTTPException(
            status_code=400,
            detail=f"Payment amount exceeds the outstanding balance of {balance:.2f}"
        )

    db.add(ChitoorPayment(chitoor_project_id=project.id, **payment_in.model_dump()))
    project.amount_received = (project.amount_received or 0) + payment_in.amount
    project.updated_at = datetime.utcnow().isoformat()
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("%s recorded Chitoor payment of %s on %s", current_user.email, payment_in.amount, project.id)
    return _payment_view(db, project)


@router.delete("/{project_id}/payments/{payment_id}", response_model=ChitoorPaymentView)
def delete_chitoor_payment(
    project_id: int,
    payment_id: int,
    db: Session = Depends(get_db),
) -> Any:
    """Delete a payment and take it off amount_received (never below zero)."""
    project = _get_project(db, project_id)
    payment = db.get(ChitoorPayment, payment_id)
    if not payment or payment.chitoor_project_id != project.id:
        raise HTTPException(status_code=404, detail="Payment not found")

    project.amount_received = max((project.amount_received or 0) - (payment.amount or 0), 0)
    project.updated_at = datetime.utcnow().isoformat()
    db.delete(payment)
    db.add(project)
    db.commit()
    db.refresh(project)
    return _payment_view(db, project)
