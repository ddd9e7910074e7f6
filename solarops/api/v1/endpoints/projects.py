"""
Project Endpoints Module

This module provides the endpoints behind the Telangana / Andhra Pradesh
projects screen: CRUD, soft delete, stage moves, and the payment history of
each project.

Access rules:
- Every endpoint needs the "projects" module.
- Non-admins with assigned regions only see projects located in those regions.
- Editing or deleting a project needs the editor capability (editor/admin
  role, or edit access to the project's region).
"""
import logging
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.v1.endpoints.catalog import describe_assignment
from solarops.api.validation import reject_nulls, require_choice, require_fields
from solarops.core.config import settings
from solarops.core.constants import (
    MODULE_PROJECTS,
    PROJECT_STAGES,
    PROJECT_STATUS_ACTIVE,
    PROJECT_STATUS_COMPLETED,
    PROJECT_STATUS_DELETED,
    PROJECT_TYPES,
    PAYMENT_MODES,
)
from solarops.db.session import get_db
from solarops.models.catalog import CustomerModuleAssignment
from solarops.models.project import PaymentHistory, Project, ProjectRead
from solarops.models.user import User
from solarops.schemas.access import AccessProfile
from solarops.schemas.operations import ModuleAssignmentRead
from solarops.schemas.project import (
    CustomerSummary,
    PaymentCreate,
    PaymentHistoryView,
    ProjectCreate,
    ProjectUpdate,
    Receipt,
    StageChange,
)
from solarops.services import access, finance, stages
from solarops.services.invoices import amount_in_words, format_currency

logger = logging.getLogger(__name__)

router = APIRouter()

projects_module = deps.ModuleGuard(MODULE_PROJECTS)


def get_visible_project(db: Session, project_id: int, profile: AccessProfile) -> Project:
    """
    Load a project the caller is allowed to see.

    Raises:
        HTTPException 404: If the project doesn't exist or was soft-deleted
        HTTPException 403: If the project's state is outside the caller's regions
    """
    project = db.get(Project, project_id)
    if not project or project.status == PROJECT_STATUS_DELETED:
        raise HTTPException(status_code=404, detail="Project not found")
    if not access.state_visible(profile, project.state):
        raise HTTPException(status_code=403, detail="Not authorized for this region")
    return project


def get_editable_project(db: Session, project_id: int, user: User, profile: AccessProfile) -> Project:
    project = get_visible_project(db, project_id, profile)
    if not access.can_edit_state(user, profile, project.state):
        raise HTTPException(status_code=403, detail="You do not have edit access to this project")
    return project


def _stage_change(project: Project) -> StageChange:
    return StageChange(
        **project.model_dump(),
        progress=stages.stage_progress(PROJECT_STAGES, project.current_stage),
        can_advance=stages.can_advance(PROJECT_STAGES, project.current_stage),
        can_regress=stages.can_regress(PROJECT_STAGES, project.current_stage),
    )


def _matches_filters(project: Project, search: Optional[str], filters: List[str]) -> bool:
    values = {k: ("" if v is None else str(v)).lower() for k, v in project.model_dump().items()}
    if search:
        needle = search.strip().lower()
        if not any(needle in value for value in values.values()):
            return False
    for item in filters:
        field, _, wanted = item.partition(":")
        if field not in values:
            raise HTTPException(status_code=400, detail=f"Unknown filter field '{field}'")
        if wanted.strip().lower() not in values[field]:
            return False
    return True


@router.get("", response_model=List[ProjectRead])
def list_projects(
    state: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    filters: List[str] = Query(default=[], alias="filter"),
    skip: int = 0,
    limit: int = 500,
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(projects_module),
):
    """
    List projects, newest first. Soft-deleted projects never appear.

    Args:
        state: Case-insensitive substring match on the state ("Telangana", "tg" is expanded)
        status: Exact status, e.g. "active"
        search: Keyword matched against every column
        filters: Repeatable "field:value" substring filters, e.g. ?filter=customer_name:rao
        skip: Number of records to skip (for pagination)
        limit: Maximum number of records to return
    """
    statement = select(Project).where(Project.status != PROJECT_STATUS_DELETED)
    if state:
        statement = statement.where(Project.state.ilike(f"%{access.normalize_state(state)}%"))
    if status:
        statement = statement.where(Project.status == status)
    statement = statement.order_by(Project.created_at.desc())

    projects = [
        p for p in db.exec(statement).all()
        if access.state_visible(profile, p.state) and _matches_filters(p, search, filters)
    ]
    return projects[skip:skip + limit]


@router.get("/customers", response_model=List[CustomerSummary])
def list_customers(
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(deps.get_access_profile),
):
    """
    Distinct customers of active or finished projects, used when raising
    service tickets. The first project seen for a name supplies the contact details.
    """
    rows = db.exec(
        select(Project)
        .where(Project.status.in_([PROJECT_STATUS_ACTIVE, "finished", PROJECT_STATUS_COMPLETED]))
        .order_by(Project.customer_name)
    ).all()
    seen = {}
    for project in rows:
        if not access.state_visible(profile, project.state):
            continue
        if project.customer_name and project.customer_name not in seen:
            seen[project.customer_name] = CustomerSummary(
                customer_name=project.customer_name,
                email=project.email,
                phone=project.phone,
                address=project.address,
            )
    return list(seen.values())


@router.post("", response_model=ProjectRead)
def create_project(
    project_in: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    profile: AccessProfile = Depends(projects_module),
):
    """
    Create a project at the first pipeline stage.

    New projects start "active" with nothing paid beyond the advance; the
    balance is computed from the proposal and the advance.

    Raises:
        HTTPException 400: If name, customer or proposal amount is missing
        HTTPException 403: If the state is outside the caller's regions
    """
    require_fields(project_in, "name", "customer_name", "proposal_amount")
    require_choice(project_in.project_type, PROJECT_TYPES, "project type")
    require_choice(project_in.payment_mode, PAYMENT_MODES, "payment mode")
    if project_in.proposal_amount < 0 or project_in.advance_payment < 0:
        raise HTTPException(status_code=400, detail="Amounts cannot be negative")

    data = project_in.model_dump()
    data["state"] = access.normalize_state(data["state"])
    if not access.state_visible(profile, data["state"]):
        raise HTTPException(status_code=403, detail="Not authorized for this region")

    project = Project(**data)
    project.status = PROJECT_STATUS_ACTIVE
    project.current_stage = PROJECT_STAGES[0]
    project.paid_amount = 0
    project.start_date = project.start_date or datetime.utcnow().date().isoformat()
    finance.refresh_totals(project, [])

    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("%s created project %s for %s", current_user.email, project.id, project.customer_name)
    return project


@router.get("/{project_id}", response_model=ProjectRead)
def read_project(
    project_id: int,
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(projects_module),
):
    return get_visible_project(db, project_id, profile)


@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    project_update: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    profile: AccessProfile = Depends(projects_module),
):
    """
    Update a project. paid_amount and balance_amount are derived and cannot be
    set directly.

    Raises:
        HTTPException 404: If the project doesn't exist
        HTTPException 403: If the caller lacks edit access
        HTTPException 400: If a stage or choice value is unknown
    """
    project = get_editable_project(db, project_id, current_user, profile)

    update_data = project_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, Project)
    if "state" in update_data:
        update_data["state"] = access.normalize_state(update_data["state"])
        # Moving a project needs edit access to the destination too
        if not access.can_edit_state(current_user, profile, update_data["state"]):
            raise HTTPException(status_code=403, detail="You do not have edit access to this region")
    if "current_stage" in update_data:
        idx = stages.stage_index(PROJECT_STAGES, update_data["current_stage"])
        if idx < 0:
            raise HTTPException(status_code=400, detail="Unknown project stage")
        update_data["current_stage"] = PROJECT_STAGES[idx]
    require_choice(update_data.get("project_type"), PROJECT_TYPES, "project type")
    require_choice(update_data.get("payment_mode"), PAYMENT_MODES, "payment mode")

    for key, value in update_data.items():
        setattr(project, key, value)

    payments = db.exec(select(PaymentHistory).where(PaymentHistory.project_id == project.id)).all()
    finance.refresh_totals(project, payments)
    project.updated_at = datetime.utcnow().isoformat()

    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@router.delete("/{project_id}")
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    profile: AccessProfile = Depends(projects_module),
):
    """
    Soft-delete a project: its status becomes "deleted" and it disappears from
    every list and report. Payments are kept.
    """
    project = get_editable_project(db, project_id, current_user, profile)
    project.status = PROJECT_STATUS_DELETED
    project.updated_at = datetime.utcnow().isoformat()
    db.add(project)
    db.commit()
    logger.info("%s deleted project %s", current_user.email, project_id)
    return {"status": "success", "detail": "Project deleted"}


@router.post("/{project_id}/toggle-status", response_model=ProjectRead)
def toggle_project_status(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    profile: AccessProfile = Depends(projects_module),
):
    """Flip a project between "active" and "completed"."""
    project = get_visible_project(db, project_id, profile)
    if project.status == PROJECT_STATUS_COMPLETED:
        project.status = PROJECT_STATUS_ACTIVE
    else:
        project.status = PROJECT_STATUS_COMPLETED
    project.updated_at = datetime.utcnow().isoformat()
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def _move_stage(db: Session, project: Project, target: Optional[str], direction: str) -> StageChange:
    if target is None:
        raise HTTPException(
            status_code=400,
            detail=f"Project cannot move to the {direction} stage from '{project.current_stage}'"
        )
    project.current_stage = target
    project.updated_at = datetime.utcnow().isoformat()
    db.add(project)
    db.commit()
    db.refresh(project)
    return _stage_change(project)


@router.post("/{project_id}/advance-stage", response_model=StageChange)
def advance_stage(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    profile: AccessProfile = Depends(projects_module),
):
    """
    Move the project to the next stage.

    Raises:
        HTTPException 400: At the last stage, or when the current stage is unknown
    """
    project = get_visible_project(db, project_id, profile)
    return _move_stage(db, project, stages.next_stage(PROJECT_STAGES, project.current_stage), "next")


@router.post("/{project_id}/regress-stage", response_model=StageChange)
def regress_stage(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    profile: AccessProfile = Depends(projects_module),
):
    """
    Move the project back one stage.

    Raises:
        HTTPException 400: At the first stage, or when the current stage is unknown
    """
    project = get_visible_project(db, project_id, profile)
    return _move_stage(db, project, stages.previous_stage(PROJECT_STAGES, project.current_stage), "previous")


@router.get("/{project_id}/stage", response_model=StageChange)
def read_stage(
    project_id: int,
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(projects_module),
):
    return _stage_change(get_visible_project(db, project_id, profile))


def _payments_of(db: Session, project_id: int) -> List[PaymentHistory]:
    return db.exec(
        select(PaymentHistory)
        .where(PaymentHistory.project_id == project_id)
        .order_by(PaymentHistory.created_at)
    ).all()


def _history_view(project: Project, payments: List[PaymentHistory]) -> PaymentHistoryView:
    return PaymentHistoryView(
        project_id=project.id,
        proposal_amount=project.proposal_amount or 0,
        advance_payment=project.advance_payment or 0,
        paid_amount=project.paid_amount or 0,
        balance_amount=project.balance_amount or 0,
        payments=finance.payment_rows(project, payments),
    )


@router.get("/{project_id}/payments", response_model=PaymentHistoryView)
def list_payments(
    project_id: int,
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(projects_module),
):
    """
    Payment history of a project, oldest first, with the advance payment as
    the first row.
    """
    project = get_visible_project(db, project_id, profile)
    return _history_view(project, _payments_of(db, project.id))


@router.post("/{project_id}/payments", response_model=PaymentHistoryView)
def add_payment(
    project_id: int,
    payment_in: PaymentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    profile: AccessProfile = Depends(projects_module),
):
    """
    Record a payment and update the project's paid amount and balance.

    The payment must be positive and no larger than the outstanding balance;
    otherwise nothing is written.

    Raises:
        HTTPException 400: If a field is missing or the amount is out of range
    """
    project = get_visible_project(db, project_id, profile)
    require_fields(payment_in, "amount", "payment_date", "payment_mode")

    payments = _payments_of(db, project.id)
    finance.refresh_totals(project, payments)
    problem = finance.validate_payment_amount(payment_in.amount, finance.max_payment(project))
    if problem:
        logger.info("Rejected payment of %s on project %s: %s", payment_in.amount, project.id, problem)
        raise HTTPException(status_code=400, detail=problem)

    payment = PaymentHistory(project_id=project.id, **payment_in.model_dump())
    db.add(payment)
    payments.append(payment)
    finance.refresh_totals(project, payments)
    project.updated_at = datetime.utcnow().isoformat()
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("%s recorded payment of %s on project %s", current_user.email, payment.amount, project.id)
    return _history_view(project, _payments_of(db, project.id))


@router.delete("/{project_id}/payments/{payment_id}", response_model=PaymentHistoryView)
def delete_payment(
    project_id: int,
    payment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    profile: AccessProfile = Depends(projects_module),
):
    """
    Delete a payment and revert the project's paid amount.

    Raises:
        HTTPException 400: For the advance payment row, which cannot be deleted
        HTTPException 404: If the payment doesn't belong to this project
    """
    project = get_visible_project(db, project_id, profile)
    if payment_id == "advance":
        raise HTTPException(status_code=400, detail="The advance payment cannot be deleted")
    if not payment_id.isdigit():
        raise HTTPException(status_code=404, detail="Payment not found")

    payment = db.get(PaymentHistory, int(payment_id))
    if not payment or payment.project_id != project.id:
        raise HTTPException(status_code=404, detail="Payment not found")

    db.delete(payment)
    db.flush()
    finance.refresh_totals(project, _payments_of(db, project.id))
    project.updated_at = datetime.utcnow().isoformat()
    db.add(project)
    db.commit()
    db.refresh(project)
    return _history_view(project, _payments_of(db, project.id))


@router.get("/{project_id}/payments/{payment_id}/receipt", response_model=Receipt)
def payment_receipt(
    project_id: int,
    payment_id: str,
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(projects_module),
):
    """
    Data for a payment receipt. Use "advance" as payment_id for the advance;
    the advance is always received in cash.
    """
    project = get_visible_project(db, project_id, profile)
    rows = finance.payment_rows(project, _payments_of(db, project.id))
    row = next((r for r in rows if str(r["id"]) == payment_id), None)
    if row is None:
        raise HTTPException(status_code=404, detail="Payment not found")

    return Receipt(
        company_name=settings.COMPANY_NAME,
        company_address=settings.COMPANY_ADDRESS,
        company_gstin=settings.COMPANY_GSTIN,
        receipt_date=row["payment_date"],
        amount=row["amount"],
        amount_in_words=amount_in_words(row["amount"]),
        formatted_amount=format_currency(row["amount"]),
        received_from=project.customer_name,
        payment_mode="Cash" if row["is_advance"] else row["payment_mode"],
        place_of_supply=project.state,
        address=project.address,
        project_name=project.name,
    )


@router.get("/{project_id}/modules", response_model=List[ModuleAssignmentRead])
def project_modules(
    project_id: int,
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(projects_module),
):
    """Panels and inverter assigned to the project's customer, with plant size in kWh."""
    project = get_visible_project(db, project_id, profile)
    assignments = db.exec(
        select(CustomerModuleAssignment).where(
            CustomerModuleAssignment.customer_name == project.customer_name
        )
    ).all()

    return [describe_assignment(db, assignment) for assignment in assignments]
