"""
Project Assignment Endpoints Module

Admin screen that grants people regions and modules. Assignments are keyed by
email: posting an assignment for an email that already has one replaces it.
"""
import logging
from typing import Any, List
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import require_fields
from solarops.core.constants import MODULE_KEYS, REGION_ACCESS_LEVELS, REGIONS
from solarops.db.session import get_db
from solarops.models.assignment import ProjectAssignment
from solarops.models.user import User
from solarops.schemas.access import AssignmentStats, AssignmentUpsert

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate(assignment_in: AssignmentUpsert) -> None:
    require_fields(assignment_in, "assignee_email", "assignee_name")
    if not assignment_in.assigned_states:
        raise HTTPException(status_code=400, detail="Select at least one state")

    unknown_states = [s for s in assignment_in.assigned_states if s not in REGIONS]
    if unknown_states:
        raise HTTPException(status_code=400, detail=f"Unknown states: {', '.join(unknown_states)}")

    unknown_modules = [m for m in assignment_in.module_access if m not in MODULE_KEYS]
    if unknown_modules:
        raise HTTPException(status_code=400, detail=f"Unknown modules: {', '.join(unknown_modules)}")

    bad_levels = [lvl for lvl in assignment_in.region_access.values() if lvl not in REGION_ACCESS_LEVELS]
    if bad_levels:
        raise HTTPException(status_code=400, detail=f"Unknown access levels: {', '.join(bad_levels)}")


@router.get("", response_model=List[ProjectAssignment])
def list_assignments(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_superuser),
) -> Any:
    return db.exec(select(ProjectAssignment).order_by(ProjectAssignment.created_at.desc())).all()


@router.get("/stats", response_model=AssignmentStats)
def assignment_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_superuser),
) -> Any:
    """
    Counts for the assignment screen header: rows, distinct people, distinct
    states and the total number of projects handed out.
    """
    rows = db.exec(select(ProjectAssignment)).all()
    states = {state for row in rows for state in (row.assigned_states or [])}
    return AssignmentStats(
        total_assignments=len(rows),
        unique_assignees=len({row.assignee_email.lower() for row in rows}),
        unique_states=len(states),
        total_projects=sum(row.project_count or 0 for row in rows),
    )


@router.post("", response_model=ProjectAssignment)
def upsert_assignment(
    assignment_in: AssignmentUpsert,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_superuser),
) -> Any:
    """
    Create the assignment for an email, or replace the existing one.

    Raises:
        HTTPException 400: If email, name or states are missing, or a value is unknown
    """
    _validate(assignment_in)
    email = assignment_in.assignee_email.strip().lower()

    assignment = db.exec(
        select(ProjectAssignment).where(ProjectAssignment.assignee_email == email)
    ).first()
    data = assignment_in.model_dump()
    data["assignee_email"] = email
    if assignment:
        for key, value in data.items():
            setattr(assignment, key, value)
        assignment.updated_at = datetime.utcnow().isoformat()
    else:
        assignment = ProjectAssignment(**data)

    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    logger.info("%s saved assignment for %s: %s", current_user.email, email, assignment.assigned_states)
    return assignment


@router.delete("/{assignment_id}")
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_superuser),
):
    assignment = db.get(ProjectAssignment, assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")
    db.delete(assignment)
    db.commit()
    return {"status": "success", "detail": "Assignment deleted"}
