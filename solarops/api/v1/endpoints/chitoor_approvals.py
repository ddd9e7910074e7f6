"""
Chitoor Approval Endpoints Module

District approval queue for Chitoor projects. Anyone on the Chitoor screen
can read the queue; recording a submission or deciding one needs edit access
to the Chitoor region.
"""
import logging
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import require_choice, require_fields
from solarops.core.constants import APPROVAL_STATUSES, CHITOOR, MODULE_PROJECTS
from solarops.db.session import get_db
from solarops.models.chitoor import ChitoorApproval
from solarops.models.user import User
from solarops.schemas.access import AccessProfile
from solarops.schemas.chitoor import ChitoorApprovalCreate, ChitoorApprovalDecision, ChitoorApprovalStats
from solarops.services import access

logger = logging.getLogger(__name__)

router = APIRouter(
    dependencies=[Depends(deps.ModuleGuard(MODULE_PROJECTS)), Depends(deps.RegionGuard([CHITOOR]))]
)


def _status_of(record: ChitoorApproval) -> str:
    return (record.approval_status or APPROVAL_STATUSES[0]).strip().lower()


def _require_chitoor_edit(user: User, profile: AccessProfile) -> None:
    if not access.can_edit_state(user, profile, CHITOOR):
        raise HTTPException(status_code=403, detail="You do not have edit access to Chitoor approvals")


@router.get("", response_model=List[ChitoorApproval])
def list_approvals(status: Optional[str] = None, db: Session = Depends(get_db)):
    """Newest submissions first; ``status`` filters on pending / approved / rejected."""
    rows = db.exec(select(ChitoorApproval).order_by(ChitoorApproval.created_at.desc())).all()
    if status:
        wanted = status.strip().lower()
        require_choice(wanted, APPROVAL_STATUSES, "approval status")
        rows = [r for r in rows if _status_of(r) == wanted]
    return rows


@router.get("/stats", response_model=ChitoorApprovalStats)
def approval_stats(db: Session = Depends(get_db)):
    counts = {status: 0 for status in APPROVAL_STATUSES}
    rows = db.exec(select(ChitoorApproval)).all()
    for record in rows:
        status = _status_of(record)
        if status in counts:
            counts[status] += 1
    return ChitoorApprovalStats(total=len(rows), **counts)


@router.post("", response_model=ChitoorApproval)
def submit_approval(
    approval_in: ChitoorApprovalCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    profile: AccessProfile = Depends(deps.get_access_profile),
):
    """
    Raises:
        HTTPException 400: If the project name is missing
        HTTPException 403: Without edit access to Chitoor
    """
    _require_chitoor_edit(current_user, profile)
    require_fields(approval_in, "project_name")
    record = ChitoorApproval(**approval_in.model_dump())
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@router.patch("/{approval_id}", response_model=ChitoorApproval)
def decide_approval(
    approval_id: int,
    decision: ChitoorApprovalDecision,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    profile: AccessProfile = Depends(deps.get_access_profile),
):
    """
    Set approval_status and stamp approval_updated_at.

    Raises:
        HTTPException 400: If the status is not pending, approved or rejected
        HTTPException 403: Without edit access to Chitoor
        HTTPException 404: If the submission doesn't exist
    """
    _require_chitoor_edit(current_user, profile)
    status = decision.approval_status.strip().lower()
    require_choice(status, APPROVAL_STATUSES, "approval status")
    record = db.get(ChitoorApproval, approval_id)
    if not record:
        raise HTTPException(status_code=404, detail="Approval record not found")

    record.approval_status = status
    record.approval_updated_at = datetime.utcnow().isoformat()
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("%s marked Chitoor approval %s as %s", current_user.email, approval_id, status)
    return record
