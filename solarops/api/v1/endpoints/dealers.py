"""
Dealer Endpoints Module

Registration and upkeep of dealers reselling the company's systems.
"""
import logging
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import reject_nulls, require_choice, require_fields
from solarops.core.constants import MODULE_OPERATIONS, PARTNER_STATUSES
from solarops.db.session import get_db
from solarops.models.partners import Dealer
from solarops.schemas.partners import DealerCreate, DealerUpdate

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(deps.ModuleGuard(MODULE_OPERATIONS))])

REQUIRED = ("business_name", "contact_person", "email")


def _get_dealer(db: Session, dealer_id: int) -> Dealer:
    dealer = db.get(Dealer, dealer_id)
    if not dealer:
        raise HTTPException(status_code=404, detail="Dealer not found")
    return dealer


@router.get("", response_model=List[Dealer])
def list_dealers(status: Optional[str] = None, db: Session = Depends(get_db)):
    statement = select(Dealer).order_by(Dealer.registration_date.desc(), Dealer.id.desc())
    if status:
        statement = statement.where(Dealer.status == status)
    return db.exec(statement).all()


@router.post("", response_model=Dealer)
def register_dealer(dealer_in: DealerCreate, db: Session = Depends(get_db)):
    """
    Register a dealer. New dealers start "Pending" and are dated today unless
    told otherwise.

    Raises:
        HTTPException 400: If business name, contact person or email is missing
    """
    require_fields(dealer_in, *REQUIRED)
    require_choice(dealer_in.status, PARTNER_STATUSES, "status")
    data = dealer_in.model_dump()
    data["registration_date"] = data["registration_date"] or datetime.utcnow().date().isoformat()
    dealer = Dealer(**data)
    db.add(dealer)
    db.commit()
    db.refresh(dealer)
    logger.info("Registered dealer %s", dealer.business_name)
    return dealer


@router.patch("/{dealer_id}", response_model=Dealer)
def update_dealer(dealer_id: int, dealer_update: DealerUpdate, db: Session = Depends(get_db)):
    dealer = _get_dealer(db, dealer_id)
    update_data = dealer_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, Dealer)
    require_choice(update_data.get("status"), PARTNER_STATUSES, "status")
    for key in REQUIRED:
        if key in update_data and not update_data[key].strip():
            raise HTTPException(status_code=400, detail=f"{key} cannot be empty")

    for key, value in update_data.items():
        setattr(dealer, key, value)
    dealer.updated_at = datetime.utcnow().isoformat()
    db.add(dealer)
    db.commit()
    db.refresh(dealer)
    return dealer


@router.delete("/{dealer_id}")
def delete_dealer(dealer_id: int, db: Session = Depends(get_db)):
    dealer = _get_dealer(db, dealer_id)
    db.delete(dealer)
    db.commit()
    return {"status": "success", "detail": "Dealer deleted"}
