"""
Partner Endpoints Module

Distribution partners and the bulk orders they place. Each bulk order keeps
a copy of its partner's business name so old orders still read correctly
after the partner is renamed.
"""
import logging
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import reject_nulls, require_choice, require_fields
from solarops.core.constants import BULK_ORDER_STATUSES, MODULE_OPERATIONS, PARTNER_STATUSES
from solarops.db.session import get_db
from solarops.models.partners import BulkOrder, Partner
from solarops.schemas.partners import BulkOrderCreate, BulkOrderUpdate, PartnerCreate, PartnerUpdate

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(deps.ModuleGuard(MODULE_OPERATIONS))])

PARTNER_REQUIRED = ("business_name", "contact_person", "email")


def _today() -> str:
    return datetime.utcnow().date().isoformat()


def _get_partner(db: Session, partner_id: int) -> Partner:
    partner = db.get(Partner, partner_id)
    if not partner:
        raise HTTPException(status_code=404, detail="Partner not found")
    return partner


def _get_order(db: Session, order_id: int) -> BulkOrder:
    order = db.get(BulkOrder, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Bulk order not found")
    return order


# === Partners ===

@router.get("", response_model=List[Partner])
def list_partners(status: Optional[str] = None, db: Session = Depends(get_db)):
    statement = select(Partner).order_by(Partner.partnership_date.desc(), Partner.id.desc())
    if status:
        statement = statement.where(Partner.status == status)
    return db.exec(statement).all()


@router.post("", response_model=Partner)
def create_partner(partner_in: PartnerCreate, db: Session = Depends(get_db)):
    """
    Raises:
        HTTPException 400: If business name, contact person or email is missing
    """
    require_fields(partner_in, *PARTNER_REQUIRED)
    require_choice(partner_in.status, PARTNER_STATUSES, "status")
    data = partner_in.model_dump()
    data["partnership_date"] = data["partnership_date"] or _today()
    partner = Partner(**data)
    db.add(partner)
    db.commit()
    db.refresh(partner)
    logger.info("Added partner %s", partner.business_name)
    return partner


# === Bulk orders ===

@router.get("/bulk-orders", response_model=List[BulkOrder])
def list_bulk_orders(partner_id: Optional[int] = None, db: Session = Depends(get_db)):
    statement = select(BulkOrder).order_by(BulkOrder.order_date.desc(), BulkOrder.id.desc())
    if partner_id is not None:
        statement = statement.where(BulkOrder.partner_id == partner_id)
    return db.exec(statement).all()


@router.post("/bulk-orders", response_model=BulkOrder)
def create_bulk_order(order_in: BulkOrderCreate, db: Session = Depends(get_db)):
    """
    Raises:
        HTTPException 400: If partner, product or a positive quantity is missing,
            or the status is unknown
        HTTPException 404: If the partner doesn't exist
    """
    require_fields(order_in, "partner_id", "product", "quantity")
    require_choice(order_in.status, BULK_ORDER_STATUSES, "status")
    if order_in.quantity <= 0:
        raise HTTPException(status_code=400, detail="Quantity must be greater than zero")
    partner = _get_partner(db, order_in.partner_id)

    data = order_in.model_dump()
    data["partner_name"] = partner.business_name
    data["order_date"] = data["order_date"] or _today()
    order = BulkOrder(**data)
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("Bulk order %s placed by %s", order.id, partner.business_name)
    return order


@router.patch("/bulk-orders/{order_id}", response_model=BulkOrder)
def update_bulk_order(order_id: int, order_update: BulkOrderUpdate, db: Session = Depends(get_db)):
    order = _get_order(db, order_id)
    update_data = order_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, BulkOrder)
    require_choice(update_data.get("status"), BULK_ORDER_STATUSES, "status")
    if "quantity" in update_data and update_data["quantity"] <= 0:
        raise HTTPException(status_code=400, detail="Quantity must be greater than zero")
    if "product" in update_data and not update_data["product"].strip():
        raise HTTPException(status_code=400, detail="product cannot be empty")
    if "partner_id" in update_data:
        update_data["partner_name"] = _get_partner(db, update_data["partner_id"]).business_name

    for key, value in update_data.items():
        setattr(order, key, value)
    order.updated_at = datetime.utcnow().isoformat()
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


@router.delete("/bulk-orders/{order_id}")
def delete_bulk_order(order_id: int, db: Session = Depends(get_db)):
    order = _get_order(db, order_id)
    db.delete(order)
    db.commit()
    return {"status": "success", "detail": "Bulk order deleted"}


# === Single partner (declared last so the fixed paths above win) ===

@router.get("/{partner_id}", response_model=Partner)
def read_partner(partner_id: int, db: Session = Depends(get_db)):
    return _get_partner(db, partner_id)


@router.patch("/{partner_id}", response_model=Partner)
def update_partner(partner_id: int, partner_update: PartnerUpdate, db: Session = Depends(get_db)):
    partner = _get_partner(db, partner_id)
    update_data = partner_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, Partner)
    require_choice(update_data.get("status"), PARTNER_STATUSES, "status")
    for key in PARTNER_REQUIRED:
        if key in update_data and not update_data[key].strip():
            raise HTTPException(status_code=400, detail=f"{key} cannot be empty")

    for key, value in update_data.items():
        setattr(partner, key, value)
    partner.updated_at = datetime.utcnow().isoformat()
    db.add(partner)
    db.commit()
    db.refresh(partner)
    return partner


@router.delete("/{partner_id}")
def delete_partner(partner_id: int, db: Session = Depends(get_db)):
    """
    Raises:
        HTTPException 400: While the partner still has bulk orders
    """
    partner = _get_partner(db, partner_id)
    has_orders = db.exec(select(BulkOrder).where(BulkOrder.partner_id == partner_id)).first()
    if has_orders:
        raise HTTPException(status_code=400, detail="Partner has bulk orders")
    db.delete(partner)
    db.commit()
    return {"status": "success", "detail": "Partner deleted"}
