"""
Logistics Endpoints Module

Movements of material between warehouses and sites.
"""
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import reject_nulls, require_choice, require_fields
from solarops.core.constants import LOGISTICS_STATUSES, MODULE_OPERATIONS
from solarops.db.session import get_db
from solarops.models.operations import LogisticsRecord
from solarops.schemas.operations import LogisticsCreate, LogisticsUpdate

router = APIRouter(dependencies=[Depends(deps.ModuleGuard(MODULE_OPERATIONS))])


def _get_record(db: Session, record_id: int) -> LogisticsRecord:
    record = db.get(LogisticsRecord, record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Logistics record not found")
    return record


@router.get("", response_model=List[LogisticsRecord])
def list_logistics(status: Optional[str] = None, db: Session = Depends(get_db)):
    """Newest movements first (by date, then last update)."""
    statement = select(LogisticsRecord).order_by(
        LogisticsRecord.date.desc(), LogisticsRecord.updated_at.desc()
    )
    if status:
        statement = statement.where(LogisticsRecord.status == status)
    return db.exec(statement).all()


@router.post("", response_model=LogisticsRecord)
def create_logistics(record_in: LogisticsCreate, db: Session = Depends(get_db)):
    """
    Raises:
        HTTPException 400: If item, origin or destination is missing, the
            quantity is not positive, or the status is unknown
    """
    require_fields(record_in, "item", "from_location", "to_location", "quantity")
    require_choice(record_in.status, LOGISTICS_STATUSES, "status")
    if record_in.quantity <= 0:
        raise HTTPException(status_code=400, detail="Quantity must be greater than zero")

    data = record_in.model_dump()
    data["date"] = data["date"] or datetime.utcnow().date().isoformat()
    record = LogisticsRecord(**data)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@router.patch("/{record_id}", response_model=LogisticsRecord)
def update_logistics(record_id: int, record_update: LogisticsUpdate, db: Session = Depends(get_db)):
    record = _get_record(db, record_id)
    update_data = record_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, LogisticsRecord)
    require_choice(update_data.get("status"), LOGISTICS_STATUSES, "status")
    if "quantity" in update_data and (update_data["quantity"] or 0) <= 0:
        raise HTTPException(status_code=400, detail="Quantity must be greater than zero")
    for key in ("item", "from_location", "to_location"):
        if key in update_data and not (update_data[key] or "").strip():
            raise HTTPException(status_code=400, detail=f"{key} cannot be empty")

    for key, value in update_data.items():
        setattr(record, key, value)
    record.updated_at = datetime.utcnow().isoformat()
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@router.delete("/{record_id}")
def delete_logistics(record_id: int, db: Session = Depends(get_db)):
    record = _get_record(db, record_id)
    db.delete(record)
    db.commit()
    return {"status": "success", "detail": "Logistics record deleted"}
