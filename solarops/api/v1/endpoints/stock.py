"""
Warehouse Stock Endpoints Module

Stock on hand per item and warehouse location.
"""
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import reject_nulls, require_choice, require_fields
from solarops.core.constants import MODULE_OPERATIONS, STOCK_LOCATIONS
from solarops.db.session import get_db
from solarops.models.operations import StockItem
from solarops.schemas.operations import StockItemCreate, StockItemUpdate, StockStats
from solarops.services.procurement import stock_stats

router = APIRouter(dependencies=[Depends(deps.ModuleGuard(MODULE_OPERATIONS))])


def _get_item(db: Session, item_id: int) -> StockItem:
    item = db.get(StockItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Stock item not found")
    return item


@router.get("", response_model=List[StockItem])
def list_stock(location: Optional[str] = None, search: Optional[str] = None, db: Session = Depends(get_db)):
    statement = select(StockItem).order_by(StockItem.item_name)
    if location:
        statement = statement.where(StockItem.location == location)
    if search:
        statement = statement.where(StockItem.item_name.ilike(f"%{search.strip()}%"))
    return db.exec(statement).all()


@router.get("/stats", response_model=StockStats)
def read_stock_stats(db: Session = Depends(get_db)):
    """Total units, distinct items (names compared trimmed and case-insensitively) and last update."""
    return StockStats(**stock_stats(db.exec(select(StockItem)).all()), locations=STOCK_LOCATIONS)


@router.post("", response_model=StockItem)
def create_stock_item(item_in: StockItemCreate, db: Session = Depends(get_db)):
    require_fields(item_in, "item_name")
    require_choice(item_in.location, STOCK_LOCATIONS, "location")
    if item_in.quantity < 0:
        raise HTTPException(status_code=400, detail="Quantity cannot be negative")
    item = StockItem(**item_in.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.patch("/{item_id}", response_model=StockItem)
def update_stock_item(item_id: int, item_update: StockItemUpdate, db: Session = Depends(get_db)):
    item = _get_item(db, item_id)
    update_data = item_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, StockItem)
    require_choice(update_data.get("location"), STOCK_LOCATIONS, "location")
    if "quantity" in update_data and (update_data["quantity"] or 0) < 0:
        raise HTTPException(status_code=400, detail="Quantity cannot be negative")
    for key, value in update_data.items():
        setattr(item, key, value)
    item.updated_at = datetime.utcnow().isoformat()
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}")
def delete_stock_item(item_id: int, db: Session = Depends(get_db)):
    item = _get_item(db, item_id)
    db.delete(item)
    db.commit()
    return {"status": "success", "detail": "Stock item deleted"}
