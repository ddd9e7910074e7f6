"""
Procurement Endpoints Module

Purchases of material, purchase orders, supplier invoices, purchase returns,
per-unit cost entries and the procurement analytics (top suppliers, inventory
valuation, gross margin).
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import reject_nulls, require_choice, require_fields
from solarops.core.constants import MODULE_OPERATIONS, SUPPLIER_INVOICE_STATUSES
from solarops.db.session import get_db
from solarops.models.operations import (
    CostEntry,
    ProcurementItem,
    PurchaseOrder,
    PurchaseReturn,
    SupplierInvoice,
)
from solarops.models.project import PaymentHistory
from solarops.schemas.operations import (
    CostEntryCreate,
    ProcurementAnalytics,
    ProcurementCreate,
    ProcurementUpdate,
    PurchaseOrderCreate,
    PurchaseReturnCreate,
    SupplierInvoiceCreate,
)
from solarops.services import procurement

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(deps.ModuleGuard(MODULE_OPERATIONS))])


# === Purchases ===

@router.get("", response_model=List[ProcurementItem])
def list_procurements(db: Session = Depends(get_db)):
    return db.exec(select(ProcurementItem).order_by(ProcurementItem.created_at.desc())).all()


@router.post("", response_model=ProcurementItem)
def create_procurement(item_in: ProcurementCreate, db: Session = Depends(get_db)):
    """
    Raises:
        HTTPException 400: If the item name or a positive quantity is missing
    """
    require_fields(item_in, "item_name", "quantity")
    if item_in.quantity <= 0:
        raise HTTPException(status_code=400, detail="Quantity must be greater than zero")
    if item_in.price < 0:
        raise HTTPException(status_code=400, detail="Price cannot be negative")
    item = ProcurementItem(**item_in.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


# === Analytics ===

@router.get("/analytics", response_model=ProcurementAnalytics)
def procurement_analytics(
    method: str = "FIFO",
    logistics_per_unit: float = 0,
    db: Session = Depends(get_db),
):
    """
    Spend and margin figures for the procurement dashboard.

    Args:
        method: "FIFO" or "LIFO" inventory valuation
        logistics_per_unit: Freight cost added to every purchased unit

    Raises:
        HTTPException 400: If the valuation method is unknown
    """
    purchases = db.exec(select(ProcurementItem)).all()
    revenue = db.exec(select(func.coalesce(func.sum(PaymentHistory.amount), 0))).one()
    try:
        valuation = procurement.inventory_valuation(purchases, method, logistics_per_unit)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return ProcurementAnalytics(
        top_suppliers=procurement.top_suppliers(purchases),
        valuation=valuation,
        gross_margin=procurement.gross_margin(float(revenue or 0), purchases, logistics_per_unit),
    )


# === Purchase orders ===

@router.get("/orders", response_model=List[PurchaseOrder])
def list_purchase_orders(db: Session = Depends(get_db)):
    return db.exec(select(PurchaseOrder).order_by(PurchaseOrder.created_at.desc())).all()


@router.post("/orders", response_model=PurchaseOrder)
def create_purchase_order(order_in: PurchaseOrderCreate, db: Session = Depends(get_db)):
    """New purchase orders always start "pending"."""
    require_fields(order_in, "supplier")
    order = PurchaseOrder(**order_in.model_dump(), status="pending")
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


@router.delete("/orders/{order_id}")
def delete_purchase_order(order_id: int, db: Session = Depends(get_db)):
    order = db.get(PurchaseOrder, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Purchase order not found")
    db.delete(order)
    db.commit()
    return {"status": "success", "detail": "Purchase order deleted"}


# === Supplier invoices ===

@router.get("/invoices", response_model=List[SupplierInvoice])
def list_supplier_invoices(db: Session = Depends(get_db)):
    return db.exec(select(SupplierInvoice).order_by(SupplierInvoice.created_at.desc())).all()


@router.post("/invoices", response_model=SupplierInvoice)
def create_supplier_invoice(invoice_in: SupplierInvoiceCreate, db: Session = Depends(get_db)):
    require_fields(invoice_in, "invoice_number", "supplier")
    require_choice(invoice_in.status, SUPPLIER_INVOICE_STATUSES, "status")
    invoice = SupplierInvoice(**invoice_in.model_dump())
    db.add(invoice)
    db.commit()
    db.refresh(invoice)
    return invoice


@router.post("/invoices/{invoice_id}/mark-paid", response_model=SupplierInvoice)
def mark_supplier_invoice_paid(invoice_id: int, db: Session = Depends(get_db)):
    invoice = db.get(SupplierInvoice, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Supplier invoice not found")
    invoice.status = "paid"
    db.add(invoice)
    db.commit()
    db.refresh(invoice)
    logger.info("Supplier invoice %s marked paid", invoice.invoice_number)
    return invoice


@router.delete("/invoices/{invoice_id}")
def delete_supplier_invoice(invoice_id: int, db: Session = Depends(get_db)):
    invoice = db.get(SupplierInvoice, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Supplier invoice not found")
    db.delete(invoice)
    db.commit()
    return {"status": "success", "detail": "Supplier invoice deleted"}


# === Purchase returns ===

@router.get("/returns", response_model=List[PurchaseReturn])
def list_purchase_returns(db: Session = Depends(get_db)):
    return db.exec(
        select(PurchaseReturn).order_by(PurchaseReturn.date.desc(), PurchaseReturn.created_at.desc())
    ).all()


@router.post("/returns", response_model=PurchaseReturn)
def create_purchase_return(return_in: PurchaseReturnCreate, db: Session = Depends(get_db)):
    """
    Raises:
        HTTPException 400: If the supplier is missing or the amount is negative
    """
    require_fields(return_in, "supplier")
    if return_in.amount < 0:
        raise HTTPException(status_code=400, detail="Amount cannot be negative")
    purchase_return = PurchaseReturn(**return_in.model_dump())
    db.add(purchase_return)
    db.commit()
    db.refresh(purchase_return)
    logger.info("Purchase return %s recorded for %s", purchase_return.reference_id, purchase_return.supplier)
    return purchase_return


@router.delete("/returns/{return_id}")
def delete_purchase_return(return_id: int, db: Session = Depends(get_db)):
    purchase_return = db.get(PurchaseReturn, return_id)
    if not purchase_return:
        raise HTTPException(status_code=404, detail="Purchase return not found")
    db.delete(purchase_return)
    db.commit()
    return {"status": "success", "detail": "Purchase return deleted"}


# === Cost per unit ===

@router.get("/cost-entries", response_model=List[CostEntry])
def list_cost_entries(db: Session = Depends(get_db)):
    return db.exec(select(CostEntry).order_by(CostEntry.created_at.desc())).all()


@router.post("/cost-entries", response_model=CostEntry)
def create_cost_entry(entry_in: CostEntryCreate, db: Session = Depends(get_db)):
    """The per-unit cost is always material plus logistics; it is never taken from the client."""
    require_fields(entry_in, "item_name")
    if entry_in.material_cost < 0 or entry_in.logistics_cost < 0:
        raise HTTPException(status_code=400, detail="Costs cannot be negative")
    entry = CostEntry(
        **entry_in.model_dump(),
        per_unit_cost=procurement.per_unit_cost(entry_in.material_cost, entry_in.logistics_cost),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


@router.delete("/cost-entries/{entry_id}")
def delete_cost_entry(entry_id: int, db: Session = Depends(get_db)):
    entry = db.get(CostEntry, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Cost entry not found")
    db.delete(entry)
    db.commit()
    return {"status": "success", "detail": "Cost entry deleted"}


# === Single purchase (declared last so the fixed paths above win) ===

@router.patch("/{item_id}", response_model=ProcurementItem)
def update_procurement(item_id: int, item_update: ProcurementUpdate, db: Session = Depends(get_db)):
    item = db.get(ProcurementItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Procurement record not found")
    update_data = item_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, ProcurementItem)
    if "quantity" in update_data and (update_data["quantity"] or 0) <= 0:
        raise HTTPException(status_code=400, detail="Quantity must be greater than zero")
    for key, value in update_data.items():
        setattr(item, key, value)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}")
def delete_procurement(item_id: int, db: Session = Depends(get_db)):
    item = db.get(ProcurementItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Procurement record not found")
    db.delete(item)
    db.commit()
    return {"status": "success", "detail": "Procurement record deleted"}
