"""
Operations Model Module

Warehouse stock, procurement records, purchase orders, supplier invoices,
purchase returns, per-unit cost entries and logistics movements.
"""
from typing import Optional
from sqlmodel import SQLModel, Field

from datetime import datetime


class StockItemBase(SQLModel):
    item_name: str = Field(nullable=False, index=True)
    quantity: int = 0
    location: Optional[str] = None  # one of STOCK_LOCATIONS
    notes: Optional[str] = None


class StockItem(StockItemBase, table=True):
    __tablename__ = "stock_warehouse"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class ProcurementItemBase(SQLModel):
    item_name: str = Field(nullable=False, index=True)
    quantity: int
    supplier: Optional[str] = None
    purchase_date: Optional[str] = None
    price: float = 0  # unit price
    notes: Optional[str] = None


class ProcurementItem(ProcurementItemBase, table=True):
    """A purchase of material; created_at orders the FIFO / LIFO valuation."""
    __tablename__ = "procurements"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class PurchaseOrderBase(SQLModel):
    supplier: str = Field(nullable=False)
    items: Optional[str] = None  # free-text description of what was ordered
    order_date: Optional[str] = None
    expected_delivery: Optional[str] = None
    total_amount: float = 0


class PurchaseOrder(PurchaseOrderBase, table=True):
    __tablename__ = "purchase_orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    status: str = Field(default="pending")
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class SupplierInvoiceBase(SQLModel):
    invoice_number: str = Field(nullable=False)
    supplier: str = Field(nullable=False)
    date: Optional[str] = None
    amount: float = 0
    status: str = Field(default="unpaid")  # "paid", "unpaid" or "pending"


class SupplierInvoice(SupplierInvoiceBase, table=True):
    __tablename__ = "supplier_invoices"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class PurchaseReturnBase(SQLModel):
    """Goods sent back to a supplier, recorded as a debit note."""
    reference_id: Optional[str] = None
    supplier: str = Field(nullable=False)
    date: Optional[str] = None
    amount: float = 0
    reason: Optional[str] = None


class PurchaseReturn(PurchaseReturnBase, table=True):
    __tablename__ = "purchase_returns"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class CostEntry(SQLModel, table=True):
    """Landed cost of one unit of an item; per_unit_cost is material plus logistics."""
    __tablename__ = "cost_entries"

    id: Optional[int] = Field(default=None, primary_key=True)
    item_name: str = Field(nullable=False)
    material_cost: float = 0
    logistics_cost: float = 0
    per_unit_cost: float = 0
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class LogisticsRecordBase(SQLModel):
    """
    A stock movement between two locations.

    Attributes:
        date: ISO date of dispatch
        item: What was moved (required)
        quantity: Units moved; must be positive
        from_location / to_location: Origin and destination (required)
        status: "Pending", "Shipped" or "Delivered"
        reference: Customer or order reference
        vehicle: Vehicle number
        expected_date: ISO date the shipment should arrive
        tracking_no: Courier tracking number
        notes: Free text
    """
    date: Optional[str] = None
    item: str = Field(nullable=False)
    quantity: int
    from_location: str = Field(nullable=False)
    to_location: str = Field(nullable=False)
    status: str = Field(default="Pending")
    reference: Optional[str] = None
    vehicle: Optional[str] = None
    expected_date: Optional[str] = None
    tracking_no: Optional[str] = None
    notes: Optional[str] = None


class LogisticsRecord(LogisticsRecordBase, table=True):
    __tablename__ = "logistics"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
