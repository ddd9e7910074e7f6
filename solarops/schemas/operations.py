from pydantic import BaseModel
from typing import List, Optional


class StockItemCreate(BaseModel):
    item_name: Optional[str] = None
    quantity: int = 0
    location: Optional[str] = None
    notes: Optional[str] = None


class StockItemUpdate(BaseModel):
    item_name: Optional[str] = None
    quantity: Optional[int] = None
    location: Optional[str] = None
    notes: Optional[str] = None


class StockStats(BaseModel):
    total_units: int
    unique_skus: int
    last_updated: Optional[str] = None
    locations: List[str]


class ProcurementCreate(BaseModel):
    item_name: Optional[str] = None
    quantity: Optional[int] = None
    supplier: Optional[str] = None
    purchase_date: Optional[str] = None
    price: float = 0
    notes: Optional[str] = None


class ProcurementUpdate(BaseModel):
    item_name: Optional[str] = None
    quantity: Optional[int] = None
    supplier: Optional[str] = None
    purchase_date: Optional[str] = None
    price: Optional[float] = None
    notes: Optional[str] = None


class PurchaseOrderCreate(BaseModel):
    supplier: Optional[str] = None
    items: Optional[str] = None
    order_date: Optional[str] = None
    expected_delivery: Optional[str] = None
    total_amount: float = 0


class SupplierInvoiceCreate(BaseModel):
    invoice_number: Optional[str] = None
    supplier: Optional[str] = None
    date: Optional[str] = None
    amount: float = 0
    status: str = "unpaid"


class SupplierSpend(BaseModel):
    supplier: str
    total: float


class Valuation(BaseModel):
    method: str
    total_units: int
    total_cost: float
    per_unit_cost: float


class GrossMargin(BaseModel):
    revenue: float
    cost: float
    margin_percent: float


class ProcurementAnalytics(BaseModel):
    top_suppliers: List[SupplierSpend]
    valuation: Valuation
    gross_margin: GrossMargin


class PurchaseReturnCreate(BaseModel):
    reference_id: Optional[str] = None
    supplier: Optional[str] = None
    date: Optional[str] = None
    amount: float = 0
    reason: Optional[str] = None


class CostEntryCreate(BaseModel):
    item_name: Optional[str] = None
    material_cost: float = 0
    logistics_cost: float = 0


class LogisticsCreate(BaseModel):
    date: Optional[str] = None
    item: Optional[str] = None
    quantity: Optional[int] = None
    from_location: Optional[str] = None
    to_location: Optional[str] = None
    status: str = "Pending"
    reference: Optional[str] = None
    vehicle: Optional[str] = None
    expected_date: Optional[str] = None
    tracking_no: Optional[str] = None
    notes: Optional[str] = None


class LogisticsUpdate(BaseModel):
    date: Optional[str] = None
    item: Optional[str] = None
    quantity: Optional[int] = None
    from_location: Optional[str] = None
    to_location: Optional[str] = None
    status: Optional[str] = None
    reference: Optional[str] = None
    vehicle: Optional[str] = None
    expected_date: Optional[str] = None
    tracking_no: Optional[str] = None
    notes: Optional[str] = None


class SolarModuleCreate(BaseModel):
    name: Optional[str] = None
    watt: Optional[float] = None


class InverterCreate(BaseModel):
    name: Optional[str] = None


class ModuleAssignmentCreate(BaseModel):
    customer_name: Optional[str] = None
    module_id: Optional[int] = None
    inverter_id: Optional[int] = None
    quantity: Optional[int] = None


class ModuleAssignmentRead(BaseModel):
    id: int
    customer_name: str
    module_id: int
    module_name: Optional[str] = None
    watt: float = 0
    inverter_id: int
    inverter_name: Optional[str] = None
    quantity: int
    kwh: float
    created_at: Optional[str] = None


class ServiceTicketCreate(BaseModel):
    customer_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None


class ServiceTicketStatus(BaseModel):
    status: str
