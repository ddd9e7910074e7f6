from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from solarops.models.project import ProjectRead


class FinanceSummary(BaseModel):
    """Outstanding money across the filtered projects."""
    total_outstanding: float
    expected_this_month: float
    project_count: int
    projects: List[ProjectRead]


class LedgerRow(BaseModel):
    """A payment_history row with its project name and share of the project's tax."""
    id: int
    project_id: int
    project_name: str
    amount: float
    payment_mode: Optional[str] = None
    payment_date: Optional[str] = None
    attributed_tax: float = 0


class EstimationCreate(BaseModel):
    project_id: int
    material_cost: float = 0
    labour_cost: float = 0
    logistics_cost: float = 0
    other_cost: float = 0
    project_tax: float = 0
    notes: Optional[str] = None


class EstimationUpdate(BaseModel):
    material_cost: Optional[float] = None
    labour_cost: Optional[float] = None
    logistics_cost: Optional[float] = None
    other_cost: Optional[float] = None
    project_tax: Optional[float] = None
    notes: Optional[str] = None


class EstimationRead(EstimationCreate):
    id: int
    total_cost: float
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class InvoiceItem(BaseModel):
    description: Optional[str] = None
    hsn_code: Optional[str] = None
    quantity: float = 0
    rate: float = 0
    cgst_rate: float = 0  # percent
    sgst_rate: float = 0  # percent


class TaxInvoiceCreate(BaseModel):
    gst_number: Optional[str] = None
    invoice_number: Optional[str] = None
    invoice_date: Optional[str] = None
    customer_name: Optional[str] = None
    state: Optional[str] = None
    place_of_supply: Optional[str] = None
    bill_to_name: Optional[str] = None
    bill_to_address: Optional[str] = None
    bill_to_gst: Optional[str] = None
    ship_to_name: Optional[str] = None
    ship_to_address: Optional[str] = None
    items: List[InvoiceItem] = Field(default_factory=list)
    notes: Optional[str] = None
    terms_and_conditions: Optional[str] = None


class TaxInvoiceUpdate(BaseModel):
    invoice_date: Optional[str] = None
    customer_name: Optional[str] = None
    state: Optional[str] = None
    place_of_supply: Optional[str] = None
    bill_to_name: Optional[str] = None
    bill_to_address: Optional[str] = None
    bill_to_gst: Optional[str] = None
    ship_to_name: Optional[str] = None
    ship_to_address: Optional[str] = None
    items: Optional[List[InvoiceItem]] = None
    notes: Optional[str] = None
    terms_and_conditions: Optional[str] = None


class InvoiceTotals(BaseModel):
    total_quantity: float
    taxable_value: float
    total_cgst: float
    total_sgst: float
    total_amount: float
    amount_in_words: str
    formatted_total: str


class NextInvoiceNumbers(BaseModel):
    gst_number: str
    invoice_number: str


class ExpenseCreate(BaseModel):
    date: Optional[str] = None
    category: Optional[str] = None
    vendor: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[float] = None
    tax_amount: float = 0
    status: str = "pending"


class ExpenseUpdate(BaseModel):
    date: Optional[str] = None
    category: Optional[str] = None
    vendor: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[float] = None
    tax_amount: Optional[float] = None
    status: Optional[str] = None


class ExpenseSummary(BaseModel):
    total: float
    total_tax: float
    approved: float
    pending: float
    count: int
    by_category: Dict[str, float]
