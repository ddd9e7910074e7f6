"""
Finance Model Module

Tax invoices, per-project estimation costs and company expenses.
"""
from typing import Any, Dict, List, Optional
from sqlmodel import SQLModel, Field, JSON, Column

from datetime import datetime


class TaxInvoice(SQLModel, table=True):
    """
    A GST tax invoice.

    Attributes:
        gst_number: Running "IN-000001" style number
        invoice_number: Running "INV-000001" style number
        invoice_date: ISO date on the invoice
        customer_name: Customer billed
        state: State of the customer
        place_of_supply: Place of supply printed on the invoice
        bill_to_name / bill_to_address / bill_to_gst: Billing party
        ship_to_name / ship_to_address: Shipping party
        items: JSON list of line items, each with description, hsn_code,
            quantity, rate, cgst_rate and sgst_rate (rates in percent)
        notes: Free text
        terms_and_conditions: Free text printed at the bottom
    """
    __tablename__ = "tax_invoices"

    id: Optional[int] = Field(default=None, primary_key=True)
    gst_number: Optional[str] = Field(default=None, index=True)
    invoice_number: Optional[str] = Field(default=None, index=True)
    invoice_date: Optional[str] = None
    customer_name: str = Field(nullable=False)
    state: Optional[str] = None
    place_of_supply: Optional[str] = None

    bill_to_name: Optional[str] = None
    bill_to_address: Optional[str] = None
    bill_to_gst: Optional[str] = None
    ship_to_name: Optional[str] = None
    ship_to_address: Optional[str] = None

    items: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))

    notes: Optional[str] = None
    terms_and_conditions: Optional[str] = None

    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class EstimationCostBase(SQLModel):
    project_id: int = Field(foreign_key="projects.id", index=True)
    material_cost: float = 0
    labour_cost: float = 0
    logistics_cost: float = 0
    other_cost: float = 0
    # GST payable on the project; spread over its payments in the ledger
    project_tax: float = 0
    notes: Optional[str] = None


class EstimationCost(EstimationCostBase, table=True):
    __tablename__ = "estimation_costs"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class ExpenseBase(SQLModel):
    date: str = Field(nullable=False)
    category: str = Field(nullable=False)
    vendor: Optional[str] = None
    description: Optional[str] = None
    amount: float
    tax_amount: float = 0
    status: str = Field(default="pending")  # "pending", "approved" or "rejected"


class Expense(ExpenseBase, table=True):
    """A company expense; created_by holds the submitting user's email."""
    __tablename__ = "expenses"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_by: Optional[str] = None
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
