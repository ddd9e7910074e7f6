"""
Project Model Module

This module defines the installation Project model and its PaymentHistory rows.
Projects in Telangana and Andhra Pradesh move through the fixed PROJECT_STAGES
pipeline; every customer payment after the advance is a PaymentHistory row.
"""
from typing import Optional
from sqlmodel import SQLModel, Field

from datetime import datetime


class ProjectBase(SQLModel):
    """
    Fields a user can enter on the project form.

    Attributes:
        name: Project title (required)
        customer_name: Customer the plant is installed for (required)
        email: Customer email
        phone: Customer phone number
        address: Installation address
        state: Region name - "Telangana" or "Andhra Pradesh" (TG/AP are expanded on write)
        project_type: "DCR" or "Non DCR"
        payment_mode: "Loan" or "Cash"
        dealing_personal: Staff member handling the customer
        proposal_amount: Quoted total for the installation (required)
        advance_payment: Amount collected when the order was booked
        loan_amount: Portion financed through a loan
        kwh: Plant capacity in kW
        start_date: ISO date the project started
    """
    name: str = Field(nullable=False)
    customer_name: str = Field(nullable=False, index=True)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    state: Optional[str] = Field(default=None, index=True)

    project_type: Optional[str] = None  # "DCR" or "Non DCR"
    payment_mode: Optional[str] = None  # "Loan" or "Cash"
    dealing_personal: Optional[str] = None

    # Money - rupees
    proposal_amount: float = 0
    advance_payment: float = 0
    loan_amount: float = 0

    kwh: Optional[float] = None
    start_date: Optional[str] = None


class Project(ProjectBase, table=True):
    """
    Project table model.

    status is one of "active", "completed" or "deleted"; deleted rows are
    hidden from every listing (soft delete). paid_amount is the running total
    of PaymentHistory rows and balance_amount is always
    proposal_amount - advance_payment - paid_amount.
    """
    __tablename__ = "projects"

    id: Optional[int] = Field(default=None, primary_key=True)

    status: str = Field(default="active", index=True)
    current_stage: Optional[str] = None

    paid_amount: float = 0
    balance_amount: float = 0

    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class ProjectRead(ProjectBase):
    """Schema for reading project data."""
    id: int
    status: str
    current_stage: Optional[str] = None
    paid_amount: float = 0
    balance_amount: float = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PaymentHistoryBase(SQLModel):
    amount: float
    payment_mode: Optional[str] = None
    payment_date: Optional[str] = None


class PaymentHistory(PaymentHistoryBase, table=True):
    """
    A payment received against a Project, after the advance.

    The advance itself lives on Project.advance_payment and is never stored here.
    """
    __tablename__ = "payment_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
