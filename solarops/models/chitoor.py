"""
Chitoor Project Model Module

Chitoor projects are small rural installations run under a government subsidy
scheme. They have their own form, their own status list (CHITOOR_PROJECT_STAGES)
and their own payment table.
"""
from typing import Optional
from sqlmodel import SQLModel, Field

from datetime import datetime


class ChitoorProjectBase(SQLModel):
    """
    Attributes:
        customer_name: Beneficiary name (required)
        mobile_number: Contact number
        date_of_order: ISO date the order was placed
        service_number: Electricity service connection number
        address_mandal_village: Address as mandal / village
        capacity: Plant capacity in kW, kept as entered ("2", "3", ...)
        project_cost: Total cost; defaults from the capacity when left empty
        amount_received: Running total of money received
        subsidy_scope: Subsidy scheme notes
        velugu_officer_payments: Payments handled through the Velugu officer
        project_status: One of CHITOOR_PROJECT_STAGES
        material_sent_date: ISO date the material left the warehouse
        balamuragan_payment: Installer payout notes
    """
    customer_name: str = Field(nullable=False, index=True)
    mobile_number: Optional[str] = None
    date_of_order: Optional[str] = None
    service_number: Optional[str] = None
    address_mandal_village: Optional[str] = None
    capacity: Optional[str] = None
    project_cost: Optional[float] = None
    amount_received: float = 0
    subsidy_scope: Optional[str] = None
    velugu_officer_payments: Optional[str] = None
    project_status: str = Field(default="Pending")
    material_sent_date: Optional[str] = None
    balamuragan_payment: Optional[str] = None


class ChitoorProject(ChitoorProjectBase, table=True):
    __tablename__ = "chitoor_projects"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class ChitoorProjectRead(ChitoorProjectBase):
    id: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ChitoorPayment(SQLModel, table=True):
    """
    A payment received against a ChitoorProject.

    Kept in its own table, keyed by chitoor_project_id, so Chitoor payments
    never mix with PaymentHistory rows of regular projects.
    """
    __tablename__ = "chitoor_payment_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    chitoor_project_id: int = Field(foreign_key="chitoor_projects.id", index=True)
    amount: float
    payment_mode: Optional[str] = None
    payment_date: Optional[str] = None
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class ChitoorApprovalBase(SQLModel):
    """
    A Chitoor project submitted for district approval.

    Records arrive from the CRM; the console only reviews them and moves
    approval_status between "pending", "approved" and "rejected".
    """
    project_name: str = Field(nullable=False)
    date: Optional[str] = None
    capacity_kw: Optional[float] = None
    location: Optional[str] = None
    power_bill_number: Optional[str] = None
    project_cost: Optional[float] = None
    site_visit_status: Optional[str] = None
    payment_amount: Optional[float] = None
    banking_ref_id: Optional[str] = None
    service_number: Optional[str] = None
    service_status: Optional[str] = None


class ChitoorApproval(ChitoorApprovalBase, table=True):
    __tablename__ = "chittoor_project_approvals"

    id: Optional[int] = Field(default=None, primary_key=True)
    approval_status: str = Field(default="pending", index=True)
    approval_updated_at: Optional[str] = None
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
