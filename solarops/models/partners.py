"""
Partner Model Module

Dealers registered to resell, distribution partners and the bulk orders
partners place.
"""
from typing import Optional
from sqlmodel import SQLModel, Field

from datetime import datetime


class DealerBase(SQLModel):
    """
    Attributes:
        business_name / contact_person / email: Required on registration
        business_type: Retailer, installer, ...
        registration_date: ISO date; defaults to today
        status: "Active", "Inactive" or "Pending"
    """
    business_name: str = Field(nullable=False)
    contact_person: str = Field(nullable=False)
    email: str = Field(nullable=False)
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    business_type: Optional[str] = None
    registration_date: Optional[str] = None
    status: str = Field(default="Pending")


class Dealer(DealerBase, table=True):
    __tablename__ = "dealers"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class PartnerBase(SQLModel):
    business_name: str = Field(nullable=False)
    contact_person: str = Field(nullable=False)
    email: str = Field(nullable=False)
    phone: Optional[str] = None
    location: Optional[str] = None
    distribution_area: Optional[str] = None
    partnership_date: Optional[str] = None
    status: str = Field(default="Active")


class Partner(PartnerBase, table=True):
    __tablename__ = "partners"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class BulkOrderBase(SQLModel):
    """
    Attributes:
        partner_id: Partner placing the order (required)
        partner_name: Copied from the partner when the order is saved
        product: What was ordered (required)
        quantity: Units ordered; must be positive
        order_date: ISO date; defaults to today
        delivery_date: ISO date promised for delivery
        status: "Pending", "Confirmed", "Shipped" or "Delivered"
    """
    partner_id: int = Field(foreign_key="partners.id", index=True)
    partner_name: Optional[str] = None
    product: str = Field(nullable=False)
    quantity: int
    order_date: Optional[str] = None
    delivery_date: Optional[str] = None
    status: str = Field(default="Pending")
    notes: Optional[str] = None


class BulkOrder(BulkOrderBase, table=True):
    __tablename__ = "bulk_orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
