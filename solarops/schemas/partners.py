from pydantic import BaseModel
from typing import Optional


class DealerCreate(BaseModel):
    business_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    business_type: Optional[str] = None
    registration_date: Optional[str] = None
    status: str = "Pending"


class DealerUpdate(BaseModel):
    business_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    business_type: Optional[str] = None
    registration_date: Optional[str] = None
    status: Optional[str] = None


class PartnerCreate(BaseModel):
    business_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    distribution_area: Optional[str] = None
    partnership_date: Optional[str] = None
    status: str = "Active"


class PartnerUpdate(BaseModel):
    business_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    distribution_area: Optional[str] = None
    partnership_date: Optional[str] = None
    status: Optional[str] = None


class BulkOrderCreate(BaseModel):
    partner_id: Optional[int] = None
    product: Optional[str] = None
    quantity: Optional[int] = None
    order_date: Optional[str] = None
    delivery_date: Optional[str] = None
    status: str = "Pending"
    notes: Optional[str] = None


class BulkOrderUpdate(BaseModel):
    partner_id: Optional[int] = None
    product: Optional[str] = None
    quantity: Optional[int] = None
    order_date: Optional[str] = None
    delivery_date: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
