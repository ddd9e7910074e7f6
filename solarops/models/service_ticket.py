"""
Service Ticket Model Module

After-sales service requests raised for installed customers.
"""
from typing import Optional
from sqlmodel import SQLModel, Field

from datetime import datetime


class ServiceTicketBase(SQLModel):
    customer_name: str = Field(nullable=False, index=True)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    description: str = Field(nullable=False)


class ServiceTicket(ServiceTicketBase, table=True):
    """
    Service ticket table model.

    status moves open -> in_progress -> completed; completed_at is stamped
    when the ticket is completed.
    """
    __tablename__ = "service_tickets"

    id: Optional[int] = Field(default=None, primary_key=True)
    status: str = Field(default="open", index=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    completed_at: Optional[str] = None
