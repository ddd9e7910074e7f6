"""
Service Ticket Endpoints Module

After-sales tickets for installed customers. Tickets start "open" and are
closed with the /complete endpoint.
"""
import logging
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import require_choice, require_fields
from solarops.core.constants import MODULE_SERVICE_TICKETS, SERVICE_TICKET_STATUSES
from solarops.db.session import get_db
from solarops.models.service_ticket import ServiceTicket
from solarops.models.user import User
from solarops.schemas.operations import ServiceTicketCreate, ServiceTicketStatus

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(deps.ModuleGuard(MODULE_SERVICE_TICKETS))])


def _get_ticket(db: Session, ticket_id: int) -> ServiceTicket:
    ticket = db.get(ServiceTicket, ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Service ticket not found")
    return ticket


@router.get("", response_model=List[ServiceTicket])
def list_tickets(status: Optional[str] = None, db: Session = Depends(get_db)):
    statement = select(ServiceTicket).order_by(ServiceTicket.created_at.desc())
    if status:
        statement = statement.where(ServiceTicket.status == status)
    return db.exec(statement).all()


@router.post("", response_model=ServiceTicket)
def create_ticket(
    ticket_in: ServiceTicketCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Raise a ticket for a customer.

    Raises:
        HTTPException 400: If the customer name or description is missing
    """
    require_fields(ticket_in, "customer_name", "description")
    ticket = ServiceTicket(**ticket_in.model_dump(), status="open")
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    logger.info("%s opened service ticket %s for %s", current_user.email, ticket.id, ticket.customer_name)
    return ticket


@router.get("/{ticket_id}", response_model=ServiceTicket)
def read_ticket(ticket_id: int, db: Session = Depends(get_db)):
    return _get_ticket(db, ticket_id)


@router.post("/{ticket_id}/complete", response_model=ServiceTicket)
def complete_ticket(ticket_id: int, db: Session = Depends(get_db)):
    ticket = _get_ticket(db, ticket_id)
    now = datetime.utcnow().isoformat()
    ticket.status = "completed"
    ticket.completed_at = now
    ticket.updated_at = now
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    return ticket


@router.patch("/{ticket_id}/status", response_model=ServiceTicket)
def update_ticket_status(ticket_id: int, status_in: ServiceTicketStatus, db: Session = Depends(get_db)):
    """
    Set the status directly. Moving to "completed" stamps completed_at;
    reopening clears it.
    """
    require_choice(status_in.status, SERVICE_TICKET_STATUSES, "status")
    ticket = _get_ticket(db, ticket_id)
    now = datetime.utcnow().isoformat()
    ticket.status = status_in.status
    ticket.completed_at = now if status_in.status == "completed" else None
    ticket.updated_at = now
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    return ticket


@router.delete("/{ticket_id}")
def delete_ticket(ticket_id: int, db: Session = Depends(get_db)):
    ticket = _get_ticket(db, ticket_id)
    db.delete(ticket)
    db.commit()
    return {"status": "success", "detail": "Service ticket deleted"}
