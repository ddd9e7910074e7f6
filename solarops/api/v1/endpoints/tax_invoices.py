"""
Tax Invoice Endpoints Module

GST tax invoices. Numbers run in two series, "IN-000001" for the GST number and
"INV-000001" for the invoice number, each continuing from the most recently
created invoice. Only finance users and admins may use these endpoints.

PDF rendering is left to the client; the /totals endpoint returns everything
the printed invoice needs.
"""
import logging
from typing import Any, List
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import reject_nulls, require_fields
from solarops.core.config import settings
from solarops.db.session import get_db
from solarops.models.finance import TaxInvoice
from solarops.models.user import User
from solarops.schemas.finance import (
    InvoiceTotals,
    NextInvoiceNumbers,
    TaxInvoiceCreate,
    TaxInvoiceUpdate,
)
from solarops.services import invoices

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(deps.require_finance)])


def next_numbers(db: Session) -> NextInvoiceNumbers:
    latest = db.exec(
        select(TaxInvoice).order_by(TaxInvoice.created_at.desc(), TaxInvoice.id.desc()).limit(1)
    ).first()
    return NextInvoiceNumbers(
        gst_number=invoices.next_sequence_number(
            latest.gst_number if latest else None,
            settings.GST_NUMBER_PREFIX,
            settings.INVOICE_NUMBER_DIGITS,
        ),
        invoice_number=invoices.next_sequence_number(
            latest.invoice_number if latest else None,
            settings.INVOICE_NUMBER_PREFIX,
            settings.INVOICE_NUMBER_DIGITS,
        ),
    )


def _get_invoice(db: Session, invoice_id: int) -> TaxInvoice:
    invoice = db.get(TaxInvoice, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Tax invoice not found")
    return invoice


@router.get("", response_model=List[TaxInvoice])
def list_tax_invoices(db: Session = Depends(get_db)):
    return db.exec(select(TaxInvoice).order_by(TaxInvoice.created_at.desc())).all()


@router.get("/next-numbers", response_model=NextInvoiceNumbers)
def read_next_numbers(db: Session = Depends(get_db)):
    """Numbers the next invoice will get if none are supplied."""
    return next_numbers(db)


@router.post("", response_model=TaxInvoice)
def create_tax_invoice(
    invoice_in: TaxInvoiceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Create a tax invoice, assigning the next GST / invoice numbers when they
    are not supplied.

    Raises:
        HTTPException 400: If the customer name or line items are missing
    """
    require_fields(invoice_in, "customer_name", "items")
    data = invoice_in.model_dump()
    if not data["gst_number"] or not data["invoice_number"]:
        numbers = next_numbers(db)
        data["gst_number"] = data["gst_number"] or numbers.gst_number
        data["invoice_number"] = data["invoice_number"] or numbers.invoice_number
    data["invoice_date"] = data["invoice_date"] or datetime.utcnow().date().isoformat()

    invoice = TaxInvoice(**data)
    db.add(invoice)
    db.commit()
    db.refresh(invoice)
    logger.info("%s issued invoice %s", current_user.email, invoice.invoice_number)
    return invoice


@router.get("/{invoice_id}", response_model=TaxInvoice)
def read_tax_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return _get_invoice(db, invoice_id)


@router.get("/{invoice_id}/totals", response_model=InvoiceTotals)
def tax_invoice_totals(invoice_id: int, db: Session = Depends(get_db)) -> Any:
    """Quantity, taxable value, CGST, SGST and grand total, with the total in words."""
    invoice = _get_invoice(db, invoice_id)
    totals = invoices.calculate_invoice_totals(invoice.items or [])
    return InvoiceTotals(
        **totals,
        amount_in_words=invoices.amount_in_words(totals["total_amount"]),
        formatted_total=invoices.format_currency(totals["total_amount"]),
    )


@router.patch("/{invoice_id}", response_model=TaxInvoice)
def update_tax_invoice(invoice_id: int, invoice_update: TaxInvoiceUpdate, db: Session = Depends(get_db)):
    """Update an invoice. Numbers are fixed once issued."""
    invoice = _get_invoice(db, invoice_id)
    update_data = invoice_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, TaxInvoice)
    for key, value in update_data.items():
        setattr(invoice, key, value)
    invoice.updated_at = datetime.utcnow().isoformat()
    db.add(invoice)
    db.commit()
    db.refresh(invoice)
    return invoice


@router.delete("/{invoice_id}")
def delete_tax_invoice(invoice_id: int, db: Session = Depends(get_db)):
    invoice = _get_invoice(db, invoice_id)
    db.delete(invoice)
    db.commit()
    return {"status": "success", "detail": "Tax invoice deleted"}
