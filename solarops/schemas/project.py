from pydantic import BaseModel
from typing import List, Optional, Union

from solarops.models.project import ProjectRead


class ProjectCreate(BaseModel):
    name: Optional[str] = None
    customer_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    state: Optional[str] = None
    project_type: Optional[str] = None
    payment_mode: Optional[str] = None
    dealing_personal: Optional[str] = None
    proposal_amount: Optional[float] = None
    advance_payment: float = 0
    loan_amount: float = 0
    kwh: Optional[float] = None
    start_date: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    customer_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    state: Optional[str] = None
    project_type: Optional[str] = None
    payment_mode: Optional[str] = None
    dealing_personal: Optional[str] = None
    proposal_amount: Optional[float] = None
    advance_payment: Optional[float] = None
    loan_amount: Optional[float] = None
    kwh: Optional[float] = None
    start_date: Optional[str] = None
    current_stage: Optional[str] = None


class StageChange(ProjectRead):
    """A project after a stage move, with its position in the pipeline."""
    progress: float
    can_advance: bool
    can_regress: bool


class PaymentCreate(BaseModel):
    amount: Optional[float] = None
    payment_mode: Optional[str] = None
    payment_date: Optional[str] = None


class PaymentRow(BaseModel):
    """
    One line of a project's payment history.

    id is the string "advance" for the synthetic advance-payment line and the
    payment_history primary key otherwise.
    """
    id: Union[int, str]
    amount: float
    payment_mode: Optional[str] = None
    payment_date: Optional[str] = None
    is_advance: bool = False


class PaymentHistoryView(BaseModel):
    project_id: int
    proposal_amount: float
    advance_payment: float
    paid_amount: float
    balance_amount: float
    payments: List[PaymentRow]


class Receipt(BaseModel):
    """Everything a printed payment receipt needs; layout is up to the client."""
    company_name: str
    company_address: Optional[str] = None
    company_gstin: Optional[str] = None
    receipt_date: Optional[str] = None
    amount: float
    amount_in_words: str
    formatted_amount: str
    received_from: str
    payment_mode: Optional[str] = None
    place_of_supply: Optional[str] = None
    address: Optional[str] = None
    project_name: str


class CustomerSummary(BaseModel):
    customer_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
