from pydantic import BaseModel
from typing import List, Optional, Union

from solarops.models.chitoor import ChitoorProjectRead


class ChitoorProjectCreate(BaseModel):
    customer_name: Optional[str] = None
    mobile_number: Optional[str] = None
    date_of_order: Optional[str] = None
    service_number: Optional[str] = None
    address_mandal_village: Optional[str] = None
    capacity: Optional[str] = None
    project_cost: Optional[float] = None
    amount_received: float = 0
    subsidy_scope: Optional[str] = None
    velugu_officer_payments: Optional[str] = None
    project_status: Optional[str] = None
    material_sent_date: Optional[str] = None
    balamuragan_payment: Optional[str] = None


class ChitoorProjectUpdate(BaseModel):
    customer_name: Optional[str] = None
    mobile_number: Optional[str] = None
    date_of_order: Optional[str] = None
    service_number: Optional[str] = None
    address_mandal_village: Optional[str] = None
    capacity: Optional[str] = None
    project_cost: Optional[float] = None
    subsidy_scope: Optional[str] = None
    velugu_officer_payments: Optional[str] = None
    project_status: Optional[str] = None
    material_sent_date: Optional[str] = None
    balamuragan_payment: Optional[str] = None


class ChitoorStats(BaseModel):
    total: int
    completed: int
    pending: int
    total_revenue: float
    total_capacity: float


class ChitoorStatusChange(ChitoorProjectRead):
    progress: float
    can_advance: bool
    can_regress: bool


class ChitoorPaymentRow(BaseModel):
    """id is "initial" for the synthetic row shown when only amount_received is known."""
    id: Union[int, str]
    amount: float
    payment_mode: Optional[str] = None
    payment_date: Optional[str] = None
    is_initial: bool = False


class ChitoorPaymentView(BaseModel):
    chitoor_project_id: int
    project_cost: float
    amount_received: float
    balance: float
    payments: List[ChitoorPaymentRow]


class ChitoorApprovalCreate(BaseModel):
    project_name: Optional[str] = None
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


class ChitoorApprovalDecision(BaseModel):
    approval_status: str


class ChitoorApprovalStats(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int


class ChitoorMandal(BaseModel):
    mandal: str
    villages: List[str]
