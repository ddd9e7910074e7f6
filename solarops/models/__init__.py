from .user import User, UserRole
from .assignment import ProjectAssignment
from .project import Project, PaymentHistory
from .chitoor import ChitoorProject, ChitoorPayment, ChitoorApproval
from .catalog import SolarModule, Inverter, CustomerModuleAssignment
from .finance import TaxInvoice, EstimationCost, Expense
from .operations import (
    StockItem, ProcurementItem, PurchaseOrder, SupplierInvoice, PurchaseReturn, CostEntry, LogisticsRecord,
)
from .partners import Dealer, Partner, BulkOrder
from .service_ticket import ServiceTicket

__all__ = [
    "User", "UserRole",
    "ProjectAssignment",
    "Project", "PaymentHistory",
    "ChitoorProject", "ChitoorPayment", "ChitoorApproval",
    "SolarModule", "Inverter", "CustomerModuleAssignment",
    "TaxInvoice", "EstimationCost", "Expense",
    "StockItem", "ProcurementItem", "PurchaseOrder", "SupplierInvoice", "PurchaseReturn", "CostEntry",
    "LogisticsRecord",
    "Dealer", "Partner", "BulkOrder",
    "ServiceTicket",
]
