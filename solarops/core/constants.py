"""
Business constants shared across the API.

Stage lists are ordered; stage transitions and progress are computed from the
position of a value in these lists.
"""
from typing import Dict, List

# Ordered pipeline for Telangana / Andhra Pradesh installation projects
PROJECT_STAGES: List[str] = [
    "Advance Payment Done",
    "Advance Payment -- Approvals / First Payment",
    "Approvals -- Loan Applications",
    "Loan Started -- Loan Process",
    "Loan Approved / First Payment Collected -- Material Order",
    "Materials Ordered -- Materials Deliver",
    "Materials Delivered -- Installation",
    "Installation Done / Second Payment Done -- Net meter Application",
    "Net Meter Application -- Net Meter Installation",
    "Net Meter Installed -- Inspection / Final Payment",
    "Approved Inspection -- Subsidy in Progress",
    "Subsidy Disbursed -- Final payment",
    "Final Payment Done",
]

# Ordered status list for Chitoor (rural subsidy) projects
CHITOOR_PROJECT_STAGES: List[str] = [
    "Pending",
    "In Progress",
    "Material Pending",
    "Material Sent",
    "Installation Completed",
    "Completed",
    "On Hold",
]

# Report buckets, each a slice of PROJECT_STAGES
STAGE_GROUPS: Dict[str, List[str]] = {
    "Advance Payment": PROJECT_STAGES[0:2],
    "Approvals & Loan": PROJECT_STAGES[2:5],
    "Materials": PROJECT_STAGES[5:7],
    "Installation": PROJECT_STAGES[7:8],
    "Net Metering": PROJECT_STAGES[8:10],
    "Finalization": PROJECT_STAGES[10:13],
}

# === Regions ===
TELANGANA = "Telangana"
ANDHRA_PRADESH = "Andhra Pradesh"
CHITOOR = "Chitoor"
REGIONS: List[str] = [TELANGANA, ANDHRA_PRADESH, CHITOOR]

# Short codes accepted on project forms
STATE_ABBREVIATIONS: Dict[str, str] = {
    "TG": TELANGANA,
    "AP": ANDHRA_PRADESH,
}

# Region access levels, ranked; the highest level across assignments wins
REGION_ACCESS_LEVELS: Dict[str, int] = {"view": 1, "edit": 2, "admin": 3}

# === Feature modules (sidebar sections gated per user) ===
MODULE_DASHBOARD = "dashboard"
MODULE_PROJECTS = "projects"
MODULE_FINANCE = "finance"
MODULE_SALES = "sales"
MODULE_OPERATIONS = "operations"
MODULE_SERVICE_TICKETS = "serviceTickets"
MODULE_HR = "hr"
MODULE_KEYS: List[str] = [
    MODULE_DASHBOARD,
    MODULE_PROJECTS,
    MODULE_FINANCE,
    MODULE_SALES,
    MODULE_OPERATIONS,
    MODULE_SERVICE_TICKETS,
    MODULE_HR,
]

# === Project vocabularies ===
PROJECT_TYPES: List[str] = ["DCR", "Non DCR"]
PAYMENT_MODES: List[str] = ["Loan", "Cash"]
PROJECT_STATUS_ACTIVE = "active"
PROJECT_STATUS_COMPLETED = "completed"
PROJECT_STATUS_DELETED = "deleted"

# Default project cost by Chitoor plant capacity (kW)
CHITOOR_CAPACITY_COSTS: Dict[str, float] = {"2": 148000, "3": 205000}
APPROVAL_STATUSES: List[str] = ["pending", "approved", "rejected"]

# === Operations ===
STOCK_LOCATIONS: List[str] = ["Hyderabad", "Bangalore", "Chennai"]
LOGISTICS_STATUSES: List[str] = ["Pending", "Shipped", "Delivered"]
SUPPLIER_INVOICE_STATUSES: List[str] = ["paid", "unpaid", "pending"]
SERVICE_TICKET_STATUSES: List[str] = ["open", "in_progress", "completed"]
PARTNER_STATUSES: List[str] = ["Active", "Inactive", "Pending"]
BULK_ORDER_STATUSES: List[str] = ["Pending", "Confirmed", "Shipped", "Delivered"]

# === Expenses ===
EXPENSE_CATEGORIES: List[str] = [
    "Travel & Transportation",
    "Office Supplies",
    "Meals & Entertainment",
    "Utilities",
    "Maintenance & Repairs",
    "Software & Subscriptions",
    "Marketing & Advertising",
    "Professional Services",
    "Equipment",
    "Training & Development",
    "Other",
]
EXPENSE_STATUSES: List[str] = ["pending", "approved", "rejected"]

MONTH_NAMES: List[str] = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
