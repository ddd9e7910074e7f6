from fastapi import APIRouter
from solarops.api.v1.endpoints import (
    auth, health, users, assignments,
    projects, chitoor, chitoor_approvals, finance, estimations, tax_invoices, expenses,
    service_tickets, stock, procurement, logistics, dealers, partners, catalog,
    reports, dashboard,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(assignments.router, prefix="/assignments", tags=["admin"])

# Projects
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(chitoor_approvals.router, prefix="/chitoor/approvals", tags=["chitoor"])
api_router.include_router(chitoor.router, prefix="/chitoor", tags=["chitoor"])

# Finance
api_router.include_router(finance.router, prefix="/finance", tags=["finance"])
api_router.include_router(estimations.router, prefix="/estimations", tags=["finance"])
api_router.include_router(tax_invoices.router, prefix="/tax-invoices", tags=["finance"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["finance"])

# Operations
api_router.include_router(service_tickets.router, prefix="/service-tickets", tags=["service"])
api_router.include_router(stock.router, prefix="/stock", tags=["operations"])
api_router.include_router(procurement.router, prefix="/procurement", tags=["operations"])
api_router.include_router(logistics.router, prefix="/logistics", tags=["operations"])
api_router.include_router(dealers.router, prefix="/dealers", tags=["operations"])
api_router.include_router(partners.router, prefix="/partners", tags=["operations"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["operations"])

# Reporting
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
