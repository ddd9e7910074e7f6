"""
Equipment catalog: solar modules, inverters and which customer received what.
"""
from typing import Optional
from sqlmodel import SQLModel, Field

from datetime import datetime


class SolarModule(SQLModel, table=True):
    """A panel model; watt is the rated output of one panel."""
    __tablename__ = "modules"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    watt: float = Field(nullable=False)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class Inverter(SQLModel, table=True):
    __tablename__ = "inverters"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())


class CustomerModuleAssignmentBase(SQLModel):
    customer_name: str = Field(nullable=False, index=True)
    module_id: int = Field(foreign_key="modules.id")
    inverter_id: int = Field(foreign_key="inverters.id")
    quantity: int


class CustomerModuleAssignment(CustomerModuleAssignmentBase, table=True):
    """
    Panels and inverter installed for one customer.

    Matched to projects by customer_name, not by project id.
    """
    __tablename__ = "customer_module_assignments"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
