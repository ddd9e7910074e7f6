"""
Equipment Catalog Endpoints Module

Solar modules, inverters, and which customer received how many panels with
which inverter. Plant size per assignment is watt * quantity / 1000 kWh.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import require_fields
from solarops.core.constants import MODULE_OPERATIONS
from solarops.db.session import get_db
from solarops.models.catalog import CustomerModuleAssignment, Inverter, SolarModule
from solarops.models.project import Project
from solarops.schemas.operations import (
    InverterCreate,
    ModuleAssignmentCreate,
    ModuleAssignmentRead,
    SolarModuleCreate,
)

router = APIRouter(dependencies=[Depends(deps.ModuleGuard(MODULE_OPERATIONS))])


def describe_assignment(db: Session, assignment: CustomerModuleAssignment) -> ModuleAssignmentRead:
    """Assignment row with module and inverter names and the resulting kWh."""
    module = db.get(SolarModule, assignment.module_id)
    inverter = db.get(Inverter, assignment.inverter_id)
    watt = module.watt if module else 0
    return ModuleAssignmentRead(
        **assignment.model_dump(),
        module_name=module.name if module else None,
        watt=watt,
        inverter_name=inverter.name if inverter else None,
        kwh=watt * (assignment.quantity or 0) / 1000,
    )


# === Modules ===

@router.get("/modules", response_model=List[SolarModule])
def list_modules(db: Session = Depends(get_db)):
    return db.exec(select(SolarModule).order_by(SolarModule.name)).all()


@router.post("/modules", response_model=SolarModule)
def create_module(module_in: SolarModuleCreate, db: Session = Depends(get_db)):
    require_fields(module_in, "name", "watt")
    if module_in.watt <= 0:
        raise HTTPException(status_code=400, detail="Watt must be greater than zero")
    module = SolarModule(name=module_in.name.strip(), watt=module_in.watt)
    db.add(module)
    db.commit()
    db.refresh(module)
    return module


@router.delete("/modules/{module_id}")
def delete_module(module_id: int, db: Session = Depends(get_db)):
    module = db.get(SolarModule, module_id)
    if not module:
        raise HTTPException(status_code=404, detail="Module not found")
    in_use = db.exec(
        select(CustomerModuleAssignment).where(CustomerModuleAssignment.module_id == module_id)
    ).first()
    if in_use:
        raise HTTPException(status_code=400, detail="Module is assigned to a customer")
    db.delete(module)
    db.commit()
    return {"status": "success", "detail": "Module deleted"}


# === Inverters ===

@router.get("/inverters", response_model=List[Inverter])
def list_inverters(db: Session = Depends(get_db)):
    return db.exec(select(Inverter).order_by(Inverter.name)).all()


@router.post("/inverters", response_model=Inverter)
def create_inverter(inverter_in: InverterCreate, db: Session = Depends(get_db)):
    require_fields(inverter_in, "name")
    inverter = Inverter(name=inverter_in.name.strip())
    db.add(inverter)
    db.commit()
    db.refresh(inverter)
    return inverter


@router.delete("/inverters/{inverter_id}")
def delete_inverter(inverter_id: int, db: Session = Depends(get_db)):
    inverter = db.get(Inverter, inverter_id)
    if not inverter:
        raise HTTPException(status_code=404, detail="Inverter not found")
    in_use = db.exec(
        select(CustomerModuleAssignment).where(CustomerModuleAssignment.inverter_id == inverter_id)
    ).first()
    if in_use:
        raise HTTPException(status_code=400, detail="Inverter is assigned to a customer")
    db.delete(inverter)
    db.commit()
    return {"status": "success", "detail": "Inverter deleted"}


# === Customer assignments ===

@router.get("/customers", response_model=List[str])
def list_catalog_customers(db: Session = Depends(get_db)):
    """Distinct customer names across all projects, for the assignment form."""
    names = db.exec(select(Project.customer_name).distinct().order_by(Project.customer_name)).all()
    return [name for name in names if name]


@router.get("/assignments", response_model=List[ModuleAssignmentRead])
def list_assignments(db: Session = Depends(get_db)):
    rows = db.exec(
        select(CustomerModuleAssignment).order_by(CustomerModuleAssignment.created_at.desc())
    ).all()
    return [describe_assignment(db, row) for row in rows]


@router.post("/assignments", response_model=ModuleAssignmentRead)
def create_assignment(assignment_in: ModuleAssignmentCreate, db: Session = Depends(get_db)):
    """
    Raises:
        HTTPException 400: If any field is missing or the quantity is not positive
        HTTPException 404: If the module or inverter doesn't exist
    """
    require_fields(assignment_in, "customer_name", "module_id", "inverter_id", "quantity")
    if assignment_in.quantity <= 0:
        raise HTTPException(status_code=400, detail="Quantity must be greater than zero")
    if not db.get(SolarModule, assignment_in.module_id):
        raise HTTPException(status_code=404, detail="Module not found")
    if not db.get(Inverter, assignment_in.inverter_id):
        raise HTTPException(status_code=404, detail="Inverter not found")

    assignment = CustomerModuleAssignment(**assignment_in.model_dump())
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return describe_assignment(db, assignment)


@router.delete("/assignments/{assignment_id}")
def delete_assignment(assignment_id: int, db: Session = Depends(get_db)):
    assignment = db.get(CustomerModuleAssignment, assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")
    db.delete(assignment)
    db.commit()
    return {"status": "success", "detail": "Assignment deleted"}
