"""
Estimation Cost Endpoints Module

Planned costs per project. project_tax on an estimation drives the tax
attribution in the payments ledger.
"""
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.api.validation import reject_nulls
from solarops.core.constants import MODULE_FINANCE
from solarops.db.session import get_db
from solarops.models.finance import EstimationCost
from solarops.models.project import Project
from solarops.schemas.finance import EstimationCreate, EstimationRead, EstimationUpdate

router = APIRouter(dependencies=[Depends(deps.ModuleGuard(MODULE_FINANCE))])


def _read(estimation: EstimationCost) -> EstimationRead:
    total = sum([
        estimation.material_cost or 0,
        estimation.labour_cost or 0,
        estimation.logistics_cost or 0,
        estimation.other_cost or 0,
        estimation.project_tax or 0,
    ])
    return EstimationRead(**estimation.model_dump(), total_cost=total)


@router.get("", response_model=List[EstimationRead])
def list_estimations(project_id: Optional[int] = None, db: Session = Depends(get_db)):
    statement = select(EstimationCost).order_by(EstimationCost.created_at.desc())
    if project_id is not None:
        statement = statement.where(EstimationCost.project_id == project_id)
    return [_read(e) for e in db.exec(statement).all()]


@router.post("", response_model=EstimationRead)
def create_estimation(estimation_in: EstimationCreate, db: Session = Depends(get_db)):
    if not db.get(Project, estimation_in.project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    estimation = EstimationCost(**estimation_in.model_dump())
    db.add(estimation)
    db.commit()
    db.refresh(estimation)
    return _read(estimation)


@router.get("/{estimation_id}", response_model=EstimationRead)
def read_estimation(estimation_id: int, db: Session = Depends(get_db)):
    estimation = db.get(EstimationCost, estimation_id)
    if not estimation:
        raise HTTPException(status_code=404, detail="Estimation not found")
    return _read(estimation)


@router.patch("/{estimation_id}", response_model=EstimationRead)
def update_estimation(estimation_id: int, estimation_update: EstimationUpdate, db: Session = Depends(get_db)):
    estimation = db.get(EstimationCost, estimation_id)
    if not estimation:
        raise HTTPException(status_code=404, detail="Estimation not found")
    update_data = estimation_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, EstimationCost)
    for key, value in update_data.items():
        setattr(estimation, key, value)
    estimation.updated_at = datetime.utcnow().isoformat()
    db.add(estimation)
    db.commit()
    db.refresh(estimation)
    return _read(estimation)


@router.delete("/{estimation_id}")
def delete_estimation(estimation_id: int, db: Session = Depends(get_db)):
    estimation = db.get(EstimationCost, estimation_id)
    if not estimation:
        raise HTTPException(status_code=404, detail="Estimation not found")
    db.delete(estimation)
    db.commit()
    return {"status": "success", "detail": "Estimation deleted"}
