"""
Reports Endpoints Module

Project reports by state and year. Selecting the Chitoor state switches the
report to Chitoor projects, keyed by status and order date.
"""
from typing import Optional
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.core.constants import CHITOOR, MODULE_SALES, PROJECT_STATUS_DELETED
from solarops.db.session import get_db
from solarops.models.chitoor import ChitoorProject
from solarops.models.project import Project
from solarops.schemas.access import AccessProfile
from solarops.schemas.reports import ProjectReport
from solarops.services import access, reports

router = APIRouter()


@router.get("", response_model=ProjectReport)
def project_report(
    state: Optional[str] = None,
    year: Optional[int] = None,
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(deps.ModuleGuard(MODULE_SALES)),
):
    """
    Totals, stage counts and the monthly kWh series.

    Args:
        state: Optional state filter; "Chitoor" reports on Chitoor projects
        year: Year of the monthly series; defaults to the current year and must
            be one of the last five years

    Raises:
        HTTPException 400: If the year is outside the selectable range
        HTTPException 403: If the caller may not see the selected state
    """
    current_year = date.today().year
    options = reports.year_options(current_year)
    year = year or current_year
    if year not in options:
        raise HTTPException(status_code=400, detail=f"Year must be one of {options}")

    state = access.normalize_state(state) if state else None
    if state and not access.state_visible(profile, state):
        raise HTTPException(status_code=403, detail="Not authorized for this region")

    if state and state.lower() == CHITOOR.lower():
        data = reports.chitoor_report(db.exec(select(ChitoorProject)).all())
    else:
        statement = select(Project).where(Project.status != PROJECT_STATUS_DELETED)
        if state:
            statement = statement.where(Project.state.ilike(f"%{state}%"))
        projects = [p for p in db.exec(statement).all() if access.state_visible(profile, p.state)]
        data = reports.project_report(projects, year)

    return ProjectReport(state=state, year=year, year_options=options, **data)
