"""
Dashboard Endpoints Module

Headline totals across regular and Chitoor projects, and the active projects
of the selected year.
"""
from typing import Optional
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from solarops.api import deps
from solarops.core.constants import MODULE_DASHBOARD, PROJECT_STATUS_DELETED
from solarops.db.session import get_db
from solarops.models.chitoor import ChitoorProject
from solarops.models.project import Project
from solarops.schemas.access import AccessProfile
from solarops.schemas.reports import DashboardView
from solarops.services import access, reports

router = APIRouter()

SORT_OPTIONS = ("date", "amount", "stage")


@router.get("", response_model=DashboardView)
def dashboard(
    state: Optional[str] = None,
    year: Optional[int] = None,
    sort_by: str = "date",
    db: Session = Depends(get_db),
    profile: AccessProfile = Depends(deps.ModuleGuard(MODULE_DASHBOARD)),
):
    """
    Combined totals and this year's active projects.

    Chitoor projects are counted only when no state filter is set and the
    caller can see the Chitoor region.

    Args:
        state: Optional state filter (substring match)
        year: Year for the active project list; defaults to the current year
        sort_by: "date", "amount" or "stage"
    """
    if sort_by not in SORT_OPTIONS:
        raise HTTPException(status_code=400, detail=f"sort_by must be one of {', '.join(SORT_OPTIONS)}")

    statement = select(Project).where(Project.status != PROJECT_STATUS_DELETED)
    if state:
        statement = statement.where(Project.state.ilike(f"%{access.normalize_state(state)}%"))
    projects = [p for p in db.exec(statement).all() if access.state_visible(profile, p.state)]

    chitoor = None
    if not state and access.chitoor_visible(profile):
        chitoor = db.exec(select(ChitoorProject)).all()

    today = date.today()
    return DashboardView(
        totals=reports.combined_totals(projects, chitoor),
        active_projects=reports.active_projects_for_year(projects, year or today.year, today, sort_by),
    )
