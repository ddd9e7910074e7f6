from pydantic import BaseModel
from typing import Dict, List, Optional


class ReportStats(BaseModel):
    total_projects: int
    active: int
    completed: int
    total_revenue: float
    total_kwh: float


class MonthlyKwh(BaseModel):
    month: str
    kwh: float


class ProjectReport(BaseModel):
    """
    Report for one state filter and year.

    For the Chitoor filter stage_counts holds project_status counts and
    stage_groups is empty.
    """
    state: Optional[str] = None
    year: int
    year_options: List[int]
    stats: ReportStats
    stage_counts: Dict[str, int]
    stage_groups: Dict[str, int]
    monthly_kwh: List[MonthlyKwh]


class CombinedTotals(BaseModel):
    count: int
    revenue: float
    kwh: float
    active: int
    completed: int
    includes_chitoor: bool


class ActiveProjectRow(BaseModel):
    id: int
    name: str
    customer_name: str
    state: Optional[str] = None
    current_stage: Optional[str] = None
    proposal_amount: float
    start_date: Optional[str] = None
    elapsed: str


class DashboardView(BaseModel):
    totals: CombinedTotals
    active_projects: List[ActiveProjectRow]
