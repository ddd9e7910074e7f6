"""
Report and dashboard aggregations.

Rows are fetched in full by the endpoint and aggregated here in Python; the
volumes involved (hundreds to low thousands of projects) do not warrant SQL
GROUP BY queries.
"""
from collections import OrderedDict
from datetime import date
from typing import Dict, Iterable, List, Optional

from solarops.core.constants import (
    CHITOOR_PROJECT_STAGES,
    MONTH_NAMES,
    PROJECT_STAGES,
    PROJECT_STATUS_ACTIVE,
    PROJECT_STATUS_COMPLETED,
    PROJECT_STATUS_DELETED,
    STAGE_GROUPS,
)
from solarops.services.dates import elapsed_label, parse_iso_date
from solarops.services.stages import stage_index

INACTIVE_MARKERS = ("cancel", "declined", "rejected", "closed")
COMPLETED_MARKERS = ("installation completed", "commissioned", "delivered")


def to_number(value) -> float:
    """Numeric value of a loosely typed column ("3", "3 kW", 3.0, None)."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    digits = ""
    for ch in str(value).strip():
        if ch.isdigit() or ch in ".-":
            digits += ch
        elif digits:
            break
    try:
        return float(digits) if digits else 0.0
    except ValueError:
        return 0.0


def year_options(current_year: int, span: int = 5) -> List[int]:
    """The current year and the ``span - 1`` years before it, newest first."""
    return [current_year - offset for offset in range(span)]


def classify_chitoor_status(status: Optional[str]) -> str:
    """Bucket a free-form Chitoor status into "completed", "inactive" or "active"."""
    text = (status or "").strip().lower()
    if text == "completed" or any(marker in text for marker in COMPLETED_MARKERS):
        return "completed"
    if any(marker in text for marker in INACTIVE_MARKERS):
        return "inactive"
    return "active"


def _empty_months() -> "OrderedDict[str, float]":
    return OrderedDict((name, 0.0) for name in MONTH_NAMES)


def project_report(projects: Iterable, year: int) -> Dict:
    """
    Totals, stage counts and monthly kWh for regular projects.

    Totals and stage counts span every non-deleted project; the monthly series
    only counts projects that started (or were created) in ``year``.
    """
    rows = [p for p in projects if (p.status or "").lower() != PROJECT_STATUS_DELETED]

    stage_counts = OrderedDict((stage, 0) for stage in PROJECT_STAGES)
    for project in rows:
        idx = stage_index(PROJECT_STAGES, project.current_stage)
        if idx >= 0:
            stage_counts[PROJECT_STAGES[idx]] += 1

    stage_groups = OrderedDict(
        (group, sum(stage_counts[stage] for stage in stages))
        for group, stages in STAGE_GROUPS.items()
    )

    months = _empty_months()
    for project in rows:
        started = parse_iso_date(project.start_date) or parse_iso_date(project.created_at)
        if started and started.year == year:
            months[MONTH_NAMES[started.month - 1]] += project.kwh or 0

    return {
        "stats": {
            "total_projects": len(rows),
            "active": sum(1 for p in rows if (p.status or "").lower() == PROJECT_STATUS_ACTIVE),
            "completed": sum(1 for p in rows if (p.status or "").lower() == PROJECT_STATUS_COMPLETED),
            "total_revenue": sum(p.proposal_amount or 0 for p in rows),
            "total_kwh": sum(p.kwh or 0 for p in rows),
        },
        "stage_counts": dict(stage_counts),
        "stage_groups": dict(stage_groups),
        "monthly_kwh": [{"month": m, "kwh": v} for m, v in months.items()],
    }


def chitoor_report(projects: Iterable) -> Dict:
    """
    Same shape as project_report, keyed by project_status and date_of_order.

    Orders from every year fall into the month they were placed in; the
    selected report year does not narrow the Chitoor series.
    """
    rows = list(projects)

    status_counts = OrderedDict((status, 0) for status in CHITOOR_PROJECT_STAGES)
    for project in rows:
        idx = stage_index(CHITOOR_PROJECT_STAGES, project.project_status)
        key = CHITOOR_PROJECT_STAGES[idx] if idx >= 0 else (project.project_status or "Unknown")
        status_counts[key] = status_counts.get(key, 0) + 1

    months = _empty_months()
    for project in rows:
        ordered = parse_iso_date(project.date_of_order) or parse_iso_date(project.created_at)
        if ordered:
            months[MONTH_NAMES[ordered.month - 1]] += to_number(project.capacity)

    completed = sum(1 for p in rows if (p.project_status or "").strip().lower() == "completed")
    return {
        "stats": {
            "total_projects": len(rows),
            "active": len(rows) - completed,
            "completed": completed,
            "total_revenue": sum(p.project_cost or 0 for p in rows),
            "total_kwh": sum(to_number(p.capacity) for p in rows),
        },
        "stage_counts": dict(status_counts),
        "stage_groups": {},
        "monthly_kwh": [{"month": m, "kwh": v} for m, v in months.items()],
    }


def combined_totals(projects: Iterable, chitoor_projects: Optional[Iterable] = None) -> Dict:
    """
    Headline numbers for the projects page.

    ``chitoor_projects`` is None when the caller filtered by state or may not
    see Chitoor; Chitoor rows are then left out entirely.
    """
    rows = [p for p in projects if (p.status or "").lower() != PROJECT_STATUS_DELETED]
    totals = {
        "count": len(rows),
        "revenue": sum(p.proposal_amount or 0 for p in rows),
        "kwh": sum(p.kwh or 0 for p in rows),
        "active": sum(1 for p in rows if (p.status or "").lower() == PROJECT_STATUS_ACTIVE),
        "completed": sum(1 for p in rows if (p.status or "").lower() == PROJECT_STATUS_COMPLETED),
        "includes_chitoor": chitoor_projects is not None,
    }
    if chitoor_projects is None:
        return totals

    chitoor = list(chitoor_projects)
    buckets = [classify_chitoor_status(c.project_status) for c in chitoor]
    completed = buckets.count("completed")
    inactive = buckets.count("inactive")
    totals["count"] += len(chitoor)
    totals["revenue"] += sum(c.project_cost or 0 for c in chitoor)
    totals["kwh"] += sum(to_number(c.capacity) for c in chitoor)
    totals["completed"] += completed
    totals["active"] += max(len(chitoor) - completed - inactive, 0)
    return totals


def active_projects_for_year(projects: Iterable, year: int, today: date,
                             sort_by: str = "date") -> List[Dict]:
    """
    Active projects started in ``year`` with an elapsed-time label.

    sort_by: "date" (newest first), "amount" (largest first) or "stage"
    (furthest along first).
    """
    rows = []
    for project in projects:
        if (project.status or "").lower() != PROJECT_STATUS_ACTIVE:
            continue
        started = parse_iso_date(project.start_date) or parse_iso_date(project.created_at)
        if not started or started.year != year:
            continue
        rows.append((started, project))

    if sort_by == "amount":
        rows.sort(key=lambda r: r[1].proposal_amount or 0, reverse=True)
    elif sort_by == "stage":
        rows.sort(key=lambda r: stage_index(PROJECT_STAGES, r[1].current_stage), reverse=True)
    else:
        rows.sort(key=lambda r: r[0], reverse=True)

    return [
        {
            "id": project.id,
            "name": project.name,
            "customer_name": project.customer_name,
            "state": project.state,
            "current_stage": project.current_stage,
            "proposal_amount": project.proposal_amount or 0,
            "start_date": project.start_date,
            "elapsed": elapsed_label(started, today),
        }
        for started, project in rows
    ]
