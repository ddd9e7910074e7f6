from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Date part of an ISO date or datetime string; None when empty or malformed."""
    if not value:
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def elapsed_label(start: Optional[date], today: date) -> str:
    """Short human label for the time since ``start``: "Today", "3 days", "2 weeks", "5 months"."""
    if start is None:
        return "-"
    days = (today - start).days
    if days <= 0:
        return "Today"
    if days == 1:
        return "1 day"
    if days < 7:
        return f"{days} days"
    if days < 30:
        weeks = days // 7
        return "1 week" if weeks == 1 else f"{weeks} weeks"
    if days < 365:
        months = days // 30
        return "1 month" if months == 1 else f"{months} months"
    years = days // 365
    return "1 year" if years == 1 else f"{years} years"
