from typing import Any, Optional

from fastapi import HTTPException
from pydantic import BaseModel


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, tuple, dict)) and not value:
        return True
    return False


def require_fields(payload: BaseModel, *fields: str) -> None:
    """
    Raise 400 naming every required field that is missing or blank.

    Raises:
        HTTPException 400: If any of ``fields`` is empty
    """
    missing = [name for name in fields if _is_blank(getattr(payload, name, None))]
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Please fill in all required fields: {', '.join(missing)}"
        )


def require_choice(value: Optional[str], choices, label: str) -> None:
    if value is not None and value not in choices:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {label} '{value}'. Expected one of: {', '.join(choices)}"
        )


def reject_nulls(update_data: dict, table) -> None:
    """
    Raise 400 when a partial update sets a NOT NULL column of ``table`` to null.

    Raises:
        HTTPException 400: Naming every such field
    """
    required = {
        column.name for column in table.__table__.columns
        if not column.nullable and not column.primary_key
    }
    cleared = [key for key, value in update_data.items() if value is None and key in required]
    if cleared:
        raise HTTPException(
            status_code=400,
            detail=f"These fields cannot be empty: {', '.join(cleared)}"
        )
