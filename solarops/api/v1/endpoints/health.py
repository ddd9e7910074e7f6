from fastapi import APIRouter, Depends
from typing import Any
from sqlalchemy import text
from sqlmodel import Session

from solarops.db.session import get_db

router = APIRouter()


@router.get("", response_model=dict[str, Any])
def health_check(db: Session = Depends(get_db)) -> Any:
    """
    Health check endpoint; also confirms the database answers.
    """
    db.exec(text("SELECT 1"))
    return {"status": "ok", "database": "ok"}
