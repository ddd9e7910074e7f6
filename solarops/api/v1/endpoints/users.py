"""
User Management Endpoints Module

HR screen for console accounts. Every endpoint requires administrative privileges
except the /me endpoints, which let users read and update their own profile
and see what their project assignments grant them.
"""
import logging
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlmodel import Session, select
from solarops.api import deps
from solarops.api.validation import reject_nulls
from solarops.db.session import get_db
from solarops.models.user import User, UserRole
from solarops.schemas.access import AccessProfile
from solarops.schemas.user import UserCreate, UserRead, UserUpdate
from solarops.core.security import get_password_hash
from datetime import datetime

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_email_free(db: Session, email: str, owner: User) -> None:
    """Emails are unique regardless of case."""
    taken = db.exec(
        select(User).where(func.lower(User.email) == email.strip().lower(), User.id != owner.id)
    ).first()
    if taken:
        raise HTTPException(status_code=400, detail="A user with this email already exists.")


@router.get("", response_model=List[UserRead])
def read_users(
    db: Session = Depends(get_db),
    search: Optional[str] = None,
    role: Optional[UserRole] = None,
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(deps.get_current_active_superuser),
) -> Any:
    """
    List console users, optionally searching by email and filtering by role.

    Roles live in a JSON column, so the role filter is applied in Python.
    """
    statement = select(User).order_by(User.email)
    if search:
        statement = statement.where(User.email.ilike(f"%{search.strip()}%"))
    users = db.exec(statement).all()
    if role is not None:
        users = [u for u in users if role in (u.roles or [])]
    return users[skip:skip + limit]


@router.post("", response_model=UserRead)
def create_user(
    *,
    db: Session = Depends(get_db),
    user_in: UserCreate,
    current_user: User = Depends(deps.get_current_active_superuser),
) -> Any:
    """
    Create a new user.

    Raises:
        HTTPException 400: If a user with this email already exists
    """
    user = db.exec(select(User).where(User.email == user_in.email)).first()
    if user:
        raise HTTPException(
            status_code=400,
            detail="A user with this email already exists.",
        )

    db_user = User(
        email=user_in.email,
        password=get_password_hash(user_in.password),
        full_name=user_in.full_name,
        roles=user_in.roles or [UserRole.USER],
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("%s created user %s", current_user.email, db_user.email)
    return db_user


@router.get("/me", response_model=UserRead)
def read_user_me(
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    return current_user


@router.get("/me/access", response_model=AccessProfile)
def read_my_access(
    profile: AccessProfile = Depends(deps.get_access_profile),
) -> Any:
    """
    Regions, modules and region access levels of the current user, merged
    across all of their project assignments.
    """
    return profile


@router.put("/me", response_model=UserRead)
def update_user_me(
    *,
    db: Session = Depends(get_db),
    user_in: UserUpdate,
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """
    Update the current user's own profile. Roles cannot be changed here.

    Raises:
        HTTPException 400: If the new email belongs to another user
    """
    if user_in.email is not None:
        _ensure_email_free(db, user_in.email, current_user)
    if user_in.password:
        current_user.password = get_password_hash(user_in.password)
    if user_in.full_name is not None:
        current_user.full_name = user_in.full_name
    if user_in.email is not None:
        current_user.email = user_in.email
    current_user.updated_at = datetime.utcnow().isoformat()

    db.add(current_user)
    db.commit()
    db.refresh(current_user)
    return current_user


@router.get("/{user_id}", response_model=UserRead)
def read_user_by_id(
    user_id: str,
    current_user: User = Depends(deps.get_current_active_superuser),
    db: Session = Depends(get_db),
) -> Any:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    user_in: UserUpdate,
    current_user: User = Depends(deps.get_current_active_superuser),
) -> Any:
    """
    Update any user's email, name, roles or password.

    Raises:
        HTTPException 404: If the user doesn't exist
        HTTPException 400: If the new email belongs to another user
    """
    db_user = db.get(User, user_id)
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")

    update_data = user_in.model_dump(exclude_unset=True)

    if update_data.get("email"):
        _ensure_email_free(db, update_data["email"], db_user)

    if update_data.get("password"):
        update_data["password"] = get_password_hash(update_data["password"])
    else:
        update_data.pop("password", None)
    reject_nulls(update_data, User)

    for field, value in update_data.items():
        setattr(db_user, field, value)
    db_user.updated_at = datetime.utcnow().isoformat()

    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("%s updated user %s", current_user.email, db_user.email)
    return db_user


@router.delete("/{user_id}", response_model=UserRead)
def delete_user(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    current_user: User = Depends(deps.get_current_active_superuser),
) -> Any:
    """
    Delete a user. Users cannot delete themselves.

    Raises:
        HTTPException 404: If the user doesn't exist
        HTTPException 400: If trying to delete yourself
    """
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if user.id == current_user.id:
        raise HTTPException(
            status_code=400, detail="Users cannot delete themselves"
        )

    # Snapshot before the row is gone; the instance is unusable after commit
    deleted = UserRead.model_validate(user)
    db.delete(user)
    db.commit()
    logger.info("%s deleted user %s", current_user.email, deleted.email)
    return deleted
