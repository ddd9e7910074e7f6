"""
API Dependencies Module

This module provides FastAPI dependency functions for authentication and authorization.
Authentication accepts a bearer token (API clients) or an HTTP-only cookie (browser
clients). Authorization has three layers:

1. Roles on the user record (RoleChecker, get_current_active_superuser)
2. Module access from project assignments (ModuleGuard)
3. Region access from project assignments (RegionGuard, plus row-level checks
   in the endpoints through services.access)
"""
import logging
from typing import List, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from pydantic import ValidationError
from sqlmodel import Session, select

from solarops.core.config import settings
from solarops.db.session import get_db
from solarops.models.assignment import ProjectAssignment
from solarops.models.user import User, UserRole
from solarops.schemas.access import AccessProfile
from solarops.schemas.auth import TokenData
from solarops.services import access

logger = logging.getLogger(__name__)

# auto_error=False allows us to check cookies as a fallback
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login",
    auto_error=False
)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(reusable_oauth2)
) -> User:
    """
    Dependency that retrieves and validates the current authenticated user.

    Checks the Authorization header first and falls back to the
    ``access_token`` cookie ("Bearer <token>").

    Raises:
        HTTPException 401: If no token is provided
        HTTPException 403: If the token is invalid or expired
        HTTPException 404: If the user referenced in the token doesn't exist
    """
    if not token:
        token = request.cookies.get("access_token")
        if token and token.startswith("Bearer "):
            token = token.replace("Bearer ", "", 1)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        token_data = TokenData(email=payload.get("sub"))
    except (JWTError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )

    user = db.exec(select(User).where(User.email == token_data.email)).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    # Placeholder for account-status checks; every stored user is active today
    return current_user


class RoleChecker:
    """
    Dependency factory for checking user roles.

    Admins always pass.

    Usage: Depends(RoleChecker([UserRole.FINANCE]))
    """
    def __init__(self, allowed_roles: List[UserRole]):
        self.allowed_roles = allowed_roles

    def __call__(self, current_user: User = Depends(get_current_active_user)) -> User:
        if current_user.is_privileged:
            return current_user
        if not current_user.has_role(*self.allowed_roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"The user does not have enough privileges. Required roles: {[r.value for r in self.allowed_roles]}"
            )
        return current_user


def get_current_active_superuser(
    current_user: User = Depends(get_current_active_user),
) -> User:
    """
    Dependency that requires the current user to be an administrator.
    """
    if not current_user.is_privileged:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="The user doesn't have enough privileges"
        )
    return current_user


def get_access_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> AccessProfile:
    """
    Merge every project assignment of the current user into one AccessProfile.
    """
    assignments = db.exec(
        select(ProjectAssignment).where(ProjectAssignment.assignee_email == current_user.email.lower())
    ).all()
    return access.build_access_profile(current_user, assignments)


class ModuleGuard:
    """
    Dependency that requires access to a feature module.

    Usage: Depends(ModuleGuard("finance"))
    """
    def __init__(self, module_key: str):
        self.module_key = module_key

    def __call__(self, profile: AccessProfile = Depends(get_access_profile)) -> AccessProfile:
        if not access.module_allowed(profile, self.module_key):
            logger.info("Module %s denied for %s", self.module_key, profile.email)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"You do not have access to the {self.module_key} module"
            )
        return profile


class RegionGuard:
    """
    Dependency that requires access to at least one of the given regions.

    Usage: Depends(RegionGuard(["Chitoor"]))
    """
    def __init__(self, allowed_regions: List[str]):
        self.allowed_regions = allowed_regions

    def __call__(self, profile: AccessProfile = Depends(get_access_profile)) -> AccessProfile:
        if not access.region_allowed(profile, self.allowed_regions):
            logger.info("Regions %s denied for %s", self.allowed_regions, profile.email)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have access to this region"
            )
        return profile


# Finance screens need the finance role or an admin role
require_finance = RoleChecker([UserRole.FINANCE])
