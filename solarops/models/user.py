"""
User Model Module

This module defines the User model and UserRole enumeration for authentication
and authorization throughout the console.
"""
from enum import Enum
from typing import List, Optional
from sqlmodel import SQLModel, Field, JSON, Column
import uuid
from datetime import datetime


class UserRole(str, Enum):
    """
    Enumeration of user roles defining permission levels in the system.

    - USER: Basic account; what it can open is decided by its project assignments
    - STAFF: Internal staff member
    - FINANCE: May open finance screens, tax invoices and the payments ledger
    - EDITOR: May edit any project regardless of region access level
    - ADMIN: Full access to every module and region
    - SUPER_ADMIN: Same as ADMIN, reserved for the account owners

    Region and module visibility for non-admins comes from ProjectAssignment
    rows, not from roles.
    """
    USER = "user"
    STAFF = "staff"
    FINANCE = "finance"
    EDITOR = "editor"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class User(SQLModel, table=True):
    """
    User model representing authenticated console users.

    Attributes:
        id: Unique identifier (UUID) automatically generated for each user
        email: Login email; also the key used to look up project assignments
        password: Hashed password (bcrypt)
        full_name: Display name
        roles: List of UserRole values (default: [USER])
        created_at: ISO timestamp when the account was created
        updated_at: ISO timestamp of the last profile change
    """
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    # Authentication fields
    email: str = Field(unique=True, index=True, nullable=False)
    password: Optional[str] = None  # Hashed password (bcrypt)

    full_name: Optional[str] = None

    # Authorization - stored as JSON array in database
    roles: List[UserRole] = Field(default=[UserRole.USER], sa_column=Column(JSON))

    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())

    @property
    def is_privileged(self) -> bool:
        """Helper to check if user has admin-level roles."""
        return UserRole.ADMIN in self.roles or UserRole.SUPER_ADMIN in self.roles

    def has_role(self, *roles: UserRole) -> bool:
        return any(role in self.roles for role in roles)
