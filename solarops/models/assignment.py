"""
Project Assignment Model Module

An assignment grants one person (identified by email) visibility into a set of
regions and feature modules. Effective access is the union of every row that
carries the person's email (see services.access).
"""
from typing import Dict, List, Optional
from sqlmodel import SQLModel, Field, JSON, Column
from datetime import datetime


class ProjectAssignment(SQLModel, table=True):
    """
    Attributes:
        id: Auto-incrementing primary key
        assignee_email: Email of the person being granted access (unique; upserted on)
        assignee_name: Display name of the assignee
        assigned_states: Region names, e.g. ["Telangana", "Chitoor"]
        module_access: Module keys, e.g. ["projects", "finance"]
        region_access: Per-region level, e.g. {"Telangana": "edit"}; view < edit < admin
        project_count: Number of projects handed to this person (informational)
        created_at: ISO timestamp when the assignment was created
        updated_at: ISO timestamp of the last upsert
    """
    __tablename__ = "project_assignments"

    id: Optional[int] = Field(default=None, primary_key=True)
    assignee_email: str = Field(index=True, unique=True, nullable=False)
    assignee_name: str = Field(nullable=False)

    # JSON columns - lists/maps of plain strings
    assigned_states: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    module_access: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    region_access: Dict[str, str] = Field(default_factory=dict, sa_column=Column(JSON))

    project_count: int = 0

    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
