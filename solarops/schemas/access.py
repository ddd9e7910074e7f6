"""
Schemas for project assignments and the resolved access profile.
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class AssignmentUpsert(BaseModel):
    """Body for creating or replacing the assignment of one person."""
    assignee_email: Optional[str] = None
    assignee_name: Optional[str] = None
    assigned_states: List[str] = Field(default_factory=list)
    module_access: List[str] = Field(default_factory=list)
    region_access: Dict[str, str] = Field(default_factory=dict)
    project_count: int = 0


class AssignmentStats(BaseModel):
    total_assignments: int
    unique_assignees: int
    unique_states: int
    total_projects: int


class AccessProfile(BaseModel):
    """
    What one user may see, merged across all of their assignment rows.

    An admin ignores regions and modules entirely. A non-admin with no regions
    sees every region; a non-admin with no modules opens no module.
    """
    email: str
    is_admin: bool = False
    regions: List[str] = Field(default_factory=list)
    modules: List[str] = Field(default_factory=list)
    region_access: Dict[str, str] = Field(default_factory=dict)
