# models/role.py

from typing import List, Optional
from pydantic import BaseModel

from models.enums import AppModule, Role


class RoleInfo(BaseModel):
    """Display information for a role (dropdowns, profile badges)."""
    role: Optional[Role] = None
    name: str
    level: int
    description: str


class RoleAssignmentResult(BaseModel):
    """
    Outcome of validating a role assignment.
    error is set only when valid is False.
    """
    valid: bool
    error: Optional[str] = None


class RoleOverview(BaseModel):
    """Everything the dashboard shell needs to know about the caller's role."""
    role: RoleInfo
    modules: List[AppModule]
    assignable_roles: List[Role]


class RouteAccessRead(BaseModel):
    path: str
    allowed: bool
