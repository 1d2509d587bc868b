# models/user.py

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel


# ===============================================================
# PROFILE (public.users) MODELS
# ===============================================================

class UserProfile(BaseModel):
    """
    One row of the profiles table, keyed by the Supabase Auth UID.
    role is kept as the raw stored string; the access engine decides
    what an unrecognized value means (nothing).
    """
    id: str
    email: str
    name: Optional[str] = None
    role: Optional[str] = None
    role_level: Optional[int] = None
    team_id: Optional[str] = None
    created_at: Optional[datetime] = None


class RoleUpdateRequest(BaseModel):
    """Body for PATCH /users/{user_id}/role. Raw string: validated by the engine."""
    role: str


# ===============================================================
# SERVICE RESULTS
# ===============================================================

class ProfileResult(BaseModel):
    """
    Outcome of a profile mutation.
    Failures are reported here rather than raised; reason is one of
    "forbidden", "not_found" or "backend".
    """
    success: bool
    profile: Optional[UserProfile] = None
    error: Optional[str] = None
    reason: Optional[str] = None


class ProfileSyncResult(BaseModel):
    created: List[str] = []
    existing: int = 0
    errors: List[str] = []
