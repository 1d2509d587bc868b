from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client

from core.logging_config import logger
from core.permissions import RoleAccess, get_role_access
from core.supabase_client import get_supabase_client
from core.supabase_helpers import fetch_profile
from models.enums import Role


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model
# ============================================================
class CurrentUser(BaseModel):
    id: str                         # Supabase Auth UID == users.id
    email: str
    role: Role

    name: Optional[str] = None
    team_id: Optional[str] = None
    has_profile: bool = True


# ============================================================
# AUTH DECODING (Supabase: validates JWT + loads profile role)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    access: RoleAccess = Depends(get_role_access),
) -> CurrentUser:

    token = credentials.credentials

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    client: Client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    # ---------------------------------------------------------
    # Validate JWT via Supabase GoTrue
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(token)
    except Exception:
        raise unauthorized

    if not auth_resp or not auth_resp.user or not auth_resp.user.email:
        raise unauthorized

    auth_user = auth_resp.user

    # ---------------------------------------------------------
    # Role comes from the profile row, never from user metadata
    # ---------------------------------------------------------
    try:
        profile = fetch_profile(client, auth_user.id)
    except Exception as e:
        logger.error(f"Profile lookup failed for {auth_user.id}: {e}")
        raise HTTPException(500, "Unable to load user profile")

    default_role = access.get_default_role()

    if not profile:
        return CurrentUser(
            id=auth_user.id,
            email=auth_user.email,
            role=default_role,
            has_profile=False,
        )

    role = Role.parse(profile.get("role"))
    if role is None:
        logger.warning(
            f"User {auth_user.id} has unrecognized role {profile.get('role')!r}; "
            f"treating as {default_role}"
        )
        role = default_role

    return CurrentUser(
        id=auth_user.id,
        email=auth_user.email,
        role=role,
        name=profile.get("name"),
        team_id=profile.get("team_id"),
    )


# ============================================================
# PERMISSION CHECK (DELEGATES TO permission_helpers)
# ============================================================
def requires_permission(permission):
    """
    Thin wrapper so routes can still import from dependencies.auth.
    Real RBAC logic lives in core.permission_helpers.
    """
    from core.permission_helpers import requires_permission as new_checker
    return new_checker(permission)
