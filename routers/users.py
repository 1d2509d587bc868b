# routers/users.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from core.errors import handle_supabase_error
from core.permissions import RoleAccess, get_role_access
from core.supabase_client import get_supabase_client
from core.supabase_helpers import list_profiles
from core.logging_config import logger
from dependencies.auth import get_current_user, CurrentUser, requires_permission
from models.enums import Permission
from models.user import ProfileSyncResult, RoleUpdateRequest, UserProfile
from services import profile_service


router = APIRouter(
    prefix="/users",
    tags=["User Management"],
)


# -----------------------------------------------------
# GET /users
# -----------------------------------------------------
@router.get(
    "",
    response_model=List[UserProfile],
    summary="List user profiles",
    dependencies=[Depends(requires_permission(Permission.view_all_users))],
)
def list_users():
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        rows = list_profiles(client)
    except Exception as e:
        raise handle_supabase_error(e, "List users")

    return [UserProfile(**row) for row in rows]


# -----------------------------------------------------
# PATCH /users/{user_id}/role
# -----------------------------------------------------
@router.patch("/{user_id}/role", response_model=UserProfile, summary="Change a user's role")
def change_user_role(
    user_id: str,
    payload: RoleUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    access: RoleAccess = Depends(get_role_access),
):
    result = profile_service.update_user_role(
        current_user.id,
        user_id,
        payload.role,
        access=access,
    )

    if not result.success:
        status_code = {
            profile_service.NOT_FOUND: 404,
            profile_service.BACKEND: 500,
        }.get(result.reason, 403)
        raise HTTPException(status_code, result.error)

    logger.info(f"{current_user.email} set role of {user_id} to {payload.role}")
    return result.profile


# -----------------------------------------------------
# POST /users/sync-profiles
# -----------------------------------------------------
@router.post(
    "/sync-profiles",
    response_model=ProfileSyncResult,
    summary="Create missing profiles for auth users",
    dependencies=[Depends(requires_permission(Permission.create_users))],
)
def sync_profiles(access: RoleAccess = Depends(get_role_access)):
    return profile_service.sync_missing_profiles(access=access)
