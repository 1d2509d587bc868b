from fastapi import Depends, HTTPException

from core.permissions import RoleAccess, get_role_access
from dependencies.auth import get_current_user, CurrentUser
from models.enums import Permission


# -----------------------------------------------------
# FastAPI dependency: single permission flag
# -----------------------------------------------------
def requires_permission(permission: Permission):
    """
    Usage:
        @router.get("/", dependencies=[Depends(requires_permission(Permission.view_all_users))])
    """

    def dependency(
        current_user: CurrentUser = Depends(get_current_user),
        access: RoleAccess = Depends(get_role_access),
    ):
        if not access.has_permission(current_user.role, permission):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{permission}' required",
            )
        return current_user

    return dependency


# -----------------------------------------------------
# FastAPI dependency: minimum role level
# -----------------------------------------------------
def requires_minimum_level(minimum_level: int):

    def dependency(
        current_user: CurrentUser = Depends(get_current_user),
        access: RoleAccess = Depends(get_role_access),
    ):
        if not access.has_minimum_level(current_user.role, minimum_level):
            raise HTTPException(
                status_code=403,
                detail=f"Role level {minimum_level} or higher required",
            )
        return current_user

    return dependency
