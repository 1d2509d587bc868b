# routers/roles.py

from typing import Dict, List

from fastapi import APIRouter, Depends, Query

from core.permission_helpers import requires_minimum_level
from core.permissions import RoleAccess, get_role_access
from dependencies.auth import get_current_user, CurrentUser
from models.enums import Permission
from models.role import RoleInfo, RoleOverview, RouteAccessRead


router = APIRouter(
    prefix="/roles",
    tags=["Roles"],
)

# Full permission matrix is visible from manager level up
MATRIX_MINIMUM_LEVEL = 80


# -----------------------------------------------------
# GET /roles
# -----------------------------------------------------
@router.get("", response_model=List[RoleInfo], summary="List all roles")
def list_roles(access: RoleAccess = Depends(get_role_access)):
    return [access.get_role_info(role) for role in access.get_all_roles()]


# -----------------------------------------------------
# GET /roles/matrix
# -----------------------------------------------------
@router.get(
    "/matrix",
    summary="Role permission matrix",
    dependencies=[Depends(requires_minimum_level(MATRIX_MINIMUM_LEVEL))],
)
def role_matrix(access: RoleAccess = Depends(get_role_access)) -> Dict[str, Dict[str, bool]]:
    return {
        role.value: {
            perm.value: access.has_permission(role, perm) for perm in Permission
        }
        for role in access.get_all_roles()
    }


# -----------------------------------------------------
# GET /roles/me
# -----------------------------------------------------
@router.get("/me", response_model=RoleOverview, summary="Caller's role, modules and assignable roles")
def my_role(
    current_user: CurrentUser = Depends(get_current_user),
    access: RoleAccess = Depends(get_role_access),
):
    return RoleOverview(
        role=access.get_role_info(current_user.role),
        modules=list(access.get_available_modules(current_user.role)),
        assignable_roles=list(access.get_assignable_roles(current_user.role)),
    )


# -----------------------------------------------------
# GET /roles/me/routes?path=/dashboard/...
# -----------------------------------------------------
@router.get("/me/routes", response_model=RouteAccessRead, summary="Check dashboard route access")
def my_route_access(
    path: str = Query(..., description="Dashboard path, e.g. /dashboard/performance"),
    current_user: CurrentUser = Depends(get_current_user),
    access: RoleAccess = Depends(get_role_access),
):
    return RouteAccessRead(path=path, allowed=access.can_access_route(current_user.role, path))
