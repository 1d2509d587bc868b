# -------------------------
# Enums
# -------------------------
from .enums import (
    AppModule,
    Permission,
    Role,
)

# -------------------------
# Role Models
# -------------------------
from .role import (
    RoleAssignmentResult,
    RoleInfo,
    RoleOverview,
    RouteAccessRead,
)

# -------------------------
# User / Profile Models
# -------------------------
from .user import (
    ProfileResult,
    ProfileSyncResult,
    RoleUpdateRequest,
    UserProfile,
)

__all__ = [
    # enums
    "AppModule",
    "Permission",
    "Role",

    # roles
    "RoleAssignmentResult",
    "RoleInfo",
    "RoleOverview",
    "RouteAccessRead",

    # users
    "ProfileResult",
    "ProfileSyncResult",
    "RoleUpdateRequest",
    "UserProfile",
]
