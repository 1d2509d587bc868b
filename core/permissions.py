# core/permissions.py

"""
Role-based access decisions.

RoleAccess answers permission, level and role-assignment questions over a
RoleTable. Every method is total: unknown roles, unknown permission keys and
unknown paths resolve to the least-privileged answer (False, level 0, no
modules) instead of raising.

Module-level helpers delegate to the process-wide instance returned by
get_role_access(), which is built from the default table or from
settings.ROLE_TABLE_PATH on first use.
"""

from typing import Callable, Dict, Optional, Tuple

from core.roles import DEFAULT_ROLE_TABLE, RoleTable
from models.enums import AppModule, Permission, Role
from models.role import RoleAssignmentResult, RoleInfo


# ============================================================
# Role Access Engine
# ============================================================
class RoleAccess:

    def __init__(self, table: RoleTable = DEFAULT_ROLE_TABLE):
        self.table = table

    # -----------------------------------------------------
    # Permission + level checks
    # -----------------------------------------------------
    def has_permission(self, role, permission) -> bool:
        definition = self.table.get(role)
        perm = Permission.parse(permission)
        if definition is None or perm is None:
            return False
        return definition.allows(perm)

    def role_level(self, role) -> int:
        return self.table.level(role)

    def has_minimum_level(self, role, minimum_level: int) -> bool:
        return self.role_level(role) >= minimum_level

    def has_higher_level(self, role_a, role_b) -> bool:
        return self.role_level(role_a) > self.role_level(role_b)

    # -----------------------------------------------------
    # Dashboard modules
    # -----------------------------------------------------
    def get_available_modules(self, role) -> Tuple[AppModule, ...]:
        """
        Sidebar modules for a role, in display order.
        Unknown roles get no modules at all.
        """
        if role not in self.table:
            return ()

        def any_of(*perms: Permission) -> bool:
            return any(self.has_permission(role, perm) for perm in perms)

        modules = [AppModule.dashboard]

        if any_of(Permission.view_all_users, Permission.update_user_roles):
            modules.append(AppModule.user_management)

        if any_of(Permission.view_all_teams, Permission.create_teams):
            modules.append(AppModule.team_management)

        if any_of(Permission.view_all_performance, Permission.create_performance):
            modules.append(AppModule.performance)

        if any_of(Permission.view_reports, Permission.view_analytics):
            modules.append(AppModule.reports)

        modules.append(AppModule.profile)
        return tuple(modules)

    # -----------------------------------------------------
    # Role info
    # -----------------------------------------------------
    def get_all_roles(self) -> Tuple[Role, ...]:
        return self.table.roles()

    def get_role_info(self, role) -> RoleInfo:
        definition = self.table.get(role)
        if definition is None:
            return RoleInfo(role=None, name="Unknown", level=0, description="No description")

        return RoleInfo(
            role=Role.parse(role),
            name=definition.name,
            level=definition.level,
            description=definition.description,
        )

    def get_default_role(self) -> Role:
        return Role.pending

    # -----------------------------------------------------
    # Role assignment
    # -----------------------------------------------------
    def can_update_user_role(self, acting_role, target_current_role, proposed_role) -> bool:
        """
        Order matters:
          1. actor needs updateUserRoles
          2. admin may change anything
          3. nobody else may hand out admin
          4. actor must outrank the target's current role
        """
        if not self.has_permission(acting_role, Permission.update_user_roles):
            return False

        if Role.parse(acting_role) is Role.admin:
            return True

        if Role.parse(proposed_role) is Role.admin:
            return False

        return self.has_higher_level(acting_role, target_current_role)

    def validate_role_assignment(self, acting_role, proposed_role) -> RoleAssignmentResult:
        if not self.has_permission(acting_role, Permission.update_user_roles):
            return RoleAssignmentResult(
                valid=False,
                error="You do not have permission to update user roles",
            )

        if Role.parse(proposed_role) is Role.admin and Role.parse(acting_role) is not Role.admin:
            return RoleAssignmentResult(
                valid=False,
                error="Only admins can assign admin role",
            )

        if proposed_role not in self.table:
            return RoleAssignmentResult(valid=False, error="Invalid role specified")

        return RoleAssignmentResult(valid=True)

    def get_assignable_roles(self, acting_role) -> Tuple[Role, ...]:
        if Role.parse(acting_role) is Role.admin:
            return self.get_all_roles()

        # Relies on admin being the only role at its level (checked by RoleTable)
        current_level = self.role_level(acting_role)
        return tuple(
            role for role in self.get_all_roles()
            if self.role_level(role) < current_level
        )

    # -----------------------------------------------------
    # Dashboard routes
    # -----------------------------------------------------
    def can_access_route(self, role, path: str) -> bool:
        if not isinstance(path, str):
            return False

        check = ROUTE_ACCESS.get(path.rstrip("/") or "/")
        if check is None:
            return False
        return check(self, Role.parse(role))


# ============================================================
# Dashboard route map (unlisted paths are denied)
# ============================================================
ROUTE_ACCESS: Dict[str, Callable[[RoleAccess, Optional[Role]], bool]] = {
    "/dashboard/user-management": lambda access, role: access.has_permission(
        role, Permission.view_all_users
    ),
    "/dashboard/team-management": lambda access, role: (
        access.has_permission(role, Permission.view_all_teams)
        or role is Role.coach
    ),
    "/dashboard/performance": lambda access, role: (
        access.has_permission(role, Permission.view_all_performance)
        or role in (Role.player, Role.coach)
    ),
    "/dashboard/profile": lambda access, role: role is not None,
    "/dashboard": lambda access, role: role is not None,
}


# ============================================================
# Process-wide instance
# ============================================================
_role_access: Optional[RoleAccess] = None


def get_role_access() -> RoleAccess:
    """
    Return the shared engine, loading the role table on first call.
    Also usable as a FastAPI dependency (override it in tests).
    """
    global _role_access

    if _role_access is None:
        from core.config import settings
        from core.role_loader import load_role_table

        table = DEFAULT_ROLE_TABLE
        if settings.ROLE_TABLE_PATH:
            table = load_role_table(settings.ROLE_TABLE_PATH)
        _role_access = RoleAccess(table)

    return _role_access


def reset_role_access():
    """Drop the shared engine so the next call reloads it."""
    global _role_access
    _role_access = None


def has_permission(role, permission) -> bool:
    return get_role_access().has_permission(role, permission)


def has_minimum_level(role, minimum_level: int) -> bool:
    return get_role_access().has_minimum_level(role, minimum_level)


def has_higher_level(role_a, role_b) -> bool:
    return get_role_access().has_higher_level(role_a, role_b)


def get_available_modules(role) -> Tuple[AppModule, ...]:
    return get_role_access().get_available_modules(role)


def get_role_info(role) -> RoleInfo:
    return get_role_access().get_role_info(role)


def get_all_roles() -> Tuple[Role, ...]:
    return get_role_access().get_all_roles()


def get_default_role() -> Role:
    return get_role_access().get_default_role()


def can_update_user_role(acting_role, target_current_role, proposed_role) -> bool:
    return get_role_access().can_update_user_role(
        acting_role, target_current_role, proposed_role
    )


def validate_role_assignment(acting_role, proposed_role) -> RoleAssignmentResult:
    return get_role_access().validate_role_assignment(acting_role, proposed_role)


def get_assignable_roles(acting_role) -> Tuple[Role, ...]:
    return get_role_access().get_assignable_roles(acting_role)


def can_access_route(role, path: str) -> bool:
    return get_role_access().can_access_route(role, path)
