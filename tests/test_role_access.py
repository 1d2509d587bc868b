# tests/test_role_access.py

"""
Tests for the role access engine (permission, level and assignment rules).
"""

import pytest

from core import permissions
from core.permissions import RoleAccess
from models.enums import AppModule, Permission, Role


ALL_ROLES = list(Role)
ALL_PERMISSIONS = list(Permission)


# -----------------------------------------------------
# has_permission
# -----------------------------------------------------
@pytest.mark.parametrize("role", ALL_ROLES)
def test_every_role_answers_every_permission_with_a_bool(access: RoleAccess, role):
    for perm in ALL_PERMISSIONS:
        assert isinstance(access.has_permission(role, perm), bool)


def test_admin_has_every_permission(access: RoleAccess):
    assert all(access.has_permission(Role.admin, perm) for perm in ALL_PERMISSIONS)


@pytest.mark.parametrize("role", [Role.player, Role.pending])
def test_player_and_pending_have_no_permissions(access: RoleAccess, role):
    assert not any(access.has_permission(role, perm) for perm in ALL_PERMISSIONS)


def test_manager_cannot_delete_or_manage_users(access: RoleAccess):
    assert access.has_permission(Role.manager, Permission.create_teams)
    assert access.has_permission(Role.manager, Permission.update_finances)
    assert not access.has_permission(Role.manager, Permission.delete_teams)
    assert not access.has_permission(Role.manager, Permission.delete_performance)
    assert not access.has_permission(Role.manager, Permission.update_user_roles)
    assert not access.has_permission(Role.manager, Permission.view_admin_panel)


def test_coach_and_analyst_permissions(access: RoleAccess):
    assert access.has_permission(Role.coach, Permission.create_performance)
    assert not access.has_permission(Role.coach, Permission.view_all_teams)
    assert access.has_permission(Role.analyst, Permission.view_reports)
    assert not access.has_permission(Role.analyst, Permission.create_performance)


def test_raw_strings_are_accepted(access: RoleAccess):
    assert access.has_permission("admin", "viewAllUsers") is True
    assert access.has_permission("coach", "viewAnalytics") is True
    assert access.has_permission("coach", "deleteTeams") is False


@pytest.mark.parametrize("role", ["superuser", "", "ADMIN", None, 42, ["admin"]])
def test_unknown_role_has_no_permission(access: RoleAccess, role):
    assert access.has_permission(role, Permission.view_all_users) is False


@pytest.mark.parametrize("role", [" admin ", "admin\n", "\tadmin", "Admin", "admin "])
def test_padded_or_recased_role_is_unknown(access: RoleAccess, role):
    assert access.has_permission(role, Permission.view_admin_panel) is False
    assert access.can_update_user_role(role, Role.player, Role.admin) is False
    assert access.validate_role_assignment(role, Role.player).valid is False
    assert access.role_level(role) == 0
    assert access.get_available_modules(role) == ()


def test_padded_proposed_role_is_not_admin(access: RoleAccess):
    result = access.validate_role_assignment(Role.admin, " admin")
    assert result.valid is False
    assert result.error == "Invalid role specified"


@pytest.mark.parametrize("key", ["canFly", "", None, "view_all_users", " viewAllUsers", "viewallusers"])
def test_unknown_permission_key_is_denied(access: RoleAccess, key):
    assert access.has_permission(Role.admin, key) is False


# -----------------------------------------------------
# Levels
# -----------------------------------------------------
@pytest.mark.parametrize("role", ALL_ROLES)
def test_every_known_role_meets_level_zero(access: RoleAccess, role):
    assert access.has_minimum_level(role, 0) is True


def test_minimum_level_thresholds(access: RoleAccess):
    assert access.has_minimum_level(Role.manager, 80)
    assert not access.has_minimum_level(Role.coach, 80)
    assert access.has_minimum_level(Role.pending, 10)
    assert not access.has_minimum_level(Role.pending, 11)


def test_unknown_role_has_level_zero(access: RoleAccess):
    assert access.role_level("ghost") == 0
    assert access.has_minimum_level("ghost", 0) is True
    assert access.has_minimum_level("ghost", 1) is False


def test_higher_level_is_strict(access: RoleAccess):
    assert access.has_higher_level(Role.admin, Role.manager) is True
    assert access.has_higher_level(Role.manager, Role.admin) is False
    assert access.has_higher_level(Role.admin, Role.admin) is False


def test_higher_level_with_unknown_roles(access: RoleAccess):
    assert access.has_higher_level(Role.pending, "ghost") is True
    assert access.has_higher_level("ghost", Role.pending) is False
    assert access.has_higher_level("ghost", "phantom") is False


# -----------------------------------------------------
# Modules
# -----------------------------------------------------
def test_pending_gets_dashboard_and_profile_only(access: RoleAccess):
    assert access.get_available_modules(Role.pending) == (AppModule.dashboard, AppModule.profile)


def test_admin_modules_in_display_order(access: RoleAccess):
    assert access.get_available_modules(Role.admin) == (
        AppModule.dashboard,
        AppModule.user_management,
        AppModule.team_management,
        AppModule.performance,
        AppModule.reports,
        AppModule.profile,
    )


def test_role_specific_modules(access: RoleAccess):
    assert access.get_available_modules(Role.manager) == (
        AppModule.dashboard,
        AppModule.team_management,
        AppModule.performance,
        AppModule.reports,
        AppModule.profile,
    )
    assert access.get_available_modules(Role.coach) == (
        AppModule.dashboard,
        AppModule.performance,
        AppModule.reports,
        AppModule.profile,
    )
    assert access.get_available_modules(Role.analyst) == (
        AppModule.dashboard,
        AppModule.reports,
        AppModule.profile,
    )


def test_unknown_role_gets_no_modules(access: RoleAccess):
    assert access.get_available_modules("ghost") == ()


# -----------------------------------------------------
# can_update_user_role
# -----------------------------------------------------
def test_admin_can_change_any_role(access: RoleAccess):
    assert access.can_update_user_role(Role.admin, Role.player, Role.manager) is True
    assert access.can_update_user_role(Role.admin, Role.admin, Role.pending) is True
    assert access.can_update_user_role(Role.admin, Role.pending, Role.admin) is True


def test_manager_cannot_grant_admin(access: RoleAccess):
    assert access.can_update_user_role(Role.manager, Role.coach, Role.admin) is False


def test_role_without_update_permission_is_denied(access: RoleAccess):
    assert access.can_update_user_role(Role.coach, Role.player, Role.analyst) is False
    assert access.can_update_user_role(Role.manager, Role.pending, Role.player) is False


def test_unknown_actor_is_denied(access: RoleAccess):
    assert access.can_update_user_role("ghost", Role.pending, Role.player) is False


# -----------------------------------------------------
# validate_role_assignment
# -----------------------------------------------------
def test_validate_rejects_actor_without_permission(access: RoleAccess):
    result = access.validate_role_assignment(Role.manager, "admin")
    assert result.valid is False
    assert result.error == "You do not have permission to update user roles"


def test_validate_rejects_unknown_target_role(access: RoleAccess):
    result = access.validate_role_assignment(Role.admin, "bogus_role")
    assert result.valid is False
    assert result.error == "Invalid role specified"


def test_validate_accepts_admin_assignments(access: RoleAccess):
    for role in ALL_ROLES:
        result = access.validate_role_assignment(Role.admin, role)
        assert result.valid is True
        assert result.error is None


# -----------------------------------------------------
# get_assignable_roles / defaults / info
# -----------------------------------------------------
def test_admin_can_assign_every_role(access: RoleAccess):
    assert access.get_assignable_roles(Role.admin) == tuple(ALL_ROLES)


def test_manager_can_assign_lower_roles(access: RoleAccess):
    assert set(access.get_assignable_roles(Role.manager)) == {
        Role.coach, Role.analyst, Role.player, Role.pending,
    }


def test_pending_and_unknown_can_assign_nothing(access: RoleAccess):
    assert access.get_assignable_roles(Role.pending) == ()
    assert access.get_assignable_roles("ghost") == ()


def test_default_role_is_pending(access: RoleAccess):
    assert access.get_default_role() is Role.pending
    assert access.get_default_role() is access.get_default_role()


def test_role_info(access: RoleAccess):
    info = access.get_role_info("coach")
    assert info.role is Role.coach
    assert info.name == "Coach"
    assert info.level == 70

    unknown = access.get_role_info("ghost")
    assert unknown.role is None
    assert unknown.name == "Unknown"
    assert unknown.level == 0
    assert unknown.description == "No description"


# -----------------------------------------------------
# Dashboard routes
# -----------------------------------------------------
@pytest.mark.parametrize(
    "role,path,allowed",
    [
        (Role.admin, "/dashboard/user-management", True),
        (Role.manager, "/dashboard/user-management", False),
        (Role.manager, "/dashboard/team-management", True),
        (Role.coach, "/dashboard/team-management", True),
        (Role.analyst, "/dashboard/team-management", False),
        (Role.player, "/dashboard/performance", True),
        (Role.analyst, "/dashboard/performance", False),
        (Role.pending, "/dashboard", True),
        (Role.pending, "/dashboard/profile/", True),
        (Role.admin, "/dashboard/unknown", False),
        ("ghost", "/dashboard", False),
    ],
)
def test_route_access(access: RoleAccess, role, path, allowed):
    assert access.can_access_route(role, path) is allowed


# -----------------------------------------------------
# Module-level helpers use the shared engine
# -----------------------------------------------------
def test_module_helpers_delegate_to_shared_engine():
    assert permissions.has_permission("admin", Permission.view_admin_panel) is True
    assert permissions.has_higher_level("manager", "coach") is True
    assert permissions.get_default_role() is Role.pending
    assert permissions.get_available_modules("pending") == (AppModule.dashboard, AppModule.profile)
    assert permissions.can_update_user_role("manager", "coach", "admin") is False
    assert permissions.validate_role_assignment("admin", "player").valid is True
    assert permissions.get_assignable_roles("analyst") == (Role.player, Role.pending)
    assert permissions.can_access_route("coach", "/dashboard/performance") is True
    assert permissions.get_role_info("admin").level == 100
    assert len(permissions.get_all_roles()) == 6
    assert permissions.has_minimum_level("player", 50) is True
