from enum import Enum
from typing import Optional


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]

    @classmethod
    def parse(cls, value) -> Optional["BaseStrEnum"]:
        """
        Convert a raw value (member or string) into a member.
        Returns None for anything unrecognized instead of raising.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# -----------------------------------------------------
# USER ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Identity stored on users.role. Declared highest level first."""

    admin = "admin"
    manager = "manager"
    coach = "coach"
    analyst = "analyst"
    player = "player"
    pending = "pending"


# -----------------------------------------------------
# PERMISSION KEY
# -----------------------------------------------------
class Permission(BaseStrEnum):
    """Boolean capability flags, grouped by dashboard area."""

    # User management
    view_all_users = "viewAllUsers"
    update_user_roles = "updateUserRoles"
    delete_users = "deleteUsers"
    create_users = "createUsers"

    # Team management
    view_all_teams = "viewAllTeams"
    create_teams = "createTeams"
    update_teams = "updateTeams"
    delete_teams = "deleteTeams"
    assign_coaches = "assignCoaches"

    # Performance & analytics
    view_all_performance = "viewAllPerformance"
    create_performance = "createPerformance"
    update_performance = "updatePerformance"
    delete_performance = "deletePerformance"

    # Scrims & matches
    view_all_scrims = "viewAllScrims"
    create_scrims = "createScrims"
    update_scrims = "updateScrims"
    delete_scrims = "deleteScrims"

    # Finances
    view_all_finances = "viewAllFinances"
    create_finances = "createFinances"
    update_finances = "updateFinances"
    delete_finances = "deleteFinances"

    # System
    view_admin_panel = "viewAdminPanel"
    view_reports = "viewReports"
    view_analytics = "viewAnalytics"
    system_configuration = "systemConfiguration"


# -----------------------------------------------------
# DASHBOARD MODULE
# -----------------------------------------------------
class AppModule(BaseStrEnum):
    """Top-level dashboard sections shown in the sidebar."""

    dashboard = "dashboard"
    user_management = "user-management"
    team_management = "team-management"
    performance = "performance"
    reports = "reports"
    profile = "profile"
