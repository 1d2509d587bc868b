# core/roles.py

"""
Role definitions and the static role table.

The table is built once at startup and handed to the access engine
(core.permissions.RoleAccess). Nothing here is mutated at runtime.
"""

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.enums import Permission, Role


class RoleTableError(ValueError):
    """Raised when a role table is incomplete or inconsistent."""


# ============================================================
# Role Definition
# ============================================================
class RoleDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1)
    name: str
    description: str = ""
    permissions: Mapping[Permission, bool] = Field(default_factory=dict, validate_default=True)

    @field_validator("permissions")
    @classmethod
    def fill_missing_permissions(cls, value: Mapping[Permission, bool]) -> Mapping[Permission, bool]:
        # Every key is present and read-only; anything not granted explicitly is False
        return MappingProxyType({perm: value.get(perm, False) is True for perm in Permission})

    def allows(self, permission: Permission) -> bool:
        return self.permissions.get(permission, False) is True


def _grant(*granted: Permission) -> Dict[Permission, bool]:
    return {perm: perm in granted for perm in Permission}


# ============================================================
# Role Table
# ============================================================
class RoleTable:
    """
    Immutable Role -> RoleDefinition mapping.

    Invariants checked on construction:
      • every Role has a definition
      • admin is the only role at or above admin's level
    Iteration follows Role declaration order (highest level first).
    """

    def __init__(self, definitions: Mapping[Role, RoleDefinition]):
        missing = [role.value for role in Role if role not in definitions]
        if missing:
            raise RoleTableError(f"Role table is missing definitions for: {', '.join(missing)}")

        admin_level = definitions[Role.admin].level
        for role in Role:
            if role is not Role.admin and definitions[role].level >= admin_level:
                raise RoleTableError(
                    f"Role '{role.value}' has level {definitions[role].level}; "
                    f"only admin may be at or above {admin_level}"
                )

        self._definitions = MappingProxyType({role: definitions[role] for role in Role})

    def get(self, role) -> Optional[RoleDefinition]:
        parsed = Role.parse(role)
        if parsed is None:
            return None
        return self._definitions.get(parsed)

    def level(self, role) -> int:
        definition = self.get(role)
        return definition.level if definition else 0

    def roles(self) -> Tuple[Role, ...]:
        return tuple(self._definitions.keys())

    def items(self) -> Iterable[Tuple[Role, RoleDefinition]]:
        return self._definitions.items()

    def __contains__(self, role) -> bool:
        return self.get(role) is not None

    def __iter__(self) -> Iterator[Role]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)


# ============================================================
# DEFAULT ROLE TABLE
# ============================================================
DEFAULT_ROLE_DEFINITIONS: Dict[Role, RoleDefinition] = {

    # =====================================================
    # ADMIN: full access to every module
    # =====================================================
    Role.admin: RoleDefinition(
        level=100,
        name="Admin",
        description="Full access to all modules",
        permissions=_grant(*Permission),
    ),

    # =====================================================
    # MANAGER: team operations, scrims, finances
    # no user management, no deletes
    # =====================================================
    Role.manager: RoleDefinition(
        level=80,
        name="Manager",
        description="Team operations, scrim entries, attendance oversight",
        permissions=_grant(
            Permission.view_all_teams,
            Permission.create_teams,
            Permission.update_teams,
            Permission.assign_coaches,
            Permission.view_all_performance,
            Permission.create_performance,
            Permission.update_performance,
            Permission.view_all_scrims,
            Permission.create_scrims,
            Permission.update_scrims,
            Permission.view_all_finances,
            Permission.create_finances,
            Permission.update_finances,
            Permission.view_reports,
            Permission.view_analytics,
        ),
    ),

    # =====================================================
    # COACH: assigned teams only
    # =====================================================
    Role.coach: RoleDefinition(
        level=70,
        name="Coach",
        description="Team and player stats, attendance reports, performance tracking",
        permissions=_grant(
            Permission.create_performance,
            Permission.update_performance,
            Permission.view_reports,
            Permission.view_analytics,
        ),
    ),

    # =====================================================
    # ANALYST: read-only reports
    # =====================================================
    Role.analyst: RoleDefinition(
        level=60,
        name="Analyst",
        description="Read-only access to scrim results, performance data, reports",
        permissions=_grant(
            Permission.view_reports,
            Permission.view_analytics,
        ),
    ),

    # =====================================================
    # PLAYER: own data only
    # =====================================================
    Role.player: RoleDefinition(
        level=50,
        name="Player",
        description="Limited access — view only their own data",
        permissions=_grant(),
    ),

    # =====================================================
    # PENDING: onboarding fallback
    # =====================================================
    Role.pending: RoleDefinition(
        level=10,
        name="Pending Approval",
        description="Temporary role, minimal access for onboarding and evaluation",
        permissions=_grant(),
    ),
}

DEFAULT_ROLE_TABLE = RoleTable(DEFAULT_ROLE_DEFINITIONS)
