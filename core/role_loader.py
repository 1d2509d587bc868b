# core/role_loader.py

"""
Load a RoleTable from a JSON file.

Expected shape:
    {
      "roles": {
        "admin": {"level": 100, "name": "Admin", "description": "...",
                  "permissions": {"viewAllUsers": true, ...}},
        ...
      }
    }

Strings from the file are converted to Role / Permission members here.
Unknown role names and permission keys are skipped with a warning;
permission keys that are left out default to False.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from core.logging_config import logger
from core.roles import RoleDefinition, RoleTable, RoleTableError
from models.enums import Permission, Role


def parse_permissions(role_name: str, raw: Any) -> Dict[Permission, bool]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise RoleTableError(f"Permissions for role '{role_name}' must be an object")

    permissions = {}
    for key, value in raw.items():
        perm = Permission.parse(key)
        if perm is None:
            logger.warning(f"Ignoring unknown permission '{key}' on role '{role_name}'")
            continue
        # Only a literal true grants anything
        permissions[perm] = value is True

    return permissions


def parse_role_table(document: Any) -> RoleTable:
    if not isinstance(document, dict) or not isinstance(document.get("roles"), dict):
        raise RoleTableError("Role table document must contain a 'roles' object")

    definitions = {}
    for role_name, raw in document["roles"].items():
        role = Role.parse(role_name)
        if role is None:
            logger.warning(f"Ignoring unknown role '{role_name}' in role table")
            continue
        if not isinstance(raw, dict):
            raise RoleTableError(f"Definition for role '{role_name}' must be an object")

        try:
            definitions[role] = RoleDefinition(
                level=raw.get("level"),
                name=raw.get("name") or role.value.title(),
                description=raw.get("description") or "",
                permissions=parse_permissions(role_name, raw.get("permissions")),
            )
        except ValidationError as e:
            raise RoleTableError(f"Invalid definition for role '{role_name}': {e}") from e

    return RoleTable(definitions)


def load_role_table(path: Union[str, Path]) -> RoleTable:
    """Read and validate a role table file. Raises RoleTableError on any problem."""
    path = Path(path)

    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise RoleTableError(f"Role table file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise RoleTableError(f"Role table file is not valid JSON: {path} ({e})") from e

    table = parse_role_table(document)
    logger.info(f"Loaded role table from {path} ({len(table)} roles)")
    return table
