# core/config_validator.py

"""
Startup checks for the settings this service depends on.

Supabase credentials are only enforced in production. A configured
role table file is always checked, so a broken file stops startup
instead of surfacing on the first request.
"""

from pathlib import Path
from typing import List

from core.config import settings
from core.logging_config import logger
from core.role_loader import load_role_table
from core.roles import RoleTableError


def validate_supabase_config() -> List[str]:
    """Return the names of missing Supabase settings."""
    missing = []

    # Profile lookups and role updates use the service-role client
    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    return missing


def validate_role_table_config() -> List[str]:
    """
    Check ROLE_TABLE_PATH when it is set.
    Returns a list of problems; empty means the built-in table
    is in use or the configured file loads cleanly.
    """
    if not settings.ROLE_TABLE_PATH:
        return []

    path = Path(settings.ROLE_TABLE_PATH)
    if not path.is_file():
        return [f"ROLE_TABLE_PATH does not point to a file: {path}"]

    try:
        load_role_table(path)
    except RoleTableError as e:
        return [f"ROLE_TABLE_PATH is invalid: {e}"]

    return []


def validate_config_on_startup():
    """
    Raises RuntimeError if the service cannot run with the current settings.
    """
    problems = []

    if settings.ENV == "production":
        missing = validate_supabase_config()
        if missing:
            problems.append(f"Missing required environment variables: {', '.join(missing)}")
    elif not settings.SUPABASE_URL:
        logger.warning("SUPABASE_URL not set; profile endpoints will return errors")

    problems.extend(validate_role_table_config())

    if problems:
        error_msg = "; ".join(problems)
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    if not settings.ROLE_TABLE_PATH:
        logger.info("Using built-in role table")

    logger.info("Configuration validation passed")
