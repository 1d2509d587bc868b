# core/supabase_helpers.py

from typing import List, Optional

from supabase import Client

from core.config import settings


# =================================================================
#  PROFILE TABLE ACCESS
# =================================================================
# Thin query wrappers over the profiles table (public.users).
# They let client errors propagate; callers decide whether a failure
# becomes an HTTPException or a structured result.
# =================================================================

PROFILE_COLUMNS = "id, email, name, role, role_level, team_id, created_at"


def fetch_profile(client: Client, user_id: str) -> Optional[dict]:
    """Return the profile row for user_id, or None if there isn't one."""
    result = (
        client.table(settings.PROFILES_TABLE)
        .select(PROFILE_COLUMNS)
        .eq("id", user_id)
        .limit(1)
        .execute()
    )
    rows = result.data or []
    return rows[0] if rows else None


def list_profiles(client: Client) -> List[dict]:
    result = (
        client.table(settings.PROFILES_TABLE)
        .select(PROFILE_COLUMNS)
        .order("created_at", desc=True)
        .execute()
    )
    return result.data or []


def insert_profile(client: Client, data: dict) -> Optional[dict]:
    result = client.table(settings.PROFILES_TABLE).insert(data).execute()
    return result.data[0] if result.data else None


def update_profile(client: Client, user_id: str, data: dict) -> Optional[dict]:
    result = (
        client.table(settings.PROFILES_TABLE)
        .update(data)
        .eq("id", user_id)
        .execute()
    )
    return result.data[0] if result.data else None


# =================================================================
#  SUPABASE AUTH ADMIN HELPERS
# =================================================================

def extract_user_list(result) -> list:
    """Normalize auth.admin.list_users() across client versions."""
    if isinstance(result, list):
        return result
    if isinstance(result, dict) and "users" in result:
        return result["users"]
    users_attr = getattr(result, "users", None)
    if users_attr is not None:
        return users_attr
    return []


def list_auth_users(client: Client) -> list:
    return extract_user_list(client.auth.admin.list_users())
