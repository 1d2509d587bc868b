# services/profile_service.py

"""
Profile mutations that carry a role.

New profiles always start at the default role; role changes go through
the access engine before anything is written. Every function returns a
structured result and never raises for backend failures.
"""

from datetime import datetime, timezone
from typing import Optional

from supabase import Client

from core.errors import CHECK_VIOLATION, extract_error_code, extract_supabase_error
from core.logging_config import logger
from core.permissions import RoleAccess, get_role_access
from core.supabase_client import get_supabase_client
from core.supabase_helpers import fetch_profile, insert_profile, list_auth_users, update_profile
from models.user import ProfileResult, ProfileSyncResult, UserProfile


NOT_CONFIGURED = "Supabase client not configured"

FORBIDDEN = "forbidden"
NOT_FOUND = "not_found"
BACKEND = "backend"


def default_display_name(email: str, name: Optional[str] = None) -> str:
    if name and name.strip():
        return name.strip()
    local_part = (email or "").split("@")[0]
    return local_part or "User"


# -----------------------------------------------------
# Create profile (default role)
# -----------------------------------------------------
def create_profile(
    user_id: str,
    email: str,
    name: Optional[str] = None,
    *,
    client: Optional[Client] = None,
    access: Optional[RoleAccess] = None,
) -> ProfileResult:
    """
    Create the profile row for a freshly signed-up auth user.
    Existing profiles are returned untouched, so this is safe to retry.
    """
    client = client or get_supabase_client()
    access = access or get_role_access()
    if client is None:
        return ProfileResult(success=False, error=NOT_CONFIGURED, reason=BACKEND)

    try:
        existing = fetch_profile(client, user_id)
    except Exception as e:
        logger.error(f"Profile lookup failed for {email}: {extract_supabase_error(e)}")
        return ProfileResult(success=False, error=f"Failed to check existing profile: {extract_supabase_error(e)}", reason=BACKEND)

    if existing:
        logger.info(f"Profile already exists for {email}")
        return ProfileResult(success=True, profile=UserProfile(**existing))

    default_role = access.get_default_role()
    profile_data = {
        "id": user_id,
        "email": email,
        "name": default_display_name(email, name),
        "role": default_role.value,
        "role_level": access.role_level(default_role),
        "created_at": datetime.now(timezone.utc).isoformat(),
    }

    logger.info(f"Creating profile for {email} with role: {default_role}")

    try:
        created = insert_profile(client, profile_data)
    except Exception as e:
        detail = extract_supabase_error(e)
        logger.error(f"Profile creation failed for {email}: {detail}")

        if extract_error_code(e) == CHECK_VIOLATION:
            return ProfileResult(
                success=False,
                error=(
                    f"Invalid role constraint. The role '{default_role}' is not allowed. "
                    "Please contact an administrator."
                ),
                reason=BACKEND,
            )
        return ProfileResult(success=False, error=f"Failed to create profile: {detail}", reason=BACKEND)

    return ProfileResult(success=True, profile=UserProfile(**(created or profile_data)))


# -----------------------------------------------------
# Update role (guarded by the access engine)
# -----------------------------------------------------
def update_user_role(
    acting_user_id: str,
    target_user_id: str,
    new_role: str,
    *,
    client: Optional[Client] = None,
    access: Optional[RoleAccess] = None,
) -> ProfileResult:
    client = client or get_supabase_client()
    access = access or get_role_access()
    if client is None:
        return ProfileResult(success=False, error=NOT_CONFIGURED, reason=BACKEND)

    logger.info(f"Role update requested by {acting_user_id}: {target_user_id} -> {new_role}")

    try:
        acting = fetch_profile(client, acting_user_id)
    except Exception as e:
        detail = extract_supabase_error(e)
        logger.error(f"Acting profile lookup failed: {detail}")
        return ProfileResult(success=False, error=f"Failed to load your profile: {detail}", reason=BACKEND)
    if not acting:
        return ProfileResult(success=False, error="Unable to verify your permissions", reason=FORBIDDEN)

    try:
        target = fetch_profile(client, target_user_id)
    except Exception as e:
        detail = extract_supabase_error(e)
        logger.error(f"Target profile lookup failed: {detail}")
        return ProfileResult(success=False, error=f"Failed to load target profile: {detail}", reason=BACKEND)
    if not target:
        return ProfileResult(success=False, error="Target user not found", reason=NOT_FOUND)

    validation = access.validate_role_assignment(acting.get("role"), new_role)
    if not validation.valid:
        logger.warning(f"Role assignment rejected for {acting_user_id}: {validation.error}")
        return ProfileResult(success=False, error=validation.error, reason=FORBIDDEN)

    if not access.can_update_user_role(acting.get("role"), target.get("role"), new_role):
        logger.warning(
            f"{acting_user_id} ({acting.get('role')}) may not change "
            f"{target_user_id} ({target.get('role')}) to {new_role}"
        )
        return ProfileResult(
            success=False,
            error="You do not have permission to update this user's role",
            reason=FORBIDDEN,
        )

    role_info = access.get_role_info(new_role)
    update_data = {"role": role_info.role.value, "role_level": role_info.level}

    try:
        updated = update_profile(client, target_user_id, update_data)
    except Exception as e:
        detail = extract_supabase_error(e)
        logger.error(f"Role update failed for {target_user_id}: {detail}")

        if extract_error_code(e) == CHECK_VIOLATION:
            return ProfileResult(
                success=False,
                error=f"Invalid role constraint. The role '{new_role}' is not allowed in the database.",
                reason=BACKEND,
            )
        return ProfileResult(success=False, error=f"Failed to update role: {detail}", reason=BACKEND)

    if not updated:
        return ProfileResult(success=False, error="Target user not found", reason=NOT_FOUND)

    logger.info(f"Role updated: {target_user_id} is now {role_info.role}")
    return ProfileResult(success=True, profile=UserProfile(**updated))


# -----------------------------------------------------
# Profile sync (auth users without a profile row)
# -----------------------------------------------------
def sync_missing_profiles(
    *,
    client: Optional[Client] = None,
    access: Optional[RoleAccess] = None,
) -> ProfileSyncResult:
    """
    Create a default-role profile for every auth user that lacks one.
    Existing profiles (and their roles) are never modified.
    """
    client = client or get_supabase_client()
    access = access or get_role_access()
    result = ProfileSyncResult()

    if client is None:
        result.errors.append(NOT_CONFIGURED)
        return result

    try:
        auth_users = list_auth_users(client)
    except Exception as e:
        detail = extract_supabase_error(e)
        logger.error(f"Failed to list auth users: {detail}")
        result.errors.append(f"Failed to list auth users: {detail}")
        return result

    logger.info(f"Profile sync: checking {len(auth_users)} auth users")

    for auth_user in auth_users:
        user_id = getattr(auth_user, "id", None)
        email = getattr(auth_user, "email", None)
        if not user_id or not email:
            continue

        metadata = getattr(auth_user, "user_metadata", None) or {}

        try:
            existing = fetch_profile(client, user_id)
        except Exception as e:
            result.errors.append(f"{email}: {extract_supabase_error(e)}")
            continue

        if existing:
            result.existing += 1
            continue

        outcome = create_profile(
            user_id,
            email,
            metadata.get("name") or metadata.get("full_name"),
            client=client,
            access=access,
        )
        if outcome.success:
            result.created.append(user_id)
        else:
            result.errors.append(f"{email}: {outcome.error}")

    logger.info(
        f"Profile sync complete: {len(result.created)} created, "
        f"{result.existing} existing, {len(result.errors)} errors"
    )
    return result
