# app/services/permission_engine.py

from typing import Iterable, List, Optional, Union

from loguru import logger

from app.core.constants import DEFAULT_PERMISSIONS, ROUTE_PERMISSION_MAP
from app.models.permission import PermissionKey, PermissionRecord, permission_value
from app.models.permission_state import PermissionState
from app.models.user import ROLE_HIERARCHY, UserRole, normalize_role, role_level

PermissionLike = Union[PermissionKey, str]


# ============================================================================
# RECORD NORMALIZATION (runs once per successful fetch)
# ============================================================================
def normalize_records(
    records: Iterable[PermissionRecord],
    staff_id: Optional[str] = None,
) -> List[PermissionRecord]:
    """
    Returns the records in feed order with duplicate exceptions removed.

    - For one (staff_id, permission) pair only the first exception record is
      kept; later ones are dropped.
    - An exception without a staff_id is kept (it came from this user's own
      feed) but logged as a data-quality issue.
    """
    normalized: List[PermissionRecord] = []
    seen_exceptions = set()

    for record in records:
        if record.is_exception:
            if record.staff_id is None:
                logger.warning(
                    f"Exception record for '{record.permission}' has no staffId; "
                    f"treating it as a record of the current user."
                )

            dedup_key = (record.staff_id or staff_id, record.permission)
            if dedup_key in seen_exceptions:
                logger.warning(
                    f"Duplicate exception record for staff {dedup_key[0]} on "
                    f"'{record.permission}' ignored (first record wins)."
                )
                continue
            seen_exceptions.add(dedup_key)

        if record.key == PermissionKey.UNKNOWN:
            logger.debug(f"Permission key '{record.permission}' is not a known portal key.")

        normalized.append(record)

    return normalized


def _applies_to(record: PermissionRecord, staff_id: Optional[str]) -> bool:
    # Exceptions scoped to another staff member never apply
    if not record.is_exception or record.staff_id is None or staff_id is None:
        return True
    return record.staff_id == staff_id


def find_record(
    state: PermissionState,
    permission: str,
    allowed: bool,
    exception_only: bool = False,
) -> Optional[PermissionRecord]:
    """First matching record in feed order, or None."""
    for record in state.permission_records:
        if record.permission != permission or record.allowed != allowed:
            continue
        if exception_only and not record.is_exception:
            continue
        if not _applies_to(record, state.staff_id):
            continue
        return record
    return None


# ============================================================================
# HAS PERMISSION
# ============================================================================
def has_permission(
    state: PermissionState,
    permission: PermissionLike,
    target_role: Optional[Union[UserRole, str]] = None,
) -> bool:
    """
    Evaluates one permission key for the session in `state`.

    Precedence (first decisive rule wins):
      1. no role                         -> deny
      2. ADMIN                           -> allow (explicit denials included)
      3. target_role ranked above user   -> deny
      4. exception record with allowed=False -> deny
      5. any record with allowed=True     -> allow
      6. default matrix, unknown key      -> deny
    """
    user_role = state.user_role

    # 1. Fail closed without a role
    if user_role is None:
        return False

    # 2. Admin override
    if user_role == UserRole.ADMIN:
        return True

    # 3. Hierarchy gate
    if target_role is not None:
        target = normalize_role(target_role)
        if target is None:
            logger.warning(f"Unknown target role '{target_role}'; denying.")
            return False
        if ROLE_HIERARCHY[user_role] < ROLE_HIERARCHY[target]:
            return False

    key = permission_value(permission)
    if not key or key == PermissionKey.UNKNOWN.value:
        return False

    # 4. Explicit per-staff denial
    if find_record(state, key, allowed=False, exception_only=True):
        return False

    # 5. Explicit grant (exception or role-level)
    if find_record(state, key, allowed=True):
        return True

    # 6. Default matrix
    allowed_roles = DEFAULT_PERMISSIONS.get(key)
    if allowed_roles is None:
        return False
    return user_role in allowed_roles


def has_any_permission(state: PermissionState, permissions: Iterable[PermissionLike]) -> bool:
    return any(has_permission(state, p) for p in permissions)


def has_all_permissions(state: PermissionState, permissions: Iterable[PermissionLike]) -> bool:
    return all(has_permission(state, p) for p in permissions)


def route_permission(route_path: str) -> Optional[str]:
    path = (route_path or "").strip()
    if len(path) > 1:
        path = path.rstrip("/")
    return ROUTE_PERMISSION_MAP.get(path)


def can_access_route(state: PermissionState, route_path: str) -> bool:
    permission = route_permission(route_path)
    if permission is None:
        return False
    return has_permission(state, permission)


def is_role_at_least(state: PermissionState, minimum_role: Union[UserRole, str]) -> bool:
    if state.user_role is None:
        return False
    minimum = normalize_role(minimum_role)
    if minimum is None:
        return False
    return ROLE_HIERARCHY[state.user_role] >= ROLE_HIERARCHY[minimum]


def get_role_level(state: PermissionState) -> int:
    return role_level(state.user_role)


def check_guard(
    state: PermissionState,
    permission: Optional[PermissionLike] = None,
    permissions: Iterable[PermissionLike] = (),
    require_all: bool = False,
) -> bool:
    """
    A single `permission` takes priority; otherwise `permissions` is checked
    with any/all semantics. Nothing to check means no access.
    """
    if permission:
        return has_permission(state, permission)

    permissions = list(permissions)
    if not permissions:
        return False

    if require_all:
        return has_all_permissions(state, permissions)
    return has_any_permission(state, permissions)
