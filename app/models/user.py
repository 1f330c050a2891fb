# app/models/user.py

from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    COURSE_COORDINATOR = "COURSE_COORDINATOR"
    GENERAL_USER = "GENERAL_USER"


# Higher rank = more privilege. Only ever compared, never used as a grant.
ROLE_HIERARCHY = {
    UserRole.ADMIN: 3,
    UserRole.COURSE_COORDINATOR: 2,
    UserRole.GENERAL_USER: 1,
}


def normalize_role(role) -> Optional[UserRole]:
    """
    Accepts UserRole values or raw strings (case-insensitive, '-' or ' ' allowed
    in place of '_'). Returns None for anything that is not a known role.
    """
    if role is None:
        return None
    if isinstance(role, UserRole):
        return role

    raw = str(role).strip().upper().replace("-", "_").replace(" ", "_")
    try:
        return UserRole(raw)
    except ValueError:
        return None


def role_level(role: Optional[UserRole]) -> int:
    if role is None:
        return 0
    return ROLE_HIERARCHY[role]
