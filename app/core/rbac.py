# app/core/rbac.py

from fastapi import Depends, HTTPException, status
from loguru import logger

from app.api.deps import get_permission_store
from app.models.user import UserRole, normalize_role
from app.services.permission_store import PermissionStore


def RequirePermission(*permissions, require_all: bool = False):
    """
    Route gate on permission keys:
    - One key: that key must evaluate to True
    - Several keys: any of them (or all, with require_all=True)
    - Admin passes through the engine's own override
    """
    if not permissions:
        raise ValueError("RequirePermission needs at least one permission key")

    async def permission_checker(store: PermissionStore = Depends(get_permission_store)):
        if len(permissions) == 1:
            allowed = store.has_permission(permissions[0])
        else:
            allowed = store.check_guard(permissions=permissions, require_all=require_all)

        if not allowed:
            logger.warning(
                f"Permission denied for staff {store.staff_id} "
                f"({store.user_role.value if store.user_role else 'no role'}) on {list(permissions)}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action"
            )

        return store

    return permission_checker


def RequireRoleAtLeast(minimum_role):
    """Route gate on the role hierarchy (minimum_role or anything above it)."""
    minimum = normalize_role(minimum_role)
    if minimum is None:
        raise ValueError(f"Unknown role '{minimum_role}'")

    async def role_checker(store: PermissionStore = Depends(get_permission_store)):
        if not store.is_role_at_least(minimum):
            readable_role = store.user_role.value if isinstance(store.user_role, UserRole) else "none"
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied for role '{readable_role}'"
            )
        return store

    return role_checker
