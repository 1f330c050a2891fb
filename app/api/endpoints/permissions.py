# app/api/endpoints/permissions.py

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_current_staff, get_permission_store, get_session_registry
from app.core.constants import DEFAULT_PERMISSIONS
from app.core.rbac import RequirePermission
from app.models.permission import PermissionKey, PermissionRecord
from app.models.user import ROLE_HIERARCHY, UserRole, normalize_role
from app.schemas.permission import (
    DecisionRead,
    GuardRequest,
    PermissionCheckRead,
    PermissionListRequest,
    PermissionStatusRead,
    RoleCheckRead,
    RouteCheckRead,
)
from app.schemas.user import CurrentStaff
from app.services import menu_service
from app.services.permission_engine import route_permission
from app.services.permission_store import PermissionStore
from app.services.session_service import SessionRegistry

router = APIRouter(prefix="/api/permissions", tags=["Permissions"])


def _status_read(store: PermissionStore) -> PermissionStatusRead:
    return PermissionStatusRead(
        staff_id=store.staff_id,
        user_role=store.user_role,
        role_level=store.get_role_level(),
        status=store.status,
        is_permissions_loaded=store.is_permissions_loaded,
        error=store.error,
        last_updated=store.state.last_updated,
    )


def _parse_role(raw: str) -> UserRole:
    role = normalize_role(raw)
    if role is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid role '{raw}'. Allowed roles: {[r.value for r in UserRole]}"
        )
    return role


# -------------------------------------------------------------------
# SESSION STATUS
# -------------------------------------------------------------------
@router.get("/me", response_model=PermissionStatusRead)
async def get_my_permissions(store: PermissionStore = Depends(get_permission_store)):
    return _status_read(store)


@router.get("/records", response_model=Dict[str, List[PermissionRecord]])
async def get_records_by_resource(store: PermissionStore = Depends(get_permission_store)):
    return menu_service.group_permissions_by_resource(store.state)


# -------------------------------------------------------------------
# SINGLE PERMISSION CHECK
# -------------------------------------------------------------------
@router.get("/check", response_model=PermissionCheckRead)
async def check_permission(
    permission: str = Query(..., min_length=1, description="Permission key, e.g. staff-management.view"),
    target_role: Optional[str] = Query(None, description="Role required by the target context"),
    store: PermissionStore = Depends(get_permission_store),
):
    target = _parse_role(target_role) if target_role else None
    return PermissionCheckRead(
        permission=permission,
        target_role=target,
        allowed=store.has_permission(permission, target),
    )


# -------------------------------------------------------------------
# ANY / ALL / GUARD
# -------------------------------------------------------------------
@router.post("/check-any", response_model=DecisionRead)
async def check_any_permission(
    data: PermissionListRequest,
    store: PermissionStore = Depends(get_permission_store),
):
    return DecisionRead(allowed=store.has_any_permission(data.permissions))


@router.post("/check-all", response_model=DecisionRead)
async def check_all_permissions(
    data: PermissionListRequest,
    store: PermissionStore = Depends(get_permission_store),
):
    return DecisionRead(allowed=store.has_all_permissions(data.permissions))


@router.post("/guard", response_model=DecisionRead)
async def check_guard(
    data: GuardRequest,
    store: PermissionStore = Depends(get_permission_store),
):
    return DecisionRead(
        allowed=store.check_guard(
            permission=data.permission,
            permissions=data.permissions,
            require_all=data.require_all,
        )
    )


# -------------------------------------------------------------------
# ROUTES
# -------------------------------------------------------------------
@router.get("/routes/check", response_model=RouteCheckRead)
async def check_route(
    path: str = Query(..., min_length=1, description="Top-level portal route, e.g. /staff-management"),
    store: PermissionStore = Depends(get_permission_store),
):
    return RouteCheckRead(
        path=path,
        permission=route_permission(path),
        allowed=store.can_access_route(path),
    )


@router.get("/routes", response_model=List[str])
async def list_accessible_routes(store: PermissionStore = Depends(get_permission_store)):
    return store.get_accessible_routes()


# -------------------------------------------------------------------
# ROLE HIERARCHY
# -------------------------------------------------------------------
@router.get("/role-at-least", response_model=RoleCheckRead)
async def check_role_at_least(
    role: str = Query(..., description="Minimum role"),
    store: PermissionStore = Depends(get_permission_store),
):
    minimum = _parse_role(role)
    return RoleCheckRead(role=minimum, allowed=store.is_role_at_least(minimum))


@router.get("/hierarchy", response_model=Dict[str, int])
async def get_role_hierarchy(_: CurrentStaff = Depends(get_current_staff)):
    return {role.value: rank for role, rank in ROLE_HIERARCHY.items()}


# -------------------------------------------------------------------
# REFRESH / LOGOUT
# -------------------------------------------------------------------
@router.post("/refresh", response_model=PermissionStatusRead)
async def refresh_permissions(store: PermissionStore = Depends(get_permission_store)):
    """
    Re-fetches the permission records. A failed fetch is reported in the
    returned status (`error`), not as an HTTP error.
    """
    await store.refresh_permissions()
    return _status_read(store)


@router.post("/logout")
async def logout(
    current_staff: CurrentStaff = Depends(get_current_staff),
    registry: SessionRegistry = Depends(get_session_registry),
):
    ended = registry.end(current_staff.staff_id)
    return {"detail": "Permission session cleared" if ended else "No active permission session"}


# -------------------------------------------------------------------
# DEFAULT MATRIX (System Administration)
# -------------------------------------------------------------------
@router.get("/matrix", response_model=Dict[str, List[str]])
async def get_default_matrix(
    _: PermissionStore = Depends(RequirePermission(PermissionKey.SYSTEM_ADMIN_VIEW)),
):
    return {
        key: [role.value for role in sorted(roles, key=ROLE_HIERARCHY.get, reverse=True)]
        for key, roles in DEFAULT_PERMISSIONS.items()
    }
