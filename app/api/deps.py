# app/api/deps.py

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.security import decode_token
from app.models.user import normalize_role
from app.schemas.user import CurrentStaff
from app.services.permission_store import PermissionStore
from app.services.session_service import SessionRegistry


# ------------------------------------------------------------
# HTTP Bearer Authentication
# ------------------------------------------------------------
bearer_scheme = HTTPBearer(auto_error=True)


# ------------------------------------------------------------
# Current staff member from the portal session token
# ------------------------------------------------------------
async def get_current_staff(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentStaff:

    token = credentials.credentials

    try:
        payload = decode_token(token)
    except jwt.InvalidTokenError:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Could not validate credentials")

    staff_id = payload.get("sub")
    if not staff_id:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid token payload")

    role = normalize_role(payload.get("role"))
    if role is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Token carries no recognised role")

    return CurrentStaff(staff_id=str(staff_id), role=role, access_token=token)


# ------------------------------------------------------------
# Session registry (created in app.main)
# ------------------------------------------------------------
def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.session_registry


# ------------------------------------------------------------
# Permission store of the current session
# ------------------------------------------------------------
async def get_permission_store(
    current_staff: CurrentStaff = Depends(get_current_staff),
    registry: SessionRegistry = Depends(get_session_registry),
) -> PermissionStore:
    return registry.get_or_create(
        current_staff.staff_id,
        current_staff.role,
        access_token=current_staff.access_token,
    )
