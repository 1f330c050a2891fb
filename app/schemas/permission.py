from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import PermissionStatus
from app.models.permission import MenuItem, PermissionRecord
from app.models.user import UserRole, normalize_role


# -------------------------------------------------------------------
# PERMISSIONS FEED RESPONSE
# {role, permissions: [...], menuItems?: [...]}
# -------------------------------------------------------------------
class PermissionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: UserRole
    permissions: List[PermissionRecord] = Field(default_factory=list)
    menu_items: List[MenuItem] = Field(default_factory=list, alias="menuItems")

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value):
        role = normalize_role(value)
        if role is None:
            raise ValueError(f"Unknown role '{value}'")
        return role

    @field_validator("permissions", "menu_items", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


# -------------------------------------------------------------------
# CHECK REQUESTS
# -------------------------------------------------------------------
class PermissionListRequest(BaseModel):
    permissions: List[str]


class GuardRequest(BaseModel):
    permission: Optional[str] = None
    permissions: List[str] = Field(default_factory=list)
    require_all: bool = False

    class Config:
        json_schema_extra = {
            "examples": [
                {"permission": "staff-management.view"},
                {
                    "permissions": [
                        "academic-management.courses.update",
                        "academic-management.modules.update"
                    ],
                    "require_all": True
                }
            ]
        }


# -------------------------------------------------------------------
# CHECK RESPONSES
# -------------------------------------------------------------------
class PermissionCheckRead(BaseModel):
    permission: str
    target_role: Optional[UserRole] = None
    allowed: bool


class DecisionRead(BaseModel):
    allowed: bool


class RouteCheckRead(BaseModel):
    path: str
    permission: Optional[str] = None
    allowed: bool


class RoleCheckRead(BaseModel):
    role: UserRole
    allowed: bool


# -------------------------------------------------------------------
# SESSION STATUS
# -------------------------------------------------------------------
class PermissionStatusRead(BaseModel):
    staff_id: Optional[str] = None
    user_role: Optional[UserRole] = None
    role_level: int = 0
    status: PermissionStatus
    is_permissions_loaded: bool
    error: Optional[str] = None
    last_updated: Optional[datetime] = None
