# app/models/permission_state.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.enums import PermissionStatus
from app.models.permission import MenuItem, PermissionRecord
from app.models.user import UserRole


class PermissionState(BaseModel):
    """
    Everything the evaluation engine reads for one session.

    Only PermissionStore writes to it. Records survive a refresh (status goes
    back to LOADING) so readers keep the last-known answers until the new
    response lands.
    """

    user_role: Optional[UserRole] = None
    staff_id: Optional[str] = None

    permission_records: List[PermissionRecord] = Field(default_factory=list)
    # menuItems as sent by the feed (carry optional categories)
    menu_items: List[MenuItem] = Field(default_factory=list)

    status: PermissionStatus = PermissionStatus.UNINITIALIZED
    error: Optional[str] = None
    last_updated: Optional[datetime] = None

    @property
    def is_loaded(self) -> bool:
        return self.status == PermissionStatus.LOADED
