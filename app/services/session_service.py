# app/services/session_service.py

from typing import Dict, Optional, Union

from loguru import logger

from app.models.user import UserRole, normalize_role
from app.services.permission_store import PermissionFetcher, PermissionStore


class SessionRegistry:
    """One PermissionStore per signed-in staff member."""

    def __init__(self, fetch_permissions: PermissionFetcher):
        self._fetch_permissions = fetch_permissions
        self._stores: Dict[str, PermissionStore] = {}

    def __len__(self) -> int:
        return len(self._stores)

    def get(self, staff_id: str) -> Optional[PermissionStore]:
        return self._stores.get(str(staff_id))

    def get_or_create(
        self,
        staff_id: str,
        role: Union[UserRole, str],
        access_token: Optional[str] = None,
    ) -> PermissionStore:
        """
        Returns the staff member's store, starting a session (and the initial
        permissions fetch, in the background) when none exists or the token
        carries a different role.
        """
        staff_id = str(staff_id)
        resolved = normalize_role(role)
        if resolved is None:
            raise ValueError(f"Unknown role '{role}'")

        store = self._stores.get(staff_id)
        if store is not None and store.user_role == resolved:
            store.set_access_token(access_token)
            return store

        if store is None:
            store = PermissionStore(self._fetch_permissions)
            self._stores[staff_id] = store
        else:
            logger.info(f"Role changed for staff {staff_id}; starting a new permission session.")

        store.begin_session(resolved, staff_id=staff_id, access_token=access_token)
        store.schedule_refresh()
        return store

    def end(self, staff_id: str) -> bool:
        store = self._stores.pop(str(staff_id), None)
        if store is None:
            return False
        store.clear()
        return True
