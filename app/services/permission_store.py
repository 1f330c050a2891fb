# app/services/permission_store.py

import asyncio
from datetime import datetime, timezone
from typing import Awaitable, Callable, Iterable, List, Optional, Set, Union

from loguru import logger

from app.core.exceptions import PermissionFetchError
from app.models.enums import PermissionStatus
from app.models.permission import MenuItem
from app.models.permission_state import PermissionState
from app.models.user import UserRole, normalize_role
from app.schemas.permission import PermissionPayload
from app.services import menu_service, permission_engine
from app.services.permission_engine import PermissionLike

# (staff_id, access_token) -> feed response
PermissionFetcher = Callable[[Optional[str], Optional[str]], Awaitable[PermissionPayload]]


class PermissionStore:
    """
    Holds one session's PermissionState and is its only writer.

    Lifecycle: UNINITIALIZED -> LOADING -> LOADED, back to LOADING on refresh,
    UNINITIALIZED on clear(). A failed fetch ends in ERROR with the previous
    records left in place.

    Reads (has_permission & co.) are plain synchronous calls over the current
    state. They never wait for a fetch; during a refresh they see the
    last-known records.
    """

    def __init__(self, fetch_permissions: PermissionFetcher):
        self._fetch_permissions = fetch_permissions
        self.state = PermissionState()
        self._access_token: Optional[str] = None
        # Bumped on every session change; responses from older sessions are dropped
        self._generation = 0
        self._inflight: Optional[asyncio.Task] = None
        # Strong references to fetches still running, including abandoned ones
        self._pending: Set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Read-only fields
    # ------------------------------------------------------------------
    @property
    def user_role(self) -> Optional[UserRole]:
        return self.state.user_role

    @property
    def staff_id(self) -> Optional[str]:
        return self.state.staff_id

    @property
    def is_permissions_loaded(self) -> bool:
        return self.state.is_loaded

    @property
    def status(self) -> PermissionStatus:
        return self.state.status

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def begin_session(
        self,
        role: Union[UserRole, str],
        staff_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> None:
        """Called once login has produced a role. Does not fetch by itself."""
        resolved = normalize_role(role)
        if resolved is None:
            raise ValueError(f"Unknown role '{role}'")

        self._generation += 1
        self._inflight = None
        self._access_token = access_token
        self.state = PermissionState(
            user_role=resolved,
            staff_id=str(staff_id) if staff_id is not None else None,
        )
        logger.info(f"Permission session started for staff {self.state.staff_id} as {resolved.value}")

    def set_access_token(self, access_token: Optional[str]) -> None:
        """Token sent with the next fetch; callers pass the newest one they hold."""
        if access_token:
            self._access_token = access_token

    def update(self, payload: PermissionPayload) -> None:
        """Applies a successful feed response."""
        if payload.role != self.state.user_role:
            # Role is fixed for the lifetime of a session
            logger.warning(
                f"Permissions feed reported role {payload.role.value} for staff "
                f"{self.state.staff_id}, session role {self._role_label()} kept."
            )

        self.state.permission_records = permission_engine.normalize_records(
            payload.permissions, self.state.staff_id
        )
        self.state.menu_items = list(payload.menu_items)
        self.state.error = None
        self.state.last_updated = datetime.now(timezone.utc)
        self.state.status = PermissionStatus.LOADED
        logger.info(
            f"Loaded {len(self.state.permission_records)} permission record(s) "
            f"for staff {self.state.staff_id}"
        )

    def clear(self) -> None:
        """Logout. Any fetch still in flight will be discarded when it resolves."""
        self._generation += 1
        self._inflight = None
        self._access_token = None
        staff_id = self.state.staff_id
        self.state = PermissionState()
        logger.info(f"Permission session cleared for staff {staff_id}")

    # ------------------------------------------------------------------
    # Fetch
    # ------------------------------------------------------------------
    def schedule_refresh(self) -> Optional[asyncio.Task]:
        """
        Starts a fetch unless one is already running, and returns the task.
        Must be called from a running event loop.
        """
        if self.state.user_role is None:
            logger.debug("No active permission session; refresh skipped.")
            return None

        if self._inflight is None or self._inflight.done():
            task = asyncio.create_task(self._load(self._generation))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            self._inflight = task
        return self._inflight

    async def refresh_permissions(self) -> None:
        """Re-fetches permissions. Concurrent callers share one request."""
        task = self.schedule_refresh()
        if task is not None:
            await asyncio.shield(task)

    async def _load(self, generation: int) -> None:
        if generation != self._generation:
            return

        self.state.status = PermissionStatus.LOADING
        staff_id = self.state.staff_id

        try:
            payload = await self._fetch_permissions(staff_id, self._access_token)
        except PermissionFetchError as e:
            if generation != self._generation:
                logger.info(f"Ignoring failed permissions fetch for ended session of staff {staff_id}")
                return
            self.state.status = PermissionStatus.ERROR
            self.state.error = str(e)
            logger.warning(
                f"Permissions fetch failed for staff {staff_id}: {e}. "
                f"Falling back to {'last-known records' if self.state.permission_records else 'default matrix'}."
            )
            return
        except Exception as e:
            if generation != self._generation:
                return
            self.state.status = PermissionStatus.ERROR
            self.state.error = f"Unexpected permissions fetch error: {e}"
            logger.exception(f"Permissions fetch crashed for staff {staff_id}.")
            return

        if generation != self._generation:
            logger.warning(f"Discarding stale permissions response for staff {staff_id}")
            return

        self.update(payload)

    def _role_label(self) -> str:
        return self.state.user_role.value if self.state.user_role else "none"

    # ------------------------------------------------------------------
    # Decision interface
    # ------------------------------------------------------------------
    def has_permission(self, permission: PermissionLike, target_role: Optional[Union[UserRole, str]] = None) -> bool:
        return permission_engine.has_permission(self.state, permission, target_role)

    def has_any_permission(self, permissions: Iterable[PermissionLike]) -> bool:
        return permission_engine.has_any_permission(self.state, permissions)

    def has_all_permissions(self, permissions: Iterable[PermissionLike]) -> bool:
        return permission_engine.has_all_permissions(self.state, permissions)

    def can_access_route(self, route_path: str) -> bool:
        return permission_engine.can_access_route(self.state, route_path)

    def is_role_at_least(self, minimum_role: Union[UserRole, str]) -> bool:
        return permission_engine.is_role_at_least(self.state, minimum_role)

    def get_role_level(self) -> int:
        return permission_engine.get_role_level(self.state)

    def check_guard(
        self,
        permission: Optional[PermissionLike] = None,
        permissions: Iterable[PermissionLike] = (),
        require_all: bool = False,
    ) -> bool:
        return permission_engine.check_guard(self.state, permission, permissions, require_all)

    def get_accessible_menu_items(self) -> List[MenuItem]:
        return menu_service.get_accessible_menu_items(self.state)

    def get_accessible_routes(self) -> List[str]:
        return menu_service.get_accessible_routes(self.state)
