# app/services/permission_client.py
from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from app.core.config import settings
from app.core.exceptions import PermissionFetchError
from app.schemas.permission import PermissionPayload


class PermissionClient:
    """
    Reads the current user's permissions from the external auth service.

    Every failure mode (network, non-2xx, bad JSON, bad shape) surfaces as
    PermissionFetchError.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.PERMISSIONS_API_URL
        self.timeout = timeout if timeout is not None else settings.PERMISSIONS_FETCH_TIMEOUT
        self._transport = transport

    async def fetch_user_permissions(
        self,
        staff_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> PermissionPayload:
        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        params = {"staff_id": staff_id} if staff_id else None

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.get(self.url, headers=headers, params=params)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise PermissionFetchError(f"Permissions service unreachable: {e}") from e

        if response.is_error:
            raise PermissionFetchError(
                "Failed to fetch permissions", status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise PermissionFetchError("Permissions service returned invalid JSON") from e

        try:
            payload = PermissionPayload.model_validate(data)
        except ValidationError as e:
            raise PermissionFetchError(
                f"Malformed permissions payload ({e.error_count()} error(s))"
            ) from e

        logger.debug(
            f"Fetched {len(payload.permissions)} permission record(s) for staff {staff_id}"
        )
        return payload
