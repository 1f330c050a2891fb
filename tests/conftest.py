import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.core.exceptions import PermissionFetchError
from app.core.security import create_access_token
from app.main import app
from app.schemas.permission import PermissionPayload
from app.services.session_service import SessionRegistry


class FakePermissionFeed:
    """
    Stands in for PermissionClient.fetch_user_permissions.
    `responses` maps staff_id -> payload dict or an exception to raise.
    """

    def __init__(self):
        self.responses = {}
        self.calls = []

    async def __call__(self, staff_id, access_token):
        self.calls.append((staff_id, access_token))
        result = self.responses.get(staff_id)
        if result is None:
            raise PermissionFetchError("No permissions configured", status_code=404)
        if isinstance(result, Exception):
            raise result
        return PermissionPayload.model_validate(result)


@pytest.fixture
def feed():
    return FakePermissionFeed()


@pytest_asyncio.fixture
async def client(feed):
    """
    Uses ASGITransport (httpx >= 0.27) with a fresh session registry wired to
    the fake feed.
    """
    app.state.session_registry = SessionRegistry(feed)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    def _make(staff_id: str, role: str) -> dict:
        token = create_access_token(subject=staff_id, data={"role": role})
        return {"Authorization": f"Bearer {token}"}
    return _make
