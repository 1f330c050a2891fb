import httpx
import pytest

from app.core.exceptions import PermissionFetchError
from app.models.user import UserRole
from app.services.permission_client import PermissionClient

FEED_URL = "http://auth.test/api/permissions/user"


def client_for(handler):
    return PermissionClient(url=FEED_URL, timeout=1.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_parses_payload_and_forwards_token():
    seen = {}

    def handler(request: httpx.Request):
        seen["auth"] = request.headers.get("Authorization")
        seen["staff_id"] = request.url.params.get("staff_id")
        return httpx.Response(200, json={
            "role": "COURSE_COORDINATOR",
            "permissions": [
                {
                    "permission": "scheduling-sessions.schedule.create",
                    "allowed": False,
                    "isException": True,
                    "staffId": 42,
                },
                {
                    "permission": "academic-management.courses.update",
                    "allowed": True,
                    "menuPath": "/academic-management/courses",
                    "menuTitle": "Courses",
                },
            ],
            "menuItems": None,
        })

    payload = await client_for(handler).fetch_user_permissions("42", access_token="tok")

    assert seen == {"auth": "Bearer tok", "staff_id": "42"}
    assert payload.role == UserRole.COURSE_COORDINATOR
    assert payload.menu_items == []
    exception = payload.permissions[0]
    assert exception.is_exception is True
    assert exception.staff_id == "42"
    assert payload.permissions[1].menu_path == "/academic-management/courses"


@pytest.mark.asyncio
async def test_non_2xx_raises_fetch_error():
    client = client_for(lambda request: httpx.Response(502, json={"detail": "bad gateway"}))

    with pytest.raises(PermissionFetchError) as exc:
        await client.fetch_user_permissions("42")

    assert exc.value.status_code == 502


@pytest.mark.asyncio
async def test_invalid_json_raises_fetch_error():
    client = client_for(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(PermissionFetchError):
        await client.fetch_user_permissions("42")


@pytest.mark.asyncio
async def test_malformed_payload_raises_fetch_error():
    client = client_for(lambda request: httpx.Response(200, json={"role": "JANITOR", "permissions": []}))

    with pytest.raises(PermissionFetchError) as exc:
        await client.fetch_user_permissions("42")

    assert "Malformed" in str(exc.value)


@pytest.mark.asyncio
async def test_network_error_raises_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PermissionFetchError) as exc:
        await client_for(handler).fetch_user_permissions("42")

    assert exc.value.status_code is None


@pytest.mark.asyncio
async def test_invalid_url_raises_fetch_error():
    client = PermissionClient(
        url="http://exa\x00mple.com/",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
    )

    with pytest.raises(PermissionFetchError) as exc:
        await client.fetch_user_permissions("7")

    assert "unreachable" in str(exc.value)
