import pytest
from pydantic import ValidationError

from app.core.constants import DEFAULT_PERMISSIONS, ROUTE_PERMISSION_MAP
from app.core.security import create_access_token, decode_token
from app.models.permission import PermissionKey, PermissionRecord, permission_value
from app.models.user import ROLE_HIERARCHY, UserRole, normalize_role


def test_role_hierarchy_is_strictly_decreasing():
    assert ROLE_HIERARCHY[UserRole.ADMIN] > ROLE_HIERARCHY[UserRole.COURSE_COORDINATOR] > ROLE_HIERARCHY[UserRole.GENERAL_USER]


@pytest.mark.parametrize("raw, expected", [
    ("ADMIN", UserRole.ADMIN),
    ("course_coordinator", UserRole.COURSE_COORDINATOR),
    ("General User", UserRole.GENERAL_USER),
    (UserRole.GENERAL_USER, UserRole.GENERAL_USER),
    ("janitor", None),
    (None, None),
])
def test_normalize_role(raw, expected):
    assert normalize_role(raw) == expected


def test_unknown_permission_key_maps_to_catch_all():
    assert PermissionKey("staff-management.view") is PermissionKey.STAFF_VIEW
    assert PermissionKey("staff-managment.view") is PermissionKey.UNKNOWN


def test_permission_value():
    assert permission_value(PermissionKey.STAFF_VIEW) == "staff-management.view"
    assert permission_value(" staff-management.view") == " staff-management.view"
    assert permission_value(None) == ""


def test_every_matrix_and_route_key_is_known():
    for key in list(DEFAULT_PERMISSIONS) + list(ROUTE_PERMISSION_MAP.values()):
        assert PermissionKey(key) is not PermissionKey.UNKNOWN


def test_record_accepts_feed_aliases_and_numeric_ids():
    record = PermissionRecord.model_validate({
        "id": 17,
        "permission": "scheduling-sessions.schedule.create",
        "allowed": False,
        "isException": True,
        "staffId": 42,
        "menuPath": "/scheduling-sessions/schedule",
    })

    assert record.id == "17"
    assert record.staff_id == "42"
    assert record.is_exception is True
    assert record.menu_path == "/scheduling-sessions/schedule"
    assert record.resource_name == "scheduling-sessions"


def test_record_requires_a_permission_key():
    with pytest.raises(ValidationError):
        PermissionRecord.model_validate({"permission": "", "allowed": True})


def test_token_round_trip_carries_role():
    token = create_access_token(subject="42", data={"role": "COURSE_COORDINATOR"})
    payload = decode_token(token)
    assert payload["sub"] == "42"
    assert payload["role"] == "COURSE_COORDINATOR"
