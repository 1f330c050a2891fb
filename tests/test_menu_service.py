from app.models.enums import PermissionStatus
from app.models.permission import MenuItem, PermissionRecord
from app.models.permission_state import PermissionState
from app.models.user import UserRole
from app.services import menu_service


def record(permission, allowed=True, path=None, title=None, icon=None, **kwargs):
    return PermissionRecord(
        permission=permission,
        allowed=allowed,
        menu_path=path,
        menu_title=title,
        menu_icon=icon,
        **kwargs,
    )


RECORDS = [
    record("dashboard.view", path="/dashboard", title="Dashboard", icon="home"),
    record("academic-management.courses.update", path="/academic-management/courses", title="Courses"),
    record("staff-management.view", allowed=False, path="/staff-management/staff", title="Staff"),
    record("academic-management.subjects.update", path="/academic-management/subjects", title="Subjects"),
    record("scheduling-sessions.sessions.create", resource="sessions"),
]


def loaded_state(records=RECORDS, **kwargs):
    return PermissionState(
        user_role=UserRole.COURSE_COORDINATOR,
        permission_records=records,
        status=PermissionStatus.LOADED,
        **kwargs,
    )


def test_menu_is_empty_until_loaded():
    for status in (PermissionStatus.UNINITIALIZED, PermissionStatus.LOADING, PermissionStatus.ERROR):
        state = PermissionState(
            user_role=UserRole.COURSE_COORDINATOR,
            permission_records=RECORDS,
            status=status,
        )
        assert menu_service.get_accessible_menu_items(state) == []


def test_menu_projects_allowed_records_in_order():
    items = menu_service.get_accessible_menu_items(loaded_state())

    assert [i.permission for i in items] == [
        "dashboard.view",
        "academic-management.courses.update",
        "academic-management.subjects.update",
        "scheduling-sessions.sessions.create",
    ]
    assert items[0] == MenuItem(path="/dashboard", title="Dashboard", icon="home", permission="dashboard.view")
    # Records without menu fields still project, with empty menu fields
    assert items[-1].path is None


def test_matrix_grants_do_not_create_menu_items():
    # COURSE_COORDINATOR may update courses by default, but no record was sent
    state = loaded_state(records=[])
    assert menu_service.get_accessible_menu_items(state) == []


def test_accessible_routes_skip_records_without_path():
    assert menu_service.get_accessible_routes(loaded_state()) == [
        "/dashboard",
        "/academic-management/courses",
        "/academic-management/subjects",
    ]


def test_sidebar_keeps_only_accessible_entries():
    sidebar = menu_service.build_sidebar_menu(loaded_state())

    assert [group["key"] for group in sidebar] == ["dashboard", "academic-management"]
    academic = sidebar[1]
    assert [child["key"] for child in academic["children"]] == ["courses", "subjects"]
    assert academic["label"] == "Academic Management"


def test_sidebar_empty_when_not_loaded():
    state = PermissionState(user_role=UserRole.ADMIN, permission_records=RECORDS)
    assert menu_service.build_sidebar_menu(state) == []


def test_group_permissions_by_resource():
    grouped = menu_service.group_permissions_by_resource(loaded_state())

    assert set(grouped) == {"dashboard", "academic-management", "staff-management", "sessions"}
    assert len(grouped["academic-management"]) == 2


def test_group_menu_items_by_category():
    state = loaded_state(
        menu_items=[
            MenuItem(path="/reports-documentation/certificates", title="Certificates", category="reports"),
            MenuItem(path="/dashboard", title="Dashboard"),
            MenuItem(path="/reports-documentation/documents", title="Documents", category="reports"),
        ]
    )

    grouped = menu_service.group_menu_items_by_category(state)

    assert list(grouped) == ["reports", "general"]
    assert [i.title for i in grouped["reports"]] == ["Certificates", "Documents"]
