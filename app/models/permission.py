# app/models/permission.py

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PermissionKey(str, Enum):
    """
    Known Staff Portal permission keys ("<area>.<resource>.<action>").

    Free-form strings coming from the permissions feed are still accepted by the
    engine; PermissionKey("<anything else>") resolves to UNKNOWN, which is
    always denied.
    """

    UNKNOWN = "unknown"

    DASHBOARD_VIEW = "dashboard.view"

    # Academic Management
    ACADEMIC_VIEW = "academic-management.view"
    COURSE_TYPES_CREATE = "academic-management.course-types.create"
    COURSE_TYPES_UPDATE = "academic-management.course-types.update"
    COURSE_TYPES_DELETE = "academic-management.course-types.delete"
    COURSES_CREATE = "academic-management.courses.create"
    COURSES_UPDATE = "academic-management.courses.update"
    COURSES_DELETE = "academic-management.courses.delete"
    MODULES_CREATE = "academic-management.modules.create"
    MODULES_UPDATE = "academic-management.modules.update"
    MODULES_DELETE = "academic-management.modules.delete"
    SUBJECTS_CREATE = "academic-management.subjects.create"
    SUBJECTS_UPDATE = "academic-management.subjects.update"
    SUBJECTS_DELETE = "academic-management.subjects.delete"

    # Infrastructure Management
    INFRASTRUCTURE_VIEW = "infrastructure-management.view"
    BATCH_CYCLES_CREATE = "infrastructure-management.batch-cycles.create"
    PREMISES_CREATE = "infrastructure-management.premises.create"
    INFRASTRUCTURE_CREATE = "infrastructure-management.infrastructure.create"

    # Staff Management
    STAFF_VIEW = "staff-management.view"
    STAFF_CREATE = "staff-management.staff.create"
    ROLE_ASSIGNMENT_CREATE = "staff-management.role-assignment.create"

    # Student Operations
    STUDENT_OPERATIONS_VIEW = "student-operations.view"
    STUDENTS_IMPORT = "student-operations.students.import"
    COURSE_GROUPS_CREATE = "student-operations.course-groups.create"

    # Scheduling & Sessions
    SCHEDULING_VIEW = "scheduling-sessions.view"
    SCHEDULE_CREATE = "scheduling-sessions.schedule.create"
    SESSIONS_CREATE = "scheduling-sessions.sessions.create"
    VIDEOS_CREATE = "scheduling-sessions.videos.create"
    TIMESHEETS_CREATE = "scheduling-sessions.timesheets.create"
    TIMESHEETS_APPROVE = "scheduling-sessions.timesheets.approve"

    # System Administration
    SYSTEM_ADMIN_VIEW = "system-administration.view"
    MENUS_CREATE = "system-administration.menus.create"
    ROLE_MENUS_CREATE = "system-administration.role-menus.create"

    # Reports & Documentation
    REPORTS_VIEW = "reports-documentation.view"
    SCHEDULE_REPORTS_GENERATE = "reports-documentation.schedule-reports.generate"
    CERTIFICATES_GENERATE = "reports-documentation.certificates.generate"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


def permission_value(permission: Union[PermissionKey, str, None]) -> str:
    """
    Plain string form of a key, whether given as enum member or raw string.
    Keys are matched exactly, so surrounding whitespace is kept.
    """
    if permission is None:
        return ""
    if isinstance(permission, PermissionKey):
        return permission.value
    return str(permission)


# ---------------------------------------------------------
# PERMISSION RECORD (one fact from the permissions feed)
# ---------------------------------------------------------
class PermissionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = None
    permission: str = Field(min_length=1)
    allowed: bool
    is_exception: bool = Field(default=False, alias="isException")
    staff_id: Optional[str] = Field(default=None, alias="staffId")

    # Present when the record is also a navigable menu entry
    menu_path: Optional[str] = Field(default=None, alias="menuPath")
    menu_title: Optional[str] = Field(default=None, alias="menuTitle")
    menu_icon: Optional[str] = Field(default=None, alias="menuIcon")

    resource: Optional[str] = None
    action: Optional[str] = None

    @field_validator("id", "staff_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value):
        # Feed ids may be numeric
        if value is None or value == "":
            return None
        return str(value)

    @property
    def key(self) -> PermissionKey:
        return PermissionKey(self.permission)

    @property
    def resource_name(self) -> str:
        if self.resource:
            return self.resource
        return self.permission.split(".", 1)[0]


# ---------------------------------------------------------
# MENU ITEM (derived from records, or sent by the feed)
# ---------------------------------------------------------
class MenuItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    path: Optional[str] = None
    title: Optional[str] = None
    icon: Optional[str] = None
    permission: Optional[str] = None
    category: Optional[str] = None
