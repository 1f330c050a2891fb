# app/core/constants.py

from app.models.permission import PermissionKey as P
from app.models.user import UserRole

ADMIN = UserRole.ADMIN
COORDINATOR = UserRole.COURSE_COORDINATOR
GENERAL = UserRole.GENERAL_USER

# ==========================================================
# DEFAULT PERMISSION MATRIX
# Used only when the permissions feed has no record for a key.
# ==========================================================
_DEFAULTS = {
    # --- ACADEMIC MANAGEMENT ---
    P.ACADEMIC_VIEW: {ADMIN, COORDINATOR, GENERAL},
    P.COURSE_TYPES_CREATE: {ADMIN},
    P.COURSE_TYPES_UPDATE: {ADMIN},
    P.COURSE_TYPES_DELETE: {ADMIN},
    P.COURSES_CREATE: {ADMIN},
    P.COURSES_UPDATE: {ADMIN, COORDINATOR},
    P.COURSES_DELETE: {ADMIN},
    P.MODULES_CREATE: {ADMIN, COORDINATOR},
    P.MODULES_UPDATE: {ADMIN, COORDINATOR},
    P.MODULES_DELETE: {ADMIN},
    P.SUBJECTS_CREATE: {ADMIN, COORDINATOR},
    P.SUBJECTS_UPDATE: {ADMIN, COORDINATOR},
    P.SUBJECTS_DELETE: {ADMIN},

    # --- INFRASTRUCTURE MANAGEMENT ---
    P.INFRASTRUCTURE_VIEW: {ADMIN},
    P.BATCH_CYCLES_CREATE: {ADMIN},
    P.PREMISES_CREATE: {ADMIN},
    P.INFRASTRUCTURE_CREATE: {ADMIN},

    # --- STAFF MANAGEMENT ---
    P.STAFF_VIEW: {ADMIN},
    P.STAFF_CREATE: {ADMIN},
    P.ROLE_ASSIGNMENT_CREATE: {ADMIN},

    # --- STUDENT OPERATIONS ---
    P.STUDENT_OPERATIONS_VIEW: {ADMIN, COORDINATOR},
    P.STUDENTS_IMPORT: {COORDINATOR},
    P.COURSE_GROUPS_CREATE: {ADMIN, COORDINATOR},

    # --- SCHEDULING & SESSIONS ---
    P.SCHEDULING_VIEW: {ADMIN, COORDINATOR, GENERAL},
    P.SCHEDULE_CREATE: {COORDINATOR},
    P.SESSIONS_CREATE: {COORDINATOR, GENERAL},
    P.VIDEOS_CREATE: {COORDINATOR, GENERAL},
    P.TIMESHEETS_CREATE: {GENERAL},
    P.TIMESHEETS_APPROVE: {COORDINATOR},

    # --- SYSTEM ADMINISTRATION ---
    P.SYSTEM_ADMIN_VIEW: {ADMIN},
    P.MENUS_CREATE: {ADMIN},
    P.ROLE_MENUS_CREATE: {ADMIN},

    # --- REPORTS & DOCUMENTATION ---
    P.REPORTS_VIEW: {ADMIN, COORDINATOR},
    P.SCHEDULE_REPORTS_GENERATE: {COORDINATOR},
    P.CERTIFICATES_GENERATE: {ADMIN, COORDINATOR},
}

DEFAULT_PERMISSIONS = {key.value: frozenset(roles) for key, roles in _DEFAULTS.items()}


# ==========================================================
# ROUTE GUARDS (top-level route -> permission key)
# ==========================================================
ROUTE_PERMISSION_MAP = {
    "/dashboard": P.DASHBOARD_VIEW.value,
    "/academic-management": P.ACADEMIC_VIEW.value,
    "/infrastructure-management": P.INFRASTRUCTURE_VIEW.value,
    "/staff-management": P.STAFF_VIEW.value,
    "/student-operations": P.STUDENT_OPERATIONS_VIEW.value,
    "/scheduling-sessions": P.SCHEDULING_VIEW.value,
    "/system-administration": P.SYSTEM_ADMIN_VIEW.value,
    "/reports-documentation": P.REPORTS_VIEW.value,
}


# ==========================================================
# SIDEBAR NAVIGATION
# Groups are shown only when at least one child path is accessible.
# ==========================================================
SIDEBAR_MENU = [
    {
        "key": "dashboard",
        "label": "Dashboard",
        "path": "/dashboard",
        "icon": "home",
        "single": True,
    },
    {
        "key": "academic-management",
        "label": "Academic Management",
        "icon": "academic-cap",
        "children": [
            {"key": "course-types", "label": "Course Types", "path": "/academic-management/course-types"},
            {"key": "courses", "label": "Courses", "path": "/academic-management/courses"},
            {"key": "modules", "label": "Modules", "path": "/academic-management/modules"},
            {"key": "subjects", "label": "Subjects", "path": "/academic-management/subjects"},
            {"key": "sections", "label": "Sections", "path": "/academic-management/sections"},
            {"key": "topics", "label": "Topics", "path": "/academic-management/topics"},
        ],
    },
    {
        "key": "infrastructure-management",
        "label": "Infrastructure Management",
        "icon": "building-office",
        "children": [
            {"key": "batch-cycles", "label": "Batch Cycles", "path": "/infrastructure-management/batch-cycles"},
            {"key": "premises", "label": "Premises", "path": "/infrastructure-management/premises"},
            {"key": "infrastructure", "label": "Infrastructure", "path": "/infrastructure-management/infrastructure"},
        ],
    },
    {
        "key": "staff-management",
        "label": "Staff Management",
        "icon": "users",
        "children": [
            {"key": "staff", "label": "Staff", "path": "/staff-management/staff"},
            {"key": "role-assignment", "label": "Role Assignment", "path": "/staff-management/role-assignment"},
            {"key": "coordinator-assignment", "label": "Coordinator Assignment", "path": "/staff-management/coordinator-assignment"},
        ],
    },
    {
        "key": "student-operations",
        "label": "Student Operations",
        "icon": "academic-cap",
        "children": [
            {"key": "students", "label": "Students", "path": "/student-operations/students"},
            {"key": "course-groups", "label": "Course Groups", "path": "/student-operations/course-groups"},
        ],
    },
    {
        "key": "scheduling-sessions",
        "label": "Scheduling & Sessions",
        "icon": "calendar-days",
        "children": [
            {"key": "schedule", "label": "Schedule", "path": "/scheduling-sessions/schedule"},
            {"key": "sessions", "label": "Sessions", "path": "/scheduling-sessions/sessions"},
            {"key": "videos", "label": "Recorded Videos", "path": "/scheduling-sessions/videos"},
            {"key": "timesheets", "label": "Timesheets", "path": "/scheduling-sessions/timesheets"},
        ],
    },
    {
        "key": "system-administration",
        "label": "System Administration",
        "icon": "cog-6-tooth",
        "children": [
            {"key": "menus", "label": "Menu Management", "path": "/system-administration/menus"},
            {"key": "role-menus", "label": "Role-Based Menu", "path": "/system-administration/role-menus"},
            {"key": "settings", "label": "System Settings", "path": "/system-administration/settings"},
        ],
    },
    {
        "key": "reports-documentation",
        "label": "Reports & Documentation",
        "icon": "document-chart-bar",
        "children": [
            {"key": "schedule-reports", "label": "Schedule Reports", "path": "/reports-documentation/schedule-reports"},
            {"key": "certificates", "label": "Student Certificates", "path": "/reports-documentation/certificates"},
            {"key": "documents", "label": "Document Management", "path": "/reports-documentation/documents"},
        ],
    },
]

DEFAULT_MENU_CATEGORY = "general"
