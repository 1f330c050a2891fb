# app/services/menu_service.py

from typing import Dict, List

from app.core.constants import DEFAULT_MENU_CATEGORY, SIDEBAR_MENU
from app.models.permission import MenuItem, PermissionRecord
from app.models.permission_state import PermissionState


# ============================================================================
# ACCESSIBLE MENU ITEMS
# ============================================================================
def get_accessible_menu_items(state: PermissionState) -> List[MenuItem]:
    """
    Allowed records projected to menu items, in feed order.

    The default matrix is not consulted: only records actually sent by the
    permissions feed can become menu entries. Nothing is returned until the
    store has loaded, even if older records are still held.
    """
    if not state.is_loaded:
        return []

    return [
        MenuItem(
            path=record.menu_path,
            title=record.menu_title,
            icon=record.menu_icon,
            permission=record.permission,
        )
        for record in state.permission_records
        if record.allowed
    ]


def get_accessible_routes(state: PermissionState) -> List[str]:
    return [item.path for item in get_accessible_menu_items(state) if item.path]


# ============================================================================
# GROUPINGS
# ============================================================================
def group_permissions_by_resource(state: PermissionState) -> Dict[str, List[PermissionRecord]]:
    grouped: Dict[str, List[PermissionRecord]] = {}
    for record in state.permission_records:
        grouped.setdefault(record.resource_name, []).append(record)
    return grouped


def group_menu_items_by_category(state: PermissionState) -> Dict[str, List[MenuItem]]:
    # Server-provided menu items, not the record projection
    grouped: Dict[str, List[MenuItem]] = {}
    for item in state.menu_items:
        grouped.setdefault(item.category or DEFAULT_MENU_CATEGORY, []).append(item)
    return grouped


# ============================================================================
# SIDEBAR TREE
# ============================================================================
def build_sidebar_menu(state: PermissionState) -> List[dict]:
    """
    Filters SIDEBAR_MENU down to what the accessible menu items allow.

    Single-entry groups stay only if their own path is accessible; other
    groups keep their accessible children and disappear when none are left.
    """
    accessible_paths = set(get_accessible_routes(state))
    sidebar = []

    for group in SIDEBAR_MENU:
        if group.get("single"):
            if group["path"] in accessible_paths:
                sidebar.append(dict(group))
            continue

        children = [
            dict(child)
            for child in group.get("children", [])
            if child["path"] in accessible_paths
        ]
        if children:
            sidebar.append({**group, "children": children})

    return sidebar
