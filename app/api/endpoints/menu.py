# app/api/endpoints/menu.py

from typing import Dict, List

from fastapi import APIRouter, Depends

from app.api.deps import get_permission_store
from app.models.permission import MenuItem
from app.services import menu_service
from app.services.permission_store import PermissionStore

router = APIRouter(prefix="/api/menu", tags=["Menu"])


# -------------------------------------------------------------------
# Flat list of accessible menu entries (empty until permissions load)
# -------------------------------------------------------------------
@router.get("/", response_model=List[MenuItem])
async def get_menu(store: PermissionStore = Depends(get_permission_store)):
    return store.get_accessible_menu_items()


# -------------------------------------------------------------------
# Sidebar navigation tree
# -------------------------------------------------------------------
@router.get("/sidebar", response_model=List[dict])
async def get_sidebar(store: PermissionStore = Depends(get_permission_store)):
    return menu_service.build_sidebar_menu(store.state)


# -------------------------------------------------------------------
# Server-provided menu items grouped by category
# -------------------------------------------------------------------
@router.get("/categories", response_model=Dict[str, List[MenuItem]])
async def get_menu_categories(store: PermissionStore = Depends(get_permission_store)):
    return menu_service.group_menu_items_by_category(store.state)
