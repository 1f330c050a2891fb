# app/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
import sys

from app.core.config import settings
from app.core.constants import DEFAULT_PERMISSIONS, ROUTE_PERMISSION_MAP
from app.services.permission_client import PermissionClient
from app.services.session_service import SessionRegistry

# Routers
from app.api.endpoints import (
    permissions as permissions_router,
    menu as menu_router,
)

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    level=settings.LOG_LEVEL,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    colorize=True,
    backtrace=True,
    diagnose=settings.ENV != "prod",
)

# ------------------------------------------------------------
# FASTAPI APP INIT
# ------------------------------------------------------------
app = FastAPI(
    title="Staff Portal Permission Service",
    version="1.0.0",
    description="Role and permission evaluation for the Staff Portal.",
)

# One permission store per signed-in staff member
permission_client = PermissionClient()
app.state.session_registry = SessionRegistry(permission_client.fetch_user_permissions)

# ------------------------------------------------------------
# CORS CONFIGURATION
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

# ------------------------------------------------------------
# REGISTER ROUTERS
# ------------------------------------------------------------
app.include_router(permissions_router.router)
app.include_router(menu_router.router)

# ------------------------------------------------------------
# APPLICATION STARTUP EVENTS
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    logger.info("Starting Staff Portal Permission Service...")
    logger.info(f"Permissions feed: {permission_client.url}")
    logger.info(
        f"Default matrix: {len(DEFAULT_PERMISSIONS)} keys, "
        f"{len(ROUTE_PERMISSION_MAP)} guarded routes."
    )
    logger.success("Startup completed.")


@app.on_event("shutdown")
async def on_shutdown():
    logger.info(f"Shutting down with {len(app.state.session_registry)} active permission session(s).")


# ------------------------------------------------------------
# ROOT HEALTH CHECK
# ------------------------------------------------------------
@app.get("/", tags=["System"])
async def root():
    return {
        "status": "ok",
        "service": "Staff Portal Permission Service",
        "version": app.version,
        "active_sessions": len(app.state.session_registry),
    }
