from fastapi import APIRouter

from app.api.routes.agenda import router as agenda_router
from app.api.routes.health import router as health_router

api_router = APIRouter()
v1_router = APIRouter(prefix="/v1")

api_router.include_router(health_router)

# Unversioned routes used by the current clients.
api_router.include_router(agenda_router)

# Versioned routes for long-term API evolution.
v1_router.include_router(agenda_router)
api_router.include_router(v1_router)
