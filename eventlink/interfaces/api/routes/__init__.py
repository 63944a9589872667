from fastapi import APIRouter, FastAPI

from .admin import router as admin_router
from .applications import router as applications_router
from .auth import router as auth_router
from .feedback import router as feedback_router
from .jobs import router as jobs_router
from .messages import router as messages_router
from .notifications import router as notifications_router
from .profiles import router as profiles_router
from .ratings import router as ratings_router
from .realtime import router as realtime_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Mount every API router under ``/api`` and the live channel at ``/ws``."""

    api = APIRouter(prefix="/api")
    api.include_router(auth_router)
    api.include_router(users_router)
    api.include_router(profiles_router)
    api.include_router(jobs_router)
    api.include_router(applications_router)
    api.include_router(messages_router)
    api.include_router(notifications_router)
    api.include_router(ratings_router)
    api.include_router(feedback_router)
    api.include_router(admin_router)
    app.include_router(api)
    app.include_router(realtime_router)
