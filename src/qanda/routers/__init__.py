"""API routers."""

from qanda.routers.answers import router as answers_router
from qanda.routers.auth import router as auth_router
from qanda.routers.questions import router as questions_router

__all__ = ["answers_router", "auth_router", "questions_router"]
