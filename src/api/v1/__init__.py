"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.auth import router as auth_router
from api.v1.routes.dashboard import router as dashboard_router
from api.v1.routes.posts import router as posts_router
from api.v1.routes.profile import router as profile_router
from api.v1.routes.users import router as users_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(dashboard_router)
router.include_router(profile_router)
router.include_router(posts_router)
router.include_router(users_router)
