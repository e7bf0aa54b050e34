"""User API router entrypoint."""

from fastapi import APIRouter

from services.user.routers.favorite_router import router as favorite_router

router = APIRouter(prefix="/api/user", tags=["User"])

router.include_router(favorite_router)
