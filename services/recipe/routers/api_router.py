"""Recipe API router entrypoint."""

from fastapi import APIRouter

from services.recipe.routers.category_router import router as category_router
from services.recipe.routers.detail_router import router as detail_router
from services.recipe.routers.rating_router import router as rating_router
from services.recipe.routers.recipe_router import router as recipe_router
from services.recipe.routers.search_router import router as search_router

RECIPE_PREFIX = "/api/recipes"

router = APIRouter(tags=["Recipe"])

# 고정 경로(/search, /latest, /categories)를 /{recipe_id} 보다 먼저 등록
router.include_router(search_router, prefix=RECIPE_PREFIX)
router.include_router(recipe_router, prefix=RECIPE_PREFIX)
router.include_router(category_router, prefix=RECIPE_PREFIX)
router.include_router(rating_router, prefix=RECIPE_PREFIX)
router.include_router(detail_router, prefix=RECIPE_PREFIX)
