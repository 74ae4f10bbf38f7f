from fastapi import APIRouter
from gofactory.api.routes_health import router as health_router
from gofactory.api.routes_generate import router as generate_router
from gofactory.api.routes_info import router as info_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(generate_router, tags=["generate"])
router.include_router(info_router, tags=["info"])
