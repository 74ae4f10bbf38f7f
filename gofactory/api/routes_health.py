from fastapi import APIRouter, Depends
from gofactory.api.dependencies import get_settings
from gofactory.core.config import Settings
from gofactory.schemas.generation import HealthResponse

router = APIRouter()

@router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)):
    return HealthResponse(status="ok", app=settings.app_name, env=settings.app_env)
