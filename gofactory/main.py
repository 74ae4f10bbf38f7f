import logging
from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
from fastapi import FastAPI
from gofactory.core.config import Settings
from gofactory.core.logging import configure_logging
from gofactory.api.routes import router as api_router

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    settings = app.state.settings
    log.info("Starting API server (env=%s, output_root=%s)", settings.app_env, settings.output_root)
    if settings.template_service_url:
        log.info("Remote templates from %s: %s", settings.template_service_url,
                 ", ".join(settings.remote_template_ids))
    yield
    # Shutdown
    log.info("Shutting down API server...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.include_router(api_router, prefix="/v1")
    return app


app = create_app()


def run() -> None:
    settings = app.state.settings
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    run()
