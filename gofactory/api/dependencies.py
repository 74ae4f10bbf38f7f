from fastapi import Request
from gofactory.core.config import Settings
from gofactory.core.pipeline import GenerationPipeline


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pipeline(request: Request) -> GenerationPipeline:
    return GenerationPipeline(request.app.state.settings)
