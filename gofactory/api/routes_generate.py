from fastapi import APIRouter, Depends, HTTPException
from gofactory.api.dependencies import get_pipeline, get_settings
from gofactory.core.config import Settings
from gofactory.core.errors import ValidationError
from gofactory.core.pipeline import GenerationPipeline, build_generation_request
from gofactory.schemas.generation import (
    EntityPayloadRequest,
    EntitySetRequest,
    GenerationRequest,
    GenerationResult,
)
from gofactory.schemas.specification import ProjectSpecification

router = APIRouter()

@router.post("/generate", response_model=GenerationResult)
def generate_code(req: GenerationRequest, pipeline: GenerationPipeline = Depends(get_pipeline)):
    return pipeline.generate(req)

@router.post("/generate/entity", response_model=GenerationResult)
def generate_entity_set(req: EntitySetRequest, pipeline: GenerationPipeline = Depends(get_pipeline)):
    return pipeline.generate_entity_set(req)

@router.post("/orchestrate", response_model=GenerationResult)
def orchestrate(spec: ProjectSpecification, pipeline: GenerationPipeline = Depends(get_pipeline)):
    try:
        return pipeline.run(spec)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/orchestrate/payload", response_model=GenerationRequest)
def orchestrate_payload(spec: ProjectSpecification, settings: Settings = Depends(get_settings)):
    try:
        return build_generation_request(spec, settings)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/orchestrate/entity", response_model=GenerationRequest)
def orchestrate_entity_payload(req: EntityPayloadRequest, settings: Settings = Depends(get_settings)):
    spec = ProjectSpecification(
        name=req.project_name,
        module_path=req.module_path,
        output_path=req.output_path,
        project_type="microservice",
        entities=[req.entity],
    )
    try:
        return build_generation_request(spec, settings)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
