from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone
from gofactory.generators.go_gen.types import BuildReport, CodeAccumulator
from gofactory.schemas.specification import EntitySpecification


class GenerationRequest(BaseModel):
    id: str = Field(..., examples=["req-7f3a"])
    elements: List[Dict[str, Any]] = Field(
        default_factory=list,
        examples=[[{"type": "struct", "name": "User", "package": "domain",
                    "fields": [{"name": "ID", "type": "string", "tags": 'json:"id"'}]}]],
    )
    module_path: str = Field(..., examples=["github.com/acme/users"])
    output_path: str = Field(..., examples=["/data/generated/users"])
    package_name: str = "main"
    template_service_url: Optional[str] = None
    compiler_service_url: Optional[str] = None
    parameters: Dict[str, str] = {}


class GenerationResult(BaseModel):
    id: str
    request_id: str
    accumulator: Optional[CodeAccumulator] = None
    success: bool
    error_message: Optional[str] = None
    warnings: List[str] = []
    build_report: Optional[BuildReport] = None
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EntitySetRequest(BaseModel):
    entity_name: str = Field(..., examples=["User"])
    module_path: str = Field(..., examples=["github.com/acme/users"])
    output_path: str = Field(..., examples=["/data/generated/users"])
    template_service_url: Optional[str] = None


class EntityPayloadRequest(BaseModel):
    """A single entity, wrapped in a microservice project for payload building."""
    project_name: str = Field(..., examples=["users"])
    module_path: str = Field(..., examples=["github.com/acme/users"])
    output_path: str = Field(..., examples=["/data/generated/users"])
    entity: EntitySpecification


class HealthResponse(BaseModel):
    status: str
    app: str
    env: str
