from fastapi import APIRouter
from gofactory.generators.go_gen.tables import (
    FEATURE_DESCRIPTIONS,
    FEATURE_MAPPING,
    PROJECT_TYPE_MAPPING,
    TYPE_MAPPING,
)

router = APIRouter(prefix="/info")

@router.get("/types")
def supported_types():
    return {"types": TYPE_MAPPING}

@router.get("/features")
def supported_features():
    return {
        "features": {
            tag: {"elements": [kind.value for kind in kinds], "description": FEATURE_DESCRIPTIONS.get(tag, "")}
            for tag, kinds in FEATURE_MAPPING.items()
        }
    }

@router.get("/project-types")
def supported_project_types():
    return {"project_types": PROJECT_TYPE_MAPPING}
