"""Static lookup tables used by the normalizer and the info endpoints."""
from typing import Dict, List

from gofactory.generators.go_gen.types import ElementKind


# Abstract field type -> Go type. Unknown types pass through unchanged.
TYPE_MAPPING: Dict[str, str] = {
    "string": "string",
    "integer": "int",
    "int": "int",
    "int32": "int32",
    "int64": "int64",
    "float": "float64",
    "float32": "float32",
    "float64": "float64",
    "number": "float64",
    "boolean": "bool",
    "bool": "bool",
    "email": "string",
    "password": "string",
    "url": "string",
    "timestamp": "time.Time",
    "datetime": "time.Time",
    "date": "time.Time",
    "time": "time.Time",
    "uuid": "string",
    "id": "string",
    "text": "string",
    "longtext": "string",
    "enum": "string",
    "json": "json.RawMessage",
    "jsonb": "json.RawMessage",
    "array": "[]interface{}",
    "slice": "[]string",
    "map": "map[string]interface{}",
    "object": "map[string]interface{}",
    "binary": "[]byte",
    "bytes": "[]byte",
    "decimal": "decimal.Decimal",
    "money": "decimal.Decimal",
}

ID_TYPE = TYPE_MAPPING["string"]
TIMESTAMP_TYPE = TYPE_MAPPING["timestamp"]


# Feature tag -> element kinds synthesized for it. Tags absent here add nothing.
FEATURE_MAPPING: Dict[str, List[ElementKind]] = {
    "crud": [ElementKind.INTERFACE],
    "repository": [ElementKind.INTERFACE],
    "validation": [ElementKind.FUNCTION],
    "rest_api": [ElementKind.FUNCTION],
    "handler": [ElementKind.FUNCTION],
}

FEATURE_DESCRIPTIONS: Dict[str, str] = {
    "crud": "Repository interface with Create, GetByID, Update, Delete and List",
    "repository": "Repository interface with Create, GetByID, Update, Delete and List",
    "validation": "Validate<Entity> function guarding required and email fields",
    "rest_api": "Create<Entity> application service function",
    "handler": "Create<Entity> application service function",
}


# Validation rule tag -> go-playground/validator tag.
VALIDATION_RULE_MAPPING: Dict[str, str] = {
    "required": "required",
    "email": "email",
    "min": "min",
    "max": "max",
    "len": "len",
    "alpha": "alpha",
    "alphanum": "alphanum",
    "numeric": "numeric",
    "url": "url",
    "uuid": "uuid",
    "json": "json",
    "base64": "base64",
    "hexadecimal": "hexadecimal",
    "color": "hexcolor|rgb|rgba|hsl|hsla",
}


PROJECT_TYPE_MAPPING: Dict[str, Dict[str, List[str]]] = {
    "microservice": {
        "default_features": ["rest_api", "repository", "validation"],
        "required_structure": ["cmd", "internal/domain", "internal/application", "internal/infrastructure", "internal/interfaces"],
        "default_dependencies": ["github.com/gin-gonic/gin", "github.com/google/uuid"],
    },
    "api": {
        "default_features": ["rest_api", "validation"],
        "required_structure": ["cmd", "internal/handlers", "internal/middleware", "internal/models"],
        "default_dependencies": ["github.com/gin-gonic/gin"],
    },
    "cli": {
        "default_features": [],
        "required_structure": ["cmd", "internal/commands", "internal/config"],
        "default_dependencies": ["github.com/spf13/cobra"],
    },
    "library": {
        "default_features": [],
        "required_structure": ["pkg", "examples", "docs"],
        "default_dependencies": [],
    },
    "web": {
        "default_features": ["rest_api"],
        "required_structure": ["cmd", "internal/handlers", "web/static", "web/templates"],
        "default_dependencies": ["github.com/gin-gonic/gin"],
    },
    "worker": {
        "default_features": [],
        "required_structure": ["cmd", "internal/workers", "internal/jobs"],
        "default_dependencies": [],
    },
}


# Import paths for package qualifiers that may appear in generated types and bodies.
STANDARD_IMPORTS: Dict[str, str] = {
    "context": "context",
    "fmt": "fmt",
    "json": "encoding/json",
    "reflect": "reflect",
    "regexp": "regexp",
    "time": "time",
    "uuid": "github.com/google/uuid",
    "decimal": "github.com/shopspring/decimal",
}


def map_field_type(abstract_type: str) -> str:
    """Map an abstract field type to a Go type, passing unknown types through."""
    return TYPE_MAPPING.get(abstract_type, abstract_type)
