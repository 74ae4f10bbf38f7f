"""User-facing project specification models.

A ProjectSpecification is supplied by the caller and never mutated by the
pipeline; every model here is frozen once constructed.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional, Dict, List


ProjectType = Literal["microservice", "api", "cli", "library", "web", "worker"]


class SpecModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class FieldSpecification(SpecModel):
    name: str
    type: str = Field(..., examples=["string", "integer", "uuid", "email", "timestamp", "boolean"])
    required: bool = False
    unique: bool = False
    nullable: bool = False
    min: Optional[int] = None
    max: Optional[int] = None
    default: Optional[str] = None
    validation: List[str] = Field(default_factory=list, examples=[["email", "min:3"]])
    format: Optional[str] = None
    enum: List[str] = Field(default_factory=list)
    reference: Optional[str] = None
    description: str = ""


class RelationshipSpecification(SpecModel):
    name: str
    type: Literal["one_to_one", "one_to_many", "many_to_many", "belongs_to"]
    target: str
    foreign_key: Optional[str] = None
    join_table: Optional[str] = None
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    description: str = ""


class ConstraintSpecification(SpecModel):
    name: str
    type: str  # check, unique, foreign_key, primary_key
    fields: List[str] = Field(default_factory=list)
    expression: Optional[str] = None
    reference: Optional[str] = None
    description: str = ""


class IndexSpecification(SpecModel):
    name: str
    type: str = "btree"
    fields: List[str] = Field(default_factory=list)
    unique: bool = False
    partial: Optional[str] = None
    description: str = ""


class EntitySpecification(SpecModel):
    name: str
    description: str = ""
    fields: List[FieldSpecification] = Field(default_factory=list)
    relationships: List[RelationshipSpecification] = Field(default_factory=list)
    constraints: List[ConstraintSpecification] = Field(default_factory=list)
    indexes: List[IndexSpecification] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list, examples=[["crud", "validation", "rest_api"]])
    options: Dict[str, str] = Field(default_factory=dict)


class ServerConfiguration(SpecModel):
    port: Optional[int] = None
    host: Optional[str] = None
    tls: bool = False
    timeout: Optional[str] = None
    middleware: List[str] = Field(default_factory=list)


class DatabaseConfiguration(SpecModel):
    type: Optional[str] = None  # postgres, mysql, sqlite, mongodb
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    migrations: bool = False
    seeding: bool = False


class LoggingConfiguration(SpecModel):
    level: Optional[str] = None
    format: Optional[str] = None
    output: List[str] = Field(default_factory=list)
    structured: bool = False


class ProjectConfiguration(SpecModel):
    server: Optional[ServerConfiguration] = None
    database: Optional[DatabaseConfiguration] = None
    logging: Optional[LoggingConfiguration] = None


class ProjectSpecification(SpecModel):
    name: str
    description: str = ""
    module_path: str = Field(..., examples=["github.com/acme/users"])
    output_path: str = Field(..., examples=["/data/generated/users"])
    project_type: ProjectType = "microservice"
    entities: List[EntitySpecification] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)
    configuration: ProjectConfiguration = Field(default_factory=ProjectConfiguration)
    options: Dict[str, str] = Field(default_factory=dict)
