"""Dataclasses for Go code generation."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Union


class ElementKind(str, Enum):
    STRUCT = "struct"
    FUNCTION = "function"
    INTERFACE = "interface"
    MODEL = "model"
    REPOSITORY = "repository"
    SERVICE = "service"
    HANDLER = "handler"


@dataclass(frozen=True)
class FieldElement:
    """A struct or model field."""
    name: str  # Go identifier, e.g. "CreatedAt"
    type: str  # Go type, e.g. "time.Time"
    tags: str = ""  # Raw struct tag text without backquotes


@dataclass(frozen=True)
class ParameterElement:
    name: str
    type: str


@dataclass(frozen=True)
class ReturnElement:
    type: str


@dataclass(frozen=True)
class MethodElement:
    """An interface method signature."""
    name: str
    parameters: List[ParameterElement] = field(default_factory=list)
    returns: List[ReturnElement] = field(default_factory=list)


@dataclass
class StructElement:
    name: str
    package: str
    fields: List[FieldElement] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)
    kind = ElementKind.STRUCT

    def accept(self, visitor):
        return visitor.visit_struct(self)


@dataclass
class FunctionElement:
    name: str
    package: str
    parameters: List[ParameterElement] = field(default_factory=list)
    returns: List[ReturnElement] = field(default_factory=list)
    body: str = ""
    metadata: Dict[str, str] = field(default_factory=dict)
    kind = ElementKind.FUNCTION

    def accept(self, visitor):
        return visitor.visit_function(self)


@dataclass
class InterfaceElement:
    name: str
    package: str
    methods: List[MethodElement] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)
    kind = ElementKind.INTERFACE

    def accept(self, visitor):
        return visitor.visit_interface(self)


@dataclass
class ModelElement:
    """A persisted struct; rendered with a TableName method."""
    name: str
    package: str
    fields: List[FieldElement] = field(default_factory=list)
    parameters: Dict[str, str] = field(default_factory=dict)
    metadata: Dict[str, str] = field(default_factory=dict)
    kind = ElementKind.MODEL

    def accept(self, visitor):
        return visitor.visit_model(self)


@dataclass
class RepositoryElement:
    name: str
    package: str
    entity_name: str = ""
    methods: List[str] = field(default_factory=lambda: ["Create", "GetByID", "Update", "Delete", "List"])
    parameters: Dict[str, str] = field(default_factory=dict)
    metadata: Dict[str, str] = field(default_factory=dict)
    kind = ElementKind.REPOSITORY

    def accept(self, visitor):
        return visitor.visit_repository(self)


@dataclass
class ServiceElement:
    name: str
    package: str
    entity_name: str = ""
    methods: List[str] = field(default_factory=lambda: ["Create", "Get", "Update", "Delete", "List"])
    parameters: Dict[str, str] = field(default_factory=dict)
    metadata: Dict[str, str] = field(default_factory=dict)
    kind = ElementKind.SERVICE

    def accept(self, visitor):
        return visitor.visit_service(self)


@dataclass
class HandlerElement:
    name: str
    package: str
    entity_name: str = ""
    routes: List[str] = field(default_factory=lambda: ["POST", "GET", "PUT", "DELETE"])
    parameters: Dict[str, str] = field(default_factory=dict)
    metadata: Dict[str, str] = field(default_factory=dict)
    kind = ElementKind.HANDLER

    def accept(self, visitor):
        return visitor.visit_handler(self)


CodeElement = Union[
    StructElement,
    FunctionElement,
    InterfaceElement,
    ModelElement,
    RepositoryElement,
    ServiceElement,
    HandlerElement,
]

ELEMENT_CLASSES = {
    ElementKind.STRUCT: StructElement,
    ElementKind.FUNCTION: FunctionElement,
    ElementKind.INTERFACE: InterfaceElement,
    ElementKind.MODEL: ModelElement,
    ElementKind.REPOSITORY: RepositoryElement,
    ElementKind.SERVICE: ServiceElement,
    ElementKind.HANDLER: HandlerElement,
}


@dataclass(frozen=True)
class GeneratedFile:
    """Represents a generated file."""
    path: str  # Relative path from output directory
    content: str  # File contents
    package: str = ""
    type: str = ""  # ElementKind value of the element that produced it
    size: int = 0

    @classmethod
    def from_content(cls, path: str, content: str, package: str, kind: ElementKind) -> "GeneratedFile":
        return cls(
            path=path,
            content=content,
            package=package,
            type=kind.value,
            size=len(content.encode("utf-8")),
        )


@dataclass
class CodeAccumulator:
    """Append-only collection of the files generated for one request."""
    files: List[GeneratedFile] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def add_file(self, file: GeneratedFile) -> None:
        self.files.append(file)

    def files_by_type(self, kind: ElementKind) -> List[GeneratedFile]:
        return [f for f in self.files if f.type == kind.value]

    def total_size(self) -> int:
        return sum(f.size for f in self.files)


@dataclass(frozen=True)
class ValidationIssue:
    file: str
    message: str
    line: int = 0
    column: int = 0
    type: str = "error"  # error, warning, info
    rule: str = ""


@dataclass
class ValidationResult:
    files: List[str] = field(default_factory=list)
    valid: bool = True
    issues: List[ValidationIssue] = field(default_factory=list)


@dataclass
class BuildReport:
    """Outcome of materializing an accumulator.

    ``success`` reflects the write step only. Format, validate and compile
    failures are advisory and end up in ``warnings``.
    """
    output_root: str
    success: bool = False
    files_written: List[str] = field(default_factory=list)
    formatted: bool = False
    valid: bool = False
    compiled: bool = False
    compile_output: str = ""
    warnings: List[str] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)
    error_message: str = ""
