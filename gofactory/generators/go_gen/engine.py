"""Generation engine: visits code elements and accumulates rendered files."""
import logging
import re
from typing import Dict, Iterable, List, Sequence

from gofactory.core.workflow import PipelineStage
from gofactory.generators.go_gen.resolver import TemplateResolver
from gofactory.generators.go_gen.tables import STANDARD_IMPORTS
from gofactory.generators.go_gen.types import (
    CodeAccumulator,
    CodeElement,
    ElementKind,
    FieldElement,
    FunctionElement,
    GeneratedFile,
    HandlerElement,
    InterfaceElement,
    ModelElement,
    ParameterElement,
    RepositoryElement,
    ReturnElement,
    ServiceElement,
    StructElement,
)
from gofactory.generators.go_gen.utils import to_file_stem, to_go_var

log = logging.getLogger(__name__)

TEMPLATE_IDS: Dict[ElementKind, str] = {kind: f"{kind.value}_template" for kind in ElementKind}

# Package -> output directory. Unknown packages land under internal/<package>.
PACKAGE_DIRS: Dict[str, str] = {
    "domain": "internal/domain",
    "application": "internal/application",
    "repository": "internal/infrastructure/repository",
    "handlers": "internal/interfaces/http/handlers",
}

# Per-entity kinds always land in their layer, whatever package they declare.
ENTITY_KIND_DIRS: Dict[ElementKind, str] = {
    ElementKind.REPOSITORY: PACKAGE_DIRS["repository"],
    ElementKind.SERVICE: PACKAGE_DIRS["application"],
    ElementKind.HANDLER: PACKAGE_DIRS["handlers"],
}

QUALIFIER = re.compile(r"(?<![\w.])([a-z][a-z0-9]*)\.")

# Closed dispatch table: every element class maps to exactly one visit method.
VISIT_METHODS = {
    StructElement: "visit_struct",
    FunctionElement: "visit_function",
    InterfaceElement: "visit_interface",
    ModelElement: "visit_model",
    RepositoryElement: "visit_repository",
    ServiceElement: "visit_service",
    HandlerElement: "visit_handler",
}


def output_path(kind: ElementKind, package: str, name: str, entity_name: str = "") -> str:
    """Output path relative to the project root, deterministic from kind and names."""
    if kind in ENTITY_KIND_DIRS:
        return f"{ENTITY_KIND_DIRS[kind]}/{to_file_stem(entity_name or name)}_{kind.value}.go"
    directory = PACKAGE_DIRS.get(package, f"internal/{package}")
    return f"{directory}/{to_file_stem(name)}.go"


class CodeGenerationVisitor:
    """Renders one element per visit and appends the result to its accumulator."""

    def __init__(self, resolver: TemplateResolver, module_path: str):
        self.resolver = resolver
        self.module_path = module_path
        self.accumulator = CodeAccumulator()

    def visit(self, element: CodeElement) -> None:
        method = VISIT_METHODS.get(type(element))
        if method is None:
            raise TypeError(f"unsupported code element: {type(element).__name__}")
        getattr(self, method)(element)

    def _emit(self, kind: ElementKind, element, parameters: Dict[str, str], entity_name: str = "") -> None:
        content = self.resolver.process_template(TEMPLATE_IDS[kind], parameters)
        self.accumulator.add_file(GeneratedFile.from_content(
            path=output_path(kind, element.package, element.name, entity_name),
            content=content,
            package=element.package,
            kind=kind,
        ))

    def _entity_parameters(self, element) -> Dict[str, str]:
        parameters = {
            "EntityName": element.entity_name,
            "EntityVarName": to_go_var(element.entity_name),
            "EntityNameLower": element.entity_name.lower(),
            "ModulePath": self.module_path,
            "PackageName": element.package,
        }
        parameters.update(element.parameters)
        return parameters

    def visit_repository(self, element: RepositoryElement) -> None:
        self._emit(ElementKind.REPOSITORY, element, self._entity_parameters(element), element.entity_name)

    def visit_service(self, element: ServiceElement) -> None:
        self._emit(ElementKind.SERVICE, element, self._entity_parameters(element), element.entity_name)

    def visit_handler(self, element: HandlerElement) -> None:
        self._emit(ElementKind.HANDLER, element, self._entity_parameters(element), element.entity_name)

    def visit_model(self, element: ModelElement) -> None:
        parameters = {
            "ModelName": element.name,
            "ModelNameLower": element.name.lower(),
            "PackageName": element.package,
            "ModulePath": self.module_path,
            "Fields": render_fields(element.fields),
            "Imports": self._imports(element.package, [f.type for f in element.fields]),
        }
        parameters.update(element.parameters)
        self._emit(ElementKind.MODEL, element, parameters)

    def visit_interface(self, element: InterfaceElement) -> None:
        lines = []
        for method in element.methods:
            lines.append(f"\t{method.name}({render_parameters(method.parameters)}){_returns_suffix(method.returns)}\n")
        signature_types = [p.type for m in element.methods for p in m.parameters]
        signature_types += [r.type for m in element.methods for r in m.returns]
        parameters = {
            "InterfaceName": element.name,
            "PackageName": element.package,
            "Methods": "".join(lines),
            "Imports": self._imports(element.package, signature_types),
        }
        self._emit(ElementKind.INTERFACE, element, parameters)

    def visit_struct(self, element: StructElement) -> None:
        parameters = {
            "StructName": element.name,
            "PackageName": element.package,
            "Fields": render_fields(element.fields),
            "Imports": self._imports(element.package, [f.type for f in element.fields]),
        }
        self._emit(ElementKind.STRUCT, element, parameters)

    def visit_function(self, element: FunctionElement) -> None:
        sources = [p.type for p in element.parameters] + [r.type for r in element.returns] + [element.body]
        parameters = {
            "FunctionName": element.name,
            "PackageName": element.package,
            "Parameters": render_parameters(element.parameters),
            "Returns": render_returns(element.returns),
            "Body": element.body,
            "Description": f"implements {element.name}",
            "Imports": self._imports(element.package, sources),
        }
        self._emit(ElementKind.FUNCTION, element, parameters)

    def _imports(self, package: str, sources: Iterable[str]) -> str:
        paths = sorted(self._import_paths(package, sources))
        if not paths:
            return ""
        std = [p for p in paths if "." not in p.split("/")[0]]
        external = [p for p in paths if p not in std]
        groups = ["".join(f'\t"{p}"\n' for p in group) for group in (std, external) if group]
        return "\nimport (\n" + "\n".join(groups) + ")\n"

    def _import_paths(self, package: str, sources: Iterable[str]) -> set:
        local_packages = {
            "domain": f"{self.module_path}/{PACKAGE_DIRS['domain']}",
            "application": f"{self.module_path}/{PACKAGE_DIRS['application']}",
        }
        paths = set()
        for source in sources:
            for qualifier in QUALIFIER.findall(source):
                if qualifier in STANDARD_IMPORTS:
                    paths.add(STANDARD_IMPORTS[qualifier])
                elif qualifier in local_packages and qualifier != package:
                    paths.add(local_packages[qualifier])
        return paths


def render_fields(fields: Sequence[FieldElement]) -> str:
    lines = []
    for f in fields:
        line = f"\t{f.name} {f.type}"
        if f.tags:
            line += f" `{f.tags}`"
        lines.append(line + "\n")
    return "".join(lines)


def render_parameters(parameters: Sequence[ParameterElement]) -> str:
    return ", ".join(f"{p.name} {p.type}" for p in parameters)


def render_returns(returns: Sequence[ReturnElement]) -> str:
    if not returns:
        return ""
    if len(returns) == 1:
        return returns[0].type
    return "(" + ", ".join(r.type for r in returns) + ")"


def _returns_suffix(returns: Sequence[ReturnElement]) -> str:
    rendered = render_returns(returns)
    return f" {rendered}" if rendered else ""


def generate(
    elements: List[CodeElement],
    resolver: TemplateResolver,
    module_path: str,
    request_id: str = "-",
) -> CodeAccumulator:
    """
    Render every element, in order, into a fresh accumulator.

    Raises:
        TemplateResolutionError: on the first element whose template cannot be
            resolved. The partially filled accumulator is dropped with the
            visitor, so callers never observe earlier elements' output.
    """
    visitor = CodeGenerationVisitor(resolver, module_path)
    for i, element in enumerate(elements):
        log.info(
            "Processing element %d/%d: %s (%s)", i + 1, len(elements), element.name, element.kind.value,
            extra={"request_id": request_id, "stage": PipelineStage.GENERATE.value},
        )
        visitor.visit(element)
    return visitor.accumulator
