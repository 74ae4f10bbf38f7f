"""Conversion between code elements and the generic records used on the wire."""
import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from gofactory.generators.go_gen.types import (
    ELEMENT_CLASSES,
    CodeElement,
    ElementKind,
    FieldElement,
    FunctionElement,
    HandlerElement,
    InterfaceElement,
    MethodElement,
    ModelElement,
    ParameterElement,
    ReturnElement,
    StructElement,
)

log = logging.getLogger(__name__)

ENTITY_SUFFIXES = {
    ElementKind.REPOSITORY: "Repository",
    ElementKind.SERVICE: "Service",
    ElementKind.HANDLER: "Handler",
}


def element_to_record(element: CodeElement) -> Dict[str, Any]:
    """Serialize an element, omitting empty payload keys."""
    record: Dict[str, Any] = {"type": element.kind.value}
    for key, value in asdict(element).items():
        if key in ("name", "package") or value not in ("", [], {}, None):
            record[key] = value
    return record


def parse_elements(records: List[Dict[str, Any]]) -> List[CodeElement]:
    """
    Build concrete elements from raw records, keeping their order.

    Records whose ``type`` is missing or not one of the element kinds, and
    records without a ``name``, are dropped.
    """
    elements: List[CodeElement] = []
    for i, raw in enumerate(records):
        element = parse_element(raw)
        if element is None:
            log.warning("Dropping element record %d with unrecognized type %r", i, raw.get("type"))
            continue
        if not element.name.strip():
            log.warning("Dropping %s record %d without a name", element.kind.value, i)
            continue
        elements.append(element)
    return elements


def parse_element(raw: Dict[str, Any]) -> Optional[CodeElement]:
    try:
        kind = ElementKind(raw.get("type"))
    except ValueError:
        return None

    name = _str(raw, "name")
    package = _str(raw, "package")
    metadata = _str_map(raw.get("metadata"))

    if kind in (ElementKind.STRUCT, ElementKind.MODEL):
        fields = [
            FieldElement(name=_str(f, "name"), type=_str(f, "type"), tags=_str(f, "tags"))
            for f in _records(raw.get("fields"))
        ]
        if kind == ElementKind.STRUCT:
            return StructElement(name=name, package=package, fields=fields, metadata=metadata)
        return ModelElement(
            name=name, package=package, fields=fields,
            parameters=_str_map(raw.get("parameters")), metadata=metadata,
        )

    if kind == ElementKind.FUNCTION:
        return FunctionElement(
            name=name,
            package=package,
            parameters=_parameters(raw.get("parameters")),
            returns=_returns(raw.get("returns")),
            body=_str(raw, "body"),
            metadata=metadata,
        )

    if kind == ElementKind.INTERFACE:
        methods = [
            MethodElement(
                name=_str(m, "name"),
                parameters=_parameters(m.get("parameters")),
                returns=_returns(m.get("returns")),
            )
            for m in _records(raw.get("methods"))
        ]
        return InterfaceElement(name=name, package=package, methods=methods, metadata=metadata)

    cls = ELEMENT_CLASSES[kind]
    entity_name = _str(raw, "entity_name") or _strip_suffix(name, ENTITY_SUFFIXES[kind])
    element = cls(
        name=name,
        package=package,
        entity_name=entity_name,
        parameters=_str_map(raw.get("parameters")),
        metadata=metadata,
    )
    listing = "routes" if isinstance(element, HandlerElement) else "methods"
    values = raw.get(listing)
    if isinstance(values, list) and values:
        setattr(element, listing, [str(v) for v in values])
    return element


def _str(raw: Dict[str, Any], key: str) -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else ""


def _str_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {k: v for k, v in value.items() if isinstance(v, str)}


def _records(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _parameters(value: Any) -> List[ParameterElement]:
    return [ParameterElement(name=_str(p, "name"), type=_str(p, "type")) for p in _records(value)]


def _returns(value: Any) -> List[ReturnElement]:
    return [ReturnElement(type=_str(r, "type")) for r in _records(value)]


def _strip_suffix(name: str, suffix: str) -> str:
    if name.endswith(suffix) and len(name) > len(suffix):
        return name[: -len(suffix)]
    return name

