"""Tests for converting element records to and from code elements."""
import logging
from gofactory.generators.go_gen.codec import element_to_record, parse_elements
from gofactory.generators.go_gen.normalizer import create_complete_entity_set, normalize
from gofactory.generators.go_gen.types import (
    FunctionElement,
    HandlerElement,
    RepositoryElement,
    StructElement,
)
from gofactory.schemas.specification import ProjectSpecification


def test_records_rebuild_the_same_elements():
    spec = ProjectSpecification.model_validate({
        "name": "shop",
        "module_path": "github.com/acme/shop",
        "output_path": "shop",
        "entities": [{
            "name": "Order",
            "fields": [{"name": "total", "type": "decimal", "required": True}],
            "features": ["crud", "validation", "rest_api"],
        }],
    })
    elements = normalize(spec) + create_complete_entity_set("Order")

    records = [element_to_record(e) for e in elements]

    assert [r["type"] for r in records] == [
        "struct", "function", "interface", "function", "function", "model", "repository", "service", "handler",
    ]
    assert parse_elements(records) == elements


def test_record_omits_empty_payload():
    record = element_to_record(StructElement(name="Empty", package="domain"))
    assert record == {"type": "struct", "name": "Empty", "package": "domain"}


def test_unknown_and_missing_types_are_dropped(caplog):
    records = [
        {"type": "struct", "name": "User", "package": "domain", "fields": [{"name": "ID", "type": "string"}]},
        {"type": "enum", "name": "Color"},
        {"name": "NoType"},
        {"type": "function", "name": "Hello", "package": "main", "body": "return"},
    ]

    with caplog.at_level(logging.WARNING, logger="gofactory.generators.go_gen.codec"):
        elements = parse_elements(records)

    assert [type(e) for e in elements] == [StructElement, FunctionElement]
    assert [e.name for e in elements] == ["User", "Hello"]
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 2


def test_records_without_a_name_are_dropped(caplog):
    records = [
        {"type": "struct", "name": "", "package": "domain", "fields": [{"name": "ID", "type": "string"}]},
        {"type": "function", "package": "main", "body": "return"},
        {"type": "interface", "name": "   ", "package": "domain"},
        {"type": "struct", "name": "User", "package": "domain"},
    ]

    with caplog.at_level(logging.WARNING, logger="gofactory.generators.go_gen.codec"):
        elements = parse_elements(records)

    assert [e.name for e in elements] == ["User"]
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings == [
        "Dropping struct record 0 without a name",
        "Dropping function record 1 without a name",
        "Dropping interface record 2 without a name",
    ]


def test_entity_name_derived_from_element_name():
    elements = parse_elements([
        {"type": "repository", "name": "CustomerRepository", "package": "repository"},
        {"type": "handler", "name": "CustomerHandler", "package": "handlers", "entity_name": "Client"},
    ])

    assert isinstance(elements[0], RepositoryElement)
    assert elements[0].entity_name == "Customer"
    assert elements[0].methods == ["Create", "GetByID", "Update", "Delete", "List"]
    assert isinstance(elements[1], HandlerElement)
    assert elements[1].entity_name == "Client"


def test_malformed_payload_values_are_skipped():
    elements = parse_elements([{
        "type": "function",
        "name": "Sum",
        "package": "mathx",
        "parameters": [{"name": "a", "type": "int"}, "oops"],
        "returns": "int",
        "metadata": {"role": "helper", "count": 3},
    }])

    fn = elements[0]
    assert [(p.name, p.type) for p in fn.parameters] == [("a", "int")]
    assert fn.returns == []
    assert fn.metadata == {"role": "helper"}
