"""Turn a ProjectSpecification into an ordered list of code elements."""
import logging
from typing import List

from gofactory.core.errors import ValidationError
from gofactory.generators.go_gen.tables import (
    FEATURE_MAPPING,
    ID_TYPE,
    TIMESTAMP_TYPE,
    TYPE_MAPPING,
    VALIDATION_RULE_MAPPING,
    map_field_type,
)
from gofactory.generators.go_gen.types import (
    CodeElement,
    FieldElement,
    FunctionElement,
    HandlerElement,
    InterfaceElement,
    MethodElement,
    ModelElement,
    ParameterElement,
    RepositoryElement,
    ReturnElement,
    ServiceElement,
    StructElement,
)
from gofactory.generators.go_gen.utils import (
    is_identifier_field,
    to_go_name,
    to_go_var,
    to_snake_case,
)
from gofactory.schemas.specification import (
    EntitySpecification,
    FieldSpecification,
    ProjectSpecification,
)

log = logging.getLogger(__name__)

DOMAIN_PACKAGE = "domain"
APPLICATION_PACKAGE = "application"

TIMESTAMP_FIELDS = ("created_at", "updated_at")

INTEGER_TYPES = {"int", "int8", "int16", "int32", "int64", "uint", "uint8", "uint16", "uint32", "uint64"}
FLOAT_TYPES = {"float32", "float64"}
IS_ZERO_TYPES = {"time.Time", "decimal.Decimal"}

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$"

# Package names referenced by generated signatures and bodies; parameters must not shadow them.
PACKAGE_QUALIFIERS = {"context", "decimal", "domain", "fmt", "json", "reflect", "regexp", "time", "uuid"}


def validate_specification(spec: ProjectSpecification) -> None:
    """Reject malformed specifications before any element is produced."""
    if not spec.name:
        raise ValidationError("project name is required")
    if not spec.module_path:
        raise ValidationError("module path is required")
    if not spec.output_path:
        raise ValidationError("output path is required")
    if not spec.entities:
        raise ValidationError("at least one entity is required")

    for i, entity in enumerate(spec.entities):
        try:
            _validate_entity(entity)
        except ValidationError as e:
            raise ValidationError(f"entity {i} ({entity.name}): {e}") from None


def _validate_entity(entity: EntitySpecification) -> None:
    if not entity.name:
        raise ValidationError("entity name is required")
    if not entity.fields:
        raise ValidationError("at least one field is required")
    for i, field in enumerate(entity.fields):
        if not field.name:
            raise ValidationError(f"field {i}: name is required")
        if not field.type:
            raise ValidationError(f"field {i} ({field.name}): type is required")


def normalize(spec: ProjectSpecification) -> List[CodeElement]:
    """
    Normalize a project specification into code elements.

    Per entity, in declaration order: the struct, its constructor, then one
    element per recognized feature tag in the order the tags are listed.

    Raises:
        ValidationError: if the specification is malformed
    """
    validate_specification(spec)

    elements: List[CodeElement] = []
    for entity in spec.entities:
        elements.extend(generate_entity_elements(entity))
    return elements


def generate_entity_elements(entity: EntitySpecification) -> List[CodeElement]:
    elements: List[CodeElement] = [
        generate_struct_element(entity),
        generate_constructor_element(entity),
    ]

    seen = set()
    for feature in entity.features:
        if feature not in FEATURE_MAPPING:
            log.debug("Ignoring unrecognized feature %r on entity %s", feature, entity.name)
            continue
        element = _feature_element(feature, entity)
        if element.name in seen:
            continue
        seen.add(element.name)
        elements.append(element)

    return elements


def _feature_element(feature: str, entity: EntitySpecification) -> CodeElement:
    if feature in ("crud", "repository"):
        return generate_repository_interface(entity)
    if feature == "validation":
        return generate_validation_function(entity)
    return generate_service_function(entity)


def generate_struct_element(entity: EntitySpecification) -> StructElement:
    fields: List[FieldElement] = []

    if not any(is_identifier_field(f.name) for f in entity.fields):
        fields.append(FieldElement(name="ID", type=ID_TYPE, tags='json:"id" db:"id"'))

    for field in entity.fields:
        if to_snake_case(field.name) in TIMESTAMP_FIELDS:
            continue
        fields.append(FieldElement(
            name=to_go_name(field.name),
            type=_map_type(field),
            tags=generate_field_tags(field),
        ))

    for column in TIMESTAMP_FIELDS:
        fields.append(FieldElement(
            name=to_go_name(column),
            type=TIMESTAMP_TYPE,
            tags=f'json:"{column}" db:"{column}"',
        ))

    return StructElement(
        name=entity.name,
        package=DOMAIN_PACKAGE,
        fields=fields,
        metadata={"entity": entity.name, "description": entity.description},
    )


def generate_constructor_element(entity: EntitySpecification) -> FunctionElement:
    parameters = _required_parameters(entity)

    return FunctionElement(
        name=f"New{entity.name}",
        package=DOMAIN_PACKAGE,
        parameters=parameters,
        returns=[ReturnElement(type=f"*{entity.name}")],
        body=generate_constructor_body(entity, parameters),
        metadata={"entity": entity.name, "role": "constructor"},
    )


def generate_repository_interface(entity: EntitySpecification) -> InterfaceElement:
    entity_ref = f"*{entity.name}"
    entity_param = ParameterElement(name=free_name(go_param_name(entity.name), {"ctx", "id"}), type=entity_ref)
    ctx = ParameterElement(name="ctx", type="context.Context")
    id_param = ParameterElement(name="id", type=ID_TYPE)
    error = ReturnElement(type="error")

    methods = [
        MethodElement(name="Create", parameters=[ctx, entity_param], returns=[error]),
        MethodElement(name="GetByID", parameters=[ctx, id_param], returns=[ReturnElement(type=entity_ref), error]),
        MethodElement(name="Update", parameters=[ctx, entity_param], returns=[error]),
        MethodElement(name="Delete", parameters=[ctx, id_param], returns=[error]),
        MethodElement(name="List", parameters=[ctx], returns=[ReturnElement(type=f"[]{entity_ref}"), error]),
    ]

    return InterfaceElement(
        name=f"{entity.name}Repository",
        package=DOMAIN_PACKAGE,
        methods=methods,
        metadata={"entity": entity.name, "role": "repository"},
    )


def generate_validation_function(entity: EntitySpecification) -> FunctionElement:
    return FunctionElement(
        name=f"Validate{entity.name}",
        package=DOMAIN_PACKAGE,
        parameters=[ParameterElement(name=go_param_name(entity.name), type=f"*{entity.name}")],
        returns=[ReturnElement(type="error")],
        body=generate_validation_body(entity),
        metadata={"entity": entity.name, "role": "validation"},
    )


def generate_service_function(entity: EntitySpecification) -> FunctionElement:
    parameters = _required_parameters(entity)
    var = free_name(go_param_name(entity.name), {p.name for p in parameters})
    args = ", ".join(p.name for p in parameters)
    body = "\n\t".join([
        f"{var} := domain.New{entity.name}({args})",
        f"// validation: call domain.Validate{entity.name}({var}) before persisting",
        f"// persistence: save {var} through a domain.{entity.name}Repository",
        f"return {var}, nil",
    ])

    return FunctionElement(
        name=f"Create{entity.name}",
        package=APPLICATION_PACKAGE,
        parameters=parameters,
        returns=[ReturnElement(type=f"*domain.{entity.name}"), ReturnElement(type="error")],
        body=body,
        metadata={"entity": entity.name, "role": "service"},
    )


def create_complete_entity_set(entity_name: str) -> List[CodeElement]:
    """Model, repository, service and handler elements for a single entity."""
    fields = [
        FieldElement(name="ID", type=ID_TYPE, tags='json:"id" gorm:"primaryKey"'),
        FieldElement(name="Name", type="string", tags='json:"name" gorm:"not null"'),
        FieldElement(name="CreatedAt", type=TIMESTAMP_TYPE, tags='json:"created_at"'),
        FieldElement(name="UpdatedAt", type=TIMESTAMP_TYPE, tags='json:"updated_at"'),
    ]
    metadata = {"entity": entity_name}

    return [
        ModelElement(name=entity_name, package=DOMAIN_PACKAGE, fields=fields, metadata=metadata),
        RepositoryElement(
            name=f"{entity_name}Repository", package="repository",
            entity_name=entity_name, metadata=metadata,
        ),
        ServiceElement(
            name=f"{entity_name}Service", package=APPLICATION_PACKAGE,
            entity_name=entity_name, metadata=metadata,
        ),
        HandlerElement(
            name=f"{entity_name}Handler", package="handlers",
            entity_name=entity_name, metadata=metadata,
        ),
    ]


def generate_field_tags(field: FieldSpecification) -> str:
    column = to_snake_case(field.name)
    tags = [f'json:"{column}"', f'db:"{column}"']
    if field.validation:
        tags.append(f'validate:"{",".join(validator_rule(r) for r in field.validation)}"')
    return " ".join(tags)


def validator_rule(rule: str) -> str:
    """Spell a rule tag the way the validator struct tag expects: ``min:3`` -> ``min=3``."""
    name, sep, arg = rule.partition(":")
    if not sep:
        name, sep, arg = rule.partition("=")
    mapped = VALIDATION_RULE_MAPPING.get(name.strip())
    if mapped is None:
        log.debug("Passing unrecognized validation rule %r through", rule)
        return rule
    return f"{mapped}={arg.strip()}" if sep else mapped


def generate_constructor_body(entity: EntitySpecification, parameters: List[ParameterElement]) -> str:
    now = free_name("now", {p.name for p in parameters})
    assignments = []
    if _identifier_type(entity) == ID_TYPE:
        assignments.append(("ID", "uuid.New().String()"))
    for field, param in zip(_required_fields(entity), parameters):
        assignments.append((_go_field_name(field), param.name))
    assignments.append(("CreatedAt", now))
    assignments.append(("UpdatedAt", now))

    lines = [f"{now} := time.Now()", f"return &{entity.name}{{"]
    lines.extend(f"\t{name}: {value}," for name, value in assignments)
    lines.append("}")
    return "\n\t".join(lines)


def generate_validation_body(entity: EntitySpecification) -> str:
    var = go_param_name(entity.name)
    pattern = free_name("emailPattern", {var})
    guards = []
    email_fields = []

    for field in entity.fields:
        go_field = f"{var}.{_go_field_name(field)}"
        if field.required:
            condition = zero_value_condition(go_field, _map_type(field))
            guards.append(
                f'if {condition} {{\n\t\treturn fmt.Errorf("{field.name} is required")\n\t}}'
            )
        if "email" in field.validation:
            email_fields.append(go_field)

    if email_fields:
        guards.insert(0, f"{pattern} := regexp.MustCompile(`{EMAIL_PATTERN}`)")
        for go_field in email_fields:
            guards.append(
                f'if !{pattern}.MatchString({go_field}) {{\n\t\treturn fmt.Errorf("invalid email format")\n\t}}'
            )

    if not guards:
        return "return nil"
    return "\n\t".join(guards) + "\n\treturn nil"


def zero_value_condition(expr: str, go_type: str) -> str:
    """Go boolean expression that is true when ``expr`` holds its type's zero value."""
    if go_type == "string":
        return f'{expr} == ""'
    if go_type in INTEGER_TYPES or go_type in FLOAT_TYPES:
        return f"{expr} == 0"
    if go_type == "bool":
        return f"!{expr}"
    if go_type in IS_ZERO_TYPES:
        return f"{expr}.IsZero()"
    if go_type.startswith(("[]", "map[")) or go_type == "json.RawMessage":
        return f"len({expr}) == 0"
    return f"reflect.ValueOf({expr}).IsZero()"


def go_param_name(name: str) -> str:
    """Unexported Go name for ``name`` that does not shadow a referenced package."""
    var = to_go_var(name)
    if var in PACKAGE_QUALIFIERS:
        return var + "Value"
    return var


def free_name(base: str, taken) -> str:
    """``base``, or ``base`` with the first numeric suffix not in ``taken``."""
    name, n = base, 2
    while name in taken:
        name = f"{base}{n}"
        n += 1
    return name


def _map_type(field: FieldSpecification) -> str:
    go_type = map_field_type(field.type)
    if field.type not in TYPE_MAPPING:
        log.debug("Field %s has unmapped type %r, passing it through", field.name, field.type)
    return go_type


def _go_field_name(field: FieldSpecification) -> str:
    if is_identifier_field(field.name):
        return "ID"
    return to_go_name(field.name)


def _required_fields(entity: EntitySpecification) -> List[FieldSpecification]:
    return [
        f for f in entity.fields
        if f.required and not is_identifier_field(f.name) and to_snake_case(f.name) not in TIMESTAMP_FIELDS
    ]


def _required_parameters(entity: EntitySpecification) -> List[ParameterElement]:
    parameters: List[ParameterElement] = []
    for field in _required_fields(entity):
        name = free_name(go_param_name(field.name), {p.name for p in parameters})
        parameters.append(ParameterElement(name=name, type=_map_type(field)))
    return parameters


def _identifier_type(entity: EntitySpecification) -> str:
    for field in entity.fields:
        if is_identifier_field(field.name):
            return _map_type(field)
    return ID_TYPE
