"""Tests for rendering code elements into generated files."""
from unittest.mock import MagicMock
import pytest
from gofactory.core.errors import TemplateResolutionError
from gofactory.generators.go_gen.engine import (
    VISIT_METHODS,
    CodeGenerationVisitor,
    generate,
    output_path,
)
from gofactory.generators.go_gen.normalizer import create_complete_entity_set, normalize
from gofactory.generators.go_gen.resolver import InlineTemplateResolver
from gofactory.generators.go_gen.types import (
    ELEMENT_CLASSES,
    ElementKind,
    FieldElement,
    StructElement,
)
from gofactory.schemas.specification import ProjectSpecification

MODULE = "github.com/acme/users"


def user_spec():
    return ProjectSpecification.model_validate({
        "name": "users",
        "module_path": MODULE,
        "output_path": "users",
        "entities": [{
            "name": "User",
            "fields": [
                {"name": "name", "type": "string", "required": True},
                {"name": "email", "type": "email", "required": True, "validation": ["email"]},
            ],
            "features": ["crud", "validation", "rest_api"],
        }],
    })


def test_struct_file_content():
    element = StructElement(
        name="User",
        package="domain",
        fields=[
            FieldElement(name="ID", type="string", tags='json:"id" db:"id"'),
            FieldElement(name="CreatedAt", type="time.Time", tags='json:"created_at" db:"created_at"'),
        ],
    )

    acc = generate([element], InlineTemplateResolver(), MODULE)

    assert len(acc.files) == 1
    f = acc.files[0]
    assert f.path == "internal/domain/user.go"
    assert f.type == "struct"
    assert f.package == "domain"
    assert f.size == len(f.content.encode("utf-8"))
    assert f.content == (
        "package domain\n"
        "\n"
        "import (\n"
        '\t"time"\n'
        ")\n"
        "\n"
        "// User represents a User\n"
        "type User struct {\n"
        '\tID string `json:"id" db:"id"`\n'
        '\tCreatedAt time.Time `json:"created_at" db:"created_at"`\n'
        "}\n"
    )


def test_struct_without_qualified_types_has_no_import_block():
    element = StructElement(name="Point", package="geo", fields=[FieldElement(name="X", type="float64")])

    acc = generate([element], InlineTemplateResolver(), MODULE)

    assert acc.files[0].path == "internal/geo/point.go"
    assert "import" not in acc.files[0].content
    assert "\tX float64\n" in acc.files[0].content


def test_full_entity_generation():
    acc = generate(normalize(user_spec()), InlineTemplateResolver(), MODULE)

    assert [f.path for f in acc.files] == [
        "internal/domain/user.go",
        "internal/domain/newuser.go",
        "internal/domain/userrepository.go",
        "internal/domain/validateuser.go",
        "internal/application/createuser.go",
    ]

    constructor = acc.files[1].content
    assert 'import (\n\t"time"\n\n\t"github.com/google/uuid"\n)' in constructor
    assert "func NewUser(name string, email string) *User {" in constructor

    repo = acc.files[2].content
    assert 'import (\n\t"context"\n)' in repo
    assert "type UserRepository interface {" in repo
    assert "\tGetByID(ctx context.Context, id string) (*User, error)\n" in repo
    assert "\tList(ctx context.Context) ([]*User, error)\n" in repo

    validate = acc.files[3].content
    assert '\t"fmt"\n\t"regexp"\n' in validate
    assert "func ValidateUser(user *User) error {" in validate

    service = acc.files[4].content
    assert service.startswith("package application\n")
    assert f'"{MODULE}/internal/domain"' in service
    assert "func CreateUser(name string, email string) (*domain.User, error) {" in service

    assert all("TODO" not in f.content for f in acc.files)
    assert all("{{." not in f.content for f in acc.files)
    assert acc.files_by_type(ElementKind.FUNCTION) == [acc.files[1], acc.files[3], acc.files[4]]
    assert acc.total_size() == sum(f.size for f in acc.files)


def test_generation_is_deterministic():
    first = generate(normalize(user_spec()), InlineTemplateResolver(), MODULE)
    second = generate(normalize(user_spec()), InlineTemplateResolver(), MODULE)

    assert [(f.path, f.content) for f in first.files] == [(f.path, f.content) for f in second.files]


def test_entity_set_paths_and_content():
    acc = generate(create_complete_entity_set("Invoice"), InlineTemplateResolver(), MODULE)

    assert [f.path for f in acc.files] == [
        "internal/domain/invoice.go",
        "internal/infrastructure/repository/invoice_repository.go",
        "internal/application/invoice_service.go",
        "internal/interfaces/http/handlers/invoice_handler.go",
    ]
    model, repo, service, handler = (f.content for f in acc.files)
    assert 'return "invoice"' in model
    assert 'gorm:"primaryKey"' in model
    assert f'"{MODULE}/internal/domain"' in repo
    assert "func NewInvoiceRepository() InvoiceRepository {" in repo
    assert "func (s *InvoiceService) ListInvoices(" in service
    assert 'api.GET("/invoice/:id", h.GetInvoice)' in handler


def test_resolver_failure_aborts_generation():
    resolver = MagicMock()
    resolver.process_template.side_effect = [
        "package domain\n",
        TemplateResolutionError("function_template", "template service unavailable"),
        "package domain\n",
    ]

    with pytest.raises(TemplateResolutionError, match="function_template"):
        generate(normalize(user_spec())[:3], resolver, MODULE)

    assert resolver.process_template.call_count == 2


def test_resolver_receives_fixed_template_ids():
    resolver = MagicMock()
    resolver.process_template.return_value = "package x\n"

    generate(normalize(user_spec()) + create_complete_entity_set("Invoice"), resolver, MODULE)

    ids = [c.args[0] for c in resolver.process_template.call_args_list]
    assert ids == [
        "struct_template", "function_template", "interface_template", "function_template", "function_template",
        "model_template", "repository_template", "service_template", "handler_template",
    ]


def test_every_element_class_has_a_visit_method():
    assert set(VISIT_METHODS) == set(ELEMENT_CLASSES.values())
    for cls, method in VISIT_METHODS.items():
        assert callable(getattr(CodeGenerationVisitor, method))
        element = cls(name="Thing", package="domain")
        visitor = MagicMock()
        element.accept(visitor)
        getattr(visitor, method).assert_called_once_with(element)


def test_unsupported_element_is_rejected():
    visitor = CodeGenerationVisitor(InlineTemplateResolver(), MODULE)

    with pytest.raises(TypeError, match="unsupported code element"):
        visitor.visit(object())


def test_output_paths():
    assert output_path(ElementKind.STRUCT, "domain", "OrderItem") == "internal/domain/orderitem.go"
    assert output_path(ElementKind.FUNCTION, "application", "CreateOrder") == "internal/application/createorder.go"
    assert output_path(ElementKind.REPOSITORY, "anything", "OrderRepository", "Order") == \
        "internal/infrastructure/repository/order_repository.go"
    assert output_path(ElementKind.SERVICE, "application", "OrderService", "Order") == \
        "internal/application/order_service.go"
    assert output_path(ElementKind.HANDLER, "handlers", "OrderHandler", "Order") == \
        "internal/interfaces/http/handlers/order_handler.go"
