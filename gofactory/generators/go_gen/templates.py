"""Built-in Go templates and the ``{{.Key}}`` substitution used to render them.

Substitution is plain text replacement: no conditionals, no loops. Anything
dynamic (field lists, import blocks) is pre-rendered into a parameter value
by the generation engine.
"""
import re
from typing import Dict


PLACEHOLDER = re.compile(r"\{\{\.(\w+)\}\}")


STRUCT_TEMPLATE = """package {{.PackageName}}
{{.Imports}}
// {{.StructName}} represents a {{.StructName}}
type {{.StructName}} struct {
{{.Fields}}}
"""


MODEL_TEMPLATE = """package {{.PackageName}}
{{.Imports}}
// {{.ModelName}} represents the {{.ModelName}} entity
type {{.ModelName}} struct {
{{.Fields}}}

// TableName returns the table name for GORM
func ({{.ModelName}}) TableName() string {
	return "{{.ModelNameLower}}"
}
"""


INTERFACE_TEMPLATE = """package {{.PackageName}}
{{.Imports}}
// {{.InterfaceName}} defines the interface for {{.InterfaceName}}
type {{.InterfaceName}} interface {
{{.Methods}}}
"""


FUNCTION_TEMPLATE = """package {{.PackageName}}
{{.Imports}}
// {{.FunctionName}} {{.Description}}
func {{.FunctionName}}({{.Parameters}}) {{.Returns}} {
	{{.Body}}
}
"""


REPOSITORY_TEMPLATE = """package {{.PackageName}}

import (
	"context"

	"{{.ModulePath}}/internal/domain"
)

type {{.EntityName}}Repository interface {
	Create(ctx context.Context, {{.EntityVarName}} *domain.{{.EntityName}}) error
	GetByID(ctx context.Context, id string) (*domain.{{.EntityName}}, error)
	Update(ctx context.Context, {{.EntityVarName}} *domain.{{.EntityName}}) error
	Delete(ctx context.Context, id string) error
	List(ctx context.Context) ([]*domain.{{.EntityName}}, error)
}

type {{.EntityVarName}}Repository struct {
	// Add your storage implementation here
}

func New{{.EntityName}}Repository() {{.EntityName}}Repository {
	return &{{.EntityVarName}}Repository{}
}

func (r *{{.EntityVarName}}Repository) Create(ctx context.Context, {{.EntityVarName}} *domain.{{.EntityName}}) error {
	return nil
}

func (r *{{.EntityVarName}}Repository) GetByID(ctx context.Context, id string) (*domain.{{.EntityName}}, error) {
	return nil, nil
}

func (r *{{.EntityVarName}}Repository) Update(ctx context.Context, {{.EntityVarName}} *domain.{{.EntityName}}) error {
	return nil
}

func (r *{{.EntityVarName}}Repository) Delete(ctx context.Context, id string) error {
	return nil
}

func (r *{{.EntityVarName}}Repository) List(ctx context.Context) ([]*domain.{{.EntityName}}, error) {
	return nil, nil
}
"""


SERVICE_TEMPLATE = """package {{.PackageName}}

import (
	"context"
	"fmt"

	"{{.ModulePath}}/internal/domain"
)

type {{.EntityName}}Service struct {
	repository domain.{{.EntityName}}Repository
}

func New{{.EntityName}}Service(repository domain.{{.EntityName}}Repository) *{{.EntityName}}Service {
	return &{{.EntityName}}Service{
		repository: repository,
	}
}

func (s *{{.EntityName}}Service) Create{{.EntityName}}(ctx context.Context, {{.EntityVarName}} *domain.{{.EntityName}}) error {
	if err := s.validate{{.EntityName}}({{.EntityVarName}}); err != nil {
		return fmt.Errorf("validation failed: %w", err)
	}

	return s.repository.Create(ctx, {{.EntityVarName}})
}

func (s *{{.EntityName}}Service) Get{{.EntityName}}(ctx context.Context, id string) (*domain.{{.EntityName}}, error) {
	if id == "" {
		return nil, fmt.Errorf("id cannot be empty")
	}

	return s.repository.GetByID(ctx, id)
}

func (s *{{.EntityName}}Service) Update{{.EntityName}}(ctx context.Context, {{.EntityVarName}} *domain.{{.EntityName}}) error {
	if err := s.validate{{.EntityName}}({{.EntityVarName}}); err != nil {
		return fmt.Errorf("validation failed: %w", err)
	}

	return s.repository.Update(ctx, {{.EntityVarName}})
}

func (s *{{.EntityName}}Service) Delete{{.EntityName}}(ctx context.Context, id string) error {
	if id == "" {
		return fmt.Errorf("id cannot be empty")
	}

	return s.repository.Delete(ctx, id)
}

func (s *{{.EntityName}}Service) List{{.EntityName}}s(ctx context.Context) ([]*domain.{{.EntityName}}, error) {
	return s.repository.List(ctx)
}

func (s *{{.EntityName}}Service) validate{{.EntityName}}({{.EntityVarName}} *domain.{{.EntityName}}) error {
	if {{.EntityVarName}} == nil {
		return fmt.Errorf("{{.EntityVarName}} cannot be nil")
	}
	return nil
}
"""


HANDLER_TEMPLATE = """package {{.PackageName}}

import (
	"net/http"

	"{{.ModulePath}}/internal/application"
	"{{.ModulePath}}/internal/domain"

	"github.com/gin-gonic/gin"
)

type {{.EntityName}}Handler struct {
	service *application.{{.EntityName}}Service
}

func New{{.EntityName}}Handler(service *application.{{.EntityName}}Service) *{{.EntityName}}Handler {
	return &{{.EntityName}}Handler{
		service: service,
	}
}

func (h *{{.EntityName}}Handler) Create{{.EntityName}}(c *gin.Context) {
	var {{.EntityVarName}} domain.{{.EntityName}}
	if err := c.ShouldBindJSON(&{{.EntityVarName}}); err != nil {
		c.JSON(http.StatusBadRequest, gin.H{"error": err.Error()})
		return
	}

	if err := h.service.Create{{.EntityName}}(c.Request.Context(), &{{.EntityVarName}}); err != nil {
		c.JSON(http.StatusInternalServerError, gin.H{"error": err.Error()})
		return
	}

	c.JSON(http.StatusCreated, {{.EntityVarName}})
}

func (h *{{.EntityName}}Handler) Get{{.EntityName}}(c *gin.Context) {
	{{.EntityVarName}}, err := h.service.Get{{.EntityName}}(c.Request.Context(), c.Param("id"))
	if err != nil {
		c.JSON(http.StatusNotFound, gin.H{"error": err.Error()})
		return
	}

	c.JSON(http.StatusOK, {{.EntityVarName}})
}

func (h *{{.EntityName}}Handler) Update{{.EntityName}}(c *gin.Context) {
	var {{.EntityVarName}} domain.{{.EntityName}}
	if err := c.ShouldBindJSON(&{{.EntityVarName}}); err != nil {
		c.JSON(http.StatusBadRequest, gin.H{"error": err.Error()})
		return
	}

	{{.EntityVarName}}.ID = c.Param("id")

	if err := h.service.Update{{.EntityName}}(c.Request.Context(), &{{.EntityVarName}}); err != nil {
		c.JSON(http.StatusInternalServerError, gin.H{"error": err.Error()})
		return
	}

	c.JSON(http.StatusOK, {{.EntityVarName}})
}

func (h *{{.EntityName}}Handler) Delete{{.EntityName}}(c *gin.Context) {
	if err := h.service.Delete{{.EntityName}}(c.Request.Context(), c.Param("id")); err != nil {
		c.JSON(http.StatusInternalServerError, gin.H{"error": err.Error()})
		return
	}

	c.Status(http.StatusNoContent)
}

func (h *{{.EntityName}}Handler) List{{.EntityName}}s(c *gin.Context) {
	items, err := h.service.List{{.EntityName}}s(c.Request.Context())
	if err != nil {
		c.JSON(http.StatusInternalServerError, gin.H{"error": err.Error()})
		return
	}

	c.JSON(http.StatusOK, items)
}

func (h *{{.EntityName}}Handler) RegisterRoutes(router *gin.Engine) {
	api := router.Group("/api/v1")
	{
		api.POST("/{{.EntityNameLower}}", h.Create{{.EntityName}})
		api.GET("/{{.EntityNameLower}}/:id", h.Get{{.EntityName}})
		api.PUT("/{{.EntityNameLower}}/:id", h.Update{{.EntityName}})
		api.DELETE("/{{.EntityNameLower}}/:id", h.Delete{{.EntityName}})
		api.GET("/{{.EntityNameLower}}", h.List{{.EntityName}}s)
	}
}
"""


BUILTIN_TEMPLATES: Dict[str, str] = {
    "struct_template": STRUCT_TEMPLATE,
    "model_template": MODEL_TEMPLATE,
    "interface_template": INTERFACE_TEMPLATE,
    "function_template": FUNCTION_TEMPLATE,
    "repository_template": REPOSITORY_TEMPLATE,
    "service_template": SERVICE_TEMPLATE,
    "handler_template": HANDLER_TEMPLATE,
}


def render_template(template: str, parameters: Dict[str, str]) -> str:
    """Replace every ``{{.Key}}`` with ``parameters[Key]``.

    Placeholders without a matching parameter are left untouched.
    """
    def _substitute(match: re.Match) -> str:
        key = match.group(1)
        return parameters.get(key, match.group(0))

    return PLACEHOLDER.sub(_substitute, template)


def missing_parameters(template: str, parameters: Dict[str, str]) -> list:
    """Placeholder names in ``template`` that ``parameters`` does not provide."""
    return sorted({key for key in PLACEHOLDER.findall(template) if key not in parameters})
