"""End-to-end tests for the generation pipeline."""
import shutil
import subprocess
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch
import pytest
from gofactory.core.config import Settings
from gofactory.core.errors import TemplateResolutionError, ValidationError, WriteError
from gofactory.core.pipeline import GenerationPipeline, build_generation_request
from gofactory.generators.go_gen.resolver import InlineTemplateResolver
from gofactory.schemas.generation import EntitySetRequest, GenerationRequest
from gofactory.schemas.specification import ProjectSpecification


def make_spec(output_path="users"):
    return ProjectSpecification.model_validate({
        "name": "users",
        "module_path": "github.com/acme/users",
        "output_path": output_path,
        "entities": [{
            "name": "User",
            "fields": [
                {"name": "id", "type": "uuid", "required": True},
                {"name": "email", "type": "email", "required": True, "validation": ["email"]},
            ],
            "features": ["crud", "validation"],
        }],
        "options": {"owner": "platform"},
    })


def offline_settings(output_root, **overrides):
    return Settings(
        output_root=output_root, template_service_url=None,
        format_code=False, validate_code=False, compile_code=False, **overrides,
    )


def test_run_writes_project_under_output_root():
    with tempfile.TemporaryDirectory() as temp_dir:
        result = GenerationPipeline(offline_settings(temp_dir)).run(make_spec())

        assert result.success is True
        assert result.error_message is None
        assert len(result.accumulator.files) == 4
        root = Path(temp_dir) / "users"
        assert result.build_report.output_root == str(root)
        for f in result.accumulator.files:
            assert (root / f.path).read_text(encoding="utf-8") == f.content
        assert (root / "go.mod").exists()


def test_run_rejects_invalid_spec():
    spec = ProjectSpecification.model_validate({"name": "x", "module_path": "m", "output_path": "o"})
    with tempfile.TemporaryDirectory() as temp_dir:
        with pytest.raises(ValidationError, match="at least one entity"):
            GenerationPipeline(offline_settings(temp_dir)).run(spec)
        assert list(Path(temp_dir).iterdir()) == []


def test_resolver_failure_yields_failed_result_with_no_files():
    resolver = MagicMock()
    resolver.process_template.side_effect = [
        "package domain\n",
        TemplateResolutionError("function_template", "boom"),
        "package domain\n",
    ]
    verifier = MagicMock()

    result = GenerationPipeline(Settings(), resolver=resolver, verifier=verifier).run(make_spec())

    assert result.success is False
    assert result.accumulator is None
    assert result.build_report is None
    assert result.error_message == "failed to process function_template: boom"
    verifier.materialize.assert_not_called()


def test_write_failure_yields_failed_result():
    verifier = MagicMock()
    verifier.materialize.side_effect = WriteError("disk full")

    result = GenerationPipeline(Settings(), resolver=InlineTemplateResolver(), verifier=verifier).run(make_spec())

    assert result.success is False
    assert result.error_message == "disk full"
    assert result.accumulator is None


def test_compile_failure_keeps_success():
    with tempfile.TemporaryDirectory() as temp_dir:
        settings = offline_settings(temp_dir).model_copy(update={"compile_code": True})
        failed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="undefined: domain.Missing\n")
        tidied = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with patch("gofactory.generators.go_gen.verifier.subprocess.run", side_effect=[tidied, failed]):
            result = GenerationPipeline(settings).run(make_spec())

        assert result.success is True
        assert result.warnings
        assert "undefined: domain.Missing" in result.warnings[0]
        assert result.build_report.compiled is False


@pytest.mark.skipif(shutil.which("go") is None or shutil.which("gofmt") is None, reason="Go toolchain not installed")
def test_generated_project_builds_with_go_toolchain():
    spec = ProjectSpecification.model_validate({
        "name": "users",
        "module_path": "example.com/users",
        "output_path": "users",
        "entities": [{
            "name": "User",
            "fields": [
                {"name": "id", "type": "uuid", "required": True},
                {"name": "email", "type": "email", "required": True},
            ],
            "features": ["database", "api", "validation", "crud", "rest_api"],
        }],
    })
    with tempfile.TemporaryDirectory() as temp_dir:
        settings = Settings(output_root=temp_dir, template_service_url=None, toolchain_timeout=600.0)

        result = GenerationPipeline(settings).run(spec)

        report = result.build_report
        if any(w.startswith("dependency resolution failed") for w in report.warnings):
            pytest.skip("Go module downloads unavailable: " + report.warnings[0])
        assert result.success is True
        assert report.formatted is True
        assert report.valid is True
        assert report.compiled is True, report.compile_output
        assert report.warnings == []
        go_mod = (Path(temp_dir) / "users/go.mod").read_text(encoding="utf-8")
        assert "github.com/google/uuid" in go_mod


def test_generate_from_raw_request():
    with tempfile.TemporaryDirectory() as temp_dir:
        request = GenerationRequest(
            id="req-1",
            module_path="github.com/acme/geo",
            output_path="geo",
            elements=[
                {"type": "struct", "name": "Point", "package": "geo", "fields": [{"name": "X", "type": "float64"}]},
                {"type": "widget", "name": "Ignored"},
            ],
        )

        result = GenerationPipeline(offline_settings(temp_dir)).generate(request)

        assert result.success is True
        assert result.request_id == "req-1"
        assert [f.path for f in result.accumulator.files] == ["internal/geo/point.go"]


def test_generate_entity_set():
    with tempfile.TemporaryDirectory() as temp_dir:
        request = EntitySetRequest(entity_name="Invoice", module_path="github.com/acme/billing", output_path="billing")

        result = GenerationPipeline(offline_settings(temp_dir)).generate_entity_set(request)

        assert result.success is True
        assert len(result.accumulator.files) == 4
        assert (Path(temp_dir) / "billing/internal/interfaces/http/handlers/invoice_handler.go").exists()


def test_build_generation_request():
    settings = Settings(default_package_name="main", template_service_url="http://templates.local")

    request = build_generation_request(make_spec(), settings)

    assert request.module_path == "github.com/acme/users"
    assert request.output_path == "users"
    assert request.package_name == "main"
    assert request.template_service_url == "http://templates.local"
    assert request.parameters == {"owner": "platform"}
    assert [(r["type"], r["name"]) for r in request.elements] == [
        ("struct", "User"),
        ("function", "NewUser"),
        ("interface", "UserRepository"),
        ("function", "ValidateUser"),
    ]
