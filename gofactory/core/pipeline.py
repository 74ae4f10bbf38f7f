from __future__ import annotations
import logging
import uuid
from pathlib import Path
from typing import List, Optional

from gofactory.core.config import Settings
from gofactory.core.errors import TemplateResolutionError, WriteError
from gofactory.core.workflow import PipelineStage
from gofactory.generators.go_gen.codec import element_to_record, parse_elements
from gofactory.generators.go_gen.engine import generate
from gofactory.generators.go_gen.normalizer import create_complete_entity_set, normalize
from gofactory.generators.go_gen.resolver import TemplateResolver, build_resolver
from gofactory.generators.go_gen.types import CodeElement
from gofactory.generators.go_gen.verifier import BuildVerifier
from gofactory.schemas.generation import EntitySetRequest, GenerationRequest, GenerationResult
from gofactory.schemas.specification import ProjectSpecification

log = logging.getLogger(__name__)


def build_generation_request(spec: ProjectSpecification, settings: Settings) -> GenerationRequest:
    """Normalize ``spec`` into a wire request; raises ValidationError."""
    elements = normalize(spec)
    return GenerationRequest(
        id=str(uuid.uuid4()),
        elements=[element_to_record(e) for e in elements],
        module_path=spec.module_path,
        output_path=spec.output_path,
        package_name=settings.default_package_name,
        template_service_url=settings.template_service_url,
        parameters=dict(spec.options),
    )


class GenerationPipeline:
    """Runs normalize -> generate -> materialize for one request at a time."""

    def __init__(
        self,
        settings: Settings,
        resolver: Optional[TemplateResolver] = None,
        verifier: Optional[BuildVerifier] = None,
    ):
        self.settings = settings
        self.resolver = resolver
        self.verifier = verifier or BuildVerifier(settings)

    def run(self, spec: ProjectSpecification) -> GenerationResult:
        """
        Generate and materialize a whole project.

        Raises:
            ValidationError: if the specification is malformed
        """
        request_id = str(uuid.uuid4())
        log.info("Normalizing project %s", spec.name,
                 extra={"request_id": request_id, "stage": PipelineStage.NORMALIZE.value})
        elements = normalize(spec)
        return self._execute(request_id, elements, spec.module_path, spec.output_path)

    def generate(self, request: GenerationRequest) -> GenerationResult:
        elements = parse_elements(request.elements)
        return self._execute(
            request.id, elements, request.module_path, request.output_path,
            template_service_url=request.template_service_url,
        )

    def generate_entity_set(self, request: EntitySetRequest) -> GenerationResult:
        elements = create_complete_entity_set(request.entity_name)
        return self._execute(
            str(uuid.uuid4()), elements, request.module_path, request.output_path,
            template_service_url=request.template_service_url,
        )

    def _resolver_for(self, template_service_url: Optional[str]) -> TemplateResolver:
        if self.resolver is not None:
            return self.resolver
        return build_resolver(self.settings, template_service_url=template_service_url)

    def _output_root(self, output_path: str) -> Path:
        # Relative output paths are placed under the configured output root.
        return Path(self.settings.output_root) / output_path

    def _execute(
        self,
        request_id: str,
        elements: List[CodeElement],
        module_path: str,
        output_path: str,
        template_service_url: Optional[str] = None,
    ) -> GenerationResult:
        resolver = self._resolver_for(template_service_url)
        extra = {"request_id": request_id, "stage": PipelineStage.GENERATE.value}

        try:
            accumulator = generate(elements, resolver, module_path, request_id=request_id)
        except TemplateResolutionError as e:
            log.error("Generation failed: %s", e,
                      extra={"request_id": request_id, "stage": PipelineStage.FAILED.value})
            return GenerationResult(id=str(uuid.uuid4()), request_id=request_id, success=False, error_message=str(e))

        log.info("Generated %d files (%d bytes)", len(accumulator.files), accumulator.total_size(), extra=extra)

        try:
            report = self.verifier.materialize(
                accumulator, str(self._output_root(output_path)),
                module_path=module_path or None, request_id=request_id,
            )
        except WriteError as e:
            log.error("Write failed: %s", e,
                      extra={"request_id": request_id, "stage": PipelineStage.FAILED.value})
            return GenerationResult(id=str(uuid.uuid4()), request_id=request_id, success=False, error_message=str(e))

        for warning in report.warnings:
            log.warning(warning, extra={"request_id": request_id, "stage": PipelineStage.DONE.value})
        log.info("Generation completed", extra={"request_id": request_id, "stage": PipelineStage.DONE.value})

        return GenerationResult(
            id=str(uuid.uuid4()),
            request_id=request_id,
            accumulator=accumulator,
            success=True,
            warnings=list(report.warnings),
            build_report=report,
        )
