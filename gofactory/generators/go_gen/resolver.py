"""Template resolvers: template id + parameters -> rendered text."""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

import httpx

from gofactory.core.config import Settings
from gofactory.core.errors import TemplateResolutionError
from gofactory.generators.go_gen.templates import (
    BUILTIN_TEMPLATES,
    missing_parameters,
    render_template,
)

log = logging.getLogger(__name__)


class TemplateResolver:
    def process_template(self, template_id: str, parameters: Dict[str, str]) -> str:
        raise NotImplementedError


@dataclass
class InlineTemplateResolver(TemplateResolver):
    """Renders templates held in memory, the built-in Go templates by default."""
    templates: Dict[str, str] = field(default_factory=lambda: dict(BUILTIN_TEMPLATES))

    def process_template(self, template_id: str, parameters: Dict[str, str]) -> str:
        template = self.templates.get(template_id)
        if template is None:
            raise TemplateResolutionError(template_id, "template not found")
        missing = missing_parameters(template, parameters)
        if missing:
            raise TemplateResolutionError(
                template_id, f"required parameter {missing[0]} is missing"
            )
        return render_template(template, parameters)


@dataclass
class HTTPTemplateResolver(TemplateResolver):
    """Resolves templates through the template service's process endpoint."""
    base_url: str
    timeout: float = 30.0
    client: Optional[httpx.Client] = None

    def process_template(self, template_id: str, parameters: Dict[str, str]) -> str:
        url = f"{self.base_url.rstrip('/')}/api/v1/templates/process"
        payload = {"template_id": template_id, "parameters": parameters}
        try:
            if self.client is not None:
                r = self.client.post(url, json=payload)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    r = client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise TemplateResolutionError(template_id, f"failed to send request: {e}") from e

        if r.status_code != 200:
            raise TemplateResolutionError(template_id, f"template processing failed: status {r.status_code}")

        try:
            body = r.json()
        except ValueError as e:
            raise TemplateResolutionError(template_id, f"failed to decode response: {e}") from e

        if not body.get("success"):
            raise TemplateResolutionError(
                template_id, f"template processing failed: {body.get('error_message', 'unknown error')}"
            )
        return body.get("generated_code", "")


@dataclass
class LayeredTemplateResolver(TemplateResolver):
    """Sends the listed template ids to ``remote`` and everything else to ``local``."""
    local: TemplateResolver
    remote: TemplateResolver
    remote_ids: frozenset = frozenset()

    def process_template(self, template_id: str, parameters: Dict[str, str]) -> str:
        if template_id in self.remote_ids:
            log.debug("Resolving %s remotely", template_id)
            return self.remote.process_template(template_id, parameters)
        return self.local.process_template(template_id, parameters)


def build_resolver(
    settings: Settings,
    template_service_url: Optional[str] = None,
    remote_ids: Optional[Iterable[str]] = None,
) -> TemplateResolver:
    """Build the resolver a request should use.

    Without a template service URL every template is rendered locally.
    """
    url = template_service_url or settings.template_service_url
    local = InlineTemplateResolver()
    if not url:
        return local
    ids = settings.remote_template_ids if remote_ids is None else remote_ids
    return LayeredTemplateResolver(
        local=local,
        remote=HTTPTemplateResolver(base_url=url, timeout=settings.template_timeout),
        remote_ids=frozenset(ids),
    )
