"""Exceptions raised by the generation pipeline.

Only fatal failures are exceptions. Advisory failures from the format,
validate and compile steps are collected in the BuildReport instead.
"""


class GenerationError(Exception):
    """Base class for fatal pipeline failures."""


class ValidationError(GenerationError):
    """The project specification is malformed; nothing was generated."""


class TemplateResolutionError(GenerationError):
    """A template could not be resolved; the whole generation step is discarded."""

    def __init__(self, template_id: str, message: str):
        super().__init__(f"failed to process {template_id}: {message}")
        self.template_id = template_id


class WriteError(GenerationError):
    """Generated files could not be written under the output root."""
