"""Failures reported by the generation pipeline."""
from __future__ import annotations

from typing import Sequence


class DocumentGenerationError(Exception):
    """Base class for every failure the pipeline hands back to its caller."""


class ValidationError(DocumentGenerationError):
    """Required fields are missing or the payload is malformed."""

    def __init__(self, missing_fields: Sequence[str], message: str | None = None) -> None:
        self.missing_fields = list(missing_fields)
        if message is None:
            message = f"Missing required fields: {', '.join(self.missing_fields)}"
        super().__init__(message)


class BuildError(DocumentGenerationError):
    """A template or document tree invariant was violated."""


class SerializationError(DocumentGenerationError):
    """The document tree could not be written as a WordprocessingML package."""


class TemplateNotFoundError(LookupError, DocumentGenerationError):
    """No template is registered under the requested id."""

    def __init__(self, template_id: object) -> None:
        self.template_id = template_id
        super().__init__(f"Unknown document template: {template_id!r}")


class DeliveryError(DocumentGenerationError):
    """Generated bytes could not be handed to the user."""
