"""Generated package and the typed result of a generation call."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from docx_forms.errors import DocumentGenerationError

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@dataclass(frozen=True, slots=True)
class GeneratedDocument:
    """Serialized package ready for delivery. Never inspected by the engine again."""

    content: bytes
    mime_type: str
    suggested_filename: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Either a generated document or the failure that prevented it."""

    document: Optional[GeneratedDocument] = None
    error: Optional[DocumentGenerationError] = None

    def __post_init__(self) -> None:
        if (self.document is None) == (self.error is None):
            raise ValueError("GenerationResult needs exactly one of document or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> GeneratedDocument:
        """Return the document or raise the recorded failure."""
        if self.error is not None:
            raise self.error
        return self.document  # type: ignore[return-value]
