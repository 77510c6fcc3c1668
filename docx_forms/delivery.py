"""Hand generated packages to the user as files on disk."""
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import List, Optional

from docx_forms.errors import DeliveryError
from docx_forms.model.document_model import GeneratedDocument
from docx_forms.utils.logger import get_logger

LOGGER = get_logger(__name__)


class FileDelivery:
    """Write a document into a directory, falling back to the system temp directory."""

    def __init__(self, directory: Path, fallback: Optional[Path] = None) -> None:
        self._directory = directory
        self._fallback = fallback if fallback is not None else Path(tempfile.gettempdir())

    def deliver(self, document: GeneratedDocument) -> Path:
        """Write the bytes under the suggested filename and return the path written.

        An existing file is never replaced: a `` (n)`` counter is appended to
        the stem instead. The document is not retained after the call, so its
        buffer can be collected as soon as the caller drops its own reference.
        """
        failures: List[str] = []
        for directory in (self._directory, self._fallback):
            target = directory / document.suggested_filename
            started = False
            try:
                directory.mkdir(parents=True, exist_ok=True)
                target = _unused_path(directory, document.suggested_filename)
                started = True
                target.write_bytes(document.content)
            except OSError as exc:
                LOGGER.warning("Could not write %s: %s", target, exc)
                failures.append(f"{target}: {exc}")
                if started:
                    _remove_partial(target)
                continue
            LOGGER.info("Delivered %s (%d bytes, %s)", target, document.size, document.mime_type)
            return target
        raise DeliveryError("; ".join(failures))


def _unused_path(directory: Path, filename: str) -> Path:
    candidate = directory / filename
    counter = 1
    while candidate.exists():
        candidate = directory / f"{Path(filename).stem} ({counter}){Path(filename).suffix}"
        counter += 1
    return candidate


def _remove_partial(target: Path) -> None:
    try:
        target.unlink(missing_ok=True)
    except OSError as exc:
        LOGGER.warning("Could not remove partial file %s: %s", target, exc)
