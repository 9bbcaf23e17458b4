"""
Module: errors

Purpose:
    Exception hierarchy shared by the editor, the composer and the
    storage boundary.

Used By:
    - core.models.templates: MissingPageError
    - core.schemas.validator: TemplateValidationError
    - storage.repository: RepositoryError
    - composer.controller: GenerationError, BatchGenerationError
"""

from __future__ import annotations

from typing import Optional


class FormstampError(Exception):
    """Base class for all formstamp errors."""
    pass


class MissingPageError(FormstampError):
    """A field was added before any page background exists."""
    pass


class TemplateValidationError(FormstampError):
    """Raised when template data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


class RepositoryError(FormstampError):
    """Template persistence failed."""
    pass


class GenerationError(FormstampError):
    """A document could not be produced."""
    pass


class BatchGenerationError(GenerationError):
    """
    Bulk generation aborted.

    Attributes:
        template_name: Name of the template whose render failed
        delivered: Number of documents delivered before the failure
    """

    def __init__(self, message: str, *, template_name: str, delivered: int,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.template_name = template_name
        self.delivered = delivered
        self.cause = cause
