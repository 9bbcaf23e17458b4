"""
Module: storage.repository

Purpose:
    Template persistence boundary: save, delete and list templates for
    an owner. Transport and storage format belong to the implementation;
    the editor and composer only see this interface.

Key Classes:
    - TemplateRepository: Abstract boundary
    - InMemoryTemplateRepository: Dict-backed, for tests and embedding
    - JsonTemplateRepository: One <id>.json file per template

Dependencies:
    - core.utils.serialization: Template JSON

Used By:
    - editor.session: save()
    - cli: render-all
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from formstamp.core.models.templates import Template
from formstamp.core.utils.serialization import deserialize_template, serialize_template
from formstamp.errors import RepositoryError, TemplateValidationError

logger = logging.getLogger(__name__)


class TemplateRepository(ABC):
    """Save/delete/list boundary for templates."""

    @abstractmethod
    def save(self, template: Template) -> None:
        """
        Store a template, replacing any template with the same id.

        Raises:
            RepositoryError: If the template cannot be stored
        """

    @abstractmethod
    def delete(self, template_id: str) -> None:
        """
        Remove a template.

        Raises:
            RepositoryError: If the template does not exist or cannot be removed
        """

    @abstractmethod
    def list(self, owner_id: Optional[str] = None) -> list[Template]:
        """Templates for an owner (all templates when owner_id is None), oldest first."""


class InMemoryTemplateRepository(TemplateRepository):
    """Dict-backed repository."""

    def __init__(self) -> None:
        self._templates: dict[str, Template] = {}

    def save(self, template: Template) -> None:
        self._templates[template.id] = template

    def delete(self, template_id: str) -> None:
        if self._templates.pop(template_id, None) is None:
            raise RepositoryError(f"Template not found: {template_id}")

    def list(self, owner_id: Optional[str] = None) -> list[Template]:
        templates = [
            t for t in self._templates.values()
            if owner_id is None or t.owner_id == owner_id
        ]
        return sorted(templates, key=lambda t: t.created_at)


class JsonTemplateRepository(TemplateRepository):
    """
    Directory of template JSON files.

    Files that fail to parse or validate are logged and left out of
    list() rather than failing the whole listing.

    Example:
        >>> repo = JsonTemplateRepository(Path("templates"))
        >>> repo.save(template)
        >>> [t.name for t in repo.list()]
        ['Kuwait A']
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _path(self, template_id: str) -> Path:
        if not template_id or "/" in template_id or "\\" in template_id or template_id.startswith("."):
            raise RepositoryError(f"Invalid template id: {template_id!r}")
        return self.root / f"{template_id}.json"

    def save(self, template: Template) -> None:
        path = self._path(template.id)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".json.tmp")
            tmp.write_text(json.dumps(serialize_template(template), indent=2), encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise RepositoryError(f"Failed to save template {template.name!r}: {e}") from e
        logger.info(f"Saved template {template.name!r} to {path}")

    def delete(self, template_id: str) -> None:
        path = self._path(template_id)
        try:
            path.unlink()
        except FileNotFoundError:
            raise RepositoryError(f"Template not found: {template_id}") from None
        except OSError as e:
            raise RepositoryError(f"Failed to delete template {template_id}: {e}") from e
        logger.info(f"Deleted template {template_id}")

    def get(self, template_id: str) -> Template:
        path = self._path(template_id)
        if not path.exists():
            raise RepositoryError(f"Template not found: {template_id}")
        return self._load(path)

    def list(self, owner_id: Optional[str] = None) -> list[Template]:
        if not self.root.exists():
            return []
        templates: list[Template] = []
        for path in sorted(self.root.glob("*.json")):
            try:
                template = self._load(path)
            except RepositoryError as e:
                logger.warning(f"Skipping unreadable template {path.name}: {e}")
                continue
            if owner_id is None or template.owner_id == owner_id:
                templates.append(template)
        return sorted(templates, key=lambda t: t.created_at)

    def _load(self, path: Path) -> Template:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return deserialize_template(data)
        except (OSError, json.JSONDecodeError, TemplateValidationError, KeyError, ValueError) as e:
            raise RepositoryError(f"Failed to read {path}: {e}") from e
