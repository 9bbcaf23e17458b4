"""
Module: templates

Purpose:
    Template entity and its mutable working copy.

    A Template is an ordered list of page backgrounds plus a bag of
    positioned fields, tagged with a layout family (country). Templates
    are immutable once built; edits happen on a TemplateDraft, whose
    mutation operations keep every field inside its page.

Key Classes:
    - Template: Immutable template (what gets persisted and rendered)
    - TemplateDraft: Mutable store used by the editor

Dependencies:
    - dataclasses (std)
    - uuid (std)
    - .fields: Field, FieldType, default_footprint

Used By:
    - editor.session
    - composer.layout.planner
    - core.utils.serialization
    - storage.repository
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Union

from formstamp.errors import MissingPageError

from .fields import DEFAULT_ORIGIN, Field, FieldType, default_footprint

logger = logging.getLogger(__name__)

# A page background: data URL string or raw encoded image bytes
PagePayload = Union[str, bytes]

DEFAULT_COUNTRY = "kuwait"
DEFAULT_TEMPLATE_NAME = "New Office Template"

# Set by add_field itself; geometry is changed afterwards with move_field/resize_field
_SEEDED_ATTRIBUTES = frozenset({"id", "key", "label", "x", "y", "width", "height", "page", "type"})


def new_id() -> str:
    """Opaque unique identifier."""
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Template:
    """
    Reusable layout of page backgrounds plus positioned fields (immutable).

    Attributes:
        id: Opaque unique identifier
        name: Display label
        country: Layout-family tag used to group templates
        pages: Page backgrounds in physical output order
        fields: Field bag (rendering re-partitions by type)
        created_at: ISO-8601 timestamp
        owner_id: Owner scope for repository listing

    Invariants:
        - Field ids are unique
        - Fields whose page is outside 1..len(pages) are kept but never
          rendered

    Example:
        >>> t = Template(id="t1", name="Kuwait A", country="kuwait", pages=("data:image/png;base64,...",))
        >>> t.page_count
        1
    """

    id: str
    name: str
    country: str = DEFAULT_COUNTRY
    pages: tuple[PagePayload, ...] = ()
    fields: tuple[Field, ...] = ()
    created_at: str = field(default_factory=utc_timestamp)
    owner_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate template on construction."""
        object.__setattr__(self, "pages", tuple(self.pages))
        object.__setattr__(self, "fields", tuple(self.fields))
        ids = [f.id for f in self.fields]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate field ids in template {self.name!r}")

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def fields_on_page(self, page: int) -> tuple[Field, ...]:
        """Fields anchored to a 1-indexed page, in stored order."""
        return tuple(f for f in self.fields if f.page == page)

    def orphan_fields(self) -> tuple[Field, ...]:
        """Fields referencing a page that does not exist."""
        return tuple(f for f in self.fields if not 1 <= f.page <= self.page_count)


class TemplateDraft:
    """
    Mutable working copy of a template.

    Every mutation keeps fields inside their page (clamped, never
    rejected). The draft tracks the page currently being edited so new
    fields land on it.

    Example:
        >>> draft = TemplateDraft(name="Kuwait A")
        >>> draft.add_page("data:image/png;base64,...")
        1
        >>> f = draft.add_field("fullName", "Full Name", FieldType.TEXT)
        >>> (f.x, f.y, f.width, f.height, f.page)
        (20.0, 20.0, 40.0, 6.0, 1)
    """

    def __init__(
        self,
        name: str = DEFAULT_TEMPLATE_NAME,
        country: str = DEFAULT_COUNTRY,
        *,
        pages: Iterable[PagePayload] = (),
        fields: Iterable[Field] = (),
        template_id: Optional[str] = None,
        owner_id: Optional[str] = None,
    ) -> None:
        self.name = name
        self.country = country
        self.template_id = template_id
        self.owner_id = owner_id
        self.pages: list[PagePayload] = list(pages)
        self._fields: dict[str, Field] = {f.id: f for f in fields}
        self.current_page_index = 0

    @classmethod
    def from_template(cls, template: Template) -> TemplateDraft:
        """Open an existing template for editing."""
        return cls(
            template.name,
            template.country,
            pages=template.pages,
            fields=template.fields,
            template_id=template.id,
            owner_id=template.owner_id,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def fields(self) -> tuple[Field, ...]:
        """All fields in insertion order."""
        return tuple(self._fields.values())

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def current_page(self) -> int:
        """1-indexed page number currently being edited."""
        return self.current_page_index + 1

    def get_field(self, field_id: str) -> Optional[Field]:
        return self._fields.get(field_id)

    def fields_on_page(self, page: int) -> tuple[Field, ...]:
        return tuple(f for f in self._fields.values() if f.page == page)

    # ─────────────────────────────────────────────────────────────────────────
    # Pages
    # ─────────────────────────────────────────────────────────────────────────

    def add_page(self, payload: PagePayload) -> int:
        """
        Append a page background.

        Returns:
            The new page count
        """
        if not payload:
            raise ValueError("page payload must not be empty")
        self.pages.append(payload)
        if len(self.pages) == 1:
            self.current_page_index = 0
        return len(self.pages)

    def set_current_page(self, index: int) -> None:
        """Select the 0-indexed page being edited."""
        if not 0 <= index < len(self.pages):
            raise IndexError(f"page index out of range: {index}")
        self.current_page_index = index

    def set_page_count(self, count: int) -> None:
        """
        Truncate the page list to count pages.

        Fields on removed pages are dropped so no field references a
        missing page.

        Raises:
            ValueError: If count is negative or larger than the current
                page count (new pages need a background payload)
        """
        if count < 0:
            raise ValueError(f"count must be non-negative: {count}")
        if count > len(self.pages):
            raise ValueError(
                f"Cannot grow from {len(self.pages)} to {count} pages without backgrounds; use add_page()"
            )
        del self.pages[count:]
        dropped = [fid for fid, f in self._fields.items() if f.page > count]
        for fid in dropped:
            del self._fields[fid]
        if dropped:
            logger.debug(f"Dropped {len(dropped)} fields with removed pages")
        self.current_page_index = min(self.current_page_index, max(count - 1, 0))

    def remove_page(self, index: int) -> None:
        """
        Remove the 0-indexed page, its fields, and shift later fields up.
        """
        if not 0 <= index < len(self.pages):
            raise IndexError(f"page index out of range: {index}")
        removed_page = index + 1
        del self.pages[index]
        kept: dict[str, Field] = {}
        for fid, f in self._fields.items():
            if f.page == removed_page:
                continue
            kept[fid] = replace(f, page=f.page - 1) if f.page > removed_page else f
        self._fields = kept
        self.current_page_index = min(self.current_page_index, max(len(self.pages) - 1, 0))

    # ─────────────────────────────────────────────────────────────────────────
    # Fields
    # ─────────────────────────────────────────────────────────────────────────

    def add_field(
        self,
        key: str,
        label: str,
        field_type: FieldType | str,
        *,
        page: Optional[int] = None,
        **style: Any,
    ) -> Field:
        """
        Add a field seeded with type-appropriate defaults.

        Args:
            key: Data-record key
            label: Display label
            field_type: Render behaviour, selects the default footprint
            page: 1-indexed page, defaults to the current page
            **style: Field attribute overrides (font_size, bold, ...)

        Returns:
            The new field

        Raises:
            MissingPageError: If no page background has been imported
            ValueError: If style names an identity or geometry attribute
        """
        seeded = _SEEDED_ATTRIBUTES.intersection(style)
        if seeded:
            raise ValueError(f"add_field cannot override {', '.join(sorted(seeded))}")
        if not self.pages:
            raise MissingPageError("Please upload a page background first.")
        field_type = FieldType(field_type)
        target_page = self.current_page if page is None else page
        if not 1 <= target_page <= len(self.pages):
            raise IndexError(f"page out of range: {target_page}")

        width, height = default_footprint(field_type)
        x, y = DEFAULT_ORIGIN
        new_field = Field(
            id=new_id(),
            key=key,
            label=label,
            x=x,
            y=y,
            width=width,
            height=height,
            page=target_page,
            type=field_type,
            **style,
        )
        self._fields[new_field.id] = new_field
        return new_field

    def move_field(self, field_id: str, x: float, y: float) -> Field:
        """Move a field; the origin is clamped so it stays on the page."""
        return self._store(self._require(field_id).with_geometry(x=x, y=y))

    def resize_field(self, field_id: str, width: float, height: float) -> Field:
        """Resize a field; size and origin are re-clamped."""
        return self._store(self._require(field_id).with_geometry(width=width, height=height))

    def update_field(self, field_id: str, **changes: Any) -> Field:
        """
        Replace attributes of a field.

        Geometry keys (x, y, width, height) go through the clamp; all
        other keys are direct replacements.
        """
        current = self._require(field_id)
        geometry = {k: changes.pop(k) for k in ("x", "y", "width", "height") if k in changes}
        if "page" in changes and not 1 <= int(changes["page"]) <= len(self.pages):
            raise IndexError(f"page out of range: {changes['page']}")
        updated = replace(current, **changes) if changes else current
        if geometry:
            updated = updated.with_geometry(**geometry)
        return self._store(updated)

    def remove_field(self, field_id: str) -> bool:
        """
        Delete a field by id.

        Returns:
            True if a field was removed, False for unknown ids
        """
        return self._fields.pop(field_id, None) is not None

    # ─────────────────────────────────────────────────────────────────────────
    # Build
    # ─────────────────────────────────────────────────────────────────────────

    def build(self, *, created_at: Optional[str] = None) -> Template:
        """
        Freeze the draft into a Template.

        A draft opened from an existing template keeps its id (whole-object
        overwrite); a new draft gets a fresh id.
        """
        return Template(
            id=self.template_id or new_id(),
            name=self.name,
            country=self.country,
            pages=tuple(self.pages),
            fields=self.fields,
            created_at=created_at or utc_timestamp(),
            owner_id=self.owner_id,
        )

    def _require(self, field_id: str) -> Field:
        try:
            return self._fields[field_id]
        except KeyError:
            raise KeyError(f"Unknown field id: {field_id}") from None

    def _store(self, updated: Field) -> Field:
        self._fields[updated.id] = updated
        return updated
