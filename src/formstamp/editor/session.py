"""
Module: editor.session

Purpose:
    Headless layout editor: a single-selection drag state machine over
    one page at a time, plus the property inspector and field palette
    operations. A UI feeds it pointer events in canvas pixels; all
    geometry it writes is page-relative percent.

    States:
        IDLE --pointer_down(field)--> DRAGGING --pointer_up--> IDLE

    While dragging, every move recomputes the origin as
    pointer% - offset (offset captured at pointer_down) and clamps each
    axis to [0, 100 - size], so the field never leaves the page.

Key Classes:
    - EditorState: IDLE / DRAGGING
    - EditorSession: The editor

Dependencies:
    - core.models.templates.TemplateDraft: Mutations and invariants
    - editor.catalog: Field palette
    - editor.config.EditorConfig: Settings

Used By:
    - UI layers (not part of this package)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from formstamp.core.models.fields import Alignment, Field, FieldCategory, FieldType
from formstamp.core.models.geometry import PERCENT_MAX, clamp, round_percent, to_percent
from formstamp.core.models.templates import PagePayload, Template, TemplateDraft
from formstamp.errors import MissingPageError

from .catalog import CatalogEntry, find_entry
from .config import EditorConfig

logger = logging.getLogger(__name__)

# Default canvas: 600px wide at the A4 aspect ratio (210/297)
DEFAULT_CANVAS_SIZE = (600.0, 600.0 * 297 / 210)

NO_PAGE_WARNING = "Please upload a page background first."


class EditorState(str, Enum):
    """Drag state machine states."""
    IDLE = "idle"
    DRAGGING = "dragging"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class _Drag:
    field_id: str
    offset_x: float
    offset_y: float


class EditorSession:
    """
    Interactive placement over a TemplateDraft.

    Only one field can be dragged at a time: starting a drag on a second
    field ends the first one.

    Example:
        >>> session = EditorSession(EditorConfig())
        >>> session.import_page(png_data_url)
        >>> f = session.add_from_catalog("fullName")
        >>> session.pointer_down(f.id, 150, 190)   # canvas pixels
        True
        >>> session.pointer_move(900, 190)          # far past the right edge
        >>> session.active_field.x                  # clamped to 100 - width
        60.0
        >>> session.pointer_up()
    """

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        draft: Optional[TemplateDraft] = None,
        *,
        canvas_size: tuple[float, float] = DEFAULT_CANVAS_SIZE,
    ) -> None:
        self.config = config or EditorConfig()
        self.draft = draft or TemplateDraft(
            self.config.default_template_name,
            self.config.default_country,
            owner_id=self.config.owner_id,
        )
        self.selected_field_id: Optional[str] = None
        self.warnings: list[str] = []
        self._drag: Optional[_Drag] = None
        self._canvas_width, self._canvas_height = 0.0, 0.0
        self.resize_canvas(*canvas_size)

    @classmethod
    def for_template(cls, template: Template, config: Optional[EditorConfig] = None) -> EditorSession:
        """Open an existing template for editing."""
        return cls(config, TemplateDraft.from_template(template))

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> EditorState:
        return EditorState.DRAGGING if self._drag is not None else EditorState.IDLE

    @property
    def dragging_field_id(self) -> Optional[str]:
        return self._drag.field_id if self._drag else None

    @property
    def active_field(self) -> Optional[Field]:
        """Field shown in the property inspector."""
        if self.selected_field_id is None:
            return None
        return self.draft.get_field(self.selected_field_id)

    @property
    def current_page_index(self) -> int:
        return self.draft.current_page_index

    def visible_fields(self) -> tuple[Field, ...]:
        """Fields on the page being edited."""
        return self.draft.fields_on_page(self.draft.current_page)

    def is_key_used_on_page(self, key: str) -> bool:
        """Palette "Used" badge: key already placed on the current page."""
        return any(f.key == key for f in self.visible_fields())

    def resize_canvas(self, width: float, height: float) -> None:
        """Set the on-screen page size in pixels."""
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive: {width}x{height}")
        self._canvas_width, self._canvas_height = float(width), float(height)

    # ─────────────────────────────────────────────────────────────────────────
    # Pages and template attributes
    # ─────────────────────────────────────────────────────────────────────────

    def import_page(self, payload: PagePayload) -> int:
        """Append a page background; returns the page count."""
        return self.draft.add_page(payload)

    def go_to_page(self, index: int) -> None:
        """Switch the canvas to a 0-indexed page. Ends any drag."""
        self.pointer_up()
        self.draft.set_current_page(index)

    def rename(self, name: str) -> None:
        self.draft.name = name

    def set_country(self, country: str) -> None:
        """
        Set the layout family.

        Raises:
            ValueError: If the family is not enabled in the config
        """
        if not self.config.is_country_enabled(country):
            raise ValueError(f"Country not enabled: {country!r}")
        self.draft.country = country

    # ─────────────────────────────────────────────────────────────────────────
    # Palette
    # ─────────────────────────────────────────────────────────────────────────

    def add_from_catalog(self, key: str) -> Optional[Field]:
        """
        Add a palette field to the current page and select it.

        Returns:
            The new field, or None if no page exists (a warning is issued
            and nothing changes)

        Raises:
            KeyError: If key is not in the palette
        """
        entry = find_entry(key)
        if entry is None:
            raise KeyError(f"Unknown palette key: {key}")
        return self._add(entry)

    def add_custom_field(self, key: str, label: str, field_type: FieldType | str) -> Optional[Field]:
        """Add a field that is not in the palette."""
        return self._add(CatalogEntry(key, label, FieldType(field_type), FieldCategory.CUSTOM))

    def _add(self, entry: CatalogEntry) -> Optional[Field]:
        try:
            new_field = self.draft.add_field(
                entry.key, entry.label, entry.type, category=entry.category,
            )
        except MissingPageError:
            self._warn(NO_PAGE_WARNING)
            return None
        self.selected_field_id = new_field.id
        return new_field

    # ─────────────────────────────────────────────────────────────────────────
    # Drag protocol
    # ─────────────────────────────────────────────────────────────────────────

    def select(self, field_id: Optional[str]) -> None:
        """Change the inspected field. No geometry change."""
        if field_id is not None and self.draft.get_field(field_id) is None:
            raise KeyError(f"Unknown field id: {field_id}")
        self.selected_field_id = field_id

    def pointer_down(self, field_id: str, x_px: float, y_px: float) -> bool:
        """
        Start dragging a field on the current page.

        Records the offset between the pointer and the field origin so the
        field does not snap to the pointer.

        Returns:
            True if a drag started
        """
        target = self.draft.get_field(field_id)
        if target is None or target.page != self.draft.current_page:
            return False

        # Single active drag: a new pointer_down ends the previous drag
        self.pointer_up()

        pointer_x, pointer_y = self._to_percent(x_px, y_px)
        self.selected_field_id = field_id
        self._drag = _Drag(field_id, pointer_x - target.x, pointer_y - target.y)
        return True

    def pointer_move(self, x_px: float, y_px: float) -> Optional[Field]:
        """
        Move the dragged field under the pointer, clamped to the page.

        Returns:
            The updated field, or None when idle
        """
        if self._drag is None:
            return None
        target = self.draft.get_field(self._drag.field_id)
        if target is None:
            self._drag = None
            return None

        pointer_x, pointer_y = self._to_percent(x_px, y_px)
        new_x = clamp(pointer_x - self._drag.offset_x, 0.0, PERCENT_MAX - target.width)
        new_y = clamp(pointer_y - self._drag.offset_y, 0.0, PERCENT_MAX - target.height)
        return self.draft.move_field(target.id, round_percent(new_x), round_percent(new_y))

    def pointer_up(self) -> None:
        """End the drag; the last clamped position is committed."""
        self._drag = None

    pointer_leave = pointer_up

    def _to_percent(self, x_px: float, y_px: float) -> tuple[float, float]:
        return (to_percent(x_px, self._canvas_width), to_percent(y_px, self._canvas_height))

    # ─────────────────────────────────────────────────────────────────────────
    # Property inspector
    # ─────────────────────────────────────────────────────────────────────────

    def update_active_field(self, **changes: Any) -> Optional[Field]:
        """
        Replace attributes of the selected field.

        Geometry changes are re-clamped (a wider field is pulled back
        onto the page). No-op without a selection.
        """
        if self.selected_field_id is None:
            return None
        return self.draft.update_field(self.selected_field_id, **changes)

    def toggle_bold(self) -> Optional[Field]:
        active = self.active_field
        return self.update_active_field(bold=not active.bold) if active else None

    def toggle_italic(self) -> Optional[Field]:
        active = self.active_field
        return self.update_active_field(italic=not active.italic) if active else None

    def set_align(self, align: Alignment | str) -> Optional[Field]:
        return self.update_active_field(align=Alignment(align))

    def delete_active_field(self) -> bool:
        """Remove the selected field and clear the selection."""
        if self.selected_field_id is None:
            return False
        if self.dragging_field_id == self.selected_field_id:
            self.pointer_up()
        removed = self.draft.remove_field(self.selected_field_id)
        self.selected_field_id = None
        return removed

    # ─────────────────────────────────────────────────────────────────────────
    # Save
    # ─────────────────────────────────────────────────────────────────────────

    def save(self) -> Template:
        """
        Build the template and store it in the configured repository.

        Later saves of the same session overwrite the same template id.
        """
        self.pointer_up()
        template = self.draft.build()
        if self.config.repository is not None:
            self.config.repository.save(template)
        self.draft.template_id = template.id
        logger.info(f"Saved template {template.name!r} ({template.page_count} pages, {len(template.fields)} fields)")
        return template

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)
        if self.config.on_warning is not None:
            self.config.on_warning(message)
