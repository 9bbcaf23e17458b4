"""
Module: composer.layout.planner

Purpose:
    Turn a (Template, DataRecord) pair into page draw operations.
    Pure and deterministic: the same inputs always produce equal plans.

    Per page:
    1. Full-bleed background (when the page has one)
    2. Fields anchored to the page, images first (stable partition)
    3. Value resolution (photo keys read the photo sub-mapping)
    4. Absent values are skipped
    5. Percent geometry -> points
    6. Dispatch on field type (image / mark / text)

Key Functions:
    - plan_document(): Main entry point
    - plan_page(): Ops for one page
    - order_for_paint(): Images-first stable partition
    - output_filename(): Artifact name from record and template

Dependencies:
    - composer.layout.values: Resolution rules
    - composer.layout.fonts: Font resolution and auto-fit
    - core.utils.payloads: Format sniffing

Used By:
    - composer.controller
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from formstamp.core.models.fields import Alignment, Field, FieldType, FontFamily
from formstamp.core.models.geometry import AbsoluteRect
from formstamp.core.models.records import DataRecord
from formstamp.core.models.templates import PagePayload, Template
from formstamp.core.utils.payloads import is_image_payload, sniff_format

from .config import RenderConfig
from .fonts import ascent, fit_font_size, resolve_font
from .models import BackgroundOp, DrawOp, ImageOp, MarkOp, PagePlan, RenderedDocument, TextOp
from .values import format_date, is_absent, is_date_key, is_marked, resolve_value, to_text

logger = logging.getLogger(__name__)

MARK_FONT = resolve_font(FontFamily.HELVETICA, bold=True)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def plan_document(
    template: Template,
    record: DataRecord,
    config: Optional[RenderConfig] = None,
) -> RenderedDocument:
    """
    Plan every page of a filled template.

    Args:
        template: Template to fill
        record: Data to stamp onto it
        config: Page size and auto-fit settings (defaults to A4)

    Returns:
        RenderedDocument with one PagePlan per template page

    Example:
        >>> doc = plan_document(template, DataRecord.from_dict({"fullName": "JOHN SMITH"}))
        >>> doc.page_count == template.page_count
        True
    """
    config = config or RenderConfig()

    orphans = template.orphan_fields()
    if orphans:
        logger.debug(
            f"Template {template.name!r}: {len(orphans)} fields reference missing pages and are skipped"
        )

    pages = tuple(
        plan_page(index, payload, template.fields_on_page(index + 1), record, config)
        for index, payload in enumerate(template.pages)
    )
    return RenderedDocument(
        template_id=template.id,
        filename=output_filename(record, template),
        pages=pages,
    )


def plan_page(
    index: int,
    background: Optional[PagePayload],
    fields: Iterable[Field],
    record: DataRecord,
    config: RenderConfig,
) -> PagePlan:
    """
    Plan one page: background first, then fields in paint order.

    Args:
        index: 0-indexed page number
        background: Page background payload (may be empty)
        fields: Fields anchored to this page
        record: Data record
        config: Render configuration
    """
    ops: list[DrawOp] = []

    if background:
        if is_image_payload(background):
            ops.append(BackgroundOp(payload=background, format=sniff_format(background)))
        else:
            logger.warning(f"Background on page {index + 1} is not an image payload, skipping")

    for field in order_for_paint(fields):
        value = resolve_value(field.key, record)
        if is_absent(value):
            logger.debug(f"No value for {field.key!r}, skipping")
            continue
        rect = field.rect.to_absolute(config.page_width, config.page_height)
        op = _plan_field(field, value, rect, config)
        if op is not None:
            ops.append(op)

    return PagePlan(index=index, width=config.page_width, height=config.page_height, ops=tuple(ops))


def order_for_paint(fields: Iterable[Field]) -> list[Field]:
    """
    Stable partition: image fields first, then all other fields.

    Relative order within each group is preserved, so text and marks are
    never hidden under a later-drawn photo.
    """
    fields = list(fields)
    return [f for f in fields if f.is_image] + [f for f in fields if not f.is_image]


def output_filename(record: DataRecord, template: Template) -> str:
    """
    Name of the output artifact.

    Example:
        >>> output_filename(DataRecord.from_dict({"fullName": "JOHN SMITH"}), template)
        'JOHN SMITH_Kuwait A.pdf'
    """
    stem = f"{record.display_name}_{template.name}"
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', stem)}.pdf"


# ─────────────────────────────────────────────────────────────────────────────
# Per-type dispatch
# ─────────────────────────────────────────────────────────────────────────────

def _plan_field(field: Field, value: object, rect: AbsoluteRect, config: RenderConfig) -> Optional[DrawOp]:
    if field.type is FieldType.IMAGE:
        return _plan_image(field, value, rect)
    elif field.type in (FieldType.CHECKMARK, FieldType.BOOLEAN):
        return _plan_mark(field, value, rect, config)
    elif field.type is FieldType.TEXT:
        return _plan_text(field, value, rect, config)
    raise AssertionError(f"Unhandled field type: {field.type!r}")


def _plan_image(field: Field, value: object, rect: AbsoluteRect) -> Optional[ImageOp]:
    if not is_image_payload(value):
        logger.debug(f"Image field {field.key!r} has no embedded image payload, skipping")
        return None
    return ImageOp(field_key=field.key, rect=rect, payload=value, format=sniff_format(value))  # type: ignore[arg-type]


def _plan_mark(field: Field, value: object, rect: AbsoluteRect, config: RenderConfig) -> Optional[MarkOp]:
    if not is_marked(value):
        return None
    _, center_y = rect.center
    return MarkOp(
        field_key=field.key,
        rect=rect,
        text=config.mark_text,
        font_name=MARK_FONT,
        font_size=field.font_size,
        baseline_y=center_y + ascent(MARK_FONT, field.font_size) / 2,
    )


def _plan_text(field: Field, value: object, rect: AbsoluteRect, config: RenderConfig) -> TextOp:
    text = to_text(value)
    if is_date_key(field.key):
        text = format_date(text)

    font_name = resolve_font(field.font_family, field.bold, field.italic)
    max_width = rect.width or config.fallback_fit_width
    size = fit_font_size(
        text,
        font_name,
        max_width,
        field.font_size,
        min_size=config.min_font_size,
        step=config.font_size_step,
    )

    if field.align is Alignment.CENTER:
        anchor_x = rect.x + rect.width / 2
    elif field.align is Alignment.RIGHT:
        anchor_x = rect.right
    else:
        anchor_x = rect.x

    return TextOp(
        field_key=field.key,
        rect=rect,
        text=text,
        font_name=font_name,
        font_size=size,
        color=field.rgb,
        align=field.align,
        anchor_x=anchor_x,
        baseline_y=rect.y,
    )

