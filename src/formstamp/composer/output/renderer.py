"""
Module: composer.output.renderer

Purpose:
    Render a RenderedDocument to PDF using ReportLab.
    Each PagePlan becomes one PDF page with its ops painted in order.

    Asset failures (background or field image that cannot be decoded or
    painted) are logged and skipped; the page continues with the
    remaining ops.

Key Functions:
    - render_pdf(): Document -> PDF bytes
    - render_to_pdf(): Document -> PDF file

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - composer.layout.models: RenderedDocument, PagePlan, ops

Used By:
    - composer.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from formstamp.composer.images import decode_payload
from formstamp.composer.layout.models import (
    BackgroundOp,
    ImageOp,
    MarkOp,
    PagePlan,
    RenderedDocument,
    TextOp,
)
from formstamp.core.models.fields import Alignment

logger = logging.getLogger(__name__)


def render_pdf(document: RenderedDocument) -> bytes:
    """
    Render a planned document to PDF bytes.

    The canvas runs in ReportLab's invariant mode, so identical documents
    give byte-identical output.

    Args:
        document: Planned document

    Returns:
        PDF file contents

    Example:
        >>> data = render_pdf(plan_document(template, record))
        >>> data[:5]
        b'%PDF-'
    """
    buf = io.BytesIO()
    if document.page_count == 0:
        logger.warning("Empty document, creating empty PDF")

    first = document.pages[0] if document.pages else None
    pagesize = (first.width, first.height) if first else A4
    c = canvas.Canvas(buf, pagesize=pagesize, invariant=1)
    c.setTitle(document.filename.rsplit(".", 1)[0])

    for page in document.pages:
        c.setPageSize((page.width, page.height))
        _render_page(c, page)
        c.showPage()

    c.save()
    logger.info(f"Rendered {document.page_count} pages for {document.filename}")
    return buf.getvalue()


def render_to_pdf(document: RenderedDocument, output_path: Path) -> Path:
    """
    Render a planned document to a PDF file.

    Raises:
        IOError: If the PDF cannot be written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(render_pdf(document))
    return output_path


def _render_page(c: canvas.Canvas, page: PagePlan) -> None:
    """Paint a page's ops in order."""
    for op in page.ops:
        if isinstance(op, BackgroundOp):
            _draw_background(c, op, page)
        elif isinstance(op, ImageOp):
            _draw_image(c, op, page)
        elif isinstance(op, MarkOp):
            _draw_mark(c, op, page)
        elif isinstance(op, TextOp):
            _draw_text(c, op, page)
        else:
            raise AssertionError(f"Unhandled draw op: {type(op).__name__}")


def _draw_background(c: canvas.Canvas, op: BackgroundOp, page: PagePlan) -> None:
    """Full-bleed background. Failure is non-fatal."""
    try:
        reader = _pil_to_reader(decode_payload(op.payload, op.format))
        c.drawImage(reader, 0, 0, width=page.width, height=page.height)
    except Exception as e:
        logger.warning(f"Background failed on page {page.index + 1}: {e}")


def _draw_image(c: canvas.Canvas, op: ImageOp, page: PagePlan) -> None:
    """Field image stretched to its rectangle. Failure is non-fatal."""
    try:
        reader = _pil_to_reader(decode_payload(op.payload, op.format))
        c.drawImage(
            reader,
            op.rect.x,
            _transform_y(page.height, op.rect.y, op.rect.height),
            width=op.rect.width,
            height=op.rect.height,
            mask="auto",
        )
    except Exception as e:
        logger.warning(f"Asset failed: {op.field_key} ({e})")


def _draw_mark(c: canvas.Canvas, op: MarkOp, page: PagePlan) -> None:
    center_x, _ = op.center
    c.saveState()
    c.setFont(op.font_name, op.font_size)
    c.setFillColorRGB(0, 0, 0)
    c.drawCentredString(center_x, page.height - op.baseline_y, op.text)
    c.restoreState()


def _draw_text(c: canvas.Canvas, op: TextOp, page: PagePlan) -> None:
    r, g, b = op.color
    y_pt = page.height - op.baseline_y

    c.saveState()
    c.setFont(op.font_name, op.font_size)
    c.setFillColorRGB(r / 255, g / 255, b / 255)
    if op.align is Alignment.CENTER:
        c.drawCentredString(op.anchor_x, y_pt, op.text)
    elif op.align is Alignment.RIGHT:
        c.drawRightString(op.anchor_x, y_pt, op.text)
    else:
        c.drawString(op.anchor_x, y_pt, op.text)
    c.restoreState()


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    buf.seek(0)
    return ImageReader(buf)


def _transform_y(page_height: float, y_top: float, height: float) -> float:
    """
    Convert a top-down Y coordinate to bottom-up PDF Y.

    Args:
        page_height: Page height in points
        y_top: Distance of the element's top edge from the page top
        height: Height of element

    Returns:
        Y position of the element's bottom edge from the page bottom
    """
    return page_height - y_top - height
