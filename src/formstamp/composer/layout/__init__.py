"""
Module: composer.layout

Purpose:
    Page planning for filled templates.
    Converts a template and a data record into positioned draw operations.

Key Functions:
    - plan_document(): Main entry point for planning
    - order_for_paint(): Images-first stable partition
    - fit_font_size(): Auto-fit text sizing

Key Classes:
    - RenderConfig: Page size, auto-fit and pacing settings
    - PagePlan, RenderedDocument: Planned output
    - BackgroundOp, ImageOp, MarkOp, TextOp: Draw operations

Used By:
    - composer.controller
"""

from .config import RenderConfig
from .models import BackgroundOp, ImageOp, MarkOp, TextOp, PagePlan, RenderedDocument
from .fonts import fit_font_size, resolve_font
from .planner import plan_document, plan_page, order_for_paint, output_filename

__all__ = [
    # Config
    "RenderConfig",
    # Models
    "BackgroundOp",
    "ImageOp",
    "MarkOp",
    "TextOp",
    "PagePlan",
    "RenderedDocument",
    # Functions
    "fit_font_size",
    "resolve_font",
    "plan_document",
    "plan_page",
    "order_for_paint",
    "output_filename",
]
