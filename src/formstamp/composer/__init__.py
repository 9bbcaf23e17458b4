"""
Module: composer

Purpose:
    Composition pipeline: fill a template with a data record and produce
    a multi-page PDF.

Key Functions:
    - plan_document(): Template + record -> page draw operations
    - render_pdf(): Draw operations -> PDF bytes
    - generate_document(): Plan and render one template
    - generate_all(): Sequential bulk generation

Key Classes:
    - RenderConfig: Page size, auto-fit and pacing settings
    - GeneratedDocument, BatchResult: Results

Dependencies:
    - reportlab: PDF generation
    - PIL: Image decoding
"""

from .layout import RenderConfig, plan_document
from .output import render_pdf, DirectorySink, CollectingSink, ZipSink
from .controller import generate_document, deliver_document, generate_all, GeneratedDocument, BatchResult

__all__ = [
    # Config
    "RenderConfig",
    # Planning / rendering
    "plan_document",
    "render_pdf",
    # Delivery
    "DirectorySink",
    "CollectingSink",
    "ZipSink",
    # Controller
    "generate_document",
    "deliver_document",
    "generate_all",
    "GeneratedDocument",
    "BatchResult",
]
