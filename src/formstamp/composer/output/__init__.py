"""
Module: composer.output

Purpose:
    PDF rendering and delivery of finished documents.
    Converts RenderedDocument to PDF bytes using ReportLab and hands them
    to a sink.

Key Functions:
    - render_pdf(): Render a planned document to bytes
    - render_to_pdf(): Render a planned document to a file

Key Classes:
    - DirectorySink, CollectingSink, ZipSink: Delivery channels

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
"""

from .renderer import render_pdf, render_to_pdf
from .delivery import DocumentSink, DirectorySink, CollectingSink, ZipSink

__all__ = [
    "render_pdf",
    "render_to_pdf",
    "DocumentSink",
    "DirectorySink",
    "CollectingSink",
    "ZipSink",
]
