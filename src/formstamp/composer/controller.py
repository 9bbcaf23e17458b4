"""
Module: composer.controller

Purpose:
    Orchestrate document generation.
    Plan → Render → Deliver, for one template or every template a user owns.

Key Functions:
    - generate_document(): Render one template to PDF bytes
    - deliver_document(): Render one template and hand it to a sink
    - generate_all(): Sequential bulk generation with a fixed pause

Key Classes:
    - GeneratedDocument: One finished document
    - BatchResult: Bulk generation summary

Dependencies:
    - composer.layout: Planning
    - composer.output: PDF rendering and delivery

Used By:
    - cli
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from formstamp.core.models.records import DataRecord
from formstamp.core.models.templates import Template
from formstamp.errors import BatchGenerationError, GenerationError

from .layout import RenderConfig, plan_document
from .output import DocumentSink, render_pdf

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedDocument:
    """
    Finished document (immutable).

    Attributes:
        template_id: Source template id
        filename: Output artifact name
        data: PDF bytes
        page_count: Number of pages
    """
    template_id: str
    filename: str
    data: bytes
    page_count: int


@dataclass(frozen=True)
class BatchResult:
    """
    Bulk generation summary.

    Attributes:
        filenames: Delivered artifact names, in delivery order
        elapsed_seconds: Wall time including pauses
    """
    filenames: tuple[str, ...]
    elapsed_seconds: float

    @property
    def count(self) -> int:
        """Number of documents generated (usage counter increment)."""
        return len(self.filenames)


def generate_document(
    template: Template,
    record: DataRecord,
    config: Optional[RenderConfig] = None,
) -> GeneratedDocument:
    """
    Render one template filled with a record.

    Args:
        template: Template to fill
        record: Data record
        config: Render configuration

    Returns:
        GeneratedDocument with PDF bytes

    Raises:
        GenerationError: If no document could be produced

    Example:
        >>> doc = generate_document(template, DataRecord.from_dict({"fullName": "JOHN SMITH"}))
        >>> doc.filename
        'JOHN SMITH_Kuwait A.pdf'
    """
    try:
        document = plan_document(template, record, config)
        data = render_pdf(document)
    except Exception as e:
        raise GenerationError(f"Failed to generate {template.name!r}: {e}") from e

    return GeneratedDocument(
        template_id=template.id,
        filename=document.filename,
        data=data,
        page_count=document.page_count,
    )


def deliver_document(
    template: Template,
    record: DataRecord,
    sink: DocumentSink,
    config: Optional[RenderConfig] = None,
) -> GeneratedDocument:
    """Render one template and hand the result to a sink."""
    generated = generate_document(template, record, config)
    sink(generated.filename, generated.data)
    return generated


def generate_all(
    templates: Sequence[Template],
    record: DataRecord,
    sink: DocumentSink,
    config: Optional[RenderConfig] = None,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> BatchResult:
    """
    Render the same record against every template, one at a time.

    Each template is fully rendered and delivered before the next begins,
    with config.bulk_delay_seconds between successive deliveries (the
    download channel drops outputs that arrive too quickly).

    The first failure aborts the batch. Documents already delivered stay
    delivered.

    Args:
        templates: Templates in delivery order
        record: Data record shared by all templates
        sink: Delivery channel
        config: Render configuration
        sleep: Pause function (injectable for tests)

    Returns:
        BatchResult with delivered filenames

    Raises:
        GenerationError: If there are no templates
        BatchGenerationError: If any template fails
    """
    config = config or RenderConfig()
    if not templates:
        raise GenerationError("No templates found.")

    start_time = time.perf_counter()
    delivered: list[str] = []
    logger.info(f"Generating {len(templates)} documents")

    for position, template in enumerate(templates):
        if position > 0 and config.bulk_delay_seconds > 0:
            sleep(config.bulk_delay_seconds)
        try:
            generated = deliver_document(template, record, sink, config)
        except Exception as e:
            logger.error(f"Batch aborted at template {position + 1}/{len(templates)} ({template.name!r}): {e}")
            raise BatchGenerationError(
                f"An error occurred during generation of {template.name!r}",
                template_name=template.name,
                delivered=len(delivered),
                cause=e,
            ) from e
        delivered.append(generated.filename)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Generated {len(delivered)} documents in {elapsed:.2f}s")
    return BatchResult(filenames=tuple(delivered), elapsed_seconds=elapsed)
