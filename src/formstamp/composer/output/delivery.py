"""
Module: composer.output.delivery

Purpose:
    Delivery channels for finished documents. A sink receives one
    (filename, bytes) pair per document.

Key Classes:
    - DocumentSink: Callable protocol
    - DirectorySink: Writes files into a directory
    - CollectingSink: Keeps documents in memory
    - ZipSink: Appends documents to a ZIP archive

Dependencies:
    - zipfile (std)

Used By:
    - composer.controller: Single and bulk generation
    - cli
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class DocumentSink(Protocol):
    """Receives a finished document."""

    def __call__(self, filename: str, data: bytes) -> None:
        ...


class DirectorySink:
    """
    Write each document as a file in a directory.

    Existing files with the same name are overwritten.

    Example:
        >>> sink = DirectorySink(Path("output"))
        >>> sink("JOHN SMITH_Kuwait A.pdf", pdf_bytes)
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.written: list[Path] = []

    def __call__(self, filename: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        path.write_bytes(data)
        self.written.append(path)
        logger.info(f"Wrote {path}")


class CollectingSink:
    """Keep delivered documents in memory, in delivery order."""

    def __init__(self) -> None:
        self.documents: list[tuple[str, bytes]] = []

    def __call__(self, filename: str, data: bytes) -> None:
        self.documents.append((filename, data))

    @property
    def filenames(self) -> list[str]:
        return [name for name, _ in self.documents]


class ZipSink:
    """
    Append each document to a ZIP archive.

    Duplicate names get a numeric suffix so no document is shadowed.
    """

    def __init__(self, output_path: Path) -> None:
        if output_path.suffix != ".zip":
            output_path = output_path.with_suffix(".zip")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path = output_path
        self._names: set[str] = set()
        # Truncate any previous archive
        with zipfile.ZipFile(self.output_path, "w", zipfile.ZIP_DEFLATED):
            pass

    def __call__(self, filename: str, data: bytes) -> None:
        name = self._unique(filename)
        with zipfile.ZipFile(self.output_path, "a", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(name, data)
        logger.info(f"Added {name} to {self.output_path}")

    def _unique(self, filename: str) -> str:
        stem, dot, suffix = filename.rpartition(".")
        if not dot:
            stem, suffix = filename, ""
        candidate, n = filename, 1
        while candidate in self._names:
            n += 1
            candidate = f"{stem} ({n}).{suffix}" if suffix else f"{stem} ({n})"
        self._names.add(candidate)
        return candidate
