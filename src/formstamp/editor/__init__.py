"""
Editor Package

Headless template layout editor: field palette, configuration and the
drag/inspect session.
"""

from .catalog import CatalogEntry, CatalogGroup, FIELD_GROUPS, find_entry, search_catalog
from .config import EditorConfig, DEFAULT_COUNTRIES
from .session import EditorSession, EditorState

__all__ = [
    # Palette
    "CatalogEntry",
    "CatalogGroup",
    "FIELD_GROUPS",
    "find_entry",
    "search_catalog",
    # Config
    "EditorConfig",
    "DEFAULT_COUNTRIES",
    # Session
    "EditorSession",
    "EditorState",
]
