"""
Storage Package

Template persistence boundary and its local implementations.
"""

from .repository import TemplateRepository, InMemoryTemplateRepository, JsonTemplateRepository

__all__ = [
    "TemplateRepository",
    "InMemoryTemplateRepository",
    "JsonTemplateRepository",
]
