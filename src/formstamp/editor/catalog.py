"""
Module: editor.catalog

Purpose:
    Predefined field palette offered by the layout editor, grouped for
    display, plus case-insensitive search over labels and keys.

Key Functions:
    - find_entry(key): Palette entry for a key
    - search_catalog(term): Groups filtered by a search term
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from formstamp.core.models.fields import FieldCategory, FieldType


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One palette item."""
    key: str
    label: str
    type: FieldType
    category: FieldCategory


@dataclass(frozen=True, slots=True)
class CatalogGroup:
    """Titled group of palette items."""
    title: str
    entries: tuple[CatalogEntry, ...]


def _group(title: str, category: FieldCategory, *items: tuple[str, str, FieldType]) -> CatalogGroup:
    return CatalogGroup(
        title=title,
        entries=tuple(CatalogEntry(key, label, ftype, category) for key, label, ftype in items),
    )


_TEXT = FieldType.TEXT
_CHECK = FieldType.CHECKMARK
_IMAGE = FieldType.IMAGE

FIELD_GROUPS: tuple[CatalogGroup, ...] = (
    _group(
        "Work Experience", FieldCategory.EXPERIENCE,
        ("work_washing", "Washing", _CHECK),
        ("work_cleaning", "Cleaning", _CHECK),
        ("work_ironing", "Ironing", _CHECK),
        ("work_sewing", "Sewing", _CHECK),
        ("work_cooking", "Cooking", _CHECK),
        ("work_babycare", "Baby Care", _CHECK),
    ),
    _group(
        "Previous Employment", FieldCategory.EXPERIENCE,
        ("hasExperience", "Has Previous Experience", _CHECK),
        ("expCountry", "Country", _TEXT),
        ("expPeriod", "Period (Years)", _TEXT),
        ("expPosition", "Position", _TEXT),
    ),
    _group(
        "Personal Details", FieldCategory.PERSONAL,
        ("fullName", "Full Name", _TEXT),
        ("refNo", "Ref No", _TEXT),
        ("religion", "Religion", _TEXT),
        ("dob", "Date of Birth", _TEXT),
        ("age", "Age", _TEXT),
        ("pob", "Place of Birth", _TEXT),
        ("maritalStatus", "Marital Status", _TEXT),
        ("children", "Children", _TEXT),
        ("education", "Education", _TEXT),
        ("height", "Height", _TEXT),
        ("weight", "Weight", _TEXT),
    ),
    _group(
        "Photos", FieldCategory.PERSONAL,
        ("photoFace", "Face Photo", _IMAGE),
        ("photoFull", "Full Body", _IMAGE),
        ("photoPassport", "Passport", _IMAGE),
    ),
    _group(
        "Position & Salary", FieldCategory.CUSTOM,
        ("positionApplied", "Applied For", _TEXT),
        ("monthlySalary", "Monthly Salary", _TEXT),
    ),
    _group(
        "Contact Person", FieldCategory.CONTACT,
        ("contactName", "Contact Name", _TEXT),
        ("contactRelation", "Relationship", _TEXT),
        ("contactPhone", "Contact Phone", _TEXT),
        ("contactAddress", "Address", _TEXT),
    ),
    _group(
        "Passport Details", FieldCategory.PASSPORT,
        ("passportNumber", "Passport Number", _TEXT),
        ("issueDate", "Issue Date", _TEXT),
        ("expiryDate", "Expiry Date", _TEXT),
        ("placeOfIssue", "Place of Issue", _TEXT),
    ),
    _group(
        "Language Proficiency", FieldCategory.SKILLS,
        ("lang_english", "English (P/F/F)", _TEXT),
        ("lang_arabic", "Arabic (P/F/F)", _TEXT),
    ),
)

_BY_KEY: dict[str, CatalogEntry] = {e.key: e for g in FIELD_GROUPS for e in g.entries}


def find_entry(key: str) -> Optional[CatalogEntry]:
    return _BY_KEY.get(key)


def search_catalog(term: str, groups: tuple[CatalogGroup, ...] = FIELD_GROUPS) -> list[CatalogGroup]:
    """
    Filter palette groups by a search term.

    Matches case-insensitively against label and key; groups left empty
    are dropped.

    Example:
        >>> [g.title for g in search_catalog("passport")]
        ['Photos', 'Passport Details']
    """
    needle = term.lower()
    result: list[CatalogGroup] = []
    for group in groups:
        entries = tuple(
            e for e in group.entries
            if needle in e.label.lower() or needle in e.key.lower()
        )
        if entries:
            result.append(CatalogGroup(group.title, entries))
    return result
