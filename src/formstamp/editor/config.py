"""
Module: editor.config

Purpose:
    Explicit settings for an editing session: owner scope, enabled layout
    families, defaults, the persistence boundary and the warning channel.
    Passed in rather than looked up from a surrounding session.

Key Classes:
    - EditorConfig: Immutable editor configuration
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Mapping, Optional

from formstamp.core.models.templates import DEFAULT_COUNTRY, DEFAULT_TEMPLATE_NAME

if TYPE_CHECKING:
    from formstamp.storage.repository import TemplateRepository

DEFAULT_COUNTRIES: Mapping[str, bool] = MappingProxyType({
    "kuwait": True,
    "saudi": True,
    "jordan": True,
    "oman": True,
    "uae": True,
    "qatar": True,
    "bahrain": True,
})


@dataclass(frozen=True)
class EditorConfig:
    """
    Configuration for an editor session (immutable).

    Attributes:
        owner_id: Owner scope stamped on saved templates
        enabled_countries: Layout family -> enabled flag
        default_country: Family for new templates
        default_template_name: Name for new templates
        repository: Where save() stores templates (None = not persisted)
        on_warning: Receives user-facing warning messages

    Example:
        >>> config = EditorConfig(owner_id="u1", enabled_countries={"kuwait": True, "qatar": False})
        >>> config.is_country_enabled("qatar")
        False
    """

    owner_id: Optional[str] = None
    enabled_countries: Mapping[str, bool] = field(default_factory=lambda: dict(DEFAULT_COUNTRIES))
    default_country: str = DEFAULT_COUNTRY
    default_template_name: str = DEFAULT_TEMPLATE_NAME
    repository: Optional["TemplateRepository"] = None
    on_warning: Optional[Callable[[str], None]] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.is_country_enabled(self.default_country):
            raise ValueError(f"default_country is not enabled: {self.default_country!r}")

    def is_country_enabled(self, country: str) -> bool:
        return bool(self.enabled_countries.get(country, False))

    @property
    def countries(self) -> list[str]:
        """Enabled layout families in declaration order."""
        return [c for c, enabled in self.enabled_countries.items() if enabled]
