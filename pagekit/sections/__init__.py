"""Section type registry: defaults, picker catalog, and render dispatch."""

from .catalog import (
    SECTION_CATALOG,
    CatalogEntry,
    catalog_entry,
    catalog_groups,
    display_name,
)
from .defaults import default_content, family_of
from .registry import REGISTRY, SectionRegistry, SectionType

__all__ = [
    "REGISTRY",
    "SECTION_CATALOG",
    "CatalogEntry",
    "SectionRegistry",
    "SectionType",
    "catalog_entry",
    "catalog_groups",
    "default_content",
    "display_name",
    "family_of",
]
