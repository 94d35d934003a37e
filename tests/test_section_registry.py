"""Tests for the section catalog, registry lookup, and dispatch parity."""

from __future__ import annotations

import pytest

from pagekit.exporter import DISPLAY_RENDERERS, EXPORT_GENERATORS, check_parity
from pagekit.render import default_renderer
from pagekit.sections import (
    REGISTRY,
    SECTION_CATALOG,
    catalog_groups,
    default_content,
    display_name,
    family_of,
)
from pagekit.sections.catalog import first_tag_for
from pagekit.sections.defaults import known_families
from pagekit.sections.registry import FAMILY_LAYOUTS, is_known_family

CATALOG_TAGS = [entry.type for entry in SECTION_CATALOG]


def test_every_catalog_tag_is_registered() -> None:
    missing = [tag for tag in CATALOG_TAGS if tag not in REGISTRY]

    assert not missing, f"catalog tags without registry entries: {missing}"
    assert len(REGISTRY) == len(set(CATALOG_TAGS)), "registry should mirror the catalog"


@pytest.mark.parametrize("tag", CATALOG_TAGS)
def test_registered_layout_macro_exists(tag: str) -> None:
    entry = REGISTRY.get(tag)
    assert entry is not None

    module = default_renderer().env.get_template(entry.template_name).module

    assert callable(getattr(module, entry.layout, None)), (
        f"{entry.template_name} lacks macro {entry.layout!r} for {tag}"
    )


@pytest.mark.parametrize("family", sorted(FAMILY_LAYOUTS))
def test_every_family_has_default_content(family: str) -> None:
    assert family in known_families(), f"{family} has no defaults entry"
    assert default_content(f"{family}-anything"), "family default should not be empty"


def test_display_and_export_tables_agree() -> None:
    assert set(DISPLAY_RENDERERS) == set(EXPORT_GENERATORS)
    assert check_parity() == {"missing_export": [], "missing_display": []}


def test_check_parity_reports_both_directions() -> None:
    report = check_parity({"a": 1, "b": 2}, {"b": 2, "c": 3})

    assert report == {"missing_export": ["a"], "missing_display": ["c"]}


def test_unlisted_tag_in_known_family_uses_family_layout() -> None:
    entry = REGISTRY.get("services-unlisted")

    assert entry is not None, "known family should resolve"
    assert entry.layout == "grid"
    assert entry.template_name == "sections/services.jinja"
    assert "services-unlisted" not in REGISTRY, "fallback entries are not registered"
    assert is_known_family("services-unlisted")


def test_unknown_family_has_no_entry() -> None:
    assert REGISTRY.get("mystery-widget") is None
    assert not is_known_family("mystery-widget")
    assert default_content("mystery-widget") == {}


def test_tag_specific_defaults_replace_family_default() -> None:
    testimonials = default_content("slider-testimonials")
    features = default_content("slider-features")

    assert testimonials["slides"], "testimonial slider ships sample slides"
    assert testimonials != features


def test_variant_preset_overlays_family_default() -> None:
    hero = default_content("hero-video")

    assert hero["videoUrl"].startswith("https://"), "video preset should apply"
    assert hero["buttonText"] == default_content("hero-split")["buttonText"]


def test_default_content_returns_fresh_copies() -> None:
    first = default_content("pricing-cards")
    first["title"] = "Changed"

    assert default_content("pricing-cards")["title"] != "Changed"


def test_catalog_groups_preserve_picker_order() -> None:
    groups = catalog_groups()

    labels = list(groups)
    assert labels[0] == "Header Sections"
    assert labels[1] == "Hero Sections"
    assert sum(len(entries) for entries in groups.values()) == len(SECTION_CATALOG)
    assert all(entry.group_label == label for label, entries in groups.items() for entry in entries)


def test_catalog_helpers() -> None:
    assert family_of("footer-newsletter") == "footer"
    assert first_tag_for("pricing") == "pricing-cards"
    assert first_tag_for("mystery") is None
    assert display_name("cta-gradient") != "Cta Gradient", "catalog names win"
    assert display_name("mystery-widget") == "Mystery Widget"
