"""Tests for theme tokens, the catalog, and CSS variable output."""

from __future__ import annotations

import dataclasses as dc

import pytest

from pagekit.errors import UnknownThemeError
from pagekit.theme import (
    FONT_COLLECTIONS,
    THEME_CATALOG,
    Theme,
    apply_custom_colors,
    apply_font_collection,
    get_font_collection,
    get_theme,
    update_theme,
)
from pagekit.theme.catalog import tint
from pagekit.theme.models import normalize_role


def test_catalog_ids_are_unique() -> None:
    theme_ids = [theme.id for theme in THEME_CATALOG]
    collection_ids = [collection.id for collection in FONT_COLLECTIONS]

    assert len(theme_ids) == len(set(theme_ids)), "theme ids must be unique"
    assert len(collection_ids) == len(set(collection_ids))
    assert "blue-sky" in theme_ids


def test_unknown_ids_raise_with_known_choices() -> None:
    with pytest.raises(UnknownThemeError) as excinfo:
        get_theme("neon")
    assert isinstance(excinfo.value, KeyError), "should remain a KeyError"
    assert "blue-sky" in str(excinfo.value), "message should list known themes"

    with pytest.raises(UnknownThemeError, match="font collection"):
        get_font_collection("comic")


def test_partial_theme_mapping_falls_back_per_role() -> None:
    theme = Theme.from_mapping(
        {"id": "mine", "colors": {"primary": "#111111", "textSecondary": "#222222", "border": ""}}
    )

    assert theme.id == "mine"
    assert theme.colors.primary == "#111111"
    assert theme.colors.text_secondary == "#222222", "camelCase roles are accepted"
    assert theme.colors.border == "#e5e7eb", "empty values use the default"
    assert theme.fonts.primary == "Inter"
    assert theme.shadows.sm.startswith("0 1px")


def test_normalize_role_handles_camel_and_kebab_case() -> None:
    assert normalize_role("textSecondary") == "text_secondary"
    assert normalize_role("primary100") == "primary_100"
    assert normalize_role("text-secondary") == "text_secondary"


def test_tint_mixes_with_white() -> None:
    assert tint("#000000", 0.5) == "#808080"
    assert tint("#fff", 0.3) == "#ffffff", "short hex is expanded"
    assert tint("red", 0.5) is None


def test_custom_brand_color_recomputes_tints() -> None:
    theme = apply_custom_colors(get_theme("ocean-blue"), primary="#000000")

    assert theme.colors.primary == "#000000"
    assert theme.colors.primary_100 == "#e6e6e6"
    assert theme.colors.primary_200 == "#bfbfbf"
    assert theme.colors.primary_300 == "#999999"
    assert theme.colors.secondary == get_theme("ocean-blue").colors.secondary


def test_non_hex_brand_color_keeps_previous_tints() -> None:
    base = get_theme("blue-sky")

    theme = apply_custom_colors(base, accent="rebeccapurple")

    assert theme.colors.accent == "rebeccapurple"
    assert theme.colors.accent_100 == base.colors.accent_100


def test_theme_updates_return_new_instances() -> None:
    base = get_theme("blue-sky")

    updated = update_theme(base, colors={"background": "#000000"}, shadows={"xl": "none"})

    assert updated is not base
    assert base.colors.background == "#ffffff", "catalog theme must not change"
    assert updated.colors.background == "#000000"
    assert updated.shadows.xl == "none"
    assert apply_custom_colors(base) is base, "no changes returns the same theme"
    with pytest.raises(dc.FrozenInstanceError):
        base.colors.primary = "#000000"  # type: ignore[misc]


def test_font_collection_replaces_all_font_roles() -> None:
    theme = apply_font_collection(get_theme("blue-sky"), "professional")

    assert theme.fonts.families() == ["Roboto", "Open Sans"]
    assert theme.colors == get_theme("blue-sky").colors


def test_css_variables_follow_naming_convention() -> None:
    theme = get_theme("emerald-ocean")

    variables = theme.css_variables()

    assert variables["--color-primary"] == "#10b981"
    assert variables["--color-text-secondary"] == theme.colors.text_secondary
    assert variables["--color-primary-100"] == theme.colors.primary_100
    assert variables["--font-primary"] == "'Inter', sans-serif"
    assert variables["--font-accent"] == "'Inter', serif"
    assert variables["--shadow-lg"] == theme.shadows.lg
    assert len(variables) == len(dc.fields(theme.colors)) + 3 + 4
    assert all(name.startswith("--") for name in variables)


def test_css_root_block_is_stable() -> None:
    theme = get_theme("purple-sunset")

    block = theme.css_root_block(indent="  ")

    assert block == theme.css_root_block(indent="  "), "output must be deterministic"
    assert block.splitlines()[0] == "  --color-primary: #8b5cf6;"
