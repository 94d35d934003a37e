"""Fixed theme and font-collection catalogs plus the theme writers.

The theme customizer picks a theme from :data:`THEME_CATALOG`, optionally
swaps in a font collection from :data:`FONT_COLLECTIONS`, and then edits
individual roles. :func:`update_theme` and :func:`apply_custom_colors` are
the only writers; both return a new :class:`~pagekit.theme.models.Theme`.

Examples
--------
>>> from pagekit.theme import apply_custom_colors, get_theme
>>> theme = apply_custom_colors(get_theme("ocean-blue"), primary="#000000")
>>> theme.colors.primary_100
'#e6e6e6'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from pagekit.errors import UnknownThemeError

from .models import Theme, ThemeColors, ThemeFonts, ThemeShadows

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Share of white mixed into a base color for each tint step.
TINT_STEPS: dict[str, float] = {"100": 0.9, "200": 0.75, "300": 0.6}
TINTED_ROLES: dict[str, tuple[str, ...]] = {
    "primary": ("100", "200", "300"),
    "secondary": ("100", "200"),
    "accent": ("100", "200"),
}


@dc.dataclass(frozen=True, slots=True)
class FontCollection:
    """A named trio of font families offered by the theme customizer."""

    id: str
    name: str
    fonts: ThemeFonts
    description: str


def tint(color: str, amount: float) -> str | None:
    """Mix ``color`` with white; return ``None`` when it is not a hex color.

    >>> tint("#000000", 0.5)
    '#808080'
    >>> tint("rgb(0 0 0)", 0.5) is None
    True
    """
    if not _HEX_COLOR.match(color):
        return None
    digits = color[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    channels = [int(digits[i : i + 2], 16) for i in (0, 2, 4)]
    mixed = [round(value + (255 - value) * amount) for value in channels]
    return "#" + "".join(f"{value:02x}" for value in mixed)


def _tints_for(role: str, color: str) -> dict[str, str]:
    tints: dict[str, str] = {}
    for step in TINTED_ROLES.get(role, ()):
        value = tint(color, TINT_STEPS[step])
        if value is not None:
            tints[f"{role}_{step}"] = value
    return tints


def _scheme(
    theme_id: str,
    name: str,
    primary: str,
    secondary: str,
    accent: str,
    fonts: ThemeFonts | None = None,
) -> Theme:
    colors: dict[str, str] = {"primary": primary, "secondary": secondary, "accent": accent}
    for role in ("primary", "secondary", "accent"):
        colors.update(_tints_for(role, colors[role]))
    return Theme(
        id=theme_id,
        name=name,
        colors=ThemeColors.from_mapping(colors),
        fonts=fonts or ThemeFonts(),
        shadows=ThemeShadows(),
    )


FONT_COLLECTIONS: list[FontCollection] = [
    FontCollection(
        id="modern",
        name="Modern",
        fonts=ThemeFonts(primary="Inter", secondary="Inter", accent="Poppins"),
        description="Modern and clean",
    ),
    FontCollection(
        id="friendly",
        name="Friendly",
        fonts=ThemeFonts(primary="Poppins", secondary="Nunito", accent="Poppins"),
        description="Friendly and rounded",
    ),
    FontCollection(
        id="professional",
        name="Professional",
        fonts=ThemeFonts(primary="Roboto", secondary="Open Sans", accent="Roboto"),
        description="Professional and readable",
    ),
    FontCollection(
        id="elegant",
        name="Elegant",
        fonts=ThemeFonts(
            primary="Montserrat", secondary="Lato", accent="Playfair Display"
        ),
        description="Elegant and stylish",
    ),
    FontCollection(
        id="technical",
        name="Technical",
        fonts=ThemeFonts(
            primary="Source Sans Pro", secondary="Source Sans Pro", accent="Inter"
        ),
        description="Technical and clear",
    ),
]

THEME_CATALOG: list[Theme] = [
    _scheme("emerald-ocean", "Emerald Ocean", "#10b981", "#06b6d4", "#f59e0b"),
    _scheme("purple-sunset", "Purple Sunset", "#8b5cf6", "#ec4899", "#f59e0b"),
    _scheme("orange-fire", "Orange Fire", "#f59e0b", "#ef4444", "#8b5cf6"),
    _scheme("blue-sky", "Blue Sky", "#3b82f6", "#8b5cf6", "#f59e0b"),
    _scheme("forest-green", "Forest Green", "#059669", "#10b981", "#f97316"),
    _scheme("royal-purple", "Royal Purple", "#7c3aed", "#a855f7", "#facc15"),
    _scheme("sunset-orange", "Sunset Orange", "#ea580c", "#f97316", "#0ea5e9"),
    _scheme("ocean-blue", "Ocean Blue", "#0ea5e9", "#06b6d4", "#f59e0b"),
]
DEFAULT_THEME_ID = "blue-sky"


def get_theme(theme_id: str) -> Theme:
    """Return the catalog theme with ``theme_id``.

    Raises
    ------
    UnknownThemeError
        If no catalog theme has that id.
    """
    for theme in THEME_CATALOG:
        if theme.id == theme_id:
            return theme
    raise UnknownThemeError("theme", theme_id, (theme.id for theme in THEME_CATALOG))


def get_font_collection(collection_id: str) -> FontCollection:
    """Return the font collection with ``collection_id``.

    Raises
    ------
    UnknownThemeError
        If no font collection has that id.
    """
    for collection in FONT_COLLECTIONS:
        if collection.id == collection_id:
            return collection
    raise UnknownThemeError(
        "font collection",
        collection_id,
        (collection.id for collection in FONT_COLLECTIONS),
    )


def update_theme(
    theme: Theme,
    *,
    colors: typ.Mapping[str, object] | None = None,
    fonts: typ.Mapping[str, object] | None = None,
    shadows: typ.Mapping[str, object] | None = None,
    name: str | None = None,
) -> Theme:
    """Return a copy of ``theme`` with individual roles replaced.

    Tints are left as given; use :func:`apply_custom_colors` to change a
    brand color together with its tints.
    """
    return Theme(
        id=theme.id,
        name=name or theme.name,
        colors=ThemeColors.from_mapping({**dc.asdict(theme.colors), **(colors or {})}),
        fonts=ThemeFonts.from_mapping({**dc.asdict(theme.fonts), **(fonts or {})}),
        shadows=ThemeShadows.from_mapping(
            {**dc.asdict(theme.shadows), **(shadows or {})}
        ),
    )


def apply_custom_colors(
    theme: Theme,
    *,
    primary: str | None = None,
    secondary: str | None = None,
    accent: str | None = None,
) -> Theme:
    """Return ``theme`` with new brand colors and recomputed tints.

    Colors that are not hex values are applied as-is and keep their previous
    tints.
    """
    changes: dict[str, str] = {}
    for role, value in (("primary", primary), ("secondary", secondary), ("accent", accent)):
        if not value:
            continue
        changes[role] = value
        changes.update(_tints_for(role, value))
    if not changes:
        return theme
    return update_theme(theme, colors=changes)


def apply_font_collection(theme: Theme, collection_id: str) -> Theme:
    """Return ``theme`` using the fonts of the named collection."""
    collection = get_font_collection(collection_id)
    return dc.replace(theme, fonts=collection.fonts)


__all__ = [
    "DEFAULT_THEME_ID",
    "FONT_COLLECTIONS",
    "THEME_CATALOG",
    "FontCollection",
    "apply_custom_colors",
    "apply_font_collection",
    "get_font_collection",
    "get_theme",
    "tint",
    "update_theme",
]
