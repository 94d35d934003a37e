"""Typed dataclasses describing a visual theme.

A :class:`Theme` is pure data: color roles, three font roles, and four shadow
elevations. Renderers never read ambient state; the active theme is passed to
every render and export call and resolves to CSS custom properties through
:meth:`Theme.css_variables`.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from pagekit._constants import CSS_VARIABLE_TEMPLATE

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DEFAULT_COLORS: dict[str, str] = {
    "primary": "#3b82f6",
    "secondary": "#8b5cf6",
    "accent": "#f59e0b",
    "background": "#ffffff",
    "surface": "#f8fafc",
    "text": "#1f2937",
    "text_secondary": "#6b7280",
    "border": "#e5e7eb",
    "success": "#10b981",
    "warning": "#f59e0b",
    "error": "#ef4444",
    "primary_100": "#e0f2fe",
    "primary_200": "#bae6fd",
    "primary_300": "#7dd3fc",
    "secondary_100": "#cffafe",
    "secondary_200": "#a5f3fc",
    "accent_100": "#fef3c7",
    "accent_200": "#fde68a",
}
DEFAULT_FONTS: dict[str, str] = {
    "primary": "Inter",
    "secondary": "Inter",
    "accent": "Inter",
}
DEFAULT_SHADOWS: dict[str, str] = {
    "sm": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
    "md": "0 4px 6px -1px rgb(0 0 0 / 0.1)",
    "lg": "0 10px 15px -3px rgb(0 0 0 / 0.1)",
    "xl": "0 20px 25px -5px rgb(0 0 0 / 0.1)",
}
FONT_FALLBACKS: dict[str, str] = {
    "primary": "sans-serif",
    "secondary": "sans-serif",
    "accent": "serif",
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z0-9])")


def normalize_role(name: str) -> str:
    """Return the snake_case role name for ``name``.

    Stored themes written by older editors use camelCase keys
    (``textSecondary``, ``primary100``); both spellings resolve to the same
    role.

    >>> normalize_role("textSecondary")
    'text_secondary'
    >>> normalize_role("primary100")
    'primary_100'
    """
    return _CAMEL_BOUNDARY.sub("_", name.strip()).replace("-", "_").lower()


def _fill(
    defaults: typ.Mapping[str, str], payload: typ.Mapping[str, object] | None
) -> dict[str, str]:
    """Overlay non-empty ``payload`` values on ``defaults`` by role name."""
    resolved = dict(defaults)
    if not payload:
        return resolved
    for key, value in payload.items():
        role = normalize_role(str(key))
        if role not in resolved or value is None:
            continue
        text = str(value).strip()
        if text:
            resolved[role] = text
    return resolved


@dc.dataclass(frozen=True, slots=True)
class ThemeColors:
    """Named color roles plus precomputed tints of the brand colors."""

    primary: str = DEFAULT_COLORS["primary"]
    secondary: str = DEFAULT_COLORS["secondary"]
    accent: str = DEFAULT_COLORS["accent"]
    background: str = DEFAULT_COLORS["background"]
    surface: str = DEFAULT_COLORS["surface"]
    text: str = DEFAULT_COLORS["text"]
    text_secondary: str = DEFAULT_COLORS["text_secondary"]
    border: str = DEFAULT_COLORS["border"]
    success: str = DEFAULT_COLORS["success"]
    warning: str = DEFAULT_COLORS["warning"]
    error: str = DEFAULT_COLORS["error"]
    primary_100: str = DEFAULT_COLORS["primary_100"]
    primary_200: str = DEFAULT_COLORS["primary_200"]
    primary_300: str = DEFAULT_COLORS["primary_300"]
    secondary_100: str = DEFAULT_COLORS["secondary_100"]
    secondary_200: str = DEFAULT_COLORS["secondary_200"]
    accent_100: str = DEFAULT_COLORS["accent_100"]
    accent_200: str = DEFAULT_COLORS["accent_200"]

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[str, object] | None) -> ThemeColors:
        """Build colors from a partial mapping, defaulting missing roles."""
        return cls(**_fill(DEFAULT_COLORS, payload))


@dc.dataclass(frozen=True, slots=True)
class ThemeFonts:
    """Font-family names for the primary, secondary, and accent roles."""

    primary: str = DEFAULT_FONTS["primary"]
    secondary: str = DEFAULT_FONTS["secondary"]
    accent: str = DEFAULT_FONTS["accent"]

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[str, object] | None) -> ThemeFonts:
        """Build fonts from a partial mapping, defaulting missing roles."""
        return cls(**_fill(DEFAULT_FONTS, payload))

    def families(self) -> list[str]:
        """Return the distinct font families in role order."""
        seen: list[str] = []
        for family in (self.primary, self.secondary, self.accent):
            if family not in seen:
                seen.append(family)
        return seen


@dc.dataclass(frozen=True, slots=True)
class ThemeShadows:
    """Four elevation tokens, each an opaque ``box-shadow`` value."""

    sm: str = DEFAULT_SHADOWS["sm"]
    md: str = DEFAULT_SHADOWS["md"]
    lg: str = DEFAULT_SHADOWS["lg"]
    xl: str = DEFAULT_SHADOWS["xl"]

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[str, object] | None) -> ThemeShadows:
        """Build shadows from a partial mapping, defaulting missing roles."""
        return cls(**_fill(DEFAULT_SHADOWS, payload))


@dc.dataclass(frozen=True, slots=True)
class Theme:
    """A named bundle of color, font, and shadow tokens.

    Attributes
    ----------
    id : str
        Catalog identifier (for example ``"emerald-ocean"``).
    name : str
        Human-friendly theme name.
    colors : ThemeColors
        Color roles and brand tints.
    fonts : ThemeFonts
        Font roles.
    shadows : ThemeShadows
        Elevation tokens.
    """

    id: str = "default"
    name: str = "Default"
    colors: ThemeColors = dc.field(default_factory=ThemeColors)
    fonts: ThemeFonts = dc.field(default_factory=ThemeFonts)
    shadows: ThemeShadows = dc.field(default_factory=ThemeShadows)

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[str, typ.Any] | None) -> Theme:
        """Build a theme from a possibly partial mapping.

        Every missing or empty role falls back to its documented default, so
        a theme saved by an older editor with only a few colors still renders.
        """
        data = payload or {}
        base = cls()
        return cls(
            id=str(data.get("id") or base.id),
            name=str(data.get("name") or base.name),
            colors=ThemeColors.from_mapping(data.get("colors")),
            fonts=ThemeFonts.from_mapping(data.get("fonts")),
            shadows=ThemeShadows.from_mapping(data.get("shadows")),
        )

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a plain mapping suitable for YAML or JSON serialization."""
        return dc.asdict(self)

    def css_variables(self) -> dict[str, str]:
        """Return CSS custom properties named ``--<category>-<role>``.

        The order is stable: colors, then fonts, then shadows, each in field
        declaration order.
        """
        variables = _group_variables("color", self.colors)
        for field in dc.fields(self.fonts):
            family = getattr(self.fonts, field.name)
            name = _variable_name("font", field.name)
            variables[name] = f"'{family}', {FONT_FALLBACKS[field.name]}"
        variables.update(_group_variables("shadow", self.shadows))
        return variables

    def css_root_block(self, indent: str = "    ") -> str:
        """Render the variables as a ``:root`` rule body, one per line."""
        lines = [f"{indent}{name}: {value};" for name, value in self.css_variables().items()]
        return "\n".join(lines)


def _variable_name(category: str, role: str) -> str:
    return CSS_VARIABLE_TEMPLATE.format(category=category, role=role.replace("_", "-"))


def _group_variables(category: str, group: object) -> dict[str, str]:
    return {
        _variable_name(category, field.name): getattr(group, field.name)
        for field in dc.fields(group)  # type: ignore[arg-type]
    }


def iter_color_roles() -> cabc.Iterator[str]:
    """Yield every color role name in declaration order."""
    for field in dc.fields(ThemeColors):
        yield field.name


__all__ = [
    "DEFAULT_COLORS",
    "DEFAULT_FONTS",
    "DEFAULT_SHADOWS",
    "FONT_FALLBACKS",
    "Theme",
    "ThemeColors",
    "ThemeFonts",
    "ThemeShadows",
    "iter_color_roles",
    "normalize_role",
]
