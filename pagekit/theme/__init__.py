"""Theme tokens and the fixed theme catalog.

Examples
--------
>>> from pagekit.theme import Theme
>>> Theme.from_mapping({"colors": {"primary": "#111111"}}).colors.border
'#e5e7eb'
"""

from .catalog import (
    DEFAULT_THEME_ID,
    FONT_COLLECTIONS,
    THEME_CATALOG,
    FontCollection,
    apply_custom_colors,
    apply_font_collection,
    get_font_collection,
    get_theme,
    update_theme,
)
from .models import Theme, ThemeColors, ThemeFonts, ThemeShadows

__all__ = [
    "DEFAULT_THEME_ID",
    "FONT_COLLECTIONS",
    "THEME_CATALOG",
    "FontCollection",
    "Theme",
    "ThemeColors",
    "ThemeFonts",
    "ThemeShadows",
    "apply_custom_colors",
    "apply_font_collection",
    "get_font_collection",
    "get_theme",
    "update_theme",
]
