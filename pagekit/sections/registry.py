"""Registry mapping section tags to defaults and renderers.

Each :class:`SectionType` bundles the four capabilities a tag needs: default
content, an edit form, a display fragment, and an export fragment. Display
and export render the same Jinja macro (``sections/<family>.jinja``, macro
named after the layout) and differ only in the render mode, so the live
preview and the exported document cannot drift apart.

Examples
--------
>>> REGISTRY.get("hero-split").layout
'split'
>>> REGISTRY.get("hero-unlisted").layout
'split'
>>> REGISTRY.get("mystery-widget") is None
True
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .catalog import SECTION_CATALOG
from .defaults import default_content, family_of, known_families

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagekit.models import Section
    from pagekit.render.environment import TemplateRenderer
    from pagekit.theme import Theme

# Layout used by a family when the tag has no dedicated layout.
FAMILY_LAYOUTS: dict[str, str] = {
    "header": "classic",
    "hero": "split",
    "slider": "features",
    "about": "story",
    "services": "grid",
    "features": "grid",
    "testimonials": "grid",
    "portfolio": "grid",
    "pricing": "cards",
    "contact": "form",
    "footer": "comprehensive",
    "faq": "accordion",
    "timeline": "vertical",
    "stats": "grid",
    "newsletter": "centered",
    "cta": "gradient",
    "gallery": "grid",
}

TAG_LAYOUTS: dict[str, str] = {
    "header-centered": "centered",
    "header-minimal": "minimal",
    "hero-centered": "centered",
    "hero-video": "video",
    "hero-gradient": "gradient",
    "slider-testimonials": "testimonials",
    "slider-portfolio": "portfolio",
    "about-team": "team",
    "about-values": "values",
    "features-comparison": "comparison",
    "features-showcase": "showcase",
    "portfolio-masonry": "masonry",
    "portfolio-slider": "slider",
    "contact-cta": "cta",
    "footer-minimal": "minimal",
    "footer-newsletter": "newsletter",
    "footer-social": "social",
    "footer-corporate": "corporate",
    "cta-image": "image",
}


def _renderer(renderer: TemplateRenderer | None) -> TemplateRenderer:
    if renderer is not None:
        return renderer
    from pagekit.render.environment import default_renderer

    return default_renderer()


@dc.dataclass(frozen=True, slots=True)
class SectionType:
    """Capabilities registered for one section tag.

    Attributes
    ----------
    tag : str
        Registry tag, for example ``"cta-gradient"``.
    family : str
        Tag prefix selecting the default-content shape and template file.
    layout : str
        Macro name inside ``sections/<family>.jinja``.
    """

    tag: str
    family: str
    layout: str

    @property
    def template_name(self) -> str:
        """Return the template file holding this type's macros."""
        return f"sections/{self.family}.jinja"

    def default_content(self) -> dict[str, typ.Any]:
        """Return fresh default content for this tag."""
        return default_content(self.tag)

    def render_display(
        self,
        section: Section,
        theme: Theme,
        *,
        renderer: TemplateRenderer | None = None,
        year: int | None = None,
    ) -> str:
        """Render the live preview fragment for ``section``."""
        return _renderer(renderer).render_fragment(
            self, section, theme, mode="display", year=year
        )

    def render_export(
        self,
        section: Section,
        theme: Theme,
        *,
        renderer: TemplateRenderer | None = None,
        year: int | None = None,
    ) -> str:
        """Render the static markup written into the exported document."""
        return _renderer(renderer).render_fragment(
            self, section, theme, mode="export", year=year
        )

    def render_edit(
        self,
        section: Section,
        theme: Theme,
        *,
        renderer: TemplateRenderer | None = None,
        session: object | None = None,
    ) -> str:
        """Render the structured edit form for ``section``."""
        return _renderer(renderer).render_editor(section, theme, session=session)


class SectionRegistry:
    """Lookup of :class:`SectionType` entries by tag with family fallback."""

    def __init__(self, entries: cabc.Iterable[SectionType] = ()) -> None:
        self._entries: dict[str, SectionType] = {}
        for entry in entries:
            self.register(entry)

    def register(self, entry: SectionType) -> None:
        """Add or replace the entry for ``entry.tag``."""
        self._entries[entry.tag] = entry

    def get(self, tag: str) -> SectionType | None:
        """Return the entry for ``tag``.

        Tags missing from the registry fall back to their family's default
        layout when the family is known; otherwise ``None`` is returned and
        callers use the generic preview, editor, or placeholder.
        """
        entry = self._entries.get(tag)
        if entry is not None:
            return entry
        family = family_of(tag)
        layout = FAMILY_LAYOUTS.get(family)
        if layout is None:
            return None
        return SectionType(tag=tag, family=family, layout=layout)

    def __contains__(self, tag: object) -> bool:
        return tag in self._entries

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def tags(self) -> list[str]:
        """Return the explicitly registered tags in registration order."""
        return list(self._entries)

    def items(self) -> list[tuple[str, SectionType]]:
        """Return ``(tag, entry)`` pairs in registration order."""
        return list(self._entries.items())


def _build_registry() -> SectionRegistry:
    registry = SectionRegistry()
    for entry in SECTION_CATALOG:
        family = family_of(entry.type)
        layout = TAG_LAYOUTS.get(entry.type, FAMILY_LAYOUTS[family])
        registry.register(SectionType(tag=entry.type, family=family, layout=layout))
    return registry


REGISTRY = _build_registry()


def is_known_family(tag: str) -> bool:
    """Return whether ``tag`` belongs to a family with defaults and macros."""
    family = family_of(tag)
    return family in FAMILY_LAYOUTS and family in known_families()


__all__ = [
    "FAMILY_LAYOUTS",
    "REGISTRY",
    "TAG_LAYOUTS",
    "SectionRegistry",
    "SectionType",
    "is_known_family",
]
