"""Jinja environment shared by the live renderer and the exporter.

Section markup lives in ``pagekit/templates/sections/<family>.jinja`` as one
macro per layout. :class:`TemplateRenderer` loads those macros and calls them
with the section content and a :class:`RenderContext`; the context's ``mode``
(``"display"`` or ``"export"``) is the only difference between a preview
fragment and the exported markup.
"""

from __future__ import annotations

import dataclasses as dc
import functools
import json
import logging
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError

from pagekit._constants import (
    FONT_AWESOME_URL,
    PLACEHOLDER_MESSAGE,
    TAILWIND_CDN_URL,
)
from pagekit.sections.catalog import display_name

from .fields import describe_fields

if typ.TYPE_CHECKING:
    from pagekit.models import Section
    from pagekit.sections.registry import SectionType
    from pagekit.theme import Theme

logger = logging.getLogger(__name__)

_UNSAFE_ID = re.compile(r"[^A-Za-z0-9_-]+")
_CSS_BREAKOUT = re.compile(r"[<>{};]")
_YOUTUBE_WATCH = re.compile(r"youtube\.com/watch\?v=([A-Za-z0-9_-]+)")
_YOUTUBE_SHORT = re.compile(r"youtu\.be/([A-Za-z0-9_-]+)")

# Editor icon names mapped to Font Awesome classes used in rendered markup.
ICON_CLASSES: dict[str, str] = {
    "zap": "fas fa-bolt",
    "shield": "fas fa-shield-alt",
    "users": "fas fa-users",
    "smartphone": "fas fa-mobile-alt",
    "palette": "fas fa-palette",
    "barchart": "fas fa-chart-bar",
    "heart": "fas fa-heart",
    "star": "fas fa-star",
    "globe": "fas fa-globe",
    "code": "fas fa-code",
    "rocket": "fas fa-rocket",
    "check": "fas fa-check",
    "mail": "fas fa-envelope",
    "phone": "fas fa-phone",
    "mappin": "fas fa-map-marker-alt",
    "clock": "fas fa-clock",
    "award": "fas fa-award",
    "target": "fas fa-bullseye",
}
SOCIAL_ICONS: dict[str, str] = {
    "facebook": "fab fa-facebook-f",
    "twitter": "fab fa-twitter",
    "instagram": "fab fa-instagram",
    "linkedin": "fab fa-linkedin-in",
    "youtube": "fab fa-youtube",
    "github": "fab fa-github",
}


def youtube_embed(url: object) -> str:
    """Return the embeddable form of a YouTube watch or short link.

    >>> youtube_embed("https://www.youtube.com/watch?v=abc123")
    'https://www.youtube.com/embed/abc123'
    >>> youtube_embed("https://example.com/video.mp4")
    'https://example.com/video.mp4'
    """
    text = str(url or "")
    for pattern in (_YOUTUBE_WATCH, _YOUTUBE_SHORT):
        match = pattern.search(text)
        if match:
            return f"https://www.youtube.com/embed/{match.group(1)}"
    return text


def digits_only(value: object) -> str:
    """Strip everything but digits, defaulting to ``"0"``.

    >>> digits_only("10,000+")
    '10000'
    """
    return re.sub(r"\D", "", str(value or "")) or "0"


def icon_class(name: object) -> str:
    """Map an editor icon name to a Font Awesome class list."""
    key = str(name or "").replace("-", "").replace("_", "").lower()
    return ICON_CLASSES.get(key, "fas fa-star")


def social_icon(platform: object) -> str:
    """Map a social platform name to a Font Awesome brand icon."""
    return SOCIAL_ICONS.get(str(platform or "").lower(), "fas fa-link")


def css_value(value: object) -> str:
    """Drop characters that could end a declaration or the style element.

    >>> css_value("'Inter', sans-serif; }")
    "'Inter', sans-serif "
    """
    return _CSS_BREAKOUT.sub("", str(value))


def safe_id(value: object) -> str:
    """Return ``value`` reduced to characters valid in an HTML id."""
    return _UNSAFE_ID.sub("-", str(value)).strip("-") or "section"


@dc.dataclass(frozen=True, slots=True)
class RenderContext:
    """Values every section macro receives beside its content."""

    theme: Theme
    mode: str = "display"
    section_id: str = ""
    tag: str = ""
    year: int | None = None

    @property
    def export(self) -> bool:
        return self.mode == "export"

    def dom_id(self, *parts: object) -> str:
        """Return an element id scoped to this section."""
        scoped = (*parts[:1], self.section_id, *parts[1:])
        return "-".join(safe_id(part) for part in scoped)


class TemplateRenderer:
    """Render section macros, editors, and page shells from the templates."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Configure the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``sections/*.jinja`` and the page templates.
            Defaults to ``pagekit/templates``.
        """
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["youtube_embed"] = youtube_embed
        self.env.filters["digits"] = digits_only
        self.env.filters["icon"] = icon_class
        self.env.filters["social_icon"] = social_icon
        self.env.filters["safe_id"] = safe_id
        self.env.filters["css_value"] = css_value
        self.env.globals["placeholder_message"] = PLACEHOLDER_MESSAGE
        self.env.globals["tailwind_url"] = TAILWIND_CDN_URL
        self.env.globals["font_awesome_url"] = FONT_AWESOME_URL

    def render_fragment(
        self,
        entry: SectionType,
        section: Section,
        theme: Theme,
        *,
        mode: str,
        year: int | None = None,
    ) -> str:
        """Render the layout macro of ``entry`` for ``section``.

        Content whose shape the layout cannot render (a number where a list
        of items is expected, say) yields the placeholder fragment instead,
        so one broken section never aborts a preview or an export.
        """
        module = self.env.get_template(entry.template_name).module
        macro = getattr(module, entry.layout)
        context = RenderContext(
            theme=theme, mode=mode, section_id=section.id, tag=section.type, year=year
        )
        try:
            return str(macro(section.content, context)).strip()
        except (TypeError, ValueError, TemplateError) as exc:
            logger.warning(
                "Cannot render section %s of type %r (%s); writing placeholder",
                section.id,
                section.type,
                exc,
            )
            return self.render_fallback(section, mode=mode, broken=True)

    def render_fallback(
        self, section: Section, *, mode: str, broken: bool = False
    ) -> str:
        """Render the generic preview or the placeholder fragment.

        Unknown types get the generic preview in display mode and the
        placeholder in export mode; ``broken`` content always gets the
        placeholder.
        """
        module = self.env.get_template("sections/_fallback.jinja").module
        macro = module.placeholder if broken or mode == "export" else module.preview
        title = str(section.content.get("title") or display_name(section.type))
        return str(macro(section, title, display_name(section.type))).strip()

    def render_editor(
        self,
        section: Section,
        theme: Theme,
        *,
        session: object | None = None,
        structured: bool = True,
    ) -> str:
        """Render the edit form for ``section``.

        ``structured=False`` renders only the raw JSON editor, which is what
        unknown types receive.
        """
        template = self.env.get_template("editor.jinja")
        html = template.render(
            section=section,
            theme=theme,
            fields=describe_fields(section.content) if structured else [],
            structured=structured,
            raw_json=json.dumps(section.content, indent=2, ensure_ascii=False),
            title=display_name(section.type),
            error=getattr(session, "error", None),
            expanded=getattr(session, "expanded", {}),
            selected=getattr(session, "selected", {}),
        )
        return html.strip()

    def render_page(self, template_name: str, **context: typ.Any) -> str:
        """Render a full page template and ensure a trailing newline."""
        html = self.env.get_template(template_name).render(**context)
        if not html.endswith("\n"):
            html = f"{html}\n"
        return html


@functools.cache
def default_renderer() -> TemplateRenderer:
    """Return the shared renderer over the packaged templates."""
    return TemplateRenderer()


__all__ = [
    "ICON_CLASSES",
    "SOCIAL_ICONS",
    "RenderContext",
    "TemplateRenderer",
    "css_value",
    "default_renderer",
    "digits_only",
    "icon_class",
    "safe_id",
    "social_icon",
    "youtube_embed",
]
