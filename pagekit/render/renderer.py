"""Dual-mode section rendering for the editor canvas.

Every section is shown either as its live display fragment or as its edit
form. Both modes read the same effective content and the same theme; only
the hosting canvas flips a :class:`SectionView` between them.

Examples
--------
>>> from pagekit.models import Section
>>> from pagekit.theme import Theme
>>> view = SectionView(Section(id="s1", type="cta-gradient"))
>>> view.toggle() is RenderMode.EDITING
True
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from pagekit.sections.registry import REGISTRY

from .environment import TemplateRenderer, default_renderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagekit.models import Section
    from pagekit.theme import Theme

    from .editing import EditSession


class RenderMode(enum.Enum):
    """How a section is presented on the canvas."""

    EDITING = "editing"
    DISPLAY = "display"


def render_display(
    section: Section,
    theme: Theme,
    *,
    renderer: TemplateRenderer | None = None,
    year: int | None = None,
) -> str:
    """Render ``section`` in display mode wrapped in its preview frame."""
    active = renderer or default_renderer()
    entry = REGISTRY.get(section.type)
    if entry is None:
        fragment = active.render_fallback(section, mode="display")
    else:
        fragment = entry.render_display(section, theme, renderer=active, year=year)
    return active.render_page(
        "frame.jinja", section=section, fragment=fragment, editing=False
    ).strip()


def render_editor(
    section: Section,
    theme: Theme,
    *,
    renderer: TemplateRenderer | None = None,
    session: EditSession | None = None,
) -> str:
    """Render the edit form for ``section``; unknown types get raw JSON only."""
    active = renderer or default_renderer()
    entry = REGISTRY.get(section.type)
    if entry is None:
        return active.render_editor(section, theme, session=session, structured=False)
    return entry.render_edit(section, theme, renderer=active, session=session)


@dc.dataclass(slots=True)
class SectionView:
    """A section plus the mode the canvas shows it in."""

    section: Section
    mode: RenderMode = RenderMode.DISPLAY

    def edit(self) -> RenderMode:
        self.mode = RenderMode.EDITING
        return self.mode

    def display(self) -> RenderMode:
        self.mode = RenderMode.DISPLAY
        return self.mode

    def toggle(self) -> RenderMode:
        """Flip between editing and display; return the new mode."""
        if self.mode is RenderMode.EDITING:
            return self.display()
        return self.edit()

    def render(
        self,
        theme: Theme,
        *,
        renderer: TemplateRenderer | None = None,
        session: EditSession | None = None,
        year: int | None = None,
    ) -> str:
        """Render the section in its current mode."""
        if self.mode is RenderMode.EDITING:
            return render_editor(
                self.section, theme, renderer=renderer, session=session
            )
        return render_display(self.section, theme, renderer=renderer, year=year)


def render_canvas(
    sections: cabc.Iterable[Section],
    theme: Theme,
    editing: cabc.Iterable[str] = (),
    *,
    title: str = "Preview",
    year: int | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render an editor canvas page for ``sections``.

    Sections whose ids appear in ``editing`` are shown as edit forms; the rest
    as display fragments. The page carries the theme's custom properties so
    fragments look as they will once exported.
    """
    active = renderer or default_renderer()
    editing_ids = set(editing)
    blocks: list[str] = []
    for section in sorted(sections, key=lambda item: item.order):
        view = SectionView(section)
        if section.id in editing_ids:
            view.edit()
        blocks.append(view.render(theme, renderer=active, year=year))
    return active.render_page(
        "canvas.jinja",
        title=title,
        theme=theme,
        css_variables=theme.css_variables(),
        blocks=blocks,
    )


__all__ = [
    "RenderMode",
    "SectionView",
    "render_canvas",
    "render_display",
    "render_editor",
]
