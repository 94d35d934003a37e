"""Resolve template-plus-variant placements into sections.

Older projects store a page as placements of shared section templates. Each
template carries serialized default data and named variants; a placement picks
a template, optionally a variant, and adds the user's custom data. The
effective content is ``merge(default_data, variant_data, custom_data)``.

Examples
--------
>>> template = SectionTemplate(
...     id="t1",
...     name="Hero",
...     category="hero",
...     default_data='{"title": "Hello", "subtitle": "World"}',
...     variants={"Bold": '{"title": "HELLO"}'},
... )
>>> placed = PlacedSection(id="p1", template_id="t1", variant="Bold",
...                        custom_data={"subtitle": "There"})
>>> resolve_placements([template], [placed])[0].content
{'title': 'HELLO', 'subtitle': 'There'}
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from pagekit.models import Section, densify
from pagekit.sections.catalog import first_tag_for

from .merge import RawLayer, merge, parse_layer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class SectionTemplate:
    """A reusable section definition with named variants."""

    id: str
    name: str
    category: str
    default_data: RawLayer = None
    variants: dict[str, RawLayer] = dc.field(default_factory=dict)
    type: str | None = None

    @property
    def tag(self) -> str:
        """Return the registry tag used to render this template."""
        return self.type or first_tag_for(self.category) or self.category

    def variant_layer(self, label: str | None) -> dict[str, typ.Any]:
        """Return the parsed variant data for ``label`` (empty when unknown)."""
        if not label:
            return {}
        if label not in self.variants:
            logger.warning(
                "Template '%s' has no variant '%s'; using defaults", self.id, label
            )
            return {}
        return parse_layer(self.variants[label])


@dc.dataclass(slots=True)
class PlacedSection:
    """A template placed on a page with optional variant and custom data."""

    id: str
    template_id: str
    variant: str | None = None
    custom_data: RawLayer = None
    order: int = 0


def resolve_placement(template: SectionTemplate, placed: PlacedSection) -> Section:
    """Return the section produced by one placement of ``template``."""
    content = merge(
        parse_layer(template.default_data),
        template.variant_layer(placed.variant),
        parse_layer(placed.custom_data),
    )
    return Section(id=placed.id, type=template.tag, content=content, order=placed.order)


def resolve_placements(
    templates: cabc.Iterable[SectionTemplate],
    placements: cabc.Iterable[PlacedSection],
) -> list[Section]:
    """Resolve ``placements`` against ``templates`` into densely ordered sections.

    Placements that reference a missing template are skipped with a warning.
    """
    by_id = {template.id: template for template in templates}
    sections: list[Section] = []
    for placed in placements:
        template = by_id.get(placed.template_id)
        if template is None:
            logger.warning(
                "Skipping placement '%s': unknown template '%s'",
                placed.id,
                placed.template_id,
            )
            continue
        sections.append(resolve_placement(template, placed))
    return densify(sections)


__all__ = [
    "PlacedSection",
    "SectionTemplate",
    "resolve_placement",
    "resolve_placements",
]
