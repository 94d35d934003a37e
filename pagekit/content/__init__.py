"""Content layering: the merge resolver and legacy template placements."""

from .legacy import PlacedSection, SectionTemplate, resolve_placements
from .merge import get_path, merge, merge_layers, parse_layer, set_path

__all__ = [
    "PlacedSection",
    "SectionTemplate",
    "get_path",
    "merge",
    "merge_layers",
    "parse_layer",
    "resolve_placements",
    "set_path",
]
