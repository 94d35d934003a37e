"""Default content for section families and per-tag variant presets.

The data lives in ``defaults.yaml`` beside this module and is parsed once.
Every accessor returns a fresh deep copy.

Examples
--------
>>> content = default_content("hero-split")
>>> content["buttonText"]
'Get Started Free'
>>> default_content("mystery-widget")
{}
"""

from __future__ import annotations

import copy
import functools
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from pagekit.content.merge import merge

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"


def family_of(tag: str) -> str:
    """Return the family prefix of ``tag``.

    >>> family_of("hero-split")
    'hero'
    >>> family_of("gallery")
    'gallery'
    """
    return tag.split("-", 1)[0]


@functools.cache
def _load_defaults() -> dict[str, dict[str, typ.Any]]:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with DEFAULTS_PATH.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    return {
        "families": dict(loaded.get("families") or {}),
        "tags": dict(loaded.get("tags") or {}),
        "variants": dict(loaded.get("variants") or {}),
    }


def known_families() -> list[str]:
    """Return the families that have default content, in file order."""
    return list(_load_defaults()["families"])


def family_default(family: str) -> dict[str, typ.Any]:
    """Return the default content for ``family`` or ``{}`` when unknown."""
    return copy.deepcopy(_load_defaults()["families"].get(family, {}))


def variant_preset(tag: str) -> dict[str, typ.Any]:
    """Return the preset overlaid on the family default for ``tag``."""
    return copy.deepcopy(_load_defaults()["variants"].get(tag, {}))


def default_content(tag: str) -> dict[str, typ.Any]:
    """Return the initial content for a new section of type ``tag``.

    Some tags (``slider-testimonials``, ``slider-portfolio``) carry their own
    complete default; the rest start from the family default with the tag's
    variant preset laid over it. Unknown families yield an empty mapping.
    """
    defaults = _load_defaults()
    if tag in defaults["tags"]:
        return copy.deepcopy(defaults["tags"][tag])
    return merge(family_default(family_of(tag)), variant_preset(tag))


__all__ = [
    "DEFAULTS_PATH",
    "default_content",
    "family_default",
    "family_of",
    "known_families",
    "variant_preset",
]
