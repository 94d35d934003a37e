"""Derive structured editor controls from section content.

The edit form is generated from the content itself rather than hand-written
per type: every scalar becomes a control named by its dotted path, nested
mappings become groups, and lists become repeatable items with add and
remove controls.

Examples
--------
>>> [field.kind for field in describe_fields({"title": "Hi", "image": "x.png"})]
['text', 'image']
>>> humanize("buttonLink")
'Button Link'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

IMAGE_KEYS = ("image", "avatar", "logo", "backgroundimage", "photo", "thumbnail")
URL_KEYS = ("url", "link", "href", "videourl", "mapurl")
LONG_TEXT_KEYS = ("description", "content", "answer", "subtitle", "bio", "text")


@dc.dataclass(slots=True)
class EditorField:
    """One control (or group of controls) in the edit form."""

    path: str
    label: str
    kind: str
    value: typ.Any = None
    children: list[EditorField] = dc.field(default_factory=list)

    @property
    def is_container(self) -> bool:
        return self.kind in {"group", "list"}


def humanize(key: str) -> str:
    """Return a form label for a content key."""
    words = _CAMEL_BOUNDARY.sub(" ", key).replace("_", " ").replace("-", " ")
    return " ".join(word.capitalize() for word in words.split())


def field_kind(key: str, value: object) -> str:
    """Classify a scalar content value into an editor control kind."""
    match value:
        case bool():
            return "checkbox"
        case int() | float():
            return "number"
        case list():
            return "list"
        case dict():
            return "group"
    lowered = key.lower()
    if any(lowered.endswith(name) for name in IMAGE_KEYS):
        return "image"
    if lowered.endswith("email"):
        return "email"
    if any(lowered.endswith(name) for name in URL_KEYS):
        return "url"
    if lowered in LONG_TEXT_KEYS or len(str(value or "")) > 80:
        return "textarea"
    return "text"


def _describe(key: str, path: str, label: str, value: typ.Any) -> EditorField:
    kind = field_kind(key, value)
    match kind:
        case "group":
            children = [
                _describe(str(child), f"{path}.{child}", humanize(str(child)), item)
                for child, item in value.items()
            ]
            return EditorField(path=path, label=label, kind=kind, children=children)
        case "list":
            singular = label[:-1] if label.endswith("s") else label
            children = [
                _describe(key, f"{path}.{index}", f"{singular} {index + 1}", item)
                for index, item in enumerate(value)
            ]
            return EditorField(path=path, label=label, kind=kind, children=children)
        case _:
            return EditorField(path=path, label=label, kind=kind, value=value)


def describe_fields(content: cabc.Mapping[str, typ.Any]) -> list[EditorField]:
    """Return editor controls for every top-level content key, in key order."""
    return [
        _describe(str(key), str(key), humanize(str(key)), value)
        for key, value in content.items()
    ]


def blank_like(sample: typ.Any) -> typ.Any:
    """Return an empty value with the same shape as ``sample``.

    >>> blank_like({"question": "Why?", "tags": ["a"], "rating": 5})
    {'question': '', 'tags': [], 'rating': 0}
    """
    match sample:
        case bool():
            return False
        case int():
            return 0
        case float():
            return 0.0
        case dict():
            return {key: blank_like(value) for key, value in sample.items()}
        case list():
            return []
        case _:
            return ""


def _number(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        msg = f"expected a number, got '{text}'"
        raise ValueError(msg) from None


def coerce_value(current: typ.Any, raw: typ.Any) -> typ.Any:
    """Convert a submitted form value to the type of the value it replaces.

    Raises
    ------
    ValueError
        If a number field receives text that is not a number.

    Examples
    --------
    >>> coerce_value(5, "7")
    7
    >>> coerce_value(False, "on")
    True
    >>> coerce_value("old", 3)
    '3'
    """
    if isinstance(raw, str):
        text = raw.strip()
        match current:
            case bool():
                return text.lower() in {"1", "true", "on", "yes"}
            case int():
                if not text:
                    return 0
                try:
                    return int(text)
                except ValueError:
                    return _number(text)
            case float():
                return _number(text) if text else 0.0
            case _:
                return raw
    if isinstance(current, str) and not isinstance(raw, (dict, list)):
        return "" if raw is None else str(raw)
    return raw


__all__ = [
    "EditorField",
    "blank_like",
    "coerce_value",
    "describe_fields",
    "field_kind",
    "humanize",
]
