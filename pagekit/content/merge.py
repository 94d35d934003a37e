"""Layered content resolution for sections.

A section's effective content is the right-biased overlay of up to three
layers: the type default, a variant preset, and the user's custom edits.
Overlays are shallow, so a later layer's list or mapping replaces the earlier
value wholesale.

Examples
--------
>>> merge({"title": "A", "items": [1, 2]}, None, {"items": [3]})
{'title': 'A', 'items': [3]}
>>> set_path({"items": [{"name": "a"}]}, "items.0.name", "b")
{'items': [{'name': 'b'}]}
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import json
import logging
import typing as typ

logger = logging.getLogger(__name__)

Content = dict[str, typ.Any]
RawLayer = typ.Mapping[str, typ.Any] | str | bytes | None


def merge_layers(layers: cabc.Iterable[typ.Mapping[str, typ.Any] | None]) -> Content:
    """Overlay ``layers`` left to right; later keys win.

    ``None`` layers are skipped. Inputs are never mutated and the returned
    values are deep copies, so callers may edit the result freely.
    """
    resolved: Content = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            resolved[key] = copy.deepcopy(value)
    return resolved


def merge(
    default: typ.Mapping[str, typ.Any] | None,
    variant: typ.Mapping[str, typ.Any] | None = None,
    custom: typ.Mapping[str, typ.Any] | None = None,
) -> Content:
    """Return ``custom`` over ``variant`` over ``default``."""
    return merge_layers((default, variant, custom))


def parse_layer(raw: RawLayer) -> Content:
    """Decode a stored content layer into a mapping.

    Stored layers arrive as mappings or as serialized JSON. Malformed JSON and
    JSON values that are not objects degrade to an empty layer with a warning.

    >>> parse_layer('{"title": "Hi"}')
    {'title': 'Hi'}
    >>> parse_layer("[1, 2]")
    {}
    """
    if raw is None:
        return {}
    if isinstance(raw, cabc.Mapping):
        return dict(raw)
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    text = str(raw).strip()
    if not text:
        return {}
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring malformed content layer: %s", exc)
        return {}
    if not isinstance(decoded, dict):
        logger.warning(
            "Ignoring content layer of type %s; expected an object",
            type(decoded).__name__,
        )
        return {}
    return decoded


def split_path(path: str) -> list[str | int]:
    """Split a dotted field path, turning numeric segments into indices.

    >>> split_path("slides.2.title")
    ['slides', 2, 'title']
    """
    segments: list[str | int] = []
    for part in path.split("."):
        if not part:
            msg = f"Empty segment in field path '{path}'"
            raise ValueError(msg)
        segments.append(int(part) if part.isdigit() else part)
    return segments


def get_path(content: typ.Any, path: str, default: typ.Any = None) -> typ.Any:
    """Return the value at ``path`` or ``default`` when any segment is missing."""
    current = content
    for segment in split_path(path):
        match current:
            case cabc.Mapping() if str(segment) in current:
                current = current[str(segment)]
            case list() if isinstance(segment, int) and segment < len(current):
                current = current[segment]
            case _:
                return default
    return current


def set_path(content: typ.Mapping[str, typ.Any], path: str, value: typ.Any) -> Content:
    """Return a copy of ``content`` with the field at ``path`` replaced.

    Missing mapping keys along the path are created. List indices must
    already exist, except that an index equal to the list length appends.

    Raises
    ------
    ValueError
        If the path is empty or walks through a scalar.
    IndexError
        If a list index is beyond the end of the list.
    """
    updated = copy.deepcopy(dict(content))
    segments = split_path(path)
    parent: typ.Any = updated
    for position, segment in enumerate(segments):
        last = position == len(segments) - 1
        child_default: typ.Any = {}
        if not last and isinstance(segments[position + 1], int):
            child_default = []
        match parent, segment:
            case dict(), str() | int():
                # Numeric segments address mapping keys such as "2024" too.
                key = str(segment)
                if last:
                    parent[key] = value
                else:
                    parent = parent.setdefault(key, child_default)
            case list(), int():
                if segment > len(parent):
                    msg = f"Index {segment} out of range in field path '{path}'"
                    raise IndexError(msg)
                if segment == len(parent):
                    parent.append(value if last else child_default)
                elif last:
                    parent[segment] = value
                if not last:
                    parent = parent[segment]
            case _:
                kind = type(parent).__name__
                msg = f"Cannot descend into {kind} at '{segment}' in '{path}'"
                raise ValueError(msg)
    return updated


__all__ = [
    "Content",
    "RawLayer",
    "get_path",
    "merge",
    "merge_layers",
    "parse_layer",
    "set_path",
    "split_path",
]
