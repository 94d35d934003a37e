"""Project and section records.

Both records are mutable dataclasses owned by
:class:`~pagekit.store.SectionStore`; other components treat them as read-only
snapshots.
"""

from __future__ import annotations

import copy
import dataclasses as dc
import datetime as dt
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def utcnow() -> dt.datetime:
    """Return the current timezone-aware UTC time."""
    return dt.datetime.now(dt.UTC)


def parse_timestamp(value: object | None) -> dt.datetime | None:
    """Coerce ``value`` into an aware UTC datetime.

    Naive values are assumed to be UTC.

    >>> parse_timestamp("2024-05-01T10:00:00").isoformat()
    '2024-05-01T10:00:00+00:00'
    """
    if value is None or value == "":
        return None
    match value:
        case dt.datetime():
            stamp = value
        case dt.date():
            stamp = dt.datetime.combine(value, dt.time())
        case _:
            stamp = dt.datetime.fromisoformat(str(value).strip())
    if stamp.tzinfo is None:
        return stamp.replace(tzinfo=dt.UTC)
    return stamp.astimezone(dt.UTC)


def section_id_at(payload: typ.Mapping[str, typ.Any], position: int) -> str:
    """Return the stored id of a section entry, or its positional fallback."""
    stored = payload.get("id")
    if stored is None or not str(stored).strip():
        return f"section-{position + 1}"
    return str(stored).strip()


@dc.dataclass(slots=True)
class Section:
    """One typed content block on the page.

    Attributes
    ----------
    id : str
        Identifier, unique within the owning project.
    type : str
        Registry tag such as ``"hero-split"``.
    content : dict[str, Any]
        Effective content; its shape depends on ``type``.
    order : int
        Zero-based display position.
    """

    id: str
    type: str
    content: dict[str, typ.Any] = dc.field(default_factory=dict)
    order: int = 0

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a plain mapping with a deep copy of the content."""
        return {
            "id": self.id,
            "type": self.type,
            "order": self.order,
            "content": copy.deepcopy(self.content),
        }

    @classmethod
    def from_dict(cls, payload: typ.Mapping[str, typ.Any], *, position: int = 0) -> Section:
        """Build a section from a mapping.

        ``position`` fills a missing order and names a section stored without
        an id ``section-<position + 1>``.
        """
        order = payload.get("order")
        content = payload.get("content") or {}
        return cls(
            id=section_id_at(payload, position),
            type=str(payload["type"]),
            content=copy.deepcopy(dict(content)),
            order=position if order is None else int(order),
        )


@dc.dataclass(slots=True)
class Project:
    """A named, ordered collection of sections."""

    id: str
    name: str
    created_at: dt.datetime = dc.field(default_factory=utcnow)
    updated_at: dt.datetime | None = None
    sections: list[Section] = dc.field(default_factory=list)

    def ordered_sections(self) -> list[Section]:
        """Return the sections sorted by ``order`` (stable for ties)."""
        return sorted(self.sections, key=lambda section: section.order)

    def copyright_year(self) -> int:
        """Return the year exported footers print."""
        return (self.updated_at or self.created_at).year

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a plain mapping suitable for YAML serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "sections": [section.to_dict() for section in self.ordered_sections()],
        }

    @classmethod
    def from_dict(cls, payload: typ.Mapping[str, typ.Any]) -> Project:
        """Build a project from a mapping produced by :meth:`to_dict`."""
        sections = payload.get("sections") or []
        created = parse_timestamp(payload.get("created_at"))
        return cls(
            id=str(payload.get("id") or "site"),
            name=str(payload.get("name") or "Untitled site"),
            created_at=created or utcnow(),
            updated_at=parse_timestamp(payload.get("updated_at")),
            sections=sections_from_payload(sections),
        )


def sections_from_payload(
    payload: cabc.Iterable[typ.Mapping[str, typ.Any]],
) -> list[Section]:
    """Build sections from mappings, defaulting ``order`` to list position."""
    return [
        Section.from_dict(entry, position=index) for index, entry in enumerate(payload)
    ]


def densify(sections: cabc.Iterable[Section]) -> list[Section]:
    """Sort ``sections`` stably by order and renumber them ``0..N-1`` in place."""
    ordered = sorted(sections, key=lambda section: section.order)
    for index, section in enumerate(ordered):
        section.order = index
    return ordered


def has_dense_order(sections: cabc.Sequence[Section]) -> bool:
    """Return whether the section orders are exactly ``{0..N-1}``."""
    return sorted(section.order for section in sections) == list(range(len(sections)))


__all__ = [
    "Project",
    "Section",
    "densify",
    "has_dense_order",
    "parse_timestamp",
    "section_id_at",
    "sections_from_payload",
    "utcnow",
]
