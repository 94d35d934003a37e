"""YAML-backed section repository.

Projects live in a single YAML file (``config/site.yaml`` by default). The
repository rewrites only the ``sections`` list of that file and round-trips
everything else, so hand-written comments and key order survive store
operations issued from the CLI.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import YAMLError

from pagekit.errors import PersistenceError
from pagekit.models import Section, section_id_at, sections_from_payload

if typ.TYPE_CHECKING:
    from pathlib import Path


def build_roundtrip_yaml() -> YAML:
    """Return a round-trip YAML instance with the project's dump settings."""
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


def to_plain(value: typ.Any) -> typ.Any:
    """Convert ruamel containers into plain dicts and lists recursively."""
    match value:
        case cabc.Mapping():
            return {str(key): to_plain(item) for key, item in value.items()}
        case list() | tuple():
            return [to_plain(item) for item in value]
        case _:
            return value


def upsert_key(
    payload: CommentedMap, key: str, value: object, anchors: tuple[str, ...]
) -> None:
    """Set ``key`` in ``payload``, inserting new keys after the first anchor."""
    if key in payload:
        payload[key] = value
        return
    existing_keys = list(payload.keys())
    for anchor in anchors:
        if anchor in payload:
            payload.insert(existing_keys.index(anchor) + 1, key, value)
            return
    payload[key] = value


def _entry_id(entry: object, index: int) -> str:
    if not isinstance(entry, cabc.Mapping):
        msg = f"Section entry {index} is not a mapping"
        raise PersistenceError(msg)
    return section_id_at(entry, index)


def _pin_ids(entries: CommentedSeq) -> None:
    """Write positional ids into entries stored without one.

    Positional ids shift when an earlier entry is removed, so they are pinned
    before any write changes the list.
    """
    for index, entry in enumerate(entries):
        if not isinstance(entry, CommentedMap):
            continue
        section_id = section_id_at(entry, index)
        if "id" not in entry:
            entry.insert(0, "id", section_id)
        elif entry["id"] is None or not str(entry["id"]).strip():
            entry["id"] = section_id


class ProjectDocument:
    """Load and save a project YAML file without losing its formatting."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.yaml = build_roundtrip_yaml()

    def load(self) -> CommentedMap:
        """Return the parsed document, raising ``PersistenceError`` on failure."""
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                document = self.yaml.load(handle)
        except (OSError, YAMLError) as exc:
            msg = f"Cannot read project file '{self.path}': {exc}"
            raise PersistenceError(msg) from exc
        if document is None:
            document = CommentedMap()
        if not isinstance(document, CommentedMap):
            msg = f"Project file '{self.path}' must contain a mapping"
            raise PersistenceError(msg)
        return document

    def save(self, document: CommentedMap) -> None:
        """Write ``document`` back to disk."""
        try:
            with self.path.open("w", encoding="utf-8") as handle:
                self.yaml.dump(document, handle)
        except (OSError, YAMLError) as exc:
            msg = f"Cannot write project file '{self.path}': {exc}"
            raise PersistenceError(msg) from exc


class YamlSectionRepository:
    """Persist sections in the ``sections`` list of a project YAML file."""

    def __init__(self, path: Path) -> None:
        self.document = ProjectDocument(path)

    @property
    def path(self) -> Path:
        return self.document.path

    def load_sections(self) -> list[Section]:
        document = self.document.load()
        try:
            return sections_from_payload(to_plain(self._sections(document)))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            msg = f"Malformed section entry in '{self.path}': {exc!r}"
            raise PersistenceError(msg) from exc

    def create_section(self, section: Section) -> None:
        document = self.document.load()
        entries = self._sections(document)
        entry = CommentedMap()
        entry["id"] = section.id
        entry["type"] = section.type
        entry["order"] = section.order
        entry["content"] = section.content
        entries.append(entry)
        self.document.save(document)

    def update_content(self, section_id: str, content: dict[str, typ.Any]) -> None:
        document = self.document.load()
        entry = self._find(self._sections(document), section_id)
        upsert_key(entry, "content", content, ("order", "type", "id"))
        self.document.save(document)

    def update_order(self, section_ids: list[str]) -> None:
        document = self.document.load()
        entries = self._sections(document)
        positions = {section_id: index for index, section_id in enumerate(section_ids)}
        stored = [_entry_id(entry, index) for index, entry in enumerate(entries)]
        missing = [section_id for section_id in stored if section_id not in positions]
        if missing or len(entries) != len(section_ids):
            msg = f"Stored sections do not match the requested order: {section_ids}"
            raise PersistenceError(msg)
        ordered = [
            entry
            for _, entry in sorted(
                zip(stored, entries, strict=True), key=lambda pair: positions[pair[0]]
            )
        ]
        for index, entry in enumerate(ordered):
            upsert_key(entry, "order", index, ("type", "id"))
            entries[index] = entry
        self.document.save(document)

    def delete_section(self, section_id: str) -> None:
        document = self.document.load()
        entries = self._sections(document)
        entries.remove(self._find(entries, section_id))
        self.document.save(document)

    def _sections(self, document: CommentedMap) -> CommentedSeq:
        entries = document.get("sections")
        if entries is None:
            entries = CommentedSeq()
            document["sections"] = entries
        if not isinstance(entries, list):
            msg = f"'sections' in '{self.path}' must be a list"
            raise PersistenceError(msg)
        _pin_ids(entries)
        return entries

    def _find(self, entries: CommentedSeq, section_id: str) -> CommentedMap:
        for index, entry in enumerate(entries):
            if isinstance(entry, cabc.Mapping) and _entry_id(entry, index) == section_id:
                return entry
        msg = f"Section '{section_id}' is not stored in '{self.path}'"
        raise PersistenceError(msg)


__all__ = [
    "ProjectDocument",
    "YamlSectionRepository",
    "build_roundtrip_yaml",
    "to_plain",
    "upsert_key",
]
