"""Project/section store: the single writer of section state.

:class:`SectionStore` owns one project's section list. Every mutation keeps
``order`` a dense permutation of ``0..N-1``, stamps ``project.updated_at``,
and, when a repository is configured, is forwarded to it after being applied
locally. A failed write reloads the authoritative list from the repository
and surfaces as :class:`~pagekit.errors.SectionSyncError`, whose ``retry``
method replays the operation.

Examples
--------
>>> from pagekit.models import Project
>>> store = SectionStore(Project(id="site", name="Demo"))
>>> hero = store.add_section("hero-split")
>>> cta = store.add_section("cta-gradient")
>>> store.delete_section(hero.id)
>>> [(section.type, section.order) for section in store.sections]
[('cta-gradient', 0)]
"""

from __future__ import annotations

import copy
import logging
import typing as typ
import uuid

from pagekit.errors import (
    OrderInvariantError,
    PersistenceError,
    SectionNotFoundError,
    SectionSyncError,
)
from pagekit.models import Section, densify, has_dense_order, utcnow
from pagekit.sections.defaults import default_content

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from pagekit.models import Project

logger = logging.getLogger(__name__)


class SectionRepository(typ.Protocol):
    """Persistence boundary for a project's sections."""

    def load_sections(self) -> list[Section]:
        """Return the authoritative section list."""
        ...

    def create_section(self, section: Section) -> None:
        """Persist a newly added section."""
        ...

    def update_content(self, section_id: str, content: dict[str, typ.Any]) -> None:
        """Persist replaced content for ``section_id``."""
        ...

    def update_order(self, section_ids: list[str]) -> None:
        """Persist positions; ``section_ids[i]`` has order ``i``."""
        ...

    def delete_section(self, section_id: str) -> None:
        """Remove ``section_id`` from storage."""
        ...


class MemorySectionRepository:
    """In-memory repository, mainly for tests and previews."""

    def __init__(self, sections: cabc.Iterable[Section] = ()) -> None:
        self._sections: dict[str, Section] = {
            section.id: copy.deepcopy(section) for section in sections
        }

    def load_sections(self) -> list[Section]:
        return [copy.deepcopy(section) for section in self._sections.values()]

    def create_section(self, section: Section) -> None:
        self._sections[section.id] = copy.deepcopy(section)

    def update_content(self, section_id: str, content: dict[str, typ.Any]) -> None:
        self._require(section_id).content = copy.deepcopy(content)

    def update_order(self, section_ids: list[str]) -> None:
        for index, section_id in enumerate(section_ids):
            self._require(section_id).order = index

    def delete_section(self, section_id: str) -> None:
        self._require(section_id)
        del self._sections[section_id]

    def _require(self, section_id: str) -> Section:
        try:
            return self._sections[section_id]
        except KeyError:
            msg = f"Section '{section_id}' is not stored"
            raise PersistenceError(msg) from None


def _new_id() -> str:
    return uuid.uuid4().hex


class SectionStore:
    """Apply section mutations to a project and keep order dense."""

    def __init__(
        self,
        project: Project,
        repository: SectionRepository | None = None,
        *,
        id_factory: cabc.Callable[[], str] = _new_id,
        clock: cabc.Callable[[], dt.datetime] = utcnow,
    ) -> None:
        self.project = project
        self.repository = repository
        self._id_factory = id_factory
        self._clock = clock
        self.project.sections = densify(self.project.sections)

    @property
    def sections(self) -> list[Section]:
        """Return the sections in display order."""
        return self.project.ordered_sections()

    def get(self, section_id: str) -> Section:
        """Return the section with ``section_id``.

        Raises
        ------
        SectionNotFoundError
            If the project has no such section.
        """
        for section in self.project.sections:
            if section.id == section_id:
                return section
        raise SectionNotFoundError(section_id)

    def index_of(self, section_id: str) -> int:
        """Return the display position of ``section_id``."""
        return self.get(section_id).order

    def add_section(self, section_type: str) -> Section:
        """Append a new section of ``section_type`` with default content."""
        section = Section(
            id=self._id_factory(),
            type=section_type,
            content=default_content(section_type),
            order=len(self.project.sections),
        )
        self.project.sections.append(section)
        self._touch()
        logger.debug("Added %s section %s", section_type, section.id)
        self._persist(
            "add_section",
            lambda: self._call_repository("create_section", copy.deepcopy(section)),
            lambda: self.add_section(section_type),
        )
        return section

    def duplicate_section(self, section_id: str) -> Section:
        """Insert a copy of ``section_id`` directly after it and return it."""
        source = self.get(section_id)
        position = source.order + 1
        for section in self.project.sections:
            if section.order >= position:
                section.order += 1
        clone = Section(
            id=self._id_factory(),
            type=source.type,
            content=copy.deepcopy(source.content),
            order=position,
        )
        self.project.sections.append(clone)
        self._touch()
        logger.debug("Duplicated section %s as %s", section_id, clone.id)

        def write() -> None:
            self._call_repository("create_section", copy.deepcopy(clone))
            self._call_repository("update_order", self._ordered_ids())

        self._persist(
            "duplicate_section", write, lambda: self.duplicate_section(section_id)
        )
        return clone

    def update_section_content(
        self, section_id: str, content: typ.Mapping[str, typ.Any]
    ) -> Section:
        """Replace the content of ``section_id``; its order is untouched."""
        section = self.get(section_id)
        section.content = copy.deepcopy(dict(content))
        self._touch()
        logger.debug("Updated content of section %s", section_id)
        self._persist(
            "update_section_content",
            lambda: self._call_repository(
                "update_content", section_id, copy.deepcopy(section.content)
            ),
            lambda: self.update_section_content(section_id, content),
        )
        return section

    def delete_section(self, section_id: str) -> None:
        """Remove ``section_id`` and renumber the survivors densely."""
        section = self.get(section_id)
        self.project.sections.remove(section)
        self.project.sections = densify(self.project.sections)
        self._touch()
        logger.debug("Deleted section %s", section_id)

        def write() -> None:
            self._call_repository("delete_section", section_id)
            self._call_repository("update_order", self._ordered_ids())

        self._persist("delete_section", write, lambda: self.delete_section(section_id))

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move the section at ``from_index`` to ``to_index``.

        Raises
        ------
        IndexError
            If either index is outside ``0..N-1``.
        """
        count = len(self.project.sections)
        for index in (from_index, to_index):
            if not 0 <= index < count:
                msg = f"Section index {index} out of range for {count} sections"
                raise IndexError(msg)
        if from_index == to_index:
            return
        ordered = self.sections
        moved = ordered.pop(from_index)
        ordered.insert(to_index, moved)
        self._apply_order(ordered)
        logger.debug("Moved section %s from %d to %d", moved.id, from_index, to_index)
        self._persist(
            "reorder",
            lambda: self._call_repository("update_order", self._ordered_ids()),
            lambda: self.reorder(from_index, to_index),
        )

    def reorder_ids(self, section_ids: cabc.Sequence[str]) -> None:
        """Apply a full ordering given as a permutation of the current ids.

        Raises
        ------
        OrderInvariantError
            If ``section_ids`` is not a permutation of the current ids.
        """
        current = {section.id: section for section in self.project.sections}
        if len(section_ids) != len(current) or set(section_ids) != set(current):
            msg = "Reorder ids must be a permutation of the current section ids"
            raise OrderInvariantError(msg)
        ids = list(section_ids)
        if ids == self._ordered_ids():
            return
        self._apply_order([current[section_id] for section_id in ids])
        logger.debug("Applied explicit section order %s", ids)
        self._persist(
            "reorder_ids",
            lambda: self._call_repository("update_order", self._ordered_ids()),
            lambda: self.reorder_ids(ids),
        )

    def move_to(self, section_id: str, new_index: int) -> None:
        """Move ``section_id`` to ``new_index``; used by external drag sources."""
        self.reorder(self.index_of(section_id), new_index)

    def move_up(self, section_id: str) -> bool:
        """Swap ``section_id`` with its predecessor; return whether it moved."""
        index = self.index_of(section_id)
        if index == 0:
            return False
        self.reorder(index, index - 1)
        return True

    def move_down(self, section_id: str) -> bool:
        """Swap ``section_id`` with its successor; return whether it moved."""
        index = self.index_of(section_id)
        if index >= len(self.project.sections) - 1:
            return False
        self.reorder(index, index + 1)
        return True

    def verify_order(self) -> bool:
        """Return whether section orders form a dense permutation."""
        return has_dense_order(self.project.sections)

    def reload(self) -> list[Section]:
        """Replace local sections with the repository's and renumber densely.

        Without a repository the local list is renumbered in place, which also
        repairs any detected order violation.
        """
        if self.repository is None:
            sections = self.project.sections
        else:
            sections = self.repository.load_sections()
        self.project.sections = densify(sections)
        logger.debug("Reloaded %d sections", len(self.project.sections))
        return self.sections

    def _apply_order(self, ordered: cabc.Sequence[Section]) -> None:
        for index, section in enumerate(ordered):
            section.order = index
        self._touch()

    def _ordered_ids(self) -> list[str]:
        return [section.id for section in self.sections]

    def _touch(self) -> None:
        self.project.updated_at = self._clock()

    def _call_repository(self, method: str, *args: typ.Any) -> None:
        if self.repository is not None:
            getattr(self.repository, method)(*args)

    def _persist(
        self,
        operation: str,
        write: cabc.Callable[[], None],
        retry: cabc.Callable[[], object],
    ) -> None:
        if self.repository is None:
            return
        try:
            write()
        except PersistenceError as exc:
            logger.warning(
                "Persisting %s failed (%s); reloading sections", operation, exc
            )
            try:
                self.reload()
            except PersistenceError as reload_exc:
                logger.warning(
                    "Reloading sections after %s failed: %s", operation, reload_exc
                )
            raise SectionSyncError(operation, exc, retry) from exc


__all__ = [
    "MemorySectionRepository",
    "SectionRepository",
    "SectionStore",
]
