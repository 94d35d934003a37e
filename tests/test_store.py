"""Unit tests for the project/section store.

The store is the only writer of section state. These tests cover the order
invariant across add, duplicate, delete, and reorder sequences, the default
content given to new sections, the ``updated_at`` stamping, and the
optimistic persistence path: a failing repository write reloads the
authoritative list and surfaces a retryable :class:`SectionSyncError`.
"""

from __future__ import annotations

import logging
import typing as typ

import pytest

from pagekit.errors import (
    OrderInvariantError,
    PersistenceError,
    SectionNotFoundError,
    SectionSyncError,
)
from pagekit.models import Project, Section, has_dense_order
from pagekit.store import MemorySectionRepository, SectionStore

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .conftest import SequentialIds, StepClock


class FlakyRepository(MemorySectionRepository):
    """Repository whose next ``failures`` writes raise ``PersistenceError``."""

    def __init__(
        self, sections: cabc.Iterable[Section] = (), failures: int = 1
    ) -> None:
        super().__init__(sections)
        self.failures = failures

    def _maybe_fail(self) -> None:
        if self.failures > 0:
            self.failures -= 1
            msg = "disk full"
            raise PersistenceError(msg)

    def create_section(self, section: Section) -> None:
        self._maybe_fail()
        super().create_section(section)

    def update_order(self, section_ids: list[str]) -> None:
        self._maybe_fail()
        super().update_order(section_ids)


def _orders(store: SectionStore) -> list[tuple[str, int]]:
    return [(section.id, section.order) for section in store.sections]


def _empty_store(ids: SequentialIds, clock: StepClock) -> SectionStore:
    return SectionStore(Project(id="p", name="P"), id_factory=ids, clock=clock)


def test_add_section_on_empty_project_uses_defaults(
    ids: SequentialIds, clock: StepClock
) -> None:
    store = _empty_store(ids, clock)

    section = store.add_section("hero-split")

    for key in ("title", "subtitle", "buttonText", "buttonLink", "image"):
        assert section.content.get(key), f"expected non-empty default for {key}"
    assert section.order == 0, "first section should have order 0"
    assert store.project.sections == [section], "section should be stored"


def test_add_section_for_unknown_type_starts_empty(
    ids: SequentialIds, clock: StepClock
) -> None:
    store = _empty_store(ids, clock)

    section = store.add_section("mystery-widget")

    assert section.content == {}, "unknown types have no default content"
    assert section.type == "mystery-widget", "type should be kept verbatim"


def test_delete_first_of_two_renumbers_survivor(
    ids: SequentialIds, clock: StepClock
) -> None:
    store = _empty_store(ids, clock)
    hero = store.add_section("hero-split")
    cta = store.add_section("cta-gradient")

    store.delete_section(hero.id)

    assert _orders(store) == [(cta.id, 0)], "survivor should move to order 0"


def test_order_stays_dense_across_mixed_mutations(
    ids: SequentialIds, clock: StepClock
) -> None:
    store = _empty_store(ids, clock)
    tags = ("hero-split", "about-story", "cta-gradient", "faq-accordion")
    created = [store.add_section(tag) for tag in tags]

    store.duplicate_section(created[1].id)
    store.delete_section(created[0].id)
    store.reorder(0, 3)
    store.move_up(created[3].id)
    store.add_section("footer-minimal")
    store.delete_section(created[2].id)

    assert store.verify_order(), "orders should be a dense permutation"
    assert has_dense_order(store.project.sections), "project orders should be dense"


def test_duplicate_inserts_copy_after_source(
    ids: SequentialIds, clock: StepClock
) -> None:
    store = _empty_store(ids, clock)
    first = store.add_section("hero-split")
    second = store.add_section("cta-gradient")
    first.content["title"] = "Original"

    clone = store.duplicate_section(first.id)

    order = [section.id for section in store.sections]
    assert order == [first.id, clone.id, second.id], "clone should follow source"
    assert clone.content == first.content, "clone should copy content"
    clone.content["title"] = "Changed"
    assert first.content["title"] == "Original", "clone content must be independent"


def test_reorder_same_index_is_noop(ids: SequentialIds, clock: StepClock) -> None:
    store = _empty_store(ids, clock)
    for tag in ("hero-split", "about-story", "cta-gradient"):
        store.add_section(tag)
    before = _orders(store)
    stamp = store.project.updated_at

    store.reorder(1, 1)

    assert _orders(store) == before, "reorder(i, i) must not change anything"
    assert store.project.updated_at == stamp, "a no-op should not touch updated_at"


def test_reorder_moves_section(project: Project) -> None:
    store = SectionStore(project)

    store.reorder(0, 2)

    assert [section.id for section in store.sections] == ["b", "c", "a"]
    assert [section.order for section in store.sections] == [0, 1, 2]


def test_reorder_rejects_out_of_range(project: Project) -> None:
    store = SectionStore(project)

    with pytest.raises(IndexError):
        store.reorder(0, 3)


def test_reorder_ids_requires_permutation(project: Project) -> None:
    store = SectionStore(project)

    with pytest.raises(OrderInvariantError):
        store.reorder_ids(["a", "b"])

    store.reorder_ids(["c", "a", "b"])
    assert [section.id for section in store.sections] == ["c", "a", "b"]


def test_move_up_and_down_report_edges(project: Project) -> None:
    store = SectionStore(project)

    assert not store.move_up("a"), "first section cannot move up"
    assert not store.move_down("c"), "last section cannot move down"
    assert store.move_down("a"), "move_down should report a move"
    assert store.index_of("a") == 1


def test_move_to_places_section(project: Project) -> None:
    store = SectionStore(project)

    store.move_to("c", 0)

    assert [section.id for section in store.sections] == ["c", "a", "b"]


def test_update_content_keeps_order_and_copies(project: Project) -> None:
    store = SectionStore(project)
    payload = {"title": "New", "items": [1]}

    section = store.update_section_content("b", payload)
    payload["items"].append(2)

    assert section.content == {"title": "New", "items": [1]}
    assert section.order == 1, "content updates must not move the section"


def test_unknown_section_raises(project: Project) -> None:
    store = SectionStore(project)

    with pytest.raises(SectionNotFoundError) as excinfo:
        store.delete_section("missing")
    assert isinstance(excinfo.value, KeyError), "should still be a KeyError"
    assert "missing" in str(excinfo.value)


def test_mutations_stamp_updated_at(project: Project, clock: StepClock) -> None:
    store = SectionStore(project, clock=clock)

    store.add_section("cta-gradient")

    assert store.project.updated_at == clock.current, "updated_at should use the clock"


def test_constructor_repairs_sparse_orders() -> None:
    project = Project(
        id="p",
        name="P",
        sections=[
            Section(id="x", type="cta-gradient", order=7),
            Section(id="y", type="hero-split", order=2),
        ],
    )

    store = SectionStore(project)

    assert _orders(store) == [("y", 0), ("x", 1)]


def test_memory_repository_receives_writes(
    ids: SequentialIds, clock: StepClock
) -> None:
    repository = MemorySectionRepository()
    store = SectionStore(
        Project(id="p", name="P"), repository, id_factory=ids, clock=clock
    )

    hero = store.add_section("hero-split")
    cta = store.add_section("cta-gradient")
    store.reorder(1, 0)
    store.update_section_content(hero.id, {"title": "Saved"})

    stored = {section.id: section for section in repository.load_sections()}
    assert stored[cta.id].order == 0, "repository should hold the new order"
    assert stored[hero.id].content == {"title": "Saved"}


def test_failed_write_reloads_and_offers_retry(
    ids: SequentialIds, clock: StepClock
) -> None:
    existing = Section(id="keep", type="hero-split", content={"title": "Kept"})
    repository = FlakyRepository([existing], failures=1)
    store = SectionStore(
        Project(id="p", name="P", sections=[Section(id="keep", type="hero-split")]),
        repository,
        id_factory=ids,
        clock=clock,
    )

    with pytest.raises(SectionSyncError) as excinfo:
        store.add_section("cta-gradient")

    error = excinfo.value
    assert error.operation == "add_section"
    assert isinstance(error.cause, PersistenceError)
    assert [section.id for section in store.sections] == ["keep"], (
        "local state should be reloaded from the repository"
    )
    assert store.sections[0].content == {"title": "Kept"}

    retried = error.retry()

    assert isinstance(retried, Section), "retry should replay add_section"
    types = [section.type for section in store.sections]
    assert types == ["hero-split", "cta-gradient"], "retry should persist"


def test_failed_reorder_restores_repository_order(project: Project) -> None:
    repository = FlakyRepository(project.sections, failures=1)
    store = SectionStore(project, repository)

    with pytest.raises(SectionSyncError):
        store.reorder(0, 2)

    assert [section.id for section in store.sections] == ["a", "b", "c"]
    assert store.verify_order(), "reload should leave a dense order"


def test_failed_reload_still_reports_sync_error(
    project: Project, caplog: pytest.LogCaptureFixture
) -> None:
    repository = FlakyRepository(project.sections, failures=1)
    store = SectionStore(project, repository)

    def unreadable() -> list[Section]:
        msg = "site file vanished"
        raise PersistenceError(msg)

    repository.load_sections = unreadable  # type: ignore[method-assign]

    with caplog.at_level(logging.WARNING, logger="pagekit.store"), pytest.raises(
        SectionSyncError
    ) as excinfo:
        store.reorder(0, 1)

    assert excinfo.value.operation == "reorder"
    assert "site file vanished" in caplog.text
    assert store.verify_order(), "local order stays dense when reload fails"


def test_reload_without_repository_repairs_order(project: Project) -> None:
    store = SectionStore(project)
    project.sections[0].order = 9

    assert not store.verify_order(), "corrupted order should be detected"
    store.reload()

    assert store.verify_order(), "reload should repair the order"
    assert [section.id for section in store.sections] == ["b", "c", "a"]
