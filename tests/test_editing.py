"""Tests for edit-mode sessions and their store integration."""

from __future__ import annotations

import typing as typ

import pytest

from pagekit.errors import PersistenceError, SectionSyncError
from pagekit.models import Project, Section
from pagekit.render import EditSession
from pagekit.render.fields import blank_like, coerce_value
from pagekit.sections import default_content
from pagekit.store import MemorySectionRepository, SectionStore


class Recorder:
    """Collect ``(section_id, content)`` updates emitted by a session."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, typ.Any]]] = []

    def __call__(self, section_id: str, content: dict[str, typ.Any]) -> None:
        self.calls.append((section_id, content))


class RejectingRepository(MemorySectionRepository):
    """Repository whose next content write raises ``PersistenceError``."""

    def __init__(self, sections: list[Section]) -> None:
        super().__init__(sections)
        self.reject_next = True

    def update_content(self, section_id: str, content: dict[str, typ.Any]) -> None:
        if self.reject_next:
            self.reject_next = False
            msg = "write refused"
            raise PersistenceError(msg)
        super().update_content(section_id, content)


@pytest.fixture
def faq_section() -> Section:
    return Section(id="faq", type="faq-accordion", content=default_content("faq-accordion"))


def test_set_field_emits_copy_and_leaves_section_alone(faq_section: Section) -> None:
    recorder = Recorder()
    session = EditSession(faq_section, recorder)

    session.set_field("faqs.1.question", "Changed?")

    assert recorder.calls[-1][0] == "faq"
    assert recorder.calls[-1][1]["faqs"][1]["question"] == "Changed?"
    assert faq_section.content["faqs"][1]["question"] != "Changed?", (
        "the section is only changed through the callback"
    )
    recorder.calls[-1][1]["title"] = "mutated"
    assert session.content["title"] != "mutated", "emitted content is a copy"


def test_add_item_copies_shape_of_last_entry(faq_section: Section) -> None:
    session = EditSession(faq_section, Recorder())
    count = len(faq_section.content["faqs"])

    content = session.add_item("faqs")

    assert len(content["faqs"]) == count + 1
    assert content["faqs"][-1] == {"question": "", "answer": ""}


def test_add_item_on_empty_list_uses_default_shape() -> None:
    section = Section(id="p", type="pricing-cards", content={"plans": []})
    session = EditSession(section, Recorder())

    content = session.add_item("plans")

    (blank,) = content["plans"]
    assert set(blank) == set(default_content("pricing-cards")["plans"][0])
    assert all(value in ("", 0, False, []) for value in blank.values())


def test_add_item_creates_missing_list() -> None:
    session = EditSession(Section(id="m", type="mystery-widget"), Recorder())

    assert session.add_item("tags") == {"tags": [""]}


def test_remove_item_shifts_expanded_and_selected(faq_section: Section) -> None:
    session = EditSession(faq_section, Recorder())
    session.toggle_expanded("faqs", 0)
    session.toggle_expanded("faqs", 1)
    session.toggle_expanded("faqs", 3)
    session.select("faqs", 3)
    questions = [faq["question"] for faq in faq_section.content["faqs"]]

    content = session.remove_item("faqs", 1)

    assert [faq["question"] for faq in content["faqs"]] == questions[:1] + questions[2:]
    assert session.expanded["faqs"] == {0, 2}, "indices after the removal shift down"
    assert session.selected["faqs"] == 2


def test_remove_selected_item_clears_selection(faq_section: Section) -> None:
    session = EditSession(faq_section, Recorder())
    session.select("faqs", 0)

    session.remove_item("faqs", 0)

    assert session.selected["faqs"] is None


def test_remove_item_out_of_range(faq_section: Section) -> None:
    session = EditSession(faq_section, Recorder())

    with pytest.raises(IndexError):
        session.remove_item("faqs", 10)
    with pytest.raises(TypeError):
        session.remove_item("title", 0)


def test_toggle_expanded_flips_state(faq_section: Section) -> None:
    session = EditSession(faq_section, Recorder())

    assert session.toggle_expanded("faqs", 2) is True
    assert session.toggle_expanded("faqs", 2) is False


def test_apply_form_keeps_value_types() -> None:
    section = Section(
        id="s",
        type="stats-grid",
        content={"title": "T", "columns": 3, "dark": False, "ratio": 1.5},
    )
    session = EditSession(section, Recorder())

    content = session.apply_form({"title": "New", "columns": "4", "dark": "on", "ratio": ""})

    assert content == {"title": "New", "columns": 4, "dark": True, "ratio": 0.0}


def test_raw_json_errors_leave_content_unchanged(faq_section: Section) -> None:
    recorder = Recorder()
    session = EditSession(faq_section, recorder)
    before = session.content

    session.apply_raw_json("{broken")
    assert session.error is not None
    assert session.error.startswith("Invalid JSON")
    assert session.content is before
    assert not recorder.calls, "invalid JSON must not be saved"

    session.apply_raw_json('["a"]')
    assert session.error == "Content must be a JSON object"

    session.apply_raw_json('{"title": "Raw"}')
    assert session.error is None, "a valid save clears the error"
    assert recorder.calls == [("faq", {"title": "Raw"})]


def test_session_drives_store_updates(project: Project) -> None:
    store = SectionStore(project)
    session = EditSession(store.get("a"), store.update_section_content)

    session.set_field("subtitle", "Fresh")

    assert store.get("a").content == {"title": "Alpha", "subtitle": "Fresh"}
    assert store.get("a").order == 0


def test_field_helpers() -> None:
    assert blank_like([1, 2]) == []
    assert blank_like(2.5) == 0.0
    assert coerce_value(1, "2.5") == 2.5
    assert coerce_value(True, "no") is False
    assert coerce_value("x", None) == ""
    assert coerce_value(["a"], ["b"]) == ["b"]


def test_apply_form_rejects_non_numeric_text() -> None:
    recorder = Recorder()
    session = EditSession(
        Section(id="s", type="stats-grid", content={"title": "T", "count": 3}), recorder
    )

    content = session.apply_form({"title": "New", "count": "abc"})

    assert content == {"title": "T", "count": 3}, "a rejected form changes nothing"
    assert session.error == "Cannot set count: expected a number, got 'abc'"
    assert not recorder.calls

    session.apply_form({"count": "4"})
    assert session.error is None
    assert recorder.calls == [("s", {"title": "T", "count": 4})]


def test_failed_store_update_leaves_session_unchanged(faq_section: Section) -> None:
    repository = RejectingRepository([faq_section])
    store = SectionStore(Project(id="p", name="P", sections=[faq_section]), repository)
    session = EditSession(store.get("faq"), store.update_section_content)
    session.toggle_expanded("faqs", 2)
    session.select("faqs", 3)
    before = session.content

    with pytest.raises(SectionSyncError):
        session.remove_item("faqs", 0)

    assert session.content is before, "rejected edits are not kept locally"
    assert session.expanded["faqs"] == {2}
    assert session.selected["faqs"] == 3
    assert store.get("faq").content == before

    content = session.remove_item("faqs", 0)

    assert store.get("faq").content == content
    assert session.expanded["faqs"] == {1}
    assert session.selected["faqs"] == 2
