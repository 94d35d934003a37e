"""Edit-mode state for one section.

An :class:`EditSession` holds the working copy of a section's content while
its edit form is open. Every change produces a new content mapping and hands
it to ``on_update`` (normally :meth:`pagekit.store.SectionStore.update_section_content`).
List removals also shift the position-keyed UI state (expanded items and the
selected item) so it keeps pointing at the same entries.
"""

from __future__ import annotations

import copy
import json
import logging
import typing as typ

from pagekit.content.merge import get_path, set_path
from pagekit.sections.defaults import default_content

from .fields import blank_like, coerce_value

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagekit.models import Section

logger = logging.getLogger(__name__)

UpdateCallback = typ.Callable[[str, dict[str, typ.Any]], object]


class EditSession:
    """Apply editor actions to a section and report each change."""

    def __init__(self, section: Section, on_update: UpdateCallback) -> None:
        self.section = section
        self.on_update = on_update
        self.content: dict[str, typ.Any] = copy.deepcopy(section.content)
        self.error: str | None = None
        self.expanded: dict[str, set[int]] = {}
        self.selected: dict[str, int | None] = {}

    def set_field(self, path: str, value: typ.Any) -> dict[str, typ.Any]:
        """Replace the value at dotted ``path``."""
        return self._commit(set_path(self.content, path, value))

    def add_item(self, field: str) -> dict[str, typ.Any]:
        """Append a blank entry to the list at ``field``.

        The blank copies the shape of the list's last entry, or of the first
        entry of the type's default list when the list is empty.
        """
        items = self._list_at(field)
        sample = items[-1] if items else self._default_sample(field)
        path = f"{field}.{len(items)}"
        return self._commit(set_path(self.content, path, blank_like(sample)))

    def remove_item(self, field: str, index: int) -> dict[str, typ.Any]:
        """Remove entry ``index`` from the list at ``field``.

        Raises
        ------
        IndexError
            If ``index`` is outside the list.
        """
        items = self._list_at(field)
        if not 0 <= index < len(items):
            msg = f"No item {index} in '{field}' ({len(items)} items)"
            raise IndexError(msg)
        remaining = [item for position, item in enumerate(items) if position != index]
        content = self._commit(set_path(self.content, field, remaining))
        self._reindex(field, index)
        return content

    def toggle_expanded(self, field: str, index: int) -> bool:
        """Expand or collapse list item ``index``; return whether it is open."""
        opened = self.expanded.setdefault(field, set())
        if index in opened:
            opened.discard(index)
            return False
        opened.add(index)
        return True

    def select(self, field: str, index: int | None) -> None:
        """Mark list item ``index`` of ``field`` as the selected one."""
        self.selected[field] = index

    def apply_form(self, form: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
        """Apply submitted form values keyed by dotted path.

        Values are coerced to the type of the value they replace, so a number
        field stays numeric and a checkbox stays boolean. A value that cannot
        be coerced, or a path that cannot be set, leaves the content unchanged
        and records the problem in :attr:`error`.
        """
        updated = self.content
        for path, raw in form.items():
            try:
                current = get_path(updated, path)
                updated = set_path(updated, path, coerce_value(current, raw))
            except (ValueError, IndexError) as exc:
                self.error = f"Cannot set {path}: {exc}"
                logger.debug("Rejected form value for section %s: %s", self.section.id, exc)
                return self.content
        return self._commit(updated)

    def apply_raw_json(self, text: str) -> dict[str, typ.Any]:
        """Replace the whole content from the raw JSON editor.

        Invalid JSON, or JSON that is not an object, leaves the content
        unchanged and records the problem in :attr:`error`.
        """
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as exc:
            self.error = f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
            logger.debug("Rejected raw JSON for section %s: %s", self.section.id, exc)
            return self.content
        if not isinstance(decoded, dict):
            self.error = "Content must be a JSON object"
            return self.content
        return self._commit(decoded)

    def _commit(self, content: dict[str, typ.Any]) -> dict[str, typ.Any]:
        # Local state only changes once the update has been accepted.
        self.on_update(self.section.id, copy.deepcopy(content))
        self.content = content
        self.error = None
        return content

    def _list_at(self, field: str) -> list[typ.Any]:
        items = get_path(self.content, field)
        if items is None:
            return []
        if not isinstance(items, list):
            msg = f"Field '{field}' is not a list"
            raise TypeError(msg)
        return items

    def _default_sample(self, field: str) -> typ.Any:
        defaults = get_path(default_content(self.section.type), field)
        if isinstance(defaults, list) and defaults:
            return defaults[0]
        return ""

    def _reindex(self, field: str, removed: int) -> None:
        opened = self.expanded.get(field)
        if opened is not None:
            self.expanded[field] = {
                position if position < removed else position - 1
                for position in opened
                if position != removed
            }
        chosen = self.selected.get(field)
        if chosen is not None:
            if chosen == removed:
                self.selected[field] = None
            elif chosen > removed:
                self.selected[field] = chosen - 1


__all__ = ["EditSession", "UpdateCallback"]
