"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from pagekit._constants import DEFAULT_OUTPUT_PATH
from pagekit.content import PlacedSection, SectionTemplate
from pagekit.errors import SiteConfigError, UnknownThemeError
from pagekit.models import Project, Section, parse_timestamp, section_id_at
from pagekit.sections import REGISTRY
from pagekit.theme import (
    DEFAULT_THEME_ID,
    Theme,
    apply_custom_colors,
    apply_font_collection,
    get_theme,
    update_theme,
)

from .models import ExportConfig

if typ.TYPE_CHECKING:
    import datetime as dt

BRAND_ROLES = ("primary", "secondary", "accent")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_path(value: object | None) -> Path | None:
    text = _optional_str(value)
    return Path(text) if text else None


def _mapping(value: object | None, context: str) -> dict[str, typ.Any]:
    """Return ``value`` as a dict, treating ``None`` as empty."""
    match value:
        case None:
            return {}
        case dict():
            return dict(value)
        case _:
            msg = f"'{context}' must be a mapping, not {type(value).__name__}."
            raise SiteConfigError(msg)


def _sequence(value: object | None, context: str) -> list[typ.Any]:
    """Return ``value`` as a list, treating ``None`` as empty."""
    match value:
        case None:
            return []
        case list():
            return list(value)
        case _:
            msg = f"'{context}' must be a list, not {type(value).__name__}."
            raise SiteConfigError(msg)


def _timestamp(value: object | None, context: str) -> dt.datetime | None:
    try:
        return parse_timestamp(value)
    except (TypeError, ValueError) as exc:
        msg = f"'{context}' is not a valid timestamp: {value!r}"
        raise SiteConfigError(msg) from exc


def _order(value: object | None, position: int, owner: str) -> int:
    """Return an explicit integer order, or ``position`` when absent."""
    if value is None:
        return position
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        msg = f"{owner} has a non-integer order: {value!r}"
        raise SiteConfigError(msg) from exc


def _build_theme(payload: typ.Mapping[str, typ.Any]) -> Theme:
    """Resolve the ``theme`` block into a :class:`Theme`.

    The catalog theme named by ``base`` is taken first, then the font
    collection, then brand colors (recomputing their tints), then any other
    explicit colors, fonts, and shadows.
    """
    base_id = _optional_str(payload.get("base")) or DEFAULT_THEME_ID
    collection = _optional_str(payload.get("font_collection"))
    colors = _mapping(payload.get("colors"), "theme.colors")
    fonts = _mapping(payload.get("fonts"), "theme.fonts")
    shadows = _mapping(payload.get("shadows"), "theme.shadows")
    try:
        theme = get_theme(base_id)
        if collection:
            theme = apply_font_collection(theme, collection)
    except UnknownThemeError as exc:
        raise SiteConfigError(str(exc)) from exc

    brand = {role: _optional_str(colors.pop(role, None)) for role in BRAND_ROLES}
    theme = apply_custom_colors(theme, **brand)
    if colors or fonts or shadows:
        theme = update_theme(theme, colors=colors, fonts=fonts, shadows=shadows)
    return theme


def _build_export_config(payload: typ.Mapping[str, typ.Any]) -> ExportConfig:
    """Build the export destinations, defaulting to ``public/index.html``."""
    return ExportConfig(
        output=_optional_path(payload.get("output")) or Path(DEFAULT_OUTPUT_PATH),
        archive=_optional_path(payload.get("archive")),
        assets_dir=_optional_path(payload.get("assets_dir")),
    )


def _build_section(payload: object, position: int) -> Section:
    """Build one section entry; missing content falls back to type defaults."""
    entry = _mapping(payload, f"sections[{position}]")
    section_type = _optional_str(entry.get("type"))
    if not section_type:
        msg = f"Section at position {position} is missing 'type'."
        raise SiteConfigError(msg)
    section_id = section_id_at(entry, position)
    if "content" in entry:
        content = _mapping(entry["content"], f"sections[{position}].content")
    else:
        registered = REGISTRY.get(section_type)
        content = registered.default_content() if registered else {}
    order = _order(entry.get("order"), position, f"Section '{section_id}'")
    return Section(id=section_id, type=section_type, content=content, order=order)


def _build_sections(payload: list[typ.Any]) -> list[Section]:
    sections = [_build_section(entry, index) for index, entry in enumerate(payload)]
    seen: set[str] = set()
    for section in sections:
        if section.id in seen:
            msg = f"Duplicate section id '{section.id}'."
            raise SiteConfigError(msg)
        seen.add(section.id)
    return sections


def _build_project(
    payload: typ.Mapping[str, typ.Any], sections: list[Section]
) -> Project:
    """Build the project header around already-parsed sections."""
    created = _timestamp(payload.get("created_at"), "project.created_at")
    updated = _timestamp(payload.get("updated_at"), "project.updated_at")
    project = Project(
        id=_optional_str(payload.get("id")) or "site",
        name=_optional_str(payload.get("name")) or "Untitled site",
        updated_at=updated,
        sections=sections,
    )
    if created is not None:
        project.created_at = created
    return project


def _build_templates(payload: list[typ.Any]) -> list[SectionTemplate]:
    """Build shared section templates with their named variants."""
    templates: list[SectionTemplate] = []
    for index, raw in enumerate(payload):
        entry = _mapping(raw, f"templates[{index}]")
        template_id = _optional_str(entry.get("id"))
        if not template_id:
            msg = f"Template at position {index} is missing 'id'."
            raise SiteConfigError(msg)
        variants: dict[str, typ.Any] = {}
        for variant in _sequence(entry.get("variants"), f"templates[{index}].variants"):
            variant_entry = _mapping(variant, f"templates[{index}].variants")
            label = _optional_str(variant_entry.get("label"))
            if label:
                variants[label] = variant_entry.get("data")
        category = _optional_str(entry.get("category")) or "custom"
        templates.append(
            SectionTemplate(
                id=template_id,
                name=_optional_str(entry.get("name")) or template_id,
                category=category,
                default_data=entry.get("default_data"),
                variants=variants,
                type=_optional_str(entry.get("type")),
            )
        )
    return templates


def _build_placements(payload: list[typ.Any]) -> list[PlacedSection]:
    """Build template placements, defaulting ``order`` to list position."""
    placements: list[PlacedSection] = []
    for index, raw in enumerate(payload):
        entry = _mapping(raw, f"placements[{index}]")
        template_id = _optional_str(entry.get("template"))
        if not template_id:
            msg = f"Placement at position {index} is missing 'template'."
            raise SiteConfigError(msg)
        placement_id = _optional_str(entry.get("id")) or f"placement-{index + 1}"
        placements.append(
            PlacedSection(
                id=placement_id,
                template_id=template_id,
                variant=_optional_str(entry.get("variant")),
                custom_data=entry.get("custom_data"),
                order=_order(entry.get("order"), index, f"Placement '{placement_id}'"),
            )
        )
    return placements


__all__ = [
    "BRAND_ROLES",
    "_build_export_config",
    "_build_placements",
    "_build_project",
    "_build_section",
    "_build_sections",
    "_build_templates",
    "_build_theme",
    "_mapping",
    "_optional_path",
    "_optional_str",
    "_order",
    "_sequence",
]
