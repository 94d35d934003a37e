"""Cyclopts CLI entrypoint for exporting and editing pagekit sites.

The ``pagekit`` console script reads a site file (``config/site.yaml`` by
default), exports it as a single static HTML document or zip bundle, renders
an editor preview canvas, and applies section store operations (add,
duplicate, remove, move, edit) that are written back to the site file.

Examples
--------
Export the default site:

>>> from pagekit.cli import main
>>> main()  # doctest: +SKIP

Append a pricing section and move it to the top:

>>> from pagekit.cli import app
>>> app(["add", "--type", "pricing-cards"])  # doctest: +SKIP
>>> app(["move", "--section-id", "abc123", "--to", "0"])  # doctest: +SKIP
"""

from __future__ import annotations

import contextlib
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml.comments import CommentedMap

from ._constants import DEFAULT_CONFIG_PATH
from .config import SiteConfigError, load_site_config
from .errors import (
    OrderInvariantError,
    PersistenceError,
    SectionNotFoundError,
    SectionSyncError,
    UnknownThemeError,
)
from .exporter import SiteExporter
from .render import EditSession, render_canvas
from .sections import catalog_groups
from .storage import ProjectDocument, YamlSectionRepository, upsert_key
from .store import SectionStore
from .theme import FONT_COLLECTIONS, THEME_CATALOG, get_font_collection, get_theme

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteConfig

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_PATH)
DEFAULT_PREVIEW = Path("public/preview.html")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)

app = App(name="pagekit", config=cyclopts.config.Env("PAGEKIT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to the site file", env_var="PAGEKIT_CONFIG")
]
SectionIdOption = typ.Annotated[str, Parameter(help="Id of the section to change")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@contextlib.contextmanager
def _reported_errors() -> cabc.Iterator[None]:
    """Turn expected failures into a one-line message and exit status 1."""
    try:
        yield
    except (
        FileNotFoundError,
        SectionSyncError,
        SectionNotFoundError,
        OrderInvariantError,
        PersistenceError,
        SiteConfigError,
        UnknownThemeError,
        IndexError,
    ) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _materialize_placements(site: SiteConfig) -> None:
    """Replace legacy ``placements`` in the site file with resolved sections."""
    if not site.uses_placements or site.path is None:
        return
    document = ProjectDocument(site.path)
    payload = document.load()
    payload["sections"] = [section.to_dict() for section in site.project.sections]
    payload.pop("placements", None)
    document.save(payload)
    logger.info(
        "Converted %d placements in %s into sections",
        len(site.placements),
        site.path,
    )


def _open_store(config: Path) -> SectionStore:
    """Load ``config`` and return a store persisting back to it."""
    site = load_site_config(config)
    _materialize_placements(site)
    return SectionStore(site.project, YamlSectionRepository(config))


def _record_update(config: Path, store: SectionStore) -> None:
    """Write the project's ``updated_at`` stamp back to the site file."""
    stamp = store.project.updated_at
    if stamp is None:
        return
    document = ProjectDocument(config)
    payload = document.load()
    project = payload.get("project")
    if project is None:
        upsert_key(payload, "project", {"updated_at": stamp.isoformat()}, ())
    else:
        upsert_key(project, "updated_at", stamp.isoformat(), ("created_at", "name", "id"))
    document.save(payload)


@app.command(help="Export the site as one static HTML document.")
def export(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path | None, Parameter(help="Override the output HTML file")
    ] = None,
    archive: typ.Annotated[
        Path | None, Parameter(help="Also write a zip bundle to this path")
    ] = None,
) -> None:
    """Render the exported document and optionally a zip bundle.

    Parameters
    ----------
    config : Path, optional
        Site file to export (overridable via ``PAGEKIT_CONFIG``).
    output : Path or None, optional
        Destination HTML file; defaults to ``export.output`` in the site file.
    archive : Path or None, optional
        Destination zip file; defaults to ``export.archive`` when set.
    """
    with _reported_errors():
        site = load_site_config(config)
        exporter = SiteExporter(site.project, site.theme, output or site.export.output)
        written = exporter.run()
        print(f"wrote {_format_path(written)}")
        bundle = archive or site.export.archive
        if bundle is not None:
            archive_path = exporter.archive(bundle, site.export.assets_dir)
            print(f"wrote {_format_path(archive_path)}")


@app.command(help="Render the editor canvas preview page.")
def preview(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path, Parameter(help="Where to write the preview page")
    ] = DEFAULT_PREVIEW,
    editing: typ.Annotated[
        list[str] | None,
        Parameter(help="Section ids to show as edit forms", consume_multiple=True),
    ] = None,
) -> None:
    """Write a canvas showing every section, some of them in edit mode."""
    with _reported_errors():
        site = load_site_config(config)
    html = render_canvas(
        site.project.sections,
        site.theme,
        editing or (),
        title=site.project.name,
        year=site.project.copyright_year(),
    )
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="List the section types offered by the picker.")
def catalog() -> None:
    """Print section types grouped as the picker shows them."""
    for group, entries in catalog_groups().items():
        print(group)
        for entry in entries:
            print(f"  {entry.type:<24} {entry.name}")


@app.command(help="List catalog themes and font collections.")
def themes() -> None:
    """Print theme ids with their brand colors, then font collections."""
    print("Themes")
    for theme in THEME_CATALOG:
        colors = theme.colors
        print(
            f"  {theme.id:<16} {theme.name:<16} "
            f"{colors.primary} {colors.secondary} {colors.accent}"
        )
    print("Font collections")
    for collection in FONT_COLLECTIONS:
        families = ", ".join(collection.fonts.families())
        print(f"  {collection.id:<16} {collection.name:<16} {families}")


@app.command(help="Append a section with default content.")
def add(
    *,
    type_: typ.Annotated[str, Parameter(name="--type", help="Section type tag")],
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Append a section of ``type_`` and persist it to the site file."""
    with _reported_errors():
        store = _open_store(config)
        section = store.add_section(type_)
        _record_update(config, store)
    print(f"added {section.type} section {section.id} at position {section.order}")


@app.command(help="Duplicate a section directly after itself.")
def duplicate(*, section_id: SectionIdOption, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Insert a copy of ``section_id`` right after it."""
    with _reported_errors():
        store = _open_store(config)
        clone = store.duplicate_section(section_id)
        _record_update(config, store)
    print(f"duplicated {section_id} as {clone.id} at position {clone.order}")


@app.command(help="Remove a section.")
def remove(*, section_id: SectionIdOption, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Delete ``section_id`` and renumber the remaining sections."""
    with _reported_errors():
        store = _open_store(config)
        store.delete_section(section_id)
        _record_update(config, store)
    print(f"removed {section_id}")


@app.command(help="Move a section to a position, or one step up or down.")
def move(
    *,
    section_id: SectionIdOption,
    to: typ.Annotated[int | None, Parameter(help="Target position (0-based)")] = None,
    up: bool = False,
    down: bool = False,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Reorder ``section_id``; exactly one of ``to``, ``up`` or ``down``."""
    chosen = sum((to is not None, up, down))
    if chosen != 1:
        print("error: pass exactly one of --to, --up or --down", file=sys.stderr)
        raise SystemExit(2)
    with _reported_errors():
        store = _open_store(config)
        if to is not None:
            store.move_to(section_id, to)
            moved = True
        elif up:
            moved = store.move_up(section_id)
        else:
            moved = store.move_down(section_id)
        if moved:
            _record_update(config, store)
        position = store.index_of(section_id)
    verb = "moved" if moved else "kept"
    print(f"{verb} {section_id} at position {position}")


@app.command(help="Set one content field of a section.")
def edit(
    *,
    section_id: SectionIdOption,
    field: typ.Annotated[
        str, Parameter(help="Dotted content path, e.g. services.0.title")
    ],
    value: typ.Annotated[str, Parameter(help="New value")],
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Update ``field`` of ``section_id``, keeping the old value's type."""
    with _reported_errors():
        store = _open_store(config)
        session = EditSession(store.get(section_id), store.update_section_content)
        session.apply_form({field: value})
        if session.error is not None:
            print(f"error: {session.error}", file=sys.stderr)
            raise SystemExit(1)
        _record_update(config, store)
    print(f"updated {section_id}.{field}")


@app.command(name="set-theme", help="Change the theme block of the site file.")
def set_theme(
    *,
    theme: typ.Annotated[str | None, Parameter(help="Catalog theme id")] = None,
    font_collection: typ.Annotated[
        str | None, Parameter(help="Font collection id")
    ] = None,
    primary: str | None = None,
    secondary: str | None = None,
    accent: str | None = None,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Rewrite the ``theme`` block in place, keeping comments and key order.

    Choosing a new base theme drops custom colors, fonts, and shadows so the
    catalog scheme applies in full; brand colors passed alongside are kept.
    """
    with _reported_errors():
        if theme:
            get_theme(theme)
        if font_collection:
            get_font_collection(font_collection)
        document = ProjectDocument(config)
        payload = document.load()
        block = payload.get("theme")
        if block is None:
            upsert_key(payload, "theme", CommentedMap(), ("project",))
            block = payload["theme"]
        if theme:
            upsert_key(block, "base", theme, ())
            for key in ("colors", "fonts", "shadows"):
                block.pop(key, None)
        if font_collection:
            upsert_key(block, "font_collection", font_collection, ("base",))
        brand = {
            role: color
            for role, color in (
                ("primary", primary),
                ("secondary", secondary),
                ("accent", accent),
            )
            if color
        }
        if brand:
            colors = block.get("colors")
            if colors is None:
                upsert_key(block, "colors", CommentedMap(), ("font_collection", "base"))
                colors = block["colors"]
            for role, color in brand.items():
                colors[role] = color
        document.save(payload)
        resolved = load_site_config(config).theme
    print(f"theme {resolved.id}: primary {resolved.colors.primary}")


@app.meta.default
def launcher(
    *tokens: typ.Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: typ.Annotated[
        str, Parameter(help="Logging level", env_var="PAGEKIT_LOG_LEVEL")
    ] = "WARNING",
) -> object:
    """Configure logging, then dispatch to the requested command."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)
    return app(tokens)


def main() -> None:
    """Invoke the Cyclopts application behind the ``pagekit`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app.meta()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
