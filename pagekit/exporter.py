"""Static HTML export of a project.

The exporter turns a :class:`~pagekit.models.Project` and a
:class:`~pagekit.theme.Theme` into one self-contained HTML document. Section
fragments come from the same Jinja macros the live preview uses, rendered
with ``mode="export"``; the document shell adds the Google Fonts link, the
Tailwind and Font Awesome CDNs, the theme's ``:root`` custom properties, and
the inline script glue for menus, accordions, counters, sliders, filters,
the lightbox, and form confirmations.

Typical usage mirrors the CLI ``export`` command:

>>> from pagekit.config import load_site_config
>>> site = load_site_config("config/site.yaml")  # doctest: +SKIP
>>> SiteExporter(site.project, site.theme, site.export.output).run()  # doctest: +SKIP
PosixPath('public/index.html')

:func:`export_html` is pure. It never reads the clock or the filesystem, so
the same project and theme always produce the same bytes.
"""

from __future__ import annotations

import logging
import typing as typ
import urllib.parse
import zipfile
from pathlib import Path

from ._constants import (
    ARCHIVE_ASSETS_DIR,
    ARCHIVE_INDEX_NAME,
    GOOGLE_FONT_WEIGHTS,
    GOOGLE_FONTS_URL,
    SITE_DESCRIPTION,
)
from .render.environment import TemplateRenderer, default_renderer
from .sections.registry import REGISTRY

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import Project, Section
    from .sections.registry import SectionType
    from .theme import Theme

logger = logging.getLogger(__name__)

FragmentRenderer = typ.Callable[..., str]


def _dispatch_table(method: str) -> dict[str, FragmentRenderer]:
    return {tag: getattr(entry, method) for tag, entry in REGISTRY.items()}


# Both tables are derived from the registry, so a tag that previews always
# exports. ``check_parity`` guards against hand-edited tables.
DISPLAY_RENDERERS: dict[str, FragmentRenderer] = _dispatch_table("render_display")
EXPORT_GENERATORS: dict[str, FragmentRenderer] = _dispatch_table("render_export")


def check_parity(
    display: cabc.Mapping[str, object] | None = None,
    export: cabc.Mapping[str, object] | None = None,
) -> dict[str, list[str]]:
    """Report tags present in one dispatch table but not the other.

    Parameters
    ----------
    display, export : Mapping, optional
        Tables to compare. Default to :data:`DISPLAY_RENDERERS` and
        :data:`EXPORT_GENERATORS`.

    Returns
    -------
    dict[str, list[str]]
        ``{"missing_export": [...], "missing_display": [...]}``; both lists
        are empty when the tables agree.

    Examples
    --------
    >>> check_parity()
    {'missing_export': [], 'missing_display': []}
    >>> check_parity({"a": 1, "b": 2}, {"b": 2})
    {'missing_export': ['a'], 'missing_display': []}
    """
    display_tags = set(DISPLAY_RENDERERS if display is None else display)
    export_tags = set(EXPORT_GENERATORS if export is None else export)
    return {
        "missing_export": sorted(display_tags - export_tags),
        "missing_display": sorted(export_tags - display_tags),
    }


def google_fonts_url(theme: Theme) -> str:
    """Return the Google Fonts stylesheet URL for the theme's families.

    Examples
    --------
    >>> from pagekit.theme import get_theme
    >>> google_fonts_url(get_theme("blue-sky"))
    'https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700;800;900&display=swap'
    """
    families = [
        f"family={urllib.parse.quote_plus(name)}:wght@{GOOGLE_FONT_WEIGHTS}"
        for name in theme.fonts.families()
    ]
    return f"{GOOGLE_FONTS_URL}?{'&'.join([*families, 'display=swap'])}"


def _export_entry(section: Section) -> SectionType | None:
    entry = REGISTRY.get(section.type)
    if entry is None:
        logger.warning(
            "No export generator for section %s of type %r; writing placeholder",
            section.id,
            section.type,
        )
    return entry


def export_fragments(
    project: Project,
    theme: Theme,
    *,
    renderer: TemplateRenderer | None = None,
) -> list[str]:
    """Render the export fragment of every section in display order."""
    active = renderer or default_renderer()
    year = project.copyright_year()
    fragments: list[str] = []
    for section in project.ordered_sections():
        entry = _export_entry(section)
        if entry is None:
            fragments.append(active.render_fallback(section, mode="export"))
            continue
        fragments.append(
            entry.render_export(section, theme, renderer=active, year=year)
        )
    return fragments


def export_html(
    project: Project,
    theme: Theme,
    *,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Serialize ``project`` into a complete, self-contained HTML document.

    Parameters
    ----------
    project : Project
        Project whose sections are exported in ascending ``order``; ties keep
        their list position.
    theme : Theme
        Theme providing fonts and custom properties for the document.
    renderer : TemplateRenderer, optional
        Renderer to use; defaults to the packaged templates.

    Returns
    -------
    str
        The HTML document, ending with a newline.

    Notes
    -----
    Unknown section types never abort the export; they render the shared
    placeholder fragment and log a warning.
    """
    active = renderer or default_renderer()
    return active.render_page(
        "document.jinja",
        project=project,
        description=SITE_DESCRIPTION,
        fonts_url=google_fonts_url(theme),
        css_variables=theme.css_variables(),
        fragments=export_fragments(project, theme, renderer=active),
    )


class SiteExporter:
    """Write a project's exported document, or a zip bundle of it, to disk."""

    def __init__(
        self,
        project: Project,
        theme: Theme,
        output: Path | str,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Capture the export inputs.

        Parameters
        ----------
        project : Project
            Project to export.
        theme : Theme
            Theme applied to the document.
        output : Path or str
            Destination of the HTML file written by :meth:`run`.
        templates_dir : Path, optional
            Alternative template directory; defaults to the packaged one.
        """
        self.project = project
        self.theme = theme
        self.output = Path(output)
        self.renderer = (
            TemplateRenderer(templates_dir=templates_dir)
            if templates_dir is not None
            else default_renderer()
        )

    def render(self) -> str:
        """Return the exported document."""
        return export_html(self.project, self.theme, renderer=self.renderer)

    def run(self) -> Path:
        """Render and write the HTML document, returning the output path."""
        output_path = self.output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(), encoding="utf-8")
        logger.info(
            "Exported %d sections to %s", len(self.project.sections), output_path
        )
        return output_path

    def archive(self, path: Path | str, assets_dir: Path | str | None = None) -> Path:
        """Write a zip bundle holding ``index.html`` and optional uploads.

        Parameters
        ----------
        path : Path or str
            Destination of the zip file.
        assets_dir : Path or str, optional
            Directory whose files are copied under ``uploads/`` in the bundle.

        Returns
        -------
        Path
            Filesystem path of the written archive.

        Raises
        ------
        FileNotFoundError
            If ``assets_dir`` is given but is not a directory.
        """
        archive_path = Path(path)
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        assets = Path(assets_dir) if assets_dir is not None else None
        if assets is not None and not assets.is_dir():
            msg = f"Assets directory not found: {assets}"
            raise FileNotFoundError(msg)

        with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED) as bundle:
            bundle.writestr(ARCHIVE_INDEX_NAME, self.render())
            if assets is not None:
                for asset in _iter_assets(assets):
                    arcname = Path(ARCHIVE_ASSETS_DIR) / asset.relative_to(assets)
                    bundle.write(asset, arcname.as_posix())
        logger.info("Wrote export archive %s", archive_path)
        return archive_path


def _iter_assets(root: Path) -> cabc.Iterator[Path]:
    for candidate in sorted(root.rglob("*")):
        if candidate.is_file():
            yield candidate


__all__ = [
    "DISPLAY_RENDERERS",
    "EXPORT_GENERATORS",
    "SiteExporter",
    "check_parity",
    "export_fragments",
    "export_html",
    "google_fonts_url",
]
