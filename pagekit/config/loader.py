"""Load a site file into typed dataclasses."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from pagekit.content import resolve_placements
from pagekit.errors import SiteConfigError
from pagekit.models import densify

from .helpers import (
    _build_export_config,
    _build_placements,
    _build_project,
    _build_sections,
    _build_templates,
    _build_theme,
    _mapping,
    _sequence,
)
from .models import SiteConfig

logger = logging.getLogger(__name__)


def read_site_file(path: Path) -> dict[str, typ.Any]:
    """Return the raw top-level mapping of the site file at ``path``.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    SiteConfigError
        If the YAML cannot be parsed or is not a mapping.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{path}' is not valid YAML: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    return dict(loaded)


def load_site_config(path: Path | str) -> SiteConfig:
    """Load the YAML site file describing a project, its theme, and export.

    Parameters
    ----------
    path : Path or str
        Filesystem path to the site file (for example ``config/site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with densely ordered sections and a resolved
        theme.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the YAML is malformed or a block has the wrong shape (for example
        a section without ``type`` or an unknown theme id).

    Examples
    --------
    >>> from pagekit.config import load_site_config
    >>> site = load_site_config("config/site.yaml")  # doctest: +SKIP
    >>> [section.order for section in site.project.sections]  # doctest: +SKIP
    [0, 1, 2]
    """
    config_path = Path(path)
    raw = read_site_file(config_path)

    templates = _build_templates(_sequence(raw.get("templates"), "templates"))
    placements = _build_placements(_sequence(raw.get("placements"), "placements"))
    if placements:
        if raw.get("sections"):
            logger.warning(
                "%s defines both sections and placements; using placements",
                config_path,
            )
        sections = resolve_placements(templates, placements)
    else:
        sections = densify(_build_sections(_sequence(raw.get("sections"), "sections")))

    project = _build_project(_mapping(raw.get("project"), "project"), sections)
    return SiteConfig(
        project=project,
        theme=_build_theme(_mapping(raw.get("theme"), "theme")),
        export=_build_export_config(_mapping(raw.get("export"), "export")),
        templates=templates,
        placements=placements,
        path=config_path,
    )


__all__ = ["load_site_config", "read_site_file"]
