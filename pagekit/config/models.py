"""Typed dataclasses describing a pagekit site file."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from pagekit._constants import DEFAULT_OUTPUT_PATH
from pagekit.content import PlacedSection, SectionTemplate  # noqa: TC001
from pagekit.errors import SiteConfigError
from pagekit.models import Project  # noqa: TC001 - used for runtime type metadata
from pagekit.theme import Theme  # noqa: TC001


@dc.dataclass(slots=True)
class ExportConfig:
    """Where ``pagekit export`` writes its artefacts."""

    output: Path = dc.field(default_factory=lambda: Path(DEFAULT_OUTPUT_PATH))
    archive: Path | None = None
    assets_dir: Path | None = None


@dc.dataclass(slots=True)
class SiteConfig:
    """A loaded site file: project, resolved theme, and export settings.

    Attributes
    ----------
    project : Project
        Project whose sections are densely ordered.
    theme : Theme
        Catalog theme with font collection, custom colors, fonts, and shadows
        applied.
    export : ExportConfig
        Output locations for the exported document and archive.
    templates : list[SectionTemplate]
        Shared section templates declared in the file.
    placements : list[PlacedSection]
        Template placements; when present they supply the project sections.
    path : Path, optional
        File the configuration was read from.
    """

    project: Project
    theme: Theme
    export: ExportConfig = dc.field(default_factory=ExportConfig)
    templates: list[SectionTemplate] = dc.field(default_factory=list)
    placements: list[PlacedSection] = dc.field(default_factory=list)
    path: Path | None = None

    @property
    def uses_placements(self) -> bool:
        """Return whether the sections were resolved from placements."""
        return bool(self.placements)


__all__ = ["ExportConfig", "SiteConfig", "SiteConfigError"]
