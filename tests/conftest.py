"""Shared fixtures for the pagekit test suite."""

from __future__ import annotations

import datetime as dt
import textwrap
import typing as typ

import pytest

from pagekit.models import Project, Section
from pagekit.theme import get_theme

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pagekit.theme import Theme

FIXED_NOW = dt.datetime(2025, 6, 1, 12, 0, tzinfo=dt.UTC)

SITE_YAML = textwrap.dedent(
    """\
    # Test site
    project:
      id: test-site
      name: Test Site
      created_at: "2023-02-01T00:00:00Z"
      updated_at: "2024-07-01T00:00:00Z"

    theme:
      base: blue-sky

    export:
      output: public/index.html

    sections:
      - id: hero
        type: hero-split
        content:
          title: Hello there
          buttonText: Start
      - id: cta
        type: cta-gradient
      - id: footer
        type: footer-minimal
        content:
          companyName: Test Co
    """
)


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: dt.datetime = FIXED_NOW) -> None:
        self.current = start

    def __call__(self) -> dt.datetime:
        self.current += dt.timedelta(seconds=1)
        return self.current


class SequentialIds:
    """Id factory returning ``s1``, ``s2`` and so on."""

    def __init__(self, prefix: str = "s") -> None:
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}{self.count}"


@pytest.fixture
def clock() -> StepClock:
    """Return a clock starting at :data:`FIXED_NOW`."""
    return StepClock()


@pytest.fixture
def ids() -> SequentialIds:
    """Return a sequential id factory."""
    return SequentialIds()


@pytest.fixture
def theme() -> Theme:
    """Return the default catalog theme."""
    return get_theme("blue-sky")


@pytest.fixture
def project() -> Project:
    """Return a three-section project with fixed timestamps."""
    return Project(
        id="demo",
        name="Demo",
        created_at=dt.datetime(2023, 1, 1, tzinfo=dt.UTC),
        updated_at=dt.datetime(2024, 5, 1, tzinfo=dt.UTC),
        sections=[
            Section(id="a", type="hero-split", content={"title": "Alpha"}, order=0),
            Section(id="b", type="features-grid", content={"title": "Beta"}, order=1),
            Section(id="c", type="cta-gradient", content={"title": "Gamma"}, order=2),
        ],
    )


@pytest.fixture
def site_file(tmp_path: Path) -> Path:
    """Write a small site file and return its path."""
    path = tmp_path / "site.yaml"
    path.write_text(SITE_YAML, encoding="utf-8")
    return path
