"""Shared pytest fixtures for the unigen test suite.

Provides reusable fixtures for:
- An isolated output directory and matching ``Config``
- The bundled ``TemplateRenderer``
- A scratch template directory for renderer edge cases
- Sample field and operation spec strings
"""

from __future__ import annotations

from pathlib import Path

import pytest

from unigen.config import Config
from unigen.renderer import TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Empty directory that generated files are written into."""
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def config(output_dir: Path) -> Config:
    """Config anchored at ``output_dir`` with the bundled templates."""
    return Config(output_dir=output_dir)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ``UNIGEN_*`` variables from the developer's shell out of tests."""
    for name in ("UNIGEN_TEMPLATE_DIR", "UNIGEN_OUTPUT_DIR", "UNIGEN_STRICT_SPECS"):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer over the bundled templates."""
    return TemplateRenderer()


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Scratch template directory with a few tiny templates."""
    tdir = tmp_path / "templates"
    tdir.mkdir()
    (tdir / "hello.u.j2").write_text("Hello {{ name | pascal_case }}!\n", encoding="utf-8")
    (tdir / "second.u.j2").write_text("second {{ name }}\n", encoding="utf-8")
    (tdir / "broken.u.j2").write_text("{% if %}\n", encoding="utf-8")
    (tdir / "latin1.u.j2").write_bytes(b"-- caf\xe9 {{ name }}\n")
    return tdir


@pytest.fixture
def scratch_renderer(template_dir: Path) -> TemplateRenderer:
    return TemplateRenderer(template_dir)


# ---------------------------------------------------------------------------
# Sample specs
# ---------------------------------------------------------------------------


@pytest.fixture
def workout_fields() -> str:
    return "name:Text,reps:Nat,weight:Optional Float,tags:[Text]"


@pytest.fixture
def repository_operations() -> str:
    return (
        '[{"name":"findByName","inputType":"Text","outputType":"Optional Workout"},'
        '{"name":"countAll","inputType":"()","outputType":"Nat"}]'
    )
