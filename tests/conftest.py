"""Shared test fixtures for folio."""

import os
import textwrap
from pathlib import Path

import pytest

from folio.compiler.events import MathMode
from folio.config.models import FolioConfig, OutputConfig, SiteConfig
from folio.errors import MathRenderError


def make_doc(
    title: str,
    date: str = "2024-01-01",
    body: str = "Some text.\n",
    description: str = "",
    tags: list[str] | None = None,
) -> str:
    """Build a document with TOML frontmatter."""
    lines = ["---", f'title = "{title}"', f'description = "{description}"']
    if tags is not None:
        lines.append("tags = [" + ", ".join(f'"{t}"' for t in tags) + "]")
    lines.append(f"date = {date}")
    lines.append("---")
    return "\n".join(lines) + "\n" + body


def set_mtime(path: Path, timestamp: int) -> None:
    os.utime(path, (timestamp, timestamp))


def echo_math(expression: str, mode: MathMode) -> str:
    return f'<math data-mode="{mode.value}">{expression}</math>'


def failing_math(expression: str, mode: MathMode) -> str:
    raise MathRenderError("Undefined control sequence: \\oops")


@pytest.fixture
def sample_config(tmp_path):
    """Config rooted in a temp directory with an empty content dir."""
    (tmp_path / "md").mkdir()
    return FolioConfig(
        site=SiteConfig(
            content_dir=str(tmp_path / "md"),
            static_dir=str(tmp_path / "static"),
            template_dir=str(tmp_path / "template"),
        ),
        output=OutputConfig(base_dir=str(tmp_path / "build")),
    )


@pytest.fixture
def make_site(sample_config):
    """Write ``{relative_path: content}`` under the content dir; returns the root."""
    root = Path(sample_config.site.content_dir)

    def _make(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content) if content.startswith("\n") else content)
        return root

    return _make
