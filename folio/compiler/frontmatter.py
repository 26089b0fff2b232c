"""Frontmatter extraction: ``---`` delimited TOML or YAML ahead of the body."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Literal

import yaml
from pydantic import ValidationError

from folio.errors import IoError, MalformedFrontmatter, StructuredDataError
from folio.models import Frontmatter

DELIMITER = "---"

StructuredFormat = Literal["toml", "yaml"]

_SUFFIX_FORMATS: dict[str, StructuredFormat] = {
    ".toml": "toml",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def split_frontmatter(raw_text: str) -> tuple[str, str]:
    """Split *raw_text* into ``(metadata_block, body)``.

    The first line must be the delimiter. The closing delimiter is the first
    ``---`` found anywhere after it; the body is everything that follows.
    """
    lines = [line.removesuffix("\r") for line in raw_text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    if not lines or lines[0] != DELIMITER:
        raise MalformedFrontmatter("missing opening delimiter")

    rest = "\n".join(lines[1:])
    metadata, found, body = rest.partition(DELIMITER)
    if not found:
        raise MalformedFrontmatter("missing closing delimiter")
    return metadata, body


def parse_structured(text: str, fmt: StructuredFormat = "toml") -> Frontmatter:
    """Deserialize a metadata block and validate it as :class:`Frontmatter`."""
    try:
        if fmt == "yaml":
            data = yaml.safe_load(text) or {}
        else:
            data = tomllib.loads(text)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise StructuredDataError(f"invalid {fmt.upper()}: {e}") from e

    if not isinstance(data, dict):
        raise StructuredDataError(f"expected a {fmt.upper()} table, got {type(data).__name__}")

    try:
        return Frontmatter.model_validate(data)
    except ValidationError as e:
        raise StructuredDataError(_summarize(e)) from e


def parse_structured_file(path: Path) -> Frontmatter:
    """Parse a directory-info file, picking the format from its suffix."""
    fmt = _SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise StructuredDataError(f"unsupported metadata file type {path.suffix!r}", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise IoError(path, e) from e
    try:
        return parse_structured(text, fmt)
    except StructuredDataError as e:
        raise e.at(path)


def extract(raw_text: str, fmt: StructuredFormat = "toml") -> tuple[Frontmatter, str]:
    """Return the parsed frontmatter and the markdown body of a document."""
    metadata, body = split_frontmatter(raw_text)
    return parse_structured(metadata, fmt), body


def _summarize(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "invalid frontmatter (" + "; ".join(parts) + ")"
