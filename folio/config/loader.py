"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import FolioConfig


def load_config(cli_path: str | None = None) -> FolioConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./folio.yaml"),
        Path.home() / ".folio" / "config.yaml",
    ]

    if cli_path and not Path(cli_path).exists():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return FolioConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return FolioConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `folio config init`
DEFAULT_CONFIG_TEMPLATE = """\
# folio.yaml

# Source layout
site:
  content_dir: "md"              # documents and subdirectories
  static_dir: "static"           # copied verbatim into the output root
  template_dir: "template"       # overrides for the bundled theme
  layout: "layout.html"
  info_file: "index.toml"        # per-directory title/description
  document_extensions: [".md"]
  frontmatter_format: "toml"     # toml | yaml
  sort_entries: true             # process directory entries in name order

# Markdown extensions
markdown:
  tables: true
  footnotes: true
  strikethrough: true
  tasklists: true
  math: true                     # $inline$ and $$display$$ math
  html: true                     # allow raw HTML in documents

# Output
output:
  base_dir: "build"
  clean: true                    # remove base_dir before building

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
