from .loader import DEFAULT_CONFIG_TEMPLATE, load_config
from .models import (
    FolioConfig,
    MarkdownConfig,
    OutputConfig,
    SiteConfig,
)

__all__ = [
    "DEFAULT_CONFIG_TEMPLATE",
    "FolioConfig",
    "MarkdownConfig",
    "OutputConfig",
    "SiteConfig",
    "load_config",
]
