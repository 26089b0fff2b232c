from pydantic import BaseModel, Field
from typing import Literal


class SiteConfig(BaseModel):
    content_dir: str = "md"
    static_dir: str = "static"
    template_dir: str = "template"
    layout: str = "layout.html"
    info_file: str = "index.toml"
    document_extensions: list[str] = [".md"]
    frontmatter_format: Literal["toml", "yaml"] = "toml"
    sort_entries: bool = True


class MarkdownConfig(BaseModel):
    tables: bool = True
    footnotes: bool = True
    strikethrough: bool = True
    tasklists: bool = True
    math: bool = True
    html: bool = True


class OutputConfig(BaseModel):
    base_dir: str = "build"
    clean: bool = True


class FolioConfig(BaseModel):
    site: SiteConfig = Field(default_factory=SiteConfig)
    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
