"""CLI entry point for folio."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax

from folio.config import DEFAULT_CONFIG_TEMPLATE, FolioConfig, load_config
from folio.errors import FolioError
from folio.log import configure_logging
from folio.site import build_site

app = typer.Typer(
    name="folio",
    help="Compile a tree of markdown notes into a static HTML site.",
)

config_app = typer.Typer(help="Manage folio configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: FolioConfig | None = None


def _get_config() -> FolioConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to folio.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def build(
    content: Annotated[
        str | None, typer.Option("--content", help="Override the content directory")
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Override the output directory")
    ] = None,
    static: Annotated[
        str | None, typer.Option("--static", help="Override the static assets directory")
    ] = None,
    templates: Annotated[
        str | None, typer.Option("--templates", help="Override the template directory")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every write")] = False,
) -> None:
    """Rebuild the whole site."""
    cfg = _get_config()

    site_updates = {
        key: value
        for key, value in (("content_dir", content), ("static_dir", static), ("template_dir", templates))
        if value is not None
    }
    if site_updates:
        cfg = cfg.model_copy(update={"site": cfg.site.model_copy(update=site_updates)})
    if output:
        cfg = cfg.model_copy(update={"output": cfg.output.model_copy(update={"base_dir": output})})

    configure_logging("debug" if verbose else cfg.log_level, cfg.log_format)

    try:
        report = build_site(cfg)
    except FolioError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    rprint(Panel(
        f"[dim]Content:[/dim]      {cfg.site.content_dir}\n"
        f"[dim]Output:[/dim]       {cfg.output.base_dir}\n"
        f"[dim]Documents:[/dim]    {report.documents}\n"
        f"[dim]Directories:[/dim]  {report.directories}\n"
        f"[dim]Time:[/dim]         {report.duration * 1000:.0f}ms",
        title="Build Complete",
        border_style="green",
    ))


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default folio.yaml in current directory."""
    target = Path("folio.yaml")
    if target.exists() and not force:
        rprint("[yellow]folio.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
