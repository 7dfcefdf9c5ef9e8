"""CLI commands for rmkit."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TransferSpeedColumn,
)

from rmkit.errors import ScaffoldError
from rmkit.keyboard import load_project_info
from rmkit.models.project import ArchiveSource
from rmkit.models.settings import RmkitSettings
from rmkit.pipeline import ScaffoldPipeline, ScaffoldResult
from rmkit.template.fetcher import ProgressCallback

console = Console()


def get_pipeline(
    settings: RmkitSettings,
    template_url: str | None,
    progress: ProgressCallback | None,
) -> ScaffoldPipeline:
    source = ArchiveSource(url=template_url) if template_url else None
    return ScaffoldPipeline(settings=settings, source=source, progress=progress)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """rmkit - Create RMK keyboard firmware projects."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = RmkitSettings.load(config_path)
    except (yaml.YAMLError, ValidationError) as e:
        console.print(f"[red]Error (config): {escape(str(e))}[/red]")
        sys.exit(1)


@main.command()
@click.option(
    "--keyboard-toml-path",
    "-k",
    type=click.Path(path_type=Path),
    default=Path("keyboard.toml"),
    help="Path to the keyboard.toml file",
)
@click.option(
    "--vial-json-path",
    "-v",
    type=click.Path(path_type=Path),
    default=Path("vial.json"),
    help="Path to the vial.json file",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory the project folder is created in",
)
@click.option("--template-url", default=None, help="Override the template archive URL")
@click.pass_context
def create(
    ctx: click.Context,
    keyboard_toml_path: Path,
    vial_json_path: Path,
    output_dir: Path,
    template_url: str | None,
) -> None:
    """Create a firmware project from keyboard.toml and vial.json."""
    settings: RmkitSettings = ctx.obj["settings"]

    try:
        project = load_project_info(keyboard_toml_path, output_dir.absolute(), settings.boards)
    except ScaffoldError as e:
        console.print(f"[red]Error ({e.stage}): {escape(str(e))}[/red]")
        sys.exit(1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(
            f"Download project template for {project.remote_folder}...", total=None
        )

        def on_chunk(downloaded: int, total: int | None, variant: str) -> None:
            progress.update(task, completed=downloaded, total=total)

        pipeline = get_pipeline(settings, template_url, on_chunk)

        async def run() -> ScaffoldResult:
            return await pipeline.run(project, keyboard_toml_path, vial_json_path)

        try:
            result = asyncio.run(run())
        except ScaffoldError as e:
            progress.stop()
            stage = pipeline.failed_stage.value if pipeline.failed_stage else e.stage
            console.print(f"[red]Error while {stage}: {escape(str(e))}[/red]")
            console.print(f"[dim]Partial output left in {escape(str(project.target_dir))}[/dim]")
            sys.exit(1)

    console.print(f"[green]Project created, path: {result.target_dir}[/green]")
    if result.rewritten:
        console.print(f"[dim]Filled in project name in {len(result.rewritten)} files[/dim]")


if __name__ == "__main__":
    main()
