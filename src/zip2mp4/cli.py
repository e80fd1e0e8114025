"""CLI entry point for zip2mp4.

Usage:
    zip2mp4 run                         # Pick a folder, convert every .zip in it
    zip2mp4 run --folder ./ugoira       # Same, without the folder prompt
    zip2mp4 run-step estimate_fps -i '{"work_dir": "frames_x"}'
    zip2mp4 estimate-fps ./frames_x     # Show the FPS a frame folder would get
    zip2mp4 info                        # Show pipeline steps
    zip2mp4 check-tools                 # Verify ffmpeg is installed
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from zip2mp4.core.contracts import BatchResult
from zip2mp4.core.errors import FolderSelectionCancelled, NoArchivesFoundError
from zip2mp4.core.logging import setup_logging

app = typer.Typer(name="zip2mp4", help="Convert zipped frame sequences to MP4")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


def _resolve_config(config: Path | None) -> Path | None:
    """Explicit path, else ./configs/pipeline.yaml if present, else built-in steps."""
    if config is not None:
        if not config.is_file():
            console.print(f"[red]Config not found: {config}[/red]")
            raise typer.Exit(1)
        return config
    return DEFAULT_CONFIG if DEFAULT_CONFIG.is_file() else None


def _print_summary(batch: BatchResult) -> None:
    table = Table(title=f"Converted archives in {batch.folder}")
    table.add_column("Archive", style="cyan")
    table.add_column("FPS", justify="right")
    table.add_column("Source", style="dim")
    table.add_column("Output", style="green")
    table.add_column("Status")

    for r in batch.results:
        table.add_row(
            r.archive.path.name,
            f"{r.fps:g}" if r.fps is not None else "-",
            r.fps_source or "-",
            r.output_path.name if r.output_path else "-",
            "[green]ok[/green]" if r.succeeded else f"[red]{escape(r.error or 'failed')}[/red]",
        )
    console.print(table)
    console.print(f"{batch.succeeded} succeeded, {batch.failed} failed")


@app.command()
def run(
    folder: Path = typer.Option(None, "--folder", "-f", help="Folder with .zip archives (prompt if omitted)"),
    config: Path = typer.Option(None, help="Pipeline config path"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Convert every archive in a folder to MP4."""
    setup_logging(log_level)
    from zip2mp4.core.pipeline_runner import run_pipeline

    config_path = _resolve_config(config)
    if folder is None:
        from zip2mp4.utils.dialog import ask_folder

        try:
            folder = ask_folder()
        except FolderSelectionCancelled as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise typer.Exit(1)

    if not folder.is_dir():
        console.print(f"[red]Not a directory: {folder}[/red]")
        raise typer.Exit(1)

    try:
        batch = run_pipeline(config_path, folder)
    except NoArchivesFoundError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)
    _print_summary(batch)


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. estimate_fps)"),
    config: Path = typer.Option(None, help="Pipeline config path"),
    folder: Path = typer.Option(Path("."), "--folder", "-f", help="Batch folder (outputs are written here)"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
) -> None:
    """Run a single pipeline step."""
    import json

    setup_logging()
    from zip2mp4.core.pipeline_runner import build_step, load_pipeline_config

    config_path = _resolve_config(config)
    pipeline_cfg = load_pipeline_config(config_path)
    entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_instance = build_step(entry, config_path, folder)

    if input_json:
        input_data = json.loads(input_json)
    else:
        schema = step_instance.get_input_schema()
        required = schema.get("required", [])
        if required:
            console.print(f"[yellow]Step '{step_name}' requires input fields: {required}[/yellow]")
            console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
            console.print(f'  zip2mp4 run-step {step_name} -i \'{{"field": "value"}}\'')
            raise typer.Exit(1)
        input_data = {}

    console.print(f"[green]Running step: {step_name}[/green]")
    step_input = step_instance.input_type(**input_data)
    output = step_instance.execute(step_input)
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def estimate_fps(
    work_dir: Path = typer.Argument(..., help="Folder of extracted frames"),
    config: Path = typer.Option(None, help="Pipeline config path"),
) -> None:
    """Print the frame rate a frame folder would be encoded at."""
    setup_logging("WARNING")
    from zip2mp4.core.pipeline_runner import build_step, load_pipeline_config

    if not work_dir.is_dir():
        console.print(f"[red]Not a directory: {work_dir}[/red]")
        raise typer.Exit(1)

    config_path = _resolve_config(config)
    pipeline_cfg = load_pipeline_config(config_path)
    entry = next((s for s in pipeline_cfg.steps if s.name == "estimate_fps"), None)
    if entry is None:
        console.print("[red]No estimate_fps step in pipeline config[/red]")
        raise typer.Exit(1)

    step = build_step(entry, config_path, work_dir.parent)
    output = step.execute(step.input_type(work_dir=work_dir))
    console.print(f"{output.fps:g} fps [dim]({output.source.value}, {output.frame_count} frames)[/dim]")


@app.command()
def info(config: Path = typer.Option(None, help="Pipeline config path")) -> None:
    """Show pipeline steps and their settings."""
    from zip2mp4.core.pipeline_runner import load_pipeline_config

    pipeline_cfg = load_pipeline_config(_resolve_config(config))
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Scope")
    table.add_column("Enabled", style="yellow")
    table.add_column("Depends On", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        table.add_row(
            str(i),
            step.name + (" *" if step.always_run else ""),
            step.module,
            step.scope,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) if step.depends_on else "-",
        )
    console.print(table)
    console.print("[dim]* runs even after an earlier step of the archive failed[/dim]")


@app.command()
def check_tools() -> None:
    """Verify external tools are installed."""
    from zip2mp4.utils.subprocess_utils import check_tools as _check_tools

    ok, problems = _check_tools()
    if ok:
        console.print("[green]Tools OK: ffmpeg[/green]")
        return
    for p in problems:
        console.print(f"[red]Missing: {p}[/red]")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
