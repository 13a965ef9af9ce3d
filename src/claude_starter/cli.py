"""claude-starter CLI entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from claude_starter import __version__

if TYPE_CHECKING:
    from claude_starter.detection.project import ProjectInfo
    from claude_starter.generation.models import Artifact
    from claude_starter.writer import WriteOutcome

logger = logging.getLogger("claude_starter")


def _setup_logging(*, verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            stream=sys.stderr,
        )
    else:
        logging.basicConfig(level=logging.WARNING, format="%(message)s", stream=sys.stderr)


def _stdin_is_interactive() -> bool:
    return sys.stdin.isatty()


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _print_analysis(info: ProjectInfo) -> None:
    from rich.console import Console

    from claude_starter.detection.classifier import summarize_stack

    console = Console()
    if info.is_existing:
        console.print(f"[green]Detected existing project[/green] ({info.file_count} source files)")
    else:
        console.print("[yellow]New project[/yellow]")
    summary = summarize_stack(info.stack)
    if summary:
        console.print(f"  {summary}")
    if info.stack.has_existing_config:
        console.print("  [dim]Existing Claude configuration found[/dim]")


def _print_dry_run(artifacts: list[Artifact]) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title="Planned artifacts")
    table.add_column("Path")
    table.add_column("Kind")
    table.add_column("Status")
    for artifact in artifacts:
        table.add_row(artifact.path, artifact.kind, "new" if artifact.is_new else "exists")
    Console().print(table)


def _print_outcome(outcome: WriteOutcome) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title="claude-starter")
    table.add_column("Path")
    table.add_column("Result")
    for path in outcome.created:
        table.add_row(path, "[green]created[/green]")
    for path in outcome.updated:
        table.add_row(path, "[cyan]updated[/cyan]")
    for path in outcome.skipped:
        table.add_row(path, "[yellow]preserved[/yellow]")

    console = Console()
    console.print(table)
    console.print(
        f"{len(outcome.created)} created, {len(outcome.updated)} updated, "
        f"{len(outcome.skipped)} preserved"
    )
    if outcome.skipped:
        console.print("[dim]Use --force to overwrite preserved files.[/dim]")
    console.print("\n[green]Ready![/green] Run [cyan]claude[/cyan] to start.")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-v", "--version", prog_name="claude-starter")
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite preserved files too.")
@click.option(
    "--no-interactive",
    "-y",
    "no_interactive",
    is_flag=True,
    help="Never prompt; use detected values only.",
)
@click.option("--verbose", "-V", is_flag=True, help="Verbose logging.")
@click.option("--dry-run", is_flag=True, help="Show what would be written and exit.")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON.")
def main(
    *,
    project: Path | None,
    force: bool,
    no_interactive: bool,
    verbose: bool,
    dry_run: bool,
    output_json: bool,
) -> None:
    """Detect the project's stack and generate its .claude/ configuration."""
    from claude_starter.config import ConfigError, load_config
    from claude_starter.detection.project import analyze_project
    from claude_starter.generation.state import TASK_STATE_PATH
    from claude_starter.generation.synthesizer import generate_artifacts, mark_existing
    from claude_starter.writer import PRESERVED_PATHS, write_artifacts

    _setup_logging(verbose=verbose)
    project_root = project or Path.cwd()
    logger.debug("Project root: %s", project_root)

    try:
        config = load_config(project_root)
    except ConfigError as exc:
        _fail(str(exc))
        return

    info = analyze_project(project_root, config)
    if not output_json:
        _print_analysis(info)

    task: str | None = None
    brand_new = not info.is_existing and not info.stack.languages
    if (
        brand_new
        and not no_interactive
        and not output_json
        and _stdin_is_interactive()
        and not (project_root / TASK_STATE_PATH).exists()
    ):
        from claude_starter.prompts import apply_preferences, ask_preferences

        prefs = ask_preferences()
        info = apply_preferences(info, prefs)
        task = prefs.description

    try:
        artifacts = mark_existing(generate_artifacts(info, task), project_root)
    except ValueError as exc:
        _fail(str(exc))
        return

    if dry_run:
        if output_json:
            planned = [{"path": a.path, "kind": a.kind, "is_new": a.is_new} for a in artifacts]
            click.echo(json.dumps({"artifacts": planned}, ensure_ascii=False, indent=2))
        else:
            _print_dry_run(artifacts)
        return

    try:
        outcome = write_artifacts(
            artifacts,
            project_root,
            force=force,
            preserved=PRESERVED_PATHS | config.preserve,
        )
    except (OSError, ValueError) as exc:
        _fail(str(exc))
        return

    if output_json:
        data = {**outcome.as_dict(), "stack": info.stack.to_dict()}
        click.echo(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        _print_outcome(outcome)
