#!/usr/bin/env python3
"""Command line interface for assembling the site."""

import sys
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from sitebuild.config import BuildConfig
from sitebuild.errors import SiteBuildError, StepFailedError
from sitebuild.pipeline import BuildPipeline
from sitebuild.steps import StepResult, StepStatus

app = typer.Typer(name="sitebuild", help="Assemble the static site from its sub-projects", add_completion=False)
console = Console()

STATUS_STYLES = {
    StepStatus.SUCCESS: "[green]✅ success[/green]",
    StepStatus.SKIPPED: "[dim]skipped[/dim]",
    StepStatus.RECOVERED: "[yellow]⚠️  recovered[/yellow]",
    StepStatus.FAILED: "[red]❌ failed[/red]",
}


def setup_logging(verbose: bool = False):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO", format="<level>{level: <8}</level> | {message}")


def print_summary(results: List[StepResult]):
    table = Table(title="Build steps")
    table.add_column("Step")
    table.add_column("Status")
    table.add_column("Destination")
    table.add_column("Time", justify="right")
    table.add_column("Error")
    for result in results:
        table.add_row(
            result.name,
            STATUS_STYLES[result.status],
            str(result.destination or ""),
            f"{result.elapsed:.1f}s",
            result.error or "",
        )
    console.print(table)


def run_build(config: BuildConfig, summary: bool = False) -> int:
    """
    Run the pipeline and translate its outcome into an exit code.
    Returns:
        0 on success, 1 on any fatal error
    """
    pipeline = BuildPipeline(config)
    try:
        results = pipeline.run()
    except StepFailedError as e:
        logger.error(f"Build aborted: {e}")
        if summary:
            print_summary(e.results)
        return 1
    except SiteBuildError as e:
        logger.error(str(e))
        return 1

    for result in pipeline.recovered:
        logger.warning(f"Step '{result.name}' did not complete: {result.error}")
    if summary:
        print_summary(results)
    return 0


def resolve_config(root: Optional[Path]) -> BuildConfig:
    return BuildConfig.from_env(Path.cwd(), root=root)


@app.command("build")
def build(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Project root (default: $SITEBUILD_ROOT or the current directory)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    summary: bool = typer.Option(True, "--summary/--no-summary", help="Print a table of step results"),
):
    """Build the site into <root>/build."""
    setup_logging(verbose)
    config = resolve_config(root)
    logger.debug(f"Project root: {config.root}, output: {config.output_root}")
    code = run_build(config, summary=summary)
    if code:
        raise typer.Exit(code=code)


@app.command("plan")
def plan(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Project root (default: $SITEBUILD_ROOT or the current directory)"),
):
    """Show the steps a build would run, without running them."""
    config = resolve_config(root)
    table = Table(title=f"Build plan for {config.root}")
    table.add_column("#", justify="right")
    table.add_column("Step")
    table.add_column("Source")
    table.add_column("Destination")
    table.add_column("On failure")
    for index, step in enumerate(BuildPipeline(config).steps(), start=1):
        table.add_row(
            str(index),
            step.description or step.name,
            str(step.source or ""),
            str(step.destination or ""),
            "[red]abort[/red]" if step.fatal else "[yellow]continue[/yellow]",
        )
    console.print(table)


def main():
    """Main entry point for the sitebuild CLI."""
    app()


if __name__ == "__main__":
    main()
