"""CLI entry point for the suite runner."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from bough.collector import collect_groups
from bough.errors import SuiteLoadError
from bough.models.config import RunnerConfig
from bough.runner import build_reporter, load_suite, run_suite

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _load_config(config: str | None) -> RunnerConfig:
    if config is None and not Path("bough.json").exists():
        return RunnerConfig()
    path = config or "bough.json"
    try:
        return RunnerConfig.load(path)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {path}[/red]")
        console.print("Run 'bough init' to create a default config.")
        sys.exit(1)
    except ValidationError as e:
        _invalid_config(e)


def _invalid_config(error: ValidationError) -> None:
    console.print(f"[red]Invalid configuration: {escape(str(error))}[/red]")
    sys.exit(1)


def _load_target(target: str):
    try:
        return load_suite(target)
    except SuiteLoadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Behaviour-driven test suite runner"""
    setup_logging(verbose)


@cli.command()
@click.argument("target")
@click.option("--config", "-c", default=None, help="Config file path (default: ./bough.json if present)")
@click.option(
    "--reporter", "-r", "reporters", multiple=True,
    type=click.Choice(["console", "tap", "json"]), help="Reporter(s) to use",
)
@click.option("--concurrent", is_flag=True, help="Run sibling steps and groups concurrently")
@click.option("--max-concurrency", type=click.IntRange(min=1), default=None, help="Bound on concurrently running steps")
@click.option("--order", type=click.Choice(["declaration", "reverse", "shuffle"]), default=None)
@click.option("--seed", type=int, default=None, help="Seed for --order shuffle")
def run(
    target: str,
    config: str | None,
    reporters: tuple[str, ...],
    concurrent: bool,
    max_concurrency: int | None,
    order: str | None,
    seed: int | None,
) -> None:
    """Run the suite at TARGET (``package.module:attribute``)."""
    cfg = _load_config(config)
    overrides = {
        "reporters": list(reporters) or None,
        "concurrent": concurrent or None,
        "max_concurrency": max_concurrency,
        "order": order,
        "seed": seed,
    }
    try:
        cfg = RunnerConfig(**{**cfg.model_dump(), **{k: v for k, v in overrides.items() if v is not None}})
    except ValidationError as e:
        _invalid_config(e)

    suite = _load_target(target)
    reporter = build_reporter(cfg, suite.name, console=console)
    results = run_suite(suite, cfg, reporter)

    if any(r.is_failed for r in results):
        sys.exit(1)


@cli.command("list")
@click.argument("target")
def list_steps(target: str) -> None:
    """Show the collected suite tree with resolved hook counts."""
    suite = _load_target(target)
    collected = collect_groups(suite)

    branches: dict[tuple[str, ...], Tree] = {}
    for group in collected.iter_groups():
        label = f"[bold]{escape(group.name)}[/bold] ({group.total_count} tests)"
        parent = branches.get(group.path.parts[:-1])
        branch = Tree(label) if parent is None else parent.add(label)
        branches[group.path.parts] = branch
        for step in group.steps:
            if step.is_test_case:
                branch.add(escape(step.payload.name))
    console.print(branches[collected.path.parts])

    table = Table(title="Collected Steps")
    table.add_column("Path", style="bold")
    table.add_column("Step")
    table.add_column("Before", justify="right")
    table.add_column("After", justify="right")
    for step in collected.iter_steps():
        if step.is_test_case:
            label = escape(step.payload.name) + (" [yellow](pending)[/yellow]" if step.payload.is_pending else "")
        else:
            label = f"[dim]{step.payload.level.value}: {escape(step.payload.message)}[/dim]"
        table.add_row(escape(str(step.path)), label, str(len(step.before_hooks)), str(len(step.after_hooks)))
    console.print(table)


@cli.command()
@click.option("--output", "-o", default="bough.json", help="Where to write the config")
def init(output: str) -> None:
    """Create a default configuration file."""
    config_path = Path(output)
    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    RunnerConfig().save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now customize this file and run:")
    console.print("  [blue]bough run mypackage.suites:suite[/blue]")


if __name__ == "__main__":
    cli()
