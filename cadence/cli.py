#!/usr/bin/env python3
"""
Cadence CLI - BDD Runner Event Reporter

Usage:
    cadence validate <cadence.yaml>
    cadence clean [--config cadence.yaml] [--output-dir DIR]
    cadence --version
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ENV_VARS, FormatterConfig, config_from_env, load_config
from .reporting import prepare_output_dir

app = typer.Typer(
    name="cadence",
    help="Cadence - BDD Runner Event Reporter",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"Cadence v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """
    Cadence - BDD Runner Event Reporter

    Record BDD runner events as structured results on disk.
    """
    pass


def resolve_config(config_file: Optional[Path]) -> FormatterConfig:
    """Load settings from a file (if given) and apply environment overrides."""
    if config_file is None:
        return config_from_env()

    config, validation = load_config(config_file)
    if not validation.is_valid:
        console.print("\n[red]❌ Invalid configuration:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)
    return config_from_env(config)


def settings_table(config: FormatterConfig) -> Table:
    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_column("Environment")

    env_by_field = {field: var for var, field in ENV_VARS.items()}
    for name, value in vars(config).items():
        table.add_row(name, repr(value), env_by_field.get(name, ""))
    return table


@app.command()
def validate(
    config_file: Path = typer.Argument(
        ...,
        help="Path to the configuration YAML file",
        exists=True,
        readable=True,
    ),
):
    """
    Validate a configuration YAML file.

    Show the resolved settings, including environment overrides.
    """
    console.print(f"\n📄 Validating: {config_file}")

    config = resolve_config(config_file)

    console.print("\n[green]✅ Valid configuration[/green]")
    console.print()
    console.print(settings_table(config))


@app.command()
def clean(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Path to the configuration YAML file",
        exists=True,
        readable=True,
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o",
        help="Directory to prepare (overrides the configuration)"
    ),
):
    """
    Prepare the output directory the way a run does.

    Previous results are removed unless clean_dir is false.
    """
    config = resolve_config(config_file)
    target = output_dir or Path(config.output_dir)

    path = prepare_output_dir(target, clean=config.clean_dir)
    action = "Cleaned" if config.clean_dir else "Prepared"
    console.print(f"📁 {action} output directory: {path}")


@app.command()
def info():
    """
    Show information about Cadence.
    """
    console.print(f"""
[bold]Cadence[/bold] v{__version__}

BDD Runner Event Reporter

[bold]Features:[/bold]
  • Background steps buffered until their scenario starts
  • Scenario outlines reported per example row
  • Test id, issue and severity labels from tags
  • JSON suite files with step timing and attachments

[bold]Quick Start:[/bold]
  cadence validate cadence.yaml
  cadence clean --config cadence.yaml
""")


if __name__ == "__main__":
    app()
