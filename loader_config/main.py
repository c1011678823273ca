"""loader-config command line interface."""

from __future__ import annotations

import json
import sys
from typing import Any

import click
from rich.markup import escape
from rich.table import Table

from .config import ConfigStore
from .console import console
from .logging_setup import init_json_logging
from .settings import SettingsError
from .settings import load_settings


def _load_store(config_path: str | None) -> ConfigStore:
    """Build a ConfigStore from a settings file, or defaults if none given."""
    if config_path is None:
        return ConfigStore()
    try:
        return ConfigStore(load_settings(config_path))
    except SettingsError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)


def _parse_context(value: str | None) -> dict[str, Any] | None:
    if value is None:
        return None
    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--context") from e
    if not isinstance(data, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--context")
    return data


config_option = click.option(
    "--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Settings file (YAML or JSON)"
)
context_option = click.option("--context", "context_json", help="Contextual mappings as a JSON object")


@click.group(invoke_without_command=True)
@click.version_option(package_name="loader-config")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write JSONL logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for the JSONL log file",
)
@click.pass_context
def cli(ctx: click.Context, log_file: str | None, log_level: str | None):
    """Inspect module loader alias mappings and module registrations."""
    if log_file or log_level:
        init_json_logging(log_file, log_level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()


@cli.command()
@click.argument("name")
@config_option
@context_option
@click.option("--explain", is_flag=True, help="Show every resolution step")
def resolve(name: str, config_path: str | None, context_json: str | None, explain: bool):
    """Resolve a module name through the configured mappings."""
    store = _load_store(config_path)
    context_map = _parse_context(context_json)

    if not explain:
        click.echo(store.resolve(name, context_map))
        return

    resolution = store.explain(name, context_map)
    table = Table(title=f"Resolution of '{escape(name)}'", show_header=True, header_style="bold cyan")
    table.add_column("Scope", style="yellow")
    table.add_column("Requested", style="green")
    table.add_column("Strategy", style="magenta")
    table.add_column("Alias")
    table.add_column("Resolved", style="green")

    for step in resolution.steps:
        table.add_row(
            step.scope,
            escape(step.requested),
            step.strategy.value,
            escape(step.alias) if step.alias is not None else "-",
            escape(step.resolved),
        )

    console.print(table)
    status = "[green]mapped[/green]" if resolution.mapped else "[dim]not mapped[/dim]"
    console.print(f"Result: [bold]{escape(resolution.resolved)}[/bold] ({status})")


@cli.group(invoke_without_command=True)
@click.pass_context
def module(ctx: click.Context):
    """Inspect registered modules."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@module.command("list")
@config_option
def module_list(config_path: str | None):
    """List every registered module in registration order."""
    store = _load_store(config_path)
    modules = store.get_modules([])

    if not modules:
        console.print("[dim]No modules registered[/dim]")
        return

    table = Table(title="Registered Modules", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="green")
    for mod in modules:
        table.add_row(escape(mod.name))
    console.print(table)


@module.command("show")
@click.argument("names", nargs=-1, required=True)
@config_option
@context_option
def module_show(names: tuple[str, ...], config_path: str | None, context_json: str | None):
    """Look up modules by requested name."""
    store = _load_store(config_path)
    context_map = _parse_context(context_json)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Requested", style="yellow")
    table.add_column("Registered As")

    missing = 0
    for name in names:
        mod = store.get_module(name, context_map)
        if mod is None:
            missing += 1
            table.add_row(escape(name), "[red]not found[/red]")
        else:
            table.add_row(escape(name), f"[green]{escape(mod.name)}[/green]")

    console.print(table)
    if missing:
        sys.exit(1)


@cli.command()
@config_option
def paths(config_path: str | None):
    """Show configured module paths."""
    store = _load_store(config_path)

    if not store.paths:
        console.print("[dim]No paths configured[/dim]")
        return

    table = Table(title="Module Paths", show_header=True, header_style="bold cyan")
    table.add_column("Module", style="green")
    table.add_column("Path", style="magenta")
    for prefix, path in store.paths.items():
        table.add_row(escape(prefix), escape(path))
    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
