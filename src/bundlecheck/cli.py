"""CLI interface for bundlecheck using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bundlecheck import __description__, __version__
from bundlecheck.bundle import BundleError, load_bundle
from bundlecheck.config import BundlecheckConfig, LogLevel, load_config
from bundlecheck.models.spec import Spec, SpecModel
from bundlecheck.validation import ValidationFramework, ValidationResult, describe_fields

app = typer.Typer(
    name="bundlecheck",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"bundlecheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """bundlecheck - Compliance checker for container runtime bundles."""


def _setup_logging(config: BundlecheckConfig, debug: bool) -> None:
    level = logging.DEBUG if debug else _LOG_LEVELS.get(config.logging.level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _record_models() -> list[type[SpecModel]]:
    """All document record classes reachable from Spec, in walk order."""
    seen: list[type[SpecModel]] = []
    pending: list[type[SpecModel]] = [Spec]
    while pending:
        model_cls = pending.pop(0)
        if model_cls in seen:
            continue
        seen.append(model_cls)
        for info in model_cls.model_fields.values():
            for candidate in _nested_models(info.annotation):
                if candidate not in seen:
                    pending.append(candidate)
    return seen


def _nested_models(annotation) -> list[type[SpecModel]]:
    if isinstance(annotation, type) and issubclass(annotation, SpecModel):
        return [annotation]
    found = []
    for arg in getattr(annotation, "__args__", ()):
        found.extend(_nested_models(arg))
    return found


def _print_table(result: ValidationResult) -> None:
    status_color = "green" if result.compliant else "red"
    console.print(f"[{status_color}]Validation Status: {result.status.value.upper()}[/{status_color}]")
    console.print(f"Exit Code: {result.exit_code}")

    if result.issues:
        console.print("\n[blue]Issues Found:[/blue]")
        issues_table = Table()
        issues_table.add_column("#", style="dim", justify="right")
        issues_table.add_column("Rule", style="cyan")
        issues_table.add_column("Message", style="white")

        for index, issue in enumerate(result.issues, 1):
            issues_table.add_row(str(index), issue.rule, escape(issue.message))

        console.print(issues_table)
    else:
        console.print("\n[green]Bundle is compliant![/green]")


def _print_markdown(result: ValidationResult) -> None:
    console.print("# Bundle Validation Report", markup=False)
    console.print(f"**Status:** {result.status.value}", markup=False)
    console.print(f"**Exit Code:** {result.exit_code}", markup=False)
    console.print()

    if result.issues:
        console.print("## Issues", markup=False)
        for issue in result.issues:
            console.print(f"- **{issue.rule}**: {issue.message}", markup=False)


@app.command()
def validate(
    path: Annotated[
        Path,
        typer.Argument(help="Path to the bundle directory")
    ] = Path("."),
    bundle_path: Annotated[
        Path,
        typer.Option("--path", "-p", help="Path to the bundle directory (overrides the argument)")
    ] = None,
    hooks: Annotated[
        bool,
        typer.Option("--hooks", help="Check specified hooks exist and are executable on the host")
    ] = False,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: from config)")
    ] = None,
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .bundlecheck.json)")
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", "-d", help="Enable debug logging")
    ] = False,
) -> None:
    """Validate a bundle against the container runtime specification."""
    valid_formats = ["table", "json", "markdown"]

    try:
        bundlecheck_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if hooks:
        bundlecheck_config.validation.verify_hooks = True

    format = format or bundlecheck_config.output.format
    if format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    _setup_logging(bundlecheck_config, debug)

    target = bundle_path if bundle_path is not None else path

    try:
        bundle = load_bundle(target)
    except BundleError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if format == "table":
        console.print(f"[green]Validating bundle:[/green] {escape(str(bundle.path))}")

    framework = ValidationFramework(bundlecheck_config)
    framework.create_default_rules()
    result = framework.validate(bundle.spec, bundle.rootfs)

    if format == "json":
        console.print_json(jsonlib.dumps(result.to_dict()))
    elif format == "markdown":
        _print_markdown(result)
    else:
        _print_table(result)

    raise typer.Exit(result.exit_code)


@app.command()
def fields(
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
) -> None:
    """Show which configuration document fields are required."""
    valid_formats = ["table", "json"]

    if format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    if format == "json":
        console.print_json(jsonlib.dumps(Spec.model_json_schema(by_alias=True)))
        return

    table = Table(title="Document fields")
    table.add_column("Record", style="cyan")
    table.add_column("Field", style="white")
    table.add_column("Required", justify="center")

    for model_cls in _record_models():
        for requirement in describe_fields(model_cls):
            required = "[red]yes[/red]" if requirement.required else "[dim]no[/dim]"
            table.add_row(model_cls.__name__, requirement.json_name, required)

    console.print(table)
