"""CLI interface for ioparams."""

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from . import __version__
from .classifier import classify, classify_parameter, display_value, list_kind_options
from .config import EditorConfig, load_config
from .errors import IoParamsError
from .helpers import (
    are_output_parameters_supported,
    ensure_input_output_supported,
    get_input_parameters,
    get_output_parameters,
)
from .models import (
    Element,
    ListDefinition,
    MapDefinition,
    Parameter,
    ParameterKind,
    ScriptDefinition,
    element_from_dict,
    kind_label,
    to_dict,
)
from .templates import get_property_value, input_parameter_properties, template_from_dict, validate_value
from .validators import validate_for_kind, validate_parameter_name, validate_script

app = typer.Typer(
    name="ioparams",
    help="Classify and validate input/output parameter values.",
    no_args_is_help=True,
)

console = Console()

_KIND_COLORS = {
    ParameterKind.VARIABLE: "green",
    ParameterKind.CONSTANT_VALUE: "cyan",
    ParameterKind.EXPRESSION: "magenta",
    ParameterKind.SCRIPT: "yellow",
    ParameterKind.LIST: "blue",
    ParameterKind.MAP: "blue",
}


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Classify and validate input/output parameter values."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _parse_kind(kind_str: str) -> ParameterKind:
    """Parse a kind name, exiting on invalid input."""
    try:
        return ParameterKind(kind_str)
    except ValueError:
        valid = ", ".join(kind.value for kind in ParameterKind)
        console.print(f"[red]Error:[/red] Invalid kind: {kind_str} (expected one of {valid})")
        raise typer.Exit(1)


def _resolve_config(legacy_wrapping: bool) -> EditorConfig:
    config = load_config()
    if legacy_wrapping:
        config.strict_wrapping = False
    return config


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON in {path}: {e}")
        raise typer.Exit(1)


@app.command("classify")
def classify_command(
    value: str = typer.Argument(..., help="Parameter value to classify."),
    output: bool = typer.Option(False, "--output", help="Treat as an output parameter."),
    legacy_wrapping: bool = typer.Option(
        False, "--legacy-wrapping", help="Use the historical variable wrapping rule."
    ),
) -> None:
    """Show the kind inferred for a value."""
    config = _resolve_config(legacy_wrapping)
    kind = classify(value, None, is_input=not output, strict=config.strict_wrapping)
    color = _KIND_COLORS[kind]
    console.print(f"[{color}]{kind.value}[/{color}] ({kind_label(kind, not output)})")


@app.command("validate")
def validate_command(
    value: str = typer.Argument(..., help="Parameter value to validate."),
    kind: str = typer.Option(..., "--kind", "-k", help="Kind to validate against."),
    output: bool = typer.Option(False, "--output", help="Treat as an output parameter."),
    legacy_wrapping: bool = typer.Option(
        False, "--legacy-wrapping", help="Use the historical variable wrapping rule."
    ),
) -> None:
    """Validate a value against a kind."""
    parsed = _parse_kind(kind)
    config = _resolve_config(legacy_wrapping)
    diagnostic = validate_for_kind(parsed, value, is_input=not output, strict=config.strict_wrapping)

    if diagnostic is None:
        console.print(f"[green]Valid[/green] {parsed.value}")
        return

    console.print(f"[red]Invalid[/red] \\[{diagnostic.code.value}] {escape(diagnostic.message)}")
    if diagnostic.suggested_kind is not None:
        console.print(f"[dim]Suggested kind: {diagnostic.suggested_kind.value}[/dim]")
    raise typer.Exit(1)


@app.command("kinds")
def kinds_command(
    output: bool = typer.Option(False, "--output", help="Labels for output parameters."),
) -> None:
    """List the selectable parameter kinds."""
    table = Table(title="Parameter Kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Label", style="green")
    for option in list_kind_options(is_input=not output):
        table.add_row(option.kind.value, option.label)
    console.print(table)


def _parameter_report(parameter: Parameter, config: EditorConfig) -> dict[str, Any]:
    """Summarize a parameter's kind and problems."""
    kind = classify_parameter(parameter, strict=config.strict_wrapping)
    problems = []
    name_diagnostic = validate_parameter_name(parameter.name)
    if name_diagnostic is not None:
        problems.append(name_diagnostic.message)
    definition = parameter.definition
    if isinstance(definition, ScriptDefinition) and definition.resource is None:
        script_diagnostic = validate_script(definition.script_format, definition.value)
        if script_diagnostic is not None:
            problems.append(script_diagnostic.message)
    return {
        "name": parameter.name,
        "direction": parameter.direction.value,
        "kind": kind.value,
        "label": kind_label(kind, parameter.is_input),
        "value": parameter.value,
        "definition": to_dict(parameter.definition),
        "problems": problems,
    }


def _add_definition_nodes(branch: Tree, parameter: Parameter) -> None:
    definition = parameter.definition
    if isinstance(definition, ListDefinition):
        for item in definition.items:
            branch.add(f"[dim]-[/dim] {escape(display_value(item) or '')}")
    elif isinstance(definition, MapDefinition):
        for entry in definition.entries:
            branch.add(f"[dim]{escape(entry.key or '')}:[/dim] {escape(display_value(entry) or '')}")
    elif definition is not None:
        branch.add(f"[dim]{escape(definition.script_format or '')}:[/dim] {escape(definition.value or '')}")


@app.command("inspect")
def inspect_command(
    source: Path = typer.Argument(
        ...,
        help="JSON file describing a diagram element.",
        exists=True,
    ),
    inside_connector: bool = typer.Option(
        False, "--connector", help="Inspect the mappings of the element's connector."
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
    legacy_wrapping: bool = typer.Option(
        False, "--legacy-wrapping", help="Use the historical variable wrapping rule."
    ),
) -> None:
    """Show the input/output parameters of an element with their kinds."""
    config = _resolve_config(legacy_wrapping)
    try:
        element = element_from_dict(_load_json(source))
        ensure_input_output_supported(element, inside_connector)
    except IoParamsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    parameters = get_input_parameters(element, inside_connector)
    if are_output_parameters_supported(element, inside_connector):
        parameters += get_output_parameters(element, inside_connector)

    if json_output:
        report = {
            "element": element.id,
            "parameters": [_parameter_report(p, config) for p in parameters],
        }
        print(json.dumps(report, indent=2))
        return

    _print_element(element, parameters, config)


def _print_element(element: Element, parameters: list[Parameter], config: EditorConfig) -> None:
    console.print(Panel.fit(
        f"[bold]{element.id}[/bold]\nType: {element.element_type}",
        title="ioparams",
    ))

    if not parameters:
        console.print("\n[yellow]No input/output parameters found.[/yellow]")
        return

    tree = Tree("[bold]Parameters[/bold]")
    for parameter in parameters:
        report = _parameter_report(parameter, config)
        color = _KIND_COLORS[ParameterKind(report["kind"])]
        label = f"[{color}]{escape(report['name'] or '')}[/{color}] [dim]({report['direction']})[/dim]"
        label += f" [{color}]\\[{report['label']}][/{color}]"
        if parameter.value:
            label += f" = {escape(parameter.value)}"
        branch = tree.add(label)
        _add_definition_nodes(branch, parameter)
        for problem in report["problems"]:
            branch.add(f"[red]{escape(problem)}[/red]")
    console.print(tree)


@app.command("template")
def template_command(
    template_file: Path = typer.Argument(..., help="Element template JSON.", exists=True),
    element_file: Path = typer.Argument(..., help="Diagram element JSON.", exists=True),
) -> None:
    """Show template input parameter values of an element and check constraints."""
    try:
        template = template_from_dict(_load_json(template_file))
        element = element_from_dict(_load_json(element_file))
        rows = []
        for entry_id, prop in input_parameter_properties(template):
            value = get_property_value(element, prop)
            rows.append((entry_id, prop, value, validate_value(value, prop)))
    except IoParamsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"Template {template.id}")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Problem", style="red")
    for entry_id, prop, value, error in rows:
        table.add_row(prop.binding.name or prop.label or entry_id, value or "", error or "")
    console.print(table)

    if any(error for *_, error in rows):
        raise typer.Exit(1)


@app.command("version")
def version_command() -> None:
    """Show version information."""
    console.print(f"ioparams version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
