"""Output formatting utilities for CLI."""

import json
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.syntax import Syntax

from core.models import GenerationSummary

console = Console()


def format_json(data: Any) -> str:
    """Format data as indented JSON"""
    return json.dumps(data, indent=2, ensure_ascii=False)


def print_yaml(data: dict[str, Any]) -> None:
    """Pretty print data as YAML with syntax highlighting"""
    output_str = yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    console.print(Syntax(output_str, "yaml", theme="monokai", line_numbers=False))


def print_summary(summary: GenerationSummary) -> None:
    """Print the outcome of a generation run.

    Args:
        summary: Summary returned by generate_models
    """
    total = len(summary.results)
    typer.echo(f"Generated {summary.succeeded}/{total} models in {summary.output_directory}")
    for failure in summary.failures:
        typer.secho(f"  • {failure}", fg=typer.colors.YELLOW, err=True)


def error_message(message: str, hint: str | None = None) -> None:
    """Print error message.

    Args:
        message: Error message
        hint: Optional hint for user
    """
    typer.secho(f"✗ Error: {message}", fg=typer.colors.RED, err=True)
    if hint:
        typer.secho(f"  Hint: {hint}", fg=typer.colors.YELLOW, err=True)


def success_message(message: str) -> None:
    """Print success message.

    Args:
        message: Success message
    """
    typer.secho(f"✓ {message}", fg=typer.colors.GREEN)
