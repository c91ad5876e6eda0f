"""Shared helpers for CLI commands."""

import json
from pathlib import Path

import click

from swecalc.sdk import get_setting


def output_format_option(f):
    """--format option defaulting to settings.json default_output_format."""
    return click.option(
        "--format", "output_format",
        type=click.Choice(["text", "json"]),
        default=None,
        help="Output format (default: settings default_output_format, else text)",
    )(f)


def resolve_format(output_format):
    return output_format or get_setting("default_output_format", "text")


def echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def read_rows(path: str) -> list:
    """Read reference rows saved as JSON (a list, or {"results": [...]})."""
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")
    return data.get("results", []) if isinstance(data, dict) else data


def sek(amount: float) -> str:
    """Format an amount as whole SEK with Swedish digit grouping."""
    return f"{amount:,.0f}".replace(",", " ") + " kr"
