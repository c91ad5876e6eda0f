"""swe-calc settings: where the default plan lives and how results print."""

from pathlib import Path

import click

from swecalc.sdk import (
    load_settings,
    save_settings,
    set_setting,
    get_settings_path,
    get_plan_path,
)

OUTPUT_FORMATS = ("text", "json")


@click.group()
def settings():
    """Inspect and change settings.json.

    \b
    Keys:
      plan                   plan file used by 'swe-calc plan' with no argument
      default_output_format  text or json, for commands given no --format
    """
    pass


@settings.command("show")
def settings_show():
    """Print settings.json and the plan file it resolves to."""
    path = get_settings_path()
    current = load_settings()

    state = "" if path.exists() else " (not created yet)"
    click.echo(f"{path}{state}")
    for key, value in sorted(current.items()):
        click.echo(f"  {key} = {value}")
    click.echo(f"Plan in use: {get_plan_path()}")


@settings.command("plan")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Forget the custom plan path")
def settings_plan(path, clear):
    """Point 'swe-calc plan' at a plan file, or show the current one.

    \b
    Examples:
      swe-calc settings plan ~/plans/consulting.yaml
      swe-calc settings plan --clear
    """
    if clear:
        current = load_settings()
        if current.pop("plan", None) is None:
            click.echo("No custom plan path was set.")
        else:
            save_settings(current)
            click.echo(f"Custom plan path cleared; using {get_plan_path()}")
        return

    if not path:
        click.echo(f"Plan in use: {get_plan_path()}")
        return

    plan_path = Path(path).expanduser().resolve()
    if plan_path.is_dir():
        raise click.ClickException(f"{plan_path} is a directory, expected a YAML file")
    if not plan_path.exists():
        click.secho(f"{plan_path} does not exist yet; 'swe-calc plan --init {plan_path}' creates it.",
                    fg="yellow")

    set_setting("plan", str(plan_path))
    click.echo(f"Plan in use: {plan_path}")


@settings.command("output-format")
@click.argument("fmt", type=click.Choice(OUTPUT_FORMATS))
def settings_output_format(fmt):
    """Set the output format used when a command gets no --format."""
    set_setting("default_output_format", fmt)
    click.echo(f"default_output_format = {fmt}")
