"""Swe Calc CLI - Command-line interface for Swedish salary and dividend planning."""

import logging
from pathlib import Path

import click
from rich.console import Console

from swecalc import __version__
from swecalc.sdk import (
    DEFAULT_PLAN,
    PlanNotFoundError,
    PlanValidationError,
    TaxRulesNotFoundError,
    calculate_all_years,
    get_plan_path,
    load_plan,
    load_tax_rules,
    save_plan,
    summarize_plan,
)

from .car_commands import car as car_group
from .common import output_format_option, resolve_format, echo_json, sek
from .renderers.plan_renderer import render_plan
from .salary_commands import hourly_rate, net_salary, pension
from .settings_commands import settings as settings_group


@click.group()
@click.version_option(version=__version__, prog_name="swe-calc")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """Swe Calc - Swedish salary, dividend and company-car calculators.

    Plans salary and dividends from a close company over several years
    (3:12 rules), prices consulting work and compares company-car options.

    The default plan is loaded from (in order):

    \b
    1. SWE_CALC_CONFIG_PATH environment variable
    2. settings.json 'plan' key (if set via CLI)
    3. ~/.config/swe-calc/plan.yaml (XDG default)

    Run 'swe-calc plan --init' to create a starter plan.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Add subcommand groups
cli.add_command(settings_group)
cli.add_command(car_group)
cli.add_command(hourly_rate)
cli.add_command(net_salary)
cli.add_command(pension)


@cli.command("plan")
@click.argument("plan_file", required=False, type=click.Path())
@click.option("--init", "init_plan", is_flag=True, help="Write a starter plan instead of calculating.")
@click.option("--force", is_flag=True, help="Overwrite an existing plan with --init.")
@output_format_option
def plan(plan_file, init_plan, force, output_format):
    """Calculate a multi-year salary and dividend plan.

    PLAN_FILE is a YAML file with 'settings' and 'years' sections. If
    omitted, the configured default plan is used.

    \b
    Examples:
      swe-calc plan --init
      swe-calc plan
      swe-calc plan ~/plans/consulting.yaml --format json
    """
    path = Path(plan_file).expanduser() if plan_file else None

    if init_plan:
        target = path or get_plan_path()
        if target.exists() and not force:
            raise click.ClickException(f"Plan already exists: {target} (use --force to overwrite)")
        saved = save_plan(DEFAULT_PLAN, target)
        click.echo(f"Wrote starter plan: {saved}")
        return

    try:
        plan_data = load_plan(path)
    except (PlanNotFoundError, PlanValidationError) as e:
        raise click.ClickException(str(e))

    years = calculate_all_years(plan_data.resolved_years(), plan_data.settings)
    totals = summarize_plan(years)

    if resolve_format(output_format) == "json":
        echo_json({
            "settings": plan_data.settings.model_dump(),
            "years": [y.model_dump() for y in years],
            "totals": totals.model_dump(),
        })
        return

    render_plan(Console(width=140), plan_data.settings, years, totals)


@cli.command("rules")
@click.argument("year", type=int)
@output_format_option
def rules(year, output_format):
    """Show reference amounts (IBB, K10, ITP 1) for an income YEAR."""
    try:
        tax_rules = load_tax_rules(year)
    except TaxRulesNotFoundError as e:
        raise click.ClickException(str(e))

    if resolve_format(output_format) == "json":
        echo_json(tax_rules.model_dump())
        return

    k10 = tax_rules.k10
    if tax_rules.year != year:
        click.secho(f"Note: no rules published for {year}, showing {tax_rules.year}.", fg="yellow")
    click.echo(f"Income year {tax_rules.year}")
    click.echo(f"  Income base amount (IBB):   {sek(tax_rules.ibb)}")
    click.echo(f"  Employer contribution:      {tax_rules.employer_contribution:.2f}%")
    click.echo(f"  Corporate tax:              {tax_rules.corporate_tax:.1f}%")
    click.echo()
    click.echo("K10 (3:12 rules)")
    click.echo(f"  IBB basis:                  {sek(k10.ibb)}")
    click.echo(f"  Simplified allowance:       {sek(k10.simplified_allowance)}")
    click.echo(f"  Saved allowance uplift:     {k10.uplift_percent:.2f}%")
    click.echo(f"  Main rule interest:         {k10.main_rule_interest:.2f}%")
    click.echo(f"  Salary requirement:         {sek(k10.salary_requirement.fixed)}"
               f" or {sek(k10.salary_requirement.alternative)} + 5% of payroll")
    click.echo(f"  Dividend ceiling:           {sek(k10.dividend_ceiling)}")
    click.echo("  (swe-calc plan uses the 2025 uplift and interest for every year)")
    click.echo()
    click.echo("ITP 1")
    click.echo(f"  {tax_rules.itp.lower_rate:g}% up to {tax_rules.itp.threshold_ibb:g} IBB,"
               f" {tax_rules.itp.higher_rate:g}% above")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
