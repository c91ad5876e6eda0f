"""Single-period salary calculator commands: hourly rate, net salary, pension."""

import click

from swecalc.sdk import (
    HourlyRateInput,
    EmptyTaxTableError,
    InvalidTaxTableError,
    TAX_COLUMNS,
    TaxRulesNotFoundError,
    solve_hourly_rate,
    hourly_rate_scenarios,
    load_tax_table,
    load_tax_rules,
    get_available_years,
    calculate_net_salary,
    calculate_occupational_pension,
    parse_municipalities,
    find_municipality,
)

from .common import output_format_option, resolve_format, echo_json, read_rows, sek


@click.command("hourly-rate")
@click.option("--net", "desired_net", type=float, required=True, help="Desired monthly net salary (SEK)")
@click.option("--tax", type=float, default=32.0, show_default=True, help="Total salary tax %")
@click.option("--employer-contribution", type=float, default=31.42, show_default=True, help="Employer contribution %")
@click.option("--regional-support", is_flag=True, help="Apply regional support reduction")
@click.option("--costs", type=float, default=0, show_default=True, help="Monthly business costs (SEK)")
@click.option("--hours", type=float, default=140, show_default=True, help="Billable hours per month")
@click.option("--buffer", type=float, default=20, show_default=True, help="Safety buffer %")
@click.option("--savings", type=float, default=0, show_default=True, help="Monthly savings goal (SEK)")
@click.option("--scenarios", is_flag=True, help="Also show 120/140/160/180 billable hours")
@output_format_option
def hourly_rate(desired_net, tax, employer_contribution, regional_support, costs, hours, buffer,
                savings, scenarios, output_format):
    """Hourly rate needed to pay yourself a monthly net salary.

    \b
    Examples:
      swe-calc hourly-rate --net 30000 --costs 5000
      swe-calc hourly-rate --net 40000 --tax 33.5 --hours 120 --scenarios
    """
    rate_input = HourlyRateInput(
        desired_net_salary=desired_net,
        municipal_tax=tax,
        employer_contribution=employer_contribution,
        regional_support=regional_support,
        business_costs=costs,
        billable_hours=hours,
        buffer_percentage=buffer,
        savings_goal=savings,
    )
    result = solve_hourly_rate(rate_input)
    by_hours = hourly_rate_scenarios(rate_input) if scenarios else {}

    if resolve_format(output_format) == "json":
        output = {"result": result.model_dump()}
        if scenarios:
            output["scenarios"] = {str(h): r.model_dump() for h, r in by_hours.items()}
        echo_json(output)
        return

    click.echo(f"Hourly rate:           {sek(result.hourly_rate)}")
    click.echo(f"  incl. VAT (25%):     {sek(result.hourly_rate_with_vat)}")
    click.echo()
    click.echo(f"Gross salary / month:  {sek(result.gross_salary)}")
    click.echo(f"Employer contribution: {sek(result.employer_contributions)}")
    click.echo(f"Total cost / month:    {sek(result.total_monthly_cost)}")
    click.echo(f"Revenue / year:        {sek(result.annual_revenue)}")

    if scenarios:
        click.echo()
        click.echo(f"  {'Hours':>6} {'Rate':>12} {'incl. VAT':>12}")
        for h, r in by_hours.items():
            click.echo(f"  {h:>6} {sek(r.hourly_rate):>12} {sek(r.hourly_rate_with_vat):>12}")


@click.command("net-salary")
@click.argument("gross", type=float)
@click.option("--tax-table", "tax_table_path", type=click.Path(exists=True), required=True,
              help="Withholding table JSON (Skatteverket rows)")
@click.option("--column", type=click.IntRange(1, 7), default=1, show_default=True,
              help="Tax table column")
@click.option("--municipalities", "municipalities_path", type=click.Path(exists=True),
              help="Municipal rates JSON, for the rate breakdown")
@click.option("--municipality", help="Municipality name (requires --municipalities)")
@click.option("--church", is_flag=True, help="Include church fee in the rate breakdown")
@output_format_option
def net_salary(gross, tax_table_path, column, municipalities_path, municipality, church, output_format):
    """Monthly net salary for GROSS using a withholding table."""
    if municipality and not municipalities_path:
        raise click.UsageError("--municipality requires --municipalities")

    try:
        table = load_tax_table(tax_table_path)
    except (EmptyTaxTableError, InvalidTaxTableError) as e:
        raise click.ClickException(str(e))

    rate = None
    if municipality:
        rate = find_municipality(parse_municipalities(read_rows(municipalities_path)), municipality)
        if rate is None:
            raise click.ClickException(f"Municipality not found: {municipality}")

    result = calculate_net_salary(gross, table, column, municipality=rate, church_member=church)

    if resolve_format(output_format) == "json":
        echo_json(result.model_dump())
        return

    click.echo(f"Column {column}: {TAX_COLUMNS[column]}")
    click.echo(f"Gross salary:   {sek(result.gross_salary)}")
    click.echo(f"Tax deduction:  {sek(result.tax_deduction)}  ({result.tax_rate:.1f}%)")
    click.echo(f"Net salary:     {sek(result.net_salary)}")
    if rate is not None:
        click.echo()
        click.echo(f"{rate.name}: municipal {result.municipal_tax:.2f}% + county {result.county_tax:.2f}%"
                   f" + church {result.church_tax:.2f}% = {result.total_tax_rate:.2f}%")


@click.command("pension")
@click.argument("salary", type=float)
@click.option("--year", type=int, help="Income year for IBB and ITP rates (default: latest)")
@click.option("--ibb", type=float, help="Income base amount, overrides --year")
@click.option("--lower-rate", type=float, help="% up to 7.5 IBB (default: from tax rules)")
@click.option("--higher-rate", type=float, help="% above 7.5 IBB (default: from tax rules)")
@output_format_option
def pension(salary, year, ibb, lower_rate, higher_rate, output_format):
    """Occupational pension (ITP 1) premium for a monthly SALARY."""
    try:
        rules = load_tax_rules(year or get_available_years()[0])
    except TaxRulesNotFoundError as e:
        raise click.ClickException(str(e))

    result = calculate_occupational_pension(
        salary,
        ibb if ibb is not None else rules.ibb,
        lower_rate=lower_rate if lower_rate is not None else rules.itp.lower_rate,
        higher_rate=higher_rate if higher_rate is not None else rules.itp.higher_rate,
        threshold_ibb=rules.itp.threshold_ibb,
    )

    if resolve_format(output_format) == "json":
        echo_json(result.model_dump())
        return

    click.echo(f"IBB {sek(result.ibb)}, threshold {sek(result.ibb_threshold)} / month")
    click.echo(f"  Up to threshold: {sek(result.salary_up_to_threshold)} -> {sek(result.lower_part)}")
    click.echo(f"  Above threshold: {sek(result.salary_above_threshold)} -> {sek(result.higher_part)}")
    click.echo(f"Pension premium:   {sek(result.total_monthly)} / month, {sek(result.total_yearly)} / year"
               f" ({result.percentage_of_salary:.1f}% of salary)")
