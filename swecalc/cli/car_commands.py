"""Company car (förmånsbil) CLI commands."""

import click
from pydantic import ValidationError

from swecalc.sdk import (
    CarBenefitInput,
    EmptyTaxTableError,
    InvalidTaxTableError,
    load_tax_table,
    calculate_car_benefit,
    get_best_deduction_model,
    estimate_benefit_value,
    parse_car_records,
    find_car_record,
)

from .common import output_format_option, resolve_format, echo_json, read_rows, sek


@click.group("car")
def car():
    """Company car benefit commands.

    \b
    Usage:
    1. Estimate the monthly benefit value: swe-calc car benefit-value
    2. Compare net salary with and without the car: swe-calc car compare
    """
    pass


@car.command("benefit-value")
@click.option("--price", type=float, help="New car price excl. VAT (SEK)")
@click.option("--vehicle-tax", type=float, default=0, show_default=True, help="Vehicle tax per year (SEK)")
@click.option("--extra", type=float, default=0, show_default=True, help="Extra equipment (SEK)")
@click.option("--mileage-reduction", is_flag=True, help="3 000+ mil of business driving (-25%)")
@click.option("--cars", "cars_path", type=click.Path(exists=True), help="Vehicle price rows JSON")
@click.option("--brand", help="Brand to look up in --cars")
@click.option("--model", "model_name", help="Model to look up in --cars")
@click.option("--model-year", type=int, help="Model year to look up in --cars")
def benefit_value(price, vehicle_tax, extra, mileage_reduction, cars_path, brand, model_name, model_year):
    """Estimate a car's monthly benefit value (förmånsvärde).

    \b
    Examples:
      swe-calc car benefit-value --price 400000 --vehicle-tax 360
      swe-calc car benefit-value --cars cars.json --brand Volvo --model XC40 --model-year 2024
    """
    if cars_path:
        if not (brand and model_name and model_year):
            raise click.UsageError("--cars requires --brand, --model and --model-year")
        record = find_car_record(parse_car_records(read_rows(cars_path)), brand, model_name, model_year)
        if record is None:
            raise click.ClickException(f"No vehicle found: {brand} {model_name} {model_year}")
        price = record.new_car_price
        vehicle_tax = record.vehicle_tax
        click.echo(f"{record.brand} {record.model} {record.model_year}: "
                   f"price {sek(price)}, vehicle tax {sek(vehicle_tax)}")
    elif price is None:
        raise click.UsageError("Give --price, or --cars with --brand/--model/--model-year")

    value = estimate_benefit_value(price, vehicle_tax, extra_equipment=extra, mileage_reduction=mileage_reduction)
    click.echo(f"Benefit value: {sek(value)} / month")


@car.command("compare")
@click.option("--tax-table", "tax_table_path", type=click.Path(exists=True), required=True,
              help="Withholding table JSON (Skatteverket rows)")
@click.option("--column", type=click.IntRange(1, 7), default=1, show_default=True, help="Tax table column")
@click.option("--gross", type=float, required=True, help="Monthly gross salary (SEK)")
@click.option("--benefit-value", type=float, required=True, help="Monthly benefit value (SEK)")
@click.option("--model", "deduction_model", type=click.Choice(["brutto", "netto", "best"]),
              default="best", show_default=True, help="Deduction model")
@click.option("--brutto-deduction", type=float, default=0, show_default=True, help="Gross-salary deduction (SEK)")
@click.option("--netto-deduction", type=float, default=0, show_default=True, help="Net-salary deduction (SEK)")
@click.option("--private-leasing", type=float, default=0, help="Comparable private leasing cost (SEK)")
@click.option("--business-leasing", type=float, default=0, help="Comparable business leasing cost (SEK)")
@click.option("--employer-contribution", type=float, default=31.42, show_default=True)
@output_format_option
def compare(tax_table_path, column, gross, benefit_value, deduction_model, brutto_deduction,
            netto_deduction, private_leasing, business_leasing, employer_contribution, output_format):
    """Compare monthly net salary with and without a company car."""
    try:
        table = load_tax_table(tax_table_path)
    except (EmptyTaxTableError, InvalidTaxTableError) as e:
        raise click.ClickException(str(e))

    try:
        car_input = CarBenefitInput(
            gross_salary=gross,
            benefit_value=benefit_value,
            brutto_deduction=brutto_deduction,
            netto_deduction=netto_deduction,
            private_leasing=private_leasing,
            business_leasing=business_leasing,
            employer_contribution=employer_contribution,
        )
    except ValidationError as e:
        raise click.ClickException(f"Invalid input: {e}")

    if deduction_model == "best":
        deduction_model = get_best_deduction_model(car_input, table, column)
    car_input = car_input.model_copy(update={"deduction_model": deduction_model})
    result = calculate_car_benefit(car_input, table, column)

    if resolve_format(output_format) == "json":
        echo_json({"deduction_model": deduction_model, "result": result.model_dump()})
        return

    click.echo(f"Deduction model: {deduction_model}")
    click.echo()
    click.echo(f"  {'':<24} {'Without car':>14} {'With car':>14}")
    click.echo(f"  {'Gross salary':<24} {sek(gross):>14} {sek(result.adjusted_gross_salary):>14}")
    click.echo(f"  {'Taxable benefit':<24} {'':>14} {sek(result.taxable_benefit):>14}")
    click.echo(f"  {'Tax':<24} {sek(result.tax_without_car):>14} {sek(result.tax_with_car):>14}")
    if result.private_payment:
        click.echo(f"  {'Private payment':<24} {'':>14} {sek(result.private_payment):>14}")
    click.echo(f"  {'Net salary':<24} {sek(result.net_salary_without_car):>14} {sek(result.net_salary_with_car):>14}")
    click.echo()
    click.echo(f"Monthly difference: {sek(result.monthly_difference)}")
    if private_leasing > 0:
        click.echo(f"  vs. private leasing:  {sek(result.compared_to_private_leasing)}")
    if business_leasing > 0:
        click.echo(f"  vs. business leasing: {sek(result.compared_to_business_leasing)}")
    click.echo(f"Employer cost: {sek(result.employer_cost_total)} (benefit part {sek(result.employer_cost_benefit)})")
