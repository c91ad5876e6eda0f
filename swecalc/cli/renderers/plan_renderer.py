"""Rich renderer for multi-year dividend plans.

Transforms SDK plan output into a year-by-column table plus totals.
"""

from typing import List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from swecalc.sdk.schemas import GlobalSettings, PlanTotals, YearCalculation

# (label, field) rows in display order; None marks a section heading
PLAN_ROWS = [
    ("INPUTS", None),
    ("  Hourly rate", "hourly_rate"),
    ("  Hours / month", "hours_per_month"),
    ("  Gross salary / month", "gross_salary_monthly"),
    ("  Other costs / month", "other_costs_monthly"),
    ("  Buffer %", "buffer_percent"),
    ("  Dividend %", "dividend_percent"),
    ("COMPANY", None),
    ("  Billed", "billed_yearly"),
    ("  Gross salary", "gross_salary_yearly"),
    ("  Employer contribution", "employer_contribution_yearly"),
    ("  Costs", "costs_yearly"),
    ("  Buffer", "buffer_yearly"),
    ("  Surplus", "surplus_yearly"),
    ("  Corporate tax", "corporate_tax_amount"),
    ("  Net profit", "net_profit_yearly"),
    ("EQUITY", None),
    ("  Opening free equity", "opening_equity"),
    ("  Max dividend", "max_dividend_by_equity"),
    ("  Closing free equity", "closing_equity"),
    ("DIVIDEND ALLOWANCE", None),
    ("  Simplified rule", "simplified_rule_allowance"),
    ("  Main rule", "main_rule_allowance"),
    ("  Carried forward", "carried_forward_allowance"),
    ("  Total allowance", "dividend_allowance_sek"),
    ("  Saved for next year", "saved_dividend_allowance"),
    ("OWNER", None),
    ("  Net salary", "net_salary_yearly"),
    ("  Gross dividend", "gross_dividend"),
    ("    low-taxed (20%)", "low_tax_dividend"),
    ("    high-taxed", "high_tax_dividend"),
    ("  Net dividend", "net_dividend"),
    ("  Total net / month", "total_net_monthly"),
    ("  Equivalent salary / month", "equivalent_gross_salary_monthly"),
]


def render_plan(
    console: Console,
    settings: GlobalSettings,
    years: List[YearCalculation],
    totals: PlanTotals,
) -> None:
    """Render a calculated plan as Rich tables.

    Args:
        console: Rich Console instance
        settings: Settings the plan was calculated with
        years: calculate_all_years() output
        totals: summarize_plan() output
    """
    _render_settings(console, settings)

    table = Table(title=f"Dividend plan ({len(years)} years)", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=28)
    for year in years:
        table.add_column(f"Year {year.year}", justify="right", min_width=12)

    for label, field in PLAN_ROWS:
        if field is None:
            table.add_row(f"[bold]{label}[/bold]", *[""] * len(years))
            continue
        table.add_row(label, *[_fmt(getattr(y, field)) for y in years])

    table.add_row("  Main rule eligible", *["yes" if y.eligible_for_main_rule else "no" for y in years],
                  style="dim")
    console.print(table)

    _render_totals(console, totals)


def _render_settings(console: Console, settings: GlobalSettings) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    if settings.municipality:
        table.add_row("Municipality", settings.municipality)
    table.add_row("Salary tax", f"{settings.salary_tax_rate:.2f}%")
    table.add_row("Marginal tax", f"{settings.marginal_tax_rate:.2f}%")
    contribution = f"{settings.employer_contribution:.2f}%"
    if settings.regional_support:
        contribution += " [cyan](regional support)[/cyan]"
    table.add_row("Employer contribution", contribution)
    table.add_row("Corporate tax", f"{settings.corporate_tax:.2f}%")
    table.add_row("IBB", _fmt(settings.ibb))

    console.print(Panel(table, title="Settings", border_style="dim"))


def _render_totals(console: Console, totals: PlanTotals) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key")
    table.add_column("value", justify="right")
    table.add_row("Net salary", _fmt(totals.total_net_salary))
    table.add_row("Net dividend", _fmt(totals.total_net_dividend))
    table.add_row("[bold green]Net to owner[/bold green]",
                  f"[bold green]{_fmt(totals.total_net_to_owner)}[/bold green]")
    console.print(Panel(table, title=f"Totals over {totals.years} years", border_style="green"))


def _fmt(amount: float | None) -> str:
    """Format SEK amount with Swedish digit grouping."""
    if amount is None:
        return "-"
    return f"{amount:,.0f}".replace(",", " ")
